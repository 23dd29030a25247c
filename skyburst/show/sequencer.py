"""
Message Sequencer - the post-show reveal chain

A strict linear chain of stages. Every non-terminal stage goes

    ENTERING --entry tween done--> HOLDING --hold timer--> EXITING
             --exit tween done--> next stage ENTERING

The floating loop starts when the entry finishes and runs alongside the
hold timer. The last stage goes ENTERING --> FLOATING and stays there: its
float never ends and nothing follows it.

All transitions go through on_stage_complete(stage, phase); a callback that
doesn't match the current (stage, phase) is stale and ignored, so a
completion can never advance the chain twice.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .overlay import Overlay


logger = logging.getLogger(__name__)


class StagePhase(Enum):
    """Where the current stage is in its lifecycle"""
    PENDING = "pending"
    ENTERING = "entering"
    HOLDING = "holding"
    EXITING = "exiting"
    FLOATING = "floating"   # terminal


@dataclass
class StageSpec:
    """One message stage: entry, float/hold, exit"""
    text: str
    font_size: int = 48
    offset_y: float = 0.0

    entry: Dict[str, Tuple[float, float]] = field(
        default_factory=lambda: {'opacity': (0.0, 1.0), 'scale': (0.5, 1.0)}
    )
    entry_duration: float = 1500
    entry_easing: str = 'easeOutElastic(1, .8)'

    float_amplitude: float = 5.0
    float_duration: float = 2000
    float_loops: Union[int, bool] = 3
    float_easing: str = 'easeInOutSine'

    hold_ms: float = 4000

    exit: Dict[str, Tuple[float, float]] = field(
        default_factory=lambda: {'opacity': (1.0, 0.0), 'scale': (1.0, 0.8)}
    )
    exit_duration: float = 1000
    exit_easing: str = 'easeInQuad'

    @classmethod
    def from_dict(cls, data: dict) -> 'StageSpec':
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        for key in ('entry', 'exit'):
            if key in filtered:
                filtered[key] = {name: tuple(pair) for name, pair in filtered[key].items()}
        return cls(**filtered)

    def to_dict(self) -> dict:
        data = {k: getattr(self, k) for k in self.__dataclass_fields__}
        data['entry'] = {k: list(v) for k, v in self.entry.items()}
        data['exit'] = {k: list(v) for k, v in self.exit.items()}
        return data


class MessageSequencer:
    """
    Plays the message stages in order on a tween engine.

    Args:
        stages: Stage specs, in order. The last one is terminal.
        tweens: Anything with TweenEngine.animate's signature
        clock: Anything with set_timeout(callback, delay_ms)
        center: Canvas point the messages are centered on
        on_finished: Called once the terminal stage has finished entering
    """

    def __init__(
        self,
        stages: Sequence[StageSpec],
        tweens,
        clock,
        center: Tuple[float, float] = (0.0, 0.0),
        on_finished: Optional[Callable[[], None]] = None
    ):
        if not stages:
            raise ValueError("MessageSequencer needs at least one stage")

        self.stages = list(stages)
        self.tweens = tweens
        self.clock = clock
        self.on_finished = on_finished

        cx, cy = center
        self.overlays: List[Overlay] = [
            Overlay(
                name=f"message{i + 1}",
                text=stage.text,
                x=cx,
                y=cy + stage.offset_y,
                opacity=0.0,
                font_size=stage.font_size,
            )
            for i, stage in enumerate(self.stages)
        ]

        self.current_stage = -1
        self.phase = StagePhase.PENDING
        self.started = False
        self.finished = False
        self.transitions: List[Tuple[int, StagePhase]] = []

    @property
    def is_terminal(self) -> bool:
        return self.current_stage == len(self.stages) - 1

    def start(self) -> bool:
        """Begin the chain. Only the first call does anything."""
        if self.started:
            logger.debug("Message sequence already started, ignoring start()")
            return False
        self.started = True
        self._enter(0)
        return True

    def _set_phase(self, phase: StagePhase):
        self.phase = phase
        self.transitions.append((self.current_stage, phase))
        logger.debug("Stage %d -> %s", self.current_stage + 1, phase.value)

    def _callback(self, stage: int, phase: StagePhase) -> Callable[[], None]:
        return lambda: self.on_stage_complete(stage, phase)

    def _enter(self, index: int):
        self.current_stage = index
        self._set_phase(StagePhase.ENTERING)
        logger.info("Showing message %d/%d", index + 1, len(self.stages))

        stage = self.stages[index]
        self.tweens.animate(
            self.overlays[index],
            stage.entry,
            duration=stage.entry_duration,
            easing=stage.entry_easing,
            on_complete=self._callback(index, StagePhase.ENTERING),
        )

    def _start_float(self, index: int, endless: bool):
        stage = self.stages[index]
        if stage.float_amplitude == 0:
            return
        self.tweens.animate(
            self.overlays[index],
            {'translate_y': (-stage.float_amplitude, stage.float_amplitude)},
            duration=stage.float_duration,
            easing=stage.float_easing,
            direction='alternate',
            loop=True if endless else stage.float_loops,
        )

    def on_stage_complete(self, stage: int, phase: StagePhase):
        """Single transition entry point for tween and timer callbacks"""
        if stage != self.current_stage or phase != self.phase:
            logger.debug(
                "Ignoring stale completion (%d, %s); current is (%d, %s)",
                stage, phase.value, self.current_stage, self.phase.value,
            )
            return

        spec = self.stages[stage]

        if phase == StagePhase.ENTERING:
            if self.is_terminal:
                self._set_phase(StagePhase.FLOATING)
                self._start_float(stage, endless=True)
                self.finished = True
                if self.on_finished is not None:
                    self.on_finished()
                return

            self._set_phase(StagePhase.HOLDING)
            self._start_float(stage, endless=False)
            self.clock.set_timeout(self._callback(stage, StagePhase.HOLDING), spec.hold_ms)

        elif phase == StagePhase.HOLDING:
            self._set_phase(StagePhase.EXITING)
            self.tweens.animate(
                self.overlays[stage],
                spec.exit,
                duration=spec.exit_duration,
                easing=spec.exit_easing,
                on_complete=self._callback(stage, StagePhase.EXITING),
            )

        elif phase == StagePhase.EXITING:
            self._enter(stage + 1)
