"""
Show Director - launch choreography and the per-frame tick

States:
    IDLE    no live bursts, no tick scheduled
    ACTIVE  at least one live burst, exactly one tick scheduled

Bursts are ignited immediately (ignite) or through fire-and-forget clock
timers (schedule_ignitions). Every ignition site calls ensure_running(),
so a burst that lands after the loop has stopped starts it again.

Each tick paints a low-alpha fill over the last frame, then updates and
draws every burst, then drops the dead ones. When the last burst is gone
and no ignition is still pending, the message sequence starts, once.
"""

import logging
from enum import Enum
from functools import partial
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..core.firework import Firework
from ..core.palette import Color, NIGHT_SKY
from .overlay import DOT, Overlay
from .presets import RocketSpec, WaveSpec


logger = logging.getLogger(__name__)


class ShowState(Enum):
    IDLE = "idle"
    ACTIVE = "active"


class ShowDirector:
    """
    Owns the active bursts and drives them from the animation clock.

    Args:
        clock: Provides request_tick(callback) and set_timeout(callback, ms)
        renderer: Receives fade and draw_shape requests
        sequencer: Started once the sky is empty (anything with start())
        tweens: Tween engine, needed for the rocket ascent
        width, height: Canvas size used for random placement
        background: Color of the per-tick fade fill
        fade_alpha: Opacity of the fade fill; low values leave long trails
        rng: Random source for placement, jitter and bursts
    """

    def __init__(
        self,
        clock,
        renderer,
        sequencer=None,
        tweens=None,
        width: int = 800,
        height: int = 600,
        background: Color = NIGHT_SKY,
        fade_alpha: float = 0.1,
        rng: Optional[np.random.Generator] = None
    ):
        self.clock = clock
        self.renderer = renderer
        self.sequencer = sequencer
        self.tweens = tweens
        self.width = width
        self.height = height
        self.background = background
        self.fade_alpha = fade_alpha
        self.rng = rng if rng is not None else np.random.default_rng()

        self.fireworks: List[Firework] = []
        self.running = False
        self.pending_ignitions = 0
        self.ignited_count = 0
        self.tick_count = 0

        self.triggered = False
        self.messages_started = False
        self.disposed = False
        self.rocket: Optional[Overlay] = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ShowState:
        return ShowState.ACTIVE if self.running else ShowState.IDLE

    def dispose(self):
        """Detach from the view. Timers that still fire become no-ops."""
        self.disposed = True
        self.running = False
        self.fireworks = []

    # -------------------------------------------------------------------------
    # Ignition
    # -------------------------------------------------------------------------

    def random_position(
        self,
        region: Tuple[float, float, float, float] = (0.0, 1.0, 0.1, 0.7)
    ) -> Tuple[float, float]:
        """Random point in a region given as canvas fractions"""
        x_min, x_max, y_min, y_max = region
        x = (x_min + self.rng.random() * (x_max - x_min)) * self.width
        y = (y_min + self.rng.random() * (y_max - y_min)) * self.height
        return x, y

    def ignite(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        variant: str = 'standard'
    ) -> Optional[Firework]:
        """Create a burst now and make sure the loop is running"""
        if self.disposed:
            logger.debug("Ignition after dispose ignored")
            return None

        if x is None or y is None:
            x, y = self.random_position()

        burst = Firework(x, y, variant, rng=self.rng)
        self.fireworks.append(burst)
        self.ignited_count += 1
        logger.debug("Ignited %r", burst)

        self.ensure_running()
        return burst

    def _deferred_ignite(self, variant: str, position: Optional[Tuple[float, float]], region):
        self.pending_ignitions -= 1
        if self.disposed:
            logger.debug("Deferred ignition after dispose ignored")
            return
        if position is None:
            position = self.random_position(region)
        self.ignite(position[0], position[1], variant)

    def schedule_ignitions(
        self,
        count: int,
        variant: str = 'standard',
        spacing_ms: float = 300.0,
        jitter_ms: float = 0.0,
        start_ms: float = 0.0,
        region: Tuple[float, float, float, float] = (0.0, 1.0, 0.1, 0.7),
        positions: Optional[Sequence[Tuple[float, float]]] = None
    ):
        """
        Schedule `count` ignitions at start + i * spacing (+ random jitter).

        Positions are rolled in `region` when each burst fires, unless
        explicit `positions` are given. Scheduled ignitions can't be
        cancelled.
        """
        for i in range(count):
            delay = start_ms + i * spacing_ms
            if jitter_ms > 0:
                delay += self.rng.random() * jitter_ms
            position = positions[i] if positions is not None else None

            self.pending_ignitions += 1
            self.clock.set_timeout(
                partial(self._deferred_ignite, variant, position, region),
                delay,
            )

    def schedule_wave(self, wave: WaveSpec, offset_ms: float = 0.0):
        self.schedule_ignitions(
            wave.count,
            variant=wave.variant,
            spacing_ms=wave.spacing_ms,
            jitter_ms=wave.jitter_ms,
            start_ms=offset_ms + wave.start_ms,
            region=wave.region,
        )

    # -------------------------------------------------------------------------
    # Launch modes
    # -------------------------------------------------------------------------

    def trigger(
        self,
        waves: Sequence[WaveSpec],
        rocket: Optional[RocketSpec] = None
    ) -> bool:
        """
        Handle the launch event.

        A director runs one show: repeated triggers are ignored.

        Returns:
            True if this call started the show
        """
        if self.disposed:
            return False
        if self.triggered:
            logger.info("Show already launched, ignoring trigger")
            return False
        self.triggered = True

        if rocket is not None:
            self.launch_rocket(rocket, waves)
        else:
            logger.info("Launching %d waves", len(waves))
            for wave in waves:
                self.schedule_wave(wave)
        return True

    def launch_rocket(self, rocket: RocketSpec, waves: Sequence[WaveSpec] = ()):
        """
        Send a rocket up; the cluster and the waves follow its arrival.

        Raises:
            RuntimeError: If the director has no tween engine
        """
        if self.tweens is None:
            raise RuntimeError("Rocket launch needs a tween engine")

        sx, sy = rocket.start[0] * self.width, rocket.start[1] * self.height
        tx, ty = rocket.target[0] * self.width, rocket.target[1] * self.height

        self.rocket = Overlay(name="rocket", kind=DOT, x=sx, y=sy, opacity=1.0, color=(255, 220, 150))
        logger.info("Rocket launched towards (%.0f, %.0f)", tx, ty)

        self.tweens.animate(
            self.rocket,
            {'translate_y': (0.0, ty - sy), 'x': (sx, tx), 'scale': (1.0, 0.6)},
            duration=rocket.duration_ms,
            easing=rocket.easing,
            on_complete=partial(self._on_rocket_arrived, rocket, (tx, ty), tuple(waves)),
        )

    def _on_rocket_arrived(self, rocket: RocketSpec, target: Tuple[float, float], waves):
        if self.rocket is not None:
            self.rocket.visible = False
        if self.disposed:
            return

        tx, ty = target
        jitter = rocket.cluster_jitter_px
        positions = [
            (tx + (self.rng.random() - 0.5) * 2 * jitter,
             ty + (self.rng.random() - 0.5) * 2 * jitter)
            for _ in range(rocket.cluster_count)
        ]
        self.schedule_ignitions(
            rocket.cluster_count,
            variant=rocket.cluster_variant,
            spacing_ms=rocket.cluster_spacing_ms,
            positions=positions,
        )
        for wave in waves:
            self.schedule_wave(wave)

    # -------------------------------------------------------------------------
    # Frame loop
    # -------------------------------------------------------------------------

    def ensure_running(self):
        """Schedule the tick loop unless it is already scheduled"""
        if self.running or self.disposed:
            return
        self.running = True
        logger.debug("Tick loop started")
        self.clock.request_tick(self.tick)

    def tick(self, now: Optional[float] = None):
        """One animation frame"""
        if self.disposed or not self.running:
            return
        self.tick_count += 1

        self.renderer.begin_frame()
        self.renderer.fade(self.background, self.fade_alpha)

        for burst in self.fireworks:
            burst.update()
            burst.draw(self.renderer)

        self.renderer.end_frame()

        # Dead bursts were still drawn this frame
        self.fireworks = [b for b in self.fireworks if not b.is_dead()]

        if self.fireworks:
            self.clock.request_tick(self.tick)
        else:
            self.running = False
            logger.debug("Sky is empty after %d ticks", self.tick_count)
            self._on_empty()

    def _on_empty(self):
        if self.pending_ignitions > 0:
            logger.debug("%d ignitions still pending", self.pending_ignitions)
            return
        if self.messages_started:
            return
        self.messages_started = True
        logger.info("All bursts finished, starting messages")
        if self.sequencer is not None:
            self.sequencer.start()
