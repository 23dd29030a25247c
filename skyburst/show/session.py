"""
Show session - wires a preset to a clock, renderer and tween engine
"""

import logging
from typing import List, Optional

import numpy as np

from .ambient import AmbientField
from .clock import FrameClock
from .director import ShowDirector
from .overlay import BUTTON, Overlay
from .presets import ShowPreset
from .sequencer import MessageSequencer
from .tween import TweenEngine


logger = logging.getLogger(__name__)


class Show:
    """
    One show, from the idle launcher screen to the last floating message.

    Example:
        show = Show(get_preset('classic'), RasterRenderer(800, 600), seed=3)
        show.trigger()
        show.clock.advance(5000)
    """

    def __init__(
        self,
        preset: ShowPreset,
        renderer,
        clock: Optional[FrameClock] = None,
        seed: Optional[int] = None
    ):
        preset.validate()
        self.preset = preset
        self.renderer = renderer
        self.clock = clock if clock is not None else FrameClock(preset.fps)
        self.rng = np.random.default_rng(seed)

        width, height = preset.width, preset.height
        self.background = preset.background_color

        self.tweens = TweenEngine(self.clock)
        self.sequencer = MessageSequencer(
            preset.messages,
            self.tweens,
            self.clock,
            center=(width / 2, height / 2),
            on_finished=self._on_messages_finished,
        )
        self.director = ShowDirector(
            self.clock,
            renderer,
            sequencer=self.sequencer,
            tweens=self.tweens,
            width=width,
            height=height,
            background=self.background,
            fade_alpha=preset.fade_alpha,
            rng=self.rng,
        )

        self.launcher = Overlay(
            name="launcher",
            text=preset.launcher_text,
            kind=BUTTON,
            x=width / 2,
            y=height / 2,
            opacity=1.0,
            font_size=32,
        )

        self.ambient = None
        if preset.ambient_count > 0:
            self.ambient = AmbientField(width, height, preset.ambient_count, self.rng)
        self.clock.add_frame_listener(self._ambient_frame)

    def _ambient_frame(self, now: float):
        # Only runs until launch
        if self.ambient is None or self.director.triggered:
            return
        self.renderer.begin_frame()
        self.renderer.clear(self.background)
        self.ambient.update()
        self.ambient.draw(self.renderer)
        self.renderer.end_frame()

    def _on_messages_finished(self):
        logger.info("Show '%s' reached its final message", self.preset.name)

    def _hide_launcher(self):
        self.launcher.visible = False

    def trigger(self) -> bool:
        """Launch the show (only the first call counts)"""
        if not self.director.trigger(self.preset.waves, self.preset.rocket):
            return False

        self.tweens.animate(
            self.launcher,
            {'scale': (1.0, 0.0), 'opacity': (1.0, 0.0)},
            duration=500,
            easing='easeInBack',
            on_complete=self._hide_launcher,
        )
        return True

    @property
    def finished(self) -> bool:
        """True once the final message is floating"""
        return self.sequencer.finished

    @property
    def overlays(self) -> List[Overlay]:
        """Elements drawn above the canvas, back to front"""
        items = [self.launcher]
        if self.director.rocket is not None:
            items.append(self.director.rocket)
        items.extend(self.sequencer.overlays)
        return items
