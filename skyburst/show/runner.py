"""
Headless show runner - plays a show on virtual time and captures frames
"""

import logging
from dataclasses import replace
from typing import List, Optional

from PIL import Image

from ..core.renderer import RasterRenderer
from .presets import ShowPreset
from .session import Show


logger = logging.getLogger(__name__)


class ShowRunner:
    """
    Runs a show without a window.

    Example:
        runner = ShowRunner(get_preset('classic'), seed=42)
        frames = runner.run(frame_step=2)
        ShowExporter.to_gif(frames, 'show.gif', duration=runner.frame_duration_ms)
    """

    def __init__(
        self,
        preset: ShowPreset,
        seed: Optional[int] = None,
        width: Optional[int] = None,
        height: Optional[int] = None
    ):
        if width or height:
            preset = replace(
                preset,
                width=width or preset.width,
                height=height or preset.height,
            )

        self.preset = preset
        self.renderer = RasterRenderer(preset.width, preset.height, preset.background_color)
        self.show = Show(preset, self.renderer, seed=seed)
        self.frames: List[Image.Image] = []
        self.frame_step = 1

    @property
    def frame_duration_ms(self) -> int:
        """Display time of one captured frame"""
        return int(round(self.show.clock.frame_ms * self.frame_step))

    def _capture(self, now: float):
        if self.show.clock.frame_count % self.frame_step == 0:
            self.frames.append(self.renderer.compose(self.show.overlays))

    def run(
        self,
        duration_ms: Optional[float] = None,
        trigger_at_ms: float = 500.0,
        frame_step: int = 2,
        tail_ms: float = 3000.0,
        max_ms: float = 120000.0
    ) -> List[Image.Image]:
        """
        Play the show and return the captured frames.

        Args:
            duration_ms: Fixed length; by default runs until the final
                message is floating, plus `tail_ms`
            trigger_at_ms: When the launch event happens
            frame_step: Capture every Nth frame
            tail_ms: Extra time after the final message appears
            max_ms: Safety limit when running to the end
        """
        if frame_step < 1:
            raise ValueError(f"frame_step must be >= 1, got {frame_step}")

        self.frame_step = frame_step
        self.frames = []
        clock = self.show.clock

        clock.add_frame_listener(self._capture)
        clock.set_timeout(self.show.trigger, trigger_at_ms)

        try:
            if duration_ms is not None:
                clock.advance(duration_ms)
            else:
                reached = clock.run_until(lambda: self.show.finished, max_ms)
                if not reached:
                    logger.warning("Show did not finish within %.0f ms", max_ms)
                clock.advance(tail_ms)
        finally:
            clock.remove_frame_listener(self._capture)

        logger.info(
            "Captured %d frames over %.1f s (%d bursts)",
            len(self.frames), clock.now / 1000, self.show.director.ignited_count,
        )
        return self.frames
