"""
Ambient drifting dots shown before the launch
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..core.palette import Color, hsl_to_rgb


@dataclass
class AmbientDot:
    x: float
    y: float
    size: float
    speed_x: float
    speed_y: float
    color: Color
    alpha: float


class AmbientField:
    """Slow pastel dots that wrap around the canvas edges"""

    def __init__(
        self,
        width: int,
        height: int,
        count: int = 20,
        rng: Optional[np.random.Generator] = None
    ):
        self.width = width
        self.height = height
        rng = rng if rng is not None else np.random.default_rng()

        self.dots: List[AmbientDot] = [
            AmbientDot(
                x=rng.random() * width,
                y=rng.random() * height,
                size=rng.random() * 2 + 1,
                speed_x=(rng.random() - 0.5) * 0.5,
                speed_y=(rng.random() - 0.5) * 0.5,
                color=hsl_to_rgb(rng.random(), 0.7, 0.8),
                alpha=rng.random() * 0.5 + 0.2,
            )
            for _ in range(count)
        ]

    def update(self):
        for dot in self.dots:
            dot.x += dot.speed_x
            dot.y += dot.speed_y

            if dot.x < 0:
                dot.x = self.width
            elif dot.x > self.width:
                dot.x = 0
            if dot.y < 0:
                dot.y = self.height
            elif dot.y > self.height:
                dot.y = 0

    def draw(self, renderer):
        for dot in self.dots:
            renderer.draw_shape(dot.x, dot.y, size=dot.size, color=dot.color, alpha=dot.alpha)
