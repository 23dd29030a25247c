"""
Overlays - presentation elements animated by the tween engine

Messages, the launcher button and the rocket are plain objects whose
numeric properties are interpolated by TweenEngine and read by renderers.
"""

from dataclasses import dataclass
from typing import Tuple

from ..core.palette import Color, WHITE


TEXT = 'text'
BUTTON = 'button'
DOT = 'dot'


@dataclass
class Overlay:
    """An animatable element drawn above the firework canvas"""
    name: str
    text: str = ""
    kind: str = TEXT

    # Anchor (center) in canvas pixels
    x: float = 0.0
    y: float = 0.0

    # Animatable properties
    opacity: float = 0.0
    scale: float = 1.0
    translate_y: float = 0.0
    rotate_y: float = 0.0       # degrees, around the vertical axis

    font_size: int = 48
    color: Color = WHITE
    visible: bool = True

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y + self.translate_y)

    @property
    def shown(self) -> bool:
        return self.visible and self.opacity > 0.001 and self.scale > 0.001
