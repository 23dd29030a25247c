"""
Color helpers for firework particles

HSL generation for classic bursts, the vivid palette used by enhanced
bursts, and hex parsing for preset files.
"""

import colorsys
from typing import Tuple, Union

import numpy as np


Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
NIGHT_SKY: Color = (26, 26, 46)

# 15 saturated colors for enhanced bursts
VIVID_PALETTE: Tuple[Color, ...] = (
    (255, 0, 110),    # Hot pink
    (255, 56, 56),    # Red
    (255, 140, 0),    # Orange
    (255, 214, 10),   # Gold
    (255, 255, 102),  # Lemon
    (57, 255, 20),    # Neon green
    (0, 245, 212),    # Aqua
    (0, 187, 249),    # Sky blue
    (58, 134, 255),   # Azure
    (131, 56, 236),   # Violet
    (199, 125, 255),  # Lavender
    (255, 0, 255),    # Magenta
    (255, 105, 180),  # Pink
    (255, 255, 255),  # White
    (255, 190, 11),   # Amber
)


def hsl_to_rgb(h: float, s: float, l: float) -> Color:
    """Convert HSL (0-1) to RGB (0-255)"""
    r, g, b = colorsys.hls_to_rgb(h % 1.0, np.clip(l, 0, 1), np.clip(s, 0, 1))
    return (int(r * 255), int(g * 255), int(b * 255))


def random_hue_color(rng: np.random.Generator, lightness: Tuple[float, float] = (0.5, 0.8)) -> Color:
    """Fully saturated color with a random hue and lightness in range"""
    low, high = lightness
    return hsl_to_rgb(rng.random(), 1.0, low + rng.random() * (high - low))


def parse_color(value: Union[str, Color, list]) -> Color:
    """
    Parse '#RRGGBB' or an RGB sequence into an RGB tuple.

    Raises:
        ValueError: If the value can't be read as a color
    """
    if isinstance(value, str):
        text = value.lstrip('#')
        if len(text) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))

    if len(value) != 3:
        raise ValueError(f"Color needs 3 components, got {value!r}")
    return tuple(int(np.clip(c, 0, 255)) for c in value)
