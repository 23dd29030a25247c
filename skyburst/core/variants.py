"""
Burst Variants - per-variant particle configuration

A variant bundles every randomized range and constant that differs between
the classic burst and the enhanced ("anime") burst. It is injected into each
Particle at construction instead of branching on a flag in update/draw.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .palette import Color, VIVID_PALETTE


@dataclass(frozen=True)
class BurstVariant:
    """Configuration for one firework variant"""
    name: str

    # Burst size: uniform integer in [low, high)
    particle_count: Tuple[int, int] = (30, 50)

    # Kinematics: velocity uniform in [-speed_range, speed_range]
    speed_range: float = 6.0
    size_range: Tuple[float, float] = (3.0, 9.0)
    life: int = 120
    gravity: float = 0.1
    friction: float = 0.98
    size_decay: float = 0.97

    # Trail
    trail_length: int = 8
    trail_fade: int = 10

    # Rendering
    glow: float = 15.0
    sparkle_glow: float = 35.0
    sparkle_flicker: float = 0.5     # roll above this widens the glow
    core_ratio: float = 0.4

    # Color: None means a random HSL hue per particle
    palette: Optional[Tuple[Color, ...]] = None
    lightness_range: Tuple[float, float] = (0.5, 0.8)

    # Shape mix / sparkle
    star_ratio: float = 0.0
    sparkle_threshold: Optional[float] = None  # roll above this -> sparkle
    rotation_speed: float = 0.0                # uniform in [-v, v] per tick

    # Glitter overlay appended once at construction
    glitter_count: int = 0
    glitter_size_scale: float = 0.5
    glitter_life_scale: float = 1.5


STANDARD = BurstVariant(name="standard")

ENHANCED = BurstVariant(
    name="enhanced",
    particle_count=(50, 80),
    speed_range=8.0,
    size_range=(4.0, 12.0),
    life=150,
    gravity=0.08,
    size_decay=0.985,
    trail_length=12,
    trail_fade=15,
    glow=25.0,
    palette=VIVID_PALETTE,
    star_ratio=0.5,
    sparkle_threshold=0.7,
    rotation_speed=0.2,
    glitter_count=20,
)

VARIANTS: Dict[str, BurstVariant] = {
    'standard': STANDARD,
    'classic': STANDARD,   # Alias
    'enhanced': ENHANCED,
    'anime': ENHANCED,     # Alias
}


def get_variant(name) -> BurstVariant:
    """
    Get a variant by name (or pass a BurstVariant through).

    Raises:
        ValueError: If the variant name is not known
    """
    if isinstance(name, BurstVariant):
        return name
    if name not in VARIANTS:
        available = ', '.join(sorted(VARIANTS.keys()))
        raise ValueError(f"Unknown variant '{name}'. Available: {available}")
    return VARIANTS[name]
