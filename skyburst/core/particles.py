"""
Firework Particle System

Single simulated points with a bounded, fading position trail.

Each tick a particle:
- records its position in the trail (with a fresh fade counter)
- ages every trail point and drops the spent ones
- damps its velocity by friction, then falls by gravity
- integrates position (unit timestep), loses one unit of life
- shrinks geometrically and spins

Rendering is expressed as requests to a Renderer: faded trail dots, the
glowing colored body and a solid white core.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Tuple

import numpy as np

from .palette import Color, WHITE, random_hue_color
from .variants import BurstVariant, STANDARD


# =============================================================================
# Shapes
# =============================================================================

CIRCLE = 'circle'
STAR = 'star'

STAR_POINTS = 5
STAR_INNER_RATIO = 0.4


def star_points(
    x: float,
    y: float,
    size: float,
    rotation: float = 0.0
) -> List[Tuple[float, float]]:
    """
    Vertices of a 5-point star.

    10 vertices spanning 2*pi, alternating outer radius `size` and inner
    radius 0.4 * size, rotated by `rotation` radians.
    """
    points = []
    step = np.pi / STAR_POINTS
    for i in range(STAR_POINTS * 2):
        radius = size if i % 2 == 0 else size * STAR_INNER_RATIO
        angle = rotation + i * step
        points.append((x + np.cos(angle) * radius, y + np.sin(angle) * radius))
    return points


# =============================================================================
# Trail
# =============================================================================

@dataclass
class TrailPoint:
    """A recorded position with its own fade counter and captured size"""
    x: float
    y: float
    fade: int
    size: float


# =============================================================================
# Particle
# =============================================================================

@dataclass
class Particle:
    """Individual firework particle with physics and trail state"""
    x: float = 0.0
    y: float = 0.0
    speed_x: float = 0.0
    speed_y: float = 0.0

    size: float = 1.0
    base_size: float = 1.0
    color: Color = WHITE

    life: int = 120
    max_life: int = 120

    shape: str = CIRCLE
    sparkle: bool = False
    rotation: float = 0.0
    rotation_speed: float = 0.0

    variant: BurstVariant = STANDARD
    trail: Optional[Deque[TrailPoint]] = field(default=None, repr=False)

    def __post_init__(self):
        if self.trail is None:
            self.trail = deque(maxlen=self.variant.trail_length)

    @classmethod
    def spawn(
        cls,
        x: float,
        y: float,
        variant: BurstVariant,
        rng: np.random.Generator,
        glitter: bool = False
    ) -> 'Particle':
        """
        Create a particle at (x, y) with kinematics rolled from the variant.

        Glitter particles are half size, live 1.5x longer and always sparkle.
        """
        spread = variant.speed_range
        low, high = variant.size_range
        size = low + rng.random() * (high - low)
        life = variant.life

        if variant.palette:
            color = variant.palette[rng.integers(len(variant.palette))]
        else:
            color = random_hue_color(rng, variant.lightness_range)

        shape = STAR if rng.random() < variant.star_ratio else CIRCLE
        sparkle = (
            variant.sparkle_threshold is not None
            and rng.random() > variant.sparkle_threshold
        )

        particle_size = size
        if glitter:
            particle_size = size * variant.glitter_size_scale
            life = int(round(life * variant.glitter_life_scale))
            sparkle = True

        return cls(
            x=x,
            y=y,
            speed_x=(rng.random() - 0.5) * 2 * spread,
            speed_y=(rng.random() - 0.5) * 2 * spread,
            size=particle_size,
            base_size=size,
            color=color,
            life=life,
            max_life=life,
            shape=shape,
            sparkle=sparkle,
            rotation=rng.random() * 2 * np.pi if shape == STAR else 0.0,
            rotation_speed=(rng.random() - 0.5) * 2 * variant.rotation_speed,
            variant=variant,
        )

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def life_ratio(self) -> float:
        """Remaining life as 0-1 fraction (1 = fresh)"""
        return self.life / self.max_life if self.max_life > 0 else 0.0

    def update(self):
        """Advance one tick"""
        v = self.variant

        # deque maxlen discards the oldest point on overflow
        self.trail.append(TrailPoint(self.x, self.y, v.trail_fade, self.size))

        for point in self.trail:
            point.fade -= 1
        self.trail = deque((p for p in self.trail if p.fade > 0), maxlen=v.trail_length)

        self.speed_x *= v.friction
        self.speed_y *= v.friction
        self.speed_y += v.gravity

        self.x += self.speed_x
        self.y += self.speed_y

        self.life = max(0, self.life - 1)
        self.size *= v.size_decay
        self.rotation += self.rotation_speed

    def draw(self, renderer, rng: Optional[np.random.Generator] = None):
        """
        Request trail, body and core shapes from the renderer.

        Args:
            renderer: Any object implementing Renderer.draw_shape
            rng: Random source for the sparkle flicker roll
        """
        v = self.variant
        life_ratio = self.life_ratio

        for point in self.trail:
            fade_ratio = point.fade / v.trail_fade
            renderer.draw_shape(
                point.x, point.y,
                size=point.size * fade_ratio * 0.5,
                color=self.color,
                alpha=fade_ratio * life_ratio * 0.5,
                shape=self.shape,
                rotation=self.rotation,
            )

        glow = v.glow
        if self.sparkle and rng is not None and rng.random() > v.sparkle_flicker:
            glow = v.sparkle_glow

        # Colored body with glow, then the white core on top
        renderer.draw_shape(
            self.x, self.y,
            size=self.size,
            color=self.color,
            alpha=life_ratio,
            shape=self.shape,
            rotation=self.rotation,
            glow=glow,
        )
        renderer.draw_shape(
            self.x, self.y,
            size=self.size * v.core_ratio,
            color=WHITE,
            alpha=life_ratio,
            shape=self.shape,
            rotation=self.rotation,
        )
