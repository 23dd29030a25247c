"""
Firework - one explosion's worth of particles sharing an origin
"""

from typing import List, Optional, Union

import numpy as np

from .particles import Particle
from .variants import BurstVariant, get_variant


class Firework:
    """
    A single burst.

    All particles are spawned at construction; afterwards particles only
    leave, so once the burst is dead it stays dead.

    Example:
        burst = Firework(100, 100, 'enhanced', rng=np.random.default_rng(7))
        while not burst.is_dead():
            burst.update()
            burst.draw(renderer)
    """

    def __init__(
        self,
        x: float,
        y: float,
        variant: Union[str, BurstVariant] = 'standard',
        rng: Optional[np.random.Generator] = None
    ):
        self.x = x
        self.y = y
        self.variant = get_variant(variant)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.particles: List[Particle] = []
        self.base_count = 0
        self._create_explosion()

    def _create_explosion(self):
        low, high = self.variant.particle_count
        self.base_count = int(self.rng.integers(low, high))

        for _ in range(self.base_count):
            self.particles.append(Particle.spawn(self.x, self.y, self.variant, self.rng))

        for _ in range(self.variant.glitter_count):
            self.particles.append(
                Particle.spawn(self.x, self.y, self.variant, self.rng, glitter=True)
            )

    def update(self):
        """Update every particle, then drop the expired ones"""
        for particle in self.particles:
            particle.update()
        self.particles = [p for p in self.particles if p.life > 0]

    def draw(self, renderer):
        for particle in self.particles:
            particle.draw(renderer, self.rng)

    def is_dead(self) -> bool:
        return len(self.particles) == 0

    @property
    def particle_count(self) -> int:
        return len(self.particles)

    def __repr__(self) -> str:
        return (
            f"Firework(x={self.x:.1f}, y={self.y:.1f}, "
            f"variant={self.variant.name!r}, particles={len(self.particles)})"
        )
