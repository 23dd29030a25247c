import math
from typing import Deque, Optional

import numpy as np
import pytest

from skyburst.core.palette import WHITE
from skyburst.core.particles import CIRCLE, STAR, Particle, TrailPoint, star_points
from skyburst.core.variants import ENHANCED, STANDARD


def make_particle(variant=STANDARD, **kwargs):
    defaults = dict(x=100.0, y=100.0, speed_x=2.0, speed_y=-3.0, size=6.0, base_size=6.0,
                    life=variant.life, max_life=variant.life, variant=variant)
    defaults.update(kwargs)
    return Particle(**defaults)


class TestSpawn:
    def test_standard_ranges(self, rng):
        for _ in range(200):
            p = Particle.spawn(50, 60, STANDARD, rng)
            assert -6 <= p.speed_x <= 6
            assert -6 <= p.speed_y <= 6
            assert 3 <= p.size < 9
            assert p.life == p.max_life == 120
            assert p.shape == CIRCLE
            assert not p.sparkle
            assert p.rotation_speed == 0
            assert (p.x, p.y) == (50, 60)

    def test_enhanced_ranges(self, rng):
        shapes = set()
        sparkles = 0
        for _ in range(300):
            p = Particle.spawn(0, 0, ENHANCED, rng)
            assert -8 <= p.speed_x <= 8
            assert 4 <= p.size < 12
            assert p.life == 150
            assert p.color in ENHANCED.palette
            assert abs(p.rotation_speed) <= 0.2
            shapes.add(p.shape)
            sparkles += p.sparkle
        assert shapes == {CIRCLE, STAR}
        # roughly 30% sparkle
        assert 40 < sparkles < 150

    def test_glitter(self, rng):
        p = Particle.spawn(0, 0, ENHANCED, rng, glitter=True)
        assert p.sparkle
        assert p.size == pytest.approx(0.5 * p.base_size)
        assert p.life == 225


class TestUpdate:
    def test_life_and_size_after_k_updates(self):
        p = make_particle()
        for _ in range(10):
            p.update()
        assert p.life == 110
        assert p.size == pytest.approx(6.0 * 0.97 ** 10)

    def test_motion(self):
        p = make_particle()
        p.update()
        assert p.speed_x == pytest.approx(2.0 * 0.98)
        assert p.speed_y == pytest.approx(-3.0 * 0.98 + 0.1)
        assert p.x == pytest.approx(100 + 2.0 * 0.98)
        assert p.y == pytest.approx(100 + (-3.0 * 0.98 + 0.1))

    def test_life_never_negative(self):
        p = make_particle(life=1, max_life=120)
        p.update()
        p.update()
        assert p.life == 0
        assert not p.alive

    @pytest.mark.parametrize("variant", [STANDARD, ENHANCED])
    def test_trail_bounded(self, variant):
        p = make_particle(variant=variant)
        for _ in range(40):
            p.update()
            assert len(p.trail) <= variant.trail_length
            assert all(point.fade > 0 for point in p.trail)
        assert len(p.trail) == variant.trail_length

    @pytest.mark.parametrize("variant", [STANDARD, ENHANCED])
    def test_life_counts_down_to_zero(self, variant):
        p = make_particle(variant=variant)
        previous_size = p.size
        for k in range(1, variant.life + 1):
            p.update()
            assert p.life == variant.life - k
            assert p.size <= previous_size
            previous_size = p.size
        assert p.life == 0
        assert not p.alive

        p.update()
        assert p.life == 0

    def test_trail_points_fade_in_order(self):
        p = make_particle()
        for _ in range(3):
            p.update()
        assert [pt.fade for pt in p.trail] == [7, 8, 9]

    def test_rotation_advances(self):
        p = make_particle(variant=ENHANCED, shape=STAR, rotation=1.0, rotation_speed=0.1)
        p.update()
        assert p.rotation == pytest.approx(1.1)


class TestDraw:
    def test_core_drawn_last_in_white(self, recorder):
        p = make_particle()
        p.update()
        p.draw(recorder)

        body, core = recorder.calls[-2], recorder.calls[-1]
        assert core.color == WHITE
        assert core.size == pytest.approx(body.size * 0.4)
        assert body.glow == 15
        assert body.alpha == pytest.approx(p.life / p.max_life)
        assert len(recorder.calls) == len(p.trail) + 2

    def test_trail_alpha_and_size(self, recorder):
        p = make_particle(variant=ENHANCED, shape=STAR, rotation=0.5, color=(255, 0, 0))
        for _ in range(5):
            p.update()
        p.draw(recorder)

        # sizes captured before each shrink, oldest first
        assert [pt.fade for pt in p.trail] == [10, 11, 12, 13, 14]
        for i, pt in enumerate(p.trail):
            assert pt.size == pytest.approx(6.0 * 0.985 ** i)

        trail_calls = recorder.calls[:-2]
        assert len(trail_calls) == len(p.trail)
        for call, pt in zip(trail_calls, p.trail):
            fade_ratio = pt.fade / 15
            assert (call.x, call.y) == (pt.x, pt.y)
            assert call.alpha == pytest.approx(fade_ratio * (p.life / p.max_life) * 0.5)
            assert call.size == pytest.approx(pt.size * fade_ratio * 0.5)
            assert call.color == (255, 0, 0)
            assert call.shape == STAR
            assert call.rotation == pytest.approx(p.rotation)
            assert call.glow == 0

    def test_star_particle_draws_star_core(self, recorder):
        p = make_particle(variant=ENHANCED, shape=STAR, rotation=1.2)
        p.update()
        p.draw(recorder)
        body, core = recorder.calls[-2], recorder.calls[-1]
        assert body.shape == core.shape == STAR
        assert core.rotation == body.rotation == pytest.approx(p.rotation)

    def test_sparkle_glow(self, recorder):
        p = make_particle(variant=ENHANCED, sparkle=True)
        glows = set()
        rng = np.random.default_rng(0)
        for _ in range(50):
            recorder.reset()
            p.draw(recorder, rng)
            glows.add(recorder.calls[-2].glow)
        assert glows == {25, 35}


def test_trail_field_annotation():
    assert Particle.__annotations__['trail'] == Optional[Deque[TrailPoint]]
    assert len(make_particle().trail) == 0


def test_star_points():
    pts = star_points(0, 0, 10, rotation=0.0)
    assert len(pts) == 10
    radii = [math.hypot(x, y) for x, y in pts]
    for i, r in enumerate(radii):
        assert r == pytest.approx(10 if i % 2 == 0 else 4)
    assert pts[0] == pytest.approx((10, 0))
