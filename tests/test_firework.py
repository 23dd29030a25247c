import numpy as np
import pytest

from skyburst.core.firework import Firework
from skyburst.core.variants import ENHANCED, STANDARD, get_variant


def test_standard_burst_dies_after_max_life():
    burst = Firework(100, 100, 'standard', rng=np.random.default_rng(5))
    assert 30 <= burst.particle_count < 50

    for _ in range(119):
        burst.update()
    assert not burst.is_dead()

    burst.update()
    assert burst.is_dead()
    assert burst.particle_count == 0


def test_enhanced_burst_has_glitter():
    for seed in range(10):
        burst = Firework(0, 0, 'enhanced', rng=np.random.default_rng(seed))
        assert 50 <= burst.base_count < 80
        assert burst.particle_count == burst.base_count + 20

        glitter = burst.particles[burst.base_count:]
        assert all(p.sparkle for p in glitter)
        assert all(p.size == pytest.approx(0.5 * p.base_size) for p in glitter)


def test_enhanced_glitter_outlives_base():
    burst = Firework(0, 0, 'enhanced', rng=np.random.default_rng(3))
    for _ in range(150):
        burst.update()
    assert burst.particle_count == 20

    for _ in range(75):
        burst.update()
    assert burst.is_dead()


def test_particle_count_never_grows(rng):
    burst = Firework(0, 0, 'enhanced', rng=rng)
    counts = []
    for _ in range(230):
        burst.update()
        counts.append(burst.particle_count)
    assert counts == sorted(counts, reverse=True)


def test_draw_requests(recorder, rng):
    burst = Firework(10, 10, STANDARD, rng=rng)
    burst.update()
    burst.draw(recorder)
    # trail point + body + core per particle
    assert len(recorder.calls) == burst.particle_count * 3


def test_variant_aliases():
    assert get_variant('classic') is STANDARD
    assert get_variant('anime') is ENHANCED
    with pytest.raises(ValueError):
        Firework(0, 0, 'bogus')


def test_repr(rng):
    burst = Firework(1, 2, 'standard', rng=rng)
    assert "standard" in repr(burst)
