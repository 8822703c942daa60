"""Particle tests"""
import numpy as np
import pytest

from color_picker import HSLA
from particle import Particle

GREEN = HSLA(120.0, 0.5, 0.5, 1.0)


def _particle(position=(0.0, 0.0), velocity=(1.0, 1.0), life_span=255.0):
    return Particle(position, velocity, GREEN, 4.0, life_span)


def test_new():
    p = _particle()
    np.testing.assert_array_equal(p.position, [0.0, 0.0])
    np.testing.assert_array_equal(p.velocity, [1.0, 1.0])
    np.testing.assert_array_equal(p.acceleration, [0.0, 0.0])
    assert p.radius == 4.0
    assert p.life_span == 255.0
    assert p.init_life_span == 255.0
    assert p.color == GREEN


def test_constructor_copies_vectors():
    """The particle does not alias the arrays it was built from"""
    position = np.array([1.0, 2.0])
    p = Particle(position, (0.0, 0.0), GREEN, 4.0, 10.0)
    p.update()
    position[0] = 99.0
    assert p.position[0] == 1.0


def test_update():
    p = _particle()
    p.update()
    np.testing.assert_array_equal(p.position, [1.0, 1.0])
    assert p.life_span == 253.0


@pytest.mark.parametrize("k", [0, 1, 5, 40])
def test_constant_velocity_motion(k):
    """k ticks move the particle by k * v and cost 2k life span"""
    p = _particle(position=(3.0, -4.0), velocity=(0.5, -1.25), life_span=100.0)
    for _ in range(k):
        p.update()
    np.testing.assert_allclose(p.position, [3.0 + k * 0.5, -4.0 - k * 1.25])
    assert p.life_span == 100.0 - 2 * k


def test_not_dead_at_exactly_zero():
    p = _particle(life_span=4.0)
    p.update()
    p.update()
    assert p.life_span == 0.0
    assert not p.is_dead()
    p.update()
    assert p.is_dead()


def test_apply_force():
    p = _particle()
    p.apply_force(np.array([1.0, 1.0]))
    p.update()
    np.testing.assert_array_equal(p.acceleration, [1.0, 1.0])
    np.testing.assert_array_equal(p.velocity, [2.0, 2.0])


def test_force_keeps_acting_every_tick():
    """Acceleration is not reset after integration"""
    p = _particle(velocity=(0.0, 0.0))
    p.apply_force(np.array([0.5, 0.0]))
    p.update()
    p.update()
    p.update()
    np.testing.assert_array_equal(p.velocity, [1.5, 0.0])
    np.testing.assert_array_equal(p.position, [3.0, 0.0])


def test_update_with_direction():
    """A per-tick impulse changes velocity but not acceleration"""
    p = _particle()
    p.update(np.array([1.0, 1.0]))
    np.testing.assert_array_equal(p.acceleration, [0.0, 0.0])
    np.testing.assert_array_equal(p.velocity, [2.0, 2.0])
    p.update()
    np.testing.assert_array_equal(p.velocity, [2.0, 2.0])


def test_apply_impulse_is_one_shot():
    p = _particle(velocity=(0.0, 0.0))
    p.apply_impulse(np.array([0.0, 3.0]))
    p.update()
    p.update()
    np.testing.assert_array_equal(p.velocity, [0.0, 3.0])
    np.testing.assert_array_equal(p.acceleration, [0.0, 0.0])
    np.testing.assert_array_equal(p.position, [0.0, 6.0])


def test_display_shrinks_and_fades():
    p = Particle((5.0, 6.0), (0.0, 0.0), GREEN, 10.0, 100.0, stroke_weight=3.0)
    for _ in range(25):
        p.update()
    request = p.display()
    assert request.center == (5.0, 6.0)
    assert request.diameter == pytest.approx(5.0)
    assert request.fill_color == HSLA(120.0, 0.5, 0.5, 0.5)
    assert request.stroke_color == HSLA(0.0, 0.0, 0.0, 0.5)
    assert request.stroke_weight == 3.0


def test_display_ratio_can_go_negative():
    """On the final tick the ratio dips below zero instead of raising"""
    p = _particle(life_span=1.0)
    p.update()
    request = p.display()
    assert request.diameter < 0
    assert request.fill_color.alpha < 0
