"""NoiseField tests"""
import math

import numpy as np
import pytest

from noise_field import NoiseField

SAMPLE_POINTS = [(0.1 * i, 0.37 * i, 0.0) for i in range(1, 60)]


def test_same_seed_same_field():
    a = NoiseField(11)
    b = NoiseField(11)
    for x, y, z in SAMPLE_POINTS:
        assert a.get(x, y, z) == b.get(x, y, z)


def test_different_seeds_differ():
    a = NoiseField(1)
    b = NoiseField(2)
    assert any(a.get(x, y, z) != b.get(x, y, z) for x, y, z in SAMPLE_POINTS)


def test_zero_on_lattice_points():
    field = NoiseField(5)
    for x, y in [(0, 0), (1, 2), (-3, 7), (250, -250)]:
        assert field.get(x, y, 0) == pytest.approx(0.0, abs=1e-12)


def test_values_are_bounded():
    field = NoiseField(3)
    values = [field.get(x * 0.731, y * 0.519, 0.0) for x in range(-20, 20) for y in range(-20, 20)]
    assert max(abs(v) for v in values) <= 1.1
    assert np.std(values) > 0.0


def test_field_is_smooth():
    """Nearby samples have nearby values"""
    field = NoiseField(8)
    for x, y, _ in SAMPLE_POINTS:
        assert abs(field.get(x, y) - field.get(x + 1e-4, y)) < 1e-2


def test_direction_has_requested_length():
    field = NoiseField(4)
    for x, y, _ in SAMPLE_POINTS:
        d = field.direction(x * 100.0, y * 100.0, 0.002, 0.02)
        assert math.hypot(d[0], d[1]) == pytest.approx(0.02)


def test_direction_angle_is_a_full_turn_fraction():
    field = NoiseField(6)
    x, y = 123.0, -45.0
    sample = field.get(x * 0.01, y * 0.01, 0.0)
    d = field.direction(x, y, 0.01, 1.0)
    np.testing.assert_allclose(d, [math.cos(2 * math.pi * sample), math.sin(2 * math.pi * sample)])
