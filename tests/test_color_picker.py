"""ColorPicker tests"""
import numpy as np
import pytest

from color_picker import ColorPicker, HSLA, default_color_picker, gen_values
from config import ColorPickerConfig
import constants


class _FixedRng:
    """Returns the same value from every random() call."""
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.mark.parametrize("lo,hi", [(0.0, 1.0), (0.3, 0.7), (0.0, 360.0), (-5.0, 5.0), (2.0, 2.0)])
@pytest.mark.parametrize("n", [1, 2, 7, 100])
def test_generated_values_stay_in_range(lo, hi, n):
    """Every generated value lies within [lo, hi]"""
    values = gen_values(n, (lo, hi), np.random.default_rng(n))
    assert len(values) == n
    assert all(lo <= v <= hi for v in values)


def test_gen_values_follows_golden_ratio_recurrence():
    """Each value advances h by the golden ratio conjugate, modulo 1"""
    values = gen_values(3, (0.0, 10.0), _FixedRng(0.0))
    g = constants.GOLDEN_RATIO_CONJUGATE
    assert values[0] == pytest.approx(10.0 * g)
    assert values[1] == pytest.approx(10.0 * ((2 * g) % 1.0))
    assert values[2] == pytest.approx(10.0 * ((3 * g) % 1.0))


def test_unranged_channels_are_constant():
    """Channels without a range keep their base value in every slot"""
    cp = ColorPicker(5, 120.0, 0.4, 0.6, 0.9, range_hue=(0.0, 360.0), rng=np.random.default_rng(1))
    for color in cp.colors:
        assert color.saturation == 0.4
        assert color.lightness == 0.6
        assert color.alpha == 0.9
    assert len({c.hue for c in cp.colors}) == 5


@pytest.mark.parametrize("n", [1, 2, 3, 10])
def test_color_cycle_repeats_every_n_calls(n):
    """Call i and call i + n return the same color"""
    cp = ColorPicker(n, 0.0, 0.5, 0.5, 1.0, range_hue=(0.0, 360.0), rng=np.random.default_rng(3))
    picked = [cp.get_next_color() for _ in range(2 * n)]
    for i in range(n):
        assert picked[i] == picked[i + n]


def test_first_color_is_index_one():
    """The cursor advances before reading, so the first color is colors[1]"""
    cp = ColorPicker(3, 0.0, 0.5, 0.5, 1.0, range_hue=(0.0, 360.0), rng=np.random.default_rng(5))
    assert cp.get_next_color() == cp.colors[1]
    assert cp.get_next_color() == cp.colors[2]
    assert cp.get_next_color() == cp.colors[0]


def test_single_color_picker_always_returns_index_zero():
    cp = ColorPicker(1, 10.0, 0.5, 0.5, 1.0)
    assert cp.get_next_color() == cp.colors[0]
    assert cp.get_next_color() == HSLA(10.0, 0.5, 0.5, 1.0)


def test_sequence_is_materialized_once():
    """The sequence is built lazily and never regenerated"""
    cp = ColorPicker(4, 0.0, 0.5, 0.5, 1.0, range_lightness=(0.2, 0.8), rng=np.random.default_rng(9))
    assert cp._colors is None
    cp.get_next_color()
    first = cp.colors
    for _ in range(20):
        cp.get_next_color()
    assert cp.colors is first


def test_zero_colors_is_rejected():
    with pytest.raises(ValueError):
        ColorPicker(0, 0.0, 0.5, 0.5, 1.0)


def test_from_config_copies_fields():
    config = ColorPickerConfig(hue=200.0, range_saturation=(0.1, 0.2), num_colors=4)
    cp = ColorPicker.from_config(config, rng=np.random.default_rng(0))
    assert cp.hue == 200.0
    assert cp.range_saturation == (0.1, 0.2)
    assert cp.num_colors == 4
    assert all(0.1 <= c.saturation <= 0.2 for c in cp.colors)


def test_default_color_picker_values():
    """The fallback picker is a single color with ranged saturation and lightness"""
    cp = default_color_picker(rng=np.random.default_rng(0))
    assert cp.num_colors == 1
    assert cp.hue == 1.0
    assert cp.alpha == 0.5
    assert cp.range_saturation == (0.3, 0.7)
    assert cp.range_lightness == (0.3, 0.7)
    assert cp.range_hue is None
    color = cp.get_next_color()
    assert 0.3 <= color.saturation <= 0.7
    assert 0.3 <= color.lightness <= 0.7
