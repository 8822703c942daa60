# color_picker.py

"""
Color Picker

Produces a deterministic, well-spread cycle of HSLA colors for one emitter.

Data Contract:
- Inputs: base values for hue (degrees), saturation, lightness and alpha
  (0-1), optional [lo, hi] ranges for each channel, and num_colors >= 1.
- Outputs: HSLA tuples from get_next_color().
- Side Effects: The first call materializes the color sequence, drawing one
  seed per ranged channel from the injected generator.
- Invariants: Once materialized, the sequence never changes; it is only cycled.
"""

import logging
from collections import namedtuple

import numpy as np

import constants
from config import ColorPickerConfig

logger = logging.getLogger(constants.LOGGER_NAME)

HSLA = namedtuple('HSLA', ['hue', 'saturation', 'lightness', 'alpha'])


def gen_values(n: int, value_range, rng) -> list:
    """
    Generates n values spread over value_range with the golden-ratio recurrence.

    Starting from one uniform draw h in [0, 1), each output advances
    h <- (h + 0.618...) mod 1 and maps it linearly into [lo, hi]. Consecutive
    values land far apart, so any prefix of the sequence covers the range
    evenly instead of clustering like independent uniform draws can.
    """
    lo, hi = value_range
    h = rng.random()
    values = []
    for _ in range(n):
        h = (h + constants.GOLDEN_RATIO_CONJUGATE) % 1.0
        values.append(h * (hi - lo) + lo)
    return values


class ColorPicker:
    def __init__(self, num_colors: int, hue: float, saturation: float, lightness: float, alpha: float,
                 range_hue=None, range_saturation=None, range_lightness=None, range_alpha=None,
                 rng=None):
        if num_colors < 1:
            raise ValueError(f"ColorPicker needs num_colors >= 1, got {num_colors}")
        self.num_colors = num_colors
        self.hue = hue
        self.saturation = saturation
        self.lightness = lightness
        self.alpha = alpha
        self.range_hue = range_hue
        self.range_saturation = range_saturation
        self.range_lightness = range_lightness
        self.range_alpha = range_alpha
        self.rng = rng if rng is not None else np.random.default_rng()

        self._colors = None
        self._current = 0

    @classmethod
    def from_config(cls, config: ColorPickerConfig, rng=None) -> "ColorPicker":
        return cls(
            config.num_colors,
            config.hue,
            config.saturation,
            config.lightness,
            config.alpha,
            range_hue=config.range_hue,
            range_saturation=config.range_saturation,
            range_lightness=config.range_lightness,
            range_alpha=config.range_alpha,
            rng=rng,
        )

    @property
    def colors(self):
        """The full color sequence, materialized on first access."""
        if self._colors is None:
            self._colors = self._generate(self.num_colors)
            logger.debug(f"Color sequence materialized: {len(self._colors)} colors")
        return self._colors

    def get_next_color(self) -> HSLA:
        """
        Returns the next color of the cycle.

        The cursor advances before it is read, so the first call returns the
        color at index 1 (index 0 when num_colors is 1) and the cycle wraps
        modulo num_colors from there.
        """
        colors = self.colors
        self._current += 1
        if self._current >= self.num_colors:
            self._current = 0
        return colors[self._current]

    def _channel(self, n: int, base: float, value_range) -> list:
        if value_range is None:
            return [base] * n
        return gen_values(n, value_range, self.rng)

    def _generate(self, n: int):
        hues = self._channel(n, self.hue, self.range_hue)
        saturations = self._channel(n, self.saturation, self.range_saturation)
        lightnesses = self._channel(n, self.lightness, self.range_lightness)
        alphas = self._channel(n, self.alpha, self.range_alpha)
        return tuple(HSLA(*values) for values in zip(hues, saturations, lightnesses, alphas))

    def __repr__(self):
        return (f"ColorPicker(num_colors={self.num_colors}, hue={self.hue}, saturation={self.saturation}, "
                f"lightness={self.lightness}, alpha={self.alpha}, range_hue={self.range_hue}, "
                f"range_saturation={self.range_saturation}, range_lightness={self.range_lightness}, "
                f"range_alpha={self.range_alpha})")


def default_color_picker(rng=None) -> ColorPicker:
    """The single-color picker an emitter falls back to when its named picker is not configured."""
    return ColorPicker(
        1, 1.0, 0.5, 0.5, 0.5,
        range_saturation=(0.3, 0.7),
        range_lightness=(0.3, 0.7),
        rng=rng,
    )
