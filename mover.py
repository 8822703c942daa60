# mover.py

"""
Emitter Trajectories

A Mover maps elapsed time to a 2D point. The shape of the path comes from a
named parametric curve; every curve shares the signature
curve(t, params) -> np.ndarray and is looked up in CURVES, so new shapes can
be added with register_curve() without touching Mover.

After the curve is evaluated, the point is rotated about the origin by
rotation_angle + t * rotation_speed and then translated.

Data Contract:
- Inputs: a curve name and a MoverParams bundle, fixed at construction.
- Outputs: position(t) -> np.ndarray of shape (2,).
- Side Effects: None. position() is pure.
"""

import logging
import math
from typing import Callable, Dict, NamedTuple, Tuple

import numpy as np

import constants
from config import MoverConfig

logger = logging.getLogger(constants.LOGGER_NAME)


class MoverParams(NamedTuple):
    inner: Tuple[float, float]
    outer: Tuple[float, float]
    scale: Tuple[float, float]
    translation: Tuple[float, float] = (0.0, 0.0)
    rotation_angle: float = 0.0
    rotation_speed: float = 0.0


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linearly remaps value from [in_min, in_max] to [out_min, out_max]."""
    return out_min + (value - in_min) / (in_max - in_min) * (out_max - out_min)


def rotate(point: np.ndarray, angle: float) -> np.ndarray:
    """Rotates point counter-clockwise about the origin by angle radians."""
    c = math.cos(angle)
    s = math.sin(angle)
    x, y = point
    return np.array([x * c - y * s, x * s + y * c])


def ellipse(t: float, params: MoverParams) -> np.ndarray:
    """
    Point on an ellipse-like Lissajous path inside a box of size params.scale.

    inner sets the angular frequency per axis and outer the amplitude; the
    resulting cosine/sine pair is remapped from [-1, 1] onto the box, which is
    centered on the origin.
    """
    cosine = math.cos(params.inner[0] * t) * params.outer[0]
    sine = math.sin(params.inner[1] * t) * params.outer[1]
    half_w = params.scale[0] / 2.0
    half_h = params.scale[1] / 2.0
    x = map_range(cosine, -1.0, 1.0, -half_w, half_w)
    y = map_range(sine, -1.0, 1.0, -half_h, half_h)
    return np.array([x, y])


def epicycloid(t: float, params: MoverParams) -> np.ndarray:
    """
    Epicycloid with a = inner.x and b = inner.y, traced repeatedly over the
    time window [outer.x, outer.y] and scaled per axis by params.scale.
    """
    a, b = params.inner
    t_min, t_max = params.outer
    t_range = t_max - t_min
    local_t = (t % t_range) - t_range / 2.0
    k = a / b + 1.0
    x = (a + b) * math.cos(local_t) - (b + 1.0) * math.cos(k * local_t)
    y = (a + b) * math.sin(local_t) - (b + 1.0) * math.sin(k * local_t)
    return np.array([x * params.scale[0], y * params.scale[1]])


def _check_epicycloid(name: str, params: MoverParams):
    """Rejects parameters for which epicycloid() would divide by zero."""
    if params.outer[0] == params.outer[1]:
        raise ValueError(f"Mover '{name}': epicycloid needs outer.x != outer.y (empty time window), got {params.outer}")
    if params.inner[1] == 0:
        raise ValueError(f"Mover '{name}': epicycloid needs inner.y != 0, got {params.inner}")


CurveFn = Callable[[float, MoverParams], np.ndarray]

CURVES: Dict[str, CurveFn] = {
    'ellipse': ellipse,
    'p_elipse': ellipse,
    'epicycloid': epicycloid,
}

DEFAULT_CURVE = 'ellipse'


def register_curve(name: str, curve: CurveFn):
    """Makes curve available to movers under name."""
    CURVES[name] = curve


class Mover:
    def __init__(self, name: str, params: MoverParams, mover_type: str = DEFAULT_CURVE):
        self.name = name
        self.params = params
        if mover_type not in CURVES:
            logger.warning(f"Mover '{name}': unknown mover_type '{mover_type}', using '{DEFAULT_CURVE}'.")
            mover_type = DEFAULT_CURVE
        self.mover_type = mover_type
        self.curve = CURVES[mover_type]
        if self.curve is epicycloid:
            _check_epicycloid(name, params)

    @classmethod
    def from_config(cls, name: str, config: MoverConfig) -> "Mover":
        params = MoverParams(
            inner=config.inner,
            outer=config.outer,
            scale=config.scale,
            translation=config.translation,
            rotation_angle=config.rotation_angle,
            rotation_speed=config.rotation_speed,
        )
        return cls(name, params, config.mover_type)

    def position(self, t: float) -> np.ndarray:
        point = self.curve(t, self.params)
        point = rotate(point, self.params.rotation_angle + t * self.params.rotation_speed)
        return point + np.array(self.params.translation, dtype=float)

    def __repr__(self):
        return f"Mover(name={self.name!r}, mover_type={self.mover_type!r}, params={self.params})"
