# noise_field.py

import logging
import math

import numba
import numpy as np

import constants

logger = logging.getLogger(constants.LOGGER_NAME)

# --- JIT-Compiled Noise Functions ---
# Improved Perlin noise (smootherstep fade, 12 edge gradients). The kernels work
# on a doubled permutation table so lookups never need to wrap.

@numba.jit(nopython=True, fastmath=True)
def _fade_jit(t):
    """Perlin fade function: 6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@numba.jit(nopython=True, fastmath=True)
def _lerp_jit(a, b, t):
    return a + t * (b - a)


@numba.jit(nopython=True, fastmath=True)
def _grad_jit(hash_val, x, y, z):
    """Dot product of (x, y, z) with one of the 12 cube-edge gradients picked by hash_val."""
    h = hash_val & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


@numba.jit(nopython=True, fastmath=True)
def _perlin3_jit(x, y, z, perm):
    """3D Perlin noise at (x, y, z). Zero on lattice points, roughly within [-1, 1]."""
    fx = math.floor(x)
    fy = math.floor(y)
    fz = math.floor(z)
    xi = int(fx) & 255
    yi = int(fy) & 255
    zi = int(fz) & 255
    xf = x - fx
    yf = y - fy
    zf = z - fz

    u = _fade_jit(xf)
    v = _fade_jit(yf)
    w = _fade_jit(zf)

    a = perm[xi] + yi
    aa = perm[a] + zi
    ab = perm[a + 1] + zi
    b = perm[xi + 1] + yi
    ba = perm[b] + zi
    bb = perm[b + 1] + zi

    x1 = _lerp_jit(_grad_jit(perm[aa], xf, yf, zf), _grad_jit(perm[ba], xf - 1.0, yf, zf), u)
    x2 = _lerp_jit(_grad_jit(perm[ab], xf, yf - 1.0, zf), _grad_jit(perm[bb], xf - 1.0, yf - 1.0, zf), u)
    y1 = _lerp_jit(x1, x2, v)

    x1 = _lerp_jit(_grad_jit(perm[aa + 1], xf, yf, zf - 1.0), _grad_jit(perm[ba + 1], xf - 1.0, yf, zf - 1.0), u)
    x2 = _lerp_jit(_grad_jit(perm[ab + 1], xf, yf - 1.0, zf - 1.0), _grad_jit(perm[bb + 1], xf - 1.0, yf - 1.0, zf - 1.0), u)
    y2 = _lerp_jit(x1, x2, v)

    return _lerp_jit(y1, y2, w)


class NoiseField:
    """
    A seedable, coherent scalar field used to steer particles.

    Data Contract:
    - Inputs: seed (int) - Fixes the permutation table, so equal seeds give
      equal fields.
    - Outputs: get() samples the field; direction() turns a sample into a
      perturbation vector.
    - Side Effects: None after construction.
    """
    def __init__(self, seed: int = 0):
        self.seed = int(seed)
        table = np.arange(256, dtype=np.int64)
        np.random.default_rng(self.seed).shuffle(table)
        self.perm = np.concatenate([table, table])
        logger.debug(f"NoiseField created with seed {self.seed}")

    def get(self, x: float, y: float, z: float = 0.0) -> float:
        return float(_perlin3_jit(float(x), float(y), float(z), self.perm))

    def direction(self, x: float, y: float, scale: float, strength: float) -> np.ndarray:
        """
        Samples the field at (x * scale, y * scale, 0), reads the sample as a
        fraction of a full turn and returns the unit vector at that angle times
        strength.
        """
        angle = constants.FULL_TURN * self.get(x * scale, y * scale, 0.0)
        return np.array([math.cos(angle), math.sin(angle)]) * strength
