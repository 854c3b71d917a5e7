"""
filters.py — Reconstruction Filters
===================================

A Filter is a small immutable tagged value:

    nearest   — single tap, handled directly by the resampler
    bilinear  — four taps within one face, handled by the resampler
    mitchell  — Mitchell-Netravali cubic, coeffs = (B, C), radius 2
    gaussian  — truncated Gaussian, coeffs = (sigma, a, b, c)

Only the two windowed kernels can be evaluated; their weight depends on
the magnitude of the offset alone.
"""

import math
from typing import NamedTuple, Tuple

import jax.numpy as jnp


NEAREST = 'nearest'
BILINEAR = 'bilinear'
GAUSSIAN = 'gaussian'
MITCHELL = 'mitchell'

FILTER_NAMES = (NEAREST, BILINEAR, GAUSSIAN, MITCHELL)
WINDOWED = (GAUSSIAN, MITCHELL)


class Filter(NamedTuple):
    kind: str
    radius: float = 0.0
    coeffs: Tuple[float, ...] = ()

    @property
    def windowed(self):
        return self.kind in WINDOWED


# ============================================================
# Constructors
# ============================================================

def nearest():
    return Filter(NEAREST)


def bilinear():
    return Filter(BILINEAR)


def mitchell(b=1.0 / 3.0, c=1.0 / 3.0):
    """
    Mitchell-Netravali filter with parameters B and C.

    B = 0, C = 1 is the cubic B-spline; B = 0 is the family of cardinal
    splines, with C = 0.5 the Catmull-Rom spline.  Mitchell and
    Netravali suggest B + 2C = 1, in particular B = C = 1/3.
    """
    return Filter(MITCHELL, 2.0, (float(b), float(c)))


def gaussian(sigma=2.0 / 3.0, radius=2.0):
    """
    Gaussian with standard deviation sigma, truncated at radius and
    shifted so that it reaches exactly zero there.  radius = 3 * sigma is
    a reasonable cut-off.
    """
    a = 1.0 / (math.sqrt(2.0 * math.pi) * sigma)
    b = -1.0 / (2.0 * sigma * sigma)
    c = -a * math.exp(radius * radius * b)
    return Filter(GAUSSIAN, float(radius), (float(sigma), a, b, c))


_DEFAULTS = {
    NEAREST: nearest,
    BILINEAR: bilinear,
    GAUSSIAN: gaussian,
    MITCHELL: mitchell,
}


def make_filter(name):
    """Default filter for a resample name (case-insensitive)."""
    key = str(name).lower()
    if key not in _DEFAULTS:
        raise ValueError(
            f"unknown resampling method: {name!r} "
            f"(expected one of {', '.join(FILTER_NAMES)})")
    return _DEFAULTS[key]()


# ============================================================
# Evaluation
# ============================================================

def mitchell_inner(d, b, c):
    """Mitchell polynomial for 0 <= d < 1."""
    return ((12.0 - 9.0 * b - 6.0 * c) * d**3 +
            (-18.0 + 12.0 * b + 6.0 * c) * d**2 +
            (6.0 - 2.0 * b)) / 6.0


def mitchell_outer(d, b, c):
    """Mitchell polynomial for 1 <= d < 2."""
    return ((-b - 6.0 * c) * d**3 +
            (6.0 * b + 30.0 * c) * d**2 +
            (-12.0 * b - 48.0 * c) * d +
            (8.0 * b + 24.0 * c)) / 6.0


def evaluate(filt, offset):
    """
    Kernel weight at offset(s) from the filter center.

    Args:
        filt: windowed Filter
        offset: (..., 2) offsets in output pixel units

    Returns:
        (...,) weights
    """
    offset = jnp.asarray(offset)
    d2 = jnp.sum(offset**2, axis=-1)

    if filt.kind == MITCHELL:
        b, c = filt.coeffs
        d = jnp.sqrt(d2)
        return jnp.where(d < 1.0, mitchell_inner(d, b, c),
                         jnp.where(d < 2.0, mitchell_outer(d, b, c), 0.0))
    elif filt.kind == GAUSSIAN:
        _, a, b, c = filt.coeffs
        return jnp.where(d2 >= filt.radius * filt.radius, 0.0,
                         a * jnp.exp(d2 * b) + c)
    raise ValueError(f"{filt.kind} is a sampling mode, not a kernel")


def filter_radius(filt):
    """Support radius of a windowed filter."""
    if not filt.windowed:
        raise ValueError(f"{filt.kind} has no support radius")
    return filt.radius
