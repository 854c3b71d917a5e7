"""
postprocess.py — Stages Applied After Sampling
==============================================

Each stage consumes the (..., 3) RGB produced by the resampler:

    apply_color_matrix        — 4×4 homogeneous transform of the color
    encode_color_as_direction — treat the color as a [0,1]³-packed
                                direction, write its octahedral uv to RG
    to_mono                   — keep only the first channel
"""

import jax.numpy as jnp

from .config import Cube2OctError
from .octmap import oct_encode, pack


def color_matrix(values):
    """
    16 row-major floats → (4, 4) matrix.

    Raises:
        Cube2OctError: if there are not exactly 16 values
    """
    values = tuple(float(x) for x in values)
    if len(values) != 16:
        raise Cube2OctError(f"transform needs 16 values, got {len(values)}")
    return jnp.asarray(values).reshape(4, 4)


def apply_color_matrix(colors, matrix):
    """
    Transform colors as homogeneous points: (M @ [r, g, b, 1]) / w.

    Args:
        colors: (..., 3)
        matrix: (4, 4), or 16 row-major values
    """
    matrix = jnp.asarray(matrix).reshape(4, 4)
    colors = jnp.asarray(colors)
    xyz = colors @ matrix[:3, :3].T + matrix[:3, 3]
    w = colors @ matrix[3, :3] + matrix[3, 3]
    return xyz / w[..., None]


def encode_color_as_direction(colors):
    """
    Pack colors-as-directions into octahedral uv.

    The color is first mapped from [0, 1]³ to [-1, 1]³; the result holds
    the packed octahedral coordinate in R and G, and zero in B.  A color
    of exactly (0.5, 0.5, 0.5) is the zero vector and encodes to NaN.
    """
    uv = pack(oct_encode(jnp.asarray(colors) * 2.0 - 1.0))
    return jnp.concatenate([uv, jnp.zeros_like(uv[..., :1])], axis=-1)


def to_mono(colors):
    """(..., 3) → (...,) first channel."""
    return jnp.asarray(colors)[..., 0]
