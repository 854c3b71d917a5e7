"""
image.py — Face Buffers and Texel Access
========================================

A source cubemap is held as a (6, N, N, 3) array: face-major in the
order of cubemap.FACE_NAMES, rows running top to bottom, RGB last.
On disk the same data is a horizontal strip N high and 6N wide.

Output octahedral maps are (N, N, 3) with row 0 at the top of the
square.
"""

import jax.numpy as jnp
import numpy as np


def as_source_image(faces):
    """
    Validate and convert a six-face cubemap.

    Raises:
        ValueError: if faces is not (6, N, N, 3)
    """
    faces = jnp.asarray(faces)
    if faces.ndim != 4 or faces.shape[0] != 6 or faces.shape[-1] != 3:
        raise ValueError(
            f"cubemap must have shape (6, N, N, 3), got {tuple(faces.shape)}")
    if faces.shape[1] != faces.shape[2]:
        raise ValueError(
            f"cube faces must be square, got {faces.shape[1]}x{faces.shape[2]}")
    if faces.shape[1] == 0:
        raise ValueError("cube faces are empty")
    return faces


def strip_to_faces(strip):
    """
    (N, 6N, 3) horizontal strip → (6, N, N, 3) faces.

    Raises:
        ValueError: if the strip is not six square faces wide
    """
    strip = np.asarray(strip)
    if strip.ndim != 3 or strip.shape[-1] != 3:
        raise ValueError(
            f"cubemap strip must have shape (N, 6N, 3), got {strip.shape}")
    n, width = strip.shape[:2]
    if width != 6 * n:
        raise ValueError(
            f"cubemap strip is {width}x{n}, expected width 6 * height = {6 * n}")
    return strip.reshape(n, 6, n, 3).transpose(1, 0, 2, 3)


def faces_to_strip(faces):
    """(6, N, N, 3) faces → (N, 6N, 3) horizontal strip."""
    faces = np.asarray(faces)
    _, n, _, c = faces.shape
    return faces.transpose(1, 0, 2, 3).reshape(n, 6 * n, c)


# ============================================================
# Texel addressing
# ============================================================

def uv_to_texel(uv, n):
    """
    Face uv (origin bottom-left) → clamped integer (row, col).

    Args:
        uv: (..., 2) in [0, 1]²
        n:  face resolution

    Returns:
        row, col: (...,) int32 in [0, n-1]
    """
    uv = jnp.asarray(uv)
    col = jnp.floor(uv[..., 0] * n)
    row = jnp.floor((1.0 - uv[..., 1]) * n)
    return (jnp.clip(row, 0, n - 1).astype(jnp.int32),
            jnp.clip(col, 0, n - 1).astype(jnp.int32))


def fetch_texels(faces, face, row, col):
    """
    Gather RGB texels faces[face, row, col], clamping every index into
    range.

    Returns:
        (..., 3) colors, leading shape of the broadcast indices
    """
    n = faces.shape[1]
    face = jnp.clip(face, 0, faces.shape[0] - 1)
    row = jnp.clip(row, 0, n - 1)
    col = jnp.clip(col, 0, faces.shape[2] - 1)
    return faces[face, row, col]
