"""
octmap.py — Octahedral Direction Codec
======================================

Maps unit directions onto the [-1, 1]² octahedral square and back.

    X+ maps to result.x+
    Y+ maps to result.y+
    Z+ maps to the center
    Z- maps to the corners

The back hemisphere (z < 0) is folded into the four corner triangles.
The square's outer edges are glued to themselves with a flip, which is
what wrap_seam accounts for when a filter footprint crosses them.

Two coordinate forms are used: the signed form in [-1, 1]² handled by
oct_encode / oct_decode, and the packed form in [0, 1]² used for image
addressing (see pack / unpack).
"""

import jax.numpy as jnp


def sign_not_zero(k):
    """+1 for k >= 0 (zero counts as positive), -1 otherwise."""
    k = jnp.asarray(k)
    return jnp.where(k >= 0.0, jnp.ones_like(k), -jnp.ones_like(k))


# ============================================================
# Encode / decode
# ============================================================

def oct_encode(v):
    """
    Encode unit direction(s) as signed octahedral coordinates.

    Args:
        v: (..., 3) unit directions

    Returns:
        (..., 2) coordinates on the [-1, 1]² square
    """
    v = jnp.asarray(v)
    l1norm = jnp.sum(jnp.abs(v), axis=-1, keepdims=True)
    p = v[..., :2] / l1norm
    folded = (1.0 - jnp.abs(p[..., ::-1])) * sign_not_zero(p)
    return jnp.where(v[..., 2:3] < 0.0, folded, p)


def oct_decode(o):
    """
    Decode signed octahedral coordinate(s) into unit direction(s).

    Args:
        o: (..., 2) coordinates on the [-1, 1]² square

    Returns:
        (..., 3) unit directions
    """
    o = jnp.asarray(o)
    x, y = o[..., 0], o[..., 1]
    z = 1.0 - jnp.abs(x) - jnp.abs(y)
    back = z < 0.0
    vx = jnp.where(back, (1.0 - jnp.abs(y)) * sign_not_zero(x), x)
    vy = jnp.where(back, (1.0 - jnp.abs(x)) * sign_not_zero(y), y)
    v = jnp.stack([vx, vy, z], axis=-1)
    return v / jnp.linalg.norm(v, axis=-1, keepdims=True)


# ============================================================
# Signed ↔ packed, seam wrap
# ============================================================

def pack(o):
    """Signed [-1, 1]² → packed [0, 1]²."""
    return (jnp.asarray(o) + 1.0) * 0.5


def unpack(p):
    """Packed [0, 1]² → signed [-1, 1]²."""
    return jnp.asarray(p) * 2.0 - 1.0


def wrap_seam(o):
    """
    Fold coordinates that overshoot the square back inside it.

    A coordinate past the x edge by `overlap` is reflected to
    sign(x) * (1 - overlap) and its y is negated; the y edge is handled
    the same way afterwards, negating x.  Overshoot must be less than 1.

    Args:
        o: (..., 2) signed coordinates, possibly outside [-1, 1]²

    Returns:
        (..., 2) coordinates inside [-1, 1]²
    """
    o = jnp.asarray(o)
    x, y = o[..., 0], o[..., 1]

    x_over = jnp.abs(x) > 1.0
    y = jnp.where(x_over, -y, y)
    x = jnp.where(x_over, jnp.sign(x) * (2.0 - jnp.abs(x)), x)

    y_over = jnp.abs(y) > 1.0
    x = jnp.where(y_over, -x, x)
    y = jnp.where(y_over, jnp.sign(y) * (2.0 - jnp.abs(y)), y)

    return jnp.stack([x, y], axis=-1)
