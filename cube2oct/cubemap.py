"""
cubemap.py — Cube-Face Direction Codec
======================================

Maps unit directions to (face, uv) pairs on a six-face cubemap and back.

Faces are stored in the order

    [right][left][top][bottom][back][front]
       0     1     2     3       4     5
      +X    -X    +Y    -Y      +Z    -Z

which is how renderers like V-Ray or Keyshot output cubemaps.  The
coordinate system is right handed with Right = +X, Top = +Y and
Forward = -Z.  Face uv coordinates start in the bottom-left corner.

With mirror_faces=True (the default) every side face is horizontally
mirrored and top/bottom are vertically mirrored, again matching the
renderer output.  Turning it off yields geometrically flipped faces for
such inputs.

All functions broadcast over leading axes; directions carry a trailing
axis of 3, uv coordinates a trailing axis of 2.
"""

import jax.numpy as jnp


FACE_RIGHT, FACE_LEFT, FACE_TOP, FACE_BOTTOM, FACE_BACK, FACE_FRONT = range(6)

FACE_NAMES = ('right', 'left', 'top', 'bottom', 'back', 'front')

# Axis each face looks along, indexed by face
FACE_AXES = (
    (1.0, 0.0, 0.0),
    (-1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, -1.0, 0.0),
    (0.0, 0.0, 1.0),
    (0.0, 0.0, -1.0),
)


# ============================================================
# Direction → (face, uv)
# ============================================================

def sample_cube(v, mirror_faces=True):
    """
    Project direction(s) v onto the cube.

    Dominant axis tie-break is Z > Y > X, so directions exactly on a cube
    edge or corner land on the Z face first, then the Y face.

    Args:
        v: (..., 3) directions, not necessarily normalized
        mirror_faces: apply the renderer mirroring convention

    Returns:
        face: (...,) int32 face index 0-5
        uv:   (..., 2) face coordinates, nominally in [0, 1]² (unclamped)
    """
    v = jnp.asarray(v)
    x, y, z = v[..., 0], v[..., 1], v[..., 2]
    ax, ay, az = jnp.abs(x), jnp.abs(y), jnp.abs(z)

    z_major = (az >= ax) & (az >= ay)
    y_major = ~z_major & (ay >= ax)

    face = jnp.where(
        z_major, jnp.where(z < 0, FACE_FRONT, FACE_BACK),
        jnp.where(y_major, jnp.where(y < 0, FACE_BOTTOM, FACE_TOP),
                  jnp.where(x < 0, FACE_LEFT, FACE_RIGHT))).astype(jnp.int32)
    ma = 0.5 / jnp.where(z_major, az, jnp.where(y_major, ay, ax))

    # Face-local (u, v) before mirroring
    u_loc = jnp.where(
        z_major, jnp.where(z < 0, x, -x),
        jnp.where(y_major, x, jnp.where(x < 0, -z, z)))
    v_loc = jnp.where(y_major, jnp.where(y < 0, -z, z), y)

    if mirror_faces:
        u_loc = jnp.where(y_major, u_loc, -u_loc)
        v_loc = jnp.where(y_major, -v_loc, v_loc)

    uv = jnp.stack([u_loc * ma, v_loc * ma], axis=-1) + 0.5
    return face, uv


def cube_encode(v, mirror_faces=True):
    """
    Encode unit direction(s) as (face, uv) with uv clamped to [0, 1]².

    Returns:
        face: (...,) int32 face index
        uv:   (..., 2) face coordinates in [0, 1]²
    """
    face, uv = sample_cube(v, mirror_faces)
    return face, jnp.clip(uv, 0.0, 1.0)


# ============================================================
# Packed strip coordinate → direction
# ============================================================

def pack_face_uv(face, uv):
    """
    Pack (face, uv) into the strip coordinate consumed by cube_decode.

    The u component sweeps all six faces left to right, each face taking
    one sixth of [0, 1); v is unchanged.
    """
    uv = jnp.asarray(uv)
    u = (jnp.asarray(face) + uv[..., 0]) / 6.0
    v = jnp.broadcast_to(uv[..., 1], u.shape)
    return jnp.stack([u, v], axis=-1)


def cube_decode(o, mirror_faces=True):
    """
    Decode packed strip coordinate(s) o into unit direction(s).

    Values outside [0, 1) wrap around by their fractional part, in both
    components.

    Args:
        o: (..., 2) packed coordinates, see pack_face_uv
        mirror_faces: apply the renderer mirroring convention

    Returns:
        (..., 3) unit directions
    """
    o = jnp.asarray(o)
    u = o[..., 0] - jnp.floor(o[..., 0])
    v = o[..., 1] - jnp.floor(o[..., 1])

    v = v * 2.0 - 1.0
    slot = jnp.clip(jnp.floor(u * 6.0), 0, 5).astype(jnp.int32)
    s = (u * 6.0 - slot - 0.5) * 2.0

    if mirror_faces:
        top_or_bottom = (slot == FACE_TOP) | (slot == FACE_BOTTOM)
        s = jnp.where(top_or_bottom, s, -s)
        v = jnp.where(top_or_bottom, -v, v)

    one = jnp.ones_like(s)
    candidates = [
        jnp.stack([one, v, s], axis=-1),      # right
        jnp.stack([-one, v, -s], axis=-1),    # left
        jnp.stack([s, one, v], axis=-1),      # top
        jnp.stack([s, -one, -v], axis=-1),    # bottom
        jnp.stack([-s, v, one], axis=-1),     # back
        jnp.stack([s, v, -one], axis=-1),     # front
    ]
    onehot = (slot[..., None] == jnp.arange(6)).astype(s.dtype)
    res = jnp.sum(onehot[..., None] * jnp.stack(candidates, axis=-2), axis=-2)
    return res / jnp.linalg.norm(res, axis=-1, keepdims=True)
