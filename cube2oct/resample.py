"""
resample.py — Cubemap ⇄ Octahedral Resampling
==============================================

For every cell of an N×N octahedral map:

    cell center → oct_decode → direction → cube_encode → (face, uv)
                → texel fetch → filter combination → RGB

Filters:
    nearest   — one texel
    bilinear  — four texels of the same face; samples straddling a face
                edge are clamped, not carried over to the neighbor face
    windowed  — (2E+1)² taps around the cell center in octahedral space
                (E = SUPPORT_EXTENT), weighted by a Mitchell or Gaussian
                kernel and normalized by the total weight.  Taps that leave
                the square are folded back with octmap.wrap_seam before
                decoding.

Cells are independent, so rows are evaluated in vectorized chunks by a
jit-compiled sampler.  The inverse direction (octahedral → six faces)
supports nearest and bilinear.
"""

import logging

import jax
import jax.numpy as jnp

from .config import SUPPORT_EXTENT, DEFAULT_CHUNK_ROWS
from .cubemap import cube_encode, cube_decode, pack_face_uv
from .filters import NEAREST, BILINEAR, evaluate, filter_radius
from .image import as_source_image, uv_to_texel, fetch_texels
from .octmap import oct_decode, oct_encode, pack, wrap_seam

logger = logging.getLogger(__name__)


# ============================================================
# Output grid
# ============================================================

def octahedral_cell_centers(n, rows=None):
    """
    Signed octahedral coordinates of output cell centers.

    Row 0 is the top of the square (y = +1).

    Args:
        n: output resolution
        rows: (R,) row indices, default all rows

    Returns:
        (R, n, 2) coordinates
    """
    if rows is None:
        rows = jnp.arange(n)
    rows = jnp.asarray(rows)
    x = (jnp.arange(n) + 0.5) / n * 2.0 - 1.0
    y = 1.0 - (rows + 0.5) / n * 2.0
    xx, yy = jnp.meshgrid(x, y, indexing='xy')
    return jnp.stack([xx, yy], axis=-1)


def tap_offsets(filt, support_extent=SUPPORT_EXTENT):
    """
    Tap grid of a windowed filter.

    Returns:
        pixel_ofst: (T, 2) offsets in output pixel units,
                    T = (2 * support_extent + 1)²
        weights:    (T,) kernel weights at those offsets
    """
    radius = filter_radius(filt)
    k = jnp.arange(-support_extent, support_extent + 1)
    kx, ky = jnp.meshgrid(k, k, indexing='ij')
    pixel_ofst = jnp.stack([kx.ravel(), ky.ravel()], axis=-1)
    pixel_ofst = pixel_ofst * radius / (support_extent + 1)
    return pixel_ofst, evaluate(filt, pixel_ofst)


# ============================================================
# Per-mode samplers
# ============================================================

def _sample_nearest(faces, oc, mirror_faces):
    n = faces.shape[1]
    face, uv = cube_encode(oct_decode(oc), mirror_faces)
    row, col = uv_to_texel(uv, n)
    return fetch_texels(faces, face, row, col)


def _bilinear_taps(coord, n):
    """Low/high texel indices and fractions along one continuous axis."""
    low = jnp.maximum(0, jnp.floor(coord - 0.5)).astype(jnp.int32)
    high = jnp.minimum(n - 1, low + 1)
    frac = coord - (low + 0.5)
    return low, high, frac


def _blend(faces, face, xc, yc):
    n = faces.shape[2]
    low_x, high_x, h_frac = _bilinear_taps(xc, n)
    low_y, high_y, v_frac = _bilinear_taps(yc, faces.shape[1])
    h_frac = h_frac[..., None]
    v_frac = v_frac[..., None]

    top_left = fetch_texels(faces, face, low_y, low_x)
    top_right = fetch_texels(faces, face, low_y, high_x)
    bottom_left = fetch_texels(faces, face, high_y, low_x)
    bottom_right = fetch_texels(faces, face, high_y, high_x)

    top = top_left * (1.0 - h_frac) + top_right * h_frac
    bottom = bottom_left * (1.0 - h_frac) + bottom_right * h_frac
    return top * (1.0 - v_frac) + bottom * v_frac


def _sample_bilinear(faces, oc, mirror_faces):
    n = faces.shape[1]
    face, uv = cube_encode(oct_decode(oc), mirror_faces)
    xc = uv[..., 0] * n
    yc = (1.0 - uv[..., 1]) * n
    return _blend(faces, face, xc, yc)


def _sample_windowed(faces, oc, pixel_ofst, weights, mirror_faces):
    n = faces.shape[1]
    coords = oc[..., None, :] + pixel_ofst * (2.0 / n)      # (..., T, 2)
    coords = wrap_seam(coords)
    face, uv = cube_encode(oct_decode(coords), mirror_faces)
    row, col = uv_to_texel(uv, n)
    cols = fetch_texels(faces, face, row, col)               # (..., T, 3)
    total = jnp.sum(cols * weights[:, None], axis=-2)
    return total / jnp.sum(weights)


# ============================================================
# Cube → octahedral
# ============================================================

def build_resampler(n, filt, mirror_faces=True, support_extent=SUPPORT_EXTENT):
    """
    Build a jit-compiled row sampler for an n×n cubemap.

    Args:
        n: face resolution (also the output resolution)
        filt: Filter from filters.make_filter & co.
        mirror_faces: renderer mirroring convention, see cubemap
        support_extent: half-width of the windowed tap grid

    Returns:
        sample_rows(faces, rows) → (len(rows), n, 3)
    """
    if filt.kind == NEAREST:
        def sample(faces, oc):
            return _sample_nearest(faces, oc, mirror_faces)
    elif filt.kind == BILINEAR:
        def sample(faces, oc):
            return _sample_bilinear(faces, oc, mirror_faces)
    else:
        pixel_ofst, weights = tap_offsets(filt, support_extent)

        def sample(faces, oc):
            return _sample_windowed(faces, oc, pixel_ofst, weights, mirror_faces)

    @jax.jit
    def sample_rows(faces, rows):
        return sample(faces, octahedral_cell_centers(n, rows))

    return sample_rows


def cube_to_octahedral(faces, filt, mirror_faces=True,
                       chunk_rows=DEFAULT_CHUNK_ROWS,
                       support_extent=SUPPORT_EXTENT):
    """
    Resample a six-face cubemap into an N×N octahedral map.

    Args:
        faces: (6, N, N, 3) cubemap, see image.as_source_image
        filt: Filter
        mirror_faces: renderer mirroring convention
        chunk_rows: output rows per jitted call

    Returns:
        (N, N, 3) octahedral map, row 0 at the top
    """
    faces = as_source_image(faces)
    n = faces.shape[1]
    chunk = max(1, min(chunk_rows, n))
    sample_rows = build_resampler(n, filt, mirror_faces, support_extent)

    logger.debug("resampling %dx%d cubemap with %s filter, %d rows per chunk",
                 n, n, filt.kind, chunk)
    out = []
    for start in range(0, n, chunk):
        # Pad the last chunk with repeated rows to keep a single compiled shape
        rows = jnp.minimum(jnp.arange(start, start + chunk), n - 1)
        out.append(sample_rows(faces, rows)[:n - start])
    return jnp.concatenate(out, axis=0)


# ============================================================
# Octahedral → cube
# ============================================================

def cube_strip_directions(n, mirror_faces=True):
    """
    Direction through the center of every texel of an n×n cubemap.

    Returns:
        (6, n, n, 3) unit directions
    """
    t = (jnp.arange(n) + 0.5) / n
    u, v = jnp.meshgrid(t, 1.0 - t, indexing='xy')       # (n, n), row 0 on top
    uv = jnp.stack([u, v], axis=-1)
    face = jnp.arange(6)[:, None, None]
    return cube_decode(pack_face_uv(face, uv[None]), mirror_faces)


def octahedral_to_cube(oct_image, filt, mirror_faces=True):
    """
    Resample an N×N octahedral map back into six N×N faces.

    Args:
        oct_image: (N, N, 3) octahedral map, row 0 at the top
        filt: nearest or bilinear Filter

    Returns:
        (6, N, N, 3) cubemap

    Raises:
        ValueError: for windowed filters or a non-square map
    """
    oct_image = jnp.asarray(oct_image)
    if oct_image.ndim != 3 or oct_image.shape[0] != oct_image.shape[1]:
        raise ValueError(
            f"octahedral map must be square (N, N, 3), got {tuple(oct_image.shape)}")
    if filt.kind not in (NEAREST, BILINEAR):
        raise ValueError(f"octahedral to cube does not support {filt.kind} filtering")

    n = oct_image.shape[0]
    p = pack(oct_encode(cube_strip_directions(n, mirror_faces)))
    # A single-face view of the map so the face-based fetch helpers apply
    as_face = oct_image[None]
    zero = jnp.zeros(p.shape[:-1], dtype=jnp.int32)

    if filt.kind == NEAREST:
        row, col = uv_to_texel(p, n)
        return fetch_texels(as_face, zero, row, col)
    return _blend(as_face, zero, p[..., 0] * n, (1.0 - p[..., 1]) * n)
