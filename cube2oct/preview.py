"""
preview.py — Face-Index Diagnostic Plot
=======================================

Renders which cube face every pixel of an n×n octahedral map reads
from.  Useful to check mirroring and fold orientation at a glance.
"""

import numpy as np

from .cubemap import FACE_NAMES, cube_encode
from .octmap import oct_decode
from .resample import octahedral_cell_centers


def face_index_map(n, mirror_faces=True):
    """(n, n) int array of source faces for an n×n octahedral map."""
    face, _ = cube_encode(oct_decode(octahedral_cell_centers(n)), mirror_faces)
    return np.asarray(face)


def save_face_preview(n, path, mirror_faces=True):
    """Plot face_index_map(n) to an image file."""
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    faces = face_index_map(n, mirror_faces)

    fig, ax = plt.subplots(figsize=(6, 6))
    im = ax.imshow(faces, cmap='tab10', vmin=-0.5, vmax=9.5,
                   extent=(-1, 1, -1, 1), interpolation='nearest')
    ax.plot([0, 1, 0, -1, 0], [1, 0, -1, 0, 1], 'k-', lw=0.8)
    ax.set_xlabel('oct x')
    ax.set_ylabel('oct y')
    ax.set_title(f'Source face per octahedral pixel (N={n})')
    cbar = fig.colorbar(im, ax=ax, ticks=range(6), fraction=0.046)
    cbar.ax.set_yticklabels(FACE_NAMES)
    cbar.ax.set_ylim(-0.5, 5.5)
    fig.savefig(path, dpi=100, bbox_inches='tight')
    plt.close(fig)
    return path
