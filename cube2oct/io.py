"""
io.py — Float Image Read/Write
==============================

Thin wrappers over imageio.v3.  Images are handled as float32 numpy
arrays: (H, W, 3) for color, (H, W) for mono.  The format follows the
file extension (.exr needs an imageio backend with EXR support, such as
the freeimage plugin).
"""

import logging

import imageio.v3 as iio
import numpy as np

logger = logging.getLogger(__name__)


def read_rgb(path):
    """
    Read an image as (H, W, 3) float32.

    Grey images are broadcast to three channels and alpha is dropped.
    Some plugins return a leading frame axis (1, H, W, C), which is
    squeezed away.
    """
    img = np.asarray(iio.imread(path), dtype=np.float32)
    if img.ndim == 4 and img.shape[0] == 1:
        img = img[0]
    if img.ndim == 2:
        img = np.repeat(img[..., None], 3, axis=-1)
    if img.ndim != 3:
        raise ValueError(f"{path}: unsupported image shape {img.shape}")
    if img.shape[-1] == 1:
        img = np.repeat(img, 3, axis=-1)
    logger.debug("read %s: %dx%d", path, img.shape[1], img.shape[0])
    return img[..., :3]


def write_rgb(path, img):
    """Write an (H, W, 3) image as float32."""
    img = np.ascontiguousarray(np.asarray(img, dtype=np.float32))
    iio.imwrite(path, img)


def write_mono(path, img):
    """Write a single channel; (H, W, 3) inputs keep their first channel."""
    img = np.asarray(img, dtype=np.float32)
    if img.ndim == 3:
        img = img[..., 0]
    iio.imwrite(path, np.ascontiguousarray(img))
