"""
patches.py — Wildcard Expansion and Per-File Jobs
=================================================

An input filename may carry a single '#' wildcard, e.g.

    renders/sky_#.exr  →  renders/sky_day.exr, renders/sky_night.exr

Every matching file is a "patch" (here 'day' and 'night'); the output
pattern must carry a '#' too and receives the same patch text.  Each
patch is converted independently and jobs run in a thread pool.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from . import io
from .config import WILDCARD, Cube2OctError
from .filters import make_filter
from .image import faces_to_strip, strip_to_faces
from .postprocess import (
    apply_color_matrix, color_matrix, encode_color_as_direction, to_mono,
)
from .resample import cube_to_octahedral, octahedral_to_cube

logger = logging.getLogger(__name__)


# ============================================================
# Patch expansion
# ============================================================

def expand_patches(input_pattern, output_pattern):
    """
    List the patches an input pattern refers to.

    Matching is case-insensitive; a file matches when its name starts
    with the text before '#' and ends with the text after it.  The patch
    keeps the casing of the file name, so on a case-sensitive filesystem
    substitute(input_pattern, patch) finds the file as long as the text
    around '#' is written in the file's own case.

    Returns:
        patch strings sorted case-insensitively, [''] without a wildcard

    Raises:
        Cube2OctError: on more than one '#', a missing '#' in the output,
            or a missing input file
    """
    folder, name = os.path.split(input_pattern)
    count = name.count(WILDCARD)
    if count > 1:
        raise Cube2OctError(
            f"multiple {WILDCARD} in {input_pattern}; "
            f"use at most one {WILDCARD} wildcard per filename")
    if count == 0:
        if not os.path.exists(input_pattern):
            raise Cube2OctError(f"{input_pattern} does not exist")
        return ['']
    if output_pattern.count(WILDCARD) != 1:
        raise Cube2OctError(
            f"if using a {WILDCARD} wildcard in the input file name, "
            f"there must be a {WILDCARD} in the output file name as well")

    prefix, suffix = name.lower().split(WILDCARD)
    patches = set()
    for entry in os.listdir(folder or '.'):
        other = entry.lower()
        if (len(other) >= len(prefix) + len(suffix)
                and other.startswith(prefix) and other.endswith(suffix)):
            # Patch text keeps the casing found on disk
            patches.add(entry[len(prefix):len(entry) - len(suffix)])
    return sorted(patches, key=str.lower)


def substitute(pattern, patch):
    """Replace the first '#' of pattern with patch."""
    return pattern.replace(WILDCARD, patch, 1)


# ============================================================
# Jobs
# ============================================================

def convert_image(image, options):
    """
    Run the resampling pipeline on an in-memory image.

    Args:
        image: (N, 6N, 3) cubemap strip, or (N, N, 3) octahedral map
            when options.to_cube is set
        options: ConvertOptions

    Returns:
        (N, N, 3) octahedral map, or (N, 6N, 3) strip for to_cube
    """
    filt = make_filter(options.resample)
    if options.to_cube:
        out = faces_to_strip(octahedral_to_cube(image, filt, options.mirror_faces))
    else:
        out = cube_to_octahedral(strip_to_faces(image), filt,
                                 mirror_faces=options.mirror_faces,
                                 chunk_rows=options.chunk_rows)
    if options.transform is not None:
        out = apply_color_matrix(out, color_matrix(options.transform))
    if options.encode:
        out = encode_color_as_direction(out)
    return np.asarray(out, dtype=np.float32)


def convert_file(options, patch=''):
    """
    Read, convert and write a single patch.

    Returns:
        (output path, output resolution N)
    """
    src = substitute(options.input_path, patch)
    dst = substitute(options.output_path, patch)
    logger.info("reading %s", src)
    image = io.read_rgb(src)
    out = convert_image(image, options)
    logger.info("writing file: %s", dst)
    if options.mono:
        io.write_mono(dst, np.asarray(to_mono(out)))
    else:
        io.write_rgb(dst, out)
    return dst, out.shape[0]


def run_jobs(options):
    """
    Convert every patch of options.input_path concurrently.

    A failing patch is logged with its traceback and does not stop the
    others, whatever the error.

    Returns:
        dict patch → (output path, N) for the successful patches, and
        dict patch → exception for the failed ones
    """
    options.validate()
    patches = expand_patches(options.input_path, options.output_path)
    if not patches:
        logger.warning("no files match %s", options.input_path)
    logger.info("input file: %s output file: %s (%d patch%s)",
                options.input_path, options.output_path,
                len(patches), '' if len(patches) == 1 else 'es')

    done, failed = {}, {}
    with ThreadPoolExecutor(max_workers=options.workers) as pool:
        futures = {patch: pool.submit(convert_file, options, patch)
                   for patch in patches}
        for patch, future in futures.items():
            try:
                done[patch] = future.result()
            except Exception as exc:
                logger.exception("patch %r failed: %s", patch, exc)
                failed[patch] = exc
    return done, failed
