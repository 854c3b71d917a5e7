"""
cube2oct — Cubemap to Octahedral Environment Map Resampler
===========================================================

Converts a six-face cubemap (as written by renderers such as V-Ray or
Keyshot) into a single square octahedral map, and back.

Modules:
    cubemap        — Direction ↔ (face, uv) codec, fixed face order
    octmap         — Direction ↔ octahedral square codec, seam wrap
    filters        — Nearest/bilinear modes, Mitchell and Gaussian kernels
    image          — Face buffer layout, validation, clamped texel fetch
    resample       — Cube → octahedral (and inverse) resampling engine
    postprocess    — Color matrix, color-as-direction packing, mono
    io             — Float image read/write via imageio
    patches        — '#' wildcard expansion and parallel per-file jobs
    preview        — Face-index diagnostic plot
    config         — Constants, ConvertOptions, Cube2OctError
    logging_config — Logger setup for the cube2oct namespace
    cli            — Command line entry point
"""

__version__ = "0.1.0"
