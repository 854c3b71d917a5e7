"""
cli.py — Command Line Interface
===============================

Usage:
    python -m cube2oct -i cube.exr -o oct.exr
    python -m cube2oct -i sky_#.exr -o oct_#.exr -r gaussian
    python -m cube2oct -i cube.exr -o normals.exr -t 1 0 0 0 0 1 0 0 0 0 1 0 0 0 0 1 -e
    python -m cube2oct -i oct.exr -o cube.exr --to-cube -r bilinear
"""

import argparse
import logging
import sys

from .config import (
    ConvertOptions, Cube2OctError, DEFAULT_CHUNK_ROWS, DEFAULT_RESAMPLE,
    RESAMPLE_CHOICES,
)
from .logging_config import setup_logging
from .patches import run_jobs
from .preview import save_face_preview

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='cube2oct',
        description="Convert a cubemap strip into an octahedral environment map")
    parser.add_argument('-i', '--input', required=True,
                        help="input cubemap file; may contain one # wildcard")
    parser.add_argument('-o', '--output', required=True,
                        help="output file; needs a # if the input has one")
    parser.add_argument('-r', '--resample', type=str.lower,
                        choices=RESAMPLE_CHOICES, default=DEFAULT_RESAMPLE,
                        help=f"resampling type (default {DEFAULT_RESAMPLE})")
    parser.add_argument('-t', '--transform', type=float, nargs=16,
                        metavar='M',
                        help="16 floats, row-major 4x4 matrix applied to colors")
    parser.add_argument('-e', '--encode', action='store_true',
                        help="treat the (transformed) color as a direction and "
                             "write its octahedral uv to RG")
    parser.add_argument('-m', '--mono', action='store_true',
                        help="write monochromatic output")
    parser.add_argument('--to-cube', action='store_true',
                        help="convert an octahedral map back into a cubemap strip")
    parser.add_argument('--no-mirror', action='store_true',
                        help="faces are not mirrored (non V-Ray/Keyshot layout)")
    parser.add_argument('--chunk-rows', type=int, default=DEFAULT_CHUNK_ROWS,
                        help=f"output rows per batch (default {DEFAULT_CHUNK_ROWS})")
    parser.add_argument('-j', '--jobs', type=int, default=None,
                        help="parallel files (default: thread pool default)")
    parser.add_argument('--preview', metavar='PNG',
                        help="also save a face-index diagnostic plot")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="debug logging")
    parser.add_argument('--log-file', help="also write the log to this file")
    return parser


def options_from_args(args):
    return ConvertOptions(
        input_path=args.input,
        output_path=args.output,
        resample=args.resample,
        transform=tuple(args.transform) if args.transform else None,
        encode=args.encode,
        mono=args.mono,
        to_cube=args.to_cube,
        mirror_faces=not args.no_mirror,
        chunk_rows=args.chunk_rows,
        workers=args.jobs,
        preview_path=args.preview,
    ).validate()


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        options = options_from_args(args)
        done, failed = run_jobs(options)
    except Cube2OctError as exc:
        logger.error("error: %s", exc)
        return 1

    if options.preview_path and done:
        _, n = next(iter(done.values()))
        save_face_preview(n, options.preview_path, options.mirror_faces)
        logger.info("preview written to %s", options.preview_path)

    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
