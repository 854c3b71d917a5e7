"""
config.py — Constants and Job Options
=====================================

Central place for tunables shared by the resampler, the job runner and
the command line.  Options only ever come from CLI flags.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .filters import BILINEAR, FILTER_NAMES, MITCHELL, NEAREST


# Windowed filters sample a (2*SUPPORT_EXTENT + 1)² grid of taps
SUPPORT_EXTENT = 3

DEFAULT_RESAMPLE = MITCHELL
RESAMPLE_CHOICES = FILTER_NAMES

# Output rows evaluated per jitted call; bounds memory at 49 taps per cell
DEFAULT_CHUNK_ROWS = 64

WILDCARD = '#'


class Cube2OctError(ValueError):
    """Invalid job setup: bad wildcard use, missing input, clashing flags."""


@dataclass(frozen=True)
class ConvertOptions:
    """Everything a single conversion job needs."""
    input_path: str
    output_path: str
    resample: str = DEFAULT_RESAMPLE
    transform: Optional[Tuple[float, ...]] = None
    encode: bool = False
    mono: bool = False
    to_cube: bool = False
    mirror_faces: bool = True
    chunk_rows: int = DEFAULT_CHUNK_ROWS
    workers: Optional[int] = None
    preview_path: Optional[str] = None

    def validate(self):
        if self.encode and self.mono:
            raise Cube2OctError("-e and -m cannot be used together")
        if self.resample not in RESAMPLE_CHOICES:
            raise Cube2OctError(f"unknown resampling method: {self.resample}")
        if self.to_cube and self.resample not in (NEAREST, BILINEAR):
            raise Cube2OctError(
                "--to-cube supports nearest and bilinear resampling only")
        if self.transform is not None and len(self.transform) != 16:
            raise Cube2OctError(
                f"transform needs 16 values, got {len(self.transform)}")
        if self.chunk_rows < 1:
            raise Cube2OctError("chunk rows must be at least 1")
        return self
