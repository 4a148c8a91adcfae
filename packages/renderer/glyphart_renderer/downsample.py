"""Resample a source bitmap to the character grid resolution."""

from __future__ import annotations

import math

import numpy as np
from PIL import Image

from .errors import EmptyCanvas, InvalidDimensions
from .models import RawBitmap, SampledGrid

# Glyphs are taller than they are wide; squash rows to keep the perceived aspect ratio.
GLYPH_ASPECT = 0.55


def _require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidDimensions(f"{name} must be a positive integer, got {value!r}")


def target_height(width: int, height: int, target_width: int) -> int:
    _require_positive("source width", width)
    _require_positive("source height", height)
    _require_positive("target width", target_width)
    return math.floor(target_width * (height / width) * GLYPH_ASPECT)


def downsample(bitmap: RawBitmap, target_width: int) -> SampledGrid:
    rows = target_height(bitmap.width, bitmap.height, target_width)
    expected = bitmap.width * bitmap.height * 4
    if len(bitmap.pixels) != expected:
        raise InvalidDimensions(
            f"pixel buffer holds {len(bitmap.pixels)} bytes, expected {expected} "
            f"for {bitmap.width}x{bitmap.height} RGBA"
        )
    if rows == 0:
        raise EmptyCanvas(
            f"{bitmap.width}x{bitmap.height} at width {target_width} leaves no rows to render"
        )

    source = Image.frombytes("RGBA", (bitmap.width, bitmap.height), bitmap.pixels)
    scaled = source.resize((target_width, rows), resample=Image.Resampling.BOX)
    pixels = np.array(scaled, dtype=np.uint8)
    pixels.setflags(write=False)
    return SampledGrid(width=target_width, height=rows, pixels=pixels)
