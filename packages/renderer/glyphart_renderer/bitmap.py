"""Bitmap source: decode user images and build synthetic test patterns."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import DecodeError
from .models import RawBitmap

PATTERNS = ("black", "white", "h-gradient", "v-gradient", "checkerboard", "quadrants")


def bitmap_from_image(image: Image.Image) -> RawBitmap:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return RawBitmap(width=image.width, height=image.height, pixels=image.tobytes())


def decode_bitmap(data: bytes) -> RawBitmap:
    if not data:
        raise DecodeError("image data is empty")
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            upright = ImageOps.exif_transpose(image)
            return bitmap_from_image(upright)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"could not decode image: {exc}") from exc


def load_bitmap(path: Path) -> RawBitmap:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise DecodeError(f"could not read {path}: {exc}") from exc
    return decode_bitmap(data)


def build_test_pattern(name: str, width: int, height: int) -> Image.Image:
    ys, xs = np.mgrid[0:height, 0:width]
    if name == "black":
        gray = np.zeros((height, width))
    elif name == "white":
        gray = np.full((height, width), 255.0)
    elif name == "h-gradient":
        gray = 255.0 * xs / max(width - 1, 1)
    elif name == "v-gradient":
        gray = 255.0 * ys / max(height - 1, 1)
    elif name == "checkerboard":
        gray = np.where((xs // 24 + ys // 24) % 2 == 0, 255.0, 0.0)
    elif name == "quadrants":
        left = xs < width // 2
        top = ys < height // 2
        gray = np.select([top & left, top & ~left, ~top & left], [0.0, 85.0, 170.0], default=255.0)
    else:
        raise ValueError(f"Unknown pattern: {name}")
    return Image.fromarray(gray.astype(np.uint8)).convert("RGBA")
