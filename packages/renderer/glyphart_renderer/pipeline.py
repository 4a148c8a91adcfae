"""Bitmap to art document in one synchronous pass."""

from __future__ import annotations

from .document import assemble_document
from .downsample import downsample
from .models import ArtDocument, RawBitmap, RenderConfig


def generate_art(bitmap: RawBitmap, config: RenderConfig) -> ArtDocument:
    """Downsample ``bitmap`` to ``config.target_width`` columns and map every sample to a glyph.

    Raises ``InvalidDimensions`` or ``EmptyCanvas`` before any cell is built;
    the returned document is always complete.
    """
    grid = downsample(bitmap, config.target_width)
    return assemble_document(grid, config)
