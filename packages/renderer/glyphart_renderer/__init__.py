"""Renderer package turning bitmaps into glyph art documents."""

from .bitmap import PATTERNS, bitmap_from_image, build_test_pattern, decode_bitmap, load_bitmap
from .document import assemble_document
from .downsample import downsample, target_height
from .errors import DecodeError, EmptyCanvas, GlyphArtError, InvalidDimensions, PresentationUnavailable
from .glyphs import GlyphMapper, glyph_level, glyph_opacity, glyph_weight, normalize_cycle
from .luminance import effective_luminance, luminance, luminance_rows
from .models import (
    MAX_TARGET_WIDTH,
    MIN_TARGET_WIDTH,
    ArtDocument,
    GlyphCell,
    RawBitmap,
    RenderConfig,
    SampledGrid,
)
from .pipeline import generate_art

__all__ = [
    "ArtDocument",
    "DecodeError",
    "EmptyCanvas",
    "GlyphArtError",
    "GlyphCell",
    "GlyphMapper",
    "InvalidDimensions",
    "MAX_TARGET_WIDTH",
    "MIN_TARGET_WIDTH",
    "PATTERNS",
    "PresentationUnavailable",
    "RawBitmap",
    "RenderConfig",
    "SampledGrid",
    "assemble_document",
    "bitmap_from_image",
    "build_test_pattern",
    "decode_bitmap",
    "downsample",
    "effective_luminance",
    "generate_art",
    "glyph_level",
    "glyph_opacity",
    "glyph_weight",
    "load_bitmap",
    "luminance",
    "luminance_rows",
    "normalize_cycle",
    "target_height",
]
