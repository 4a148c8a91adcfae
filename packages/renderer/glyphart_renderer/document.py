"""Assemble glyph cells into a row-major art document."""

from __future__ import annotations

from .glyphs import GlyphMapper
from .luminance import luminance_rows
from .models import ArtDocument, GlyphCell, RenderConfig, SampledGrid


def assemble_document(grid: SampledGrid, config: RenderConfig) -> ArtDocument:
    mapper = GlyphMapper(config.characters)
    rows: list[tuple[GlyphCell, ...]] = []
    current: list[GlyphCell] = []

    for values in luminance_rows(grid, config.invert):
        for value in values:
            current.append(mapper.cell(value))
            if len(current) == grid.width:
                rows.append(tuple(current))
                current = []

    return ArtDocument(width=grid.width, height=grid.height, rows=tuple(rows))
