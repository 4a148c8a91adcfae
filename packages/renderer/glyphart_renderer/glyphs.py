"""Map effective luminance to styled glyph cells.

Brightness drives three independent channels:

* font weight, interpolated linearly over [300, 700];
* opacity, linear with a visibility floor of 0.1;
* character, picked by splitting [0, 255] into 14 equal bands and walking the
  configured character cycle. The walk wraps, so a short cycle repeats in
  fixed bands instead of stretching across the whole range.
"""

from __future__ import annotations

import math
import re

from .models import GlyphCell

MIN_WEIGHT = 300
MAX_WEIGHT = 700
WEIGHT_RANGE = MAX_WEIGHT - MIN_WEIGHT
LEVEL_COUNT = 14
LEVEL_SIZE = 256 / LEVEL_COUNT
OPACITY_FLOOR = 0.1
DEFAULT_CYCLE: tuple[str, ...] = ("0", "1")
# Outer whitespace plus U+FEFF, which str.strip() keeps and pasted text often starts with.
_OUTER_BLANK = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def normalize_cycle(characters: str | None) -> tuple[str, ...]:
    text = _OUTER_BLANK.sub("", characters or "")
    if not text:
        return DEFAULT_CYCLE
    return tuple(text)


def glyph_weight(effective: float) -> int:
    continuous = MIN_WEIGHT + (effective / 255.0) * WEIGHT_RANGE
    # Half-up rounding; round() would send x.5 to the even neighbour.
    rounded = math.floor(continuous + 0.5)
    return max(MIN_WEIGHT, min(MAX_WEIGHT, rounded))


def glyph_opacity(effective: float) -> float:
    return min(1.0, max(OPACITY_FLOOR, effective / 255.0))


def glyph_level(effective: float) -> int:
    level = math.floor(effective / LEVEL_SIZE)
    return max(0, min(LEVEL_COUNT - 1, level))


class GlyphMapper:
    """Deterministic luminance -> ``GlyphCell`` mapping for one character cycle."""

    def __init__(self, characters: str | None = None) -> None:
        self.cycle = normalize_cycle(characters)

    def character(self, effective: float) -> str:
        return self.cycle[glyph_level(effective) % len(self.cycle)]

    def cell(self, effective: float) -> GlyphCell:
        return GlyphCell(
            character=self.character(effective),
            weight=glyph_weight(effective),
            opacity=glyph_opacity(effective),
        )
