"""Typed pipeline models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .errors import InvalidDimensions

MIN_TARGET_WIDTH = 50
MAX_TARGET_WIDTH = 300
DEFAULT_TARGET_WIDTH = 100
DEFAULT_CHARACTERS = "01"


@dataclass(frozen=True)
class RawBitmap:
    width: int
    height: int
    pixels: bytes = field(repr=False)


@dataclass(frozen=True)
class RenderConfig:
    characters: str = DEFAULT_CHARACTERS
    invert: bool = False
    target_width: int = DEFAULT_TARGET_WIDTH

    @property
    def cycle(self) -> tuple[str, ...]:
        from .glyphs import normalize_cycle

        return normalize_cycle(self.characters)

    @classmethod
    def from_options(
        cls,
        characters: str | None = None,
        invert: bool = False,
        target_width: int = DEFAULT_TARGET_WIDTH,
    ) -> "RenderConfig":
        """Build a config from user-facing options, rejecting widths outside the slider range."""
        if isinstance(target_width, bool) or not isinstance(target_width, int):
            raise InvalidDimensions(f"target width must be an integer, got {target_width!r}")
        if not MIN_TARGET_WIDTH <= target_width <= MAX_TARGET_WIDTH:
            raise InvalidDimensions(
                f"target width {target_width} outside [{MIN_TARGET_WIDTH}, {MAX_TARGET_WIDTH}]"
            )
        return cls(
            characters=DEFAULT_CHARACTERS if characters is None else characters,
            invert=bool(invert),
            target_width=target_width,
        )


@dataclass(frozen=True, eq=False)
class SampledGrid:
    width: int
    height: int
    pixels: np.ndarray = field(repr=False)


@dataclass(frozen=True)
class GlyphCell:
    character: str
    weight: int
    opacity: float


@dataclass(frozen=True)
class ArtDocument:
    width: int
    height: int
    rows: tuple[tuple[GlyphCell, ...], ...] = field(repr=False)

    def __iter__(self) -> Iterator[tuple[GlyphCell, ...]]:
        return iter(self.rows)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def cell(self, x: int, y: int) -> GlyphCell:
        return self.rows[y][x]

    def lines(self) -> list[str]:
        return ["".join(c.character for c in row) for row in self.rows]
