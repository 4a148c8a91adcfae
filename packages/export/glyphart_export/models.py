"""Typed exporter models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MIN_FONT_PX = 2.0
MAX_FONT_PX = 10.0
FONT_SCALE = 1.8
DEFAULT_VIEWPORT_WIDTH = 800


class ExportMode(str, Enum):
    STATIC = "static"
    PRINT = "print"


@dataclass(frozen=True)
class ExportTheme:
    name: str
    background: str
    text: str
    font_family: str
    font_url: str
    line_height: float
    # Default to inverted brightness when the caller leaves invert unset.
    prefers_invert: bool = False


@dataclass(frozen=True)
class StyleParams:
    font_size_px: float
    theme: ExportTheme

    @classmethod
    def for_viewport(
        cls,
        viewport_width: int,
        target_width: int,
        theme_name: str | None = None,
    ) -> "StyleParams":
        from .themes import get_theme

        per_column = viewport_width / max(target_width, 1)
        font = max(MIN_FONT_PX, min(MAX_FONT_PX, per_column)) * FONT_SCALE
        return cls(font_size_px=round(font, 3), theme=get_theme(theme_name))
