"""Exporter package: HTML markup, themes, and print presentation."""

from .markup import render_cell, render_cells, render_document
from .models import DEFAULT_VIEWPORT_WIDTH, ExportMode, ExportTheme, StyleParams
from .presenter import PrintPresenter, default_filename, write_static
from .themes import DEFAULT_THEME_NAME, get_theme, list_themes

__all__ = [
    "DEFAULT_THEME_NAME",
    "DEFAULT_VIEWPORT_WIDTH",
    "ExportMode",
    "ExportTheme",
    "PrintPresenter",
    "StyleParams",
    "default_filename",
    "get_theme",
    "list_themes",
    "render_cell",
    "render_cells",
    "render_document",
    "write_static",
]
