"""Serialize art documents to standalone HTML."""

from __future__ import annotations

import html

from glyphart_renderer.models import ArtDocument, GlyphCell

from .models import ExportMode, StyleParams

_PRINT_STYLES = (
    "@media print { "
    "body { background-color: white !important; color: black !important; margin: 0; padding: 0; } "
    ".art-display { color: black !important; -webkit-print-color-adjust: exact; "
    "print-color-adjust: exact; margin: 20px; } "
    "}"
)

_PRINT_TRIGGER = "<script>window.addEventListener('load', function () { window.focus(); window.print(); });</script>"


def render_cell(cell: GlyphCell) -> str:
    return (
        f'<span style="opacity: {cell.opacity:.3f}; font-weight: {cell.weight};">'
        f"{html.escape(cell.character)}</span>"
    )


def render_cells(document: ArtDocument) -> str:
    return "".join("".join(render_cell(c) for c in row) + "\n" for row in document.rows)


def _stylesheet(style: StyleParams) -> str:
    theme = style.theme
    return (
        f"body {{ background-color: {theme.background}; color: {theme.text}; margin: 0; padding: 20px; "
        "display: flex; justify-content: center; align-items: center; min-height: 100vh; } "
        f".art-display {{ font-family: {theme.font_family}; line-height: {theme.line_height}; "
        "word-break: break-all; white-space: pre-wrap; "
        f"font-size: {style.font_size_px:g}px; max-width: fit-content; margin: auto; }} "
        f"{_PRINT_STYLES}"
    )


def render_document(document: ArtDocument, style: StyleParams, mode: ExportMode = ExportMode.STATIC) -> str:
    trigger = _PRINT_TRIGGER if mode is ExportMode.PRINT else ""
    return (
        '<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8"><title>Binary Art</title>'
        f'<link href="{html.escape(style.theme.font_url)}" rel="stylesheet">'
        f"<style>{_stylesheet(style)}</style>{trigger}</head>"
        f'<body><div class="art-display">{render_cells(document)}</div></body></html>'
    )
