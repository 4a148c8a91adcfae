"""Built-in page themes for exported art."""

from __future__ import annotations

from .models import ExportTheme

DEFAULT_THEME_NAME = "Midnight"

_RED_HAT_MONO = "https://fonts.googleapis.com/css2?family=Red+Hat+Mono:wght@300..900&display=swap"

THEMES: dict[str, ExportTheme] = {
    "Midnight": ExportTheme(
        name="Midnight",
        background="#0d1117",
        text="#ffffff",
        font_family="'Red Hat Mono', monospace",
        font_url=_RED_HAT_MONO,
        line_height=0.95,
    ),
    # Opacity follows brightness, so dark image areas would fade into a light page.
    # Paper inverts by default unless the caller picks invert explicitly.
    "Paper": ExportTheme(
        name="Paper",
        background="#fdfcf8",
        text="#111111",
        font_family="'Red Hat Mono', monospace",
        font_url=_RED_HAT_MONO,
        line_height=0.95,
        prefers_invert=True,
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> ExportTheme:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])
