"""Static file and print presentation of rendered art."""

from __future__ import annotations

import tempfile
import webbrowser
from datetime import datetime
from pathlib import Path
from typing import Callable

from glyphart_renderer.errors import PresentationUnavailable
from glyphart_renderer.models import ArtDocument

from .markup import render_document
from .models import ExportMode, StyleParams


def default_filename(document: ArtDocument) -> str:
    return f"binary_art_res_{document.width}.html"


def write_static(document: ArtDocument, style: StyleParams, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_document(document, style, ExportMode.STATIC), encoding="utf-8")
    return path


class PrintPresenter:
    """Hands a print-ready page to the system browser.

    ``opener`` follows the ``webbrowser.open`` contract: it returns false when
    no browser could take the page.
    """

    def __init__(self, opener: Callable[[str], bool] | None = None, directory: Path | None = None) -> None:
        self.opener = opener or webbrowser.open
        self.directory = directory

    def present(self, document: ArtDocument, style: StyleParams) -> Path:
        base = self.directory or Path(tempfile.gettempdir())
        base.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        path = base / f"binary_art_print_{document.width}-{stamp}.html"
        path.write_text(render_document(document, style, ExportMode.PRINT), encoding="utf-8")

        try:
            opened = self.opener(path.resolve().as_uri())
        except webbrowser.Error as exc:
            path.unlink(missing_ok=True)
            raise PresentationUnavailable(f"print surface unavailable: {exc}") from exc
        if not opened:
            path.unlink(missing_ok=True)
            raise PresentationUnavailable("print surface unavailable: no browser accepted the page")
        return path
