"""Error taxonomy shared by the art pipeline and its collaborators."""

from __future__ import annotations


class GlyphArtError(Exception):
    """Base class for every failure reported by the art pipeline."""


class InvalidDimensions(GlyphArtError, ValueError):
    """Source or target width/height is not usable."""


class EmptyCanvas(GlyphArtError, ValueError):
    """Target height rounds to zero rows."""


class DecodeError(GlyphArtError):
    """The bitmap source could not decode the supplied image."""


class PresentationUnavailable(GlyphArtError):
    """The print surface could not be opened."""
