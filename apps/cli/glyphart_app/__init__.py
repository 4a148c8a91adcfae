"""GlyphArt command-line application."""
