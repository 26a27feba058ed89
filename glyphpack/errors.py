"""
Exceptions raised by the glyph packing pipeline.

Every failure the command line reports to the user derives from
GlyphPackError; anything else is a bug and propagates.
"""


class GlyphPackError(Exception):
    """Base class for all glyphpack errors."""


class UsageError(GlyphPackError):
    """Invalid command line arguments."""


class FontLoadError(GlyphPackError, OSError):
    """Font file missing, unreadable or of an unsupported format."""


class FieldOverflowError(GlyphPackError, ValueError):
    """A value does not fit the bit field it is packed into."""

    def __init__(self, field: str, value: int, bits: int, where: str = ""):
        self.field = field
        self.value = value
        self.bits = bits
        msg = f"{field}={value} does not fit {bits} bits (max {(1 << bits) - 1})"
        if where:
            msg = f"{where}: {msg}"
        super().__init__(msg)


class AtlasOverflowError(GlyphPackError):
    """A glyph cannot be placed inside the atlas canvas."""


class OutputError(GlyphPackError, OSError):
    """A generated artifact could not be rendered or written."""
