"""
Glyph - One Packed Glyph Record
===============================
Holds a glyph's geometry and tightly packed bitmap while the font is
built. Pixel data is filled in once, then the layout engine assigns the
storage location exactly once.
"""

from .charset import GlyphKey
from .metadata import NO_DATA


class Glyph:
    """
    Glyph record.

    Attributes:
        key: GlyphKey this glyph was built for
        printable: False for advance-only glyphs
        code: Code point, 0 for the placeholder
        y: Baseline-relative top offset (positive = above baseline)
        width: Bitmap width, or advance width for non-printable glyphs
        height: Bitmap height
        depth: Bits per pixel of data (1 or 8)
        data: Tightly packed row-major bitmap, empty if non-printable
    """

    __slots__ = ("key", "printable", "code", "y", "width", "height",
                 "depth", "data", "_location")

    def __init__(self, key: GlyphKey, width: int = 0, height: int = 0,
                 y: int = 0, data: bytes = b"", depth: int = 1):
        self.key = key
        self.printable = key.printable
        self.code = key.code
        self.y = y
        self.width = width
        self.height = height
        self.depth = depth
        self.data = bytes(data) if self.printable else b""
        self._location = None

    @classmethod
    def advance_only(cls, key: GlyphKey, width: int) -> "Glyph":
        """Create a glyph without pixels (space)."""
        return cls(key, width=width, height=0, y=0)

    @property
    def row_bytes(self) -> int:
        if self.depth == 1:
            return (self.width + 7) // 8
        return self.width

    @property
    def location(self) -> int:
        if self._location is None:
            raise RuntimeError(f"glyph {self.key.label} has no storage location yet")
        return self._location

    def assign(self, location: int) -> None:
        """
        Record the storage location. Only allowed once.

        Raises:
            RuntimeError: If the glyph was already placed
        """
        if self._location is not None:
            raise RuntimeError(f"glyph {self.key.label} placed twice")
        if not self.printable and location != NO_DATA:
            raise ValueError(f"glyph {self.key.label} has no pixel data to place")
        self._location = location

    def __repr__(self) -> str:
        return (f"Glyph({self.key.label}, {self.width}x{self.height}, "
                f"y={self.y}, {len(self.data)} bytes)")
