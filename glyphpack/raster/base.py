"""
Rasterizer - Abstract Base for Glyph Rasterization Adapters
============================================================
Defines the interface the font builder uses to obtain glyph bitmaps.

The builder never touches a font library directly: it asks a rasterizer
for a RasterBitmap and normalizes whatever row pitch comes back.

Note: Using duck typing instead of ABC, like the other adapter bases.
"""

from typing import NamedTuple


class RasterBitmap(NamedTuple):
    """
    A rendered glyph as delivered by a font library.

    Attributes:
        width: Logical width in pixels
        rows: Height in pixels
        pitch: Bytes from one row to the next; negative for bottom-up rows.
            May exceed the logical row width.
        buffer: Raw bitmap bytes (abs(pitch) * rows)
        depth: 1 (MSB-first bits) or 8 (one coverage byte per pixel)
        top: Distance from baseline to the top row, positive upwards
    """
    width: int
    rows: int
    pitch: int
    buffer: bytes
    depth: int = 1
    top: int = 0

    @classmethod
    def empty(cls, depth: int = 1) -> "RasterBitmap":
        return cls(0, 0, 0, b"", depth, 0)


class Rasterizer:
    """
    Abstract base class for glyph rasterizers.

    Subclasses must implement all methods marked as "abstract".

    Properties:
        pixel_size: Nominal em height in whole pixels at the requested size
    """

    pixel_size: int = 0

    def has_glyph(self, code: int) -> bool:
        """
        Check whether the font defines a glyph for a code point.

        Args:
            code: Unicode code point
        """
        raise NotImplementedError

    def rasterize(self, code: int, depth: int = 1) -> RasterBitmap:
        """
        Render one code point.

        Args:
            code: Unicode code point
            depth: 1 for monochrome rendering, 8 for grayscale

        Returns:
            RasterBitmap; its depth may differ from the one requested
        """
        raise NotImplementedError

    def close(self):
        """Release the font. Default does nothing."""

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False


def pixel_size_26_6(point_size: int, dpi: int) -> int:
    """
    Round a nominal point size to whole pixels via 26.6 fixed point.

    Args:
        point_size: Size in points
        dpi: Device resolution

    Returns:
        Pixel size, rounded to nearest
    """
    fixed = (point_size << 6) * dpi // 72
    return (fixed + 32) >> 6
