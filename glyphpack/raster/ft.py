"""
FreeType Rasterizer
===================
Renders TrueType/OpenType glyphs with freetype-py.

The face is sized with a nominal request of point_size << 6 at the given
resolution, so a size of 8 at 96 dpi matches what a desktop renderer
produces for "8pt".

Requirements:
    pip install freetype-py
"""

from pathlib import Path

import freetype

from ..errors import FontLoadError
from .base import Rasterizer, RasterBitmap, pixel_size_26_6

_LOAD_MONO = freetype.FT_LOAD_RENDER | freetype.FT_LOAD_TARGET_MONO
_LOAD_GRAY = freetype.FT_LOAD_RENDER


class FreeTypeRasterizer(Rasterizer):
    """
    Rasterizer backed by a FreeType face.

    Args:
        path: Font file path
        point_size: Nominal size in points
        dpi: Horizontal and vertical resolution

    Raises:
        FontLoadError: If FreeType cannot open the face
    """

    def __init__(self, path, point_size: int, dpi: int = 96):
        self.path = Path(path)
        try:
            self.face = freetype.Face(str(self.path))
        except freetype.FT_Exception as e:
            raise FontLoadError(f"Unable to load font {self.path}: {e}") from e

        self.face.set_char_size(point_size << 6, point_size << 6, dpi, dpi)
        self.point_size = point_size
        self.dpi = dpi
        self.pixel_size = pixel_size_26_6(point_size, dpi)

    def has_glyph(self, code: int) -> bool:
        return self.face.get_char_index(code) != 0

    def rasterize(self, code: int, depth: int = 1) -> RasterBitmap:
        self.face.load_char(code, _LOAD_MONO if depth == 1 else _LOAD_GRAY)
        slot = self.face.glyph
        bitmap = slot.bitmap

        if bitmap.pixel_mode == freetype.FT_PIXEL_MODE_MONO:
            got_depth = 1
        else:
            got_depth = 8

        return RasterBitmap(
            width=bitmap.width,
            rows=bitmap.rows,
            pitch=bitmap.pitch,
            buffer=bytes(bitmap.buffer),
            depth=got_depth,
            top=slot.bitmap_top,
        )
