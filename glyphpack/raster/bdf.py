"""
BDF Rasterizer
==============
Serves glyphs from a BDF bitmap font via bdflib.

BDF fonts come in exactly one size, so the requested point size is
ignored. Glyph rows are stored bottom-to-top in the bdflib model and are
turned into top-down, MSB-first 1-bit rows here.

Requirements:
    pip install bdflib
"""

from math import ceil
from pathlib import Path

from bdflib import reader

from ..errors import FontLoadError
from .base import Rasterizer, RasterBitmap


class BDFRasterizer(Rasterizer):
    """
    Rasterizer backed by a parsed BDF font.

    Args:
        path: Path to the .bdf file

    Raises:
        FontLoadError: If the file cannot be read or parsed
    """

    def __init__(self, path):
        self.path = Path(path)
        try:
            with open(self.path, "rb") as f:
                self.font = reader.read_bdf(f)
        except OSError as e:
            raise FontLoadError(f"Unable to load font {self.path}: {e}") from e
        except Exception as e:
            raise FontLoadError(f"Invalid BDF font {self.path}: {e}") from e

        props = self.font.properties
        ascent = int(props.get(b"FONT_ASCENT", 8))
        descent = int(props.get(b"FONT_DESCENT", 0))
        self.pixel_size = int(props.get(b"PIXEL_SIZE", ascent + descent))

        self._glyphs = {}
        for glyph in self.font.glyphs:
            if glyph.codepoint is not None and glyph.codepoint >= 0:
                self._glyphs[glyph.codepoint] = glyph

    def has_glyph(self, code: int) -> bool:
        return code in self._glyphs

    def rasterize(self, code: int, depth: int = 1) -> RasterBitmap:
        glyph = self._glyphs.get(code)
        if glyph is None:
            return RasterBitmap.empty()

        # BDF data is stored bottom-to-top, reverse it
        rows = list(reversed(glyph.data))
        bytes_per_row = ceil(glyph.bbW / 8)
        shift = bytes_per_row * 8 - glyph.bbW

        buffer = bytearray()
        for bits in rows:
            buffer.extend((bits << shift).to_bytes(bytes_per_row, "big"))

        return RasterBitmap(
            width=glyph.bbW,
            rows=glyph.bbH,
            pitch=bytes_per_row,
            buffer=bytes(buffer),
            depth=1,
            top=glyph.bbY + glyph.bbH,
        )
