"""
Shared fixtures: an in-memory rasterizer so no font file is needed.
"""

import pytest

from glyphpack.raster.base import Rasterizer, RasterBitmap
from glyphpack.text.charset import GlyphTable

# Fill value for bytes past the logical row width; must never reach output
PAD = 0xA5


class FakeRasterizer(Rasterizer):
    """
    Rasterizer drawing a deterministic pattern.

    Rows are padded to a pitch wider than needed and the padding is filled
    with junk, like real font libraries that align rows.

    Args:
        size: Default (width, height) of every glyph
        sizes: Per code point (width, height) overrides
        top: Default baseline-relative top
        tops: Per code point top overrides
        pixel_size: Reported nominal pixel size
        missing: Code points reported as absent
        pitch_pad: Extra bytes per row
    """

    def __init__(self, size=(8, 8), sizes=None, top=8, tops=None,
                 pixel_size=8, missing=(), pitch_pad=3):
        self.size = size
        self.sizes = sizes or {}
        self.top = top
        self.tops = tops or {}
        self.pixel_size = pixel_size
        self.missing = set(missing)
        self.pitch_pad = pitch_pad
        self.calls = []
        self.closed = False

    @staticmethod
    def ink(code, x, y) -> bool:
        return (x + y + code) % 3 == 0

    def has_glyph(self, code):
        return code not in self.missing

    def rasterize(self, code, depth=1):
        self.calls.append((code, depth))
        w, h = self.sizes.get(code, self.size)
        top = self.tops.get(code, self.top)

        if depth == 1:
            row_bytes = (w + 7) // 8
            pitch = row_bytes + self.pitch_pad
            buf = bytearray([PAD]) * (pitch * h)
            for y in range(h):
                row = y * pitch
                buf[row:row + row_bytes] = bytes(row_bytes)
                if w & 7:
                    # junk in the unused low bits of the last byte
                    buf[row + row_bytes - 1] = 0xFF >> (w & 7)
                for x in range(w):
                    if self.ink(code, x, y):
                        buf[row + (x >> 3)] |= 0x80 >> (x & 7)
        else:
            pitch = w + self.pitch_pad
            buf = bytearray([PAD]) * (pitch * h)
            for y in range(h):
                for x in range(w):
                    buf[y * pitch + x] = 255 if self.ink(code, x, y) else 0

        return RasterBitmap(w, h, pitch, bytes(buf), depth, top)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_rasterizer():
    return FakeRasterizer()


@pytest.fixture
def ascii_table():
    """Placeholder, space and printable ASCII only."""
    return GlyphTable.default(supplemental=())
