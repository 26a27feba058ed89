"""
Font Builder
============
Runs the packing pipeline for one font:

    GlyphTable -> rasterize / placeholder -> normalize -> layout -> encode

The result, FontData, holds everything the emitter writes: packed bytes,
metadata words and the font-level scalars.
"""

from typing import List

from .buffer.bitmap import normalize
from .config import BuildOptions
from .layout import PackedData, layout_glyphs
from .raster.base import Rasterizer
from .text.charset import GlyphKey, GlyphTable
from .text.glyph import Glyph
from .text.metadata import (
    EncodedGlyphs,
    GlyphMetrics,
    HEIGHT,
    LayoutKind,
    WIDTH,
    encode_glyphs,
)
from .text.placeholder import draw_placeholder, placeholder_size

# Glyph whose height sizes the placeholder
_REFERENCE_CHAR = "l"


class FontData:
    """
    A packed font, ready to be emitted.

    Attributes:
        name: Symbol base name
        kind: LayoutKind of the data
        depth: Bits per pixel
        gap_width: Pixels between glyphs
        glyphs: Glyph objects in table order
        table: GlyphTable the glyphs were built from
        packed: PackedData from the layout pass
        encoded: EncodedGlyphs with the metadata words
    """

    def __init__(self, name: str, depth: int, gap_width: int,
                 glyphs: List[Glyph], packed: PackedData, encoded: EncodedGlyphs,
                 table: GlyphTable):
        self.name = name
        self.kind = packed.kind
        self.depth = depth
        self.gap_width = gap_width
        self.glyphs = glyphs
        self.table = table
        self.packed = packed
        self.encoded = encoded

    @property
    def data(self) -> bytes: return self.packed.data

    @property
    def data_size(self) -> int: return self.packed.size

    @property
    def words(self): return self.encoded.words

    @property
    def line_height(self) -> int: return self.encoded.line_height

    @property
    def glyph_count(self) -> int: return len(self.glyphs)

    @property
    def atlas_width(self) -> int: return self.packed.width

    @property
    def atlas_height(self) -> int: return self.packed.height

    def metrics(self, index: int) -> GlyphMetrics:
        """Decode the metadata words of one glyph."""
        return GlyphMetrics.unpack(self.words[index], self.kind)

    def find(self, text: str) -> int:
        """Index of the glyph for a key, 0 (placeholder) if absent."""
        return self.table.index(text)

    def __repr__(self) -> str:
        return (f"FontData({self.name}, {self.glyph_count} glyphs, "
                f"{LayoutKind.name(self.kind)}, {self.data_size} bytes)")


def _check_geometry(glyph: Glyph) -> None:
    where = f"glyph {glyph.key.label}"
    WIDTH.check(glyph.width, where)
    HEIGHT.check(glyph.height, where)


def rasterize_glyph(rasterizer: Rasterizer, key, depth: int) -> Glyph:
    """Render one printable key and normalize its bitmap."""
    code = key.code
    if not rasterizer.has_glyph(code):
        print(f"Warning: font has no glyph for {key.label} (U+{code:04X})")
    bitmap = rasterizer.rasterize(code, depth)
    data = normalize(bitmap, depth)
    return Glyph(key, bitmap.width, bitmap.rows, bitmap.top, data, depth)


def make_placeholder(key, reference: Glyph, pixel_size: int, depth: int) -> Glyph:
    """
    Synthesize the placeholder glyph.

    Args:
        key: Placeholder GlyphKey
        reference: The "l" glyph (may be None or empty)
        pixel_size: Fallback size source
        depth: Bits per pixel

    Returns:
        Glyph standing on the baseline, as tall as "l"
    """
    l_height = reference.height if reference is not None else 0
    w, h = placeholder_size(l_height, pixel_size)
    top = reference.y if l_height else h
    return Glyph(key, w, h, top, draw_placeholder(w, h, depth), depth)


def build_glyphs(rasterizer: Rasterizer, options: BuildOptions) -> List[Glyph]:
    """
    Create one Glyph per table key, in table order.

    Returns:
        List of glyphs with pixel data filled in, no storage assigned
    """
    depth = options.depth
    glyphs = []
    placeholder_index = None
    reference = None

    for i, key in enumerate(options.table):
        if key.is_placeholder:
            placeholder_index = i
            glyphs.append(None)
            continue
        if not key.printable:
            glyph = Glyph.advance_only(key, options.space.width(options.point_size))
        else:
            glyph = rasterize_glyph(rasterizer, key, depth)
            if key.text == _REFERENCE_CHAR:
                reference = glyph
        glyphs.append(glyph)

    if placeholder_index is not None:
        if reference is None:
            reference = rasterize_glyph(rasterizer, GlyphKey(_REFERENCE_CHAR), depth)
        glyphs[placeholder_index] = make_placeholder(
            options.table[placeholder_index], reference, rasterizer.pixel_size, depth)

    for glyph in glyphs:
        _check_geometry(glyph)
    return glyphs


def build_font(rasterizer: Rasterizer, options: BuildOptions) -> FontData:
    """
    Build a packed font.

    Args:
        rasterizer: Open Rasterizer for the input font
        options: BuildOptions

    Returns:
        FontData

    Raises:
        FieldOverflowError: If a glyph does not fit the metadata fields
        AtlasOverflowError: If the atlas cannot hold the glyphs
    """
    glyphs = build_glyphs(rasterizer, options)
    packed = layout_glyphs(glyphs, options.layout, rasterizer.pixel_size, options.depth)
    encoded = encode_glyphs(glyphs, options.layout)

    font = FontData(options.name, options.depth, options.gap_width,
                    glyphs, packed, encoded, options.table)

    if packed.kind == LayoutKind.ATLAS:
        print(f"Packed {font.glyph_count} glyphs into {packed.width}x{packed.height} atlas "
              f"({packed.allocated_height} rows allocated), {font.data_size} bytes")
    else:
        print(f"Packed {font.glyph_count} glyphs into {font.data_size} byte stream")
    print(f"Line height {font.line_height}px, {options.depth} bpp")
    return font
