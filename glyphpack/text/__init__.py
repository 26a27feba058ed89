"""
Glyph subsystem.

Modules:
    charset: Glyph key tables and the canonical collection order
    glyph: Mutable glyph record filled in during a build
    placeholder: Procedural fallback glyph
    metadata: Bit-packed glyph metadata words
"""
from .charset import GlyphKey, GlyphTable, collect_glyph_keys, SUPPLEMENTAL
from .glyph import Glyph
from .placeholder import draw_placeholder, placeholder_size
from .metadata import (
    LayoutKind,
    GlyphMetrics,
    encode_glyphs,
    pack_atlas_xy,
    unpack_atlas_xy,
    NO_DATA,
)

__all__ = [
    "GlyphKey",
    "GlyphTable",
    "collect_glyph_keys",
    "SUPPLEMENTAL",
    "Glyph",
    "draw_placeholder",
    "placeholder_size",
    "LayoutKind",
    "GlyphMetrics",
    "encode_glyphs",
    "pack_atlas_xy",
    "unpack_atlas_xy",
    "NO_DATA",
]
