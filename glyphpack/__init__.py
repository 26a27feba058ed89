"""
glyphpack
=========
Packs a fixed set of glyphs rasterized from a font file into C++ byte
arrays for embedded renderers that cannot rasterize fonts themselves.

Architecture
------------
The pipeline is organized into layers:

    cli               Command line, options, exit status
       │
       └── builder        Runs the pipeline, produces FontData
              │
              ├── text.charset      Glyph keys in storage order
              ├── raster            Rasterization adapters
              │      ├── ft             TrueType/OpenType (freetype-py)
              │      └── bdf            BDF bitmap fonts (bdflib)
              ├── text.placeholder  Procedural fallback glyph
              ├── buffer.bitmap     Re-striding to tight rows
              ├── layout            Linear stream or shelf-packed atlas
              │      └── buffer.atlas   Texture canvas
              └── text.metadata     Bit-packed glyph words

    emit              C++ header/source writer (atomic)
    preview           Terminal and PNG previews (Pillow)

Quick Start
-----------
    from glyphpack import BuildOptions, build_font, open_rasterizer, write_font

    options = BuildOptions("DejaVuSans.ttf", point_size=10)
    with open_rasterizer(options.font_path, options.point_size) as r:
        font = build_font(r, options)
    write_font(font, options.output_dir)
"""

from .errors import (
    GlyphPackError,
    UsageError,
    FontLoadError,
    FieldOverflowError,
    AtlasOverflowError,
    OutputError,
)
from .config import BuildOptions, SpaceWidthPolicy
from .raster import Rasterizer, RasterBitmap, open_rasterizer
from .text import GlyphKey, GlyphTable, Glyph, GlyphMetrics, LayoutKind, NO_DATA
from .buffer import Atlas, normalize
from .layout import PackedData, layout_glyphs, layout_linear, layout_atlas
from .builder import FontData, build_font
from .emit import write_font

__all__ = [
    # Errors
    "GlyphPackError",
    "UsageError",
    "FontLoadError",
    "FieldOverflowError",
    "AtlasOverflowError",
    "OutputError",
    # Configuration
    "BuildOptions",
    "SpaceWidthPolicy",
    # Rasterization
    "Rasterizer",
    "RasterBitmap",
    "open_rasterizer",
    # Glyphs
    "GlyphKey",
    "GlyphTable",
    "Glyph",
    "GlyphMetrics",
    "LayoutKind",
    "NO_DATA",
    # Buffers and layout
    "Atlas",
    "normalize",
    "PackedData",
    "layout_glyphs",
    "layout_linear",
    "layout_atlas",
    # Build and emit
    "FontData",
    "build_font",
    "write_font",
]

__version__ = "1.0.0"
