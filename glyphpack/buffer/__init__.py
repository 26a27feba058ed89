"""
Buffer subsystem - glyph bitmaps and the texture canvas.

Modules:
    bitmap: Re-striding and depth conversion of rasterizer output
    atlas: Zero-initialized canvas glyphs are blitted into
"""
from .bitmap import normalize, row_bytes, get_pixel, MONO_THRESHOLD
from .atlas import Atlas

__all__ = [
    "normalize",
    "row_bytes",
    "get_pixel",
    "MONO_THRESHOLD",
    "Atlas",
]
