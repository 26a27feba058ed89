"""
Rasterization adapters.

Modules:
    base: Rasterizer protocol and RasterBitmap
    ft: TrueType/OpenType rendering through freetype-py
    bdf: BDF bitmap fonts through bdflib
"""
from pathlib import Path

from ..errors import FontLoadError
from .base import Rasterizer, RasterBitmap, pixel_size_26_6

OUTLINE_SUFFIXES = (".ttf", ".otf", ".ttc", ".woff", ".pfb")
BITMAP_SUFFIXES = (".bdf",)


def open_rasterizer(path, point_size: int = 8, dpi: int = 96) -> Rasterizer:
    """
    Open a font file with the adapter matching its extension.

    Args:
        path: Font file path
        point_size: Nominal size for outline fonts
        dpi: Resolution for outline fonts

    Returns:
        Rasterizer instance (use as a context manager)

    Raises:
        FontLoadError: If the file is missing or of an unsupported format
    """
    path = Path(path)
    if not path.is_file():
        raise FontLoadError(f"Font file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in OUTLINE_SUFFIXES:
        from .ft import FreeTypeRasterizer
        return FreeTypeRasterizer(path, point_size, dpi)
    if suffix in BITMAP_SUFFIXES:
        from .bdf import BDFRasterizer
        print(f"Note: {path.name} is a bitmap font, size {point_size}pt is ignored")
        return BDFRasterizer(path)

    supported = ", ".join(OUTLINE_SUFFIXES + BITMAP_SUFFIXES)
    raise FontLoadError(f"Unsupported font format: {suffix} (supported: {supported})")


__all__ = [
    "Rasterizer",
    "RasterBitmap",
    "pixel_size_26_6",
    "open_rasterizer",
]
