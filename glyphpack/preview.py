"""
Preview
=======
Shows what a packed font actually contains. Glyphs are read back out of
the packed data through their metadata words, so a preview also checks
the encoding.

- print_preview(): terminal rendering of selected characters
- png_bytes(), save_png(): the packed data as a grayscale PNG (requires Pillow)
"""

import io
from pathlib import Path
from typing import List

from PIL import Image

from .buffer.bitmap import get_pixel
from .emit import write_atomic
from .errors import OutputError
from .text.metadata import LayoutKind, unpack_atlas_xy

_INK = "█"
_PAPER = "·"


def glyph_pixel(font, metrics, x: int, y: int) -> int:
    """
    Read pixel (x, y) of a glyph from the packed data.

    Returns:
        Coverage 0-255
    """
    if font.kind == LayoutKind.ATLAS:
        ax, ay = unpack_atlas_xy(metrics.location)
        stride = (font.atlas_width + 7) // 8 if font.depth == 1 else font.atlas_width
        row = font.data[(ay + y) * stride:(ay + y + 1) * stride]
        value = get_pixel(row, font.atlas_width, font.depth, ax + x, 0)
    else:
        stride = (metrics.width + 7) // 8 if font.depth == 1 else metrics.width
        start = metrics.location + y * stride
        value = get_pixel(font.data[start:start + stride], metrics.width, font.depth, x, 0)
    return value * 255 if font.depth == 1 else value


def render_glyph_lines(font, index: int) -> List[str]:
    """
    Render one glyph as text rows, one string per pixel row.

    Glyphs without pixel data render as an empty list.
    """
    m = font.metrics(index)
    if not m.has_data:
        return []
    lines = []
    for y in range(m.height):
        lines.append("".join(_INK if glyph_pixel(font, m, x, y) >= 128 else _PAPER
                             for x in range(m.width)))
    return lines


def print_preview(font, text: str) -> None:
    """Print an ASCII art preview of each character of text."""
    print(f"\nPreview ({font.name}, line height {font.line_height}):")
    print("-" * 40)

    for ch in text:
        index = font.find(ch)
        m = font.metrics(index)
        if index == 0:
            print(f"'{ch}' (U+{ord(ch):04X}): NOT FOUND, placeholder shown")
        else:
            print(f"'{ch}' (U+{m.code:04X}) {m.width}x{m.height} top={m.top}:")
        lines = render_glyph_lines(font, index)
        if not lines:
            print(f"  (advance {m.width})")
        for line in lines:
            print(f"  {line}")
        print()


def to_image(font) -> Image.Image:
    """
    Convert the packed data to a grayscale image.

    Atlas fonts give the used atlas area. Linear fonts give a strip of all
    glyphs on a common top line, gap_width apart.
    """
    if font.kind == LayoutKind.ATLAS:
        size = (font.atlas_width, font.atlas_height)
        mode = "1" if font.depth == 1 else "L"
        return Image.frombytes(mode, size, font.data).convert("L")

    metrics = [font.metrics(i) for i in range(font.glyph_count)]
    width = sum(m.width + font.gap_width for m in metrics)
    img = Image.new("L", (max(1, width), max(1, font.line_height)), 0)

    pen = 0
    for m in metrics:
        if m.has_data:
            for y in range(m.height):
                for x in range(m.width):
                    value = glyph_pixel(font, m, x, y)
                    if value:
                        img.putpixel((pen + x, m.top + y), value)
        pen += m.width + font.gap_width
    return img


def png_bytes(font) -> bytes:
    """
    Encode the packed data as PNG.

    Raises:
        OutputError: If Pillow cannot encode the image
    """
    buf = io.BytesIO()
    try:
        to_image(font).save(buf, "PNG")
    except (OSError, ValueError) as e:
        raise OutputError(f"Unable to encode PNG: {e}") from e
    return buf.getvalue()


def save_png(font, path) -> Path:
    """Write the packed data as a PNG image."""
    path = Path(path)
    write_atomic({path: png_bytes(font)})
    print(f"Created: {path} ({path.stat().st_size / 1024:.1f} KB)")
    return path
