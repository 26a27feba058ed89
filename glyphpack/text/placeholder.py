"""
Placeholder Glyph
=================
Procedurally drawn fallback glyph, shown for any character missing
from the packed font: a box with a cross, sized after the font's "l".

The pattern is drawn on mirrored coordinates, so it is symmetric both
horizontally and vertically by construction:

    x = min(i, w - 1 - i)
    y = min(j, h - 1 - j)

    set if x == 0 or y == 0                    (border)
    or, when w >= 7:
        y == x                                 (diagonals)
        y > x and x == w // 2                  (vertical stem)
"""

from typing import Tuple

# Below this width there is no room for the cross inside the border
_MIN_CROSS_WIDTH = 7

# Lower bound for the placeholder height when the font has no usable "l"
_MIN_HEIGHT = 3


def placeholder_size(l_height: int, pixel_size: int = 0) -> Tuple[int, int]:
    """
    Derive placeholder dimensions from the height of the "l" glyph.

    Args:
        l_height: Bitmap height of "l", 0 if the font lacks it
        pixel_size: Nominal pixel size, used when l_height is 0

    Returns:
        (width, height) with an odd width of about two thirds the height
    """
    h = l_height
    if h <= 0:
        h = max(_MIN_HEIGHT, pixel_size * 2 // 3)
    w = (2 * h // 3) | 1
    return w, h


def is_set(i: int, j: int, w: int, h: int) -> bool:
    """Whether pixel (i, j) of a w x h placeholder is drawn."""
    x = min(i, w - 1 - i)
    y = min(j, h - 1 - j)
    if x == 0 or y == 0:
        return True
    if w >= _MIN_CROSS_WIDTH:
        mid = w // 2
        return y == x or (y > x and x == mid)
    return False


def draw_placeholder(w: int, h: int, depth: int = 1) -> bytes:
    """
    Render the placeholder bitmap.

    Args:
        w: Width in pixels
        h: Height in pixels
        depth: 1 for MSB-first packed bits, 8 for one byte (0/255) per pixel

    Returns:
        Tightly packed row-major bitmap
    """
    if depth not in (1, 8):
        raise ValueError("depth must be 1 or 8")

    out = bytearray()
    for j in range(h):
        if depth == 8:
            out.extend(255 if is_set(i, j, w, h) else 0 for i in range(w))
            continue

        row = bytearray((w + 7) // 8)
        for i in range(w):
            if is_set(i, j, w, h):
                row[i >> 3] |= 0x80 >> (i & 7)
        out.extend(row)
    return bytes(out)
