"""
Layout Engine
=============
Assigns every glyph its storage location and produces the packed data.

Two layouts, chosen up front by the caller:

LINEAR
    Glyph bitmaps are concatenated in table order. A glyph's location is
    the stream length before its bitmap is appended.

ATLAS
    Glyph bitmaps are shelf-packed into a 2D canvas with 1-pixel gutters.
    The cursor starts at (1, 1); a glyph that would cross the right
    gutter opens a new shelf below the tallest glyph of the current one.
    A glyph's location is its packed (x, y) coordinate. Only the rows
    actually used are emitted.

Glyphs without pixel data get NO_DATA in both layouts and take no space.
"""

from math import isqrt
from typing import List, NamedTuple

from .buffer.atlas import Atlas
from .errors import AtlasOverflowError
from .text.metadata import (
    LayoutKind,
    MAX_ATLAS_SIDE,
    NO_DATA,
    pack_atlas_xy,
)

GUTTER = 1


class PackedData(NamedTuple):
    """
    Result of a layout pass.

    Attributes:
        kind: LayoutKind used
        data: Packed bytes (stream, or the used rows of the atlas)
        width: Atlas width in pixels (0 for LINEAR)
        height: Used atlas height in pixels (0 for LINEAR)
        allocated_height: Canvas rows allocated (0 for LINEAR)
    """
    kind: int
    data: bytes
    width: int = 0
    height: int = 0
    allocated_height: int = 0

    @property
    def size(self) -> int:
        return len(self.data)


# =============================================================================
# Linear Layout
# =============================================================================


def layout_linear(glyphs) -> PackedData:
    """
    Concatenate glyph bitmaps and assign byte offsets.

    Args:
        glyphs: Glyph objects in table order, not yet placed

    Returns:
        PackedData with the concatenated stream

    Raises:
        AtlasOverflowError: If the stream outgrows the offset field
    """
    stream = bytearray()
    for g in glyphs:
        if not g.printable:
            g.assign(NO_DATA)
            continue
        if len(stream) >= NO_DATA:
            raise AtlasOverflowError(f"data stream too large at glyph {g.key.label}")
        g.assign(len(stream))
        stream.extend(g.data)
    return PackedData(LayoutKind.LINEAR, bytes(stream))


# =============================================================================
# Atlas Layout
# =============================================================================


def estimate_atlas_size(pixel_size: int, glyph_count: int):
    """
    Heuristic canvas size for a glyph set.

    Assumes every glyph covers a pixel_size square, makes the canvas
    roughly square and rounds the width up to a multiple of 4. The
    height is doubled, so the estimate is generous rather than tight.

    Returns:
        (width, height) in pixels
    """
    area = pixel_size * pixel_size * glyph_count
    width = max(4, (isqrt(area) + 3) & ~3)
    height = max(1, area // width * 2)
    return width, height


def layout_atlas(glyphs, pixel_size: int, depth: int = 8) -> PackedData:
    """
    Shelf-pack glyph bitmaps into an atlas and assign (x, y) locations.

    Args:
        glyphs: Glyph objects in table order, not yet placed
        pixel_size: Nominal pixel size used for the canvas estimate
        depth: Atlas bits per pixel, must match the glyph data

    Returns:
        PackedData with the used rows of the atlas

    Raises:
        AtlasOverflowError: If a glyph is wider than the canvas or the
            atlas outgrows the coordinate fields
    """
    width, height = estimate_atlas_size(pixel_size, len(glyphs))
    if width > MAX_ATLAS_SIDE:
        raise AtlasOverflowError(f"atlas width {width} exceeds {MAX_ATLAS_SIDE}")
    atlas = Atlas(width, height, depth)
    allocated = height

    x = y = GUTTER
    row_height = 0

    for g in glyphs:
        if not g.printable:
            g.assign(NO_DATA)
            continue
        if g.depth != depth:
            raise ValueError(f"glyph {g.key.label} is {g.depth}-bit, atlas is {depth}-bit")
        if g.width + 2 * GUTTER > width:
            raise AtlasOverflowError(
                f"glyph {g.key.label} ({g.width}px) wider than {width}px atlas")

        if x + g.width + GUTTER > width:
            x = GUTTER
            y += row_height + GUTTER
            row_height = 0

        bottom = y + g.height + GUTTER
        if bottom > MAX_ATLAS_SIDE:
            raise AtlasOverflowError(f"atlas height exceeds {MAX_ATLAS_SIDE} at glyph {g.key.label}")
        if bottom > atlas.height:
            atlas.grow(bottom)

        atlas.blit(g.data, g.width, g.height, x, y)
        g.assign(pack_atlas_xy(x, y, where=f"glyph {g.key.label}"))

        x += g.width + GUTTER
        row_height = max(row_height, g.height)

    used = y + row_height + GUTTER
    if used > atlas.height:
        atlas.grow(used)
    if used > allocated:
        print(f"Warning: atlas estimate of {allocated} rows too small, grew to {atlas.height}")
    return PackedData(LayoutKind.ATLAS, atlas.rows(used), width, used, atlas.height)


def layout_glyphs(glyphs: List, kind: int, pixel_size: int = 0, depth: int = 1) -> PackedData:
    """Dispatch to the layout selected by kind."""
    LayoutKind.check(kind)
    if kind == LayoutKind.ATLAS:
        return layout_atlas(glyphs, pixel_size, depth)
    return layout_linear(glyphs)
