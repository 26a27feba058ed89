"""
Build Configuration
===================
Everything a build needs, gathered into one value that is passed
explicitly down the pipeline.
"""

import re
from pathlib import Path
from typing import Optional

from .errors import UsageError
from .text.charset import GlyphTable
from .text.metadata import LayoutKind, WIDTH

DEFAULT_POINT_SIZE = 8
DEFAULT_DPI = 96
DEFAULT_GAP_WIDTH = 1

_SIZE_TOKEN = re.compile(r"^(\d+)pt$")


class SpaceWidthPolicy:
    """
    Advance width of the space glyph.

    Either a fixed width, or point_size // divisor + minimum, which keeps
    small sizes at a one pixel space and widens it slowly with size.

    Args:
        fixed: Width in pixels, overrides the formula when given
        divisor: Points per extra pixel of space
        minimum: Width added to the scaled part
    """

    def __init__(self, fixed: Optional[int] = None, divisor: int = 10, minimum: int = 1):
        if divisor <= 0:
            raise ValueError("divisor must be positive")
        self.fixed = fixed
        self.divisor = divisor
        self.minimum = minimum

    def width(self, point_size: int) -> int:
        if self.fixed is not None:
            w = self.fixed
        else:
            w = point_size // self.divisor + self.minimum
        if w < 1:
            raise UsageError(f"space width must be at least 1 pixel, got {w}")
        return WIDTH.check(w, "space width")

    def __repr__(self) -> str:
        if self.fixed is not None:
            return f"SpaceWidthPolicy(fixed={self.fixed})"
        return f"SpaceWidthPolicy(size // {self.divisor} + {self.minimum})"


class BuildOptions:
    """
    Options for one font build.

    Attributes:
        font_path: Input font file
        point_size: Nominal size in points
        dpi: Rendering resolution
        depth: 1 (monochrome) or 8 (grayscale)
        layout: LayoutKind.LINEAR or LayoutKind.ATLAS
        gap_width: Pixels between glyphs when rendering text
        space: SpaceWidthPolicy
        table: GlyphTable to pack
        output_dir: Destination directory, defaults to the font's
    """

    def __init__(self, font_path, point_size: int = DEFAULT_POINT_SIZE,
                 dpi: int = DEFAULT_DPI, depth: int = 1,
                 layout: int = LayoutKind.LINEAR,
                 gap_width: int = DEFAULT_GAP_WIDTH,
                 space: Optional[SpaceWidthPolicy] = None,
                 table: Optional[GlyphTable] = None,
                 output_dir=None):
        if depth not in (1, 8):
            raise ValueError("depth must be 1 or 8")
        if point_size <= 0:
            raise ValueError("point size must be positive")
        if gap_width < 0:
            raise UsageError(f"gap width must not be negative, got {gap_width}")
        self.font_path = Path(font_path)
        self.point_size = point_size
        self.dpi = dpi
        self.depth = depth
        self.layout = LayoutKind.check(layout)
        self.gap_width = gap_width
        self.space = space or SpaceWidthPolicy()
        self.table = table or GlyphTable.default()
        self.output_dir = Path(output_dir) if output_dir else self.font_path.parent

    @property
    def name(self) -> str:
        """Base name of the generated artifacts and C++ symbols."""
        stem = re.sub(r"\W", "_", self.font_path.stem)
        if stem[:1].isdigit():
            stem = "_" + stem
        return f"{stem}{self.point_size}pt{self.depth}bpp"

    def __repr__(self) -> str:
        return (f"BuildOptions({self.font_path.name}, {self.point_size}pt, "
                f"{self.depth}bpp, {LayoutKind.name(self.layout)})")


def parse_mode_tokens(tokens):
    """
    Parse the positional mode words of the command line.

    Accepted words: "<N>pt", "8bpp", "1bpp", "tex".

    Returns:
        (point_size, depth, layout)

    Raises:
        UsageError: On an unknown or malformed word
    """
    point_size = DEFAULT_POINT_SIZE
    depth = 1
    layout = LayoutKind.LINEAR

    for token in tokens:
        m = _SIZE_TOKEN.match(token)
        if m:
            point_size = int(m.group(1))
            if point_size == 0:
                raise UsageError("point size must be positive")
        elif token == "8bpp":
            depth = 8
        elif token == "1bpp":
            depth = 1
        elif token == "tex":
            layout = LayoutKind.ATLAS
        else:
            raise UsageError(f"unknown option '{token}' (expected <N>pt, 8bpp or tex)")

    return point_size, depth, layout
