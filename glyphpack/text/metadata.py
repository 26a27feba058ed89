"""
Glyph Metadata Encoding
=======================
Packs per-glyph geometry into two 32-bit words.

Word X (identity and size):
    bits  0-17: code point (0 for the placeholder)
    bits 18-24: width in pixels
    bits 25-31: height in pixels

Word Y (placement):
    bits  0-23: storage location
    bits 24-30: top offset below the common top line
    bit  31:    unused (always 0)

The storage location depends on the layout kind:
    LINEAR: byte offset of the glyph bitmap in the data stream
    ATLAS:  packed atlas coordinate, x in bits 0-11, y in bits 12-23

Glyphs without pixel data (space) store NO_DATA, all ones in the
location field, and are rendered as advance only.

Every field is range checked on pack; an out of range value raises
FieldOverflowError instead of bleeding into its neighbour.
"""

from typing import List, NamedTuple, Sequence, Tuple

from ..errors import FieldOverflowError

# =============================================================================
# Layout Discriminant
# =============================================================================


class LayoutKind:
    """
    Storage layout enumeration.

    Selects how the location field of word Y is addressed.
    """
    LINEAR = 0  # Concatenated byte stream, location = byte offset
    ATLAS = 1   # Shelf-packed 2D texture, location = x | y << 12

    _names = {
        0: "linear",
        1: "atlas",
    }

    @classmethod
    def name(cls, kind: int) -> str:
        """Get human-readable layout name."""
        return cls._names.get(kind, f"UNKNOWN({kind})")

    @classmethod
    def check(cls, kind: int) -> int:
        if kind not in cls._names:
            raise ValueError(f"unknown layout kind: {kind!r}")
        return kind


# =============================================================================
# Bit Fields
# =============================================================================


class BitField:
    """Unsigned field of a 32-bit word."""

    __slots__ = ("name", "shift", "bits", "mask")

    def __init__(self, name: str, shift: int, bits: int):
        if shift < 0 or bits <= 0 or shift + bits > 32:
            raise ValueError(f"field {name} does not fit a 32-bit word")
        self.name = name
        self.shift = shift
        self.bits = bits
        self.mask = (1 << bits) - 1

    @property
    def max(self) -> int: return self.mask

    def check(self, value: int, where: str = "") -> int:
        """Return value unchanged, or raise if it does not fit the field."""
        if not 0 <= value <= self.mask:
            raise FieldOverflowError(self.name, value, self.bits, where)
        return value

    def insert(self, word: int, value: int, where: str = "") -> int:
        return word | (self.check(value, where) << self.shift)

    def extract(self, word: int) -> int:
        return (word >> self.shift) & self.mask

    def __repr__(self) -> str:
        return f"BitField({self.name!r}, shift={self.shift}, bits={self.bits})"


# Word X
CODE = BitField("code", 0, 18)
WIDTH = BitField("width", 18, 7)
HEIGHT = BitField("height", 25, 7)

# Word Y
LOCATION = BitField("location", 0, 24)
TOP = BitField("top", 24, 7)

# Atlas coordinate inside LOCATION
ATLAS_X = BitField("x", 0, 12)
ATLAS_Y = BitField("y", 12, 12)

# Location of glyphs that carry no pixel data
NO_DATA = LOCATION.mask

# Largest atlas side that keeps every coordinate addressable
MAX_ATLAS_SIDE = ATLAS_X.mask + 1


def pack_atlas_xy(x: int, y: int, where: str = "") -> int:
    """Pack an atlas coordinate into a location value."""
    return ATLAS_Y.insert(ATLAS_X.insert(0, x, where), y, where)


def unpack_atlas_xy(location: int) -> Tuple[int, int]:
    """Split a packed atlas location back into (x, y)."""
    return ATLAS_X.extract(location), ATLAS_Y.extract(location)


# =============================================================================
# Glyph Metrics Record
# =============================================================================


class GlyphMetrics(NamedTuple):
    """
    Decoded content of one glyph's metadata words.

    Attributes:
        code: Code point, or 0 for the placeholder
        width: Bitmap width (advance width for glyphs without data)
        height: Bitmap height
        top: Rows between the common top line and the glyph's first row
        location: Byte offset, packed atlas coordinate or NO_DATA
    """
    code: int
    width: int
    height: int
    top: int
    location: int

    @property
    def has_data(self) -> bool:
        return self.location != NO_DATA

    def pack(self, kind: int, where: str = "") -> Tuple[int, int]:
        """
        Encode into the (X, Y) word pair.

        Args:
            kind: LayoutKind the location is addressed with
            where: Label used in overflow messages

        Returns:
            Tuple of two unsigned 32-bit words

        Raises:
            FieldOverflowError: If any value exceeds its field
        """
        LayoutKind.check(kind)
        x_word = CODE.insert(0, self.code, where)
        x_word = WIDTH.insert(x_word, self.width, where)
        x_word = HEIGHT.insert(x_word, self.height, where)

        y_word = LOCATION.insert(0, self.location, where)
        y_word = TOP.insert(y_word, self.top, where)
        return x_word, y_word

    @classmethod
    def unpack(cls, words: Sequence[int], kind: int) -> "GlyphMetrics":
        """Decode an (X, Y) word pair produced by pack()."""
        LayoutKind.check(kind)
        x_word, y_word = words
        return cls(
            code=CODE.extract(x_word),
            width=WIDTH.extract(x_word),
            height=HEIGHT.extract(x_word),
            top=TOP.extract(y_word),
            location=LOCATION.extract(y_word),
        )


# =============================================================================
# Glyph Set Encoding
# =============================================================================


class EncodedGlyphs(NamedTuple):
    """Metadata words for a glyph set plus the derived font metrics."""
    words: List[Tuple[int, int]]
    metrics: List[GlyphMetrics]
    max_top: int
    line_height: int


def encode_glyphs(glyphs, kind: int) -> EncodedGlyphs:
    """
    Re-baseline a glyph set to a common top line and pack its metadata.

    The top offset of each glyph is max_top - glyph.y, where max_top is the
    highest baseline-relative top over the whole set. The line height is
    the lowest bottom edge after re-baselining.

    Args:
        glyphs: Glyph objects with storage already assigned
        kind: LayoutKind used to assign storage

    Returns:
        EncodedGlyphs with one word pair per glyph, in input order
    """
    if not glyphs:
        return EncodedGlyphs([], [], 0, 0)

    max_top = max(g.y for g in glyphs)
    words = []
    metrics = []
    line_height = 0

    for g in glyphs:
        m = GlyphMetrics(
            code=g.code,
            width=g.width,
            height=g.height,
            top=max_top - g.y,
            location=g.location,
        )
        words.append(m.pack(kind, where=f"glyph {g.key.label}"))
        metrics.append(m)
        line_height = max(line_height, m.top + m.height)

    return EncodedGlyphs(words, metrics, max_top, line_height)
