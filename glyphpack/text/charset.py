"""
Glyph Key Tables
================
Defines which glyphs end up in a packed font, and in which order.

The canonical table is:

    ""          placeholder, drawn procedurally
    " "         space, advance only
    "!" .. "~"  printable ASCII
    ...         supplemental symbols (degree sign, umlauts, Greek)

Keys are kept in strictly ascending UTF-8 byte order. A renderer can then
binary search the glyph table by key (or by code point, which sorts the
same way for single code point keys).
"""

from typing import Iterable, List, NamedTuple, Sequence

# =============================================================================
# Character Sets
# =============================================================================

# Printable ASCII without space
ASCII_SYMBOLS = tuple(chr(i) for i in range(0x21, 0x7F))

# German-specific
GERMAN_CHARS = ("Ä", "Ö", "Ü", "ß", "ä", "ö", "ü")

# Greek letters common in units and formulas
GREEK_CHARS = ("Δ", "Ω", "α", "β", "γ", "δ", "λ", "μ", "π", "σ", "τ", "φ", "ω")

# Supplemental symbols, in code point order
SUPPLEMENTAL = ("°",) + GERMAN_CHARS + GREEK_CHARS

PLACEHOLDER = ""
SPACE = " "


class GlyphKey(NamedTuple):
    """
    One glyph slot.

    Attributes:
        text: UTF-8 text the slot stands for; empty for the placeholder
        printable: False for glyphs that only advance the pen (space)
    """
    text: str
    printable: bool = True

    @property
    def is_placeholder(self) -> bool:
        return not self.text

    @property
    def code(self) -> int:
        """
        First code point of the key, 0 for the placeholder.

        Multi-character keys keep only their first code point.
        """
        return ord(self.text[0]) if self.text else 0

    @property
    def utf8(self) -> bytes:
        return self.text.encode("utf-8")

    @property
    def label(self) -> str:
        """Readable name for comments and messages."""
        if self.is_placeholder:
            return "placeholder"
        if self.text in (" ", "\\", "'"):
            return repr(self.text)
        return self.text


class GlyphTable:
    """
    Ordered, validated sequence of glyph keys.

    Args:
        keys: GlyphKey entries in storage order

    Raises:
        ValueError: If keys are not strictly ascending in UTF-8 order,
            or the placeholder is not the first entry
    """

    def __init__(self, keys: Iterable[GlyphKey]):
        self._keys = tuple(keys)
        if not self._keys or not self._keys[0].is_placeholder:
            raise ValueError("glyph table must start with the placeholder")

        prev = None
        for key in self._keys:
            if prev is not None and key.utf8 <= prev.utf8:
                raise ValueError(f"glyph key {key.label} out of order after {prev.label}")
            if key.is_placeholder and not key.printable:
                raise ValueError("placeholder must be printable")
            prev = key

    @classmethod
    def default(cls, supplemental: Sequence[str] = SUPPLEMENTAL) -> "GlyphTable":
        """Build the canonical table with the given supplemental symbols."""
        return cls(collect_glyph_keys(supplemental))

    @property
    def keys(self) -> tuple: return self._keys

    def index(self, text: str) -> int:
        """Position of a key in the table, or 0 (placeholder) if absent."""
        for i, key in enumerate(self._keys):
            if key.text == text:
                return i
        return 0

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)

    def __getitem__(self, i: int) -> GlyphKey:
        return self._keys[i]


def collect_glyph_keys(supplemental: Sequence[str] = SUPPLEMENTAL) -> List[GlyphKey]:
    """
    Produce the canonical glyph key sequence.

    Args:
        supplemental: Extra keys appended after printable ASCII

    Returns:
        List of GlyphKey in storage order
    """
    keys = [GlyphKey(PLACEHOLDER), GlyphKey(SPACE, printable=False)]
    keys.extend(GlyphKey(ch) for ch in ASCII_SYMBOLS)
    keys.extend(GlyphKey(s) for s in supplemental)
    return keys
