"""
Atlas - Glyph Texture Canvas
============================
Zero-initialized 2D pixel buffer that glyph bitmaps are blitted into.

Supports:
- 1-bit (MSB-first packed rows, ceil(width / 8) bytes per row)
- 8-bit (one coverage byte per pixel)

The canvas only ever grows. Every blit is bounds checked; writing outside
the canvas raises AtlasOverflowError rather than corrupting neighbours.
"""

from ..errors import AtlasOverflowError

_BITS_PER_BYTE = 8
_BIT_MASKS = tuple(0x80 >> i for i in range(_BITS_PER_BYTE))


class Atlas:
    """
    Texture canvas.

    Args:
        width: Canvas width in pixels (fixed)
        height: Initial canvas height in pixels
        depth: Bits per pixel, 1 or 8
    """

    def __init__(self, width: int, height: int, depth: int = 8):
        if depth not in (1, 8):
            raise ValueError("depth must be 1 or 8")
        if width <= 0 or height < 0:
            raise ValueError(f"invalid atlas size {width}x{height}")

        self._width = width
        self._height = height
        self._depth = depth
        self._row_bytes = (width + 7) // 8 if depth == 1 else width
        self._buffer = bytearray(self._row_bytes * height)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def width(self) -> int: return self._width

    @property
    def height(self) -> int: return self._height

    @property
    def depth(self) -> int: return self._depth

    @property
    def row_bytes(self) -> int: return self._row_bytes

    @property
    def buffer(self) -> bytearray: return self._buffer

    # =========================================================================
    # Buffer Ops
    # =========================================================================

    def grow(self, height: int) -> None:
        """Extend the canvas to at least height rows; never shrinks."""
        if height > self._height:
            self._buffer.extend(bytes(self._row_bytes * (height - self._height)))
            self._height = height

    def blit(self, data: bytes, w: int, h: int, x: int, y: int) -> None:
        """
        Copy a tightly packed glyph bitmap into the canvas at (x, y).

        Args:
            data: Bitmap in the canvas depth, rows packed without padding
            w: Bitmap width
            h: Bitmap height
            x: Left column in the canvas
            y: Top row in the canvas

        Raises:
            AtlasOverflowError: If the rectangle leaves the canvas
        """
        if x < 0 or y < 0 or x + w > self._width or y + h > self._height:
            raise AtlasOverflowError(
                f"{w}x{h} glyph at ({x}, {y}) outside {self._width}x{self._height} atlas")

        buf = self._buffer
        if self._depth == 8:
            for j in range(h):
                dst = (y + j) * self._row_bytes + x
                buf[dst:dst + w] = data[j * w:(j + 1) * w]
            return

        src_stride = (w + 7) // 8
        for j in range(h):
            row = (y + j) * self._row_bytes
            src = j * src_stride
            for i in range(w):
                if data[src + (i >> 3)] & _BIT_MASKS[i & 7]:
                    px = x + i
                    buf[row + (px >> 3)] |= _BIT_MASKS[px & 7]

    def get_pixel(self, x: int, y: int) -> int:
        """Pixel value: 0/1 in 1-bit mode, coverage byte in 8-bit mode."""
        if self._depth == 8:
            return self._buffer[y * self._row_bytes + x]
        return 1 if self._buffer[y * self._row_bytes + (x >> 3)] & _BIT_MASKS[x & 7] else 0

    def rows(self, height: int) -> bytes:
        """The first height rows of the canvas."""
        if height > self._height:
            raise AtlasOverflowError(f"{height} rows requested from {self._height}-row atlas")
        return bytes(self._buffer[:height * self._row_bytes])
