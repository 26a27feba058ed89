"""
Bitmap Normalization
====================
Re-strides rasterizer output into tightly packed row-major bytes.

Font libraries pad rows to an alignment of their choosing (pitch), may
store rows bottom-up (negative pitch), and may hand back a different
depth than requested. normalize() hides all of that:

- 1-bit output: ceil(width / 8) bytes per row, MSB first, bits past the
  logical width cleared
- 8-bit output: width bytes per row, one coverage value per pixel
"""

from ..raster.base import RasterBitmap

# =============================================================================
# Constants
# =============================================================================

_BITS_PER_BYTE = 8
_BYTE_MASK = 0xFF
_GRAY_ON = 0xFF

# Coverage at or above this counts as ink in 1-bit output
MONO_THRESHOLD = 128

_BIT_MASKS = tuple(0x80 >> i for i in range(_BITS_PER_BYTE))

# Mask keeping the first n pixels of a byte, MSB first
_TAIL_MASKS = tuple((_BYTE_MASK << (8 - n)) & _BYTE_MASK for n in range(_BITS_PER_BYTE + 1))


def row_bytes(width: int, depth: int) -> int:
    """Bytes per tightly packed row."""
    if depth == 1:
        return (width + 7) // 8
    return width


def _source_rows(bitmap: RasterBitmap):
    """Yield each source row, top to bottom, as pitch-wide slices."""
    pitch = abs(bitmap.pitch)
    buf = bitmap.buffer
    for j in range(bitmap.rows):
        src = j if bitmap.pitch >= 0 else bitmap.rows - 1 - j
        yield buf[src * pitch:(src + 1) * pitch]


def _mono_row(row: bytes, width: int) -> bytes:
    n = (width + 7) // 8
    out = bytearray(row[:n])
    if len(out) < n:
        raise ValueError(f"row holds {len(out)} bytes, {n} needed for width {width}")
    tail = width & 7
    if tail:
        out[-1] &= _TAIL_MASKS[tail]
    return bytes(out)


def _gray_row(row: bytes, width: int) -> bytes:
    out = bytes(row[:width])
    if len(out) < width:
        raise ValueError(f"row holds {len(out)} bytes, {width} needed")
    return out


def _mono_to_gray(row: bytes, width: int) -> bytes:
    return bytes(_GRAY_ON if row[i >> 3] & _BIT_MASKS[i & 7] else 0 for i in range(width))


def _gray_to_mono(row: bytes, width: int) -> bytes:
    out = bytearray((width + 7) // 8)
    for i in range(width):
        if row[i] >= MONO_THRESHOLD:
            out[i >> 3] |= _BIT_MASKS[i & 7]
    return bytes(out)


def normalize(bitmap: RasterBitmap, depth: int) -> bytes:
    """
    Convert a rasterized bitmap to tightly packed rows.

    Args:
        bitmap: Rasterizer output with arbitrary pitch
        depth: Target bits per pixel (1 or 8)

    Returns:
        rows * row_bytes(width, depth) bytes

    Raises:
        ValueError: If depth is unsupported or the buffer is too short
    """
    if depth not in (1, 8) or bitmap.depth not in (1, 8):
        raise ValueError("depth must be 1 or 8")
    if bitmap.width == 0 or bitmap.rows == 0:
        return b""

    src_bytes = row_bytes(bitmap.width, bitmap.depth)
    if abs(bitmap.pitch) < src_bytes:
        raise ValueError(f"pitch {bitmap.pitch} shorter than row width {src_bytes}")

    if bitmap.depth == 1:
        if depth == 1:
            convert = _mono_row
        else:
            convert = lambda row, w: _mono_to_gray(_mono_row(row, w), w)
    else:
        convert = _gray_row if depth == 8 else _gray_to_mono

    out = bytearray()
    for row in _source_rows(bitmap):
        out.extend(convert(row, bitmap.width))
    return bytes(out)


def get_pixel(data: bytes, width: int, depth: int, x: int, y: int) -> int:
    """
    Read one pixel from a tightly packed bitmap.

    Returns:
        0/1 for 1-bit data, the coverage byte for 8-bit data
    """
    if depth == 1:
        stride = (width + 7) // 8
        return 1 if data[y * stride + (x >> 3)] & _BIT_MASKS[x & 7] else 0
    return data[y * width + x]
