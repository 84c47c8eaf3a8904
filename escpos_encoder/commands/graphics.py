"""
Raster bit-image commands (GS v 0).

Contains the bit packer for 1 bpp bitmaps and the band framer. A single
GS v 0 command is limited by the printer's receive buffer, so tall images
are sent as consecutive bands of at most ``max_band_height`` rows.

Reference: ESC/POS Application Programming Guide, "Bit image"
Maximum band: 255 rows by default (TM-T88 safe value)
"""

import logging
from typing import Final, Iterator, List, Sequence

from escpos_encoder.exceptions import DimensionMismatch, InvalidRange

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_MAX_BAND_HEIGHT",
    "bytes_per_row",
    "pack_bits",
    "raster_band",
    "print_raster_image",
]

DEFAULT_MAX_BAND_HEIGHT: Final[int] = 255
_MAX_DIMENSION: Final[int] = 0xFFFF


def bytes_per_row(width: int) -> int:
    return (width + 7) // 8


def pack_bits(bits: Sequence[int], width: int, height: int) -> bytes:
    """
    Pack a row-major 0/1 bitmap into raster bytes.

    Data Format:
        Bit 7 (MSB) = leftmost pixel of each byte
        1 = print dot (black), 0 = no dot (white)
        Each row is padded with white bits to a whole byte.

    Args:
        bits: ``width * height`` values, 1 for black.
        width: Pixels per row.
        height: Number of rows.

    Returns:
        ``bytes_per_row(width) * height`` bytes.

    Raises:
        DimensionMismatch: If len(bits) != width * height.

    Example:
        >>> pack_bits([1, 0, 1, 0, 1, 0, 1, 0, 1], 9, 1).hex(" ")
        'aa 80'
    """
    if len(bits) != width * height:
        raise DimensionMismatch(
            f"Bitmap has {len(bits)} pixels, expected {width}x{height}", len(bits)
        )
    row_bytes = bytes_per_row(width)
    out = bytearray(row_bytes * height)
    for y in range(height):
        row_start = y * width
        base = y * row_bytes
        for x in range(width):
            if bits[row_start + x]:
                out[base + (x >> 3)] |= 0x80 >> (x & 7)
    return bytes(out)


def raster_band(data: bytes, width_bytes: int, height: int) -> bytes:
    """
    Generate one GS v 0 command.

    Command: GS v 0 m xL xH yL yH d1...dk
    Hex: 1D 76 30 00 xL xH yL yH data
    Mode: m = 0 (normal density)

    Args:
        data: Packed raster rows.
        width_bytes: Row width in bytes (x).
        height: Rows in this band (y).

    Raises:
        InvalidRange: If a dimension does not fit in 16 bits.
        DimensionMismatch: If data length differs from width_bytes * height.
    """
    if not 1 <= width_bytes <= _MAX_DIMENSION or not 1 <= height <= _MAX_DIMENSION:
        raise InvalidRange(
            f"Raster size must be 1-{_MAX_DIMENSION} in both axes, got {width_bytes}x{height}"
        )
    if len(data) != width_bytes * height:
        raise DimensionMismatch(
            f"Raster data is {len(data)} bytes, expected {width_bytes * height}", len(data)
        )
    return (
        b"\x1dv0\x00"
        + bytes([width_bytes & 0xFF, width_bytes >> 8, height & 0xFF, height >> 8])
        + data
    )


def _bands(height: int, max_band_height: int) -> Iterator[tuple[int, int]]:
    for top in range(0, height, max_band_height):
        yield top, min(max_band_height, height - top)


def print_raster_image(
    packed: bytes,
    width: int,
    height: int,
    max_band_height: int = DEFAULT_MAX_BAND_HEIGHT,
) -> bytes:
    """
    Frame a packed bitmap as one or more GS v 0 bands.

    Args:
        packed: Output of ``pack_bits`` for a ``width`` x ``height`` bitmap.
        width: Width in pixels.
        height: Height in pixels.
        max_band_height: Upper bound on rows per command.

    Returns:
        Concatenated band commands, top band first.

    Example:
        >>> cmd = print_raster_image(bytes(600), 8, 600)
        >>> cmd.count(b"\\x1dv0")
        3
    """
    if max_band_height < 1:
        raise InvalidRange(f"Band height must be positive, got {max_band_height}", max_band_height)
    row_bytes = bytes_per_row(width)
    frames: List[bytes] = []
    for top, rows in _bands(height, max_band_height):
        start = top * row_bytes
        frames.append(raster_band(packed[start : start + rows * row_bytes], row_bytes, rows))
    logger.debug("Raster %dx%d split into %d band(s)", width, height, len(frames))
    return b"".join(frames)
