"""
QR Code commands (GS ( k, cn = 49).

A QR symbol is printed with five functions sent in this order:

    Function 165  select model        1D 28 6B 04 00 31 41 n1 00
    Function 167  module size         1D 28 6B 03 00 31 43 n
    Function 169  error correction    1D 28 6B 03 00 31 45 n
    Function 180  store data          1D 28 6B pL pH 31 50 30 d1...dk
    Function 181  print stored data   1D 28 6B 03 00 31 51 30

pL pH count the bytes after themselves (cn, fn, m and the data), so a store
frame carrying k data bytes declares k + 3. Payloads longer than
``MAX_STORE_CHUNK`` are split over several store frames in order.

Reference: ESC/POS Application Programming Guide, "Two-dimensional code"
"""

import logging
from typing import Final, List

from escpos_encoder.exceptions import InvalidOption, InvalidRange

logger = logging.getLogger(__name__)

__all__ = [
    "QR_PRINT",
    "STORE_HEADER_SIZE",
    "MAX_STORE_CHUNK",
    "select_model",
    "module_size",
    "error_correction",
    "store_data",
    "chunk_payload",
    "symbol_header",
    "store_and_print",
    "print_qr",
]

_GS_K: Final[bytes] = b"\x1d(k"

STORE_HEADER_SIZE: Final[int] = 3
"""cn fn m bytes counted by pL pH in Function 180."""

MAX_STORE_CHUNK: Final[int] = 255 - STORE_HEADER_SIZE

QR_PRINT: Final[bytes] = _GS_K + b"\x03\x001Q0"
"""
Print the symbol in the storage area.

Command: GS ( k 3 0 49 81 48
Hex: 1D 28 6B 03 00 31 51 30
"""


def select_model(model: int) -> bytes:
    """
    Function 165: 1D 28 6B 04 00 31 41 n1 00, n1 = 0x31 (model 1) or 0x32 (model 2).

    Raises:
        InvalidOption: If model is not 1 or 2.
    """
    if isinstance(model, bool) or model not in (1, 2):
        raise InvalidOption(f"QR model must be 1 or 2, got {model!r}", model)
    return _GS_K + b"\x04\x001A" + bytes([0x30 + model, 0x00])


def module_size(size: int) -> bytes:
    """Function 167: module size in dots, 1-8 on receipt printers."""
    if isinstance(size, bool) or not isinstance(size, int) or not 1 <= size <= 8:
        raise InvalidRange(f"QR size must be between 1 and 8, got {size!r}", size)
    return _GS_K + b"\x03\x001C" + bytes([size])


def error_correction(code: int) -> bytes:
    """Function 169: n = 0x30 (L), 0x31 (M), 0x32 (Q), 0x33 (H)."""
    if not 0x30 <= code <= 0x33:
        raise InvalidOption(f"QR error correction code must be 48-51, got {code!r}", code)
    return _GS_K + b"\x03\x001E" + bytes([code])


def chunk_payload(payload: bytes, limit: int = MAX_STORE_CHUNK) -> List[bytes]:
    """
    Split a payload into consecutive pieces of at most ``limit`` bytes.

    Example:
        >>> [len(c) for c in chunk_payload(b"x" * 600)]
        [252, 252, 96]
    """
    return [payload[i : i + limit] for i in range(0, len(payload), limit)]


def store_data(chunk: bytes) -> bytes:
    """
    Function 180 for one chunk.

    Command: GS ( k pL pH 49 80 48 d1...dk
    Hex: 1D 28 6B pL pH 31 50 30 data
    """
    if len(chunk) > MAX_STORE_CHUNK:
        raise InvalidRange(
            f"QR store chunk must be at most {MAX_STORE_CHUNK} bytes, got {len(chunk)}",
            len(chunk),
        )
    length = len(chunk) + STORE_HEADER_SIZE
    return _GS_K + bytes([length & 0xFF, (length >> 8) & 0xFF]) + b"1P0" + chunk


def symbol_header(model: int, size: int, error_code: int) -> bytes:
    """Functions 165, 167 and 169 in protocol order."""
    return select_model(model) + module_size(size) + error_correction(error_code)


def store_and_print(payload: bytes) -> bytes:
    """Function 180 frames for every chunk of ``payload``, then Function 181."""
    chunks = chunk_payload(payload)
    logger.debug("QR payload %d bytes in %d store frame(s)", len(payload), len(chunks))
    return b"".join(store_data(chunk) for chunk in chunks) + QR_PRINT


def print_qr(payload: bytes, model: int, size: int, error_code: int) -> bytes:
    """
    Build the complete QR sequence: model, size, error level, stores, print.

    Args:
        payload: Encoded symbol data.
        model: 1 or 2.
        size: Module size 1-8.
        error_code: Function 169 parameter (0x30-0x33).

    Returns:
        Command bytes.
    """
    return symbol_header(model, size, error_code) + store_and_print(payload)
