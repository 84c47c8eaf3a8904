"""
Barcode printing commands (GS h, GS k function B).

Contains the height selector and the length-prefixed print command. Value
validation per symbology lives in escpos_encoder/barcodegen/validation.py;
the builders here check only what the frame itself requires.

Reference: ESC/POS Application Programming Guide, "Bar code"
Compatibility: Epson TM-T20/T70/T88 and compatible thermal printers
"""

from typing import Final, Optional

from escpos_encoder.exceptions import InvalidBarcodeValue, InvalidRange

__all__ = [
    "MAX_BARCODE_DATA",
    "set_barcode_height",
    "print_barcode",
]

MAX_BARCODE_DATA: Final[int] = 255
"""Function B carries its length in a single byte."""


def set_barcode_height(height: int) -> bytes:
    """
    Generate GS h n.

    Command: GS h n
    Hex: 1D 68 n

    Args:
        height: Bar height in dots, 1-255.

    Raises:
        InvalidRange: If height is outside 1-255.
    """
    if isinstance(height, bool) or not isinstance(height, int) or not 1 <= height <= 255:
        raise InvalidRange(f"Barcode height must be 1-255, got {height!r}", height)
    return b"\x1dh" + bytes([height])


def print_barcode(type_code: int, data: bytes, height: Optional[int] = None) -> bytes:
    """
    Generate the barcode print sequence.

    Command: [GS h n] GS k m n d1...dn
    Hex: [1D 68 n] 1D 6B m n data

    Args:
        type_code: Symbology code m (65-73 for function B).
        data: Payload exactly as it is sent to the printer.
        height: Optional bar height in dots; emits GS h first when given.

    Returns:
        Command bytes.

    Raises:
        InvalidRange: If height is outside 1-255.
        InvalidBarcodeValue: If data is empty or longer than 255 bytes.

    Example:
        >>> print_barcode(69, b"ABC").hex(" ")
        '1d 6b 45 03 41 42 43'
    """
    if not data or len(data) > MAX_BARCODE_DATA:
        raise InvalidBarcodeValue(
            f"Barcode data must be 1-{MAX_BARCODE_DATA} bytes, got {len(data)}", data
        )
    prefix = set_barcode_height(height) if height is not None else b""
    return prefix + b"\x1dk" + bytes([type_code, len(data)]) + bytes(data)
