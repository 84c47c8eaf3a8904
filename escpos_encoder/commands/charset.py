"""
Character code table selection.

Command: ESC t n
Hex: 1B 74 n

The identifier n is printer-specific; the table used by the encoder lives in
escpos_encoder/codepages.py.
"""

from escpos_encoder.exceptions import InvalidRange

__all__ = ["select_codepage"]


def select_codepage(n: int) -> bytes:
    """
    Generate ESC t n.

    Args:
        n: Code table identifier, 0-255.

    Returns:
        Command bytes.

    Raises:
        InvalidRange: If n does not fit in one byte.

    Example:
        >>> select_codepage(0x13)
        b'\\x1bt\\x13'
    """
    if not 0 <= n <= 0xFF:
        raise InvalidRange(f"Code table must be 0-255, got {n}", n)
    return b"\x1bt" + bytes([n])
