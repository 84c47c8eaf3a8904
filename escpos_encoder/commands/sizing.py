"""
Character size and font selection commands.

Contains GS ! (width/height magnification) and ESC M (font A/B). Both
factors of GS ! are always sent together, so changing one re-emits the
other's current value.

Reference: ESC/POS Application Programming Guide, "Print characters"
"""

from typing import Final

from escpos_encoder.exceptions import InvalidOption, InvalidRange

__all__ = [
    "GS_SIZE_NORMAL",
    "ESC_FONT_A",
    "ESC_FONT_B",
    "character_size",
    "select_font",
]

# =============================================================================
# CHARACTER SIZE
# =============================================================================

GS_SIZE_NORMAL: Final[bytes] = b"\x1d!\x00"
"""
Select 1x1 magnification.

Command: GS ! 0
Hex: 1D 21 00
"""


def character_size(width: int, height: int) -> bytes:
    """
    Generate GS ! n for the given magnification.

    Command: GS ! n
    Hex: 1D 21 n
    Encoding: n = (width - 1) << 4 | (height - 1)

    Args:
        width: Horizontal magnification, 1-8.
        height: Vertical magnification, 1-8.

    Returns:
        Command bytes.

    Raises:
        InvalidRange: If either factor is outside 1-8.

    Example:
        >>> character_size(2, 3).hex(" ")
        '1d 21 12'
    """
    for label, value in (("Width", width), ("Height", height)):
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 8:
            raise InvalidRange(f"{label} must be between 1 and 8, got {value!r}", value)
    return b"\x1d!" + bytes([((width - 1) << 4) | (height - 1)])


# =============================================================================
# FONT SELECTION
# =============================================================================

ESC_FONT_A: Final[bytes] = b"\x1bM\x00"
"""
Select character font A (12x24, normal size).

Command: ESC M 0
Hex: 1B 4D 00
"""

ESC_FONT_B: Final[bytes] = b"\x1bM\x01"
"""
Select character font B (9x17, small size).

Command: ESC M 1
Hex: 1B 4D 01
"""


def select_font(n: int) -> bytes:
    if n not in (0, 1):
        raise InvalidOption(f"Font must be 0 or 1, got {n!r}", n)
    return ESC_FONT_B if n else ESC_FONT_A
