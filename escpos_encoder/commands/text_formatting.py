"""
Text emphasis ESC/POS commands.

Contains commands for bold, italic, underline and white/black reverse
printing. Every builder emits the command for the requested value only; no
diff against previous state is taken.

Reference: ESC/POS Application Programming Guide, "Print characters"
Compatibility: Epson TM series and ESC/POS compatible thermal printers
"""

from typing import Final

from escpos_encoder.exceptions import InvalidOption

__all__ = [
    "ESC_BOLD_ON",
    "ESC_BOLD_OFF",
    "ESC_ITALIC_ON",
    "ESC_ITALIC_OFF",
    "ESC_UNDERLINE_ON",
    "ESC_UNDERLINE_DOUBLE",
    "ESC_UNDERLINE_OFF",
    "GS_INVERT_ON",
    "GS_INVERT_OFF",
    "bold",
    "italic",
    "underline",
    "invert",
]

# =============================================================================
# BOLD (EMPHASIZED) MODE
# =============================================================================

ESC_BOLD_ON: Final[bytes] = b"\x1bE\x01"
"""
Turn emphasized mode on.

Command: ESC E 1
Hex: 1B 45 01
Reset: Cancelled by ESC E 0 or ESC @
"""

ESC_BOLD_OFF: Final[bytes] = b"\x1bE\x00"
"""
Turn emphasized mode off.

Command: ESC E 0
Hex: 1B 45 00
"""

# =============================================================================
# ITALIC MODE
# =============================================================================

ESC_ITALIC_ON: Final[bytes] = b"\x1b4\x01"
"""
Turn italic mode on.

Command: ESC 4 1
Hex: 1B 34 01
Limitation: Not supported by every thermal head; ignored where absent.
"""

ESC_ITALIC_OFF: Final[bytes] = b"\x1b4\x00"

# =============================================================================
# UNDERLINE
# =============================================================================

ESC_UNDERLINE_ON: Final[bytes] = b"\x1b-\x01"
"""
Turn 1-dot underline on.

Command: ESC - 1
Hex: 1B 2D 01
"""

ESC_UNDERLINE_DOUBLE: Final[bytes] = b"\x1b-\x02"
"""
Turn 2-dot underline on.

Command: ESC - 2
Hex: 1B 2D 02
"""

ESC_UNDERLINE_OFF: Final[bytes] = b"\x1b-\x00"

# =============================================================================
# WHITE/BLACK REVERSE
# =============================================================================

GS_INVERT_ON: Final[bytes] = b"\x1dB\x01"
"""
Turn white/black reverse printing on.

Command: GS B 1
Hex: 1D 42 01
Effect: Characters print white on a black background
"""

GS_INVERT_OFF: Final[bytes] = b"\x1dB\x00"


def bold(on: bool) -> bytes:
    return ESC_BOLD_ON if on else ESC_BOLD_OFF


def italic(on: bool) -> bytes:
    return ESC_ITALIC_ON if on else ESC_ITALIC_OFF


def underline(mode: int) -> bytes:
    """
    Generate ESC - n.

    Args:
        mode: 0 (off), 1 (single) or 2 (double).

    Returns:
        Command bytes.

    Raises:
        InvalidOption: If mode is not 0, 1 or 2.

    Example:
        >>> underline(2)
        b'\\x1b-\\x02'
    """
    if mode not in (0, 1, 2):
        raise InvalidOption(f"Underline mode must be 0, 1 or 2, got {mode!r}", mode)
    return b"\x1b-" + bytes([mode])


def invert(on: bool) -> bytes:
    return GS_INVERT_ON if on else GS_INVERT_OFF
