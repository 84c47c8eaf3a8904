"""
Line feed and justification commands.

Reference: ESC/POS Application Programming Guide, "Print position"
"""

from typing import Final

from escpos_encoder.exceptions import InvalidOption

__all__ = [
    "LF",
    "CR",
    "NEWLINE",
    "ESC_ALIGN_LEFT",
    "ESC_ALIGN_CENTER",
    "ESC_ALIGN_RIGHT",
    "justify",
]

LF: Final[bytes] = b"\x0a"
CR: Final[bytes] = b"\x0d"

NEWLINE: Final[bytes] = LF + CR
"""
Print the line buffer and feed one line.

Command: LF CR
Hex: 0A 0D
Note: CR is ignored by printers with auto line feed disabled, which is the
      default for serial and USB models.
"""

# =============================================================================
# JUSTIFICATION
# =============================================================================

ESC_ALIGN_LEFT: Final[bytes] = b"\x1ba\x00"
"""
Left justification.

Command: ESC a 0
Hex: 1B 61 00
Effect: Applies to the whole line; only honoured at the start of a line.
"""

ESC_ALIGN_CENTER: Final[bytes] = b"\x1ba\x01"
ESC_ALIGN_RIGHT: Final[bytes] = b"\x1ba\x02"

_JUSTIFY: Final[tuple[bytes, ...]] = (ESC_ALIGN_LEFT, ESC_ALIGN_CENTER, ESC_ALIGN_RIGHT)


def justify(n: int) -> bytes:
    """
    Generate ESC a n.

    Args:
        n: 0 (left), 1 (center) or 2 (right).

    Raises:
        InvalidOption: If n is not 0, 1 or 2.
    """
    if n not in (0, 1, 2):
        raise InvalidOption(f"Justification must be 0, 1 or 2, got {n!r}", n)
    return _JUSTIFY[n]
