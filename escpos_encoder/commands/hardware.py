"""
Printer control commands: initialization, paper cut and cash drawer pulse.

Reference: ESC/POS Application Programming Guide, "Miscellaneous"
"""

from typing import Final

from escpos_encoder.exceptions import InvalidOption, InvalidRange

__all__ = [
    "ESC_INIT",
    "GS_CUT_FULL",
    "GS_CUT_PARTIAL",
    "MAX_PULSE_UNITS",
    "cut",
    "pulse",
    "ms_to_pulse_units",
]

ESC_INIT: Final[bytes] = b"\x1b@"
"""
Initialize printer.

Command: ESC @
Hex: 1B 40
Effect: Clears the print buffer and resets every mode to its power-on
        default (code table 0, no emphasis, 1x1 size, left justification).
Note: Does not clear the receive buffer.
"""

# =============================================================================
# PAPER CUT
# =============================================================================

GS_CUT_FULL: Final[bytes] = b"\x1dV\x00"
"""
Full cut.

Command: GS V 0
Hex: 1D 56 00
"""

GS_CUT_PARTIAL: Final[bytes] = b"\x1dV\x01"
"""
Partial cut (one point left uncut).

Command: GS V 1
Hex: 1D 56 01
"""


def cut(m: int) -> bytes:
    if m not in (0, 1):
        raise InvalidOption(f"Cut mode must be 0 or 1, got {m!r}", m)
    return GS_CUT_PARTIAL if m else GS_CUT_FULL


# =============================================================================
# CASH DRAWER PULSE
# =============================================================================

MAX_PULSE_UNITS: Final[int] = 255


def ms_to_pulse_units(ms: int) -> int:
    """
    Convert milliseconds to the 2 ms units of ESC p, rounding half up.

    Raises:
        InvalidRange: If ms is negative.

    Example:
        >>> ms_to_pulse_units(100), ms_to_pulse_units(5), ms_to_pulse_units(9999)
        (50, 3, 255)
    """
    if ms < 0:
        raise InvalidRange(f"Pulse time must be non-negative, got {ms}", ms)
    return min(MAX_PULSE_UNITS, (int(ms) + 1) // 2)


def pulse(device: int, on_ms: int, off_ms: int) -> bytes:
    """
    Generate a drawer kick pulse.

    Command: ESC p m t1 t2
    Hex: 1B 70 m t1 t2

    Args:
        device: Drawer kick-out connector pin, 0 (pin 2) or 1 (pin 5).
        on_ms: ON time in milliseconds.
        off_ms: OFF time in milliseconds.

    Returns:
        Command bytes.

    Raises:
        InvalidOption: If device is not 0 or 1.
        InvalidRange: If a time is negative.
    """
    if isinstance(device, bool) or device not in (0, 1):
        raise InvalidOption(f"Pulse device must be 0 or 1, got {device!r}", device)
    t1 = ms_to_pulse_units(on_ms)
    t2 = ms_to_pulse_units(off_ms)
    return b"\x1bp" + bytes([device, t1, t2])
