"""
model/enums.py

Closed enumerations for every option the encoder accepts as a name:
alignment, underline, font size, border style, barcode symbology, QR
error-correction level, dithering algorithm and cut mode.

NO command bytes are assembled here; protocol codes live on the members
only where the printer uses a one-byte parameter for them.

See Also:
    - escpos_encoder/commands (for protocol logic)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Type, TypeVar, Union

from escpos_encoder.exceptions import EncoderError, InvalidOption

_logger: Final[logging.Logger] = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# === DOMAINS ===


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @property
    def code(self) -> int:
        """Parameter n of ESC a n."""
        return {Alignment.LEFT: 0, Alignment.CENTER: 1, Alignment.RIGHT: 2}[self]

    def split(self, columns: int, width: int) -> tuple[int, int]:
        """Free columns before and after content of ``columns`` columns in a ``width`` field."""
        free = max(0, width - columns)
        if self is Alignment.RIGHT:
            return free, 0
        if self is Alignment.CENTER:
            return free // 2, free - free // 2
        return 0, free


class UnderlineMode(Enum):
    OFF = 0
    SINGLE = 1
    DOUBLE = 2


class FontSize(str, Enum):
    NORMAL = "normal"
    SMALL = "small"

    @property
    def code(self) -> int:
        """Parameter n of ESC M n (font A / font B)."""
        return 1 if self is FontSize.SMALL else 0


class BorderStyle(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


class Symbology(str, Enum):
    """
    Barcode symbologies printable with GS k, function B.

    Each member carries the type code m sent in GS k m n d1...dn.
    """

    UPCA = "upca"
    UPCE = "upce"
    EAN13 = "ean13"
    EAN8 = "ean8"
    CODE39 = "code39"
    ITF = "itf"
    CODABAR = "codabar"
    CODE93 = "code93"
    CODE128 = "code128"

    @property
    def type_code(self) -> int:
        return _SYMBOLOGY_CODES[self]


_SYMBOLOGY_CODES: Final[dict[Symbology, int]] = {
    Symbology.UPCA: 65,
    Symbology.UPCE: 66,
    Symbology.EAN13: 67,
    Symbology.EAN8: 68,
    Symbology.CODE39: 69,
    Symbology.ITF: 70,
    Symbology.CODABAR: 71,
    Symbology.CODE93: 72,
    Symbology.CODE128: 73,
}


class QRErrorLevel(str, Enum):
    L = "l"
    M = "m"
    Q = "q"
    H = "h"

    @property
    def code(self) -> int:
        """Parameter n of GS ( k <Function 169>: 48..51."""
        return 0x30 + "lmqh".index(self.value)


class DitheringAlgorithm(str, Enum):
    THRESHOLD = "threshold"
    BAYER = "bayer"
    FLOYD_STEINBERG = "floydsteinberg"
    ATKINSON = "atkinson"


class CutMode(str, Enum):
    FULL = "full"
    PARTIAL = "partial"

    @property
    def code(self) -> int:
        """Parameter m of GS V m."""
        return 1 if self is CutMode.PARTIAL else 0


class Overflow(str, Enum):
    """What a width-bound sub-encoder does with text past its last column."""

    CLIP = "clip"
    WRAP = "wrap"


DEFAULT_ALIGNMENT: Final[Alignment] = Alignment.LEFT
DEFAULT_FONT_SIZE: Final[FontSize] = FontSize.NORMAL
DEFAULT_BORDER_STYLE: Final[BorderStyle] = BorderStyle.SINGLE
DEFAULT_QR_ERROR_LEVEL: Final[QRErrorLevel] = QRErrorLevel.M
DEFAULT_DITHERING_ALGORITHM: Final[DitheringAlgorithm] = DitheringAlgorithm.THRESHOLD
DEFAULT_CUT_MODE: Final[CutMode] = CutMode.FULL


def parse_enum(
    enum_cls: Type[E],
    value: Union[E, str],
    error_cls: Type[EncoderError] = InvalidOption,
    what: str = "",
) -> E:
    """
    Convert a member or its string value into a member of ``enum_cls``.

    String lookup is case-insensitive.

    Raises:
        error_cls: If ``value`` names no member.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        needle = value.strip().lower()
        for member in enum_cls:
            if isinstance(member.value, str) and member.value == needle:
                return member
    allowed = ", ".join(str(m.value) for m in enum_cls)
    label = what or enum_cls.__name__
    _logger.debug("Rejected %s value %r", label, value)
    raise error_cls(f"{label} must be one of: {allowed}; got {value!r}", value)


def to_underline_mode(value: Union[UnderlineMode, bool, int]) -> UnderlineMode:
    """
    Map an underline argument to a mode.

    ``False``/``True`` select off/single and the number 2 selects double.
    Any other number is rejected.

    Raises:
        InvalidOption: For any other value.
    """
    if isinstance(value, UnderlineMode):
        return value
    if isinstance(value, bool):
        return UnderlineMode.SINGLE if value else UnderlineMode.OFF
    if isinstance(value, int) and value == 2:
        return UnderlineMode.DOUBLE
    _logger.debug("Rejected underline value %r", value)
    raise InvalidOption(f"Underline must be True, False or 2; got {value!r}", value)


__all__ = [
    "Alignment",
    "UnderlineMode",
    "FontSize",
    "BorderStyle",
    "Symbology",
    "QRErrorLevel",
    "DitheringAlgorithm",
    "CutMode",
    "Overflow",
    "DEFAULT_ALIGNMENT",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_BORDER_STYLE",
    "DEFAULT_QR_ERROR_LEVEL",
    "DEFAULT_DITHERING_ALGORITHM",
    "DEFAULT_CUT_MODE",
    "parse_enum",
    "to_underline_mode",
]
