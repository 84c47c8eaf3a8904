"""
Exceptions raised by the ESC/POS encoder.

Every builder call validates its arguments before touching the command
buffer, so catching one of these leaves the session usable and its output
unchanged.

Hierarchy:
    EncoderError (base, also a ValueError)
    ├── UnknownCodepage
    ├── InvalidRange
    ├── InvalidOption
    ├── ColumnOverflow
    ├── InvalidDimensions
    ├── DimensionMismatch
    ├── UnsupportedAlgorithm
    ├── InvalidBarcodeValue
    ├── UnknownSymbology
    └── QRCodeOverflow

Example:
    >>> from escpos_encoder import EscPosEncoder
    >>> from escpos_encoder.exceptions import EncoderError
    >>> encoder = EscPosEncoder()
    >>> try:
    ...     encoder.width(9)
    ... except EncoderError as e:
    ...     print(e)
    Width must be between 1 and 8, got 9
"""

from __future__ import annotations

from typing import Any, Optional

__all__: list[str] = [
    "EncoderError",
    "UnknownCodepage",
    "InvalidRange",
    "InvalidOption",
    "ColumnOverflow",
    "InvalidDimensions",
    "DimensionMismatch",
    "UnsupportedAlgorithm",
    "InvalidBarcodeValue",
    "UnknownSymbology",
    "QRCodeOverflow",
]


class EncoderError(ValueError):
    """
    Base class for all encoder validation errors.

    Attributes:
        value: The offending argument, when there is a single one.
    """

    def __init__(self, message: str, value: Optional[Any] = None) -> None:
        super().__init__(message)
        self.value = value


class UnknownCodepage(EncoderError):
    """Codepage name is not in the codepage table."""


class InvalidRange(EncoderError):
    """Numeric argument outside its documented range."""


class InvalidOption(EncoderError):
    """Enumerated argument outside its allowed set."""


class ColumnOverflow(EncoderError):
    """Table row has more cells than declared columns."""


class InvalidDimensions(EncoderError):
    """Box margins and padding leave no room for content."""


class DimensionMismatch(EncoderError):
    """Pixel source size does not match the requested image size."""


class UnsupportedAlgorithm(EncoderError):
    """Unknown dithering algorithm name."""


class InvalidBarcodeValue(EncoderError):
    """Barcode value violates the symbology's charset, length or check digit."""


class UnknownSymbology(EncoderError):
    """Barcode symbology is not supported by the printer."""


class QRCodeOverflow(EncoderError):
    """QR payload does not fit in the largest symbol at the chosen error level."""
