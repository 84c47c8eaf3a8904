"""
Value checks for 1D barcodes and QR payloads.

Barcode values are checked against the symbology's charset and length
rules before they are framed for GS k; EAN13, EAN8 and UPC-A check digits
are verified with python-barcode. QR payloads are fitted with the qrcode
library so an oversized payload is rejected before any command is built.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Final, FrozenSet

import barcode as pybarcode
import qrcode
from barcode.errors import BarcodeError
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)
from qrcode.exceptions import DataOverflowError

from escpos_encoder.commands.barcode import MAX_BARCODE_DATA
from escpos_encoder.exceptions import InvalidBarcodeValue, QRCodeOverflow
from escpos_encoder.model.enums import QRErrorLevel, Symbology

logger = logging.getLogger(__name__)

__all__ = [
    "validate_barcode",
    "barcode_payload",
    "verify_check_digit",
    "check_qr_capacity",
]

_DIGITS: Final[FrozenSet[str]] = frozenset("0123456789")
_CODE39_CHARS: Final[FrozenSet[str]] = frozenset("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./")
_CODABAR_CHARS: Final[FrozenSet[str]] = frozenset("0123456789ABCD$+-./:")
_CODABAR_GUARDS: Final[FrozenSet[str]] = frozenset("ABCD")

CODE128_SET_B: Final[str] = "{B"

# symbology -> (python-barcode class name, length that carries a check digit)
_CHECKED: Final[Dict[Symbology, tuple[str, int]]] = {
    Symbology.EAN13: ("ean13", 13),
    Symbology.EAN8: ("ean8", 8),
    Symbology.UPCA: ("upca", 12),
}

_QR_LEVELS: Final[Dict[QRErrorLevel, int]] = {
    QRErrorLevel.L: ERROR_CORRECT_L,
    QRErrorLevel.M: ERROR_CORRECT_M,
    QRErrorLevel.Q: ERROR_CORRECT_Q,
    QRErrorLevel.H: ERROR_CORRECT_H,
}

# model -> largest symbol version
_QR_MAX_VERSION: Final[Dict[int, int]] = {1: 14, 2: 40}


def _reject(symbology: Symbology, value: str, reason: str) -> InvalidBarcodeValue:
    logger.debug("Rejected %s value %r: %s", symbology.value, value, reason)
    return InvalidBarcodeValue(f"{symbology.name} {reason}, got {value!r}", value)


def _digits(symbology: Symbology, value: str, lengths: tuple[int, ...]) -> None:
    if not value or not set(value) <= _DIGITS:
        raise _reject(symbology, value, "requires digits only")
    if len(value) not in lengths:
        allowed = ", ".join(str(n) for n in lengths)
        raise _reject(symbology, value, f"must be {allowed} digits")


def verify_check_digit(symbology: Symbology, value: str) -> None:
    """
    Compare the trailing check digit of ``value`` with python-barcode's.

    Only values of full length (13 for EAN13, 8 for EAN8, 12 for UPCA) are
    checked; shorter values leave the check digit to the printer.

    Raises:
        InvalidBarcodeValue: On a wrong check digit or a value python-barcode rejects.
    """
    spec = _CHECKED.get(symbology)
    if spec is None:
        return
    name, full_length = spec
    if len(value) != full_length:
        return
    try:
        bclass = pybarcode.get_barcode_class(name)
        expected = bclass(value[:-1]).get_fullcode()
    except BarcodeError as e:
        raise _reject(symbology, value, str(e)) from e
    if expected[-1] != value[-1]:
        raise _reject(symbology, value, f"has check digit {value[-1]}, expected {expected[-1]}")


def _validate_codabar(value: str) -> None:
    sym = Symbology.CODABAR
    if len(value) < 2:
        raise _reject(sym, value, "needs a start and a stop character")
    if not set(value) <= _CODABAR_CHARS:
        raise _reject(sym, value, "supports only 0-9, A-D and $+-./:")
    if value[0] not in _CODABAR_GUARDS or value[-1] not in _CODABAR_GUARDS:
        raise _reject(sym, value, "must start and end with one of A, B, C, D")


def _validate_ascii(symbology: Symbology, value: str, max_length: int) -> None:
    if not value:
        raise _reject(symbology, value, "requires at least one character")
    if any(ord(ch) > 0x7F for ch in value):
        raise _reject(symbology, value, "supports only ASCII characters")
    if len(value) > max_length:
        raise _reject(symbology, value, f"is limited to {max_length} characters")


def _validate_code39(value: str) -> None:
    if not value or not set(value) <= _CODE39_CHARS:
        raise _reject(Symbology.CODE39, value, "supports only 0-9, A-Z, space and $%*+-./")


def _validate_itf(value: str) -> None:
    if not value or not set(value) <= _DIGITS:
        raise _reject(Symbology.ITF, value, "requires digits only")
    if len(value) % 2:
        raise _reject(Symbology.ITF, value, "requires an even number of digits")


_VALIDATORS: Final[Dict[Symbology, Callable[[str], None]]] = {
    Symbology.UPCA: lambda v: _digits(Symbology.UPCA, v, (11, 12)),
    Symbology.UPCE: lambda v: _digits(Symbology.UPCE, v, (6, 7, 8, 11, 12)),
    Symbology.EAN13: lambda v: _digits(Symbology.EAN13, v, (12, 13)),
    Symbology.EAN8: lambda v: _digits(Symbology.EAN8, v, (7, 8)),
    Symbology.CODE39: _validate_code39,
    Symbology.ITF: _validate_itf,
    Symbology.CODABAR: _validate_codabar,
    Symbology.CODE93: lambda v: _validate_ascii(Symbology.CODE93, v, MAX_BARCODE_DATA),
    Symbology.CODE128: lambda v: _validate_ascii(
        Symbology.CODE128, v, MAX_BARCODE_DATA - (0 if v.startswith("{") else len(CODE128_SET_B))
    ),
}


def validate_barcode(value: str, symbology: Symbology) -> None:
    """
    Validate a barcode value against its symbology's charset and length rules.

    Raises:
        InvalidBarcodeValue: If the value is not a string or violates a rule.
    """
    if not isinstance(value, str):
        raise InvalidBarcodeValue(f"Barcode value must be a string, got {type(value).__name__}", value)
    _VALIDATORS[symbology](value)
    verify_check_digit(symbology, value)


def barcode_payload(value: str, symbology: Symbology) -> bytes:
    """
    Validate and return the bytes sent after GS k m n.

    CODE128 values are prefixed with ``{B`` (code set B) unless they already
    start with a code set selector.

    Example:
        >>> barcode_payload("Hello", Symbology.CODE128)
        b'{BHello'
    """
    validate_barcode(value, symbology)
    data = value.encode("ascii")
    if symbology is Symbology.CODE128 and not value.startswith("{"):
        data = CODE128_SET_B.encode("ascii") + data
    return data


def check_qr_capacity(payload: bytes, level: QRErrorLevel, model: int = 2) -> int:
    """
    Fit ``payload`` into a QR symbol with the qrcode library.

    Model 1 symbols stop at version 14; the per-version capacity is the
    model 2 one.

    Args:
        payload: Encoded symbol data.
        level: Error correction level.
        model: QR model, 1 or 2.

    Returns:
        The smallest symbol version the payload fits in.

    Raises:
        QRCodeOverflow: If no version of the model can hold the payload at this level.
    """
    max_version = _QR_MAX_VERSION.get(model, _QR_MAX_VERSION[2])
    qr = qrcode.QRCode(error_correction=_QR_LEVELS[level])
    qr.add_data(payload)
    try:
        qr.make(fit=True)
    except DataOverflowError as e:
        logger.debug("QR payload of %d bytes overflows at level %s", len(payload), level.name)
        raise QRCodeOverflow(
            f"QR payload of {len(payload)} bytes does not fit at error level {level.name}",
            len(payload),
        ) from e
    if qr.version > max_version:
        logger.debug("QR payload needs version %d; model %d stops at %d", qr.version, model, max_version)
        raise QRCodeOverflow(
            f"QR payload of {len(payload)} bytes needs version {qr.version}, "
            f"model {model} stops at version {max_version}",
            len(payload),
        )
    return qr.version
