"""
barcodegen

Value checks for 1D barcodes and QR payloads before they are framed.

Public API:
    - validate_barcode: charset, length and check-digit rules per symbology
    - barcode_payload: validated bytes for GS k (CODE128 gets its code set)
    - verify_check_digit: EAN13/EAN8/UPCA check digit via python-barcode
    - check_qr_capacity: QR fit test via qrcode

Dependencies:
    python-barcode, qrcode
"""

from escpos_encoder.barcodegen.validation import (
    barcode_payload,
    check_qr_capacity,
    validate_barcode,
    verify_check_digit,
)

__all__ = [
    "validate_barcode",
    "barcode_payload",
    "verify_check_digit",
    "check_qr_capacity",
]
