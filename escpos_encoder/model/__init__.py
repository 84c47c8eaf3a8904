"""
Domain models: option enumerations and layout descriptors.

See Also:
    - escpos_encoder/model/enums.py
    - escpos_encoder/model/table.py
"""

from escpos_encoder.model.enums import (
    Alignment,
    BorderStyle,
    CutMode,
    DitheringAlgorithm,
    FontSize,
    Overflow,
    QRErrorLevel,
    Symbology,
    UnderlineMode,
)
from escpos_encoder.model.table import BorderChars, BoxOptions, CellStyle, ColumnSpec

__all__ = [
    "Alignment",
    "BorderStyle",
    "CutMode",
    "DitheringAlgorithm",
    "FontSize",
    "Overflow",
    "QRErrorLevel",
    "Symbology",
    "UnderlineMode",
    "BorderChars",
    "BoxOptions",
    "CellStyle",
    "ColumnSpec",
]
