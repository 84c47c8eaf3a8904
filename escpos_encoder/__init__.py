"""
ESC/POS Encoder
===============

Builds byte-exact ESC/POS command streams for thermal receipt printers.

This package provides:
    - A fluent, chainable builder (``EscPosEncoder``)
    - Text in 28 single-byte codepages with per-character substitution
    - Bold, italic, underline, reverse, magnification, font and justification
    - Fixed-width tables, bordered boxes and horizontal rules
    - 1D barcodes (GS k) with check-digit validation and QR Codes (GS ( k)
    - Raster images (GS v 0) with threshold, Bayer, Floyd-Steinberg and
      Atkinson dithering
    - Paper cut, cash drawer pulse and raw bytes

Sending the bytes to a printer is up to the caller.

Basic usage:
    >>> from escpos_encoder import EscPosEncoder
    >>> data = EscPosEncoder().initialize().line("Hello").cut().encode()
    >>> data[:2]
    b'\\x1b@'

Logging:
    >>> import os
    >>> os.environ['ESCPOS_LOG_LEVEL'] = 'DEBUG'   # before import
    >>> os.environ['ESCPOS_LOG_DIR'] = 'logs'      # optional rotating file log

Python: 3.11+
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Dict

from escpos_encoder.codepages import CODEPAGES, Codepage, resolve, supported_codepages
from escpos_encoder.config import DEFAULT_CONFIG, check_config, load_config
from escpos_encoder.encoder import EscPosEncoder
from escpos_encoder.exceptions import (
    ColumnOverflow,
    DimensionMismatch,
    EncoderError,
    InvalidBarcodeValue,
    InvalidDimensions,
    InvalidOption,
    InvalidRange,
    QRCodeOverflow,
    UnknownCodepage,
    UnknownSymbology,
    UnsupportedAlgorithm,
)
from escpos_encoder.imaging.pixels import PixelSource
from escpos_encoder.model.enums import (
    Alignment,
    BorderStyle,
    CutMode,
    DitheringAlgorithm,
    FontSize,
    QRErrorLevel,
    Symbology,
    UnderlineMode,
)
from escpos_encoder.model.table import BoxOptions, CellStyle, ColumnSpec

# =============================================================================
# VERSION METADATA
# =============================================================================

__version__ = "0.1.0"
__description__ = "ESC/POS command encoder for thermal receipt printers"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

_PACKAGE_LOGGER = "escpos_encoder"

# =============================================================================
# LOGGING
# =============================================================================


def _setup_logging() -> None:
    """
    Configure the package logger once.

    - stderr handler for WARNING and above
    - rotating file handler (10 MB x 5) when ESCPOS_LOG_DIR is set

    The level comes from ESCPOS_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR,
    CRITICAL; default INFO). Repeated calls have no effect.
    """
    log_level_str = os.environ.get("ESCPOS_LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    log_dir_env = os.environ.get("ESCPOS_LOG_DIR")
    if log_dir_env:
        try:
            log_dir = Path(log_dir_env)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "escpos_encoder.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning("File logging disabled: %s", e)

    package_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Return a logger inside the ``escpos_encoder`` namespace.

    Example:
        >>> get_logger("receipts").name
        'escpos_encoder.receipts'
        >>> get_logger("escpos_encoder.layout").name
        'escpos_encoder.layout'
    """
    if module_name.startswith(_PACKAGE_LOGGER):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{_PACKAGE_LOGGER}.main")
    return logging.getLogger(f"{_PACKAGE_LOGGER}.{module_name.lstrip('.')}")


def check_dependencies() -> Dict[str, bool]:
    """Report which third-party libraries can be imported."""
    dependencies: Dict[str, bool] = {}
    for name, module in (("pillow", "PIL"), ("qrcode", "qrcode"), ("python-barcode", "barcode")):
        try:
            __import__(module)
            dependencies[name] = True
        except ImportError:
            dependencies[name] = False
    return dependencies


_setup_logging()

__all__ = [
    "__version__",
    "EscPosEncoder",
    "PixelSource",
    "ColumnSpec",
    "CellStyle",
    "BoxOptions",
    "Alignment",
    "BorderStyle",
    "CutMode",
    "DitheringAlgorithm",
    "FontSize",
    "QRErrorLevel",
    "Symbology",
    "UnderlineMode",
    "Codepage",
    "CODEPAGES",
    "resolve",
    "supported_codepages",
    "DEFAULT_CONFIG",
    "load_config",
    "check_config",
    "get_logger",
    "check_dependencies",
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
