"""
ESC/POS command constants and frame builders.

This package contains the low-level byte builders used by the encoder. Each
builder validates only what its own frame requires and returns ``bytes``;
none of them keeps state.

Module Structure:
    commands/
    ├── __init__.py             # This file (public API exports)
    ├── text_formatting.py      # Bold, italic, underline, reverse
    ├── sizing.py               # GS ! magnification, ESC M font
    ├── positioning.py          # LF CR, ESC a justification
    ├── charset.py              # ESC t code table
    ├── barcode.py              # GS h, GS k
    ├── qr.py                   # GS ( k QR Code functions
    ├── graphics.py             # Bit packing and GS v 0 bands
    └── hardware.py             # ESC @, GS V cut, ESC p pulse

Usage:
    >>> from escpos_encoder.commands import ESC_BOLD_ON, ESC_BOLD_OFF
    >>> command = ESC_BOLD_ON + b"Bold text" + ESC_BOLD_OFF
"""

from escpos_encoder.commands.barcode import print_barcode, set_barcode_height
from escpos_encoder.commands.charset import select_codepage
from escpos_encoder.commands.graphics import (
    DEFAULT_MAX_BAND_HEIGHT,
    pack_bits,
    print_raster_image,
    raster_band,
)
from escpos_encoder.commands.hardware import (
    ESC_INIT,
    GS_CUT_FULL,
    GS_CUT_PARTIAL,
    cut,
    pulse,
)
from escpos_encoder.commands.positioning import (
    ESC_ALIGN_CENTER,
    ESC_ALIGN_LEFT,
    ESC_ALIGN_RIGHT,
    NEWLINE,
    justify,
)
from escpos_encoder.commands.qr import MAX_STORE_CHUNK, QR_PRINT, print_qr
from escpos_encoder.commands.sizing import (
    ESC_FONT_A,
    ESC_FONT_B,
    character_size,
    select_font,
)
from escpos_encoder.commands.text_formatting import (
    ESC_BOLD_OFF,
    ESC_BOLD_ON,
    ESC_ITALIC_OFF,
    ESC_ITALIC_ON,
    ESC_UNDERLINE_DOUBLE,
    ESC_UNDERLINE_OFF,
    ESC_UNDERLINE_ON,
    GS_INVERT_OFF,
    GS_INVERT_ON,
)

__all__ = [
    "ESC_INIT",
    "NEWLINE",
    "ESC_BOLD_ON",
    "ESC_BOLD_OFF",
    "ESC_ITALIC_ON",
    "ESC_ITALIC_OFF",
    "ESC_UNDERLINE_ON",
    "ESC_UNDERLINE_DOUBLE",
    "ESC_UNDERLINE_OFF",
    "GS_INVERT_ON",
    "GS_INVERT_OFF",
    "ESC_FONT_A",
    "ESC_FONT_B",
    "ESC_ALIGN_LEFT",
    "ESC_ALIGN_CENTER",
    "ESC_ALIGN_RIGHT",
    "GS_CUT_FULL",
    "GS_CUT_PARTIAL",
    "QR_PRINT",
    "MAX_STORE_CHUNK",
    "DEFAULT_MAX_BAND_HEIGHT",
    "character_size",
    "select_font",
    "justify",
    "select_codepage",
    "set_barcode_height",
    "print_barcode",
    "print_qr",
    "pack_bits",
    "raster_band",
    "print_raster_image",
    "cut",
    "pulse",
]
