"""
Image pipeline: pixel source, greyscale, dithering.

Packing and band framing live in escpos_encoder/commands/graphics.py.
"""

from escpos_encoder.imaging.dither import DEFAULT_THRESHOLD, check_threshold, dither
from escpos_encoder.imaging.pixels import CHANNELS, PixelSource, to_greyscale

__all__ = [
    "PixelSource",
    "CHANNELS",
    "to_greyscale",
    "dither",
    "check_threshold",
    "DEFAULT_THRESHOLD",
]
