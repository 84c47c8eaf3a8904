"""
Pixel source contract and greyscale conversion.

A ``PixelSource`` is the read-only input of the image pipeline: a width, a
height and a row-major buffer in one of three channel layouts. Decoding of
compressed formats is left to the caller; ``PixelSource.from_image`` accepts
an already-opened Pillow image.

Channel layouts:
    L     1 byte per pixel, 0 = black, 255 = white
    RGB   3 bytes per pixel, R G B
    RGBA  4 bytes per pixel, R G B A (canvas order, straight alpha)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Mapping, Union

from PIL import Image

from escpos_encoder.exceptions import DimensionMismatch, InvalidOption

logger = logging.getLogger(__name__)

__all__ = ["PixelSource", "CHANNELS", "to_greyscale"]

CHANNELS: Final[Mapping[str, int]] = {"L": 1, "RGB": 3, "RGBA": 4}

PixelData = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class PixelSource:
    width: int
    height: int
    data: PixelData
    mode: str = "RGBA"

    def __post_init__(self) -> None:
        if self.mode not in CHANNELS:
            raise InvalidOption(
                f"Pixel mode must be one of {', '.join(CHANNELS)}, got {self.mode!r}", self.mode
            )

    @property
    def channels(self) -> int:
        return CHANNELS[self.mode]

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelSource":
        """
        Wrap a Pillow image.

        Images in modes other than L, RGB and RGBA are converted to RGBA
        first, so palette transparency survives.
        """
        if img.mode not in CHANNELS:
            logger.debug("Converting %s image to RGBA", img.mode)
            img = img.convert("RGBA")
        return cls(img.width, img.height, img.tobytes(), img.mode)

    def check_size(self, width: int, height: int) -> None:
        """
        Require an exact match with the requested size and a complete buffer.

        Raises:
            DimensionMismatch: If the size differs or the buffer is short or long.
        """
        if (self.width, self.height) != (width, height):
            raise DimensionMismatch(
                f"Pixel source is {self.width}x{self.height}, requested {width}x{height}",
                (self.width, self.height),
            )
        expected = width * height * self.channels
        if len(self.data) != expected:
            raise DimensionMismatch(
                f"Pixel buffer holds {len(self.data)} bytes, {self.mode} {width}x{height} "
                f"needs {expected}",
                len(self.data),
            )

    def to_image(self) -> Image.Image:
        return Image.frombytes(self.mode, (self.width, self.height), bytes(self.data))


def to_greyscale(source: PixelSource) -> bytes:
    """
    Convert a pixel source to 8-bit luma, one byte per pixel, row-major.

    RGBA is composited over a white background first, so transparent pixels
    print as paper. Luma uses Pillow's ITU-R 601-2 transform
    (L = R * 299/1000 + G * 587/1000 + B * 114/1000).
    """
    img = source.to_image()
    if img.mode == "RGBA":
        background = Image.new("RGBA", img.size, (255, 255, 255, 255))
        img = Image.alpha_composite(background, img)
    if img.mode != "L":
        img = img.convert("L")
    return img.tobytes()
