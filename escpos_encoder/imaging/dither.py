"""
Greyscale to 1 bpp conversion.

Every algorithm takes row-major 8-bit luma and returns a list with one
entry per pixel, 1 for a printed (black) dot and 0 for paper.

Algorithms:
    threshold       black when luma < threshold
    bayer           4x4 ordered dither
    floydsteinberg  error diffusion 7/16, 3/16, 5/16, 1/16 (Pillow)
    atkinson        1/8 of the error to six neighbours, 2/8 dropped

Only ``threshold`` uses the caller's threshold; the error-diffusion
algorithms quantise at mid-grey (128) and ``bayer`` uses its matrix.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Final, List, Sequence, Tuple

from PIL import Image

from escpos_encoder.exceptions import InvalidRange, UnsupportedAlgorithm
from escpos_encoder.model.enums import DitheringAlgorithm, parse_enum

logger = logging.getLogger(__name__)

__all__ = ["dither", "check_threshold", "DEFAULT_THRESHOLD", "MID_GREY", "BAYER_4X4"]

DEFAULT_THRESHOLD: Final[int] = 128
MID_GREY: Final[int] = 128

BAYER_4X4: Final[Tuple[Tuple[int, ...], ...]] = (
    (0, 8, 2, 10),
    (12, 4, 14, 6),
    (3, 11, 1, 9),
    (15, 7, 13, 5),
)

# (dx, dy, weight numerator) over a divisor of 8
_ATKINSON: Final[Tuple[Tuple[int, int, int], ...]] = (
    (1, 0, 1),
    (2, 0, 1),
    (-1, 1, 1),
    (0, 1, 1),
    (1, 1, 1),
    (0, 2, 1),
)

Ditherer = Callable[[Sequence[int], int, int, int], List[int]]


def _threshold(grey: Sequence[int], width: int, height: int, threshold: int) -> List[int]:
    return [1 if value < threshold else 0 for value in grey]


def _bayer(grey: Sequence[int], width: int, height: int, threshold: int) -> List[int]:
    bits = [0] * (width * height)
    for y in range(height):
        row = BAYER_4X4[y & 3]
        base = y * width
        for x in range(width):
            # cell level m maps to a cut-off of m * 16 + 8
            if grey[base + x] < row[x & 3] * 16 + 8:
                bits[base + x] = 1
    return bits


def _diffuse(
    grey: Sequence[int],
    width: int,
    height: int,
    kernel: Tuple[Tuple[int, int, int], ...],
    divisor: int,
) -> List[int]:
    buf = [float(v) for v in grey]
    bits = [0] * (width * height)
    for y in range(height):
        for x in range(width):
            i = y * width + x
            old = buf[i]
            if old < MID_GREY:
                bits[i] = 1
                error = old
            else:
                error = old - 255
            if not error:
                continue
            for dx, dy, weight in kernel:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and ny < height:
                    buf[ny * width + nx] += error * weight / divisor
    return bits


def _floyd_steinberg(grey: Sequence[int], width: int, height: int, threshold: int) -> List[int]:
    img = Image.frombytes("L", (width, height), bytes(grey))
    dithered = img.convert("1", dither=Image.Dither.FLOYDSTEINBERG)
    return [0 if value else 1 for value in dithered.getdata()]


def _atkinson(grey: Sequence[int], width: int, height: int, threshold: int) -> List[int]:
    return _diffuse(grey, width, height, _ATKINSON, 8)


_ALGORITHMS: Final[Dict[DitheringAlgorithm, Ditherer]] = {
    DitheringAlgorithm.THRESHOLD: _threshold,
    DitheringAlgorithm.BAYER: _bayer,
    DitheringAlgorithm.FLOYD_STEINBERG: _floyd_steinberg,
    DitheringAlgorithm.ATKINSON: _atkinson,
}


def check_threshold(threshold: int) -> int:
    if isinstance(threshold, bool) or not isinstance(threshold, int) or not 0 <= threshold <= 255:
        raise InvalidRange(f"Threshold must be between 0 and 255, got {threshold!r}", threshold)
    return threshold


def dither(
    grey: Sequence[int],
    width: int,
    height: int,
    algorithm: DitheringAlgorithm | str = DitheringAlgorithm.THRESHOLD,
    threshold: int = DEFAULT_THRESHOLD,
) -> List[int]:
    """
    Binarize row-major luma.

    Args:
        grey: ``width * height`` luma values, 0-255.
        width: Pixels per row.
        height: Number of rows.
        algorithm: Algorithm member or name.
        threshold: Cut-off for ``threshold``; ignored by the others.

    Returns:
        One 0/1 value per pixel, 1 = black.

    Raises:
        UnsupportedAlgorithm: If the algorithm name is unknown.
        InvalidRange: If threshold is outside 0-255.
    """
    algo = parse_enum(DitheringAlgorithm, algorithm, UnsupportedAlgorithm, "Dithering algorithm")
    check_threshold(threshold)
    logger.debug("Dithering %dx%d with %s", width, height, algo.value)
    return _ALGORITHMS[algo](grey, width, height, threshold)
