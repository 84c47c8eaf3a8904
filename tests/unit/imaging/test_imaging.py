"""Tests for pixel sources, greyscale conversion and dithering."""

from typing import List

import pytest
from PIL import Image

from escpos_encoder.exceptions import DimensionMismatch, InvalidOption, InvalidRange, UnsupportedAlgorithm
from escpos_encoder.imaging import PixelSource, dither, to_greyscale
from escpos_encoder.model.enums import DitheringAlgorithm


def _flat(value: int, width: int, height: int) -> List[int]:
    return [value] * (width * height)


class TestPixelSource:
    """Input contract."""

    def test_invalid_mode(self) -> None:
        with pytest.raises(InvalidOption):
            PixelSource(1, 1, b"\x00", "CMYK")

    def test_check_size_mismatch(self) -> None:
        source = PixelSource(8, 1, bytes(32))
        with pytest.raises(DimensionMismatch):
            source.check_size(8, 2)

    def test_check_size_short_buffer(self) -> None:
        source = PixelSource(2, 2, bytes(3), "L")
        with pytest.raises(DimensionMismatch, match="needs 4"):
            source.check_size(2, 2)

    def test_check_size_ok(self) -> None:
        PixelSource(3, 2, bytes(18), "RGB").check_size(3, 2)

    @pytest.mark.parametrize("mode,channels", [("L", 1), ("RGB", 3), ("RGBA", 4)])
    def test_from_image_keeps_supported_modes(self, mode: str, channels: int) -> None:
        source = PixelSource.from_image(Image.new(mode, (4, 2)))
        assert source.mode == mode
        assert (source.width, source.height) == (4, 2)
        assert len(source.data) == 4 * 2 * channels

    @pytest.mark.parametrize("mode", ["1", "P", "LA"])
    def test_from_image_converts_other_modes(self, mode: str) -> None:
        source = PixelSource.from_image(Image.new(mode, (3, 3)))
        assert source.mode == "RGBA"
        assert len(source.data) == 3 * 3 * 4


class TestGreyscale:
    """Luma conversion."""

    def test_luma_passthrough(self) -> None:
        assert to_greyscale(PixelSource(2, 1, b"\x00\xff", "L")) == b"\x00\xff"

    def test_rgb_black_and_white(self) -> None:
        data = bytes([0, 0, 0, 255, 255, 255])
        assert to_greyscale(PixelSource(2, 1, data, "RGB")) == b"\x00\xff"

    def test_transparent_pixels_become_paper(self) -> None:
        data = bytes([0, 0, 0, 0, 0, 0, 0, 255])
        assert to_greyscale(PixelSource(2, 1, data, "RGBA")) == b"\xff\x00"


class TestDither:
    """1 bpp conversion."""

    # === Threshold ===
    def test_threshold_is_strict(self) -> None:
        assert dither([0, 127, 128, 255], 4, 1, "threshold", 128) == [1, 1, 0, 0]

    @pytest.mark.parametrize("threshold,expected", [(0, [0, 0, 0, 0]), (255, [1, 1, 1, 0])])
    def test_threshold_bounds(self, threshold: int, expected: List[int]) -> None:
        assert dither([0, 127, 128, 255], 4, 1, DitheringAlgorithm.THRESHOLD, threshold) == expected

    # === All algorithms ===
    @pytest.mark.parametrize("algorithm", list(DitheringAlgorithm))
    def test_solid_black_and_white(self, algorithm: DitheringAlgorithm) -> None:
        assert dither(_flat(0, 8, 8), 8, 8, algorithm) == _flat(1, 8, 8)
        assert dither(_flat(255, 8, 8), 8, 8, algorithm) == _flat(0, 8, 8)

    def test_bayer_mid_grey_is_half_black(self) -> None:
        bits = dither(_flat(128, 4, 4), 4, 4, "bayer")
        assert sum(bits) == 8

    def test_bayer_pattern_tiles(self) -> None:
        bits = dither(_flat(100, 8, 8), 8, 8, "bayer")
        rows = [bits[y * 8 : y * 8 + 8] for y in range(8)]
        assert all(row[:4] == row[4:] for row in rows)
        assert rows[:4] == rows[4:]

    @pytest.mark.parametrize("algorithm", ["floydsteinberg", "atkinson"])
    def test_error_diffusion_spreads_mid_grey(self, algorithm: str) -> None:
        bits = dither(_flat(128, 16, 16), 16, 16, algorithm)
        assert 64 <= sum(bits) <= 192

    def test_atkinson_mid_grey_bitmap(self) -> None:
        assert dither(_flat(128, 4, 4), 4, 4, "atkinson") == [
            0, 1, 1, 0,
            1, 0, 0, 1,
            1, 0, 0, 1,
            0, 1, 1, 0,
        ]

    def test_floyd_steinberg_pushes_error_right(self) -> None:
        assert dither(_flat(100, 4, 1), 4, 1, "floydsteinberg") == [1, 0, 1, 1]

    def test_floyd_steinberg_pushes_error_down(self) -> None:
        assert dither(_flat(60, 2, 2), 2, 2, "floydsteinberg") == [1, 1, 1, 0]

    def test_floyd_steinberg_accepts_bytes(self) -> None:
        assert dither(bytes([100] * 4), 4, 1, DitheringAlgorithm.FLOYD_STEINBERG) == [1, 0, 1, 1]

    @pytest.mark.parametrize("algorithm", ["bayer", "floydsteinberg", "atkinson"])
    def test_threshold_ignored(self, algorithm: str) -> None:
        grey = [(x * 37) % 256 for x in range(64)]
        assert dither(grey, 8, 8, algorithm, 0) == dither(grey, 8, 8, algorithm, 255)

    # === Errors ===
    def test_unknown_algorithm(self) -> None:
        with pytest.raises(UnsupportedAlgorithm):
            dither([0], 1, 1, "sepia")

    @pytest.mark.parametrize("threshold", [-1, 256, True])
    def test_threshold_out_of_range(self, threshold: int) -> None:
        with pytest.raises(InvalidRange):
            dither([0], 1, 1, "threshold", threshold)
