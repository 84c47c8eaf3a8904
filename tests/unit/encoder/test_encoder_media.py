"""Tests for barcodes, QR Codes and raster images on the encoder."""

from typing import List

import pytest
from PIL import Image

from escpos_encoder import EscPosEncoder, PixelSource, Symbology
from escpos_encoder.exceptions import (
    DimensionMismatch,
    InvalidBarcodeValue,
    InvalidOption,
    InvalidRange,
    QRCodeOverflow,
    UnknownSymbology,
    UnsupportedAlgorithm,
)

QR_MODEL_2 = b"\x1d(k\x04\x001A2\x00"
QR_PRINT = b"\x1d(k\x03\x001Q0"


@pytest.fixture
def encoder() -> EscPosEncoder:
    return EscPosEncoder()


def _store_payloads(stream: bytes) -> List[bytes]:
    payloads = []
    for frame in stream.split(b"\x1d(k")[1:]:
        if frame[2:5] == b"1P0":
            declared = frame[0] + frame[1] * 256
            assert declared == len(frame) - 2
            payloads.append(frame[5:])
    return payloads


def _band_heights(stream: bytes) -> List[int]:
    heights = []
    while stream:
        assert stream[:4] == b"\x1dv0\x00"
        width_bytes = stream[4] + stream[5] * 256
        rows = stream[6] + stream[7] * 256
        heights.append(rows)
        stream = stream[8 + width_bytes * rows :]
    return heights


class TestBarcode:
    """GS k output."""

    def test_code39(self, encoder: EscPosEncoder) -> None:
        assert encoder.barcode("ABC", "code39").encode() == b"\x1dk\x45\x03ABC"

    def test_ean13_with_height(self, encoder: EscPosEncoder) -> None:
        out = encoder.barcode("4006381333931", Symbology.EAN13, 80).encode()
        assert out == b"\x1dh\x50" + b"\x1dk\x43\x0d4006381333931"

    def test_code128_code_set(self, encoder: EscPosEncoder) -> None:
        assert encoder.barcode("Hello", "code128").encode() == b"\x1dk\x49\x07{BHello"

    def test_resets_cursor(self, encoder: EscPosEncoder) -> None:
        encoder.text("abc").barcode("12", "itf")
        assert encoder.cursor == 0

    @pytest.mark.parametrize(
        "value,symbology,height,error",
        [
            ("x", "pdf417", None, UnknownSymbology),
            ("123", "ean13", None, InvalidBarcodeValue),
            ("4006381333932", "ean13", None, InvalidBarcodeValue),
            ("ABC", "code39", 0, InvalidRange),
            ("ABC", "code39", 256, InvalidRange),
        ],
    )
    def test_rejected(self, encoder: EscPosEncoder, value: str, symbology: str, height: int, error: type) -> None:
        encoder.text("kept")
        with pytest.raises(error):
            encoder.barcode(value, symbology, height)
        assert encoder.encode() == b"kept"


class TestQRCode:
    """GS ( k output."""

    def test_default_sequence(self, encoder: EscPosEncoder) -> None:
        out = encoder.qrcode("hello").encode()
        assert out == (
            QR_MODEL_2
            + b"\x1d(k\x03\x001C\x06"
            + b"\x1d(k\x03\x001E1"
            + b"\x1d(k\x08\x001P0hello"
            + QR_PRINT
        )

    def test_options(self, encoder: EscPosEncoder) -> None:
        out = encoder.qrcode("hi", model=1, size=3, errorlevel="h").encode()
        assert out.startswith(b"\x1d(k\x04\x001A1\x00" + b"\x1d(k\x03\x001C\x03" + b"\x1d(k\x03\x001E3")

    def test_long_payload_chunks(self, encoder: EscPosEncoder) -> None:
        value = "x" * 600
        out = encoder.qrcode(value, errorlevel="l").encode()
        payloads = _store_payloads(out)
        assert [len(p) for p in payloads] == [252, 252, 96]
        assert b"".join(payloads) == value.encode()
        assert out.endswith(QR_PRINT)

    def test_utf8_payload(self, encoder: EscPosEncoder) -> None:
        out = encoder.qrcode("é").encode()
        assert b"\x1d(k\x05\x001P0\xc3\xa9" in out

    @pytest.mark.parametrize(
        "kwargs,error",
        [
            ({"model": 3}, InvalidOption),
            ({"errorlevel": "x"}, InvalidOption),
            ({"size": 0}, InvalidRange),
            ({"size": 9}, InvalidRange),
        ],
    )
    def test_invalid_options(self, encoder: EscPosEncoder, kwargs: dict, error: type) -> None:
        with pytest.raises(error):
            encoder.qrcode("hello", **kwargs)
        assert encoder.encode() == b""

    def test_empty_value(self, encoder: EscPosEncoder) -> None:
        with pytest.raises(InvalidOption):
            encoder.qrcode("")

    def test_overflow(self, encoder: EscPosEncoder) -> None:
        encoder.text("kept")
        with pytest.raises(QRCodeOverflow):
            encoder.qrcode("x" * 3000, errorlevel="h")
        assert encoder.encode() == b"kept"

    def test_model_1_capacity(self, encoder: EscPosEncoder) -> None:
        value = "x" * 600
        with pytest.raises(QRCodeOverflow):
            encoder.qrcode(value, model=1, errorlevel="l")
        assert encoder.encode() == b""
        assert encoder.qrcode(value, model=2, errorlevel="l").encode().endswith(QR_PRINT)


class TestImage:
    """GS v 0 output."""

    def test_luma_source(self, encoder: EscPosEncoder) -> None:
        source = PixelSource(8, 1, bytes([0, 255] * 4), "L")
        assert encoder.image(source, 8, 1).encode() == b"\x1dv0\x00\x01\x00\x01\x00\xaa"

    def test_padded_row(self, encoder: EscPosEncoder) -> None:
        source = PixelSource(9, 1, bytes(9), "L")
        assert encoder.image(source, 9, 1).encode() == b"\x1dv0\x00\x02\x00\x01\x00\xff\x80"

    def test_pillow_image(self, encoder: EscPosEncoder) -> None:
        out = encoder.image(Image.new("L", (8, 2), 0), 8, 2).encode()
        assert out == b"\x1dv0\x00\x01\x00\x02\x00\xff\xff"

    def test_transparent_rgba_prints_nothing(self, encoder: EscPosEncoder) -> None:
        source = PixelSource(8, 1, bytes(32))
        assert encoder.image(source, 8, 1).encode().endswith(b"\x00")

    def test_threshold_parameter(self, encoder: EscPosEncoder) -> None:
        source = PixelSource(8, 1, bytes([100] * 8), "L")
        assert encoder.image(source, 8, 1, "threshold", 101).encode()[-1] == 0xFF
        assert EscPosEncoder().image(source, 8, 1, "threshold", 100).encode()[-1] == 0x00

    @pytest.mark.parametrize("algorithm", ["threshold", "bayer", "floydsteinberg", "atkinson"])
    def test_algorithms(self, algorithm: str) -> None:
        source = PixelSource(16, 16, bytes([128] * 256), "L")
        out = EscPosEncoder().image(source, 16, 16, algorithm).encode()
        assert _band_heights(out) == [16]

    def test_default_band_split(self, encoder: EscPosEncoder) -> None:
        source = PixelSource(8, 600, bytes([255] * 600), "L")
        assert _band_heights(encoder.image(source, 8, 600).encode()) == [255, 255, 90]

    def test_configured_band_height(self) -> None:
        encoder = EscPosEncoder(config={"max_raster_band_height": 2})
        source = PixelSource(8, 5, bytes([255] * 5), "L")
        assert _band_heights(encoder.image(source, 8, 5).encode()) == [2, 2, 1]

    def test_resets_cursor(self, encoder: EscPosEncoder) -> None:
        encoder.text("ab").image(PixelSource(1, 1, b"\x00", "L"), 1, 1)
        assert encoder.cursor == 0

    @pytest.mark.parametrize(
        "source,width,height,algorithm,threshold,error",
        [
            (PixelSource(8, 1, bytes(8), "L"), 8, 2, "threshold", 128, DimensionMismatch),
            (PixelSource(8, 1, bytes(7), "L"), 8, 1, "threshold", 128, DimensionMismatch),
            (PixelSource(8, 1, bytes(8), "L"), 8, 1, "sepia", 128, UnsupportedAlgorithm),
            (PixelSource(8, 1, bytes(8), "L"), 8, 1, "threshold", 300, InvalidRange),
            (PixelSource(8, 1, bytes(8), "L"), 0, 1, "threshold", 128, InvalidRange),
            (b"\x00" * 8, 8, 1, "threshold", 128, InvalidOption),
        ],
    )
    def test_rejected(
        self,
        encoder: EscPosEncoder,
        source: object,
        width: int,
        height: int,
        algorithm: str,
        threshold: int,
        error: type,
    ) -> None:
        with pytest.raises(error):
            encoder.image(source, width, height, algorithm, threshold)  # type: ignore[arg-type]
        assert encoder.encode() == b""

    def test_algorithm_checked_before_size(self, encoder: EscPosEncoder) -> None:
        with pytest.raises(UnsupportedAlgorithm):
            encoder.image(PixelSource(2, 2, bytes(4), "L"), 8, 8, "sepia")
