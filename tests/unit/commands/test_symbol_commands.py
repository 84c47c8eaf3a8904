"""Tests for GS k barcode frames and GS ( k QR Code functions."""

from typing import List

import pytest

from escpos_encoder.commands import barcode, qr
from escpos_encoder.exceptions import InvalidBarcodeValue, InvalidOption, InvalidRange


def _store_frames(stream: bytes) -> List[bytes]:
    """Data carried by each Function 180 frame, in order."""
    frames = []
    for frame in stream.split(b"\x1d(k")[1:]:
        if frame[2:5] == b"1P0":
            length = frame[0] + frame[1] * 256 - qr.STORE_HEADER_SIZE
            data = frame[5:]
            assert len(data) == length
            frames.append(data)
    return frames


class TestBarcodeFrame:
    """GS h and GS k function B."""

    def test_print_barcode(self) -> None:
        assert barcode.print_barcode(69, b"ABC") == b"\x1dk\x45\x03ABC"

    def test_print_barcode_with_height(self) -> None:
        assert barcode.print_barcode(67, b"123", 80) == b"\x1dh\x50\x1dk\x43\x03123"

    @pytest.mark.parametrize("height", [0, 256, True])
    def test_height_out_of_range(self, height: int) -> None:
        with pytest.raises(InvalidRange):
            barcode.set_barcode_height(height)

    def test_length_limits(self) -> None:
        assert barcode.print_barcode(73, b"x" * 255)[3] == 255
        with pytest.raises(InvalidBarcodeValue):
            barcode.print_barcode(73, b"x" * 256)
        with pytest.raises(InvalidBarcodeValue):
            barcode.print_barcode(73, b"")


class TestQRFunctions:
    """Model, size, error level, store and print functions."""

    # === Header functions ===
    def test_select_model(self) -> None:
        assert qr.select_model(1) == b"\x1d\x28\x6b\x04\x00\x31\x41\x31\x00"
        assert qr.select_model(2) == b"\x1d\x28\x6b\x04\x00\x31\x41\x32\x00"

    @pytest.mark.parametrize("model", [0, 3, True, "2"])
    def test_select_model_rejects(self, model: object) -> None:
        with pytest.raises(InvalidOption):
            qr.select_model(model)  # type: ignore[arg-type]

    @pytest.mark.parametrize("size", [1, 6, 8])
    def test_module_size(self, size: int) -> None:
        assert qr.module_size(size) == b"\x1d\x28\x6b\x03\x00\x31\x43" + bytes([size])

    @pytest.mark.parametrize("size", [0, 9])
    def test_module_size_out_of_range(self, size: int) -> None:
        with pytest.raises(InvalidRange):
            qr.module_size(size)

    @pytest.mark.parametrize("code", [0x30, 0x31, 0x32, 0x33])
    def test_error_correction(self, code: int) -> None:
        assert qr.error_correction(code) == b"\x1d\x28\x6b\x03\x00\x31\x45" + bytes([code])

    def test_error_correction_rejects(self) -> None:
        with pytest.raises(InvalidOption):
            qr.error_correction(0x34)

    # === Storage ===
    def test_store_data_declares_length_plus_three(self) -> None:
        assert qr.store_data(b"abc") == b"\x1d\x28\x6b\x06\x00\x31\x50\x30abc"

    def test_store_data_largest_chunk(self) -> None:
        frame = qr.store_data(b"x" * qr.MAX_STORE_CHUNK)
        assert frame[3:5] == b"\xff\x00"

    def test_store_data_rejects_oversized_chunk(self) -> None:
        with pytest.raises(InvalidRange):
            qr.store_data(b"x" * (qr.MAX_STORE_CHUNK + 1))

    def test_chunk_payload_sizes(self) -> None:
        assert [len(c) for c in qr.chunk_payload(b"x" * 600)] == [252, 252, 96]
        assert [len(c) for c in qr.chunk_payload(b"x" * 252)] == [252]

    def test_print_qr_order(self) -> None:
        payload = bytes(range(32, 127)) * 7
        stream = qr.print_qr(payload, 2, 6, 0x31)
        assert stream.startswith(qr.symbol_header(2, 6, 0x31))
        assert stream.endswith(qr.QR_PRINT)
        frames = _store_frames(stream)
        assert b"".join(frames) == payload
        assert all(len(f) <= qr.MAX_STORE_CHUNK for f in frames)

    def test_qr_print_bytes(self) -> None:
        assert qr.QR_PRINT == b"\x1d\x28\x6b\x03\x00\x31\x51\x30"
