"""Tests for the command buffer and the style state record."""

import pytest

from escpos_encoder.buffer import CapturedLine, CommandBuffer
from escpos_encoder.model.enums import Alignment, FontSize, UnderlineMode
from escpos_encoder.state import StyleState


class TestCommandBuffer:
    """Append-only chunk storage with line bookkeeping."""

    @pytest.fixture
    def buffer(self) -> CommandBuffer:
        return CommandBuffer()

    def test_empty(self, buffer: CommandBuffer) -> None:
        assert buffer.getvalue() == b""
        assert len(buffer) == 0
        assert not buffer

    def test_append_keeps_order(self, buffer: CommandBuffer) -> None:
        buffer.append(b"ab")
        buffer.append(bytearray(b"cd"))
        buffer.append([0x65, 0x66])
        assert buffer.getvalue() == b"abcdef"
        assert len(buffer) == 6

    def test_empty_chunks_are_skipped(self, buffer: CommandBuffer) -> None:
        buffer.append(b"")
        assert not buffer

    def test_lines_split_at_breaks(self, buffer: CommandBuffer) -> None:
        buffer.append(b"ab")
        buffer.break_line(b"\n\r", 2, "first")
        buffer.append(b"cd")
        assert buffer.lines(2, "second") == [
            CapturedLine(b"ab", 2, "first"),
            CapturedLine(b"cd", 2, "second", "first"),
        ]
        assert buffer.getvalue() == b"ab\n\rcd"

    def test_lines_record_opening_state(self, buffer: CommandBuffer) -> None:
        buffer.append(b"a")
        buffer.break_line(b"\n\r", 1, "bold")
        buffer.break_line(b"\n\r", 0, "bold")
        buffer.append(b"b")
        lines = buffer.lines(1, "plain", "origin")
        assert [line.start for line in lines] == ["origin", "bold", "bold"]
        assert [line.state for line in lines] == ["bold", "bold", "plain"]

    def test_trailing_commands_without_columns_are_dropped(self, buffer: CommandBuffer) -> None:
        buffer.append(b"ab")
        buffer.break_line(b"\n\r", 2)
        buffer.append(b"\x1bE\x01")
        assert buffer.lines(0) == [CapturedLine(b"ab", 2)]

    def test_blank_line_is_kept(self, buffer: CommandBuffer) -> None:
        buffer.break_line(b"\n\r", 0)
        assert buffer.lines(0) == [CapturedLine(b"", 0)]


class TestStyleState:
    """Defaults, reset and restore sequences."""

    def test_defaults(self) -> None:
        state = StyleState()
        assert state.codepage == "cp437"
        assert not state.bold and not state.italic and not state.invert
        assert state.underline is UnderlineMode.OFF
        assert (state.width, state.height) == (1, 1)
        assert state.align is Alignment.LEFT
        assert state.size is FontSize.NORMAL

    def test_copy_is_independent(self) -> None:
        state = StyleState()
        snapshot = state.copy()
        state.bold = True
        assert snapshot.bold is False

    def test_reset(self) -> None:
        state = StyleState(codepage="cp858", bold=True, width=3, align=Alignment.RIGHT)
        state.reset()
        assert state == StyleState()

    def test_changed_fields(self) -> None:
        assert StyleState(bold=True, height=2).changed_fields(StyleState()) == ["bold", "height"]

    def test_restore_nothing(self) -> None:
        assert StyleState().restore_commands(StyleState(), 0) == b""

    def test_restore_order(self) -> None:
        current = StyleState(codepage="cp858", bold=True, underline=UnderlineMode.DOUBLE, width=2)
        assert StyleState().restore_commands(current, 0) == (
            b"\x1bt\x00" + b"\x1bE\x00" + b"\x1b-\x00" + b"\x1d!\x00"
        )

    def test_restore_size_keeps_both_factors(self) -> None:
        target = StyleState(width=2, height=3)
        assert target.restore_commands(StyleState(width=2), 0) == b"\x1d!\x12"

    def test_restore_alignment_optional(self) -> None:
        current = StyleState(align=Alignment.CENTER)
        assert StyleState().restore_commands(current, 0) == b"\x1ba\x00"
        assert StyleState().restore_commands(current, 0, emit_align=False) == b""

    def test_restore_font(self) -> None:
        assert StyleState().restore_commands(StyleState(size=FontSize.SMALL), 0) == b"\x1bM\x00"

    def test_restore_looks_up_codepage_id(self) -> None:
        target = StyleState(codepage="cp858", bold=True)
        assert target.restore_commands(StyleState()) == b"\x1bt\x13" + b"\x1bE\x01"
