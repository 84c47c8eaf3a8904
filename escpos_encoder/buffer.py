"""
Append-only command buffer.

Chunks are kept in call order and never reordered or removed. Besides the
bytes, the buffer remembers where each line ended (the index of the newline
chunk, how many columns the finished line occupied and the style at the
break) so that a scoped sub-encoder's output can be split into lines
without re-parsing commands. The style at one break is the style the next
line starts in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

__all__ = ["CommandBuffer", "CapturedLine"]

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


@dataclass(frozen=True)
class CapturedLine:
    """
    One printed line of captured output, without its newline command.

    Attributes:
        data: Text and commands written on the line.
        columns: Printed columns.
        state: Style snapshot when the line ended.
        start: Style snapshot when the line began.
    """

    data: bytes
    columns: int
    state: Optional[object] = None
    start: Optional[object] = None


class CommandBuffer:
    def __init__(self) -> None:
        self._chunks: List[bytes] = []
        # (index of newline chunk, columns, style snapshot) per completed line
        self._breaks: List[tuple[int, int, object]] = []

    def append(self, data: BytesLike) -> None:
        chunk = bytes(data)
        if chunk:
            self._chunks.append(chunk)

    def break_line(self, newline: bytes, columns: int, state: object = None) -> None:
        """Append ``newline`` and record the line it terminates."""
        self._breaks.append((len(self._chunks), columns, state))
        self._chunks.append(bytes(newline))

    def lines(self, columns: int, state: object = None, origin: object = None) -> List[CapturedLine]:
        """
        Split the buffer into printed lines.

        Args:
            columns: Column count of the trailing (unterminated) line.
            state: Style snapshot at the end of the trailing line.
            origin: Style snapshot before the first chunk.

        Returns:
            Completed lines followed by the trailing line when it has
            printed columns. A trailing line without printed columns is
            dropped together with the commands it holds.
        """
        result: List[CapturedLine] = []
        first = 0
        line_start = origin
        for index, line_columns, line_state in self._breaks:
            result.append(
                CapturedLine(b"".join(self._chunks[first:index]), line_columns, line_state, line_start)
            )
            first = index + 1
            line_start = line_state
        if columns:
            result.append(CapturedLine(b"".join(self._chunks[first:]), columns, state, line_start))
        return result

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)

    def __len__(self) -> int:
        return sum(len(chunk) for chunk in self._chunks)

    def __bool__(self) -> bool:
        return bool(self._chunks)
