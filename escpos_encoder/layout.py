"""
Table, box and rule rendering.

Cell and box contents are produced by scoped sub-encoders: the host
encoder spawns a child bound to the cell or content width, the caller's
callback (or the literal string) writes into it, and the captured lines are
spliced into fixed-width rows here. Splicing pads each line to its field
using the line's alignment and then emits whatever commands bring the
printer back to the row's style, so formatting set inside a cell never
leaks into the next one.

Widths are printed columns. A space or border glyph printed at width
factor n covers n of them, so padding, margins and edges are emitted as
whole glyphs at the active factor and any remainder at factor 1.

Every function returns finished rows as ``(bytes, columns)`` pairs without
touching the host buffer; the host appends them only after the whole
table or box rendered without error.

Misuse contract: a sub-encoder is valid only while its callback runs.
Keeping a reference and writing to it later has no effect on the host.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from escpos_encoder.buffer import CapturedLine
from escpos_encoder.commands import sizing
from escpos_encoder.exceptions import ColumnOverflow, InvalidOption, InvalidRange
from escpos_encoder.model.enums import Alignment, BorderStyle, Overflow, parse_enum
from escpos_encoder.model.table import BorderChars, BoxOptions, CellStyle, ColumnSpec
from escpos_encoder.state import StyleState

if TYPE_CHECKING:
    from escpos_encoder.encoder import EscPosEncoder

logger = logging.getLogger(__name__)

__all__ = ["render_table", "render_box", "render_rule", "Row"]

Cell = Union[str, Callable[["EscPosEncoder"], Any], None]
Row = Tuple[bytes, int]

_RULE_GLYPHS = {BorderStyle.SINGLE: ("─", "-"), BorderStyle.DOUBLE: ("═", "=")}


def _span(glyph: bytes, columns: int, state: StyleState) -> bytes:
    """``columns`` printed columns of ``glyph`` in ``state``."""
    if columns <= 0:
        return b""
    count, rest = divmod(columns, state.width)
    out = glyph * count
    if rest:
        out += (
            sizing.character_size(1, state.height)
            + glyph * rest
            + sizing.character_size(state.width, state.height)
        )
    return out


def _spaces(columns: int, state: StyleState) -> bytes:
    return _span(b" ", columns, state)


def _apply_override(state: StyleState, style: Optional[CellStyle]) -> StyleState:
    cell_state = state.copy()
    if style is None or style.is_empty():
        return cell_state
    for name in ("bold", "italic", "underline", "invert"):
        value = getattr(style, name)
        if value is not None:
            setattr(cell_state, name, value)
    return cell_state


def _splice(line: Optional[CapturedLine], width: int, align: Alignment, target: StyleState, codepage_id: int) -> bytes:
    """
    Pad one captured line to ``width`` columns printed around ``target``.

    The line's opening style is set up after the left padding and
    ``target`` is restored after its content, so each wrapped line keeps
    the styling it was written in.
    """
    if line is None:
        return _spaces(width, target)
    if line.state is not None:
        align = line.state.align
    left, right = align.split(line.columns, width)
    enter = leave = b""
    if line.start is not None:
        enter = line.start.restore_commands(target, emit_align=False)
    if line.state is not None:
        leave = target.restore_commands(line.state, codepage_id, emit_align=False)
    return _spaces(left, target) + enter + line.data + leave + _spaces(right, target)


def _fill(sub: "EscPosEncoder", content: Cell) -> None:
    if content is None:
        return
    if callable(content):
        content(sub)
    else:
        sub.text(content if isinstance(content, str) else str(content))


# =============================================================================
# TABLE
# =============================================================================


def _column_specs(columns: Sequence[Union[ColumnSpec, Mapping[str, Any]]]) -> List[ColumnSpec]:
    if isinstance(columns, (str, bytes)) or not isinstance(columns, Sequence) or not columns:
        raise InvalidOption(f"Table columns must be a non-empty sequence, got {columns!r}", columns)
    return [ColumnSpec.from_value(column) for column in columns]


def _check_rows(rows: Sequence[Sequence[Cell]], column_count: int) -> None:
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise InvalidOption(f"Table rows must be a sequence of rows, got {rows!r}", rows)
    for index, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise InvalidOption(f"Table row {index} must be a sequence of cells, got {row!r}", row)
        if len(row) > column_count:
            logger.debug("Rejected table row %d with %d cells", index, len(row))
            raise ColumnOverflow(
                f"Table row {index} has {len(row)} cells but only {column_count} columns",
                len(row),
            )


def _render_cell(host: "EscPosEncoder", column: ColumnSpec, cell: Cell, cell_state: StyleState, position: str) -> bytes:
    codepage_id = host.active_codepage.id
    if cell is None or (isinstance(cell, str) and not cell):
        return _spaces(column.width, cell_state)
    sub_state = cell_state.copy()
    sub_state.align = column.align
    sub = host.spawn(column.width, Overflow.CLIP, sub_state)
    _fill(sub, cell)
    lines = sub.captured_lines()
    if len(lines) > 1:
        logger.warning(
            "Table cell %s produced %d lines; only the first is printed", position, len(lines)
        )
    return _splice(lines[0] if lines else None, column.width, column.align, cell_state, codepage_id)


def render_table(
    host: "EscPosEncoder",
    columns: Sequence[Union[ColumnSpec, Mapping[str, Any]]],
    rows: Sequence[Sequence[Cell]],
) -> List[Row]:
    """
    Render table rows.

    Args:
        host: Encoder whose style and codepage the table uses.
        columns: ``ColumnSpec`` objects or mappings with ``width``, ``align``,
                 ``style``, ``margin_left``/``marginLeft``, ``margin_right``/``marginRight``.
        rows: Sequences of cells; each cell is a string, a callable taking a
              sub-encoder, or None for a blank cell.

    Returns:
        One ``(bytes, columns)`` pair per row, without the newline.

    Raises:
        ColumnOverflow: If a row has more cells than columns.
        InvalidRange: If a column width or margin is invalid.
        InvalidOption: If columns or rows are malformed.
    """
    specs = _column_specs(columns)
    _check_rows(rows, len(specs))

    session = host.style
    codepage_id = host.active_codepage.id
    row_columns = sum(spec.total_width for spec in specs)

    rendered: List[Row] = []
    for row_index, row in enumerate(rows):
        parts: List[bytes] = []
        for col_index, spec in enumerate(specs):
            cell = row[col_index] if col_index < len(row) else None
            cell_state = _apply_override(session, spec.style)
            parts.append(_spaces(spec.margin_left, session))
            parts.append(cell_state.restore_commands(session, codepage_id, emit_align=False))
            parts.append(
                _render_cell(host, spec, cell, cell_state, f"({row_index}, {col_index})")
            )
            parts.append(session.restore_commands(cell_state, codepage_id, emit_align=False))
            parts.append(_spaces(spec.margin_right, session))
        rendered.append((b"".join(parts), row_columns))
    logger.debug("Rendered table: %d column(s), %d row(s)", len(specs), len(rendered))
    return rendered


# =============================================================================
# BOX
# =============================================================================


def render_box(
    host: "EscPosEncoder",
    options: Union[BoxOptions, Mapping[str, Any], None],
    contents: Cell,
) -> List[Row]:
    """
    Render a bordered box.

    Layout per content row::

        margin_left | padding_left content padding_right | margin_right

    The top and bottom edges span ``width - margin_left - margin_right``
    columns of horizontal glyphs between their corners.

    Raises:
        InvalidDimensions: If margins and padding leave no content column.
        InvalidOption: If the options are malformed.
    """
    opts = BoxOptions.from_value(options)
    content_width = opts.content_width(host.columns)
    edge = opts.outer_width(host.columns) - opts.margin_left - opts.margin_right

    codepage = host.active_codepage
    chars = BorderChars.for_codepage(opts.style, codepage)
    session = host.style

    sub_state = session.copy()
    sub_state.align = opts.align
    sub = host.spawn(content_width, Overflow.WRAP, sub_state)
    _fill(sub, contents)
    lines: List[Optional[CapturedLine]] = list(sub.captured_lines()) or [None]

    left_margin = _spaces(opts.margin_left, session)
    right_margin = _spaces(opts.margin_right, session)
    # corners and verticals are single glyphs at the session width factor
    row_columns = opts.margin_left + edge + 2 * session.width + opts.margin_right
    vertical = codepage.encode(chars.vertical)
    horizontal = _span(codepage.encode(chars.horizontal), edge, session)

    rendered: List[Row] = [
        (
            left_margin
            + codepage.encode(chars.top_left)
            + horizontal
            + codepage.encode(chars.top_right)
            + right_margin,
            row_columns,
        )
    ]
    for line in lines:
        body = _splice(line, content_width, opts.align, session, codepage.id)
        rendered.append(
            (
                left_margin
                + vertical
                + _spaces(opts.padding_left, session)
                + body
                + _spaces(opts.padding_right, session)
                + vertical
                + right_margin,
                row_columns,
            )
        )
    rendered.append(
        (
            left_margin
            + codepage.encode(chars.bottom_left)
            + horizontal
            + codepage.encode(chars.bottom_right)
            + right_margin,
            row_columns,
        )
    )
    logger.debug("Rendered %s box: content width %d, %d row(s)", opts.style.value, content_width, len(lines))
    return rendered


# =============================================================================
# RULE
# =============================================================================


def render_rule(
    host: "EscPosEncoder",
    style: Union[BorderStyle, str] = BorderStyle.SINGLE,
    width: Optional[int] = None,
) -> Row:
    """
    Render a horizontal line ``width`` columns long (host width by default).

    Raises:
        InvalidOption: If the style is unknown.
        InvalidRange: If width is below 1.
    """
    rule_style = parse_enum(BorderStyle, style, what="Rule style")
    if width is None:
        width = host.columns
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise InvalidRange(f"Rule width must be a positive integer, got {width!r}", width)
    glyph, fallback = _RULE_GLYPHS[rule_style]
    codepage = host.active_codepage
    if not codepage.can_encode(glyph):
        glyph = fallback
    return _span(codepage.encode(glyph), width, host.style), width
