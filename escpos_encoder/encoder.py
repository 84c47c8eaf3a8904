"""
Fluent ESC/POS command builder.

``EscPosEncoder`` owns one style state, one active codepage and one
command buffer. Every builder method validates its arguments completely,
then updates state and appends commands, and returns the encoder so calls
can be chained. A call that raises leaves the buffer exactly as it was.

Example:
    >>> from escpos_encoder import EscPosEncoder
    >>> data = (
    ...     EscPosEncoder()
    ...     .initialize()
    ...     .codepage("cp858")
    ...     .align("center")
    ...     .bold(True)
    ...     .line("Receipt")
    ...     .bold(False)
    ...     .table(
    ...         [{"width": 30}, {"width": 12, "align": "right"}],
    ...         [["Coffee", "2.50"], ["Cake", "3.75"]],
    ...     )
    ...     .qrcode("https://example.com")
    ...     .cut()
    ...     .encode()
    ... )

Thread safety: one encoder must not be used from several threads at once.
Separate encoders share no mutable state.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Union

from PIL import Image

from escpos_encoder.barcodegen.validation import barcode_payload, check_qr_capacity
from escpos_encoder.buffer import CapturedLine, CommandBuffer
from escpos_encoder.codepages import DEFAULT_CODEPAGE, Codepage, resolve
from escpos_encoder.commands import barcode as barcode_cmd
from escpos_encoder.commands import charset, graphics, hardware, positioning, qr, sizing
from escpos_encoder.commands import text_formatting
from escpos_encoder.config import merge_config
from escpos_encoder.exceptions import InvalidOption, InvalidRange, UnknownSymbology, UnsupportedAlgorithm
from escpos_encoder.imaging.dither import DEFAULT_THRESHOLD, check_threshold, dither
from escpos_encoder.imaging.pixels import PixelSource, to_greyscale
from escpos_encoder.layout import Row, render_box, render_rule, render_table
from escpos_encoder.model.enums import (
    Alignment,
    DEFAULT_BORDER_STYLE,
    DEFAULT_CUT_MODE,
    DEFAULT_DITHERING_ALGORITHM,
    DEFAULT_QR_ERROR_LEVEL,
    BorderStyle,
    CutMode,
    DitheringAlgorithm,
    FontSize,
    Overflow,
    QRErrorLevel,
    Symbology,
    UnderlineMode,
    parse_enum,
    to_underline_mode,
)
from escpos_encoder.model.table import BoxOptions, ColumnSpec
from escpos_encoder.state import StyleState

logger = logging.getLogger(__name__)

__all__ = ["EscPosEncoder"]

RawData = Union[bytes, bytearray, memoryview, Iterable[int], int, str]


class EscPosEncoder:
    """
    Stateful ESC/POS command builder.

    Args:
        width: Characters per line; overrides ``config["paper_width"]``.
        config: Configuration overrides (see escpos_encoder.config).

    Raises:
        InvalidRange: If width is not a positive integer.
        InvalidOption: If the configuration holds an invalid value.
    """

    def __init__(self, width: Optional[int] = None, config: Optional[Mapping[str, Any]] = None) -> None:
        self._config = merge_config(config)
        if width is not None and (isinstance(width, bool) or not isinstance(width, int) or width < 1):
            raise InvalidRange(f"Paper width must be a positive integer, got {width!r}", width)
        self._columns: int = width if width is not None else self._config["paper_width"]
        self._state = StyleState()
        self._origin = self._state.copy()
        self._codepage: Codepage = resolve(DEFAULT_CODEPAGE, self._config["substitute_char"])
        self._buffer = CommandBuffer()
        self._cursor = 0
        self._embedded = False
        self._overflow = Overflow.WRAP

    # =========================================================================
    # INTROSPECTION
    # =========================================================================

    @property
    def columns(self) -> int:
        """Line width in characters (the cell or box content width inside callbacks)."""
        return self._columns

    @property
    def cursor(self) -> int:
        """Columns printed on the current line."""
        return self._cursor

    @property
    def style(self) -> StyleState:
        """Snapshot of the current style state."""
        return self._state.copy()

    @property
    def active_codepage(self) -> Codepage:
        return self._codepage

    @property
    def embedded(self) -> bool:
        return self._embedded

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(columns={self._columns}, codepage={self._codepage.name!r}, "
            f"bytes={len(self._buffer)})"
        )

    # =========================================================================
    # SUB-ENCODERS
    # =========================================================================

    def spawn(self, width: int, overflow: Overflow, state: Optional[StyleState] = None) -> "EscPosEncoder":
        """
        Create a sub-encoder bound to ``width`` columns.

        The child starts in ``state`` (default: this encoder's state) with
        the active codepage and emits no commands for them. Inside a child,
        ``align`` only records the alignment; the layout engine applies it
        as padding. ``overflow`` decides whether text past the last column
        is dropped (CLIP) or continues on a new line (WRAP).
        """
        child = EscPosEncoder(width, self._config)
        child._state = (state or self._state).copy()
        child._origin = child._state.copy()
        child._codepage = self._codepage
        child._embedded = True
        child._overflow = overflow
        return child

    def captured_lines(self) -> List[CapturedLine]:
        """Printed lines of this encoder's buffer, each with its opening and closing style."""
        return self._buffer.lines(self._cursor, self._state.copy(), self._origin.copy())

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _break_line(self) -> None:
        self._buffer.break_line(positioning.NEWLINE, self._cursor, self._state.copy())
        self._cursor = 0

    def _emit_rows(self, rows: Sequence[Row]) -> None:
        if self._cursor:
            self._break_line()
        for data, columns in rows:
            self._buffer.append(data)
            self._cursor = columns
            self._break_line()

    def _wrap_limit(self, wrap: Optional[int]) -> Optional[int]:
        if wrap is not None and (isinstance(wrap, bool) or not isinstance(wrap, int) or wrap < 1):
            logger.debug("Rejected wrap %r", wrap)
            raise InvalidRange(f"Wrap must be a positive integer, got {wrap!r}", wrap)
        if self._embedded and self._overflow is Overflow.WRAP:
            return self._columns if wrap is None else min(wrap, self._columns)
        return wrap

    def _write_text(self, value: str, limit: Optional[int]) -> None:
        advance = self._state.width
        clip_at = self._columns if self._embedded and self._overflow is Overflow.CLIP else None
        pending = bytearray()
        for char in value.replace("\r\n", "\n"):
            if char == "\n":
                self._buffer.append(pending)
                pending = bytearray()
                self._break_line()
                continue
            if clip_at is not None and self._cursor + advance > clip_at:
                continue
            if limit is not None and self._cursor and self._cursor + advance > limit:
                self._buffer.append(pending)
                pending = bytearray()
                self._break_line()
            pending.append(self._codepage.encode_char(char))
            self._cursor += advance
        self._buffer.append(pending)

    # =========================================================================
    # SESSION
    # =========================================================================

    def initialize(self) -> "EscPosEncoder":
        """Emit ESC @ and reset style state and codepage to power-on defaults."""
        self._buffer.append(hardware.ESC_INIT)
        self._state.reset()
        self._codepage = resolve(DEFAULT_CODEPAGE, self._codepage.substitute)
        self._cursor = 0
        return self

    def codepage(self, name: str) -> "EscPosEncoder":
        """
        Select the codepage used for later text.

        Emits ESC t n only when the codepage actually changes.

        Raises:
            UnknownCodepage: If the name is not supported.
        """
        selected = resolve(name, self._codepage.substitute)
        if selected.name == self._codepage.name:
            return self
        self._buffer.append(charset.select_codepage(selected.id))
        logger.debug("Codepage %s -> %s (ESC t %d)", self._codepage.name, selected.name, selected.id)
        self._codepage = selected
        self._state.codepage = selected.name
        return self

    # =========================================================================
    # TEXT
    # =========================================================================

    def text(self, value: str, wrap: Optional[int] = None) -> "EscPosEncoder":
        """
        Print text in the active codepage.

        Wrapping counts characters: once the line holds ``wrap`` columns
        and another character follows, a newline is inserted. Text already
        on the line counts, and no newline is added after the last
        character. A character printed at width factor n occupies n
        columns. ``"\\n"`` in ``value`` prints a newline.

        Raises:
            InvalidRange: If wrap is not a positive integer.
        """
        limit = self._wrap_limit(wrap)
        self._write_text(value if isinstance(value, str) else str(value), limit)
        return self

    def newline(self) -> "EscPosEncoder":
        self._break_line()
        return self

    def line(self, value: str, wrap: Optional[int] = None) -> "EscPosEncoder":
        return self.text(value, wrap).newline()

    # =========================================================================
    # STYLE
    # =========================================================================

    def bold(self, value: Optional[bool] = None) -> "EscPosEncoder":
        """Turn bold on or off; ``None`` toggles."""
        on = (not self._state.bold) if value is None else bool(value)
        self._state.bold = on
        self._buffer.append(text_formatting.bold(on))
        return self

    def italic(self, value: Optional[bool] = None) -> "EscPosEncoder":
        on = (not self._state.italic) if value is None else bool(value)
        self._state.italic = on
        self._buffer.append(text_formatting.italic(on))
        return self

    def underline(self, value: Union[bool, int, UnderlineMode, None] = None) -> "EscPosEncoder":
        """
        Set underline: False off, True single, 2 double; ``None`` toggles single.

        Raises:
            InvalidOption: For any other value.
        """
        if value is None:
            mode = UnderlineMode.OFF if self._state.underline is not UnderlineMode.OFF else UnderlineMode.SINGLE
        else:
            mode = to_underline_mode(value)
        self._state.underline = mode
        self._buffer.append(text_formatting.underline(mode.value))
        return self

    def invert(self, value: Optional[bool] = None) -> "EscPosEncoder":
        on = (not self._state.invert) if value is None else bool(value)
        self._state.invert = on
        self._buffer.append(text_formatting.invert(on))
        return self

    def width(self, width: int = 1) -> "EscPosEncoder":
        """
        Set the horizontal magnification (1-8).

        Raises:
            InvalidRange: If width is outside 1-8.
        """
        command = sizing.character_size(width, self._state.height)
        self._state.width = width
        self._buffer.append(command)
        return self

    def height(self, height: int = 1) -> "EscPosEncoder":
        """
        Set the vertical magnification (1-8).

        Raises:
            InvalidRange: If height is outside 1-8.
        """
        command = sizing.character_size(self._state.width, height)
        self._state.height = height
        self._buffer.append(command)
        return self

    def size(self, value: Union[FontSize, str]) -> "EscPosEncoder":
        """
        Select ``normal`` (font A) or ``small`` (font B).

        Raises:
            InvalidOption: For any other value.
        """
        font = parse_enum(FontSize, value, InvalidOption, "Size")
        self._state.size = font
        self._buffer.append(sizing.select_font(font.code))
        return self

    def align(self, value: Union[Alignment, str]) -> "EscPosEncoder":
        """
        Set justification: ``left``, ``center`` or ``right``.

        Inside a table cell or box callback only the state changes.

        Raises:
            InvalidOption: For any other value.
        """
        alignment = parse_enum(Alignment, value, InvalidOption, "Align")
        self._state.align = alignment
        if not self._embedded:
            self._buffer.append(positioning.justify(alignment.code))
        return self

    # =========================================================================
    # LAYOUT
    # =========================================================================

    def table(
        self,
        columns: Sequence[Union[ColumnSpec, Mapping[str, Any]]],
        rows: Sequence[Sequence[Union[str, Callable[["EscPosEncoder"], Any], None]]],
    ) -> "EscPosEncoder":
        """
        Print rows of fixed-width cells.

        Cells are strings or callables receiving a sub-encoder bound to the
        column width. Content is clipped to the column, never wrapped; a
        callback that prints several lines contributes its first line only.
        Every row ends with a newline, and a table never shares a line with
        earlier text.

        Raises:
            ColumnOverflow: If a row has more cells than columns.
        """
        self._emit_rows(render_table(self, columns, rows))
        return self

    def box(
        self,
        options: Union[BoxOptions, Mapping[str, Any], None],
        contents: Union[str, Callable[["EscPosEncoder"], Any], None],
    ) -> "EscPosEncoder":
        """
        Print contents inside a border.

        String contents wrap at the content width; a callable receives a
        sub-encoder bound to the content width whose lines become box rows.

        Raises:
            InvalidDimensions: If margins and padding leave no content column.
        """
        self._emit_rows(render_box(self, options, contents))
        return self

    def rule(
        self,
        style: Union[BorderStyle, str, Mapping[str, Any]] = DEFAULT_BORDER_STYLE,
        width: Optional[int] = None,
    ) -> "EscPosEncoder":
        """
        Print a horizontal line on its own line.

        ``style`` may also be a mapping with ``style`` and ``width`` keys.

        Raises:
            InvalidOption: If the style is unknown.
            InvalidRange: If width is below 1.
        """
        if isinstance(style, Mapping):
            width = style.get("width", width)
            style = style.get("style", DEFAULT_BORDER_STYLE)
        self._emit_rows([render_rule(self, style, width)])
        return self

    # =========================================================================
    # BARCODES
    # =========================================================================

    def barcode(
        self,
        value: str,
        symbology: Union[Symbology, str],
        height: Optional[int] = None,
    ) -> "EscPosEncoder":
        """
        Print a 1D barcode with GS k (function B).

        Raises:
            UnknownSymbology: If the symbology is not supported.
            InvalidBarcodeValue: If the value breaks the symbology's rules.
            InvalidRange: If height is outside 1-255.
        """
        sym = parse_enum(Symbology, symbology, UnknownSymbology, "Symbology")
        payload = barcode_payload(value, sym)
        command = barcode_cmd.print_barcode(sym.type_code, payload, height)
        self._buffer.append(command)
        self._cursor = 0
        return self

    def qrcode(
        self,
        value: str,
        model: int = 2,
        size: int = 6,
        errorlevel: Union[QRErrorLevel, str] = DEFAULT_QR_ERROR_LEVEL,
    ) -> "EscPosEncoder":
        """
        Print a QR Code from UTF-8 encoded ``value``.

        Raises:
            InvalidOption: If model or errorlevel is not allowed, or value is empty.
            InvalidRange: If size is outside 1-8.
            QRCodeOverflow: If the payload exceeds the largest symbol of the model.
        """
        level = parse_enum(QRErrorLevel, errorlevel, InvalidOption, "QR error level")
        payload = (value if isinstance(value, str) else str(value)).encode("utf-8")
        if not payload:
            raise InvalidOption("QR value must not be empty", value)
        command = qr.print_qr(payload, model, size, level.code)
        check_qr_capacity(payload, level, model)
        self._buffer.append(command)
        self._cursor = 0
        return self

    # =========================================================================
    # IMAGES
    # =========================================================================

    def image(
        self,
        source: Union[PixelSource, Image.Image],
        width: int,
        height: int,
        algorithm: Union[DitheringAlgorithm, str] = DEFAULT_DITHERING_ALGORITHM,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> "EscPosEncoder":
        """
        Print a raster image.

        The source must already be ``width`` x ``height`` pixels; nothing is
        resampled. ``threshold`` is used by the ``threshold`` algorithm only.

        Raises:
            UnsupportedAlgorithm: If the algorithm name is unknown.
            InvalidRange: If threshold, width or height is out of range.
            DimensionMismatch: If the source size or buffer length differs.
        """
        algo = parse_enum(DitheringAlgorithm, algorithm, UnsupportedAlgorithm, "Dithering algorithm")
        check_threshold(threshold)
        for label, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidRange(f"Image {label} must be a positive integer, got {value!r}", value)
        if isinstance(source, Image.Image):
            source = PixelSource.from_image(source)
        elif not isinstance(source, PixelSource):
            raise InvalidOption(
                f"Image source must be a PixelSource or PIL image, got {type(source).__name__}", source
            )
        source.check_size(width, height)

        bits = dither(to_greyscale(source), width, height, algo, threshold)
        packed = graphics.pack_bits(bits, width, height)
        self._buffer.append(
            graphics.print_raster_image(packed, width, height, self._config["max_raster_band_height"])
        )
        self._cursor = 0
        return self

    # =========================================================================
    # HARDWARE AND RAW
    # =========================================================================

    def cut(self, value: Union[CutMode, str] = DEFAULT_CUT_MODE) -> "EscPosEncoder":
        """
        Cut the paper: ``full`` (default) or ``partial``.

        Raises:
            InvalidOption: For any other value.
        """
        mode = parse_enum(CutMode, value, InvalidOption, "Cut")
        self._buffer.append(hardware.cut(mode.code))
        return self

    def pulse(self, device: int = 0, on: int = 100, off: int = 500) -> "EscPosEncoder":
        """
        Send a cash drawer pulse; times in milliseconds.

        Raises:
            InvalidOption: If device is not 0 or 1.
            InvalidRange: If a time is negative.
        """
        self._buffer.append(hardware.pulse(device, on, off))
        return self

    def raw(self, data: RawData) -> "EscPosEncoder":
        """
        Append bytes verbatim.

        Accepts bytes-like objects, an iterable of ints (each masked to one
        byte) or a single int. A string is transliterated through the
        active codepage. Content is never validated; only the argument
        type is.

        Raises:
            TypeError: If ``data`` is none of the accepted types, or an
                iterable yields something other than ints.
        """
        if isinstance(data, (bytes, bytearray, memoryview)):
            chunk = bytes(data)
        elif isinstance(data, str):
            chunk = self._codepage.encode(data)
        elif isinstance(data, int):
            chunk = bytes([data & 0xFF])
        elif isinstance(data, Iterable):
            items = list(data)
            if not all(isinstance(b, int) for b in items):
                raise TypeError(f"raw() iterables must yield ints, got {items!r}")
            chunk = bytes(b & 0xFF for b in items)
        else:
            raise TypeError(f"raw() takes bytes, str, int or an iterable of ints, not {type(data).__name__}")
        self._buffer.append(chunk)
        return self

    def encode(self) -> bytes:
        """Return everything built so far; the buffer is kept."""
        return self._buffer.getvalue()
