"""
Layout models for tables, boxes and rules: column specs, per-column style
overrides, border glyph sets and box options.

NO command bytes are produced here; rendering lives in escpos_encoder/layout.py.

Module: escpos_encoder/model/table.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final, Mapping, Optional, Union

from escpos_encoder.codepages import Codepage
from escpos_encoder.exceptions import InvalidDimensions, InvalidOption, InvalidRange
from escpos_encoder.model.enums import (
    DEFAULT_ALIGNMENT,
    DEFAULT_BORDER_STYLE,
    Alignment,
    BorderStyle,
    UnderlineMode,
    parse_enum,
    to_underline_mode,
)

logger: Final = logging.getLogger(__name__)

__all__ = [
    "CellStyle",
    "ColumnSpec",
    "BorderChars",
    "BoxOptions",
]

# camelCase keys accepted from mapping-style options
_KEY_ALIASES: Final[Mapping[str, str]] = {
    "marginLeft": "margin_left",
    "marginRight": "margin_right",
    "paddingLeft": "padding_left",
    "paddingRight": "padding_right",
}


def _normalize_keys(options: Mapping[str, Any]) -> dict[str, Any]:
    return {_KEY_ALIASES.get(key, key): value for key, value in options.items()}


def _non_negative(name: str, value: Any, error_cls: type = InvalidRange) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise error_cls(f"{name} must be a non-negative integer, got {value!r}", value)
    return value


# =============================================================================
# CELL STYLE OVERRIDE
# =============================================================================


@dataclass(frozen=True, slots=True)
class CellStyle:
    """Per-column style override; ``None`` inherits the session value."""

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[UnderlineMode] = None
    invert: Optional[bool] = None

    @classmethod
    def from_value(cls, value: Union["CellStyle", Mapping[str, Any], None]) -> Optional["CellStyle"]:
        if value is None or isinstance(value, CellStyle):
            return value
        if not isinstance(value, Mapping):
            raise InvalidOption(f"Column style must be a mapping, got {value!r}", value)
        unknown = set(value) - {"bold", "italic", "underline", "invert"}
        if unknown:
            raise InvalidOption(f"Unknown column style keys: {', '.join(sorted(unknown))}", value)
        underline = value.get("underline")
        return cls(
            bold=None if value.get("bold") is None else bool(value["bold"]),
            italic=None if value.get("italic") is None else bool(value["italic"]),
            underline=None if underline is None else to_underline_mode(underline),
            invert=None if value.get("invert") is None else bool(value["invert"]),
        )

    def is_empty(self) -> bool:
        return all(v is None for v in (self.bold, self.italic, self.underline, self.invert))


# =============================================================================
# COLUMN SPEC
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """
    One table column.

    Attributes:
        width: Cell width in character columns (> 0).
        align: Padding side for content narrower than the cell.
        style: Optional override applied around every cell of the column.
        margin_left: Spaces printed before the cell.
        margin_right: Spaces printed after the cell.
    """

    width: int
    align: Alignment = DEFAULT_ALIGNMENT
    style: Optional[CellStyle] = None
    margin_left: int = 0
    margin_right: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.width, bool) or not isinstance(self.width, int) or self.width < 1:
            raise InvalidRange(f"Column width must be a positive integer, got {self.width!r}", self.width)
        _non_negative("margin_left", self.margin_left)
        _non_negative("margin_right", self.margin_right)
        if not isinstance(self.align, Alignment):
            object.__setattr__(self, "align", parse_enum(Alignment, self.align, what="Column align"))
        if self.style is not None and not isinstance(self.style, CellStyle):
            object.__setattr__(self, "style", CellStyle.from_value(self.style))

    @classmethod
    def from_value(cls, value: Union["ColumnSpec", Mapping[str, Any]]) -> "ColumnSpec":
        """Build from a ``ColumnSpec`` or a mapping (snake_case or camelCase keys)."""
        if isinstance(value, ColumnSpec):
            return value
        if not isinstance(value, Mapping):
            raise InvalidOption(f"Column must be a ColumnSpec or mapping, got {value!r}", value)
        options = _normalize_keys(value)
        if "width" not in options:
            raise InvalidRange("Column width is required", value)
        return cls(
            width=options["width"],
            align=options.get("align", DEFAULT_ALIGNMENT),
            style=CellStyle.from_value(options.get("style")),
            margin_left=options.get("margin_left", 0),
            margin_right=options.get("margin_right", 0),
        )

    @property
    def total_width(self) -> int:
        return self.margin_left + self.width + self.margin_right


# =============================================================================
# BORDER GLYPHS
# =============================================================================


@dataclass(frozen=True, slots=True)
class BorderChars:
    horizontal: str
    vertical: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str

    @staticmethod
    def single_line() -> "BorderChars":
        return BorderChars("─", "│", "┌", "┐", "└", "┘")

    @staticmethod
    def double_line() -> "BorderChars":
        return BorderChars("═", "║", "╔", "╗", "╚", "╝")

    @staticmethod
    def ascii_art(style: BorderStyle = BorderStyle.SINGLE) -> "BorderChars":
        horizontal = "=" if style is BorderStyle.DOUBLE else "-"
        return BorderChars(horizontal, "|", "+", "+", "+", "+")

    @staticmethod
    def for_style(style: BorderStyle) -> "BorderChars":
        if style is BorderStyle.DOUBLE:
            return BorderChars.double_line()
        return BorderChars.single_line()

    @staticmethod
    def for_codepage(style: BorderStyle, codepage: Codepage) -> "BorderChars":
        """Box drawing glyphs when the codepage has them, ASCII art otherwise."""
        chars = BorderChars.for_style(style)
        if codepage.can_encode(chars.glyphs()):
            return chars
        logger.debug("Codepage %s lacks %s box glyphs; using ASCII art", codepage.name, style.value)
        return BorderChars.ascii_art(style)

    def glyphs(self) -> str:
        return (
            self.horizontal
            + self.vertical
            + self.top_left
            + self.top_right
            + self.bottom_left
            + self.bottom_right
        )


# =============================================================================
# BOX OPTIONS
# =============================================================================


@dataclass(frozen=True, slots=True)
class BoxOptions:
    """
    Box geometry.

    ``width`` of ``None`` means the paper width of the session.
    """

    style: BorderStyle = DEFAULT_BORDER_STYLE
    width: Optional[int] = None
    margin_left: int = 0
    margin_right: int = 0
    padding_left: int = 0
    padding_right: int = 0
    align: Alignment = DEFAULT_ALIGNMENT

    def __post_init__(self) -> None:
        if not isinstance(self.style, BorderStyle):
            object.__setattr__(self, "style", parse_enum(BorderStyle, self.style, what="Box style"))
        if not isinstance(self.align, Alignment):
            object.__setattr__(self, "align", parse_enum(Alignment, self.align, what="Box align"))
        for name in ("margin_left", "margin_right", "padding_left", "padding_right"):
            _non_negative(name, getattr(self, name), InvalidDimensions)
        if self.width is not None:
            _non_negative("width", self.width, InvalidDimensions)

    @classmethod
    def from_value(cls, value: Union["BoxOptions", Mapping[str, Any], None]) -> "BoxOptions":
        """Build from ``BoxOptions``, a mapping (snake_case or camelCase keys) or None."""
        if value is None:
            return cls()
        if isinstance(value, BoxOptions):
            return value
        if not isinstance(value, Mapping):
            raise InvalidOption(f"Box options must be a BoxOptions or mapping, got {value!r}", value)
        options = _normalize_keys(value)
        unknown = set(options) - {
            "style",
            "width",
            "margin_left",
            "margin_right",
            "padding_left",
            "padding_right",
            "align",
        }
        if unknown:
            raise InvalidOption(f"Unknown box options: {', '.join(sorted(unknown))}", value)
        return cls(**options)

    def outer_width(self, paper_width: int) -> int:
        return paper_width if self.width is None else self.width

    def content_width(self, paper_width: int) -> int:
        """
        Columns available for content.

        Raises:
            InvalidDimensions: If margins and padding leave less than one column.
        """
        width = self.outer_width(paper_width)
        content = width - self.margin_left - self.margin_right - self.padding_left - self.padding_right
        if content < 1:
            logger.debug("Rejected box geometry %r (width %d)", self, width)
            raise InvalidDimensions(
                f"Box width {width} leaves {content} content columns after margins and padding",
                content,
            )
        return content
