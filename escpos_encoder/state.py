"""
Mutable printer style state for one encoding session.

The state mirrors what the printer believes after every command the session
emitted. Setters on the encoder validate, update this record and emit one
command reflecting the new value. ``restore_commands`` produces the minimal
command sequence that brings the printer from another state back to this
one; the layout engine uses it after splicing sub-encoder output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import List, Optional

from escpos_encoder.codepages import CODEPAGES, DEFAULT_CODEPAGE
from escpos_encoder.commands import charset, positioning, sizing, text_formatting
from escpos_encoder.model.enums import (
    DEFAULT_ALIGNMENT,
    DEFAULT_FONT_SIZE,
    Alignment,
    FontSize,
    UnderlineMode,
)

logger = logging.getLogger(__name__)

__all__ = ["StyleState"]


@dataclass
class StyleState:
    codepage: str = DEFAULT_CODEPAGE
    bold: bool = False
    italic: bool = False
    underline: UnderlineMode = UnderlineMode.OFF
    invert: bool = False
    width: int = 1
    height: int = 1
    align: Alignment = DEFAULT_ALIGNMENT
    size: FontSize = DEFAULT_FONT_SIZE

    def copy(self) -> "StyleState":
        return replace(self)

    def reset(self) -> None:
        """Return every field to its power-on default (as after ESC @)."""
        for f in fields(self):
            setattr(self, f.name, f.default)

    def changed_fields(self, other: "StyleState") -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) != getattr(other, f.name)]

    def restore_commands(
        self, current: "StyleState", codepage_id: Optional[int] = None, emit_align: bool = True
    ) -> bytes:
        """
        Commands that move the printer from ``current`` back to this state.

        Args:
            current: State the printer is in now.
            codepage_id: ESC t identifier of this state's codepage; looked up
                         from ``codepage`` when omitted.
            emit_align: Whether an alignment difference should emit ESC a.

        Returns:
            Concatenated commands, empty when nothing differs.
        """
        out = bytearray()
        changed = set(self.changed_fields(current))
        if "codepage" in changed:
            if codepage_id is None:
                codepage_id = CODEPAGES[self.codepage][0]
            out += charset.select_codepage(codepage_id)
        if "bold" in changed:
            out += text_formatting.bold(self.bold)
        if "italic" in changed:
            out += text_formatting.italic(self.italic)
        if "underline" in changed:
            out += text_formatting.underline(self.underline.value)
        if "invert" in changed:
            out += text_formatting.invert(self.invert)
        if changed & {"width", "height"}:
            out += sizing.character_size(self.width, self.height)
        if "size" in changed:
            out += sizing.select_font(self.size.code)
        if emit_align and "align" in changed:
            out += positioning.justify(self.align.code)
        if out:
            logger.debug("Restoring style fields: %s", ", ".join(sorted(changed)))
        return bytes(out)
