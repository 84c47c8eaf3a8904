"""
Codepage table and text transliteration for ESC/POS printers.

Each supported codepage pairs the printer's ``ESC t n`` identifier with a
character-to-byte map built from the matching Python codec. Only
single-byte codepages are supported: every character becomes exactly one
byte, which keeps column arithmetic in tables and boxes exact.

Characters the codepage cannot represent are replaced by a substitute byte
(``?`` by default), once per unmapped character.

Example:
    >>> from escpos_encoder.codepages import resolve
    >>> cp = resolve("cp858")
    >>> cp.id
    19
    >>> cp.encode("5€")
    b'5\\xd5'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Final, Mapping, Tuple

from escpos_encoder.exceptions import InvalidOption, UnknownCodepage

logger = logging.getLogger(__name__)

__all__ = [
    "Codepage",
    "CODEPAGES",
    "DEFAULT_CODEPAGE",
    "DEFAULT_SUBSTITUTE",
    "resolve",
    "supported_codepages",
]

DEFAULT_CODEPAGE: Final[str] = "cp437"
DEFAULT_SUBSTITUTE: Final[int] = 0x3F  # '?'

# name -> (ESC t identifier, Python codec)
CODEPAGES: Final[Mapping[str, Tuple[int, str]]] = MappingProxyType(
    {
        "cp437": (0x00, "cp437"),
        "cp737": (0x40, "cp737"),
        "cp850": (0x02, "cp850"),
        "cp775": (0x5F, "cp775"),
        "cp852": (0x12, "cp852"),
        "cp855": (0x3C, "cp855"),
        "cp857": (0x3D, "cp857"),
        "cp858": (0x13, "cp858"),
        "cp860": (0x03, "cp860"),
        "cp861": (0x38, "cp861"),
        "cp862": (0x3E, "cp862"),
        "cp863": (0x04, "cp863"),
        "cp864": (0x1C, "cp864"),
        "cp865": (0x05, "cp865"),
        "cp866": (0x11, "cp866"),
        "cp869": (0x42, "cp869"),
        "cp1252": (0x10, "cp1252"),
        "iso8859-6": (0x16, "iso8859_6"),
        "windows874": (0x1E, "cp874"),
        "windows1250": (0x48, "cp1250"),
        "windows1251": (0x49, "cp1251"),
        "windows1252": (0x47, "cp1252"),
        "windows1253": (0x5A, "cp1253"),
        "windows1254": (0x5B, "cp1254"),
        "windows1255": (0x20, "cp1255"),
        "windows1256": (0x5C, "cp1256"),
        "windows1257": (0x19, "cp1257"),
        "windows1258": (0x5E, "cp1258"),
    }
)


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "").replace("_", "")


_LOOKUP: Final[Mapping[str, str]] = MappingProxyType(
    {_normalize(name): name for name in CODEPAGES}
)


@dataclass(frozen=True)
class Codepage:
    """
    One resolved codepage.

    Attributes:
        name: Canonical table name (e.g. ``"cp437"``).
        id: Parameter n of ESC t n.
        charmap: Character to output byte, for every byte the codec decodes.
        substitute: Byte emitted for characters absent from ``charmap``.
    """

    name: str
    id: int
    charmap: Mapping[str, int] = field(repr=False)
    substitute: int = DEFAULT_SUBSTITUTE

    def encode_char(self, char: str) -> int:
        byte = self.charmap.get(char)
        if byte is not None:
            return byte
        if ord(char) < 0x80:
            return ord(char)
        return self.substitute

    def encode(self, text: str) -> bytes:
        """Transliterate ``text``; one output byte per input character."""
        return bytes(self.encode_char(ch) for ch in text)

    def can_encode(self, text: str) -> bool:
        return all(ch in self.charmap or ord(ch) < 0x80 for ch in text)


@lru_cache(maxsize=None)
def _build_charmap(codec: str) -> Mapping[str, int]:
    # Decode every byte value; the first byte producing a character wins.
    decoded = bytes(range(256)).decode(codec, errors="replace")
    charmap: dict[str, int] = {}
    for byte, char in enumerate(decoded):
        if char == "\ufffd":
            continue
        charmap.setdefault(char, byte)
    return MappingProxyType(charmap)


def resolve(name: str, substitute: int | str = DEFAULT_SUBSTITUTE) -> Codepage:
    """
    Look up a codepage by name.

    Lookup ignores case and ``-``/``_`` separators, so ``"ISO-8859-6"``,
    ``"iso8859_6"`` and ``"iso88596"`` are the same codepage.

    Args:
        name: Codepage name (see ``CODEPAGES``).
        substitute: Byte (or single ASCII character) for unmappable characters.

    Returns:
        The resolved ``Codepage``.

    Raises:
        UnknownCodepage: If ``name`` is not supported.
        InvalidOption: If ``substitute`` is not a single byte.
    """
    if not isinstance(name, str):
        raise UnknownCodepage(f"Codepage name must be a string, got {name!r}", name)
    canonical = _LOOKUP.get(_normalize(name))
    if canonical is None:
        logger.debug("Unknown codepage requested: %r", name)
        raise UnknownCodepage(
            f"Unknown codepage {name!r}; supported: {', '.join(CODEPAGES)}", name
        )
    if isinstance(substitute, str):
        if len(substitute) != 1 or ord(substitute) > 0x7F:
            raise InvalidOption(
                f"Substitute must be one ASCII character, got {substitute!r}",
                substitute,
            )
        substitute = ord(substitute)
    if not 0 <= substitute <= 0xFF:
        raise InvalidOption(f"Substitute must be a byte, got {substitute!r}", substitute)

    identifier, codec = CODEPAGES[canonical]
    return Codepage(canonical, identifier, _build_charmap(codec), substitute)


def supported_codepages() -> Tuple[str, ...]:
    return tuple(CODEPAGES)
