"""Tests for the codepage table and transliteration."""

import pytest

from escpos_encoder.codepages import CODEPAGES, DEFAULT_CODEPAGE, resolve, supported_codepages
from escpos_encoder.exceptions import InvalidOption, UnknownCodepage


class TestResolve:
    """Lookup by name."""

    @pytest.mark.parametrize("name", list(CODEPAGES))
    def test_every_listed_codepage_resolves(self, name: str) -> None:
        codepage = resolve(name)
        assert codepage.name == name
        assert codepage.id == CODEPAGES[name][0]
        assert 0 <= codepage.id <= 0xFF

    @pytest.mark.parametrize(
        "alias,canonical",
        [("CP437", "cp437"), ("ISO-8859-6", "iso8859-6"), ("iso8859_6", "iso8859-6"), ("Windows-1252", "windows1252")],
    )
    def test_lookup_ignores_case_and_separators(self, alias: str, canonical: str) -> None:
        assert resolve(alias).name == canonical

    @pytest.mark.parametrize("name", ["cp936", "utf8", "", 437])
    def test_unknown(self, name: object) -> None:
        with pytest.raises(UnknownCodepage):
            resolve(name)  # type: ignore[arg-type]

    def test_identifiers(self) -> None:
        assert resolve("cp437").id == 0x00
        assert resolve("cp858").id == 0x13
        assert resolve("windows1252").id == 0x47

    def test_default_is_cp437(self) -> None:
        assert DEFAULT_CODEPAGE == "cp437"
        assert supported_codepages()[0] == "cp437"

    def test_mapping_is_deterministic(self) -> None:
        assert resolve("cp866").charmap == resolve("cp866").charmap

    @pytest.mark.parametrize("substitute", ["??", "é", 256, -1])
    def test_invalid_substitute(self, substitute: object) -> None:
        with pytest.raises(InvalidOption):
            resolve("cp437", substitute)  # type: ignore[arg-type]


class TestEncode:
    """Transliteration into single bytes."""

    def test_ascii_is_identity_in_cp437(self) -> None:
        text = "Hello, World! 0123456789"
        assert resolve("cp437").encode(text) == text.encode("ascii")

    def test_mapped_characters(self) -> None:
        assert resolve("cp437").encode("é") == b"\x82"
        assert resolve("cp858").encode("5€") == b"5\xd5"
        assert resolve("cp866").encode("Я") == b"\x9f"

    def test_unmapped_characters_substituted_once_each(self) -> None:
        assert resolve("cp437").encode("a€b✓") == b"a?b?"

    def test_custom_substitute(self) -> None:
        assert resolve("cp437", "*").encode("€") == b"*"
        assert resolve("cp437", 0x20).encode("€") == b" "

    @pytest.mark.parametrize("name", list(CODEPAGES))
    def test_one_byte_per_character(self, name: str) -> None:
        codepage = resolve(name)
        text = "Grüße ✓ € " + "".join(sorted(codepage.charmap)[:40])
        assert len(codepage.encode(text)) == len(text)

    @pytest.mark.parametrize("name", list(CODEPAGES))
    def test_charmap_round_trips_through_codec(self, name: str) -> None:
        codepage = resolve(name)
        codec = CODEPAGES[name][1]
        for char, byte in codepage.charmap.items():
            assert bytes([byte]).decode(codec) == char

    def test_can_encode(self) -> None:
        assert resolve("cp437").can_encode("┌─┐")
        assert not resolve("windows1252").can_encode("┌")
