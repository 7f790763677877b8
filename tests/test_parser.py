"""
tests/test_parser.py — Tests for the slidy parser entry points

Validates parsing of the fixture decks: defaults, imports, nested imports,
import cycles, file errors and streaming.
Run with: pytest tests/test_parser.py -v
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from slidy.dsl.errors import (
    DeckIOError,
    ImportCycleError,
    RecursiveParseError,
    StateError,
)
from slidy.dsl.models import Color, SectionText, Vec2
from slidy.dsl.parser import ParserConfig, SlidyParser


FIXTURES = Path(__file__).parent / "fixtures"


def _texts(show) -> list:
    return [s.sections[0].sec_main.text for s in show.slides]


class TestEndToEnd:
    def test_big_red_title(self):
        show = SlidyParser().parse(":sl\n:tb :sz 40 :fc red\nBig, red title\n")
        assert len(show.slides) == 1
        section = show.slides[0].sections[0]
        assert section.sec_main == SectionText(
            text="Big, red title\n", color=Color(r=255, g=0, b=0, a=255), font=None
        )
        assert section.size.x == pytest.approx(0.048)
        assert section.size.y == pytest.approx(0.24)
        assert section.position is None

    def test_whitespace_preserved(self):
        show = SlidyParser().parse(":sl\n:tb\n    four spaces\n\ttab  \n")
        assert show.slides[0].sections[0].sec_main.text == "    four spaces\n\ttab  \n"

    def test_idempotent(self):
        text = (FIXTURES / "defaults.slidy").read_text(encoding="utf-8")
        first = SlidyParser().parse(text)
        second = SlidyParser().parse(text)
        assert first == second

    def test_same_parser_reused(self):
        parser = SlidyParser()
        assert parser.parse(":sl :tb\nx") == parser.parse(":sl :tb\nx")

    def test_error_aborts_parse(self):
        with pytest.raises(StateError) as exc:
            SlidyParser().parse(":sl\n:tb\nok\n:rt 45\n")
        assert exc.value.line == 4


class TestParseFile:
    def test_defaults_fixture(self):
        show = SlidyParser().parse_file(FIXTURES / "defaults.slidy")
        assert show.bg_col == Color(r=0x10, g=0x18, b=0x20, a=0xFF)
        assert show.font_col == Color.from_name("white")
        assert show.font_size == Vec2(x=0.02, y=0.09)
        assert len(show.slides) == 2

        first, second = show.slides
        assert first.bg_color is None
        assert first.sections[0].position == Vec2(x=0.1, y=0.1)
        # The blank line before the next :sl belongs to the text section.
        assert first.sections[0].sec_main.text == "Opening slide\n  indented line\n\n"
        assert second.bg_color == Color.from_name("navy")
        assert second.sections[0].sec_main.color == Color.from_name("yellow")

    def test_accepts_str_path(self):
        show = SlidyParser().parse_file(str(FIXTURES / "chapter.slidy"))
        assert _texts(show) == ["chapter one\n", "chapter two\n"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(DeckIOError):
            SlidyParser().parse_file(tmp_path / "missing.slidy")

    def test_directory_is_not_a_deck(self, tmp_path):
        with pytest.raises(DeckIOError):
            SlidyParser().parse_file(tmp_path)

    def test_undecodable_file(self, tmp_path):
        deck = tmp_path / "latin1.slidy"
        deck.write_bytes(":sl\n:tb\ncaf\xe9\n".encode("latin-1"))
        with pytest.raises(DeckIOError):
            SlidyParser().parse_file(deck)

    def test_configured_encoding(self, tmp_path):
        deck = tmp_path / "latin1.slidy"
        deck.write_bytes(":sl\n:tb\ncaf\xe9\n".encode("latin-1"))
        show = SlidyParser(ParserConfig(encoding="latin-1")).parse_file(deck)
        assert _texts(show) == ["caf\xe9\n"]

    def test_figures_resolve_against_deck_folder(self, tmp_path):
        (tmp_path / "img").mkdir()
        (tmp_path / "img" / "logo.png").write_bytes(b"x")
        deck = tmp_path / "deck.slidy"
        deck.write_text(":sl\n:fg img/logo.png\n", encoding="utf-8")
        show = SlidyParser().parse_file(deck)
        path = show.slides[0].sections[0].sec_main.path
        assert path == str((tmp_path / "img" / "logo.png").resolve())


class TestImports:
    def test_splice_order(self):
        show = SlidyParser().parse_file(FIXTURES / "book.slidy")
        assert _texts(show) == ["cover\n", "chapter one\n", "chapter two\n", "back\n"]

    def test_import_from_text_uses_base_folder(self):
        show = SlidyParser().parse(":sl\n:tb\nintro\n:im chapter.slidy\n", FIXTURES)
        assert _texts(show) == ["intro\n", "chapter one\n", "chapter two\n"]

    def test_nested_relative_imports(self):
        show = SlidyParser().parse_file(FIXTURES / "nested" / "outer.slidy")
        assert _texts(show) == ["leaf\n", "inner\n"]

    def test_import_leaves_no_open_slide(self):
        show = SlidyParser().parse(":sl\n:tb\nbefore\n:im chapter.slidy\n:sl\n", FIXTURES)
        assert len(show.slides) == 4
        assert show.slides[-1].sections == []

    def test_imported_defaults_are_not_merged(self, tmp_path):
        (tmp_path / "styled.slidy").write_text(":ge :bc red\n:sl\n", encoding="utf-8")
        show = SlidyParser().parse(":im styled.slidy", tmp_path)
        assert show.bg_col is None
        assert len(show.slides) == 1

    def test_missing_import(self, tmp_path):
        with pytest.raises(DeckIOError):
            SlidyParser().parse(":im nowhere.slidy", tmp_path)

    def test_import_path_with_nul_byte(self, tmp_path):
        with pytest.raises(DeckIOError) as exc:
            SlidyParser().parse(":sl\n:im a\x00b.slidy\n", tmp_path)
        assert exc.value.line == 2

    def test_nested_error_is_wrapped(self):
        with pytest.raises(RecursiveParseError) as exc:
            SlidyParser().parse_file(FIXTURES / "broken_import.slidy")
        err = exc.value
        assert err.line == 2
        assert isinstance(err.__cause__, StateError)
        assert err.__cause__.line == 2
        assert err.path == (FIXTURES / "broken.slidy").resolve()

    def test_self_import(self):
        with pytest.raises(ImportCycleError):
            SlidyParser().parse_file(FIXTURES / "self_import.slidy")

    def test_mutual_import(self):
        with pytest.raises(ImportCycleError) as exc:
            SlidyParser().parse_file(FIXTURES / "cycle_a.slidy")
        assert "cycle_a.slidy" in str(exc.value)

    def test_depth_limit_without_cycle_detection(self):
        config = ParserConfig(detect_import_cycles=False, max_import_depth=8)
        with pytest.raises(RecursiveParseError):
            SlidyParser(config).parse_file(FIXTURES / "self_import.slidy")

    def test_diamond_is_not_a_cycle(self, tmp_path):
        (tmp_path / "shared.slidy").write_text(":sl\n:tb\nshared\n", encoding="utf-8")
        (tmp_path / "left.slidy").write_text(":im shared.slidy\n", encoding="utf-8")
        (tmp_path / "right.slidy").write_text(":im shared.slidy\n", encoding="utf-8")
        deck = tmp_path / "top.slidy"
        deck.write_text(":im left.slidy\n:im right.slidy\n", encoding="utf-8")
        show = SlidyParser().parse_file(deck)
        assert _texts(show) == ["shared\n", "shared\n"]


class TestParseStream:
    def test_chunks_build_one_deck(self):
        chunks = [":ge :fc red\n", ":sl\n:tb\none\n", ":sl\n:tb\ntwo\n"]
        show = SlidyParser().parse_stream(chunks)
        assert show.font_col == Color.from_name("red")
        assert _texts(show) == ["one\n", "two\n"]

    def test_line_numbers_continue(self):
        chunks = [":sl\n:tb\n", "text\n:rt 1\n"]
        with pytest.raises(StateError) as exc:
            SlidyParser().parse_stream(chunks)
        assert exc.value.line == 4
