"""
tests/test_cli.py — Tests for scripts/run_slidy.py and the skills wrappers
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from pptx import Presentation as PptxPresentation

from scripts.run_slidy import main
from skills.dsl_parse import parse_file, parse_json, parse_json_file, parse_text
from skills.dsl_serialize import serialize, serialize_slide, to_json
from skills.render_pptx import render


FIXTURES = Path(__file__).parent / "fixtures"


class TestCli:
    def test_summary(self, capsys):
        assert main([str(FIXTURES / "book.slidy")]) == 0
        out = capsys.readouterr().out
        assert "Slides   : 4" in out

    def test_json(self, capsys):
        assert main([str(FIXTURES / "chapter.slidy"), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["slides"]) == 2

    def test_text(self, capsys):
        assert main([str(FIXTURES / "chapter.slidy"), "--text"]) == 0
        assert capsys.readouterr().out == ":sl\n:tb\nchapter one\n:sl\n:tb\nchapter two\n"

    def test_pptx(self, tmp_path, capsys):
        out = tmp_path / "book.pptx"
        assert main([str(FIXTURES / "book.slidy"), "--pptx", str(out)]) == 0
        assert len(PptxPresentation(str(out)).slides) == 4

    def test_from_json(self, capsys):
        assert main([str(FIXTURES / "interchange.json"), "--from-json", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["fonts"] == {"mono": "/fonts/mono.ttf"}

    def test_parse_error_exit_code(self, capsys):
        assert main([str(FIXTURES / "broken.slidy")]) == 1
        err = capsys.readouterr().err
        assert err.startswith("ERROR: line 2")

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.slidy")]) == 1
        assert "ERROR" in capsys.readouterr().err

    def test_unknown_flag(self):
        with pytest.raises(SystemExit):
            main(["deck.slidy", "--frobnicate"])


class TestSkills:
    def test_parse_text(self):
        show = parse_text(":sl\n:tb\nhello\n")
        assert show.slides[0].sections[0].sec_main.text == "hello\n"

    def test_parse_text_with_base_folder(self):
        show = parse_text(":im chapter.slidy\n", str(FIXTURES))
        assert len(show.slides) == 2

    def test_parse_file_and_serialize(self):
        show = parse_file(str(FIXTURES / "chapter.slidy"))
        assert parse_text(serialize(show)) == show
        assert serialize_slide(show.slides[0]) == ":sl\n:tb\nchapter one\n"

    def test_json_helpers(self):
        show = parse_json_file(str(FIXTURES / "interchange.json"))
        assert parse_json(to_json(show)) == show

    def test_render(self, tmp_path):
        show = parse_file(str(FIXTURES / "chapter.slidy"))
        out = render(show, str(tmp_path / "chapter.pptx"))
        assert len(PptxPresentation(str(out)).slides) == 2
