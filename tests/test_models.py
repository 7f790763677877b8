"""
tests/test_models.py — Tests for the slidy document models

Covers color resolution and the tagged section body.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from pydantic import ValidationError

from slidy.dsl.errors import ColorResolutionError
from slidy.dsl.models import (
    NAMED_COLORS,
    Color,
    Section,
    SectionFigure,
    SectionText,
    Slide,
    Slideshow,
    Vec2,
)


class TestColor:
    def test_hex(self):
        assert Color.from_hex("#ff8000c0").as_tuple() == (255, 128, 0, 192)

    def test_hex_uppercase(self):
        assert Color.parse("#FF8000C0") == Color.parse("#ff8000c0")

    def test_hex_wrong_length(self):
        with pytest.raises(ColorResolutionError):
            Color.parse("#ff8000")

    def test_hex_bad_digit(self):
        with pytest.raises(ColorResolutionError) as exc:
            Color.parse("#ff80zzc0")
        assert "hexadecimal" in exc.value.message

    def test_bare_hex_is_a_name(self):
        with pytest.raises(ColorResolutionError):
            Color.parse("ff8000c0")

    @pytest.mark.parametrize("name", sorted(NAMED_COLORS))
    def test_named_colors_are_opaque(self, name):
        assert Color.parse(name).a == 255

    def test_name_case_insensitive(self):
        assert Color.parse("Teal") == Color.parse("teal")

    def test_to_hex(self):
        assert Color(r=1, g=2, b=255, a=16).to_hex() == "#0102ff10"

    def test_hex_round_trip(self):
        color = Color(r=12, g=34, b=56, a=78)
        assert Color.parse(color.to_hex()) == color

    def test_channel_range_validated(self):
        with pytest.raises(ValidationError):
            Color(r=300, g=0, b=0, a=0)


class TestSection:
    def test_text_defaults(self):
        section = Section(sec_main=SectionText())
        assert section.is_text
        assert not section.is_figure
        assert section.sec_main.text == ""
        assert section.size is None and section.position is None

    def test_figure_defaults(self):
        section = Section(sec_main=SectionFigure(path="/a.png"))
        assert section.is_figure
        assert section.sec_main.rotation == 0.0

    def test_dump_tags_body(self):
        section = Section(position=Vec2(x=0.1, y=0.2), sec_main=SectionText(text="hi\n"))
        assert section.model_dump() == {
            "size": None,
            "position": {"x": 0.1, "y": 0.2},
            "sec_main": {"Text": {"text": "hi\n", "color": None, "font": None}},
        }

    def test_validate_tagged_body(self):
        section = Section.model_validate(
            {"sec_main": {"Figure": {"path": "/a.png", "rotation": 90}}}
        )
        assert section.sec_main == SectionFigure(path="/a.png", rotation=90.0)

    @pytest.mark.parametrize(
        "sec_main",
        [
            {"Image": {"path": "/a.png"}},
            {"Text": {}, "Figure": {"path": "/a.png"}},
            {"text": "untagged"},
            "Text",
        ],
    )
    def test_invalid_tags(self, sec_main):
        with pytest.raises(ValidationError):
            Section.model_validate({"sec_main": sec_main})

    def test_figure_requires_path(self):
        with pytest.raises(ValidationError):
            Section.model_validate({"sec_main": {"Figure": {}}})


class TestSlideshow:
    def test_empty(self):
        show = Slideshow()
        assert show.slides == []
        assert show.fonts == {}
        assert show.bg_col is None and show.font_col is None and show.font_size is None

    def test_slides_are_independent(self):
        a, b = Slide(), Slide()
        a.sections.append(Section(sec_main=SectionText()))
        assert b.sections == []
