"""
slidy/dsl/models.py -- Pydantic data models for slidy documents

These are the typed representations of a parsed deck. Everything flows
through these models: the lexer produces them, the serializer and the JSON
interchange consume them, renderers read them.

Coordinates are normalized to the render surface:

    (0,0)-----------------(1,0)
      |                     |
      |      (0.8,0.2) -> * |
      | (0.6,0.6) -> *      |
      |                     |
    (0,1)-----------------(1,1)
"""

from __future__ import annotations

import string
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator

from .errors import ColorResolutionError


# ── Geometry ───────────────────────────────────────────────────────


class Vec2(BaseModel):
    """A 2-D pair. Used both for positions and for sizes."""

    x: float
    y: float


# ── Colors ─────────────────────────────────────────────────────────

# Names follow the web-safe palette. Alpha is always opaque.
NAMED_COLORS: dict[str, tuple[int, int, int, int]] = {
    "acqua": (0x00, 0xFF, 0xFF, 0xFF),
    "black": (0x00, 0x00, 0x00, 0xFF),
    "blue": (0x00, 0x00, 0xFF, 0xFF),
    "fuchsia": (0xFF, 0x00, 0xFF, 0xFF),
    "gray": (0x80, 0x80, 0x80, 0xFF),
    "green": (0x00, 0x80, 0x00, 0xFF),
    "lime": (0x00, 0xFF, 0x00, 0xFF),
    "maroon": (0x80, 0x00, 0x00, 0xFF),
    "navy": (0x00, 0x00, 0x80, 0xFF),
    "olive": (0x80, 0x80, 0x00, 0xFF),
    "purple": (0x80, 0x00, 0x80, 0xFF),
    "red": (0xFF, 0x00, 0x00, 0xFF),
    "silver": (0xC0, 0xC0, 0xC0, 0xFF),
    "teal": (0x00, 0x80, 0x80, 0xFF),
    "white": (0xFF, 0xFF, 0xFF, 0xFF),
    "yellow": (0xFF, 0xFF, 0x00, 0xFF),
}

_HEX_DIGITS = set(string.hexdigits)


class Color(BaseModel):
    """RGBA color, one byte per channel."""

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: int = Field(ge=0, le=255)

    @classmethod
    def from_tuple(cls, rgba: tuple[int, int, int, int]) -> Color:
        r, g, b, a = rgba
        return cls(r=r, g=g, b=b, a=a)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#rrggbbaa``."""
        digits = value[1:] if value.startswith("#") else value
        if not all(c in _HEX_DIGITS for c in digits):
            raise ColorResolutionError(
                f"only hexadecimal characters are allowed, got {value!r}"
            )
        if len(digits) != 8:
            raise ColorResolutionError(f"hex colors must look like #rrggbbaa, got {value!r}")
        r, g, b, a = (int(digits[i : i + 2], 16) for i in range(0, 8, 2))
        return cls(r=r, g=g, b=b, a=a)

    @classmethod
    def from_name(cls, name: str) -> Color:
        try:
            return cls.from_tuple(NAMED_COLORS[name.lower()])
        except KeyError:
            raise ColorResolutionError(f"{name!r} is not a known color name") from None

    @classmethod
    def parse(cls, value: str) -> Color:
        """Resolve a bare word: ``#rrggbbaa`` when prefixed by ``#``, else a name."""
        if value.startswith("#"):
            return cls.from_hex(value)
        return cls.from_name(value)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self) -> str:
        return "#" + "".join(f"{c:02x}" for c in self.as_tuple())


# ── Section bodies ─────────────────────────────────────────────────


class SectionText(BaseModel):
    """How a text section looks."""

    kind: Literal["Text"] = Field("Text", exclude=True)
    text: str = ""
    color: Optional[Color] = None
    # Font name, must match a key of Slideshow.fonts. Not interpreted yet.
    font: Optional[str] = None


class SectionFigure(BaseModel):
    """How a figure section looks."""

    kind: Literal["Figure"] = Field("Figure", exclude=True)
    path: str
    rotation: float = 0.0


SectionMain = Annotated[Union[SectionFigure, SectionText], Field(discriminator="kind")]

_SECTION_TAGS = ("Figure", "Text")


# ── Section / Slide ────────────────────────────────────────────────


class Section(BaseModel):
    """
    One visual element of a slide: a block of text or a figure.

    On the wire the body is tagged by kind, e.g.
    ``{"sec_main": {"Text": {"text": "hi\\n", "color": null, "font": null}}}``.
    """

    size: Optional[Vec2] = None
    position: Optional[Vec2] = None
    sec_main: SectionMain

    @field_validator("sec_main", mode="before")
    @classmethod
    def _untag_sec_main(cls, value):
        if isinstance(value, (SectionText, SectionFigure)):
            return value
        if isinstance(value, dict) and len(value) == 1:
            tag, body = next(iter(value.items()))
            if tag in _SECTION_TAGS and isinstance(body, dict):
                return {**body, "kind": tag}
        raise ValueError("sec_main must be tagged as either 'Figure' or 'Text'")

    @field_serializer("sec_main")
    def _tag_sec_main(self, body, info):
        return {body.kind: body.model_dump(mode=info.mode)}

    @property
    def is_text(self) -> bool:
        return isinstance(self.sec_main, SectionText)

    @property
    def is_figure(self) -> bool:
        return isinstance(self.sec_main, SectionFigure)


class Slide(BaseModel):
    """A single slide: an optional background and its sections, in draw order."""

    bg_color: Optional[Color] = None
    sections: list[Section] = Field(default_factory=list)

    @field_validator("sections", mode="before")
    @classmethod
    def _drop_empty_sections(cls, value):
        # Sections written with a null body have nothing to draw.
        if not isinstance(value, list):
            return value
        return [s for s in value if not (isinstance(s, dict) and s.get("sec_main", ...) is None)]


# ── Slideshow ──────────────────────────────────────────────────────


class Slideshow(BaseModel):
    """Full parsed deck = document-wide defaults + ordered slides."""

    slides: list[Slide] = Field(default_factory=list)
    # Font name -> font file path.
    fonts: dict[str, str] = Field(default_factory=dict)
    bg_col: Optional[Color] = None
    font_col: Optional[Color] = None
    font_size: Optional[Vec2] = None
