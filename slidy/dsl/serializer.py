"""
slidy/dsl/serializer.py -- slidy serializer

Converts Slideshow → slidy text. Enables round-tripping:
  parse(serialize(parse(text))) == parse(text)

Colors are always written as #rrggbbaa and sizes as explicit x y pairs.
Font names (the fonts table and per-section fonts) have no directive and
are dropped.
"""

from __future__ import annotations

import logging

from .errors import SerializationError
from .models import Color, Section, SectionFigure, Slide, Slideshow, Vec2
from .tokenizer import TokenKind, build_token

logger = logging.getLogger(__name__)


def _num(value: float) -> str:
    return repr(float(value))


def _pair(directive: str, v: Vec2) -> list[str]:
    return [directive, _num(v.x), _num(v.y)]


def _color(directive: str, c: Color) -> list[str]:
    return [directive, c.to_hex()]


class SlidySerializer:
    """Converts a Slideshow back to slidy text."""

    def serialize(self, show: Slideshow) -> str:
        """Serialize a full slideshow to slidy text."""
        lines = self._defaults(show)
        for slide in show.slides:
            lines.extend(self._slide(slide))
        if show.fonts:
            logger.debug("Dropping %d font table entries", len(show.fonts))
        return "\n".join(lines) + "\n" if lines else ""

    def serialize_slide(self, slide: Slide) -> str:
        """Serialize a single slide."""
        return "\n".join(self._slide(slide)) + "\n"

    # ── Defaults ───────────────────────────────────────────────────

    def _defaults(self, show: Slideshow) -> list[str]:
        words: list[str] = []
        if show.bg_col:
            words += _color(":bc", show.bg_col)
        if show.font_col:
            words += _color(":fc", show.font_col)
        if show.font_size:
            words += _pair(":sz", show.font_size)
        if not words:
            return []
        return [" ".join([":ge", *words])]

    # ── Slide ──────────────────────────────────────────────────────

    def _slide(self, s: Slide) -> list[str]:
        head = [":sl"]
        if s.bg_color:
            head += _color(":bc", s.bg_color)
        lines = [" ".join(head)]
        for section in s.sections:
            lines.extend(self._section(section))
        return lines

    def _section(self, section: Section) -> list[str]:
        geometry: list[str] = []
        if section.position:
            geometry += _pair(":ps", section.position)
        if section.size:
            geometry += _pair(":sz", section.size)

        body = section.sec_main
        if isinstance(body, SectionFigure):
            head = [":fg", self._path(body.path), *geometry]
            if body.rotation:
                head += [":rt", _num(body.rotation)]
            return [" ".join(head)]

        head = [":tb", *geometry]
        if body.color:
            head += _color(":fc", body.color)
        return [" ".join(head), *self._text_lines(body.text)]

    # ── Payloads ───────────────────────────────────────────────────

    @staticmethod
    def _path(path: str) -> str:
        words = path.split()
        if len(words) != 1 or words[0] != path:
            raise SerializationError(f"figure path {path!r} contains whitespace")
        # A path must read back as a plain string, not a number or directive.
        if build_token(path, 0, 0, 0).kind is not TokenKind.STRING:
            raise SerializationError(f"figure path {path!r} would not read back as a path")
        return path

    @staticmethod
    def _text_lines(text: str) -> list[str]:
        if not text:
            return []
        body = text[:-1] if text.endswith("\n") else text
        lines = []
        for line in body.split("\n"):
            if "\\:" in line:
                raise SerializationError(f"text line {line!r} holds a literal '\\:'")
            if line.endswith("\r"):
                raise SerializationError(f"text line {line!r} ends with a carriage return")
            if line.startswith("#"):
                raise SerializationError(f"text line {line!r} would read back as a comment")
            lines.append(line.replace(":", "\\:"))
        return lines
