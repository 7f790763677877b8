"""
slidy/dsl/tokenizer.py -- Tokenizer for the slidy text language

Purely lexical: knows nothing about slides or sections.

  - A line without any unescaped ':' is a single token, kept verbatim:
    a Comment if it starts with '#', a TextLine otherwise.
  - A line holding a directive marker is split on whitespace and each word
    is classified as a directive mnemonic, a Number or a String.

A ':' can be escaped with a backslash (``\\:ge``) to keep it inside text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TokenKind(str, Enum):
    GENERIC = "generic"
    FONT_COLOR = "font_color"
    BACKGROUND_COLOR = "background_color"
    SLIDE = "slide"
    SIZE = "size"
    TEXT_BUFFER = "text_buffer"
    POSITION = "position"
    FIGURE = "figure"
    ROTATION = "rotation"
    IMPORT = "import"
    TEXT_LINE = "text_line"
    COMMENT = "comment"
    STRING = "string"
    NUMBER = "number"


DIRECTIVES: dict[str, TokenKind] = {
    ":ge": TokenKind.GENERIC,
    ":fc": TokenKind.FONT_COLOR,
    ":bc": TokenKind.BACKGROUND_COLOR,
    ":sl": TokenKind.SLIDE,
    ":sz": TokenKind.SIZE,
    ":tb": TokenKind.TEXT_BUFFER,
    ":ps": TokenKind.POSITION,
    ":fg": TokenKind.FIGURE,
    ":rt": TokenKind.ROTATION,
    ":im": TokenKind.IMPORT,
}

# Kinds that carry a payload in Token.value.
PAYLOAD_KINDS = frozenset(
    {TokenKind.TEXT_LINE, TokenKind.COMMENT, TokenKind.STRING, TokenKind.NUMBER}
)

RE_WORD = re.compile(r"\S+")


@dataclass(frozen=True)
class TokenSpan:
    """Where a token came from: 0-based line and byte columns [start, end)."""

    line: int
    start_col: int
    end_col: int


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    span: TokenSpan
    value: Union[str, float, None] = None

    @property
    def is_directive(self) -> bool:
        return self.kind not in PAYLOAD_KINDS

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.value
        return f"{self.kind.value}({self.value!r})"


# ── Classification ─────────────────────────────────────────────────


def _parse_number(word: str) -> Optional[float]:
    # float() would accept digit separators ("1_000"); the language does not.
    if "_" in word:
        return None
    try:
        return float(word)
    except ValueError:
        return None


def build_token(word: str, line: int, start: int, end: int) -> Token:
    """Classify a single whitespace-delimited word."""
    span = TokenSpan(line, start, end)
    kind = DIRECTIVES.get(word)
    if kind is not None:
        return Token(kind, span)
    number = _parse_number(word)
    if number is not None:
        return Token(TokenKind.NUMBER, span, number)
    return Token(TokenKind.STRING, span, word)


# ── Line handling ──────────────────────────────────────────────────


def has_directive_marker(line: str) -> bool:
    """True if the line holds a ':' that is not escaped by a backslash.

    A ':' at the very start of the line, or right after an escaped colon,
    always counts as a marker.
    """
    start = 0
    while start < len(line):
        col = line.find(":", start)
        if col < 0:
            return False
        if col > 0 and line[col - 1] == "\\":
            start = col + 1
            continue
        return True
    return False


def _byte_col(line: str, idx: int) -> int:
    if line.isascii():
        return idx
    return len(line[:idx].encode("utf-8"))


def tokenize_line(line: str, line_num: int) -> list[Token]:
    """Tokenize a single line (without its newline)."""
    if not has_directive_marker(line):
        kind = TokenKind.COMMENT if line.startswith("#") else TokenKind.TEXT_LINE
        return [Token(kind, TokenSpan(line_num, 0, _byte_col(line, len(line))), line)]

    return [
        build_token(
            m.group(0),
            line_num,
            _byte_col(line, m.start()),
            _byte_col(line, m.end()),
        )
        for m in RE_WORD.finditer(line)
    ]


def split_lines(text: str) -> list[str]:
    """Split on '\\n', dropping a trailing '\\r' and the empty tail after a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def tokenize(text: str, first_line: int = 0) -> list[Token]:
    """Turn raw deck text into a flat token list."""
    tokens: list[Token] = []
    for offset, line in enumerate(split_lines(text)):
        tokens.extend(tokenize_line(line, first_line + offset))
    return tokens
