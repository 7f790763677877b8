"""
slidy/dsl/handlers.py -- One handler per directive

Each handler receives the lexer, the directive token and the window of
tokens that follow it. It validates the directive against the lexer state,
reads its arguments and returns how many of the following tokens it consumed
(the skip count). Handlers raise a SlidyError subclass on any problem and do
not touch the document before all checks have passed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Callable

from .errors import (
    ArityError,
    ChannelRangeError,
    ColorResolutionError,
    DeckIOError,
    StateError,
)
from .models import Color, SectionFigure, SectionText, Vec2
from .state import CurrentState
from .tokenizer import Token, TokenKind

if TYPE_CHECKING:
    from .lexer import Lexer

logger = logging.getLogger(__name__)

Handler = Callable[["Lexer", Token, Sequence[Token]], int]

# Legacy "font size" scalar: a size of 10 is a 0.012 x 0.06 glyph cell.
FONT_SIZE_UNIT = 10.0
FONT_CELL_X = 0.012
FONT_CELL_Y = 0.06


# ── Argument extraction ────────────────────────────────────────────


def take_number(args: Sequence[Token], idx: int, what: str) -> float:
    """Read args[idx] as a number."""
    if idx >= len(args):
        raise ArityError(f"{what} is missing a number argument")
    token = args[idx]
    if token.kind is not TokenKind.NUMBER:
        raise ArityError(f"{what} expects a number, found {token}")
    return token.value  # type: ignore[return-value]


def take_path(args: Sequence[Token], what: str) -> str:
    """Read the path argument of :fg / :im."""
    if not args or args[0].kind is not TokenKind.STRING:
        found = str(args[0]) if args else "nothing"
        raise ArityError(f"{what} must be followed by a path, found {found}")
    return args[0].value  # type: ignore[return-value]


def extract_channel(token: Token) -> int:
    """A color channel must be an integral number in [0, 255]."""
    if token.kind is not TokenKind.NUMBER:
        raise ArityError(f"expected a color channel, found {token}")
    value = token.value
    if not value.is_integer() or not 0 <= value <= 255:  # type: ignore[union-attr]
        raise ChannelRangeError(f"color channels are integers in [0, 255], found {value}")
    return int(value)  # type: ignore[arg-type]


def get_size(args: Sequence[Token]) -> tuple[Vec2, int]:
    """
    Read a size: either an explicit ``x y`` pair, or a single font size
    scalar that is turned into a glyph cell.
    """
    if not args:
        raise ArityError("size must be followed by 1 or 2 numbers")
    first = take_number(args, 0, "size")
    if len(args) > 1 and args[1].kind is TokenKind.NUMBER:
        return Vec2(x=first, y=args[1].value), 2
    scale = first / FONT_SIZE_UNIT
    return Vec2(x=scale * FONT_CELL_X, y=scale * FONT_CELL_Y), 1


def get_color(args: Sequence[Token]) -> tuple[Color, int]:
    """
    Read a color: four channel numbers (r g b a) or one bare word
    (``#rrggbbaa`` or a color name).
    """
    problems: list[str] = []
    range_error = False

    if len(args) >= 4:
        try:
            r, g, b, a = (extract_channel(t) for t in args[:4])
        except ChannelRangeError as err:
            range_error = True
            problems.append(f"4 tokens found, but {err.message}")
        except ArityError as err:
            problems.append(f"4 tokens found, but {err.message}")
        else:
            return Color(r=r, g=g, b=b, a=a), 4

    if not args:
        raise ArityError("not enough tokens to read a color")

    first = args[0]
    if first.kind is TokenKind.STRING:
        try:
            return Color.parse(first.value), 1  # type: ignore[arg-type]
        except ColorResolutionError as err:
            problems.append(f"unable to read a color out of a string: {err.message}")
            raise ColorResolutionError("; ".join(problems)) from err

    problems.append(f"{first} is not a color string")
    if range_error:
        raise ChannelRangeError("; ".join(problems))
    raise ArityError("; ".join(problems))


def _require_state(lexer: Lexer, allowed: frozenset, message: str) -> None:
    if lexer.state not in allowed:
        raise StateError(f"{message} (current state: {lexer.state.value})")


# ── Handlers ───────────────────────────────────────────────────────


def manage_generic(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    lexer.enter(CurrentState.GENERAL)
    return 0


def manage_slide(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    lexer.open_slide()
    lexer.enter(CurrentState.SLIDE)
    return 0


def manage_text_buffer(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    lexer.push_section(SectionText())
    lexer.enter(CurrentState.TEXT)
    return 0


def manage_text_line(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    line: str = token.value  # type: ignore[assignment]
    if lexer.state is not CurrentState.TEXT:
        # Blank lines between sections are fine anywhere.
        if not line.strip():
            return 0
        raise StateError("a text line only makes sense inside a text section (:tb)")

    body = lexer.last_section().sec_main
    if not isinstance(body, SectionText):
        raise StateError("in a text section, but the last section is not a text")
    body.text += line.replace("\\:", ":") + "\n"
    return 0


def manage_figure(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    lexer.current_slide()
    raw = take_path(args, "a figure")
    try:
        path = (lexer.base_folder / raw).resolve(strict=True)
    except (OSError, ValueError) as err:
        raise DeckIOError(f"figure {raw!r} not found in {lexer.base_folder}: {err}") from err

    lexer.push_section(SectionFigure(path=str(path)))
    lexer.enter(CurrentState.FIGURE)
    return 1


def manage_position(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    _require_state(
        lexer,
        frozenset({CurrentState.TEXT, CurrentState.FIGURE}),
        "position only makes sense for text and figures",
    )
    section = lexer.last_section()
    x = take_number(args, 0, "position")
    y = take_number(args, 1, "position")
    section.position = Vec2(x=x, y=y)
    return 2


def manage_size(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    _require_state(
        lexer,
        frozenset({CurrentState.GENERAL, CurrentState.TEXT, CurrentState.FIGURE}),
        "size only makes sense in general, text and figure sections",
    )
    if lexer.state is CurrentState.GENERAL:
        size, skip = get_size(args)
        lexer.slideshow.font_size = size
        return skip

    section = lexer.last_section()
    size, skip = get_size(args)
    section.size = size
    return skip


def manage_rotation(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    _require_state(
        lexer,
        frozenset({CurrentState.FIGURE}),
        "rotation only makes sense in a figure section",
    )
    body = lexer.last_section().sec_main
    if not isinstance(body, SectionFigure):
        raise StateError("in a figure section, but the last section is not a figure")
    body.rotation = take_number(args, 0, "rotation")
    return 1


def manage_font_color(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    _require_state(
        lexer,
        frozenset({CurrentState.GENERAL, CurrentState.TEXT}),
        "font color only makes sense in general and text sections",
    )
    if lexer.state is CurrentState.GENERAL:
        color, skip = get_color(args)
        lexer.slideshow.font_col = color
        return skip

    body = lexer.last_section().sec_main
    if not isinstance(body, SectionText):
        raise StateError("in a text section, but the last section is not a text")
    color, skip = get_color(args)
    body.color = color
    return skip


def manage_bg_color(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    _require_state(
        lexer,
        frozenset({CurrentState.GENERAL, CurrentState.SLIDE}),
        "background color only makes sense in general and slide sections",
    )
    if lexer.state is CurrentState.GENERAL:
        color, skip = get_color(args)
        lexer.slideshow.bg_col = color
        return skip

    slide = lexer.current_slide()
    color, skip = get_color(args)
    slide.bg_color = color
    return skip


def manage_import(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    raw = take_path(args, "an import")
    # The open slide goes before the imported ones.
    lexer.flush_slide()
    imported = lexer.import_deck(lexer.base_folder / raw)
    logger.debug("Splicing %d imported slide(s) from %s", len(imported.slides), raw)
    lexer.slideshow.slides.extend(imported.slides)
    lexer.enter(CurrentState.IMPORT)
    return 1


def manage_comment(lexer: Lexer, token: Token, args: Sequence[Token]) -> int:
    return 0


# ── Dispatch Table ─────────────────────────────────────────────────

# STRING and NUMBER have no handler: a literal is only valid as the
# argument of the directive before it.
HANDLERS: dict[TokenKind, Handler] = {
    TokenKind.GENERIC: manage_generic,
    TokenKind.SLIDE: manage_slide,
    TokenKind.TEXT_BUFFER: manage_text_buffer,
    TokenKind.TEXT_LINE: manage_text_line,
    TokenKind.FIGURE: manage_figure,
    TokenKind.POSITION: manage_position,
    TokenKind.SIZE: manage_size,
    TokenKind.ROTATION: manage_rotation,
    TokenKind.FONT_COLOR: manage_font_color,
    TokenKind.BACKGROUND_COLOR: manage_bg_color,
    TokenKind.IMPORT: manage_import,
    TokenKind.COMMENT: manage_comment,
}
