"""
slidy/dsl/errors.py -- Error taxonomy for the slidy front end

Every failure the tokenizer/lexer pipeline can report derives from
SlidyError. The lexer attaches the offending token to the error before it
propagates, so callers get line/column context without the handlers having
to know where they are in the file.
"""

from __future__ import annotations

from typing import Optional


class SlidyError(Exception):
    """Base class for all deck parsing errors."""

    def __init__(self, message: str, token: Optional[object] = None):
        super().__init__(message)
        self.message = message
        self.token = token

    def with_token(self, token) -> "SlidyError":
        """Attach the token being processed, unless one is already set."""
        if self.token is None:
            self.token = token
        return self

    @property
    def line(self) -> Optional[int]:
        """1-based line of the offending token, if known."""
        if self.token is None:
            return None
        return self.token.span.line + 1

    def __str__(self) -> str:
        if self.token is None:
            return self.message
        span = self.token.span
        return (
            f"line {span.line + 1}, columns {span.start_col}-{span.end_col} "
            f"({self.token.kind.value}): {self.message}"
        )


class StateError(SlidyError):
    """A directive was used where the current state does not allow it."""

    pass


class ArityError(SlidyError):
    """Wrong number or kind of argument tokens after a directive."""

    pass


class ChannelRangeError(ArityError):
    """A numeric color channel is not an integer in [0, 255]."""

    pass


class ColorResolutionError(SlidyError):
    """A color string is neither #rrggbbaa nor a known color name."""

    pass


class DeckIOError(SlidyError):
    """A deck, import or figure path could not be read."""

    pass


class RecursiveParseError(SlidyError):
    """An imported deck failed to parse."""

    def __init__(self, message: str, path: Optional[object] = None, token=None):
        super().__init__(message, token)
        self.path = path


class ImportCycleError(RecursiveParseError):
    """A deck imports itself, directly or through other decks."""

    pass


class InterchangeError(SlidyError):
    """A JSON interchange document does not describe a valid slideshow."""

    pass


class SerializationError(SlidyError):
    """A slideshow holds content the text language cannot express."""

    pass
