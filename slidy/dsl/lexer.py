"""
slidy/dsl/lexer.py -- Token stream -> Slideshow

The Lexer is a small state machine. It owns the slideshow being built and
the slide currently open, and offers the mutation helpers every directive
handler goes through. Handlers live in handlers.py and are looked up by
token kind.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from .errors import (
    ArityError,
    DeckIOError,
    ImportCycleError,
    RecursiveParseError,
    SlidyError,
    StateError,
)
from .handlers import HANDLERS
from .models import Section, SectionFigure, SectionText, Slide, Slideshow
from .state import CurrentState
from .tokenizer import Token

if TYPE_CHECKING:
    from .parser import SlidyParser

logger = logging.getLogger(__name__)

# Widest argument list a directive can read: an r g b a color.
MAX_ARGUMENTS = 4


class Lexer:
    """
    Builds a Slideshow out of tokens.

    read_tokens() may be called several times, e.g. once per slide or per
    file, as long as each batch carries the arguments of its own directives.
    take() closes the open slide and hands the slideshow over.
    """

    def __init__(
        self,
        base_folder: Union[str, Path] = ".",
        parser: Optional[SlidyParser] = None,
        import_chain: tuple[Path, ...] = (),
    ):
        self.base_folder = Path(base_folder)
        self.parser = parser
        # Resolved paths of the decks currently being parsed, outermost first.
        self.import_chain = import_chain
        self.slideshow = Slideshow()
        self.state = CurrentState.NONE
        self.slide: Optional[Slide] = None

    # ── Mutation helpers ───────────────────────────────────────────

    def enter(self, state: CurrentState) -> None:
        self.state = state

    def flush_slide(self) -> None:
        """Move the open slide, if any, into the slideshow."""
        if self.slide is not None:
            logger.debug(
                "Pushing slide %d (%d sections)",
                len(self.slideshow.slides),
                len(self.slide.sections),
            )
            self.slideshow.slides.append(self.slide)
            self.slide = None

    def open_slide(self) -> Slide:
        self.flush_slide()
        self.slide = Slide()
        return self.slide

    def current_slide(self) -> Slide:
        if self.slide is None:
            raise StateError("please create a slide first (:sl)")
        return self.slide

    def last_section(self) -> Section:
        slide = self.current_slide()
        if not slide.sections:
            raise StateError("no section in the current slide yet (:tb or :fg)")
        return slide.sections[-1]

    def push_section(self, body: Union[SectionText, SectionFigure]) -> Section:
        section = Section(sec_main=body)
        self.current_slide().sections.append(section)
        return section

    def import_deck(self, path: Path) -> Slideshow:
        """Parse another deck file for :im, guarding against import cycles."""
        if self.parser is None:
            from .parser import SlidyParser

            self.parser = SlidyParser()
        config = self.parser.config

        try:
            resolved = path.resolve(strict=True)
        except (OSError, ValueError) as err:
            raise DeckIOError(f"unable to import {path}: {err}") from err

        if config.detect_import_cycles and resolved in self.import_chain:
            cycle = " -> ".join(str(p) for p in (*self.import_chain, resolved))
            raise ImportCycleError(f"import cycle: {cycle}", path=resolved)
        if len(self.import_chain) >= config.max_import_depth:
            raise RecursiveParseError(
                f"imports nested deeper than {config.max_import_depth} levels", path=resolved
            )

        logger.debug("Importing %s", resolved)
        try:
            return self.parser.parse_import(resolved, (*self.import_chain, resolved))
        except SlidyError as err:
            cls = ImportCycleError if isinstance(err, ImportCycleError) else RecursiveParseError
            raise cls(f"while importing {resolved}: {err}", path=resolved) from err

    # ── Driving ────────────────────────────────────────────────────

    def read_tokens(self, tokens: Sequence[Token]) -> None:
        """
        Apply the tokens, left to right.

        Stops at the first error, which carries the offending token. Tokens
        applied before it are not rolled back.
        """
        idx = 0
        while idx < len(tokens):
            token = tokens[idx]
            args = tokens[idx + 1 : idx + 1 + MAX_ARGUMENTS]
            try:
                handler = HANDLERS.get(token.kind)
                if handler is None:
                    raise ArityError(
                        "found a literal that no directive claims as its argument"
                    )
                skip = handler(self, token, args)
            except SlidyError as err:
                err.with_token(token)
                raise
            idx += 1 + skip

    def take(self) -> Slideshow:
        """Close the open slide and return the slideshow."""
        self.flush_slide()
        return self.slideshow
