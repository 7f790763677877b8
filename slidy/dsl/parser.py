"""
slidy/dsl/parser.py -- slidy parser

Parses slidy deck text into a Slideshow: tokenize, feed one Lexer, take the
result. Strict: the first malformed directive aborts the whole parse with
an error pointing at the offending token.

Imports (:im) call back into this parser with the imported file's folder as
base folder, so nested relative imports work.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import DeckIOError
from .lexer import Lexer
from .models import Slideshow
from .tokenizer import split_lines, tokenize

logger = logging.getLogger(__name__)


@dataclass
class ParserConfig:
    """Configuration for deck parsing."""

    encoding: str = "utf-8"

    # Imports
    detect_import_cycles: bool = True
    max_import_depth: int = 64


class SlidyParser:
    """Parses slidy text → Slideshow."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()

    def parse(self, text: str, base_folder: Union[str, Path] = ".") -> Slideshow:
        """Parse deck text. Relative figure and import paths resolve against base_folder."""
        return self._parse_text(text, Path(base_folder), ())

    def parse_file(self, path: Union[str, Path]) -> Slideshow:
        """Parse a deck file."""
        path = Path(path)
        return self._parse_file(path, (path.resolve(),))

    def parse_stream(
        self, chunks: Iterable[str], base_folder: Union[str, Path] = "."
    ) -> Slideshow:
        """
        Parse several chunks of text into one slideshow.

        Each chunk must be complete on its own (no directive split from its
        arguments), e.g. one chunk per slide. Line numbers keep counting
        across chunks.
        """
        lexer = Lexer(Path(base_folder), parser=self)
        line = 0
        for chunk in chunks:
            lexer.read_tokens(tokenize(chunk, first_line=line))
            line += len(split_lines(chunk))
        return lexer.take()

    def parse_import(self, path: Path, import_chain: tuple[Path, ...]) -> Slideshow:
        """Parse a deck reached through :im. import_chain already ends with path."""
        return self._parse_file(path, import_chain)

    # ── Internals ──────────────────────────────────────────────────

    def _parse_file(self, path: Path, import_chain: tuple[Path, ...]) -> Slideshow:
        if not path.is_file():
            raise DeckIOError(f"`{path}` is not a file, please provide one")
        try:
            with open(path, "r", encoding=self.config.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as err:
            raise DeckIOError(f"unable to read {path}: {err}") from err

        slideshow = self._parse_text(text, path.parent, import_chain)
        logger.debug("Parsed %s: %d slides", path, len(slideshow.slides))
        return slideshow

    def _parse_text(
        self, text: str, base_folder: Path, import_chain: tuple[Path, ...]
    ) -> Slideshow:
        lexer = Lexer(base_folder, parser=self, import_chain=import_chain)
        lexer.read_tokens(tokenize(text))
        return lexer.take()
