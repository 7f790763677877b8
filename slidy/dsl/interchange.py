"""
slidy/dsl/interchange.py -- JSON interchange format

Decks can also be authored directly as structured data. The JSON shape is
the one the models serialize to:

    {
      "slides": [
        {"bg_color": {"r": 0, "g": 0, "b": 0, "a": 255},
         "sections": [
           {"size": {"x": 0.3, "y": 0.3}, "position": null,
            "sec_main": {"Figure": {"path": "/abs/star.jpg", "rotation": 0.0}}},
           {"size": null, "position": {"x": 0.1, "y": 0.1},
            "sec_main": {"Text": {"text": "Hi\\n", "color": null, "font": null}}}
         ]}
      ],
      "fonts": {},
      "bg_col": null,
      "font_col": null,
      "font_size": null
    }

Both input paths (text language and JSON) produce the same Slideshow type.
A section whose "sec_main" is null is dropped on load.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .errors import DeckIOError, InterchangeError
from .models import Slideshow

logger = logging.getLogger(__name__)


def dump_json(slideshow: Slideshow, indent: int = 2) -> str:
    """Serialize a slideshow to interchange JSON."""
    return slideshow.model_dump_json(indent=indent)


def load_json(text: Union[str, bytes]) -> Slideshow:
    """Build a slideshow from interchange JSON."""
    try:
        return Slideshow.model_validate_json(text)
    except ValidationError as err:
        raise InterchangeError(f"invalid slideshow document: {err}") from err


def load_json_file(path: Union[str, Path], encoding: str = "utf-8") -> Slideshow:
    """Read and validate an interchange JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding=encoding) as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as err:
        raise DeckIOError(f"unable to read {path}: {err}") from err
    slideshow = load_json(text)
    logger.debug("Loaded %s: %d slides", path, len(slideshow.slides))
    return slideshow


def write_json_file(slideshow: Slideshow, path: Union[str, Path], indent: int = 2) -> Path:
    """Write a slideshow as interchange JSON and return the path."""
    path = Path(path)
    path.write_text(dump_json(slideshow, indent=indent) + "\n", encoding="utf-8")
    return path
