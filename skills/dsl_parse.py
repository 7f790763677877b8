"""
skills/dsl_parse.py — Parse slidy text, files or JSON into a Slideshow.

Wraps slidy.dsl.parser.SlidyParser and slidy.dsl.interchange.
"""

from slidy.dsl.interchange import load_json, load_json_file
from slidy.dsl.models import Slideshow
from slidy.dsl.parser import SlidyParser

_parser = SlidyParser()


def parse_text(text: str, base_folder: str = ".") -> Slideshow:
    """Parse raw slidy text into a Slideshow."""
    return _parser.parse(text, base_folder)


def parse_file(path: str) -> Slideshow:
    """Parse a .slidy file into a Slideshow."""
    return _parser.parse_file(path)


def parse_json(text: str) -> Slideshow:
    """Build a Slideshow from interchange JSON text."""
    return load_json(text)


def parse_json_file(path: str) -> Slideshow:
    """Read an interchange JSON file into a Slideshow."""
    return load_json_file(path)
