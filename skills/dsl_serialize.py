"""
skills/dsl_serialize.py — Serialize a Slideshow back to slidy text or JSON.

Wraps slidy.dsl.serializer.SlidySerializer and slidy.dsl.interchange.
"""

from slidy.dsl.interchange import dump_json
from slidy.dsl.models import Slide, Slideshow
from slidy.dsl.serializer import SlidySerializer

_serializer = SlidySerializer()


def serialize(slideshow: Slideshow) -> str:
    """Serialize a full slideshow to slidy text."""
    return _serializer.serialize(slideshow)


def serialize_slide(slide: Slide) -> str:
    """Serialize a single slide to slidy text."""
    return _serializer.serialize_slide(slide)


def to_json(slideshow: Slideshow, indent: int = 2) -> str:
    """Serialize a slideshow to interchange JSON."""
    return dump_json(slideshow, indent=indent)
