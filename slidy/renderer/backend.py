"""
slidy/renderer/backend.py -- Rendering backend plugin system

A backend receives a parsed Slideshow through set_document() and turns it
into something viewable. Backends only read the document; ownership moves
to the backend when set_document() is called.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from slidy.dsl.interchange import write_json_file
from slidy.dsl.models import Slideshow
from slidy.renderer.pptx_renderer import PptxBackend, RenderConfig

logger = logging.getLogger(__name__)


class SlidyBackend(Protocol):
    """Plugin interface for rendering backends."""

    def can_render(self, target: str) -> bool: ...
    def set_document(self, slideshow: Slideshow) -> None: ...
    def render(self, output_path: Path) -> Path: ...


class JsonBackend:
    """Writes the document as interchange JSON, for external tooling."""

    def __init__(self):
        self.slideshow: Optional[Slideshow] = None

    def can_render(self, target: str) -> bool:
        return target.lower() == "json"

    def set_document(self, slideshow: Slideshow) -> None:
        self.slideshow = slideshow

    def render(self, output_path: Path) -> Path:
        if self.slideshow is None:
            raise RuntimeError("no document set, call set_document() first")
        path = write_json_file(self.slideshow, output_path)
        logger.info("Wrote %d slides to %s", len(self.slideshow.slides), path)
        return path


def get_backend(target: str, config: Optional[RenderConfig] = None) -> SlidyBackend:
    """Get the appropriate backend for a target ("pptx", "json")."""
    backends: list[SlidyBackend] = [PptxBackend(config), JsonBackend()]
    for b in backends:
        if b.can_render(target):
            return b
    raise ValueError(f"No backend available for target: {target}")
