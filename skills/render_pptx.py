"""
skills/render_pptx.py — Render a Slideshow to .pptx.

Wraps slidy.renderer.pptx_renderer.render.
"""

from pathlib import Path
from typing import Optional

from slidy.dsl.models import Slideshow
from slidy.renderer.pptx_renderer import RenderConfig
from slidy.renderer.pptx_renderer import render as _render


def render(
    slideshow: Slideshow,
    output_path: str,
    config: Optional[RenderConfig] = None,
) -> Path:
    """Render a parsed slideshow to a .pptx file.

    Args:
        slideshow: Parsed Slideshow, from slidy text or JSON.
        output_path: File to write.
        config: Optional geometry and default colors.

    Returns:
        Path to the generated .pptx file.
    """
    return _render(
        slideshow=slideshow,
        output_path=Path(output_path),
        config=config,
    )
