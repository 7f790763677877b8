"""
slidy/renderer/pptx_renderer.py -- PPTX Rendering Backend

Converts a Slideshow into a .pptx file using python-pptx.
Deterministic: same input always produces the same output.

Layout follows the screen backend rules of slidy:
  - positions and sizes are fractions of the slide surface
  - a text section draws one box per non-empty line, one glyph cell high;
    without a position, lines stack from a running baseline
  - figures keep their rotation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.util import Inches, Pt

from slidy.dsl.models import Color, Section, SectionFigure, SectionText, Slide, Slideshow

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72
BLANK_LAYOUT = 6


@dataclass
class RenderConfig:
    """Configuration for the PPTX backend."""

    # Geometry (inches, 16:9)
    slide_width_in: float = 13.333
    slide_height_in: float = 7.5

    # Text. A monospace font keeps line width proportional to glyph count.
    font_name: str = "Courier New"
    default_cell: tuple[float, float] = (0.018, 0.08)
    text_margin: float = 0.01

    # Colors used when the document sets no default
    default_bg: Color = field(default_factory=lambda: Color.from_name("white"))
    default_font_color: Color = field(default_factory=lambda: Color.from_name("black"))

    # Figures
    figure_position: tuple[float, float] = (0.01, 0.01)
    figure_size: tuple[float, float] = (0.1, 0.1)


# ── Color Utilities ───────────────────────────────────────────────


def to_rgb(color: Color) -> RGBColor:
    """Convert to an RGBColor. PPTX solid fills have no alpha, it is dropped."""
    return RGBColor(color.r, color.g, color.b)


def _apply_background(slide, color: Color):
    """Apply a solid background fill to a slide."""
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = to_rgb(color)


# ── Text Helpers ──────────────────────────────────────────────────


def _add_textbox(
    slide,
    left: float,
    top: float,
    width: float,
    height: float,
    text: str,
    font_size: float,
    color: Optional[RGBColor] = None,
    font_name: Optional[str] = None,
) -> object:
    """Add a single-line textbox to a slide and return the shape."""
    txBox = slide.shapes.add_textbox(
        Inches(left),
        Inches(top),
        Inches(width),
        Inches(height),
    )
    tf = txBox.text_frame
    tf.word_wrap = False
    tf.margin_left = tf.margin_right = tf.margin_top = tf.margin_bottom = 0

    p = tf.paragraphs[0]
    p.text = text
    p.font.size = Pt(font_size)
    if color:
        p.font.color.rgb = color
    if font_name:
        p.font.name = font_name
    return txBox


# ── Section Renderers ─────────────────────────────────────────────


class _SlideCanvas:
    """Scales normalized coordinates onto one pptx slide."""

    def __init__(self, pptx_slide, config: RenderConfig):
        self.slide = pptx_slide
        self.config = config
        # Next free line for text sections without a position.
        self.baseline = config.text_margin

    def x(self, frac: float) -> float:
        return frac * self.config.slide_width_in

    def y(self, frac: float) -> float:
        return frac * self.config.slide_height_in


def _render_figure(canvas: _SlideCanvas, section: Section, body: SectionFigure):
    """Render an image section."""
    config = canvas.config
    x, y = (section.position.x, section.position.y) if section.position else config.figure_position
    w, h = (section.size.x, section.size.y) if section.size else config.figure_size

    try:
        picture = canvas.slide.shapes.add_picture(
            body.path,
            Inches(canvas.x(x)),
            Inches(canvas.y(y)),
            Inches(canvas.x(w)),
            Inches(canvas.y(h)),
        )
    except (OSError, ValueError):
        logger.warning("Image not found: %s, using placeholder", body.path)
        _add_textbox(
            canvas.slide,
            canvas.x(x),
            canvas.y(y),
            canvas.x(w),
            canvas.y(h),
            f"[Image: {Path(body.path).name}]",
            font_size=canvas.y(h) * POINTS_PER_INCH / 4,
            font_name=config.font_name,
        )
        return
    picture.rotation = body.rotation


def _render_text(
    canvas: _SlideCanvas,
    section: Section,
    body: SectionText,
    cell: tuple[float, float],
    font_color: Color,
):
    """Render a text section, one textbox per non-empty line."""
    cell_w, cell_h = (section.size.x, section.size.y) if section.size else cell
    color = to_rgb(body.color or font_color)

    for idx, line in enumerate(body.text.split("\n")):
        if not line:
            continue
        if section.position:
            x, y = section.position.x, section.position.y + cell_h * idx
        else:
            x, y = canvas.config.text_margin, canvas.baseline
        canvas.baseline += cell_h

        _add_textbox(
            canvas.slide,
            canvas.x(x),
            canvas.y(y),
            canvas.x(len(line) * cell_w),
            canvas.y(cell_h),
            line,
            font_size=canvas.y(cell_h) * POINTS_PER_INCH,
            color=color,
            font_name=canvas.config.font_name,
        )


def render_slide(pptx_slide, slide: Slide, show: Slideshow, config: RenderConfig):
    """Draw one slide, resolving document defaults."""
    _apply_background(pptx_slide, slide.bg_color or show.bg_col or config.default_bg)

    cell = (show.font_size.x, show.font_size.y) if show.font_size else config.default_cell
    font_color = show.font_col or config.default_font_color

    canvas = _SlideCanvas(pptx_slide, config)
    for section in slide.sections:
        body = section.sec_main
        if isinstance(body, SectionFigure):
            _render_figure(canvas, section, body)
        else:
            _render_text(canvas, section, body, cell, font_color)


# ── Public API ────────────────────────────────────────────────────


def render(
    slideshow: Slideshow,
    output_path: Union[str, Path],
    config: Optional[RenderConfig] = None,
) -> Path:
    """Render a Slideshow to a .pptx file.

    Args:
        slideshow: Parsed deck.
        output_path: Where to write the .pptx file. Parent folders are created.
        config: Geometry and defaults; RenderConfig() when omitted.

    Returns:
        Path to the generated .pptx file.
    """
    config = config or RenderConfig()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    prs = Presentation()
    prs.slide_width = Inches(config.slide_width_in)
    prs.slide_height = Inches(config.slide_height_in)
    blank_layout = prs.slide_layouts[BLANK_LAYOUT]

    for slide in slideshow.slides:
        render_slide(prs.slides.add_slide(blank_layout), slide, slideshow, config)

    prs.save(str(output_path))
    logger.info("Rendered %d slides to %s", len(slideshow.slides), output_path)
    return output_path


class PptxBackend:
    """Backend writing the document to a .pptx file."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()
        self.slideshow: Optional[Slideshow] = None

    def can_render(self, target: str) -> bool:
        return target.lower() == "pptx"

    def set_document(self, slideshow: Slideshow) -> None:
        self.slideshow = slideshow

    def render(self, output_path: Union[str, Path]) -> Path:
        if self.slideshow is None:
            raise RuntimeError("no document set, call set_document() first")
        return render(self.slideshow, output_path, self.config)
