"""
slidy/renderer/pptx_renderer.py -- PPTX Rendering Engine

Converts a compiled Document into a .pptx file using python-pptx.
Deterministic: same input always produces the same output.

Blocks are placed at their normalized position on a 16:9 canvas. A
block without a position flows below the previous block of its slide.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.util import Emu, Inches, Pt

from slidy.dsl.models import Color, Document, ImageBlock, Slide, TextBlock

logger = logging.getLogger(__name__)

# ── Geometry Constants (inches, 16:9) ─────────────────────────────

SLIDE_WIDTH_IN = 13.333
SLIDE_HEIGHT_IN = 7.5

MARGIN = 0.5
ELEMENT_GAP = 0.15
LINE_SPACING = 1.2  # line height as a multiple of the font size
PLACEHOLDER_FONT = 11


@dataclass
class RenderConfig:
    """Canvas settings for the renderer."""

    width: float = SLIDE_WIDTH_IN
    height: float = SLIDE_HEIGHT_IN
    margin: float = MARGIN
    gap: float = ELEMENT_GAP


# ── Color Utilities ───────────────────────────────────────────────


def to_rgb(color: Color) -> RGBColor:
    """Drop alpha: python-pptx fills are opaque."""
    return RGBColor(color.r, color.g, color.b)


def _apply_background(slide, color: Color):
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = to_rgb(color)


def _fill_shape(shape, color: Optional[Color]):
    if color is None:
        return
    shape.fill.solid()
    shape.fill.fore_color.rgb = to_rgb(color)


# ── Layout ────────────────────────────────────────────────────────


class _Flow:
    """Vertical cursor for blocks without an explicit position."""

    def __init__(self, config: RenderConfig):
        self.config = config
        self.top = config.margin

    def place(self, position, height: float) -> tuple[float, float]:
        """Return (left, top) in inches and advance the cursor."""
        if position is not None:
            left = position.x * self.config.width
            top = position.y * self.config.height
        else:
            left, top = self.config.margin, self.top
        self.top = top + height + self.config.gap
        return left, top


def text_height(block: TextBlock) -> float:
    """Height of a text block in inches."""
    lines = max(len(block.lines), 1)
    return lines * block.font_size * LINE_SPACING / 72


# ── Block Renderers ───────────────────────────────────────────────


def _add_text_block(slide, block: TextBlock, flow: _Flow, config: RenderConfig):
    height = text_height(block)
    left, top = flow.place(block.position, height)
    width = max(config.width - left - config.margin, 1.0)

    box = slide.shapes.add_textbox(Inches(left), Inches(top), Inches(width), Inches(height))
    _fill_shape(box, block.background)
    tf = box.text_frame
    tf.word_wrap = True

    for i, line in enumerate(block.lines or [""]):
        p = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
        p.text = line
        p.font.size = Pt(block.font_size)
        p.font.color.rgb = to_rgb(block.color)
    return box


def _add_placeholder(slide, block: ImageBlock, left: float, top: float):
    box = slide.shapes.add_textbox(Inches(left), Inches(top), Inches(3.0), Inches(0.5))
    p = box.text_frame.paragraphs[0]
    p.text = f"[Image: {block.path}]"
    p.font.size = Pt(PLACEHOLDER_FONT)
    return box


def _add_image_block(slide, block: ImageBlock, flow: _Flow):
    left, top = flow.place(block.position, 0.0)
    try:
        pic = slide.shapes.add_picture(block.path, Inches(left), Inches(top))
    except (OSError, ValueError):
        logger.warning("Image not found: %s, using placeholder", block.path)
        shape = _add_placeholder(slide, block, left, top)
        flow.top = top + 0.5 + flow.config.gap
        return shape

    if block.scale is not None:
        pic.width = Emu(int(pic.width * block.scale))
        pic.height = Emu(int(pic.height * block.scale))
    if block.rotation:
        pic.rotation = block.rotation
    if block.background is not None:
        backdrop = slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, pic.left, pic.top, pic.width, pic.height)
        _fill_shape(backdrop, block.background)
        # Move the backdrop behind the picture
        tree = slide.shapes._spTree
        tree.remove(backdrop._element)
        tree.insert(tree.index(pic._element), backdrop._element)
    flow.top = top + Emu(pic.height).inches + flow.config.gap
    return pic


def _render_slide(slide, node: Slide, config: RenderConfig):
    _apply_background(slide, node.background)
    flow = _Flow(config)
    for block in node.blocks:
        if isinstance(block, TextBlock):
            _add_text_block(slide, block, flow, config)
        else:
            _add_image_block(slide, block, flow)


# ── Public API ────────────────────────────────────────────────────


def render(
    document: Document,
    output_dir: Path,
    filename: Optional[str] = None,
    config: Optional[RenderConfig] = None,
) -> Path:
    """Render a Document to a .pptx file.

    Args:
        document: Compiled deck.
        output_dir: Directory to write the output file.
        filename: Output name; defaults to the source file's stem, or "deck".
        config: Canvas settings.

    Returns:
        Path to the generated .pptx file.
    """
    config = config or RenderConfig()
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    prs = Presentation()
    prs.slide_width = Inches(config.width)
    prs.slide_height = Inches(config.height)
    blank_layout = prs.slide_layouts[6]  # blank layout

    for node in document.slides:
        _render_slide(prs.slides.add_slide(blank_layout), node, config)

    if filename is None:
        filename = (Path(document.source).stem if document.source else "deck") + ".pptx"
    output_path = output_dir / filename
    prs.save(str(output_path))

    logger.info("Rendered %d slides to %s", len(document.slides), output_path)
    return output_path
