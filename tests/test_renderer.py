"""
tests/test_renderer.py — Tests for the PPTX renderer

Covers:
  - render() public API: file creation, slide count, filename choice
  - Backgrounds, text boxes, font size and color
  - Flow layout vs explicit positions
  - Images: scale, rotation, backdrop, missing-file placeholder
"""

from pathlib import Path

import pytest
from PIL import Image
from pptx import Presentation as PptxPresentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE_TYPE
from pptx.util import Inches, Pt

from slidy.dsl.models import Color, Document, ImageBlock, Position, Slide, TextBlock
from slidy.dsl.parser import SlideParser
from slidy.renderer.pptx_renderer import RenderConfig, render, text_height, to_rgb

SAMPLE = Path(__file__).parent.parent / "docs" / "examples" / "sample.txt"


# ── Fixtures ─────────────────────────────────────────────────────


@pytest.fixture
def png(tmp_path) -> Path:
    path = tmp_path / "pic.png"
    Image.new("RGB", (96, 48), (200, 10, 10)).save(path)
    return path


def _render(doc: Document, tmp_path: Path, subdir: str = "out"):
    out = render(doc, tmp_path / subdir)
    return PptxPresentation(str(out))


def _textboxes(slide):
    return [s for s in slide.shapes if s.has_text_frame]


# ── Public API ───────────────────────────────────────────────────


class TestRender:
    def test_creates_file_named_after_source(self, tmp_path):
        doc = SlideParser().parse_file(SAMPLE)
        out = render(doc, tmp_path)
        assert out == tmp_path / "sample.pptx"
        assert out.exists()

    def test_default_filename(self, tmp_path):
        assert render(Document(), tmp_path).name == "deck.pptx"

    def test_explicit_filename(self, tmp_path):
        assert render(Document(), tmp_path, filename="talk.pptx").name == "talk.pptx"

    def test_slide_count(self, tmp_path):
        doc = SlideParser().parse_file(SAMPLE)
        assert len(_render(doc, tmp_path).slides) == 3

    def test_canvas_size(self, tmp_path):
        prs = PptxPresentation(str(render(Document(), tmp_path, config=RenderConfig(width=10, height=7.5))))
        assert prs.slide_width == Inches(10)


class TestText:
    def test_background_color(self, tmp_path):
        doc = Document(slides=[Slide(background=Color(r=0, g=0, b=128))])
        slide = _render(doc, tmp_path).slides[0]
        assert slide.background.fill.fore_color.rgb == RGBColor(0, 0, 128)

    def test_lines_become_paragraphs(self, tmp_path):
        block = TextBlock(lines=["one", "two"], font_size=20, color=Color(r=255, g=0, b=0))
        slide = _render(Document(slides=[Slide(blocks=[block])]), tmp_path).slides[0]
        (box,) = _textboxes(slide)
        paragraphs = box.text_frame.paragraphs
        assert [p.text for p in paragraphs] == ["one", "two"]
        assert paragraphs[0].font.size == Pt(20)
        assert paragraphs[1].font.color.rgb == RGBColor(255, 0, 0)

    def test_explicit_position(self, tmp_path):
        block = TextBlock(lines=["x"], position=Position(x=0.5, y=0.5))
        slide = _render(Document(slides=[Slide(blocks=[block])]), tmp_path).slides[0]
        (box,) = _textboxes(slide)
        assert box.left == Inches(0.5 * 13.333)
        assert box.top == Inches(0.5 * 7.5)

    def test_unpositioned_blocks_flow_downwards(self, tmp_path):
        blocks = [TextBlock(lines=["a", "b"], font_size=40), TextBlock(lines=["c"])]
        slide = _render(Document(slides=[Slide(blocks=blocks)]), tmp_path).slides[0]
        first, second = _textboxes(slide)
        assert second.top > first.top + Inches(text_height(blocks[0])) - 1

    def test_block_backdrop(self, tmp_path):
        block = TextBlock(lines=["x"], background=Color(r=1, g=2, b=3))
        slide = _render(Document(slides=[Slide(blocks=[block])]), tmp_path).slides[0]
        (box,) = _textboxes(slide)
        assert box.fill.fore_color.rgb == RGBColor(1, 2, 3)

    def test_to_rgb_drops_alpha(self):
        assert to_rgb(Color(r=1, g=2, b=3, a=0)) == RGBColor(1, 2, 3)


class TestImages:
    def test_picture_added(self, tmp_path, png):
        doc = Document(slides=[Slide(blocks=[ImageBlock(path=str(png))])])
        slide = _render(doc, tmp_path).slides[0]
        assert len([s for s in slide.shapes if s.shape_type == MSO_SHAPE_TYPE.PICTURE]) == 1

    def test_scale_and_rotation(self, tmp_path, png):
        plain = _render(Document(slides=[Slide(blocks=[ImageBlock(path=str(png))])]), tmp_path, "plain")
        width = plain.slides[0].shapes[0].width
        doc = Document(slides=[Slide(blocks=[ImageBlock(path=str(png), scale=0.5, rotation=90)])])
        pic = _render(doc, tmp_path, "scaled").slides[0].shapes[0]
        assert abs(pic.width - width // 2) <= 1
        assert pic.rotation == 90

    def test_backdrop_sits_behind_picture(self, tmp_path, png):
        block = ImageBlock(path=str(png), background=Color(r=9, g=9, b=9))
        shapes = list(_render(Document(slides=[Slide(blocks=[block])]), tmp_path).slides[0].shapes)
        assert len(shapes) == 2
        assert shapes[0].fill.fore_color.rgb == RGBColor(9, 9, 9)
        assert shapes[1].shape_type == MSO_SHAPE_TYPE.PICTURE

    def test_missing_image_placeholder(self, tmp_path, caplog):
        doc = Document(slides=[Slide(blocks=[ImageBlock(path=str(tmp_path / "nope.png"))])])
        slide = _render(doc, tmp_path).slides[0]
        (box,) = _textboxes(slide)
        assert box.text_frame.text.startswith("[Image: ")
        assert "Image not found" in caplog.text
