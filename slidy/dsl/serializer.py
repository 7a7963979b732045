"""
slidy/dsl/serializer.py — Slide language serializer

Converts Document → slide-language text. Enables round-tripping:
  parse(serialize(doc)) == doc
"""

from __future__ import annotations

from .lexer import COMMENT_MARKER, CONTINUATION, TOKEN_MARKER
from .models import Color, Document, GlobalConfig, ImageBlock, Slide, TextBlock


ESCAPED_MARKER = CONTINUATION + TOKEN_MARKER


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def _color(c: Color) -> str:
    return c.to_hex(include_alpha=True)


def escape_line(line: str) -> str:
    """Escape a text line so the lexer reads it back verbatim."""
    line = line.replace(ESCAPED_MARKER, "\\" + ESCAPED_MARKER)
    body = line.lstrip()
    indent = line[: len(line) - len(body)]
    if body.startswith(TOKEN_MARKER) or body.lstrip(CONTINUATION).startswith(COMMENT_MARKER):
        line = f"{indent}\\{body}"
    if line.rstrip().endswith(CONTINUATION):
        line = line.rstrip() + CONTINUATION
    return line


class SlideSerializer:
    """Converts a Document back to slide-language text."""

    def serialize(self, doc: Document) -> str:
        """Serialize a full document."""
        parts = [self._globals(doc.globals)]
        for slide in doc.slides:
            parts.append(self._slide(slide, doc.globals))
        return "\n\n".join(parts) + "\n"

    def serialize_slide(self, slide: Slide, globals_: GlobalConfig | None = None) -> str:
        """Serialize a single slide (properties equal to globals_ are omitted)."""
        return self._slide(slide, globals_ or GlobalConfig())

    # ── Globals ────────────────────────────────────────────────────

    def _globals(self, g: GlobalConfig) -> str:
        return (
            f":ge :bc {_color(g.background)} :fc {_color(g.font_color)}"
            f" :sz {_num(g.font_size)}"
        )

    # ── Slide ──────────────────────────────────────────────────────

    def _slide(self, s: Slide, g: GlobalConfig) -> str:
        head = ":sl"
        if s.background != g.background:
            head += f" :bc {_color(s.background)}"
        lines = [head]
        for block in s.blocks:
            if isinstance(block, TextBlock):
                lines.extend(self._text_block(block, g))
            else:
                lines.append(self._image_block(block))
        return "\n".join(lines)

    def _text_block(self, b: TextBlock, g: GlobalConfig) -> list[str]:
        head = [":tb"]
        if b.font_size != g.font_size:
            head.append(f":sz {_num(b.font_size)}")
        if b.color != g.font_color:
            head.append(f":fc {_color(b.color)}")
        if b.position is not None:
            head.append(f":ps {_num(b.position.x)} {_num(b.position.y)}")
        if b.background is not None:
            head.append(f":bc {_color(b.background)}")
        return [" ".join(head)] + [escape_line(line) for line in b.lines]

    def _image_block(self, b: ImageBlock) -> str:
        head = [f":fg {b.path}"]
        if b.position is not None:
            head.append(f":ps {_num(b.position.x)} {_num(b.position.y)}")
        if b.scale is not None:
            head.append(f":sz {_num(b.scale)}")
        if b.rotation:
            head.append(f":rt {_num(b.rotation)}")
        if b.background is not None:
            head.append(f":bc {_color(b.background)}")
        return " ".join(head)
