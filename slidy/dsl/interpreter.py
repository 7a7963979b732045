"""
slidy/dsl/interpreter.py — Directive interpreter

Applies one directive at a time to the builder's cursor. The cursor's
active scope is explicit:

  NONE    nothing open (start of file, after a :ge line, after :im)
  GLOBAL  inside the :ge line
  SLIDE   a slide is open, no block yet
  TEXT    a text block is open
  IMAGE   an image block is open

Every handler checks the scope it needs and raises StructuralError
otherwise. No lookahead: directives are applied in document order.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from .colors import resolve_color
from .errors import FormatError, StructuralError, UnknownDirectiveError
from .lexer import Directive
from .models import Color, ImageBlock, Position, Slide, TextBlock

if TYPE_CHECKING:
    from .builder import DocumentBuilder
    from .importer import ImportResolver

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    NONE = "none"
    GLOBAL = "global"
    SLIDE = "slide"
    TEXT = "text"
    IMAGE = "image"


Handler = Callable[["DocumentBuilder", Directive], None]


def _expect_args(d: Directive, count: int, what: str) -> None:
    if len(d.args) != count:
        raise FormatError(
            f":{d.name} expects {count} {what}, got {len(d.args)}"
            + (f": {' '.join(d.args)}" if d.args else ""),
            line=d.line,
        )


def _to_float(word: str, d: Directive) -> float:
    try:
        value = float(word)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        raise FormatError(f":{d.name}: expected a number, found {word!r}", line=d.line)
    return value


class DirectiveInterpreter:
    """Dispatches directives to their handlers."""

    def __init__(self, importer: "ImportResolver"):
        self.importer = importer
        self._handlers: dict[str, Handler] = {
            "ge": self._general,
            "sl": self._slide,
            "tb": self._text_block,
            "fg": self._figure,
            "cl": self._color,
            "bc": self._background,
            "fc": self._font_color,
            "sz": self._size,
            "ps": self._position,
            "rt": self._rotation,
            "im": self._import,
        }

    def apply(self, builder: DocumentBuilder, d: Directive) -> None:
        handler = self._handlers.get(d.name)
        if handler is None:
            raise UnknownDirectiveError(f"unknown directive ':{d.name}'", line=d.line)
        logger.debug("line %d: %s (scope=%s)", d.line, d, builder.scope.value)
        handler(builder, d)

    # ── Scope openers ──────────────────────────────────────────────

    def _general(self, b: DocumentBuilder, d: Directive) -> None:
        _expect_args(d, 0, "arguments")
        if b.slides_started:
            raise StructuralError(":ge must come before the first slide", line=d.line)
        if b.globals_set:
            raise StructuralError("global settings are already defined", line=d.line)
        b.globals_set = True
        b.scope = Scope.GLOBAL

    def _slide(self, b: DocumentBuilder, d: Directive) -> None:
        _expect_args(d, 0, "arguments")
        b.close_slide()
        b.open_slide(Slide(background=b.globals_.background))

    def _text_block(self, b: DocumentBuilder, d: Directive) -> None:
        _expect_args(d, 0, "arguments")
        self._require_slide(b, d)
        b.open_block(
            TextBlock(font_size=b.globals_.font_size, color=b.globals_.font_color),
            Scope.TEXT,
        )

    def _figure(self, b: DocumentBuilder, d: Directive) -> None:
        self._require_slide(b, d)
        if not d.args:
            raise FormatError(":fg needs the path of an image", line=d.line)
        _expect_args(d, 1, "path")
        b.open_block(ImageBlock(path=b.resolve_image_path(d.args[0])), Scope.IMAGE)

    def _import(self, b: DocumentBuilder, d: Directive) -> None:
        if not d.args:
            raise FormatError(":im needs the path of a slide file", line=d.line)
        _expect_args(d, 1, "path")
        if b.scope == Scope.GLOBAL:
            b._seal_globals()
        b.close_slide()
        b.scope = Scope.NONE
        b.slides_started = True
        self.importer.import_into(b, d.args[0], d.line)

    @staticmethod
    def _require_slide(b: DocumentBuilder, d: Directive) -> None:
        if b.slide is None:
            raise StructuralError(
                f"':{d.name}' needs an open slide, start one with :sl", line=d.line
            )

    # ── Properties ─────────────────────────────────────────────────

    def _check_not_sealed(self, b: DocumentBuilder, d: Directive) -> None:
        if b.scope == Scope.TEXT and b.body_started:
            raise StructuralError(
                f"':{d.name}' must come before the text of its block", line=d.line
            )

    def _color(self, b: DocumentBuilder, d: Directive) -> None:
        if b.scope == Scope.NONE:
            raise StructuralError(":cl needs an open :ge, :sl, :tb or :fg", line=d.line)
        self._check_not_sealed(b, d)
        color = resolve_color(d.args, d.line)
        if b.scope == Scope.GLOBAL:
            b.globals_.font_color = color
        elif b.scope == Scope.SLIDE:
            b.slide.background = color
        elif b.scope == Scope.TEXT:
            b.block.color = color
        else:
            b.block.background = color

    def _background(self, b: DocumentBuilder, d: Directive) -> None:
        if b.scope == Scope.NONE:
            raise StructuralError(":bc needs an open :ge, :sl, :tb or :fg", line=d.line)
        self._check_not_sealed(b, d)
        color = resolve_color(d.args, d.line)
        if b.scope == Scope.GLOBAL:
            b.globals_.background = color
        elif b.scope == Scope.SLIDE:
            b.slide.background = color
        else:
            b.block.background = color

    def _font_color(self, b: DocumentBuilder, d: Directive) -> None:
        if b.scope not in (Scope.GLOBAL, Scope.TEXT):
            raise StructuralError(":fc only applies to :ge or :tb", line=d.line)
        self._check_not_sealed(b, d)
        color: Color = resolve_color(d.args, d.line)
        if b.scope == Scope.GLOBAL:
            b.globals_.font_color = color
        else:
            b.block.color = color

    def _size(self, b: DocumentBuilder, d: Directive) -> None:
        if b.scope not in (Scope.GLOBAL, Scope.TEXT, Scope.IMAGE):
            raise StructuralError(":sz only applies to :ge, :tb or :fg", line=d.line)
        self._check_not_sealed(b, d)
        _expect_args(d, 1, "number")
        value = _to_float(d.args[0], d)
        if value <= 0:
            raise FormatError(f":sz must be positive, got {d.args[0]}", line=d.line)
        if b.scope == Scope.GLOBAL:
            b.globals_.font_size = value
        elif b.scope == Scope.TEXT:
            b.block.font_size = value
        else:
            b.block.scale = value

    def _position(self, b: DocumentBuilder, d: Directive) -> None:
        if b.scope not in (Scope.TEXT, Scope.IMAGE):
            raise StructuralError(":ps only applies to :tb or :fg", line=d.line)
        self._check_not_sealed(b, d)
        _expect_args(d, 2, "numbers")
        b.block.position = Position(x=_to_float(d.args[0], d), y=_to_float(d.args[1], d))

    def _rotation(self, b: DocumentBuilder, d: Directive) -> None:
        if b.scope != Scope.IMAGE:
            raise StructuralError(":rt only applies to :fg", line=d.line)
        _expect_args(d, 1, "number")
        b.block.rotation = _to_float(d.args[0], d)


def image_path(raw: str, base_dir: Optional[Path]) -> str:
    """Anchor a relative image path to the directory of its source file."""
    path = Path(raw)
    if base_dir is None or path.is_absolute():
        return raw
    return str(base_dir / path)
