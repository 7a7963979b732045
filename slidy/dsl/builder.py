"""
slidy/dsl/builder.py — Document builder

The stateful driver of a compile. Owns the parse cursor (globals,
current slide, current block, active scope) for one source file and
feeds it with the lexer's output. Imported files get their own nested
builder that writes into the same Document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional, Union

from .errors import ImportFrame, SlideError, StructuralError
from .interpreter import DirectiveInterpreter, Scope, image_path
from .lexer import LineKind, LogicalLine
from .models import Document, GlobalConfig, ImageBlock, Slide, TextBlock

if TYPE_CHECKING:
    from .parser import ParserConfig

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """Builds slides from classified lines into a Document."""

    def __init__(
        self,
        document: Document,
        interpreter: DirectiveInterpreter,
        config: ParserConfig,
        source: Optional[str] = None,
        base_dir: Optional[Path] = None,
        globals_: Optional[GlobalConfig] = None,
        frames: tuple[ImportFrame, ...] = (),
    ):
        self.document = document
        self.interpreter = interpreter
        self.config = config
        self.source = source
        self.base_dir = base_dir
        self.frames = frames

        # Cursor
        self.globals_ = (globals_ or document.globals).model_copy()
        self.scope = Scope.NONE
        self.slide: Optional[Slide] = None
        self.block: Optional[Union[TextBlock, ImageBlock]] = None
        self.body_started = False
        self.globals_set = False
        self.slides_started = False

    @property
    def is_root(self) -> bool:
        return not self.frames

    def nested(self, source: str, frame: ImportFrame) -> DocumentBuilder:
        """A builder for an imported file, starting from this file's globals."""
        return DocumentBuilder(
            self.document,
            self.interpreter,
            self.config,
            source=source,
            base_dir=Path(source).parent,
            globals_=self.globals_,
            frames=self.frames + (frame,),
        )

    # ── Driving loop ───────────────────────────────────────────────

    def feed(self, lines: Iterable[LogicalLine]) -> DocumentBuilder:
        try:
            for line in lines:
                if line.kind == LineKind.DIRECTIVE:
                    for directive in line.directives:
                        self.interpreter.apply(self, directive)
                    self._end_directive_line()
                elif line.kind == LineKind.CONTENT:
                    self.append_content(line)
                else:
                    self.append_blank()
        except SlideError as e:
            raise e.locate(self.source, self.frames)
        return self

    def finish(self) -> Document:
        """Close whatever is still open and hand back the document."""
        if self.scope == Scope.GLOBAL:
            self._seal_globals()
        self.close_slide()
        self.scope = Scope.NONE
        return self.document

    def _end_directive_line(self) -> None:
        if self.scope == Scope.GLOBAL:
            self._seal_globals()
            self.scope = Scope.NONE

    def _seal_globals(self) -> None:
        logger.debug("Globals for %s: %s", self.source or "<text>", self.globals_)
        if self.is_root:
            self.document.globals = self.globals_.model_copy()

    # ── Slides and blocks ──────────────────────────────────────────

    def open_slide(self, slide: Slide) -> None:
        if self.scope == Scope.GLOBAL:
            self._seal_globals()
        self.slide = slide
        self.scope = Scope.SLIDE
        self.slides_started = True

    def close_slide(self) -> None:
        self.close_block()
        if self.slide is None:
            return
        logger.debug("Pushing slide %d (%d blocks)", len(self.document.slides) + 1, len(self.slide.blocks))
        self.document.slides.append(self.slide)
        self.slide = None
        if self.scope in (Scope.SLIDE, Scope.TEXT, Scope.IMAGE):
            self.scope = Scope.NONE

    def open_block(self, block: Union[TextBlock, ImageBlock], scope: Scope) -> None:
        self.close_block()
        self.slide.blocks.append(block)
        self.block = block
        self.scope = scope
        self.body_started = False

    def close_block(self) -> None:
        if isinstance(self.block, TextBlock):
            while self.block.lines and not self.block.lines[-1].strip():
                self.block.lines.pop()
        self.block = None
        self.body_started = False
        if self.scope in (Scope.TEXT, Scope.IMAGE):
            self.scope = Scope.SLIDE

    def resolve_image_path(self, raw: str) -> str:
        if not self.config.resolve_image_paths:
            return raw
        return image_path(raw, self.base_dir)

    # ── Content ────────────────────────────────────────────────────

    def append_content(self, line: LogicalLine) -> None:
        if self.scope != Scope.TEXT:
            if self.scope == Scope.IMAGE:
                hint = "an image block cannot hold text, open a :tb"
            elif self.slide is None:
                hint = "start a slide with :sl and a text block with :tb"
            else:
                hint = "open a text block with :tb first"
            raise StructuralError(f"text outside of a text block ({hint})", line=line.line)
        self.block.lines.append(line.text)
        self.body_started = True

    def append_blank(self) -> None:
        # Only blank lines between two text lines survive (trailing ones
        # are dropped when the block closes).
        if self.scope == Scope.TEXT and self.block.lines:
            self.block.lines.append("")
