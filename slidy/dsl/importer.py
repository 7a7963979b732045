"""
slidy/dsl/importer.py — :im resolution

Parses another slide file into the document being built, at the point
of the :im directive. Paths are relative to the importing file. The
chain of files currently being imported is kept explicitly on each
builder (its ImportFrames), and a target already on that chain is a
cycle.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import CyclicImportError, DeckImportError, ImportFrame
from .lexer import Lexer

if TYPE_CHECKING:
    from .builder import DocumentBuilder
    from .parser import ParserConfig

logger = logging.getLogger(__name__)

TEXT_SOURCE = "<text>"


def canonical(path: os.PathLike | str) -> str:
    return str(Path(path).resolve())


def read_source(path: str, encoding: str = "utf-8") -> str:
    """Read a whole slide file; I/O failures become DeckImportError."""
    try:
        with open(path, "r", encoding=encoding) as f:
            return f.read()
    except FileNotFoundError:
        raise DeckImportError(f"no such slide file: {path}") from None
    except IsADirectoryError:
        raise DeckImportError(f"not a file: {path}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise DeckImportError(f"unable to read {path}: {e}") from e


class ImportResolver:
    """Resolves :im directives by compiling the target into the same document."""

    def __init__(self, config: ParserConfig):
        self.config = config

    def resolve_path(self, builder: DocumentBuilder, raw: str) -> str:
        path = Path(raw)
        if not path.is_absolute():
            base = builder.base_dir if builder.base_dir is not None else Path.cwd()
            path = base / path
        return canonical(path)

    def import_into(self, builder: DocumentBuilder, raw: str, line: int) -> None:
        target = self.resolve_path(builder, raw)
        active = [frame.path for frame in builder.frames]
        if builder.source is not None:
            active.append(builder.source)

        if target in active:
            cycle = active[active.index(target):] + [target]
            raise CyclicImportError(cycle, line=line)
        if len(builder.frames) >= self.config.max_import_depth:
            raise DeckImportError(
                f"imports nested deeper than {self.config.max_import_depth} levels", line=line
            )

        try:
            text = read_source(target, self.config.encoding)
        except DeckImportError as e:
            e.line = line
            raise

        before = len(builder.document.slides)
        frame = ImportFrame(builder.source or TEXT_SOURCE, line)
        child = builder.nested(target, frame)
        child.feed(Lexer(text)).finish()
        logger.debug(
            "Imported %d slides from %s", len(builder.document.slides) - before, target
        )
