"""
slidy/dsl/parser.py — Slide language parser

Compiles slide-language text into a Document:

  text → Lexer → DocumentBuilder (+ DirectiveInterpreter, ImportResolver)

Strict: the first malformed line raises a SlideError carrying its line
number and import chain. Nothing is returned on failure.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .builder import DocumentBuilder
from .importer import ImportResolver, canonical, read_source
from .interpreter import DirectiveInterpreter
from .lexer import Lexer
from .models import Document


@dataclass
class ParserConfig:
    """Configuration for the parser."""

    encoding: str = "utf-8"
    max_import_depth: int = 32
    # Anchor relative :fg paths to the directory of their source file
    resolve_image_paths: bool = True


class SlideParser:
    """Parses slide-language text → Document."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.interpreter = DirectiveInterpreter(ImportResolver(self.config))

    def parse(
        self,
        text: str,
        base_dir: Optional[os.PathLike | str] = None,
        source: Optional[str] = None,
    ) -> Document:
        """Parse slide text. Relative :im/:fg paths resolve against base_dir."""
        document = Document(source=source)
        builder = DocumentBuilder(
            document,
            self.interpreter,
            self.config,
            source=source,
            base_dir=Path(base_dir) if base_dir is not None else None,
        )
        return builder.feed(Lexer(text)).finish()

    def parse_file(self, path: os.PathLike | str) -> Document:
        """Parse a slide file, imports included."""
        source = canonical(path)
        text = read_source(source, self.config.encoding)
        return self.parse(text, base_dir=Path(source).parent, source=source)


def parse(path: os.PathLike | str, config: Optional[ParserConfig] = None) -> Document:
    return SlideParser(config).parse_file(path)


def parse_text(text: str, base_dir: Optional[os.PathLike | str] = None) -> Document:
    return SlideParser().parse(text, base_dir=base_dir)
