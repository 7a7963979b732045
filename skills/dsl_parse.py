"""
skills/dsl_parse.py — Compile slide-language text or files into a Document.

Wraps slidy.dsl.parser.SlideParser.
"""

from typing import Optional

from slidy.dsl.models import Document
from slidy.dsl.parser import SlideParser

_parser = SlideParser()


def parse_text(text: str, base_dir: Optional[str] = None) -> Document:
    """Parse raw slide text; relative :im/:fg paths resolve against base_dir."""
    return _parser.parse(text, base_dir=base_dir)


def parse_file(path: str) -> Document:
    """Parse a slide file, following its imports."""
    return _parser.parse_file(path)
