"""
slidy/dsl/errors.py — Diagnostics raised while compiling a deck

Every error knows the line it came from, the file it was raised in and,
for imported files, the chain of :im directives that led there. The
parser fails fast: the first error aborts the whole compile.
"""

from __future__ import annotations

from typing import NamedTuple, Optional


class ImportFrame(NamedTuple):
    """One :im hop: the importing file and the line of the directive."""

    path: str
    line: int


class SlideError(Exception):
    """Base class for every compile error."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        source: Optional[str] = None,
        chain: tuple[ImportFrame, ...] = (),
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.source = source
        self.chain = chain

    def locate(self, source: Optional[str], chain: tuple[ImportFrame, ...]) -> SlideError:
        """Fill in file/chain context if the raiser did not know it."""
        if self.source is None:
            self.source = source
        if not self.chain:
            self.chain = chain
        return self

    @property
    def location(self) -> str:
        where = self.source or "<text>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        return where

    def __str__(self) -> str:
        parts = [f"{self.location}: {self.message}"]
        for frame in reversed(self.chain):
            parts.append(f"  imported from {frame.path}:{frame.line}")
        return "\n".join(parts)


class LexError(SlideError):
    """Malformed physical text, e.g. a dangling line continuation."""


class FormatError(SlideError):
    """Bad directive arguments: color, size, position, arity."""


class StructuralError(SlideError):
    """A directive or content line used without the scope it needs."""


class UnknownDirectiveError(SlideError):
    """A :token outside the directive vocabulary."""


class DeckImportError(SlideError):
    """An :im target that is missing or unreadable."""


class CyclicImportError(DeckImportError):
    """A file that imports itself, directly or transitively."""

    def __init__(self, cycle: list[str], **kwargs):
        super().__init__("cyclic import: " + " -> ".join(cycle), **kwargs)
        self.cycle = cycle
