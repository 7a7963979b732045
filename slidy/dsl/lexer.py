"""
slidy/dsl/lexer.py — Line-oriented lexer

Turns raw source text into classified logical lines:

  # a comment                 → dropped
  :tb :sz 20 :fc red          → DIRECTIVE, [(tb, []), (sz, [20]), (fc, [red])]
      Some text               → CONTENT, kept verbatim (indentation matters)
  (whitespace only)           → BLANK

A trailing backslash joins a physical line with the next one before
classification. Line numbers are 1-based and point at the first
physical line of a logical line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .errors import LexError

TOKEN_MARKER = ":"
COMMENT_MARKER = "#"
CONTINUATION = "\\"


class LineKind(str, Enum):
    DIRECTIVE = "directive"
    CONTENT = "content"
    BLANK = "blank"


@dataclass(frozen=True)
class Directive:
    """A single directive token with its argument words."""

    name: str  # without the leading marker, lower-cased
    args: tuple[str, ...] = ()
    line: int = 0

    def __str__(self) -> str:
        return " ".join((TOKEN_MARKER + self.name,) + self.args)


@dataclass(frozen=True)
class LogicalLine:
    kind: LineKind
    line: int
    text: str = ""
    directives: tuple[Directive, ...] = field(default=())


class Lexer:
    """Restartable, lazy iterable of LogicalLine over a source text."""

    RE_ESCAPED_MARKER = re.compile(r"\\(\\?:)")  # \: -> :, \\: -> \:
    RE_ESCAPED_COMMENT = re.compile(r"^(\s*)\\(\\*#)")

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[LogicalLine]:
        for number, raw in self._join_continuations():
            if raw.lstrip().startswith(COMMENT_MARKER):
                continue
            yield self._classify(raw, number)

    # ── Physical lines ─────────────────────────────────────────────

    def _join_continuations(self) -> Iterator[tuple[int, str]]:
        pending: list[str] = []
        start = 0
        for number, raw in enumerate(self.text.splitlines(), start=1):
            if not pending:
                start = number
            continued, raw = self._strip_continuation(raw)
            pending.append(raw)
            if continued:
                continue
            yield start, self._join(pending)
            pending = []
        if pending:
            raise LexError("line continuation at end of input", line=start)

    @staticmethod
    def _strip_continuation(raw: str) -> tuple[bool, str]:
        """Return (continues, text) for one physical line."""
        body = raw.rstrip()
        if not body.endswith(CONTINUATION):
            return False, raw
        if body.endswith(CONTINUATION * 2):
            # Escaped backslash: keep one literal backslash.
            return False, body[:-1]
        return True, body[:-1]

    @staticmethod
    def _join(parts: list[str]) -> str:
        *head, last = parts
        if not head:
            return last
        pieces = [head[0].rstrip()]
        pieces += [p.strip() for p in head[1:]]
        pieces.append(last.lstrip())
        return " ".join(p for p in pieces if p)

    # ── Classification ─────────────────────────────────────────────

    def _classify(self, raw: str, number: int) -> LogicalLine:
        stripped = raw.lstrip()
        if not stripped:
            return LogicalLine(LineKind.BLANK, number)
        if stripped.startswith(TOKEN_MARKER):
            return LogicalLine(
                LineKind.DIRECTIVE,
                number,
                text=raw,
                directives=tuple(split_directives(stripped, number)),
            )
        return LogicalLine(LineKind.CONTENT, number, text=self._unescape(raw))

    def _unescape(self, raw: str) -> str:
        text = self.RE_ESCAPED_COMMENT.sub(r"\1\2", raw)
        return self.RE_ESCAPED_MARKER.sub(r"\1", text)


def split_directives(text: str, line: int = 0) -> list[Directive]:
    """Split a directive line into (name, args) groups, left to right."""
    directives: list[Directive] = []
    name = None
    args: list[str] = []
    for word in text.split():
        if word.startswith(TOKEN_MARKER):
            if name is not None:
                directives.append(Directive(name, tuple(args), line))
            name, args = word[1:].lower(), []
        else:
            args.append(word)
    if name is not None:
        directives.append(Directive(name, tuple(args), line))
    return directives


def tokenize(text: str) -> list[LogicalLine]:
    """Eagerly lex a whole text."""
    return list(Lexer(text))
