"""
slidy/dsl/models.py — Pydantic data models for the slide language

These are the typed representations of a compiled deck. Everything
flows through these models: the builder produces them, the serializer
consumes them, the renderer reads them. Values are always fully
resolved: colors are four bytes, sizes are numbers, no "unset" state
leaks out of the parser except where a renderer decides (position).
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ── Primitives ─────────────────────────────────────────────────────


class Color(BaseModel):
    """An RGBA color, one byte per channel."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: int = Field(default=255, ge=0, le=255)

    @classmethod
    def from_tuple(cls, values: tuple[int, ...]) -> Color:
        """Build from (r, g, b) or (r, g, b, a)."""
        r, g, b, *rest = values
        return cls(r=r, g=g, b=b, a=rest[0] if rest else 255)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self, include_alpha: bool = True) -> str:
        """Encode as #RRGGBBAA (or #RRGGBB)."""
        channels = self.as_tuple() if include_alpha else self.as_tuple()[:3]
        return "#" + "".join(f"{c:02X}" for c in channels)


class Position(BaseModel):
    """Normalized coordinates: (0, 0) top-left, (1, 1) bottom-right."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


WHITE = Color(r=255, g=255, b=255)
BLACK = Color(r=0, g=0, b=0)

DEFAULT_FONT_SIZE = 16.0


# ── Global Settings ────────────────────────────────────────────────


class GlobalConfig(BaseModel):
    """Deck-wide defaults set by the :ge directive."""

    background: Color = WHITE
    font_color: Color = BLACK
    font_size: float = DEFAULT_FONT_SIZE


# ── Blocks ─────────────────────────────────────────────────────────


class TextBlock(BaseModel):
    """A positioned run of text lines."""

    kind: Literal["text"] = "text"
    lines: list[str] = Field(default_factory=list)
    position: Optional[Position] = None  # None = flow below previous block
    font_size: float = DEFAULT_FONT_SIZE
    color: Color = BLACK
    background: Optional[Color] = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class ImageBlock(BaseModel):
    """A reference to an image file. Never holds pixel data."""

    kind: Literal["image"] = "image"
    path: str
    position: Optional[Position] = None
    scale: Optional[float] = None
    rotation: float = 0.0  # degrees, clockwise
    background: Optional[Color] = None


Block = Annotated[Union[TextBlock, ImageBlock], Field(discriminator="kind")]


# ── Slide ──────────────────────────────────────────────────────────


class Slide(BaseModel):
    """A single slide: a background and its blocks in reading order."""

    background: Color = WHITE
    blocks: list[Block] = Field(default_factory=list)


# ── Document ───────────────────────────────────────────────────────


class Document(BaseModel):
    """Full compiled deck = global settings + ordered slides."""

    globals: GlobalConfig = Field(default_factory=GlobalConfig)
    slides: list[Slide] = Field(default_factory=list)
    source: Optional[str] = None

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, data: str) -> Document:
        return cls.model_validate_json(data)
