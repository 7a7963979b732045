"""
slidy/dsl/colors.py — Color literal resolution

Three surface forms, one value:

  :fc 250 250 250 180     numeric, 3 or 4 channels (alpha defaults to 255)
  :fc #FAFAFAB4           hex, RRGGBB or RRGGBBAA
  :fc silver              web-safe name, case-insensitive

The form is picked from the argument count and the first character;
once picked, no other form is tried.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .errors import FormatError
from .models import Color

RE_HEX = re.compile(r"^[0-9a-fA-F]+$")
RE_CHANNEL = re.compile(r"^[0-9]+$")

# Web-safe palette (https://encycolorpedia.com/websafe)
NAMED_COLORS: dict[str, tuple[int, int, int, int]] = {
    "aqua": (0x00, 0xFF, 0xFF, 0xFF),
    "acqua": (0x00, 0xFF, 0xFF, 0xFF),
    "black": (0x00, 0x00, 0x00, 0xFF),
    "blue": (0x00, 0x00, 0xFF, 0xFF),
    "fuchsia": (0xFF, 0x00, 0xFF, 0xFF),
    "gray": (0x80, 0x80, 0x80, 0xFF),
    "grey": (0x80, 0x80, 0x80, 0xFF),
    "green": (0x00, 0x80, 0x00, 0xFF),
    "lime": (0x00, 0xFF, 0x00, 0xFF),
    "maroon": (0x80, 0x00, 0x00, 0xFF),
    "navy": (0x00, 0x00, 0x80, 0xFF),
    "olive": (0x80, 0x80, 0x00, 0xFF),
    "purple": (0x80, 0x00, 0x80, 0xFF),
    "red": (0xFF, 0x00, 0x00, 0xFF),
    "silver": (0xC0, 0xC0, 0xC0, 0xFF),
    "teal": (0x00, 0x80, 0x80, 0xFF),
    "white": (0xFF, 0xFF, 0xFF, 0xFF),
    "yellow": (0xFF, 0xFF, 0x00, 0xFF),
    "transparent": (0x00, 0x00, 0x00, 0x00),
}


def resolve_color(args: Sequence[str], line: Optional[int] = None) -> Color:
    """Resolve the argument words of a color directive into a Color."""
    if len(args) in (3, 4):
        return parse_channels(args, line)
    if len(args) == 1:
        word = args[0]
        if word.startswith("#"):
            return parse_hex(word, line)
        return lookup_name(word, line)
    raise FormatError(
        f"a color takes 1 (hex or name), 3 or 4 (channels) arguments, got {len(args)}",
        line=line,
    )


def parse_channels(args: Sequence[str], line: Optional[int] = None) -> Color:
    channels = []
    for word in args:
        if not RE_CHANNEL.match(word):
            raise FormatError(f"color channel {word!r} is not an integer", line=line)
        value = int(word)
        if not 0 <= value <= 255:
            raise FormatError(f"color channel {value} is outside 0..255", line=line)
        channels.append(value)
    return Color.from_tuple(tuple(channels))


def parse_hex(word: str, line: Optional[int] = None) -> Color:
    digits = word[1:]
    if not RE_HEX.match(digits):
        raise FormatError(f"{word!r}: only hexadecimal digits are allowed after '#'", line=line)
    if len(digits) not in (6, 8):
        raise FormatError(
            f"{word!r}: hex colors must be #RRGGBB or #RRGGBBAA, got {len(digits)} digits",
            line=line,
        )
    return Color.from_tuple(tuple(int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)))


def lookup_name(word: str, line: Optional[int] = None) -> Color:
    rgba = NAMED_COLORS.get(word.lower())
    if rgba is None:
        raise FormatError(f"unknown color name {word!r}", line=line)
    return Color.from_tuple(rgba)
