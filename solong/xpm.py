"""Reader for XPM images, the texture format used by the game."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from dataclasses import dataclass

from solong.colors import lookup_color

TRANSPARENT = 0xFF000000
"""Pixel value stored for the ``None`` (transparent) colour."""

_QUOTED = re.compile(r'"([^"]*)"')
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_HEX = re.compile(r"[0-9a-fA-F]*")
_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: one 32-bit ``0xAARRGGBB`` value per pixel, row by row."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x``, row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return self.pixels[y][x]


def split_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs only."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _blank(text: str, opener: str, closer: str) -> str:
    """Replace every ``opener ... closer`` span outside double quotes with spaces."""
    chars = list(text)
    in_quote = False
    position = 0
    length = len(text)
    while position < length:
        if text[position] == '"':
            in_quote = not in_quote
        elif not in_quote and text.startswith(opener, position):
            end = text.find(closer, position + len(opener))
            stop = length if end == -1 else end + len(closer)
            chars[position:stop] = " " * (stop - position)
            position = stop
            continue
        position += 1
    return "".join(chars)


def strip_comments(text: str) -> str:
    """Blank out C-style comments outside quoted strings, keeping the length."""
    return _blank(_blank(text, "/*", "*/"), "//", "\n")


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def text_to_rgb(name: str, extra: str | None) -> int:
    """Turn a colour specification into an ``0xRRGGBB`` value.

    ``#`` introduces a hexadecimal value; anything else is looked up by
    name, joined with ``extra`` when given. Unknown names give 0 and
    ``None`` gives -1.
    """
    if name.startswith("#"):
        digits = _LEADING_HEX.match(name, 1).group(0)
        return _to_int32(int(digits, 16)) if digits else 0
    if extra is not None:
        name = f"{name} {extra}"[:_NAME_LIMIT]
    value = lookup_color(name)
    return 0 if value is None else value


def _next(strings: Iterator[str], what: str) -> str:
    try:
        return next(strings)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def parse_xpm(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    strings = iter(_QUOTED.findall(strip_comments(text)))
    header = split_words(_next(strings, "header"))
    if len(header) < 4:
        raise XpmError("invalid XPM header")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("invalid XPM header")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next(strings, "colour definition")
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError("colour definition without a 'c' key") from None
        if index + 1 >= len(words):
            raise XpmError("colour definition without a value")
        extra = words[index + 2] if index + 2 < len(words) else None
        value = text_to_rgb(words[index + 1], extra)
        key = line[:cpp]
        if cpp <= 2:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    rows = []
    for _ in range(height):
        line = _next(strings, "pixel row")
        row = []
        for x in range(width):
            value = palette.get(line[x * cpp : (x + 1) * cpp], 0)
            if value == -1:
                value = TRANSPARENT
            row.append(value & 0xFFFFFFFF)
        rows.append(tuple(row))
    return XpmImage(width=width, height=height, pixels=tuple(rows))


def read_xpm_file(path: str | os.PathLike[str]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)}") from exc
    return parse_xpm(text)