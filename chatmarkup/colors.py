"""Conversion of terminal colours to the hexadecimal form used in markup tags."""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple, Union

Color = Union[int, Tuple[int, int, int]]

_MAX_RGB = 0xFFFFFF


def _to_rgb_value(color: Color) -> int:
    if isinstance(color, tuple):
        if len(color) != 3:
            raise ValueError(f"expected an (r, g, b) triple, got {color!r}")
        for component in color:
            if not 0 <= component <= 255:
                raise ValueError(f"colour component out of range: {component}")
        red, green, blue = color
        return (red << 16) | (green << 8) | blue
    if not 0 <= color <= _MAX_RGB:
        raise ValueError(f"colour value out of range: {color:#x}")
    return color


@lru_cache(maxsize=None)
def color_to_hex(color: Color) -> str:
    """Return the colour as a lower-case ``#rrggbb`` string.

    The colour is either a packed ``0xRRGGBB`` integer or an ``(r, g, b)``
    tuple. Results are cached.
    """
    return f"#{_to_rgb_value(color):06x}"