"""Layout helpers for text shown in fixed-width components."""

from __future__ import annotations


def calculate_necessary_height(width: int, text: str) -> int:
    """Return how many rows ``text`` needs in a component ``width`` cells wide.

    Every line counts once, plus one extra row for each full ``width`` of
    bytes it holds when encoded as UTF-8.
    """
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")

    lines = text.split("\n")
    wrapped = sum(
        length // width
        for length in (len(line.encode("utf-8")) for line in lines)
        if length >= width
    )
    return len(lines) + wrapped