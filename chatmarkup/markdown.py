"""Conversion of chat markdown emphasis into terminal markup tags."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class _Marker:
    symbol: str
    flag: str
    pending: bool = False
    open: bool = False


def parse_bold_and_underline(text: str) -> str:
    """Replace ``**bold**`` and ``__underline__`` pairs with ``[::b]``-style tags.

    Unclosed markers are left untouched, and open styles are repeated after
    every newline.
    """
    bold = _Marker("*", "b")
    underline = _Marker("_", "u")
    output: list[str] = []
    last_index = len(text) - 1

    for index, character in enumerate(text):
        output.append(character)

        if character == "\n":
            if bold.open and underline.open:
                output.extend("[::ub]")
            elif bold.open:
                output.extend("[::b]")
            elif underline.open:
                output.extend("[::u]")
            continue

        if character == bold.symbol:
            marker, other = bold, underline
        elif character == underline.symbol:
            marker, other = underline, bold
        else:
            bold.pending = False
            underline.pending = False
            continue

        if not marker.pending:
            marker.pending = True
            continue

        marker.pending = False
        if marker.open:
            marker.open = False
            del output[-2:]
            output.extend(f"[::{other.flag if other.open else '-'}]")
        elif index != last_index and text.count(marker.symbol, index + 1) >= 2:
            if text[index + 1] == marker.symbol:
                marker.pending = True
                continue
            marker.open = True
            del output[-2:]
            output.extend(f"[::{other.flag if other.open else ''}{marker.flag}]")

    return "".join(output)


def trim_common_prefix(char: str, text: str) -> tuple[str, int]:
    """Strip the run of ``char`` that every non-empty line starts with.

    Returns the trimmed text and how many characters were removed per line.
    """
    lines = text.split("\n")
    common: int | None = None
    for line in lines:
        if not line:
            continue
        count = len(line) - len(line.lstrip(char))
        common = count if common is None else min(common, count)
        if common == 0:
            break

    if not common:
        return text, 0

    prefix = char * common
    return "\n".join(line.removeprefix(prefix) for line in lines), common


def remove_leading_whitespace_in_code(code: str) -> str:
    """Remove the indentation shared by all lines, spaces first, else tabs."""
    trimmed, amount = trim_common_prefix(" ", code)
    if amount > 0:
        return trimmed
    return trim_common_prefix("\t", code)[0]