"""Pieces of the listing layout: tree prefixes, folder headings and block headers."""

from __future__ import annotations

import os
from collections.abc import Sequence

from .color import UNDERLINED, Style
from .grid import Cell, get_visible_width

EDGE = "\u251c\u2500\u2500"  # "├──"
LINE = "\u2502  "  # "│  "
CORNER = "\u2514\u2500\u2500"  # "└──"
BLANK = "   "

_UNDERLINE = Style(attributes=frozenset({UNDERLINED}))


def tree_item_prefix(depth: int, prefix: str, is_last: bool) -> str:
    """The tree edge drawn before an entry at ``depth`` below the listed roots.

    Roots (depth 0) get the inherited prefix unchanged.
    """
    if depth <= 0:
        return prefix
    return f"{prefix}{CORNER if is_last else EDGE} "


def tree_child_prefix(depth: int, prefix: str, is_last: bool) -> str:
    """The prefix inherited by the children of an entry at ``depth``."""
    if depth <= 0:
        return prefix
    return f"{prefix}{BLANK if is_last else LINE} "


def should_display_folder_path(depth: int, folder_count: int, total: int) -> bool:
    """Whether a directory's contents are introduced by a ``path:`` heading.

    Below the top level a heading is always shown; at the top level it is
    shown unless the only thing listed is a single directory.
    """
    if depth > 0:
        return True
    return folder_count > 1 or folder_count < total


def display_folder_path(path: str | os.PathLike[str]) -> str:
    """The heading placed before a directory's contents."""
    text = os.fsdecode(path)
    text = text.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")
    return f"\n{text}:\n"


def _center(text: str, width: int) -> str:
    padding = max(width - len(text), 0)
    left = padding // 2
    return " " * left + text + " " * (padding - left)


def header_cells(headers: Sequence[str], cells: Sequence[Cell], underline: bool) -> list[Cell]:
    """Cells holding the block headers, each as wide as its column.

    ``cells`` are the body cells laid out row by row, one per header; a
    column's width is the widest of its header and its body cells. Headers
    are centred and, when ``underline`` is set, underlined.
    """
    if not headers:
        return []
    widths = [get_visible_width(header, False) for header in headers]
    num_columns = len(headers)
    for index, cell in enumerate(cells):
        column = index % num_columns
        widths[column] = max(widths[column], cell.width)

    result = []
    for header, width in zip(headers, widths):
        text = _center(header, width)
        if underline:
            text = _UNDERLINE.apply(text)
        result.append(Cell(contents=text, width=width))
    return result