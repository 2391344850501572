"""Arranging text cells into aligned rows and columns for terminal output."""

from __future__ import annotations

import math
from dataclasses import dataclass

from wcwidth import wcwidth


def _display_width(text: str) -> int:
    """Terminal column width of text; control characters count as zero."""
    return sum(max(wcwidth(char), 0) for char in text)


def _hidden_span(text: str, opener: str, closer: str) -> int:
    """Count characters from each opener up to (not including) the next closer."""
    hidden = 0
    start = text.find(opener)
    while start != -1:
        end = text.find(closer, start)
        if end != -1:
            hidden += end - start
        start = text.find(opener, start + len(opener))
    return hidden


def get_visible_width(text: str, hyperlink: bool) -> int:
    """Width of text on a terminal, ignoring colour escapes and, optionally, hyperlink escapes."""
    hidden = _hidden_span(text, "\x1b[", "m")
    if hyperlink:
        hidden += _hidden_span(text, "\x1b]8;;", "\x1b\\")
    return _display_width(text) - hidden


@dataclass
class Cell:
    """Text to place in the grid with its visible width.

    When no width is given it is measured, ignoring colour escapes.
    """

    contents: str
    width: int | None = None

    def __post_init__(self) -> None:
        if self.width is None:
            self.width = get_visible_width(self.contents, False)


class Grid:
    """Cells laid out left-to-right or top-to-bottom, padded into columns.

    ``filling`` is the number of spaces between columns.
    """

    def __init__(self, filling: int = 1, top_to_bottom: bool = False) -> None:
        if filling < 0:
            raise ValueError("filling must not be negative")
        self.filling = filling
        self.top_to_bottom = top_to_bottom
        self.cells: list[Cell] = []

    def add(self, cell: Cell) -> None:
        """Append a cell."""
        self.cells.append(cell)

    def _column_of(self, index: int, num_lines: int, num_columns: int) -> int:
        if self.top_to_bottom:
            return index // num_lines
        return index % num_columns

    def _cell_index(self, row: int, column: int, num_lines: int, num_columns: int) -> int:
        if self.top_to_bottom:
            return row + num_lines * column
        return row * num_columns + column

    def _column_widths(self, num_lines: int, num_columns: int) -> list[int]:
        widths = [0] * num_columns
        for index, cell in enumerate(self.cells):
            column = self._column_of(index, num_lines, num_columns)
            widths[column] = max(widths[column], cell.width)
        return widths

    def _render(self, num_lines: int, widths: list[int]) -> str:
        num_columns = len(widths)
        total = len(self.cells)
        lines = []
        for row in range(num_lines):
            parts = []
            for column, width in enumerate(widths):
                index = self._cell_index(row, column, num_lines, num_columns)
                if index >= total:
                    continue
                cell = self.cells[index]
                is_last = column == num_columns - 1 or (
                    self._cell_index(row, column + 1, num_lines, num_columns) >= total
                )
                if is_last:
                    parts.append(cell.contents)
                else:
                    parts.append(cell.contents + " " * (width - cell.width + self.filling))
            lines.append("".join(parts) + "\n")
        return "".join(lines)

    def fit_into_columns(self, num_columns: int) -> str:
        """Render the cells in exactly ``num_columns`` columns."""
        if num_columns < 1:
            raise ValueError("number of columns must be at least 1")
        if not self.cells:
            return ""
        num_lines = math.ceil(len(self.cells) / num_columns)
        return self._render(num_lines, self._column_widths(num_lines, num_columns))

    def fit_into_width(self, width: int) -> str | None:
        """Render the cells in as few lines as fit within ``width``.

        Returns None when the cells cannot be made to fit.
        """
        if not self.cells:
            return ""
        widest = max(cell.width for cell in self.cells)
        if widest > width:
            return None
        total = len(self.cells)
        if total == 1:
            return self._render(1, [self.cells[0].width])

        # No layout can hold more columns than the narrowest cells allow.
        max_columns = 0
        used = 0
        for cell_width in sorted(cell.width for cell in self.cells):
            used += cell_width + (self.filling if max_columns else 0)
            if used >= width:
                break
            max_columns += 1
        max_columns = max(max_columns, 1)

        for num_lines in range(math.ceil(total / max_columns), total + 1):
            num_columns = math.ceil(total / num_lines)
            separators = (num_columns - 1) * self.filling
            if separators > width:
                continue
            widths = self._column_widths(num_lines, num_columns)
            if sum(widths) < width - separators:
                return self._render(num_lines, widths)
        return None