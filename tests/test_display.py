from pathlib import Path

import pytest

from lsdeluxe.display import (
    display_folder_path,
    header_cells,
    should_display_folder_path,
    tree_child_prefix,
    tree_item_prefix,
)
from lsdeluxe.grid import Cell, Grid


def _render_tree(entries, depth=0, prefix=""):
    """Render (name, children) pairs using the prefix helpers."""
    lines = []
    for position, (name, children) in enumerate(entries):
        is_last = position == len(entries) - 1
        lines.append(tree_item_prefix(depth, prefix, is_last) + name + "\n")
        if children is not None:
            lines.append(
                _render_tree(children, depth + 1, tree_child_prefix(depth, prefix, is_last))
            )
    return "".join(lines)


def test_tree_layout_matches_listing():
    tree = [("root", [("one", None), ("one.d", [("two", None)])])]
    assert _render_tree(tree) == "root\n├── one\n└── one.d\n    └── two\n"


def test_tree_layout_with_hidden_entries():
    tree = [("root", [("one", None), ("one.d", [(".hidden", None), ("two", None)])])]
    assert _render_tree(tree).endswith("├── one\n└── one.d\n    ├── .hidden\n    └── two\n")


def test_tree_layout_directory_only():
    tree = [("root", [("one.d", [("one.d", [])]), ("two.d", [])])]
    assert _render_tree(tree).endswith("├── one.d\n│   └── one.d\n└── two.d\n")


def test_tree_layout_dereferenced_link():
    tree = [("root", [("link", [("samplefile", None)]), ("one.d", [("samplefile", None)])])]
    assert _render_tree(tree).endswith(
        "├── link\n│   └── samplefile\n└── one.d\n    └── samplefile\n"
    )


@pytest.mark.parametrize("is_last", [True, False])
def test_root_prefix_is_unchanged(is_last):
    assert tree_item_prefix(0, "abc", is_last) == "abc"
    assert tree_child_prefix(0, "abc", is_last) == "abc"


def test_item_prefixes():
    assert tree_item_prefix(1, "", False) == "├── "
    assert tree_item_prefix(1, "", True) == "└── "
    assert tree_item_prefix(2, "│   ", True) == "│   └── "


def test_child_prefixes():
    assert tree_child_prefix(1, "", False) == "│   "
    assert tree_child_prefix(1, "", True) == "    "
    assert tree_child_prefix(2, "    ", False) == "    │   "


@pytest.mark.parametrize(
    "depth, folders, total, expected",
    [
        (1, 1, 1, True),
        (3, 0, 0, True),
        (0, 1, 1, False),
        (0, 2, 2, True),
        (0, 1, 2, True),
        (0, 0, 0, False),
    ],
)
def test_should_display_folder_path(depth, folders, total, expected):
    assert should_display_folder_path(depth, folders, total) is expected


def test_display_folder_path():
    assert display_folder_path("/tmp/link/") == "\n/tmp/link/:\n"
    assert display_folder_path(Path("some/dir")) == "\nsome/dir:\n"


def test_header_cells_centered_to_column_width():
    cells = [Cell("123456", 6), Cell("a", 1), Cell("1234567", 7), Cell("b", 1)]
    result = header_cells(["Size", "Name"], cells, underline=False)
    assert [c.contents for c in result] == ["  Size ", "Name"]
    assert [c.width for c in result] == [7, 4]


def test_header_cells_underlined():
    result = header_cells(["Size"], [Cell("123456", 6)], underline=True)
    assert result[0].contents == "\x1b[4m Size \x1b[0m"
    assert result[0].width == 6


def test_header_cells_without_body():
    result = header_cells(["Permissions", "User"], [], underline=False)
    assert [c.contents for c in result] == ["Permissions", "User"]


def test_header_cells_empty_headers():
    assert header_cells([], [Cell("x", 1)], underline=False) == []


def test_headers_align_in_grid():
    body = [Cell("12"), Cell("one"), Cell("3"), Cell("two")]
    grid = Grid(filling=1)
    for cell in header_cells(["INode", "Name"], body, underline=False):
        grid.add(cell)
    for cell in body:
        grid.add(cell)
    assert grid.fit_into_columns(2) == "INode Name\n12    one\n3     two\n"