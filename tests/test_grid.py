import pytest

from lsdeluxe.color import Colors, Elem, ElemKind
from lsdeluxe.grid import Cell, Grid, get_visible_width

NAMES = [
    ("Ｈｅｌｌｏ,ｗｏｒｌｄ!", 22),
    ("ASCII1234-_", 11),
    ("制作样本。", 10),
    ("日本語", 6),
    ("샘플은 무료로 드리겠습니다", 26),
    ("👩🐩", 4),
    ("🔬", 2),
]


def _quoted(name):
    return f"'{name}'" if " " in name else name


@pytest.mark.parametrize(
    "name,width",
    NAMES + [("File with space", 15)],
)
def test_visible_width_hyperlink_simple(name, width):
    output = f"\x1b]8;;url://fake-url\x1b\\{name}\x1b]8;;\x1b\\"
    assert get_visible_width(output, True) == width


@pytest.mark.parametrize(
    "name,width",
    [
        ("Ｈｅｌｌｏ,ｗｏｒｌｄ!", 22),
        ("ASCII1234-_", 11),
        ("File with space", 17),
        ("制作样本。", 10),
        ("日本語", 6),
        ("샘플은 무료로 드리겠습니다", 28),
        ("👩🐩", 4),
        ("🔬", 2),
    ],
)
def test_visible_width_with_colors(name, width):
    colors = Colors("no-lscolors")
    output = colors.colorize(_quoted(name), Elem(ElemKind.FILE))
    assert output.startswith("\x1b[38;5;")
    assert output.endswith("[39m")
    assert get_visible_width(output, False) == width


@pytest.mark.parametrize(
    "name,width",
    [
        ("Ｈｅｌｌｏ,ｗｏｒｌｄ!", 22),
        ("ASCII1234-_", 11),
        ("File with space", 17),
        ("日本語", 6),
        ("샘플은 무료로 드리겠습니다", 28),
        ("🔬", 2),
    ],
)
def test_visible_width_without_colors(name, width):
    output = Colors("no-color").colorize(_quoted(name), Elem(ElemKind.FILE))
    assert not output.startswith("\x1b[38;5;")
    assert get_visible_width(output, False) == width


def test_visible_width_with_icon():
    assert get_visible_width("\uf016 ASCII1234-_", False) == 13


def test_hyperlink_escapes_counted_when_not_requested():
    output = "\x1b]8;;u\x1b\\ab\x1b]8;;\x1b\\"
    assert get_visible_width(output, True) == 2
    assert get_visible_width(output, False) > 2


def test_cell_measures_width():
    assert Cell("\x1b[38;5;33mabc\x1b[39m").width == 3
    assert Cell("abc", 10).width == 10


def test_fit_into_columns_left_to_right():
    grid = Grid(filling=1)
    for text in ("a", "bb", "ccc", "d"):
        grid.add(Cell(text))
    assert grid.fit_into_columns(2) == "a   bb\nccc d\n"


def test_fit_into_columns_single_column_tree():
    grid = Grid(filling=1)
    for text in ("one.d", "├── .hidden", "└── two"):
        grid.add(Cell(text))
    assert grid.fit_into_columns(1) == "one.d\n├── .hidden\n└── two\n"


def test_fit_into_columns_partial_row_has_no_trailing_padding():
    grid = Grid(filling=1)
    for text in ("a", "b", "c"):
        grid.add(Cell(text))
    assert grid.fit_into_columns(2) == "a b\nc\n"


def test_fit_into_columns_empty():
    assert Grid().fit_into_columns(3) == ""


def test_fit_into_columns_rejects_zero():
    with pytest.raises(ValueError):
        Grid().fit_into_columns(0)


def test_fit_into_width_one_line():
    grid = Grid(filling=2, top_to_bottom=True)
    for text in ("one", "two", "three"):
        grid.add(Cell(text))
    assert grid.fit_into_width(80) == "one  two  three\n"


def test_fit_into_width_top_to_bottom_wraps():
    grid = Grid(filling=2, top_to_bottom=True)
    for text in ("aaa", "bbb", "ccc", "ddd"):
        grid.add(Cell(text))
    assert grid.fit_into_width(10) == "aaa  ccc\nbbb  ddd\n"


def test_fit_into_width_too_narrow():
    grid = Grid(filling=2, top_to_bottom=True)
    grid.add(Cell("a-very-long-name"))
    grid.add(Cell("x"))
    assert grid.fit_into_width(5) is None


def test_fit_into_width_single_cell():
    grid = Grid(filling=2)
    grid.add(Cell("only"))
    assert grid.fit_into_width(4) == "only\n"


def test_fit_into_width_empty():
    assert Grid().fit_into_width(20) == ""


def test_fit_into_width_lines_stay_within_width():
    grid = Grid(filling=2, top_to_bottom=True)
    names = [f"file{n:03d}" for n in range(40)]
    for name in names:
        grid.add(Cell(name))
    output = grid.fit_into_width(50)
    lines = output.splitlines()
    assert all(len(line) < 50 for line in lines)
    assert sorted(output.split()) == names


def test_negative_filling_rejected():
    with pytest.raises(ValueError):
        Grid(filling=-1)