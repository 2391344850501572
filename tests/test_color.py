import pytest

from lsdeluxe.color import (
    BOLD,
    Color,
    Colors,
    ColorTheme,
    Elem,
    ElemKind,
    Style,
)


def test_color_new_no_color_theme():
    assert Colors("no-color").theme is None


def test_color_new_default_theme():
    assert Colors("default", ls_colors="").theme == ColorTheme.default_dark()


def test_color_new_bad_custom_theme():
    assert Colors("not-existed", ls_colors="").theme == ColorTheme.default_dark()


def test_custom_theme_is_used():
    theme = ColorTheme.default_dark()
    assert Colors("mine", custom_theme=theme, ls_colors="").theme is theme


@pytest.mark.parametrize(
    "exec_, uid, expected",
    [(True, True, 40), (False, True, 184), (True, False, 40), (False, False, 184)],
)
def test_default_theme_file_color(exec_, uid, expected):
    elem = Elem(ElemKind.FILE, exec=exec_, uid=uid)
    assert elem.get_color(ColorTheme.default_dark()) == Color.ansi(expected)


def test_get_color_other_elements():
    theme = ColorTheme.default_dark()
    assert Elem(ElemKind.DIR).get_color(theme) == Color.ansi(33)
    assert Elem(ElemKind.INODE, valid=True).get_color(theme) == Color.ansi(13)
    assert Elem(ElemKind.LINKS).get_color(theme) == Color.ansi(245)
    assert Elem(ElemKind.READ).get_color(theme) == Color.named("green")
    assert Elem(ElemKind.CHAR_DEVICE).get_color(theme) == Color.ansi(172)


def test_has_suid():
    assert Elem(ElemKind.FILE, uid=True).has_suid()
    assert Elem(ElemKind.DIR, uid=True).has_suid()
    assert not Elem(ElemKind.FILE).has_suid()
    assert not Elem(ElemKind.SYMLINK, uid=True).has_suid()


def test_named_colors_and_errors():
    assert Color.named("dark_cyan") == Color.ansi(6)
    with pytest.raises(ValueError):
        Color.named("chartreuse")
    with pytest.raises(ValueError):
        Color.ansi(300)


def test_style_apply_foreground_only():
    assert Style(foreground=Color.ansi(184)).apply("x") == "\x1b[38;5;184mx\x1b[39m"


def test_style_apply_empty_is_plain():
    assert Style().apply("plain") == "plain"


def test_style_apply_rgb_and_attribute():
    style = Style(foreground=Color(rgb=(1, 2, 3)), attributes=frozenset({BOLD}))
    assert style.apply("a") == "\x1b[38;2;1;2;3m\x1b[1ma\x1b[0m"


def test_colorize_no_lscolors_file():
    colors = Colors("no-lscolors")
    out = colors.colorize("name", Elem(ElemKind.FILE))
    assert out == "\x1b[38;5;184mname\x1b[39m"


def test_colorize_suid_has_red_background():
    colors = Colors("no-lscolors")
    out = colors.colorize("s", Elem(ElemKind.FILE, exec=True, uid=True))
    assert out == "\x1b[48;5;124m\x1b[38;5;40ms\x1b[49m\x1b[39m"


def test_colorize_no_color_is_plain():
    assert Colors("no-color").colorize("name", Elem(ElemKind.DIR)) == "name"


def test_lscolors_indicator_style():
    colors = Colors("default", ls_colors="di=01;34:ln=38;5;200")
    assert colors.colorize("d", Elem(ElemKind.DIR)) == "\x1b[38;5;4m\x1b[1md\x1b[0m"
    assert colors.colorize("l", Elem(ElemKind.SYMLINK)) == "\x1b[38;5;200ml\x1b[39m"


def test_lscolors_missing_indicator_is_unstyled():
    colors = Colors("default", ls_colors="di=01;34")
    assert colors.colorize("f", Elem(ElemKind.FILE)) == "f"


def test_lscolors_falls_back_to_theme_without_indicator():
    colors = Colors("default", ls_colors="di=01;34")
    assert colors.colorize("u", Elem(ElemKind.USER)) == "\x1b[38;5;230mu\x1b[39m"


def test_lscolors_from_environment(monkeypatch):
    monkeypatch.setenv("LS_COLORS", "ex=92")
    colors = Colors("default")
    assert colors.style(Elem(ElemKind.FILE, exec=True)) == Style(foreground=Color.ansi(10))


def test_lscolors_background_codes():
    colors = Colors("default", ls_colors="pi=40;33")
    assert colors.style(Elem(ElemKind.PIPE)) == Style(
        foreground=Color.ansi(3), background=Color.ansi(0)
    )