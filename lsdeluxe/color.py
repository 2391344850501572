"""Terminal colours: themes, displayable elements and ANSI styling."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum, auto

_NAMED_COLORS = {
    "black": 0,
    "dark_red": 1,
    "dark_green": 2,
    "dark_yellow": 3,
    "dark_blue": 4,
    "dark_magenta": 5,
    "dark_cyan": 6,
    "grey": 7,
    "dark_grey": 8,
    "red": 9,
    "green": 10,
    "yellow": 11,
    "blue": 12,
    "magenta": 13,
    "cyan": 14,
    "white": 15,
}

BOLD = 1
DIM = 2
ITALIC = 3
UNDERLINED = 4
SLOW_BLINK = 5
RAPID_BLINK = 6
REVERSE = 7
HIDDEN = 8
CROSSED_OUT = 9

_SUID_BACKGROUND = 124  # Red3

# Built-in indicator colours used when LS_COLORS is not set.
_DEFAULT_LS_COLORS = (
    "rs=0:di=01;34:ln=01;36:mh=00:pi=40;33:so=01;35:do=01;35:bd=40;33;01:"
    "cd=40;33;01:or=40;31;01:mi=00:su=37;41:sg=30;43:ca=00:tw=30;42:"
    "ow=34;42:st=37;44:ex=01;32"
)


@dataclass(frozen=True)
class Color:
    """A terminal colour: a 256-colour palette index or a true-colour triple."""

    value: int | None = None
    rgb: tuple[int, int, int] | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.rgb is None):
            raise ValueError("a colour needs exactly one of a palette index or an rgb triple")
        components = (self.value,) if self.value is not None else self.rgb
        if any(not 0 <= c <= 255 for c in components):
            raise ValueError(f"colour component out of range: {components}")

    @classmethod
    def ansi(cls, value: int) -> Color:
        """A colour from the 256-colour palette."""
        return cls(value=value)

    @classmethod
    def named(cls, name: str) -> Color:
        """One of the sixteen standard colours, e.g. ``green`` or ``dark_cyan``."""
        try:
            return cls(value=_NAMED_COLORS[name])
        except KeyError:
            raise ValueError(f"unknown colour name: {name!r}") from None

    def _sgr(self, layer: int) -> str:
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"{layer};2;{r};{g};{b}"
        return f"{layer};5;{self.value}"


@dataclass(frozen=True)
class PermissionColors:
    read: Color
    write: Color
    exec: Color
    exec_sticky: Color
    no_access: Color
    octal: Color
    acl: Color
    context: Color


@dataclass(frozen=True)
class FileColors:
    exec_uid: Color
    uid_no_exec: Color
    exec_no_uid: Color
    no_exec_no_uid: Color


@dataclass(frozen=True)
class DirColors:
    uid: Color
    no_uid: Color


@dataclass(frozen=True)
class SymlinkColors:
    default: Color
    broken: Color
    missing_target: Color


@dataclass(frozen=True)
class FileTypeColors:
    file: FileColors
    dir: DirColors
    pipe: Color
    symlink: SymlinkColors
    block_device: Color
    char_device: Color
    socket: Color
    special: Color


@dataclass(frozen=True)
class DateColors:
    hour_old: Color
    day_old: Color
    older: Color


@dataclass(frozen=True)
class SizeColors:
    none: Color
    small: Color
    medium: Color
    large: Color


@dataclass(frozen=True)
class INodeColors:
    valid: Color
    invalid: Color


@dataclass(frozen=True)
class LinksColors:
    valid: Color
    invalid: Color


@dataclass(frozen=True)
class ColorTheme:
    """Colours for every kind of element that can be displayed."""

    user: Color
    group: Color
    permission: PermissionColors
    file_type: FileTypeColors
    date: DateColors
    size: SizeColors
    inode: INodeColors
    links: LinksColors
    tree_edge: Color

    @classmethod
    def default_dark(cls) -> ColorTheme:
        """The built-in theme for dark terminals."""
        ansi = Color.ansi
        return cls(
            user=ansi(230),
            group=ansi(187),
            permission=PermissionColors(
                read=Color.named("green"),
                write=Color.named("yellow"),
                exec=Color.named("red"),
                exec_sticky=Color.named("magenta"),
                no_access=ansi(245),
                octal=ansi(6),
                acl=Color.named("dark_cyan"),
                context=Color.named("cyan"),
            ),
            file_type=FileTypeColors(
                file=FileColors(
                    exec_uid=ansi(40),
                    uid_no_exec=ansi(184),
                    exec_no_uid=ansi(40),
                    no_exec_no_uid=ansi(184),
                ),
                dir=DirColors(uid=ansi(33), no_uid=ansi(33)),
                pipe=ansi(44),
                symlink=SymlinkColors(
                    default=ansi(44), broken=ansi(124), missing_target=ansi(124)
                ),
                block_device=ansi(44),
                char_device=ansi(172),
                socket=ansi(44),
                special=ansi(44),
            ),
            date=DateColors(hour_old=ansi(40), day_old=ansi(42), older=ansi(36)),
            size=SizeColors(none=ansi(245), small=ansi(229), medium=ansi(216), large=ansi(172)),
            inode=INodeColors(valid=ansi(13), invalid=ansi(245)),
            links=LinksColors(valid=ansi(13), invalid=ansi(245)),
            tree_edge=ansi(245),
        )


class ElemKind(Enum):
    """The kinds of displayed element that carry their own colour."""

    FILE = auto()
    SYMLINK = auto()
    BROKEN_SYMLINK = auto()
    MISSING_SYMLINK_TARGET = auto()
    DIR = auto()
    PIPE = auto()
    BLOCK_DEVICE = auto()
    CHAR_DEVICE = auto()
    SOCKET = auto()
    SPECIAL = auto()
    READ = auto()
    WRITE = auto()
    EXEC = auto()
    EXEC_STICKY = auto()
    NO_ACCESS = auto()
    OCTAL = auto()
    ACL = auto()
    CONTEXT = auto()
    DAY_OLD = auto()
    HOUR_OLD = auto()
    OLDER = auto()
    USER = auto()
    GROUP = auto()
    NON_FILE = auto()
    FILE_LARGE = auto()
    FILE_MEDIUM = auto()
    FILE_SMALL = auto()
    INODE = auto()
    LINKS = auto()
    TREE_EDGE = auto()


_SIMPLE_LOOKUPS = {
    ElemKind.SYMLINK: lambda t: t.file_type.symlink.default,
    ElemKind.BROKEN_SYMLINK: lambda t: t.file_type.symlink.broken,
    ElemKind.MISSING_SYMLINK_TARGET: lambda t: t.file_type.symlink.missing_target,
    ElemKind.PIPE: lambda t: t.file_type.pipe,
    ElemKind.BLOCK_DEVICE: lambda t: t.file_type.block_device,
    ElemKind.CHAR_DEVICE: lambda t: t.file_type.char_device,
    ElemKind.SOCKET: lambda t: t.file_type.socket,
    ElemKind.SPECIAL: lambda t: t.file_type.special,
    ElemKind.READ: lambda t: t.permission.read,
    ElemKind.WRITE: lambda t: t.permission.write,
    ElemKind.EXEC: lambda t: t.permission.exec,
    ElemKind.EXEC_STICKY: lambda t: t.permission.exec_sticky,
    ElemKind.NO_ACCESS: lambda t: t.permission.no_access,
    ElemKind.OCTAL: lambda t: t.permission.octal,
    ElemKind.ACL: lambda t: t.permission.acl,
    ElemKind.CONTEXT: lambda t: t.permission.context,
    ElemKind.DAY_OLD: lambda t: t.date.day_old,
    ElemKind.HOUR_OLD: lambda t: t.date.hour_old,
    ElemKind.OLDER: lambda t: t.date.older,
    ElemKind.USER: lambda t: t.user,
    ElemKind.GROUP: lambda t: t.group,
    ElemKind.NON_FILE: lambda t: t.size.none,
    ElemKind.FILE_LARGE: lambda t: t.size.large,
    ElemKind.FILE_MEDIUM: lambda t: t.size.medium,
    ElemKind.FILE_SMALL: lambda t: t.size.small,
    ElemKind.TREE_EDGE: lambda t: t.tree_edge,
}

_INDICATORS = {
    ElemKind.SYMLINK: "ln",
    ElemKind.PIPE: "pi",
    ElemKind.SOCKET: "so",
    ElemKind.BLOCK_DEVICE: "bd",
    ElemKind.CHAR_DEVICE: "cd",
    ElemKind.BROKEN_SYMLINK: "or",
    ElemKind.MISSING_SYMLINK_TARGET: "mi",
}


@dataclass(frozen=True)
class Elem:
    """A displayed element; ``exec``/``uid`` apply to files, ``valid`` to inodes and links."""

    kind: ElemKind
    exec: bool = False
    uid: bool = False
    valid: bool = False

    def has_suid(self) -> bool:
        """True for files and directories with the set-uid bit."""
        return self.kind in (ElemKind.FILE, ElemKind.DIR) and self.uid

    def get_color(self, theme: ColorTheme) -> Color:
        """The colour the theme assigns to this element."""
        kind = self.kind
        if kind is ElemKind.FILE:
            file = theme.file_type.file
            if self.uid:
                return file.exec_uid if self.exec else file.uid_no_exec
            return file.exec_no_uid if self.exec else file.no_exec_no_uid
        if kind is ElemKind.DIR:
            return theme.file_type.dir.uid if self.uid else theme.file_type.dir.no_uid
        if kind is ElemKind.INODE:
            return theme.inode.valid if self.valid else theme.inode.invalid
        if kind is ElemKind.LINKS:
            return theme.links.valid if self.valid else theme.links.invalid
        return _SIMPLE_LOOKUPS[kind](theme)

    def _indicator(self) -> str | None:
        if self.kind is ElemKind.FILE:
            if self.uid:
                return None
            return "ex" if self.exec else "fi"
        if self.kind is ElemKind.DIR:
            return None if self.uid else "di"
        return _INDICATORS.get(self.kind)


@dataclass(frozen=True)
class Style:
    """Foreground, background and SGR attribute codes applied to text."""

    foreground: Color | None = None
    background: Color | None = None
    attributes: frozenset[int] = field(default_factory=frozenset)

    def apply(self, text: str) -> str:
        """Wrap text in the escape sequences for this style."""
        prefix = []
        if self.background is not None:
            prefix.append(f"\x1b[{self.background._sgr(48)}m")
        if self.foreground is not None:
            prefix.append(f"\x1b[{self.foreground._sgr(38)}m")
        prefix.extend(f"\x1b[{code}m" for code in sorted(self.attributes))
        if not prefix:
            return text
        if self.attributes:
            suffix = "\x1b[0m"
        else:
            suffix = ("\x1b[49m" if self.background is not None else "") + (
                "\x1b[39m" if self.foreground is not None else ""
            )
        return "".join(prefix) + text + suffix


def _extended_color(codes) -> Color | None:
    mode = next(codes, None)
    if mode == 5:
        value = next(codes, None)
        return Color.ansi(value) if value is not None and 0 <= value <= 255 else None
    if mode == 2:
        triple = (next(codes, None), next(codes, None), next(codes, None))
        if any(c is None or not 0 <= c <= 255 for c in triple):
            return None
        return Color(rgb=triple)
    return None


def _parse_style(sequence: str) -> Style | None:
    """Parse an LS_COLORS SGR sequence such as ``01;34``; None if malformed."""
    if not sequence:
        return None
    try:
        numbers = [int(part) if part else 0 for part in sequence.split(";")]
    except ValueError:
        return None
    foreground = background = None
    attributes: set[int] = set()
    codes = iter(numbers)
    for code in codes:
        if code == 0:
            foreground = background = None
            attributes.clear()
        elif 1 <= code <= 9:
            attributes.add(code)
        elif 30 <= code <= 37:
            foreground = Color.ansi(code - 30)
        elif code == 38:
            foreground = _extended_color(codes)
        elif 40 <= code <= 47:
            background = Color.ansi(code - 40)
        elif code == 48:
            background = _extended_color(codes)
        elif 90 <= code <= 97:
            foreground = Color.ansi(code - 90 + 8)
        elif 100 <= code <= 107:
            background = Color.ansi(code - 100 + 8)
    return Style(foreground, background, frozenset(attributes))


def _parse_ls_colors(text: str) -> dict[str, Style]:
    styles = {}
    for entry in text.split(":"):
        key, sep, sequence = entry.partition("=")
        if not sep or not key or key.startswith("*"):
            continue
        style = _parse_style(sequence)
        if style is not None:
            styles[key] = style
    return styles


class Colors:
    """Chooses the style of each element from a theme and LS_COLORS.

    ``theme_option`` is ``no-color``, ``default``, ``no-lscolors`` or the
    name of a custom theme; a custom theme's colours are passed in as
    ``custom_theme`` and fall back to the default theme when absent.
    ``ls_colors`` overrides the LS_COLORS environment variable.
    """

    def __init__(
        self,
        theme_option: str = "default",
        custom_theme: ColorTheme | None = None,
        ls_colors: str | None = None,
    ) -> None:
        if theme_option == "no-color":
            self.theme: ColorTheme | None = None
        elif theme_option in ("default", "no-lscolors"):
            self.theme = ColorTheme.default_dark()
        else:
            self.theme = custom_theme or ColorTheme.default_dark()

        if theme_option in ("no-color", "no-lscolors"):
            self.lscolors: dict[str, Style] | None = None
        else:
            if ls_colors is None:
                ls_colors = os.environ.get("LS_COLORS", _DEFAULT_LS_COLORS)
            self.lscolors = _parse_ls_colors(ls_colors)

    def style(self, elem: Elem) -> Style:
        """The style for an element."""
        if self.lscolors is not None:
            indicator = elem._indicator()
            if indicator is not None:
                return self.lscolors.get(indicator, Style())
        return self._style_default(elem)

    def _style_default(self, elem: Elem) -> Style:
        if self.theme is None:
            return Style()
        background = Color.ansi(_SUID_BACKGROUND) if elem.has_suid() else None
        return Style(foreground=elem.get_color(self.theme), background=background)

    def colorize(self, text: str, elem: Elem) -> str:
        """Text styled for the given element."""
        return self.style(elem).apply(text)