"""Command-line interface definition and argument validation."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

VERSION = "0.23.1"

BLOCK_NAMES = (
    "permission",
    "user",
    "group",
    "context",
    "size",
    "date",
    "name",
    "inode",
    "links",
)

SORT_WORDS = ("size", "time", "version", "extension", "none")

_WHEN = ("always", "auto", "never")

_PLAIN_SPECIFIERS = frozenset("AaBbCcDdeFfGgHhIjklMmnPpRrSsTtUuVvWwXxYyZz+%")
_PADDED_SPECIFIERS = frozenset("CdefGgHIjklMmSsUuVWwYy")
_NANO_WIDTHS = frozenset("369")


class TimeFormatError(ValueError):
    """A date argument or strftime-like format string is not valid."""


def _next_char(chars) -> str:
    char = next(chars, None)
    if char is None:
        raise TimeFormatError("missing format specifier")
    return char


def validate_time_format(formatter: str) -> None:
    """Check every ``%`` specifier in a strftime-like format string.

    Raises TimeFormatError for an unknown or incomplete specifier.
    """
    chars = iter(formatter)
    for char in chars:
        if char != "%":
            continue
        spec = _next_char(chars)
        if spec == ".":
            width = _next_char(chars)
            if width == "f":
                continue
            if width in _NANO_WIDTHS:
                follow = _next_char(chars)
                if follow != "f":
                    raise TimeFormatError(f"invalid format specifier: %.{width}{follow}")
                continue
            raise TimeFormatError(f"invalid format specifier: %.{width}")
        if spec in (":", "#"):
            follow = _next_char(chars)
            if follow != "z":
                raise TimeFormatError(f"invalid format specifier: %{spec}{follow}")
            continue
        if spec in ("-", "_", "0"):
            follow = _next_char(chars)
            if follow not in _PADDED_SPECIFIERS:
                raise TimeFormatError(f"invalid format specifier: %{spec}{follow}")
            continue
        if spec in _PLAIN_SPECIFIERS:
            continue
        if spec in _NANO_WIDTHS:
            follow = _next_char(chars)
            if follow != "f":
                raise TimeFormatError(f"invalid format specifier: %{spec}{follow}")
            continue
        raise TimeFormatError(f"invalid format specifier: %{spec}")


def validate_date_argument(arg: str) -> str:
    """Accept ``date``, ``relative`` or ``+<format>``; return the argument unchanged."""
    if arg.startswith("+"):
        validate_time_format(arg)
    elif arg not in ("date", "relative"):
        raise TimeFormatError("possible values: date, relative, +date-time-format")
    return arg


def _date_type(arg: str) -> str:
    try:
        return validate_date_argument(arg)
    except TimeFormatError as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def _blocks_type(arg: str) -> list[str]:
    values = arg.split(",")
    for value in values:
        if value not in BLOCK_NAMES:
            choices = ", ".join(BLOCK_NAMES)
            raise argparse.ArgumentTypeError(
                f"invalid value {value!r} (choose from {choices})"
            )
    return values


class _OnceFlag(argparse.Action):
    """A boolean switch that may be given only once."""

    def __init__(self, option_strings, dest, **kwargs):
        kwargs.setdefault("default", False)
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest):
            parser.error(f"argument {option_string} was provided more than once")
        setattr(namespace, self.dest, True)


class _OnceValue(argparse.Action):
    """An option taking one value that may be given only once."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest) is not None:
            parser.error(f"argument {option_string} was provided more than once")
        setattr(namespace, self.dest, values)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Options that are not given are left as ``None`` (or ``False`` for
    switches) so that configuration files can supply their values.
    """
    parser = argparse.ArgumentParser(
        prog="lsd",
        description="An ls command with a lot of pretty colors and some other stuff.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Print help information")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("files", nargs="*", default=["."], metavar="FILE")

    parser.add_argument(
        "-a", "--all", dest="all_mode", action="store_const", const="all",
        help="Do not ignore entries starting with .",
    )
    parser.add_argument(
        "-A", "--almost-all", dest="all_mode", action="store_const", const="almost-all",
        help="Do not list implied . and ..",
    )
    parser.add_argument("--color", choices=_WHEN, help="When to use terminal colours")
    parser.add_argument("--icon", choices=_WHEN, help="When to print the icons")
    parser.add_argument(
        "--icon-theme", choices=("fancy", "unicode"),
        help="Whether to use fancy or unicode icons",
    )
    parser.add_argument(
        "-F", "--classify", dest="indicators", action="store_true",
        help="Append indicator (one of */=>@|) at the end of the file names",
    )
    parser.add_argument(
        "-l", "--long", action="store_true", help="Display extended file metadata as a table"
    )
    parser.add_argument(
        "--ignore-config", action=_OnceFlag, help="Ignore the configuration file"
    )
    parser.add_argument(
        "--config-file", action=_OnceValue, metavar="config-file",
        help="Provide a custom lsd configuration file",
    )
    parser.add_argument(
        "-1", "--oneline", action="store_true", help="Display one entry per line"
    )
    parser.add_argument(
        "-R", "--recursive", action="store_true", help="Recurse into directories"
    )
    parser.add_argument(
        "-h", "--human-readable", dest="human_readable", action="store_true",
        help="For ls compatibility purposes ONLY, currently set by default",
    )
    parser.add_argument(
        "--tree", action="store_true",
        help="Recurse into directories and present the result as a tree",
    )
    parser.add_argument(
        "--depth", metavar="num",
        help="Stop recursing into directories after reaching specified depth",
    )
    parser.add_argument(
        "-d", "--directory-only", action=_OnceFlag,
        help="Display directories themselves, and not their contents "
        "(recursively when used with --tree)",
    )
    parser.add_argument(
        "--permission", choices=("rwx", "octal"), help="How to display permissions"
    )
    parser.add_argument(
        "--size", choices=("default", "short", "bytes"), help="How to display size"
    )
    parser.add_argument(
        "--total-size", action="store_true", help="Display the total size of directories"
    )
    parser.add_argument(
        "--date", type=_date_type,
        help="How to display date [possible values: date, relative, +date-time-format]",
    )
    parser.add_argument(
        "-t", "--timesort", dest="sort", action="store_const", const="time",
        help="Sort by time modified",
    )
    parser.add_argument(
        "-S", "--sizesort", dest="sort", action="store_const", const="size",
        help="Sort by size",
    )
    parser.add_argument(
        "-X", "--extensionsort", dest="sort", action="store_const", const="extension",
        help="Sort by file extension",
    )
    parser.add_argument(
        "-v", "--versionsort", dest="sort", action="store_const", const="version",
        help="Natural sort of (version) numbers within text",
    )
    parser.add_argument(
        "--sort", dest="sort", choices=SORT_WORDS, metavar="WORD",
        help="sort by WORD instead of name",
    )
    parser.add_argument(
        "-U", "--no-sort", dest="sort", action="store_const", const="none",
        help="Do not sort. List entries in directory order",
    )
    parser.add_argument(
        "-r", "--reverse", action="store_true", help="Reverse the order of the sort"
    )
    parser.add_argument(
        "--group-dirs", choices=("none", "first", "last"),
        help="Sort the directories then the files",
    )
    parser.add_argument(
        "--group-directories-first", action=_OnceFlag,
        help="Groups the directories at the top before the files. Same as --group-dirs=first",
    )
    parser.add_argument(
        "--blocks", action="extend", type=_blocks_type,
        help="Specify the blocks that will be displayed and in what order",
    )
    parser.add_argument(
        "--classic", action=_OnceFlag,
        help="Enable classic mode (display output similar to ls)",
    )
    parser.add_argument(
        "--no-symlink", action="store_true", help="Do not display symlink target"
    )
    parser.add_argument(
        "-I", "--ignore-glob", dest="ignore_globs", action="append", metavar="pattern",
        help="Do not display files/directories with names matching the glob pattern(s). "
        "More than one can be specified by repeating the argument",
    )
    parser.add_argument(
        "-i", "--inode", action="store_true", help="Display the index number of each file"
    )
    parser.add_argument(
        "-L", "--dereference", action="store_true",
        help="When showing file information for a symbolic link, show information for "
        "the file the link references rather than for the link itself",
    )
    parser.add_argument(
        "-Z", "--context", action=_OnceFlag,
        help="Print security context (label) of each file",
    )
    parser.add_argument("--hyperlink", choices=_WHEN, help="Attach hyperlink to filenames")
    parser.add_argument("--header", action=_OnceFlag, help="Display block headers")
    parser.add_argument(
        "--system-protected", action=_OnceFlag,
        help="Includes files with the windows system protection flag set. "
        "This is the same as --all on other platforms"
        if sys.platform == "win32"
        else argparse.SUPPRESS,
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments, enforcing option conflicts.

    Usage errors exit with status 2, as argparse does.
    """
    parser = build_parser()
    args = parser.parse_intermixed_args(None if argv is None else list(argv))
    if args.recursive and args.tree:
        parser.error("argument --recursive cannot be used with --tree")
    if args.directory_only and args.depth is not None:
        parser.error("argument --directory-only cannot be used with --depth")
    if args.directory_only and args.recursive:
        parser.error("argument --directory-only cannot be used with --recursive")
    return args