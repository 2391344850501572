"""Loading of the YAML configuration file."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

CONF_DIR = "lsd"
CONF_FILE_NAME = "config.yaml"

_WHEN = ("always", "auto", "never")
_DISPLAY = ("all", "almost-all", "directory-only")
_ICON_THEMES = ("fancy", "unicode")
_LAYOUTS = ("grid", "tree", "oneline")
_SIZES = ("default", "short", "bytes")
_PERMISSIONS = ("rwx", "octal")
_SORT_COLUMNS = ("extension", "name", "time", "size", "version", "none")
_DIR_GROUPINGS = ("first", "last", "none")


class ConfigError(ValueError):
    """The configuration text is not a valid configuration."""


@dataclass(frozen=True)
class ColorSection:
    """The ``color`` section: when to colorize and which theme to use."""

    when: str | None = None
    theme: str | None = None


@dataclass(frozen=True)
class IconsSection:
    """The ``icons`` section."""

    when: str | None = None
    theme: str | None = None
    separator: str | None = None


@dataclass(frozen=True)
class RecursionSection:
    """The ``recursion`` section."""

    enabled: bool | None = None
    depth: int | None = None


@dataclass(frozen=True)
class SortingSection:
    """The ``sorting`` section."""

    column: str | None = None
    reverse: bool | None = None
    dir_grouping: str | None = None


def _describe(value: Any) -> str:
    if isinstance(value, bool):
        return f"boolean `{str(value).lower()}`"
    if isinstance(value, int):
        return f"integer `{value}`"
    if isinstance(value, float):
        return f"floating point `{value}`"
    if isinstance(value, str):
        return f"string {value!r}"
    if isinstance(value, list):
        return "sequence"
    if isinstance(value, dict):
        return "map"
    return type(value).__name__


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{name}: invalid type: {_describe(value)}, expected a boolean")
    return value


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{name}: invalid type: {_describe(value)}, expected a string")
    return value


def _depth(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name}: invalid type: {_describe(value)}, expected usize")
    if value < 0:
        raise ConfigError(f"{name}: invalid value: integer `{value}`, expected usize")
    return value


def _str_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{name}: invalid type: {_describe(value)}, expected a sequence")
    return [_str(item, name) for item in value]


def _choice(*variants: str) -> Callable[[Any, str], str]:
    def convert(value: Any, name: str) -> str:
        text = _str(value, name)
        if text not in variants:
            expected = ", ".join(f"`{v}`" for v in variants)
            raise ConfigError(
                f"{name}: unknown variant `{text}`, expected one of {expected}"
            )
        return text

    return convert


def _section(
    cls: type, keys: dict[str, tuple[str, Callable[[Any, str], Any]]]
) -> Callable[[Any, str], Any]:
    """Build a converter for a nested mapping; unknown keys are ignored."""

    def convert(value: Any, name: str) -> Any:
        if not isinstance(value, dict):
            raise ConfigError(f"{name}: invalid type: {_describe(value)}, expected a map")
        values = {}
        for key, (attr, conv) in keys.items():
            item = value.get(key)
            if item is not None:
                values[attr] = conv(item, f"{name}.{key}")
        return cls(**values)

    return convert


_TOP_LEVEL: dict[str, tuple[str, Callable[[Any, str], Any]]] = {
    "classic": ("classic", _bool),
    "blocks": ("blocks", _str_list),
    "color": (
        "color",
        _section(ColorSection, {"when": ("when", _choice(*_WHEN)), "theme": ("theme", _str)}),
    ),
    "date": ("date", _str),
    "dereference": ("dereference", _bool),
    "display": ("display", _choice(*_DISPLAY)),
    "icons": (
        "icons",
        _section(
            IconsSection,
            {
                "when": ("when", _choice(*_WHEN)),
                "theme": ("theme", _choice(*_ICON_THEMES)),
                "separator": ("separator", _str),
            },
        ),
    ),
    "ignore-globs": ("ignore_globs", _str_list),
    "indicators": ("indicators", _bool),
    "layout": ("layout", _choice(*_LAYOUTS)),
    "recursion": (
        "recursion",
        _section(RecursionSection, {"enabled": ("enabled", _bool), "depth": ("depth", _depth)}),
    ),
    "size": ("size", _choice(*_SIZES)),
    "permission": ("permission", _choice(*_PERMISSIONS)),
    "sorting": (
        "sorting",
        _section(
            SortingSection,
            {
                "column": ("column", _choice(*_SORT_COLUMNS)),
                "reverse": ("reverse", _bool),
                "dir-grouping": ("dir_grouping", _choice(*_DIR_GROUPINGS)),
            },
        ),
    ),
    "no-symlink": ("no_symlink", _bool),
    "total-size": ("total_size", _bool),
    "symlink-arrow": ("symlink_arrow", _str),
    "hyperlink": ("hyperlink", _choice(*_WHEN)),
    "header": ("header", _bool),
}


def _print_error(message: str) -> None:
    print(f"lsd: {message}", file=sys.stderr)


@dataclass
class Config:
    """Optional configuration items read from a YAML file; ``None`` means unset."""

    classic: bool | None = None
    blocks: list[str] | None = None
    color: ColorSection | None = None
    date: str | None = None
    dereference: bool | None = None
    display: str | None = None
    icons: IconsSection | None = None
    ignore_globs: list[str] | None = None
    indicators: bool | None = None
    layout: str | None = None
    recursion: RecursionSection | None = None
    size: str | None = None
    permission: str | None = None
    sorting: SortingSection | None = None
    no_symlink: bool | None = None
    total_size: bool | None = None
    symlink_arrow: str | None = None
    hyperlink: str | None = None
    header: bool | None = None

    @classmethod
    def with_none(cls) -> Config:
        """A configuration with every item unset."""
        return cls()

    @classmethod
    def from_yaml(cls, yaml_text: str) -> Config:
        """Parse YAML text; raise ConfigError if it is not a valid configuration."""
        try:
            document = yaml.safe_load(yaml_text)
        except yaml.YAMLError as err:
            raise ConfigError(str(err)) from err
        if document is None:
            return cls()
        if not isinstance(document, dict):
            raise ConfigError(f"invalid type: {_describe(document)}, expected struct Config")
        values = {}
        for key, value in document.items():
            if key not in _TOP_LEVEL:
                expected = ", ".join(f"`{k}`" for k in _TOP_LEVEL)
                raise ConfigError(f"unknown field `{key}`, expected one of {expected}")
            if value is None:
                continue
            attr, convert = _TOP_LEVEL[key]
            values[attr] = convert(value, key)
        return cls(**values)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Config | None:
        """Read a configuration file.

        Returns None when the file is missing, unreadable or invalid; the
        last two cases are reported on standard error.
        """
        file = Path(path)
        try:
            raw = file.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as err:
            _print_error(f"Can not open config file {file}: {err}.")
            return None
        try:
            return cls.from_yaml(raw.decode("utf-8", errors="replace"))
        except ConfigError as err:
            _print_error(f"Configuration file {file} format error, {err}.")
            return None

    @classmethod
    def builtin(cls) -> Config:
        """The built-in default configuration."""
        return cls.from_yaml(DEFAULT_CONFIG)

    @classmethod
    def load_default(cls) -> Config:
        """The user's configuration file if it can be read, else the built-in one."""
        directory = cls.config_file_path()
        if directory is not None:
            config = cls.from_file(directory / CONF_FILE_NAME)
            if config is not None:
                return config
        return cls.builtin()

    @staticmethod
    def config_file_path() -> Path | None:
        """Directory holding the configuration file, or None if it cannot be found."""
        if sys.platform == "win32":
            appdata = os.environ.get("APPDATA")
            return Path(appdata) / CONF_DIR if appdata else None
        xdg_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_home and Path(xdg_home).is_absolute():
            return Path(xdg_home) / CONF_DIR
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as err:
            _print_error(f"Can not open config file: {err}.")
            return None
        return home / ".config" / CONF_DIR

    @staticmethod
    def expand_home(path: str | os.PathLike[str]) -> Path | None:
        """Expand a leading ``~`` component to the home directory.

        Paths without it are returned unchanged; None is returned when the
        home directory cannot be determined.
        """
        p = Path(path)
        if not p.parts or p.parts[0] != "~":
            return p
        try:
            home = Path.home()
        except (RuntimeError, KeyError):
            return None
        rest = p.parts[1:]
        if not rest:
            return home
        if home == Path("/"):
            return Path(*rest)
        return home.joinpath(*rest)

    def __iter__(self):
        return ((f.name, getattr(self, f.name)) for f in fields(self))


DEFAULT_CONFIG = """---
# == Classic ==
# Shorthand that overrides some options for ls compatibility. It affects the
# "color"->"when", "sorting"->"dir-grouping", "date" and "icons"->"when" options.
# Possible values: false, true
classic: false

# == Blocks ==
# The columns, and their order, in the long and tree layouts.
# Possible values: permission, user, group, context, size, size_value, date, name, inode
blocks:
  - permission
  - user
  - group
  - size
  - date
  - name

# == Color ==
color:
  # When to colorize the output.
  # Possible values: never, auto, always
  when: auto
  # How to colorize the output.
  # Possible values: default, no-color, no-lscolors, <theme-file-name>
  theme: default

# == Date ==
# Format of the date column; the freeform format takes a strftime-like string.
# Possible values: date, relative, +<date_format>
# date: date

# == Dereference ==
# Whether to dereference symbolic links.
# Possible values: false, true
dereference: false

# == Display ==
# What items to display. Leave unset for the default behaviour.
# Possible values: all, almost-all, directory-only
# display: all

# == Icons ==
icons:
  # When to use icons.
  # Possible values: always, auto, never
  when: auto
  # Which icon theme to use.
  # Possible values: fancy, unicode
  theme: fancy
  # The string between the icons and the name.
  separator: " "

# == Ignore Globs ==
# A list of globs to ignore when listing.
# ignore-globs:
#   - .git

# == Indicators ==
# Whether to add indicator characters to certain listed files.
# Possible values: false, true
indicators: false

# == Layout ==
# Possible values: grid, tree, oneline
layout: grid

# == Recursion ==
recursion:
  # Possible values: false, true
  enabled: false
  # How deep the recursion should go; unset means (virtually) infinite.
  # depth: 3

# == Size ==
# Possible values: default, short, bytes
size: default

# == Permission ==
# Possible value: rwx, octal
permission: rwx

# == Sorting ==
sorting:
  # Possible values: extension, name, time, size, version
  column: name
  # Possible values: false, true
  reverse: false
  # Possible values: first, last, none
  dir-grouping: none

# == No Symlink ==
# Possible values: false, true
no-symlink: false

# == Total size ==
# Possible values: false, true
total-size: false

# == Hyperlink ==
# Possible values: always, auto, never
hyperlink: never

# == Symlink arrow ==
symlink-arrow: \u21d2
"""