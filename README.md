# lsdeluxe

`lsdeluxe` holds the building blocks of an `ls`-style directory lister that
uses colours and icons. It is a library, and it installs no command.

## Modules

- **`lsdeluxe.app`**: the command-line grammar. `build_parser()` returns an
  `argparse.ArgumentParser` for the program `lsd`. `parse_args(argv)` parses
  arguments and rejects the combinations `--recursive` with `--tree`,
  `--directory-only` with `--depth`, and `--directory-only` with
  `--recursive`. A rejected combination is a usage error with exit status 2.
  Options that are not given are left as `None`, or `False` for switches, so
  that a configuration file can fill them in. `validate_date_argument(arg)`
  accepts `date`, `relative` or `+<format>`. `validate_time_format(formatter)`
  checks every `%` specifier. Both raise `TimeFormatError`, a `ValueError`.
- **`lsdeluxe.flags`**: `Configurable`, an abstract base for settings. Its
  `configure_from(matches, config)` returns the first value that is not
  `None`. It tries `from_arg_matches`, then `from_environment`, then
  `from_config`, and falls back to `default()`.
- **`lsdeluxe.config_file`**: `Config`, a dataclass of optional items, and its
  sections `ColorSection`, `IconsSection`, `RecursionSection` and
  `SortingSection`.
  - `Config.from_yaml(text)` raises `ConfigError` on a wrong type, an unknown
    enum value or an unknown top-level key.
  - `Config.from_file(path)` returns `None` if the file is missing. It also
    returns `None` if the file cannot be read or is invalid; in those two
    cases it first prints a message to standard error.
  - `Config.builtin()` parses the shipped `DEFAULT_CONFIG`.
  - `Config.with_none()` returns a configuration with every item unset.
  - `Config.expand_home(path)` expands a leading `~`.
- **`lsdeluxe.color`**: colours and styling.
  - `Color` is a 256-colour index or an RGB triple, made with `Color.ansi` or
    `Color.named`.
  - `ColorTheme.default_dark()` is the built-in theme.
  - `Elem` and `ElemKind` describe what is being coloured.
  - `Style.apply(text)` wraps text in ANSI escape sequences.
  - `Colors(theme_option, custom_theme, ls_colors)` takes a style from
    `LS_COLORS` (or a built-in indicator set) for file-type elements. All
    other elements take their colour from the theme. Set-uid files and
    directories get a red background.
- **`lsdeluxe.grid`**: `Grid` and `Cell` lay text out in columns.
  - `fit_into_columns(n)` uses a fixed number of columns.
  - `fit_into_width(width)` uses as few lines as fit, or returns `None` if the
    cells do not fit.
  - `get_visible_width(text, hyperlink)` measures the on-screen width. It skips
    colour escapes and, when asked, hyperlink escapes.
- **`lsdeluxe.display`**: helpers for listings.
  - `tree_item_prefix` and `tree_child_prefix` build the `├──`, `└──` and `│`
    branches.
  - `should_display_folder_path` and `display_folder_path` produce the
    `path:` headings.
  - `header_cells` produces centred block headers, underlined if asked.

## Installation

The package needs Python 3.10 or newer, plus PyYAML and wcwidth.

## Examples

Check a date format:

```python
from lsdeluxe.app import TimeFormatError, validate_time_format

validate_time_format("+%Y-%m-%d %H:%M")      # accepted

try:
    validate_time_format("+%Q")
except TimeFormatError as err:
    print(err)                               # invalid format specifier: %Q
```

Read a configuration:

```python
from lsdeluxe.config_file import Config

config = Config.from_yaml("classic: true")
assert config.classic is True

defaults = Config.builtin()
```

Measure coloured text:

```python
from lsdeluxe.grid import get_visible_width

get_visible_width("\x1b[38;5;40mfile\x1b[39m", False)   # 4
```

Build tree prefixes:

```python
from lsdeluxe.display import tree_item_prefix

tree_item_prefix(1, "", False)   # "├── "
tree_item_prefix(1, "", True)    # "└── "
```

## Configuration file

`Config.load_default()` looks for `config.yaml` in a directory named `lsd`:

- under `%APPDATA%` on Windows;
- elsewhere, under `$XDG_CONFIG_HOME` if it is set to an absolute path, or
  under `~/.config` if it is not.

If the file is missing or invalid, `Config.builtin()` is used instead. Keys
use kebab-case, for example `ignore-globs`, `symlink-arrow` and `total-size`.

## What this package does not do

The package does not do any of the following:

- read directories;
- gather file metadata such as sizes, owners, dates, permissions or inodes;
- sort entries;
- choose icons;
- render a complete listing.

It has no executable command either. `parse_args` only parses arguments; no
code here acts on the result.

## Running the tests

Install the `test` extra and run `pytest` from the project root.