"""Resolution of option values from arguments, environment, config and defaults."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Configurable(ABC):
    """A setting that can come from the command line, the environment or a config file.

    The first source that yields a value other than ``None`` wins, in this
    order: command-line arguments, environment, configuration file, default.
    """

    @classmethod
    def configure_from(cls, matches: Any, config: Any):
        """Return the value from the highest-precedence source that provides one."""
        value = cls.from_arg_matches(matches)
        if value is not None:
            return value
        value = cls.from_environment()
        if value is not None:
            return value
        value = cls.from_config(config)
        if value is not None:
            return value
        return cls.default()

    @classmethod
    @abstractmethod
    def from_arg_matches(cls, matches: Any):
        """Value taken from parsed command-line arguments, or None."""

    @classmethod
    def from_environment(cls):
        """Value taken from environment variables, or None."""
        return None

    @classmethod
    @abstractmethod
    def from_config(cls, config: Any):
        """Value taken from a configuration file, or None."""

    @classmethod
    def default(cls):
        """Value used when no source provides one."""
        return cls()