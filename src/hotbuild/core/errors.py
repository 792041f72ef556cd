"""Exceptions raised by hotbuild."""

from __future__ import annotations


class HotbuildError(Exception):
    """Base class for hotbuild errors."""


class ConfigError(HotbuildError):
    """The project config file could not be read or validated."""


class WatchSetupError(HotbuildError):
    """The project tree could not be registered for watching.

    This is the only fatal error: the supervisor cannot do anything useful
    without its watches, so it aborts.
    """
