"""Marker that tells a launched child it is running under the supervisor."""

from __future__ import annotations

import os
from collections.abc import Mapping

RUN_MODE = "__RUN_MOD_RELOAD__"


def is_supervised_child(environ: Mapping[str, str] | None = None) -> bool:
    """Return True if this process was launched by a hotbuild supervisor."""
    if environ is None:
        environ = os.environ
    return environ.get(RUN_MODE) == RUN_MODE


def child_environ(
    extra: Mapping[str, str] | None = None,
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the environment for a supervised child.

    Starts from *base* (``os.environ`` by default), applies *extra*, then sets
    the marker. The supervisor's own environment is never modified.
    """
    env = dict(os.environ if base is None else base)
    if extra:
        env.update(extra)
    env[RUN_MODE] = RUN_MODE
    return env
