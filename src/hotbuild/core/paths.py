"""Locating the project root and the binary built from it."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def resolve_project(path: str | Path | None = None) -> Path:
    """Return the absolute project root (the current directory by default)."""
    if path is None:
        return Path(os.getcwd()).resolve()
    return Path(path).expanduser().resolve()


def binary_name(project_dir: Path, name: str = "") -> str:
    """Name of the executable the build produces.

    The toolchain names it after the project directory; Windows adds ``.exe``.
    """
    name = name or project_dir.name
    if sys.platform == "win32" and not name.endswith(".exe"):
        name += ".exe"
    return name


def binary_path(project_dir: Path, name: str = "") -> Path:
    return project_dir / binary_name(project_dir, name)
