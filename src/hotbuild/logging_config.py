"""Logging setup shared by the CLI and ``hotbuild.run()``."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr through Rich, unless logging is already set up."""
    root = logging.getLogger()
    if root.handlers:
        if verbose:
            root.setLevel(logging.DEBUG)
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
