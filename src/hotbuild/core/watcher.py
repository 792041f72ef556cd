"""Watching the project tree for changes."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass
from pathlib import Path

from watchfiles import Change, awatch

from hotbuild.core.errors import WatchSetupError

logger = logging.getLogger(__name__)

RETRY_DELAY = 1.0  # seconds before re-opening a failed watch stream


@dataclass(frozen=True)
class ChangeEvent:
    path: str
    kind: Change


def collect_watch_dirs(root: Path, skip_dirs: Iterable[str] = ()) -> list[Path]:
    """Return *root* and every directory below it, skipping *skip_dirs* by name."""
    if not root.is_dir():
        raise WatchSetupError(f"Watch root {root} is not a directory")

    skip = set(skip_dirs)

    def _on_error(exc: OSError) -> None:
        raise WatchSetupError(f"Cannot walk {exc.filename}: {exc.strerror}") from exc

    dirs: list[Path] = []
    for dirpath, dirnames, _filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        dirs.append(Path(dirpath))
    return dirs


class WatchSource:
    """Deliver change events for the project tree.

    By default every directory found at startup is registered on its own and
    directories created later are not picked up. With ``recursive=True`` the
    root is handed to the backend as a recursive watch instead.
    """

    def __init__(
        self,
        root: Path,
        *,
        recursive: bool = False,
        skip_dirs: Iterable[str] = (),
        debounce_ms: int = 50,
        stop_event: asyncio.Event | None = None,
    ) -> None:
        self.root = root
        self.recursive = recursive
        self.skip_dirs = list(skip_dirs)
        self.debounce_ms = debounce_ms
        self.stop_event = stop_event
        self.paths: list[Path] = []

    def register(self) -> list[Path]:
        """Walk the tree and record the directories to watch.

        Raises WatchSetupError if the tree can't be walked.
        """
        if self.recursive:
            if not self.root.is_dir():
                raise WatchSetupError(f"Watch root {self.root} is not a directory")
            self.paths = [self.root]
        else:
            self.paths = collect_watch_dirs(self.root, self.skip_dirs)
        logger.info("Watching %d directories under %s", len(self.paths), self.root)
        return self.paths

    def _prune(self) -> None:
        alive = [p for p in self.paths if p.is_dir()]
        if not alive:
            raise WatchSetupError(f"No watched directories left under {self.root}")
        if len(alive) != len(self.paths):
            logger.info("Dropped %d removed directories", len(self.paths) - len(alive))
        self.paths = alive

    async def events(self) -> AsyncIterator[ChangeEvent]:
        """Yield change events until the stop event is set."""
        if not self.paths:
            self.register()

        while True:
            try:
                async for changes in awatch(
                    *self.paths,
                    watch_filter=None,
                    debounce=self.debounce_ms,
                    recursive=self.recursive,
                    stop_event=self.stop_event,
                ):
                    for kind, path in sorted(changes, key=lambda c: c[1]):
                        yield ChangeEvent(path, kind)
                return
            except (OSError, RuntimeError) as exc:
                logger.error("Watcher errors: %r", exc)

            if self.stop_event is not None and self.stop_event.is_set():
                return
            await asyncio.sleep(RETRY_DELAY)
            self._prune()
