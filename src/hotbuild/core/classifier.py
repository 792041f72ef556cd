"""Deciding which file-system events should trigger a rebuild."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)


def read_mtime(path: str) -> int | None:
    """Modification time of *path* in whole seconds, or None if it can't be read."""
    try:
        return int(os.stat(path).st_mtime)
    except OSError:
        return None


class ModTimeTable:
    """Last seen modification time per path.

    Entries are never removed. Access is serialized with a lock since events
    for different paths may be classified from different tasks or threads.
    """

    def __init__(self) -> None:
        self._times: dict[str, int] = {}
        self._lock = threading.Lock()

    def swap(self, path: str, mtime: int) -> int | None:
        """Record *mtime* for *path* and return the previous value (None if unseen)."""
        with self._lock:
            previous = self._times.get(path)
            self._times[path] = mtime
            return previous

    def get(self, path: str) -> int | None:
        with self._lock:
            return self._times.get(path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._times)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._times


class ChangeClassifier:
    """Filter raw change events down to rebuild triggers.

    A path qualifies when it ends with the source suffix, contains none of the
    ignore markers, and its mtime differs from the one last recorded for it.
    A path seen for the first time always qualifies.
    """

    def __init__(
        self,
        suffix: str = ".go",
        ignore_markers: Iterable[str] = (".#",),
        table: ModTimeTable | None = None,
        stat: Callable[[str], int | None] = read_mtime,
    ) -> None:
        self.suffix = suffix
        self.ignore_markers = tuple(ignore_markers)
        self.table = table if table is not None else ModTimeTable()
        self._stat = stat

    def is_candidate(self, path: str) -> bool:
        if not path.endswith(self.suffix):
            return False
        return not any(marker in path for marker in self.ignore_markers)

    def classify(self, path: str) -> bool:
        """Return True if the change to *path* should trigger a restart."""
        if not self.is_candidate(path):
            return False

        mtime = self._stat(path)
        if mtime is None:
            # Deleted or unreadable between the event and the stat
            logger.debug("Cannot stat %s, ignoring", path)
            return False

        previous = self.table.swap(path, mtime)
        return previous != mtime
