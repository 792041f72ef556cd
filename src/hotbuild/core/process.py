"""Lifecycle of the single supervised child process."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from hotbuild.core.reentry import child_environ

logger = logging.getLogger(__name__)


class ProcessSupervisor:
    """Owns one child slot: launch the built binary, kill it before the next one.

    The supervisor never waits for the child. A small reaper task per child
    collects its exit status and logs it.
    """

    def __init__(
        self,
        binary: Path,
        args: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        self.binary = binary
        self.args = list(args)
        self.env = dict(env or {})
        self.cwd = cwd if cwd is not None else binary.parent
        self._process: asyncio.subprocess.Process | None = None
        self._reapers: set[asyncio.Task[None]] = set()

    @property
    def process(self) -> asyncio.subprocess.Process | None:
        return self._process

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.returncode is None

    async def launch(self) -> asyncio.subprocess.Process | None:
        """Start the binary and track it; returns None if it could not start."""
        cmd = [str(self.binary), *self.args]
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=self.cwd,
                env=child_environ(self.env),
            )
        except OSError as exc:
            logger.error("Cannot launch %s: %s", self.binary, exc)
            self._process = None
            return None

        logger.info("Started %s (pid %d)", self.binary.name, proc.pid)
        self._process = proc
        reaper = asyncio.create_task(self._reap(proc))
        self._reapers.add(reaper)
        reaper.add_done_callback(self._reapers.discard)
        return proc

    async def _reap(self, proc: asyncio.subprocess.Process) -> None:
        returncode = await proc.wait()
        logger.info("Process %d exited with code %d", proc.pid, returncode)

    def terminate(self) -> bool:
        """Kill the tracked child if it is still running.

        Returns True if a kill signal was delivered. Failures are logged only.
        """
        proc = self._process
        if proc is None or proc.returncode is not None:
            return False
        try:
            proc.kill()
        except (ProcessLookupError, OSError) as exc:
            logger.warning("Process kill error: %s", exc)
            return False
        logger.debug("Killed pid %d", proc.pid)
        return True
