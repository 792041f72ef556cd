"""Serializing rebuild + relaunch cycles."""

from __future__ import annotations

import asyncio
import logging

from hotbuild.core.builder import BuildResult, BuildRunner
from hotbuild.core.process import ProcessSupervisor

logger = logging.getLogger(__name__)


class RestartCoordinator:
    """Run restart cycles (build, kill old child, launch new child) one at a time.

    ``restart()`` performs a full cycle under the restart lock; concurrent
    callers queue on the lock and each get their own cycle.

    ``request_restart()`` is what the watch loop uses: it marks a restart as
    pending and makes sure a single drain task is running. Any number of
    requests made before the drain task picks the flag up collapse into one
    cycle.
    """

    def __init__(self, builder: BuildRunner, processes: ProcessSupervisor) -> None:
        self.builder = builder
        self.processes = processes
        self.cycles = 0
        self._lock = asyncio.Lock()
        self._pending = False
        self._pending_reason: str | None = None
        self._drain_task: asyncio.Task[None] | None = None

    @property
    def restarting(self) -> bool:
        return self._lock.locked()

    @property
    def pending(self) -> bool:
        return self._pending

    async def restart(self, reason: str | None = None) -> BuildResult:
        async with self._lock:
            if reason:
                logger.info("Fired by: %s", reason)
            result = await self.builder.run()
            if not result.ok:
                logger.warning("Build failed, relaunching the binary already on disk")
            self.processes.terminate()
            await self.processes.launch()
            self.cycles += 1
            return result

    def request_restart(self, reason: str | None = None) -> asyncio.Task[None]:
        """Schedule a restart cycle; must be called from the running event loop."""
        self._pending = True
        self._pending_reason = reason
        if self._drain_task is None or self._drain_task.done():
            self._drain_task = asyncio.create_task(self._drain())
        return self._drain_task

    async def _drain(self) -> None:
        while self._pending:
            self._pending = False
            reason, self._pending_reason = self._pending_reason, None
            try:
                await self.restart(reason)
            except Exception:
                logger.exception("Restart cycle failed")

    async def wait_idle(self) -> None:
        """Wait until no restart is pending or in progress."""
        while self._drain_task is not None and not self._drain_task.done():
            await self._drain_task
