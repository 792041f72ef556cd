"""The supervisor context and the ``run()`` entry point."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from hotbuild.core.builder import BuildRunner
from hotbuild.core.classifier import ChangeClassifier
from hotbuild.core.config import ProjectConfig
from hotbuild.core.coordinator import RestartCoordinator
from hotbuild.core.env import load_project_env
from hotbuild.core.errors import WatchSetupError
from hotbuild.core.paths import binary_path, resolve_project
from hotbuild.core.process import ProcessSupervisor
from hotbuild.core.reentry import is_supervised_child
from hotbuild.core.watcher import ChangeEvent, WatchSource
from hotbuild.logging_config import configure_logging

logger = logging.getLogger(__name__)


class Supervisor:
    """State for one supervisor run, from the first build until the process exits."""

    def __init__(self, project_dir: Path, config: ProjectConfig | None = None) -> None:
        self.project_dir = project_dir
        self.config = config if config is not None else ProjectConfig.load(project_dir)

        watch = self.config.watch
        self.classifier = ChangeClassifier(watch.suffix, watch.ignore_markers)
        self.builder = BuildRunner(project_dir, self.config.build.steps, self.config.build.env)
        self.processes = ProcessSupervisor(
            binary_path(project_dir, self.config.run.binary),
            self.config.run.args,
            env=load_project_env(project_dir, self.config.env_file),
            cwd=project_dir,
        )
        self.coordinator = RestartCoordinator(self.builder, self.processes)
        self._stop = asyncio.Event()
        self.source = WatchSource(
            project_dir,
            recursive=watch.recursive,
            skip_dirs=watch.skip_dirs,
            debounce_ms=watch.debounce_ms,
            stop_event=self._stop,
        )

    def handle(self, event: ChangeEvent) -> bool:
        """Classify one event and schedule a restart if it qualifies."""
        if not self.classifier.classify(event.path):
            return False
        self.coordinator.request_restart(event.path)
        return True

    async def _watch(self) -> None:
        async for event in self.source.events():
            logger.debug("%s %s", event.kind.name, event.path)
            self.handle(event)

    async def serve(self) -> None:
        """Watch, do the initial build and launch, then keep restarting on change.

        Returns only after ``stop()``; watch setup failures propagate.
        """
        self.source.register()
        watch_task = asyncio.create_task(self._watch())
        try:
            await self.coordinator.restart()
            await watch_task
            await self.coordinator.wait_idle()
        finally:
            watch_task.cancel()
            self.processes.terminate()

    def stop(self) -> None:
        self._stop.set()


def run(project_dir: str | Path | None = None, config: ProjectConfig | None = None) -> None:
    """Rebuild and relaunch the project whenever one of its sources changes.

    Call this at the top of the program's main. In the supervisor process it
    blocks forever; in the child it launches it returns immediately, so the
    program carries on as normal.
    """
    if is_supervised_child():
        return

    root = resolve_project(project_dir)
    if not root.is_dir():
        raise WatchSetupError(f"Project directory {root} does not exist")
    os.chdir(root)
    configure_logging()

    supervisor = Supervisor(root, config)
    try:
        asyncio.run(supervisor.serve())
    except KeyboardInterrupt:
        logger.info("Supervisor stopped")
