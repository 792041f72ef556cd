"""Running the external build toolchain."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    ok: bool = True
    failures: list[tuple[str, int | None]] = field(default_factory=list)


class BuildRunner:
    """Run each build step in order against the project root.

    Output of the toolchain goes straight to our own stdout/stderr. A failing
    step is logged and recorded, but the remaining steps still run and the
    caller decides what to do with the result.
    """

    def __init__(
        self,
        project_dir: Path,
        steps: Sequence[Sequence[str]],
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.project_dir = project_dir
        self.steps = [list(step) for step in steps if step]
        self.env = dict(env or {})

    def _environ(self) -> dict[str, str]:
        env = dict(os.environ)
        env.update(self.env)
        return env

    async def run(self) -> BuildResult:
        result = BuildResult()
        env = self._environ()
        for step in self.steps:
            cmd_str = shlex.join(step)
            logger.info("Run cmd: %s", cmd_str)
            try:
                proc = await asyncio.create_subprocess_exec(
                    *step,
                    cwd=self.project_dir,
                    env=env,
                )
            except OSError as exc:
                logger.warning("Cannot start %s: %s", cmd_str, exc)
                result.ok = False
                result.failures.append((cmd_str, None))
                continue

            returncode = await proc.wait()
            if returncode != 0:
                logger.warning("%s exited with code %d", cmd_str, returncode)
                result.ok = False
                result.failures.append((cmd_str, returncode))
        return result
