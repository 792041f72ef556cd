"""Tests for the process supervisor."""

import asyncio
import logging
import os
import sys
from pathlib import Path

import pytest

from hotbuild.core.process import ProcessSupervisor
from hotbuild.core.reentry import RUN_MODE

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses shebang scripts")


def _make_binary(project_dir: Path, body: str) -> Path:
    project_dir.mkdir(exist_ok=True)
    binary = project_dir / project_dir.name
    binary.write_text(f"#!{sys.executable}\n{body}\n")
    binary.chmod(0o755)
    return binary


@pytest.mark.asyncio
async def test_launch_sets_marker_and_extra_env(tmp_path):
    binary = _make_binary(
        tmp_path / "app",
        "import os, sys\n"
        f"open('env.txt', 'w').write(os.environ.get('{RUN_MODE}', '') + '|' + os.environ.get('FOO', ''))\n"
        "open('args.txt', 'w').write(' '.join(sys.argv[1:]))",
    )
    processes = ProcessSupervisor(binary, ["--port", "8080"], env={"FOO": "bar"})
    proc = await processes.launch()
    assert proc is not None
    assert await asyncio.wait_for(proc.wait(), 10) == 0

    assert (tmp_path / "app" / "env.txt").read_text() == f"{RUN_MODE}|bar"
    assert (tmp_path / "app" / "args.txt").read_text() == "--port 8080"
    assert os.environ.get(RUN_MODE) != RUN_MODE


@pytest.mark.asyncio
async def test_launch_does_not_wait_and_terminate_kills(tmp_path):
    binary = _make_binary(tmp_path / "server", "import time\ntime.sleep(60)")
    processes = ProcessSupervisor(binary)

    proc = await processes.launch()
    assert processes.is_running
    assert processes.process is proc

    assert processes.terminate()
    await asyncio.wait_for(proc.wait(), 10)
    assert proc.returncode != 0
    assert not processes.is_running


@pytest.mark.asyncio
async def test_relaunch_replaces_handle(tmp_path):
    binary = _make_binary(tmp_path / "server", "import time\ntime.sleep(60)")
    processes = ProcessSupervisor(binary)

    first = await processes.launch()
    processes.terminate()
    second = await processes.launch()
    assert second is not first
    assert processes.process is second

    await asyncio.wait_for(first.wait(), 10)
    assert processes.is_running
    processes.terminate()
    await asyncio.wait_for(second.wait(), 10)


def test_terminate_without_process():
    processes = ProcessSupervisor(Path("/nonexistent/app"))
    assert not processes.terminate()


@pytest.mark.asyncio
async def test_terminate_after_exit_is_noop(tmp_path):
    binary = _make_binary(tmp_path / "app", "pass")
    processes = ProcessSupervisor(binary)
    proc = await processes.launch()
    await asyncio.wait_for(proc.wait(), 10)
    assert not processes.terminate()


def test_kill_error_is_logged(caplog):
    class VanishedProcess:
        pid = 4242
        returncode = None

        def kill(self):
            raise ProcessLookupError("no such process")

    processes = ProcessSupervisor(Path("/nonexistent/app"))
    processes._process = VanishedProcess()
    with caplog.at_level(logging.WARNING):
        assert not processes.terminate()
    assert "Process kill error" in caplog.text


@pytest.mark.asyncio
async def test_missing_binary_leaves_slot_empty(tmp_path, caplog):
    processes = ProcessSupervisor(tmp_path / "app" / "app")
    with caplog.at_level(logging.ERROR):
        assert await processes.launch() is None
    assert not processes.is_running
    assert "Cannot launch" in caplog.text
