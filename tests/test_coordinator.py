"""Tests for restart serialization and coalescing."""

import asyncio

import pytest

from hotbuild.core.builder import BuildResult
from hotbuild.core.coordinator import RestartCoordinator


class FakeBuilder:
    def __init__(self, log: list, ok: bool = True, gate: asyncio.Event | None = None):
        self.log = log
        self.ok = ok
        self.gate = gate
        self.calls = 0
        self.active = 0
        self.max_active = 0

    async def run(self) -> BuildResult:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        self.log.append("build")
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(0.01)
        self.active -= 1
        self.calls += 1
        return BuildResult(ok=self.ok)


class FakeProcesses:
    def __init__(self, log: list):
        self.log = log
        self.live = 0
        self.max_live = 0
        self.launched = 0

    def terminate(self) -> bool:
        self.log.append("terminate")
        if self.live:
            self.live -= 1
            return True
        return False

    async def launch(self):
        self.log.append("launch")
        self.live += 1
        self.max_live = max(self.max_live, self.live)
        self.launched += 1
        return object()


def _coordinator(**builder_kwargs):
    log: list = []
    builder = FakeBuilder(log, **builder_kwargs)
    processes = FakeProcesses(log)
    return RestartCoordinator(builder, processes), builder, processes, log


@pytest.mark.asyncio
async def test_cycle_order():
    coordinator, builder, processes, log = _coordinator()
    result = await coordinator.restart("main.go")
    assert result.ok
    assert log == ["build", "terminate", "launch"]
    assert coordinator.cycles == 1
    assert not coordinator.restarting


@pytest.mark.asyncio
async def test_concurrent_restarts_run_one_at_a_time():
    coordinator, builder, processes, log = _coordinator()
    await asyncio.gather(*(coordinator.restart(f"f{i}.go") for i in range(5)))

    assert builder.calls == 5
    assert builder.max_active == 1
    assert coordinator.cycles == 5
    assert log == ["build", "terminate", "launch"] * 5
    assert processes.max_live == 1


@pytest.mark.asyncio
async def test_failed_build_still_relaunches():
    coordinator, builder, processes, log = _coordinator(ok=False)
    result = await coordinator.restart()
    assert not result.ok
    assert processes.launched == 1
    assert log == ["build", "terminate", "launch"]


@pytest.mark.asyncio
async def test_burst_of_requests_collapses_into_one_cycle():
    coordinator, builder, processes, log = _coordinator()
    tasks = {coordinator.request_restart(f"f{i}.go") for i in range(5)}
    assert len(tasks) == 1

    await coordinator.wait_idle()
    assert coordinator.cycles == 1
    assert not coordinator.pending


@pytest.mark.asyncio
async def test_requests_during_restart_run_one_more_cycle():
    gate = asyncio.Event()
    coordinator, builder, processes, log = _coordinator(gate=gate)

    coordinator.request_restart("main.go")
    while not coordinator.restarting:
        await asyncio.sleep(0)

    for i in range(3):
        coordinator.request_restart(f"f{i}.go")
    assert coordinator.pending

    gate.set()
    await coordinator.wait_idle()
    assert coordinator.cycles == 2
    assert builder.max_active == 1
    assert processes.max_live == 1


@pytest.mark.asyncio
async def test_drain_survives_a_failing_cycle():
    coordinator, builder, processes, log = _coordinator()

    async def broken_launch():
        raise RuntimeError("boom")

    processes.launch = broken_launch
    await coordinator.request_restart("main.go")
    assert coordinator.cycles == 0

    del processes.launch
    coordinator.request_restart("main.go")
    await coordinator.wait_idle()
    assert coordinator.cycles == 1
