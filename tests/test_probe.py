from __future__ import annotations

import asyncio
import sys
from datetime import UTC, datetime

import pytest

from pysysalert._probe import CommandSpec, SubprocessRunner
from pysysalert.exceptions import (
    ProbeExitError,
    ProbeFailureKind,
    ProbeLaunchError,
    ProbeTimeoutError,
    SysAlertConfigError,
)


class _HangingProcess:
    def __init__(self) -> None:
        self.returncode: int | None = None
        self.killed = False
        self.reaped = False

    async def communicate(self) -> tuple[bytes, bytes]:
        await asyncio.sleep(3600)
        return b"", b""

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    async def wait(self) -> int:
        self.reaped = True
        return self.returncode if self.returncode is not None else 0


def _python(code: str, *, timeout: float = 10.0) -> CommandSpec:
    return CommandSpec(source="test", program=sys.executable, args=("-c", code), timeout=timeout)


def test_command_spec_rejects_non_positive_timeout() -> None:
    with pytest.raises(SysAlertConfigError):
        CommandSpec(source="pmset", program="pmset", args=("-g", "batt"), timeout=0)


def test_command_spec_argv() -> None:
    spec = CommandSpec(source="pmset", program="pmset", args=("-g", "batt"), timeout=1.0)
    assert spec.argv == ["pmset", "-g", "batt"]


@pytest.mark.asyncio
async def test_run_captures_stdout() -> None:
    captured_at = datetime(2026, 1, 1, tzinfo=UTC)
    runner = SubprocessRunner(clock=lambda: captured_at)

    output = await runner.run(_python("print('hello')"))

    assert output.text.strip() == "hello"
    assert output.exit_status == 0
    assert output.source == "test"
    assert output.captured_at == captured_at


@pytest.mark.asyncio
async def test_non_zero_exit_carries_code_and_stderr() -> None:
    runner = SubprocessRunner()

    with pytest.raises(ProbeExitError) as exc_info:
        await runner.run(_python("import sys; sys.stderr.write('boom'); sys.exit(3)"))

    assert exc_info.value.code == 3
    assert exc_info.value.stderr == "boom"
    assert exc_info.value.kind == ProbeFailureKind.EXIT
    assert exc_info.value.source == "test"


@pytest.mark.asyncio
async def test_missing_program_is_launch_failure() -> None:
    runner = SubprocessRunner()
    spec = CommandSpec(source="ioreg", program="/nonexistent/pysysalert-missing-tool", timeout=1.0)

    with pytest.raises(ProbeLaunchError) as exc_info:
        await runner.run(spec)

    assert exc_info.value.kind == ProbeFailureKind.LAUNCH
    assert exc_info.value.source == "ioreg"


@pytest.mark.asyncio
async def test_real_hung_command_times_out() -> None:
    runner = SubprocessRunner()
    loop = asyncio.get_running_loop()
    started = loop.time()

    with pytest.raises(ProbeTimeoutError) as exc_info:
        await runner.run(_python("import time; time.sleep(30)", timeout=0.5))

    assert loop.time() - started < 10
    assert exc_info.value.timeout == 0.5
    assert exc_info.value.kind == ProbeFailureKind.TIMEOUT


@pytest.mark.asyncio
async def test_timeout_kills_and_reaps_child(monkeypatch: pytest.MonkeyPatch) -> None:
    proc = _HangingProcess()

    async def fake_exec(*_args: object, **_kwargs: object) -> _HangingProcess:
        return proc

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)
    runner = SubprocessRunner()

    with pytest.raises(ProbeTimeoutError):
        await runner.run(CommandSpec(source="powermetrics", program="powermetrics", timeout=0.05))

    assert proc.killed
    assert proc.reaped


@pytest.mark.asyncio
async def test_cancellation_kills_and_reaps_child(monkeypatch: pytest.MonkeyPatch) -> None:
    proc = _HangingProcess()
    launched = asyncio.Event()

    async def fake_exec(*_args: object, **_kwargs: object) -> _HangingProcess:
        launched.set()
        return proc

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)
    runner = SubprocessRunner()
    task = asyncio.create_task(runner.run(CommandSpec(source="powermetrics", program="powermetrics", timeout=60.0)))
    await launched.wait()
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert proc.killed
    assert proc.reaped
