"""Bounded execution of diagnostic commands."""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from pysysalert.exceptions import ProbeExitError, ProbeLaunchError, ProbeTimeoutError, SysAlertConfigError
from pysysalert.models.probe import RawProbeOutput

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclasses.dataclass(frozen=True)
class CommandSpec:
    """A diagnostic command and its wait bound.

    Parameters
    ----------
    source : str
        Identifier of the output stream (see :class:`ProbeSource`).
    program : str
        Executable name or path.  Never run through a shell.
    args : tuple of str
        Arguments passed verbatim.
    timeout : float
        Maximum seconds to wait before the process is killed.
    """

    source: str
    program: str
    args: tuple[str, ...] = ()
    timeout: float = 1.0

    def __post_init__(self) -> None:
        if not self.program:
            raise SysAlertConfigError(f"command for {self.source!r} has no program")
        if self.timeout <= 0:
            raise SysAlertConfigError(f"command for {self.source!r} needs a positive timeout")

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


class ProbeRunner(Protocol):
    """Structural runner interface used by the domain pipelines.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`SubprocessRunner`) concrete.
    """

    async def run(self, spec: CommandSpec) -> RawProbeOutput:
        ...


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill *proc* if still running and reap it."""
    if proc.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
    await proc.wait()


class SubprocessRunner:
    """Runs one command per call with a strict timeout and no retry."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    async def run(self, spec: CommandSpec) -> RawProbeOutput:
        """Execute *spec* and capture its standard output.

        Raises
        ------
        ProbeLaunchError
            If the program cannot be started.
        ProbeTimeoutError
            If the program does not finish within ``spec.timeout``.
        ProbeExitError
            If the program exits with a non-zero status.
        """
        _logger.debug("exec %s (timeout=%.1fs)", " ".join(spec.argv), spec.timeout)

        try:
            proc = await asyncio.create_subprocess_exec(
                *spec.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ProbeLaunchError(
                f"Could not start {spec.program}: {exc}",
                source=spec.source,
            ) from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=spec.timeout)
        except TimeoutError as exc:
            await _terminate(proc)
            raise ProbeTimeoutError(
                f"{spec.program} did not finish within {spec.timeout:.1f}s",
                source=spec.source,
                timeout=spec.timeout,
            ) from exc
        except asyncio.CancelledError:
            # Shutdown mid-cycle: never leave the child behind.
            await asyncio.shield(_terminate(proc))
            raise

        exit_status = proc.returncode if proc.returncode is not None else -1
        if exit_status != 0:
            error_text = stderr.decode("utf-8", errors="replace").strip()
            raise ProbeExitError(
                f"{spec.program} exited with status {exit_status}: {error_text[:200]}",
                source=spec.source,
                code=exit_status,
                stderr=error_text,
            )

        return RawProbeOutput(
            source=spec.source,
            text=stdout.decode("utf-8", errors="replace"),
            captured_at=self._clock(),
            exit_status=exit_status,
        )
