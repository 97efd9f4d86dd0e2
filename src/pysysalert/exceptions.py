"""Custom exception hierarchy for pysysalert."""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class SysAlertError(Exception):
    """Base exception for all pysysalert errors."""


class SysAlertConfigError(SysAlertError):
    """Invalid or missing configuration."""


class ProbeFailureKind(StrEnum):
    """Closed set of ways a diagnostic command can fail."""

    TIMEOUT = "timeout"
    LAUNCH = "launch"
    EXIT = "exit"


class ProbeError(SysAlertError):
    """A diagnostic command did not produce usable output.

    Subclasses carry a :class:`ProbeFailureKind` tag so callers can
    dispatch on ``error.kind`` instead of ``isinstance`` chains.
    """

    kind: ClassVar[ProbeFailureKind]

    def __init__(self, message: str, *, source: str = "") -> None:
        self.source = source
        super().__init__(message)


class ProbeTimeoutError(ProbeError):
    """The command exceeded its wait bound and was killed."""

    kind = ProbeFailureKind.TIMEOUT

    def __init__(self, message: str, *, source: str = "", timeout: float = 0.0) -> None:
        self.timeout = timeout
        super().__init__(message, source=source)


class ProbeLaunchError(ProbeError):
    """The command could not be started (missing binary, permissions)."""

    kind = ProbeFailureKind.LAUNCH


class ProbeExitError(ProbeError):
    """The command exited with a non-zero status."""

    kind = ProbeFailureKind.EXIT

    def __init__(
        self,
        message: str,
        *,
        source: str = "",
        code: int | None = None,
        stderr: str = "",
    ) -> None:
        self.code = code
        self.stderr = stderr
        super().__init__(message, source=source)


class ParseMismatchError(SysAlertError):
    """Text was captured but does not resemble the expected report.

    Raised by extractors only when no recognisable line shape is present.
    Missing individual fields are *not* an error.
    """

    def __init__(self, message: str, *, source: str = "") -> None:
        self.source = source
        super().__init__(message)


class CollectorBusyError(SysAlertError):
    """``collect()`` was re-entered on the same collector instance."""
