"""Shared helpers for domain pipeline modules.

This module centralizes the pattern every domain repeats:
- running each source's command concurrently
- feeding captured text to the source's extractor
- collapsing failed sources to "did not run" before reconciliation

It is internal to pysysalert and may change at any time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from pysysalert._probe import CommandSpec, ProbeRunner
from pysysalert.exceptions import ParseMismatchError, ProbeError
from pysysalert.models._base import PartialFacts, TelemetryRecord
from pysysalert.state.policy import DomainPolicy
from pysysalert.state.reconcile import reconcile

_logger = logging.getLogger(__name__)

Extractor = Callable[[str], PartialFacts]
SourceStep = tuple[CommandSpec, Extractor]


async def probe_and_extract(runner: ProbeRunner, spec: CommandSpec, extract: Extractor) -> PartialFacts:
    """Run one command and extract its partial facts."""
    output = await runner.run(spec)
    return extract(output.text)


async def refresh_domain(
    policy: DomainPolicy,
    runner: ProbeRunner,
    steps: Sequence[SourceStep],
) -> TelemetryRecord:
    """Probe every source of *policy* concurrently and reconcile the results.

    A source whose probe fails or whose text is unrecognisable counts as
    not having run.  The refresh as a whole only fails when *every*
    source failed, so that the cache can keep its previous value instead
    of replacing it with an all-default record.

    Raises
    ------
    ProbeError
        If all sources failed and the last failure was a probe failure.
    ParseMismatchError
        If all sources failed and the last failure was a parse mismatch.
    """
    results = await asyncio.gather(
        *(probe_and_extract(runner, spec, extract) for spec, extract in steps),
        return_exceptions=True,
    )

    partials: dict[str, PartialFacts | None] = {}
    failures: list[ProbeError | ParseMismatchError] = []
    for (spec, _), result in zip(steps, results, strict=True):
        if isinstance(result, (ProbeError, ParseMismatchError)):
            _logger.debug("%s: source %s unavailable: %s", policy.domain, spec.source, result)
            failures.append(result)
            partials[spec.source] = None
        elif isinstance(result, BaseException):
            raise result
        else:
            partials[spec.source] = result

    if failures and len(failures) == len(steps):
        raise failures[-1]
    return reconcile(policy, partials)


def command(source: str, program: str, *args: Any, timeout: float) -> CommandSpec:
    return CommandSpec(source=str(source), program=program, args=tuple(str(arg) for arg in args), timeout=timeout)
