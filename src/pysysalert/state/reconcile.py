"""Deterministic merge of partial-fact records into one domain record."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from pysysalert.models._base import PartialFacts, TelemetryRecord
from pysysalert.state.policy import DomainPolicy

_logger = logging.getLogger(__name__)


def _merge_patch(target: dict[str, Any], patch: Mapping[str, Any], allowed: frozenset[str]) -> None:
    """Apply the allowed keys of a produced-fields patch.

    Patches never contain unknown (``None``) values, so every key present
    is an actual reading and overwrites the accumulator.
    """
    for key, value in patch.items():
        if key in allowed:
            target[key] = copy.deepcopy(value)


def reconcile(policy: DomainPolicy, partials: Mapping[str, PartialFacts | None]) -> TelemetryRecord:
    """Merge *partials* for ``policy.domain`` into a complete record.

    Sources are applied in ascending priority.  Each source overwrites
    only the fields it produced and is allowed to contribute.  A source
    mapped to ``None`` (failed, timed out, unparseable) is treated as if
    it never ran.  With no usable source the domain's default record is
    returned.

    Raises
    ------
    SysAlertConfigError
        If *partials* names a source the policy does not declare.
    """
    for source in partials:
        policy.rule_for(source)

    merged: dict[str, Any] = {}
    for rule in policy.ordered():
        facts = partials.get(rule.source)
        if facts is None:
            continue
        _merge_patch(merged, facts.produced(), rule.fields)

    for field_name, derive in policy.derivations:
        if field_name in merged:
            continue
        value = derive(merged)
        if value is not None:
            _logger.debug("%s: %s derived as %s", policy.domain, field_name, value)
            merged[field_name] = value

    return policy.build(merged)
