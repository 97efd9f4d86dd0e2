"""Base models for telemetry records.

Two flavours exist:

* :class:`PartialFacts`: what a single diagnostic source managed to
  extract.  Every field defaults to ``None`` meaning *unknown*; a field
  is never filled with a half-parsed value.
* :class:`TelemetryRecord`: a complete, reconciled domain record where
  every field has a concrete default (zero, ``False``, empty).

Both are frozen so that a record handed to a consumer can never be
mutated behind the cache's back.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class TelemetryRecord(BaseModel):
    """Base for complete, immutable telemetry records."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )


class PartialFacts(BaseModel):
    """Base for per-source partial-fact records."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def produced(self) -> dict[str, Any]:
        """Return only the fields this source actually produced."""
        return self.model_dump(exclude_none=True)

    @property
    def is_empty(self) -> bool:
        """Whether no field was recognised at all."""
        return not self.produced()
