"""Raw diagnostic command output."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawProbeOutput(BaseModel):
    """Text captured from one diagnostic command.

    Transient: discarded as soon as an extractor has turned it into a
    partial-fact record.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str
    text: str = ""
    captured_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    exit_status: int = 0

    @field_validator("captured_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
