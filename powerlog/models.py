"""Pydantic models for power events, sessions and timeline reports."""
from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class EventKind(str, Enum):
    BOOT = "boot"
    SHUTDOWN = "shutdown"
    SUSPEND = "suspend"
    HIBERNATE = "hibernate"
    RESUME = "resume"

    @property
    def is_opener(self) -> bool:
        return self in _OPENERS

    @property
    def is_closer(self) -> bool:
        return not self.is_opener


_OPENERS = frozenset({EventKind.BOOT, EventKind.RESUME})

STILL_ACTIVE = "(still active)"


def _require_aware(value: datetime) -> datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("timestamp must carry a timezone offset")
    return value


# ── Events ─────────────────────────────────────────────────────────

class PowerEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    kind: EventKind

    @field_validator("timestamp")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return _require_aware(value)


class BootInterval(BaseModel):
    """One row of the boot listing: first and last journal entry of a boot."""

    model_config = ConfigDict(frozen=True)

    id: str
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return _require_aware(value)


# ── Sessions ───────────────────────────────────────────────────────

class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    openKind: EventKind
    closeKind: Optional[EventKind] = None  # None while the session is still active
    anomaly: bool = False  # closed by a second opener instead of a closer

    @field_validator("start", "end")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return _require_aware(value)

    @model_validator(mode="after")
    def _ordered(self) -> "Session":
        if self.end < self.start:
            raise ValueError("session end precedes its start")
        return self

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @computed_field  # type: ignore[prop-decorator]
    @property
    def durationSeconds(self) -> int:
        return int(self.duration.total_seconds())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stillActive(self) -> bool:
        return self.closeKind is None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str:
        tail = self.closeKind.value if self.closeKind is not None else STILL_ACTIVE
        return f"{self.openKind.value} → {tail}"


class SessionSummary(BaseModel):
    count: int
    total: timedelta
    average: timedelta
    longest: Session
    shortest: Session

    @computed_field  # type: ignore[prop-decorator]
    @property
    def totalSeconds(self) -> int:
        return int(self.total.total_seconds())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def averageSeconds(self) -> int:
        return int(self.average.total_seconds())


# ── Reports ────────────────────────────────────────────────────────

ReportStatus = Literal["ok", "no_events", "no_sessions"]


class TimelineReport(BaseModel):
    status: ReportStatus
    generatedAt: datetime
    events: list[PowerEvent] = Field(default_factory=list)
    sessions: list[Session] = Field(default_factory=list)
    summary: Optional[SessionSummary] = None
