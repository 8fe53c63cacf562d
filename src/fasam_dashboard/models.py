"""Typed models shared by the alarm/logging modules and the dashboard runtime."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class LogTier(Enum):
    """Severity of a dashboard log entry.

    The value is the numeric rank used for formatting dispatch.
    """

    INFO = 1
    ERROR = 2
    WARNING = 3
    DEBUG = 4

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]


_TIER_LABELS: dict[LogTier, str] = {
    LogTier.INFO: "INFO",
    LogTier.ERROR: "ERROR",
    LogTier.WARNING: "WARN",
    LogTier.DEBUG: "DEBUG",
}


def utc_now() -> datetime:
    """Default wall clock for every component."""
    return datetime.now(UTC)


def format_timestamp(value: datetime) -> str:
    """Render `value` as e.g. ``Mon Feb  2 13:04:05 2026``."""
    return f"{value:%a %b} {value.day:>2} {value:%H:%M:%S %Y}"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One immutable log line owned by the log store."""

    message: str
    tier: LogTier
    timestamp: datetime

    def formatted(self) -> str:
        return f"{format_timestamp(self.timestamp)} [{self.tier.label}] {self.message.strip()}"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A single key press read from the input source."""

    key: str


class ModuleInfo(BaseModel):
    """Static metadata of one displayable module."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str


class DashboardSnapshot(BaseModel):
    """Read-only view of dashboard state handed to a renderer each frame."""

    model_config = ConfigDict(frozen=True)

    title: str
    alarm_module: ModuleInfo
    log_module: ModuleInfo
    alarm_series: list[tuple[str, int]]
    log_lines: list[str]
    last_trigger_time: datetime
    triggered_total: int
    current_hour_alarm_count: int
    alarms_to_date: int
