"""Insertion-ordered store of tiered log entries."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from datetime import datetime

from ..models import LogEntry, LogTier, utc_now
from .base import Module


class LogStore(Module):
    """Keep every log entry in the order it was written.

    ``max_entries`` caps retention; the oldest entries go first. ``None``
    keeps everything for the lifetime of the process.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utc_now,
        max_entries: int | None = None,
    ) -> None:
        self.clock = clock
        self.max_entries = max_entries
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)

    @property
    def id(self) -> int:
        return 2

    @property
    def name(self) -> str:
        return "Logging"

    @property
    def description(self) -> str:
        return "Used to store and show logging on screen"

    def renderable_series(self) -> list[tuple[str, int]]:
        # Log lines are drawn through formatted_view(), not as a chart.
        return []

    def log(self, message: str, tier: LogTier) -> None:
        self._entries.append(LogEntry(message=message, tier=tier, timestamp=self.clock()))

    def entries(self) -> list[LogEntry]:
        """Return a copy of stored entries, oldest first."""
        return list(self._entries)

    def formatted_view(self) -> list[str]:
        return [entry.formatted() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
