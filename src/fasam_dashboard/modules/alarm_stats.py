"""Rolling 29-hour alarm statistics."""

from __future__ import annotations

import random
from collections import deque
from collections.abc import Callable
from datetime import datetime

from ..exceptions import InvariantViolation
from ..models import utc_now
from .base import Module

WINDOW_SIZE = 29


class AlarmStats(Module):
    """Fixed-size window of hourly alarm counts plus a running total.

    The window always holds exactly ``WINDOW_SIZE`` ``(hour label, count)``
    pairs ordered oldest to newest. ``triggered_total`` is the sum of every
    count ever pushed into the window, evicted ones included. Triggers in the
    current hour accumulate in ``pending_count`` until the next rotation.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
        seed_max_alarms: int = 5,
    ) -> None:
        self.clock = clock
        self.rng = rng or random.Random()
        self.seed_max_alarms = seed_max_alarms
        self._window: deque[tuple[str, int]] = deque()
        self.triggered_total = 0
        self.pending_count = 0
        self.initialize()

    @property
    def id(self) -> int:
        return 1

    @property
    def name(self) -> str:
        return "Alarm Statistics"

    @property
    def description(self) -> str:
        return f"Gets the statistics of alarms for the past {WINDOW_SIZE} hours"

    def initialize(self) -> None:
        """Seed the window with synthetic history ending at the current hour."""
        current_hour = self.clock().hour
        self._window.clear()
        self.triggered_total = 0
        self.pending_count = 0
        for offset in range(WINDOW_SIZE - 1, -1, -1):
            count = self.rng.randint(0, self.seed_max_alarms)
            self._window.append((str((current_hour - offset) % 24), count))
            self.triggered_total += count

    def record_trigger(self) -> None:
        self.pending_count += 1

    @property
    def alarms_to_date(self) -> int:
        """Running total including triggers not yet rotated into the window."""
        return self.triggered_total + self.pending_count

    def rotate(self, label: str, count: int) -> None:
        """Evict the oldest hour and append ``(label, count)`` as the newest."""
        self._check_window()
        self._window.popleft()
        self._window.append((label, count))
        self.triggered_total += count
        self.pending_count = 0
        self._check_window()

    @property
    def newest_hour(self) -> int:
        """Hour-of-day of the most recent window entry."""
        return int(self._window[-1][0])

    def renderable_series(self) -> list[tuple[str, int]]:
        return [(label, int(count)) for label, count in self._window]

    def __len__(self) -> int:
        return len(self._window)

    def _check_window(self) -> None:
        if len(self._window) != WINDOW_SIZE:
            raise InvariantViolation(
                f"alarm window holds {len(self._window)} entries, expected {WINDOW_SIZE}"
            )
