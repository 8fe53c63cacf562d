"""Tick-driven control loop that owns all dashboard state."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from .log_setup import tier_for_level
from .models import DashboardSnapshot, KeyEvent, LogTier, utc_now
from .modules import AlarmStats, LogStore
from .ui.base import InputSource, Renderer

DashboardStatus = Literal["stopped", "running"]

QUIT_KEY = "q"
TRIGGER_KEY = "t"
RESET_KEY = "r"

STARTUP_MESSAGES: tuple[tuple[str, LogTier], ...] = (
    ("system starting", LogTier.INFO),
    ("alarm module starting", LogTier.DEBUG),
    ("logging module starting", LogTier.DEBUG),
    ("alarm module started", LogTier.INFO),
    ("logging module started", LogTier.INFO),
)


class _DashboardLogHandler(logging.Handler):
    """Route logger output into the log store while the screen is live."""

    def __init__(self, logs: LogStore) -> None:
        super().__init__()
        self.logs = logs

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.logs.log(record.getMessage(), tier_for_level(record.levelno))
        except Exception:
            self.handleError(record)


@dataclass
class DashboardState:
    """Single mutable root every frame is rendered from."""

    alarms: AlarmStats
    logs: LogStore
    last_trigger_time: datetime
    tracked_hour: int

    @property
    def current_hour_alarm_count(self) -> int:
        return self.alarms.pending_count


class Dashboard:
    """Poll input, react to keys and redraw at a fixed tick rate."""

    def __init__(
        self,
        *,
        renderer: Renderer,
        input_source: InputSource,
        tick_rate: float = 0.5,
        fallback_wait: float = 0.25,
        title: str = "FASAM",
        clock: Callable[[], datetime] = utc_now,
        monotonic: Callable[[], float] = time.monotonic,
        alarms: AlarmStats | None = None,
        logs: LogStore | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.renderer = renderer
        self.input_source = input_source
        self.tick_rate = tick_rate
        self.fallback_wait = fallback_wait
        self.title = title
        self.clock = clock
        self.monotonic = monotonic
        self.logger = logger or logging.getLogger(__name__)
        if alarms is None:
            alarms = AlarmStats(clock=clock)
        # Track the hour the window was seeded for, so a boundary crossed during
        # start-up is rotated on the first frame.
        self.state = DashboardState(
            alarms=alarms,
            logs=logs if logs is not None else LogStore(clock=clock),
            last_trigger_time=clock(),
            tracked_hour=alarms.newest_hour,
        )
        self.status: DashboardStatus = "stopped"
        self._attached_logger: logging.Logger | None = None
        self._original_handlers: list[logging.Handler] = []

    def attach_logger(self, logger: logging.Logger) -> None:
        """Replace console handlers with a feed into the log store."""
        self._attached_logger = logger
        self._original_handlers = list(logger.handlers)
        logger.handlers = [_DashboardLogHandler(self.state.logs)]

    def detach_logger(self) -> None:
        """Restore original logger handlers."""
        if self._attached_logger is None:
            return
        self._attached_logger.handlers = self._original_handlers
        self._attached_logger = None
        self._original_handlers = []

    def run(self) -> int:
        """Run until the quit key is pressed and return the exit code."""
        self.status = "running"
        for message, tier in STARTUP_MESSAGES:
            self.state.logs.log(message, tier)

        last_tick = self.monotonic()
        while self.status == "running":
            self.rotate_if_hour_changed()
            self.renderer.draw(self.snapshot())

            event = self.input_source.poll_event(self.wait_budget(last_tick))
            if event is not None:
                self.handle_event(event)
            if self.status != "running":
                break

            if self.monotonic() - last_tick >= self.tick_rate:
                last_tick = self.monotonic()
        return 0

    def wait_budget(self, last_tick: float) -> float:
        """Time left in the current tick, or the fallback wait once it has passed."""
        remaining = self.tick_rate - (self.monotonic() - last_tick)
        if remaining <= 0:
            return self.fallback_wait
        return remaining

    def handle_event(self, event: object) -> None:
        if not isinstance(event, KeyEvent):
            return
        if event.key == QUIT_KEY:
            self.status = "stopped"
        elif event.key == TRIGGER_KEY:
            self.state.alarms.record_trigger()
            self.state.last_trigger_time = self.clock()
            self.state.logs.log("alarm triggered", LogTier.INFO)
        elif event.key == RESET_KEY:
            # Informational only: pending and total counts are left as they are.
            self.state.logs.log("alarm disabled", LogTier.INFO)

    def rotate_if_hour_changed(self) -> bool:
        """Push the finished hour into the alarm window when the clock moves on."""
        current_hour = self.clock().hour
        if current_hour == self.state.tracked_hour:
            return False
        count = self.state.current_hour_alarm_count
        self.state.alarms.rotate(str(current_hour), count)
        self.state.tracked_hour = current_hour
        self.logger.debug("Rotated alarm window: hour=%s count=%s", current_hour, count)
        return True

    def snapshot(self) -> DashboardSnapshot:
        alarms = self.state.alarms
        logs = self.state.logs
        return DashboardSnapshot(
            title=self.title,
            alarm_module=alarms.info(),
            log_module=logs.info(),
            alarm_series=alarms.renderable_series(),
            log_lines=logs.formatted_view(),
            last_trigger_time=self.state.last_trigger_time,
            triggered_total=alarms.triggered_total,
            current_hour_alarm_count=self.state.current_hour_alarm_count,
            alarms_to_date=alarms.alarms_to_date,
        )
