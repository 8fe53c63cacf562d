"""Rich-rendered full-screen dashboard frame."""

from __future__ import annotations

import re
from types import TracebackType

from rich.console import Console, ConsoleOptions, RenderResult
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ..exceptions import FatalIOError
from ..models import DashboardSnapshot, format_timestamp
from .base import Renderer

HELP_TEXT = (
    "Welcome to the Fire and Security Alarm Monitoring System. "
    "Please use the following key binds:\n"
    " q - Quit\n"
    " r - Reset The Alarms\n"
    " t - Trigger The Alarm"
)

# (region name, ratio) from top to bottom
REGIONS: tuple[tuple[str, int], ...] = (
    ("help", 15),
    ("alarms", 35),
    ("logs", 35),
    ("stats", 15),
)

_TIER_STYLES = {
    "ERROR": "red",
    "WARN": "yellow",
    "INFO": "blue",
    "DEBUG": "green",
}
_TIER_TOKEN_RE = re.compile(r"\[(ERROR|WARN|INFO|DEBUG)\]")

_MAX_BAR_WIDTH = 5
_MAX_BAR_GAP = 3
_DEFAULT_HEIGHT = 10


def style_for_line(line: str) -> str:
    """Pick the colour for a formatted log line from its tier label."""
    match = _TIER_TOKEN_RE.search(line)
    if match is None:
        return _TIER_STYLES["DEBUG"]
    return _TIER_STYLES[match.group(1)]


class AlarmBarChart:
    """Vertical bar chart sized to whatever region it is rendered into."""

    def __init__(self, series: list[tuple[str, int]], *, bar_style: str = "green") -> None:
        self.series = series
        self.bar_style = bar_style

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        width = options.max_width
        height = options.height or _DEFAULT_HEIGHT
        if not self.series or width <= 0 or height <= 0:
            return

        slot = max(3, min(_MAX_BAR_WIDTH + _MAX_BAR_GAP, width // len(self.series)))
        bar_width = max(2, min(_MAX_BAR_WIDTH, slot - 1))
        visible = self.series[-max(1, width // slot):]
        bar_rows = max(1, height - 2)
        peak = max((count for _, count in visible), default=0) or 1
        heights = [round(max(count, 0) / peak * bar_rows) for _, count in visible]

        chart = Text(no_wrap=True, overflow="crop")
        for row in range(bar_rows + 1):
            level = bar_rows + 1 - row
            for (_, count), bar_height in zip(visible, heights):
                if bar_height >= level:
                    chart.append("█" * bar_width, style=self.bar_style)
                elif bar_height + 1 == level:
                    chart.append(str(count)[:bar_width].center(bar_width), style="bold")
                else:
                    chart.append(" " * bar_width)
                chart.append(" " * (slot - bar_width))
            chart.append("\n")
        for label, _ in visible:
            chart.append(label[:bar_width].center(bar_width), style="dim")
            chart.append(" " * (slot - bar_width))
        yield chart


class LogView:
    """Most recent log lines that fit the region, coloured by tier."""

    def __init__(self, lines: list[str]) -> None:
        self.lines = lines

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        height = options.height or _DEFAULT_HEIGHT
        view = Text(no_wrap=True, overflow="ellipsis")
        # A multi-line message takes one row per line, all in the message's colour.
        rows = [
            (row, style_for_line(line)) for line in self.lines for row in line.split("\n")
        ]
        shown = rows[-height:] if height > 0 else []
        for index, (row, style) in enumerate(shown):
            if index:
                view.append("\n")
            view.append(row, style=style)
        yield view


def build_stats_text(snapshot: DashboardSnapshot) -> str:
    return (
        "Stats:\n"
        f" Last Alarm Triggered: {format_timestamp(snapshot.last_trigger_time)}\n"
        f" Alarms Recorded To Date: {snapshot.triggered_total}"
        f" ({snapshot.alarms_to_date} incl. this hour)\n"
        f" Alarms In This Run: {snapshot.current_hour_alarm_count}"
    )


def build_layout(snapshot: DashboardSnapshot) -> Layout:
    """Assemble the four stacked dashboard regions for one frame."""
    layout = Layout(name="root")
    layout.split_column(*(Layout(name=name, ratio=ratio) for name, ratio in REGIONS))
    layout["help"].update(Panel(Text(HELP_TEXT), title=snapshot.title))
    layout["alarms"].update(
        Panel(
            AlarmBarChart(snapshot.alarm_series),
            title=f"Past {len(snapshot.alarm_series)} Hours Alarms",
        )
    )
    layout["logs"].update(Panel(LogView(snapshot.log_lines), title=snapshot.log_module.name))
    layout["stats"].update(Panel(Text(build_stats_text(snapshot)), title=snapshot.title))
    return layout


class RichRenderer(Renderer):
    """Draw frames into a full-screen rich Live display."""

    def __init__(self, *, console: Console, screen: bool = True) -> None:
        self.console = console
        self.screen = screen
        self._live: Live | None = None

    def __enter__(self) -> RichRenderer:
        self._live = Live(
            console=self.console,
            screen=self.screen,
            auto_refresh=False,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        try:
            self._live.start()
        except OSError as exc:
            self._live = None
            raise FatalIOError(f"Failed entering dashboard screen: {exc}") from exc
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._live is None:
            return
        live, self._live = self._live, None
        try:
            live.stop()
        except OSError as stop_exc:
            if exc is None:
                raise FatalIOError(f"Failed leaving dashboard screen: {stop_exc}") from stop_exc

    def draw(self, snapshot: DashboardSnapshot) -> None:
        layout = build_layout(snapshot)
        try:
            if self._live is None:
                self.console.print(layout)
            else:
                self._live.update(layout, refresh=True)
        except OSError as exc:
            raise FatalIOError(f"Failed drawing dashboard frame: {exc}") from exc
