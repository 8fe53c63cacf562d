"""Tests for CLI wiring, exit codes and terminal teardown."""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from types import TracebackType
from typing import Any

import pytest

from fasam_dashboard import cli
from fasam_dashboard.exceptions import FatalIOError
from fasam_dashboard.models import DashboardSnapshot, KeyEvent
from fasam_dashboard.ui.base import InputSource, Renderer


class _FakeTerminal:
    """Shared record of what the fake keyboard and renderer saw."""

    def __init__(self) -> None:
        self.entered: list[str] = []
        self.exited: list[str] = []
        self.frames: list[DashboardSnapshot] = []
        self.keys: list[str] = ["t", "q"]
        self.draw_error: Exception | None = None


class _FakeKeyboard(InputSource):
    terminal: _FakeTerminal

    def __enter__(self) -> _FakeKeyboard:
        self.terminal.entered.append("keyboard")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.terminal.exited.append("keyboard")

    def poll_event(self, timeout: float) -> KeyEvent | None:
        return KeyEvent(key=self.terminal.keys.pop(0))


class _FakeRenderer(Renderer):
    terminal: _FakeTerminal

    def __init__(self, *, console: Any) -> None:
        self.console = console

    def __enter__(self) -> _FakeRenderer:
        self.terminal.entered.append("renderer")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.terminal.exited.append("renderer")

    def draw(self, snapshot: DashboardSnapshot) -> None:
        if self.terminal.draw_error is not None:
            raise self.terminal.draw_error
        self.terminal.frames.append(snapshot)


@pytest.fixture
def terminal(monkeypatch: Any, tmp_path: Any) -> _FakeTerminal:
    fake = _FakeTerminal()
    monkeypatch.chdir(tmp_path)
    for name in ("FASAM_TICK_RATE_MS", "FASAM_LOG_LEVEL", "FASAM_LOG_MAX_ENTRIES"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(_FakeKeyboard, "terminal", fake, raising=False)
    monkeypatch.setattr(_FakeRenderer, "terminal", fake, raising=False)
    monkeypatch.setattr(cli, "KeyboardInput", _FakeKeyboard)
    monkeypatch.setattr(cli, "RichRenderer", _FakeRenderer)
    monkeypatch.setattr(sys, "argv", ["fasam-dashboard"])
    monkeypatch.setattr(logging.getLogger("fasam_dashboard"), "handlers", [])
    real_setup_logger = cli.setup_logger

    def _fresh_stderr_logger(*args: Any, **kwargs: Any) -> logging.Logger:
        # pytest may have attached its own capture handlers since the fixture ran.
        logging.getLogger("fasam_dashboard").handlers = []
        return real_setup_logger(*args, stream=sys.stderr, **kwargs)

    monkeypatch.setattr(cli, "setup_logger", _fresh_stderr_logger)
    return fake


def test_clean_quit_exits_zero_and_restores_terminal(terminal: _FakeTerminal) -> None:
    assert cli.main() == 0
    assert terminal.entered == ["keyboard", "renderer"]
    assert terminal.exited == ["renderer", "keyboard"]
    assert terminal.frames[-1].current_hour_alarm_count == 1
    assert terminal.frames[-1].log_lines[-1].endswith("[INFO] alarm triggered")
    handlers = logging.getLogger("fasam_dashboard").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)


def test_config_error_exits_two(terminal: _FakeTerminal, monkeypatch: Any, capsys: Any) -> None:
    monkeypatch.setenv("FASAM_TICK_RATE_MS", "0")
    assert cli.main() == 2
    assert terminal.entered == []
    assert "Configuration failure" in capsys.readouterr().err


def test_terminal_failure_exits_three(terminal: _FakeTerminal, capsys: Any) -> None:
    terminal.draw_error = FatalIOError("terminal disconnected")
    assert cli.main() == 3
    assert terminal.exited == ["renderer", "keyboard"]
    err = capsys.readouterr().err
    assert "Terminal failure" in err
    assert "terminal disconnected" in err


def test_logger_output_lands_in_log_panel_while_live(
    terminal: _FakeTerminal, monkeypatch: Any
) -> None:
    monkeypatch.setenv("FASAM_LOG_LEVEL", "DEBUG")
    terminal.keys = ["q"]
    assert cli.main() == 0
    lines = terminal.frames[-1].log_lines
    assert any("[DEBUG] Effective configuration" in line for line in lines)


def test_one_clock_drives_window_logs_and_trigger_time(
    terminal: _FakeTerminal, monkeypatch: Any
) -> None:
    now = datetime(2026, 2, 24, 5, 0, 1, tzinfo=UTC)
    monkeypatch.setattr(cli, "utc_now", lambda: now)
    assert cli.main() == 0
    frame = terminal.frames[-1]
    assert frame.alarm_series[-1][0] == "5"
    assert frame.last_trigger_time == now
    assert all(line.startswith("Tue Feb 24 05:00:01 2026") for line in frame.log_lines)


def test_help_flag_exits_cleanly(monkeypatch: Any, capsys: Any) -> None:
    monkeypatch.setattr(sys, "argv", ["fasam-dashboard", "--help"])
    with pytest.raises(SystemExit) as exc_info:
        cli.main()
    assert exc_info.value.code == 0
    assert "Alarm Monitoring" in capsys.readouterr().out
