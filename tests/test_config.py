"""Tests for environment-driven settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest

from fasam_dashboard.config import Settings, load_settings
from fasam_dashboard.exceptions import ConfigError

_VARS = (
    "FASAM_TITLE",
    "FASAM_TICK_RATE_MS",
    "FASAM_FALLBACK_WAIT_MS",
    "FASAM_SEED_MAX_ALARMS",
    "FASAM_LOG_MAX_ENTRIES",
    "FASAM_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.title == "FASAM"
    assert settings.tick_rate_seconds == 0.5
    assert settings.fallback_wait_seconds == 0.25
    assert settings.seed_max_alarms == 5
    assert settings.log_max_entries is None
    assert settings.log_level_no == logging.INFO


def test_env_overrides(monkeypatch: Any) -> None:
    monkeypatch.setenv("FASAM_TICK_RATE_MS", "1000")
    monkeypatch.setenv("FASAM_LOG_MAX_ENTRIES", "200")
    monkeypatch.setenv("FASAM_LOG_LEVEL", " debug ")
    settings = load_settings()
    assert settings.tick_rate_seconds == 1.0
    assert settings.log_max_entries == 200
    assert settings.log_level == "DEBUG"
    assert settings.safe_summary()["log_max_entries"] == 200


def test_dotenv_file_is_read(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("FASAM_TITLE=Site 7\n", encoding="utf-8")
    assert Settings().title == "Site 7"


def test_empty_retention_means_unbounded(monkeypatch: Any) -> None:
    monkeypatch.setenv("FASAM_LOG_MAX_ENTRIES", "")
    assert load_settings().log_max_entries is None


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("FASAM_TICK_RATE_MS", "0"),
        ("FASAM_FALLBACK_WAIT_MS", "-5"),
        ("FASAM_SEED_MAX_ALARMS", "-1"),
        ("FASAM_LOG_MAX_ENTRIES", "0"),
        ("FASAM_LOG_LEVEL", "chatty"),
        ("FASAM_TICK_RATE_MS", "fast"),
    ],
)
def test_invalid_values_raise_config_error(monkeypatch: Any, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        load_settings()
