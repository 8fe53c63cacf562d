"""Displayable dashboard modules."""

from .alarm_stats import WINDOW_SIZE, AlarmStats
from .base import Module
from .log_store import LogStore

__all__ = ["WINDOW_SIZE", "AlarmStats", "LogStore", "Module"]
