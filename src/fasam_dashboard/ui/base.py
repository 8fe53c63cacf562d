"""Contracts for the terminal collaborators driven by the dashboard loop."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import DashboardSnapshot, KeyEvent


class Renderer(ABC):
    """Draws one dashboard frame."""

    @abstractmethod
    def draw(self, snapshot: DashboardSnapshot) -> None:
        """Render `snapshot`, raising FatalIOError if the terminal is unusable."""


class InputSource(ABC):
    """Delivers key presses to the control loop."""

    @abstractmethod
    def poll_event(self, timeout: float) -> KeyEvent | None:
        """Wait at most `timeout` seconds and return an event, or None."""
