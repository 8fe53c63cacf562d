"""Single-key terminal input with a bounded wait."""

from __future__ import annotations

import os
import select
import sys
from types import TracebackType
from typing import Any

from ..exceptions import FatalIOError
from ..models import KeyEvent
from .base import InputSource


class KeyboardInput(InputSource):
    """Read one key at a time from a file descriptor.

    When the descriptor is a TTY it is switched to cbreak mode (no line
    buffering, no echo) while the context is active and restored on exit.
    """

    def __init__(self, fd: int | None = None) -> None:
        if fd is None:
            try:
                fd = sys.stdin.fileno()
            except (OSError, ValueError) as exc:
                raise FatalIOError(f"Standard input is not readable: {exc}") from exc
        self.fd = fd
        self._old_settings: Any = None

    def __enter__(self) -> KeyboardInput:
        if os.isatty(self.fd):
            import termios
            import tty

            try:
                self._old_settings = termios.tcgetattr(self.fd)
                tty.setcbreak(self.fd)
            except termios.error as exc:
                raise FatalIOError(f"Failed switching terminal to cbreak mode: {exc}") from exc
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._old_settings is None:
            return
        import termios

        old_settings, self._old_settings = self._old_settings, None
        termios.tcsetattr(self.fd, termios.TCSADRAIN, old_settings)

    def poll_event(self, timeout: float) -> KeyEvent | None:
        try:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout))
        except (OSError, ValueError) as exc:
            raise FatalIOError(f"Failed waiting for keyboard input: {exc}") from exc
        if not ready:
            return None
        try:
            data = os.read(self.fd, 1)
        except OSError as exc:
            raise FatalIOError(f"Failed reading keyboard input: {exc}") from exc
        if not data:
            raise FatalIOError("Keyboard input stream closed.")
        key = data.decode("utf-8", errors="ignore")
        if not key:
            return None
        return KeyEvent(key=key)
