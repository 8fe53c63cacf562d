"""Contract shared by every module the dashboard can display."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import ModuleInfo


class Module(ABC):
    """Base contract for displayable dashboard subsystems."""

    @property
    @abstractmethod
    def id(self) -> int:
        """Stable small identifier of the module type."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Header shown above the module."""

    @property
    @abstractmethod
    def description(self) -> str:
        """One-line summary of what the module shows."""

    @abstractmethod
    def renderable_series(self) -> list[tuple[str, int]]:
        """Return a copy of chart data, or an empty list when there is none."""

    def info(self) -> ModuleInfo:
        return ModuleInfo(id=self.id, name=self.name, description=self.description)
