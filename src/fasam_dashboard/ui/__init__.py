"""Terminal rendering and keyboard input for the dashboard."""

from .base import InputSource, Renderer
from .keyboard import KeyboardInput
from .rich_renderer import RichRenderer

__all__ = ["InputSource", "KeyboardInput", "Renderer", "RichRenderer"]
