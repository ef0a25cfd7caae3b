"""UI components for the palette TUI."""

from .widgets import ContextPanel, PaletteEntryItem
from .styles import APP_CSS

__all__ = [
    "ContextPanel",
    "PaletteEntryItem",
    "APP_CSS",
]
