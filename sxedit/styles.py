"""Style tags used by the editor's display."""

from enum import Enum


class Style(Enum):
    """Display styles; the terminal maps each one to colors."""
    DEFAULT = "default"
    BACKGROUND = "background"
    FRAME = "frame"
    HIGHLIGHT = "highlight"
