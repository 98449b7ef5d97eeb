"""Output sinks for the layout engine."""

import io
from abc import ABC, abstractmethod
from typing import Any, Optional


class Sink(ABC):
    """Destination for text and style-stack instructions.

    Calls arrive strictly in the order the layout engine computes them.
    """

    @abstractmethod
    def write(self, text: str) -> None:
        """Append literal text at the current position."""

    @abstractmethod
    def set_style(self, style: Any) -> None:
        """Replace the active style."""

    @abstractmethod
    def save_style(self) -> None:
        """Push the active style."""

    @abstractmethod
    def restore_style(self) -> None:
        """Pop the most recently saved style and make it active."""

    def write_newline(self) -> None:
        self.write("\n")

    def write_indent(self, level: int) -> None:
        self.write_newline()
        self.write(" " * level)


class StyleStackSink(Sink):
    """Sink that keeps track of the active style and the saved-style stack.

    Subclasses implement ``write`` and may override ``apply_style`` to
    react when the active style changes.
    """

    def __init__(self, style: Optional[Any] = None):
        self.current_style = style
        self._saved_styles: list = []

    def apply_style(self, style: Any) -> None:
        """Hook called whenever the active style changes."""

    def set_style(self, style: Any) -> None:
        self.current_style = style
        self.apply_style(style)

    def save_style(self) -> None:
        self._saved_styles.append(self.current_style)

    def restore_style(self) -> None:
        if not self._saved_styles:
            raise IndexError("restore_style() without matching save_style()")
        self.set_style(self._saved_styles.pop())

    @property
    def depth(self) -> int:
        """Number of saved styles not yet restored."""
        return len(self._saved_styles)


class StringSink(StyleStackSink):
    """Collects plain text; styles are tracked but not rendered."""

    def __init__(self):
        super().__init__()
        self._buf = io.StringIO()

    def write(self, text: str) -> None:
        self._buf.write(text)

    def getvalue(self) -> str:
        return self._buf.getvalue()
