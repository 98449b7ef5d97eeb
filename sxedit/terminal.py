"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select

from .styles import Style
from .textbuffer import TextBuffer

# blessed formatter names for each display style
STYLE_FORMATS = {
    Style.DEFAULT: 'white_on_bright_black',
    Style.BACKGROUND: 'bold_green_on_bright_black',
    Style.FRAME: 'black_on_bright_black',
    Style.HIGHLIGHT: 'black_on_green',
}


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen)
        print(self.term.hide_cursor)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception:
                # Justification: curtsies may fail to initialize without a
                # real tty (CI, pipes). Run without input rather than crash.
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Justification: teardown should never crash the app. Any
                # failure to exit raw mode is non-fatal at this point.
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def style_sequence(self, style) -> str:
        """Terminal escape sequence that switches to ``style``."""
        name = STYLE_FORMATS.get(style)
        if name is None:
            return str(self.term.normal)
        return str(self.term.normal) + str(getattr(self.term, name))

    def compose_row(self, cells) -> str:
        """Compose one row of (char, style) cells into a printable string."""
        out = []
        active = object()
        for ch, style in cells:
            if style != active:
                out.append(self.style_sequence(style))
                active = style
            out.append(ch)
        out.append(str(self.term.normal))
        return ''.join(out)

    def render(self, buffer: TextBuffer, status: str = ""):
        """Repaint the whole screen from ``buffer`` plus a status line."""
        print(self.term.home, end='')
        for y, cells in enumerate(buffer.rows()):
            print(self.term.move(y, 0) + self.compose_row(cells), end='')
        status_text = status[:self.term.width].ljust(self.term.width)
        print(self.term.move(self.term.height - 1, 0) + self.term.reverse + status_text + self.term.normal,
              end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen."""
        print(self.term.home + self.term.normal + self.term.clear, end='')
        center_y = self.term.height // 2
        box_width = max(len(message1), len(message2)) + 4
        left_margin = max(0, (self.term.width - box_width) // 2)

        print(self.term.move(center_y - 2, left_margin) + "╔" + "═" * (box_width - 2) + "╗", end='')
        print(self.term.move(center_y - 1, left_margin) + "║ " + message1.center(box_width - 4) + " ║", end='')
        if message2:
            print(self.term.move(center_y, left_margin) + "║ " + message2.center(box_width - 4) + " ║", end='')
            print(self.term.move(center_y + 1, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='')
        else:
            print(self.term.move(center_y, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='')
        print('', end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key token as a string, or None if no key arrived
            or input is unavailable.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1  # Reserve one line for status
