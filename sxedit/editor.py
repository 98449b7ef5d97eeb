"""Main editor controller for the structural expression editor."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .commands import CommandRegistry
from .config import LayoutSettings, SettingsPersistence, get_persistence
from .constants import EditorConstants
from .events import Event, EventType, adapt_key_event
from .expr import Expr, Label, build
from .keyboard import KeyboardHandler
from .styles import Style
from .terminal import TerminalInterface
from .textbuffer import Framed, TextBuffer
from .view import SexprView

logger = logging.getLogger(__name__)


def initial_expr() -> Expr:
    """The tree shown when the editor starts."""
    return build([Label("let"), [["a", 1], ["b", 2], ["c", 3]], ["+", "a", "b"]])


class Editor:
    """Main application controller."""

    def __init__(self, expr: Optional[Expr] = None, settings: Optional[LayoutSettings] = None,
                 persistence: Optional[SettingsPersistence] = None):
        """Initialize the editor components."""
        self.terminal = TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.persistence = persistence or get_persistence()
        self.settings = settings or self.persistence.load_layout_settings()
        self.view = SexprView(
            expr if expr is not None else initial_expr(),
            width=self.settings.view_width,
            height=self.settings.view_height,
            default_indent=self.settings.default_indent,
        )
        self.frame = Framed(self.view)
        self.buffer = TextBuffer(0, 0, style=Style.BACKGROUND)
        self.command_registry = CommandRegistry()
        self.running = False
        self.error_mode = False  # True when the terminal cannot fit the view
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _fitted_view_size(self) -> tuple[int, int]:
        """View size that fits the current terminal, capped by the settings."""
        width = min(self.settings.view_width, self.terminal.width - EditorConstants.VIEW_X - 2)
        height = min(self.settings.view_height, self.terminal.height - EditorConstants.VIEW_Y - 2)
        return (max(width, 1), max(height, 1))

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                # Disable flow control so Ctrl-Q reaches the editor
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, AttributeError, OSError):
                    old_settings = None

                # Fit the view to the terminal before the first frame
                self.handle_event(Event.resize(*self._fitted_view_size()))
                need_draw = True

                while self.running:
                    if need_draw:
                        self._draw()
                        need_draw = False

                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        if self.running:
                            self.handle_event(Event.resize(*self._fitted_view_size()))
                            need_draw = True
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self.handle_event(adapt_key_event(key_event))
                            need_draw = True

                if old_settings:
                    try:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                    except (termios.error, OSError):
                        pass

            # Clean exit: leave a settings file behind for the user to edit
            self.persistence.write_defaults(self.settings)

        except KeyboardInterrupt:
            # Ctrl-C ends the session
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def handle_event(self, event: Event) -> bool:
        """Apply one event to the editor state.

        Returns:
            True if the tree was modified
        """
        if self.error_mode and event.type not in (EventType.RESIZE, EventType.TERMINATE):
            return False
        return self.command_registry.execute(self, event)

    def status_line(self) -> str:
        path = ' '.join(str(i) for i in self.view.cursor) or 'root'
        return f" Path: {path}    Esc/Ctrl-Q to quit"

    def _draw(self):
        """Draw the current editor state to terminal."""
        frame_width, frame_height = self.frame.size()
        needed_width = EditorConstants.VIEW_X + frame_width
        needed_height = EditorConstants.VIEW_Y + frame_height
        if self.terminal.width < needed_width or self.terminal.height < needed_height:
            self.error_mode = True
            self.terminal.draw_error_message(
                EditorConstants.TERMINAL_TOO_SMALL_MESSAGE.format(needed_width, needed_height + 1),
                f"Current size: {self.terminal.width}x{self.terminal.height + 1}.",
            )
            return
        self.error_mode = False
        self.paint(self.buffer)
        self.terminal.render(self.buffer, self.status_line())

    def paint(self, buffer: TextBuffer) -> None:
        """Paint a full frame into ``buffer`` sized to the terminal."""
        buffer.resize(self.terminal.width, self.terminal.height)
        buffer.clear(' ', Style.BACKGROUND)
        self.frame.draw(buffer, EditorConstants.VIEW_X, EditorConstants.VIEW_Y)
