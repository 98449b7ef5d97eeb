"""Command pattern implementation for editor actions."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING
from .events import EventType

if TYPE_CHECKING:
    from .editor import Editor
    from .events import Event

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', event: 'Event') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            event: The event that triggered this command

        Returns:
            True if the command modified the tree
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', event: 'Event') -> bool:
        """Movement commands don't modify the tree."""
        self._move(editor, event)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', event: 'Event'):
        """Perform the movement."""
        pass


class MoveOutCommand(MovementCommand):
    def _move(self, editor, event):
        editor.view.move_out()


class MoveIntoCommand(MovementCommand):
    def _move(self, editor, event):
        editor.view.move_into()


class NextSiblingCommand(MovementCommand):
    def _move(self, editor, event):
        editor.view.move_sibling(1)


class PreviousSiblingCommand(MovementCommand):
    def _move(self, editor, event):
        editor.view.move_sibling(-1)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', event: 'Event') -> bool:
        """Editing commands modify the tree."""
        self._edit(editor, event)
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', event: 'Event'):
        """Perform the edit."""
        pass


class AppendCharCommand(EditCommand):
    def _edit(self, editor, event):
        if event.char:
            editor.view.append_char(event.char)


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, event):
        editor.view.delete_char()


class DeleteElementCommand(EditCommand):
    def _edit(self, editor, event):
        editor.view.delete_element()


class InsertSiblingCommand(EditCommand):
    def _edit(self, editor, event):
        editor.view.insert_after()


class WrapCommand(EditCommand):
    def _edit(self, editor, event):
        editor.view.wrap_in_list()


class UnwrapCommand(EditCommand):
    def _edit(self, editor, event):
        editor.view.unwrap_singleton()


class QuoteCommand(EditCommand):
    def _edit(self, editor, event):
        # Continue editing on the quoted content
        editor.view.quote()
        editor.view.move_into()


class SystemCommand(EditorCommand):
    """Base class for system commands like resize and quit."""

    def execute(self, editor: 'Editor', event: 'Event') -> bool:
        """System commands don't modify the tree."""
        self._execute_system(editor, event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', event: 'Event'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, event):
        editor.running = False


class ResizeCommand(SystemCommand):
    def _execute_system(self, editor, event):
        if event.width and event.height:
            editor.view.resize(event.width, event.height)


class CommandRegistry:
    """Registry for mapping events to commands."""

    def __init__(self):
        self._commands: Dict[EventType, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Navigation
        self.register(EventType.NAV_LEFT, MoveOutCommand())
        self.register(EventType.NAV_RIGHT, MoveIntoCommand())
        self.register(EventType.NAV_DOWN, NextSiblingCommand())
        self.register(EventType.NAV_UP, PreviousSiblingCommand())

        # Editing
        self.register(EventType.CHAR, AppendCharCommand())
        self.register(EventType.BACKSPACE, DeleteCharCommand())
        self.register(EventType.DELETE_ELEMENT, DeleteElementCommand())
        self.register(EventType.INSERT_SIBLING, InsertSiblingCommand())
        self.register(EventType.WRAP, WrapCommand())
        self.register(EventType.UNWRAP, UnwrapCommand())
        self.register(EventType.QUOTE, QuoteCommand())

        # System
        self.register(EventType.RESIZE, ResizeCommand())
        self.register(EventType.TERMINATE, QuitCommand())

    def register(self, event_type: EventType, command: EditorCommand):
        """Register a command for an event type."""
        self._commands[event_type] = command

    def get_command(self, event_type: EventType) -> Optional[EditorCommand]:
        """Get the command for an event type."""
        return self._commands.get(event_type)

    def execute(self, editor: 'Editor', event: 'Event') -> bool:
        """Execute the command for the given event.

        Returns:
            True if the tree was modified
        """
        command = self.get_command(event.type)
        if command is None:
            logger.debug("No command bound to %s", event.type)
            return False
        logger.debug("%s -> %s", event.type, type(command).__name__)
        return command.execute(editor, event)
