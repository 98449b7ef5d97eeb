"""Editor events and their key bindings."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .keyboard import KeyEvent, KeyType


class EventType(Enum):
    """Everything the editor reacts to."""
    CHAR = "char"
    NAV_LEFT = "nav_left"
    NAV_RIGHT = "nav_right"
    NAV_UP = "nav_up"
    NAV_DOWN = "nav_down"
    DELETE_ELEMENT = "delete_element"
    WRAP = "wrap"
    UNWRAP = "unwrap"
    QUOTE = "quote"
    INSERT_SIBLING = "insert_sibling"
    BACKSPACE = "backspace"
    RESIZE = "resize"
    TERMINATE = "terminate"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Event:
    type: EventType
    char: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def resize(cls, width: int, height: int) -> 'Event':
        return cls(EventType.RESIZE, width=width, height=height)


SPECIAL_BINDINGS = {
    'left': EventType.NAV_LEFT,
    'right': EventType.NAV_RIGHT,
    'up': EventType.NAV_UP,
    'down': EventType.NAV_DOWN,
    'delete': EventType.DELETE_ELEMENT,
    'page_up': EventType.WRAP,
    'page_down': EventType.UNWRAP,
    'backspace': EventType.BACKSPACE,
    'escape': EventType.TERMINATE,
}

CHAR_BINDINGS = {
    '(': EventType.WRAP,
    ')': EventType.NAV_LEFT,
    "'": EventType.QUOTE,
    ' ': EventType.INSERT_SIBLING,
}

CTRL_BINDINGS = {
    'q': EventType.TERMINATE,
}


def adapt_key_event(key_event: KeyEvent) -> Event:
    """Map a parsed key to the editor event it is bound to."""
    if key_event.key_type == KeyType.SPECIAL:
        return Event(SPECIAL_BINDINGS.get(key_event.value, EventType.UNKNOWN))
    if key_event.key_type == KeyType.CTRL:
        return Event(CTRL_BINDINGS.get(key_event.value, EventType.UNKNOWN))
    if key_event.key_type == KeyType.REGULAR:
        ch = key_event.value
        if ch in CHAR_BINDINGS:
            return Event(CHAR_BINDINGS[ch])
        if len(ch) == 1 and ch.isprintable():
            return Event(EventType.CHAR, char=ch)
    return Event(EventType.UNKNOWN)
