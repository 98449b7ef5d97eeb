"""Test the mapping from parsed keys to editor events."""

import pytest
from sxedit.events import Event, EventType, adapt_key_event
from sxedit.keyboard import KeyboardHandler, KeyEvent, KeyType


def adapt(token):
    return adapt_key_event(KeyboardHandler(None).parse_key(token))


@pytest.mark.parametrize("token,event_type", [
    ('<LEFT>', EventType.NAV_LEFT),
    ('<RIGHT>', EventType.NAV_RIGHT),
    ('<UP>', EventType.NAV_UP),
    ('<DOWN>', EventType.NAV_DOWN),
    ('<DELETE>', EventType.DELETE_ELEMENT),
    ('<PAGEUP>', EventType.WRAP),
    ('<PAGEDOWN>', EventType.UNWRAP),
    ('<BACKSPACE>', EventType.BACKSPACE),
    ('\x7f', EventType.BACKSPACE),
    ('<ESC>', EventType.TERMINATE),
    ('<Ctrl-q>', EventType.TERMINATE),
    ('(', EventType.WRAP),
    (')', EventType.NAV_LEFT),
    ("'", EventType.QUOTE),
    (' ', EventType.INSERT_SIBLING),
    ('<SPACE>', EventType.INSERT_SIBLING),
])
def test_bindings(token, event_type):
    """Each bound key produces its editor event."""
    assert adapt(token).type == event_type


def test_printable_characters_are_text():
    """Unbound printable characters become text events."""
    event = adapt('x')
    assert event == Event(EventType.CHAR, char='x')
    assert adapt('+').char == '+'


@pytest.mark.parametrize("token", ['<Ctrl-x>', '<Esc+b>', '<Shift-UP>', '<F12>', '\t', '<>'])
def test_unbound_keys_are_unknown(token):
    """Modified and unbound keys map to the unknown event."""
    assert adapt(token).type == EventType.UNKNOWN


def test_resize_event():
    """Resize events carry only the new size."""
    event = Event.resize(80, 24)
    assert event.type == EventType.RESIZE
    assert (event.width, event.height) == (80, 24)
    assert event.char is None


def test_special_key_without_binding():
    """Named keys without a binding are unknown."""
    key = KeyEvent(key_type=KeyType.SPECIAL, value='home', raw='<HOME>')
    assert adapt_key_event(key).type == EventType.UNKNOWN
