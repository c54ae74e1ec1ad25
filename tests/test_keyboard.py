"""Test keyboard input handling."""

import pytest
from linemark.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""
    
    def __init__(self):
        self._key_queue = []
        
    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None
    
    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


def test_regular_character(handler):
    event = handler.parse_key('a')
    assert event == KeyEvent(key_type=KeyType.REGULAR, value='a', raw='a')


@pytest.mark.parametrize("token,value", [
    ('<LEFT>', 'left'),
    ('<RIGHT>', 'right'),
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<HOME>', 'home'),
    ('<END>', 'end'),
    ('<PAGEUP>', 'page_up'),
    ('<PAGEDOWN>', 'page_down'),
    ('<ESC>', 'escape'),
    ('<DELETE>', 'delete'),
    ('<BACKSPACE>', 'backspace'),
    ('<Ctrl-j>', 'enter'),
])
def test_named_keys_are_special(handler, token, value):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value


def test_ctrl_tokens(handler):
    event = handler.parse_key('<Ctrl-s>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 's'
    assert handler.parse_key('<Ctrl-Q>').value == 'q'


def test_raw_control_bytes(handler):
    assert handler.parse_key('\x11') == KeyEvent(KeyType.CTRL, 'q', '\x11')
    assert handler.parse_key('\x06').value == 'f'
    assert handler.parse_key('\r').value == 'enter'
    assert handler.parse_key('\x1b').value == 'escape'
    assert handler.parse_key('\x7f').value == 'backspace'
    assert handler.parse_key('\x03') == KeyEvent(KeyType.CTRL, 'c', '\x03')


def test_tab_and_space_are_regular(handler):
    assert handler.parse_key('\t') == KeyEvent(KeyType.REGULAR, '\t', '\t')
    assert handler.parse_key('<TAB>') == KeyEvent(KeyType.REGULAR, '\t', '\t')
    assert handler.parse_key('<SPACE>') == KeyEvent(KeyType.REGULAR, ' ', ' ')


def test_get_key_event_reads_from_terminal():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    assert handler.get_key_event(timeout=0) is None
    terminal.add_key('x')
    assert handler.get_key_event(timeout=0).value == 'x'
