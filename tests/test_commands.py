"""Test the key-to-command registry."""

from unittest.mock import MagicMock
from linemark.commands import (
    ArrowCommand, BackspaceCommand, CommandRegistry, EditorCommand, FindCommand,
    InsertTextCommand, QuitCommand, SaveCommand,
)
from linemark.keyboard import KeyEvent, KeyType


def test_default_bindings():
    registry = CommandRegistry()
    assert isinstance(registry.get_command(KeyType.SPECIAL, 'left'), ArrowCommand)
    assert isinstance(registry.get_command(KeyType.CTRL, 'h'), BackspaceCommand)
    assert isinstance(registry.get_command(KeyType.CTRL, 'q'), QuitCommand)
    assert isinstance(registry.get_command(KeyType.CTRL, 's'), SaveCommand)
    assert isinstance(registry.get_command(KeyType.CTRL, 'f'), FindCommand)
    assert registry.get_command(KeyType.CTRL, 'c') is None


def test_regular_keys_insert_text():
    registry = CommandRegistry()
    editor = MagicMock()
    assert registry.execute(editor, KeyEvent(KeyType.REGULAR, 'z', 'z')) is True
    editor.insert_char.assert_called_once_with('z')


def test_unbound_key_does_nothing():
    registry = CommandRegistry()
    editor = MagicMock()
    assert registry.execute(editor, KeyEvent(KeyType.CTRL, 'x', '\x18')) is False
    assert editor.method_calls == []


def test_insert_text_filters_control_characters():
    editor = MagicMock()
    InsertTextCommand().execute(editor, KeyEvent(KeyType.REGULAR, '\x07', '\x07'))
    editor.insert_char.assert_not_called()


def test_arrow_command_passes_direction():
    editor = MagicMock()
    result = ArrowCommand().execute(editor, KeyEvent(KeyType.SPECIAL, 'up', '<UP>'))
    assert result is False
    editor.viewport.move_cursor.assert_called_once_with(editor.document, 'up')


def test_register_overrides_binding():
    class Beep(EditorCommand):
        def execute(self, editor, key_event):
            editor.beep()
            return False

    registry = CommandRegistry()
    registry.register((KeyType.CTRL, 'q'), Beep())
    editor = MagicMock()
    registry.execute(editor, KeyEvent(KeyType.CTRL, 'q', '\x11'))
    editor.beep.assert_called_once()
    editor.request_quit.assert_not_called()
