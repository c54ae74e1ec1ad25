"""Test tab insertion and rendering."""

from unittest.mock import MagicMock
from linemark.config import EditorSettings
from linemark.editor import Editor
from linemark.keyboard import KeyEvent, KeyType


def create_editor(lines=(), tab_width=8):
    terminal = MagicMock()
    terminal.height = 20
    terminal.width = 80
    editor = Editor(settings=EditorSettings(tab_width=tab_width), terminal=terminal)
    editor.document.load_lines(lines)
    return editor


def test_tab_inserts_tab_character():
    editor = create_editor(["x"])
    editor._handle_key_event(KeyEvent(KeyType.REGULAR, '\t', '\t'))
    row = editor.document[0]
    assert row.raw == "\tx"
    assert row.render == " " * 8 + "x"
    assert editor.viewport.cursor_col == 1


def test_cursor_drawn_at_rendered_column():
    editor = create_editor(["\tx"])
    editor.viewport.cursor_col = 1
    editor.viewport.scroll(editor.document)
    assert editor.viewport.screen_cursor() == (0, 8)


def test_tab_width_setting_applies():
    editor = create_editor(["\tx"], tab_width=4)
    assert editor.document[0].render == "    x"
