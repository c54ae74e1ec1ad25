"""Test drawing through the blessed terminal wrapper."""

from unittest.mock import MagicMock, patch
from linemark.highlight import Highlight
from linemark.terminal import TerminalInterface


def create_terminal(width=20, height=6):
    term = MagicMock()
    term.width = width
    term.height = height
    for name in ('normal', 'cyan', 'yellow', 'green', 'magenta', 'red', 'blue'):
        setattr(term, name, f"[{name}]")
    term.reverse = "[rev]"
    term.clear_eol = "[eol]"
    term.hide_cursor = ""
    term.normal_cursor = ""
    term.home = ""
    term.move.side_effect = lambda y, x: f"<{y},{x}>"
    return TerminalInterface(term)


def test_compose_line_switches_colors_on_category_change():
    terminal = create_terminal()
    H = Highlight
    line = terminal.compose_line("int x // c", [H.KEYWORD_SECONDARY] * 3 + [H.NORMAL] * 3 + [H.LINE_COMMENT] * 4)
    assert line == "[green]int[normal] x [cyan]// c[normal]"


def test_compose_line_without_highlights_is_plain():
    terminal = create_terminal()
    assert terminal.compose_line("plain", [Highlight.NORMAL] * 5) == "plain"
    assert terminal.compose_line("plain", []) == "plain"


def test_text_area_excludes_status_rows():
    terminal = create_terminal(height=6)
    assert terminal.height == 4
    assert terminal.width == 20
    assert create_terminal(height=1).height == 1


def test_draw_frame_layout(capsys):
    terminal = create_terminal(width=20)
    terminal.draw_frame(["abc", "~"], 0, 2, "left", "c | 1/1", "msg")
    out = capsys.readouterr().out
    assert "<0,0>abc" in out
    assert "<2,0>[rev]left" + " " * 9 + "c | 1/1[normal]" in out
    assert "<3,0>msg[eol]" in out
    assert out.endswith("<0,2>")


def test_get_key_without_input_returns_none():
    terminal = create_terminal()
    assert terminal.get_key(timeout=0) is None
