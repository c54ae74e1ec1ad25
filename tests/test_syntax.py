"""Test syntax classification of rendered rows."""

from linemark.highlight import Highlight
from linemark.syntax import C_KEYWORDS, HLDB, classify, is_separator, select_language

H = Highlight
C = HLDB[0]


def categories(text, continuation_in=False, language=C):
    highlight, _ = classify(text, continuation_in, language)
    return highlight


def span(highlight, start, end):
    return set(highlight[start:end])


def test_plain_text_without_language_is_normal():
    highlight, open_ = classify("int x = 1; // hi", False, None)
    assert highlight == [H.NORMAL] * len("int x = 1; // hi")
    assert open_ is False


def test_highlight_has_one_entry_per_character():
    for text in ["", "x", "int main(void) { return 0; }", "/* open", '"str']:
        assert len(categories(text)) == len(text)


def test_primary_and_secondary_keywords():
    hl = categories("int main() { return 0; }")
    assert span(hl, 0, 3) == {H.KEYWORD_SECONDARY}
    assert span(hl, 4, 8) == {H.NORMAL}
    assert span(hl, 13, 19) == {H.KEYWORD_PRIMARY}


def test_keyword_prefix_of_identifier_is_not_keyword():
    hl = categories("intake = 1;")
    assert span(hl, 0, 6) == {H.NORMAL}


def test_keyword_needs_separator_before():
    hl = categories("xint y;")
    assert span(hl, 0, 4) == {H.NORMAL}


def test_keyword_at_end_of_row():
    hl = categories("x = else")
    assert span(hl, 4, 8) == {H.KEYWORD_PRIMARY}


def test_adjacent_keywords_after_separator():
    hl = categories("unsigned int x;")
    assert span(hl, 0, 8) == {H.KEYWORD_SECONDARY}
    assert hl[8] == H.NORMAL
    assert span(hl, 9, 12) == {H.KEYWORD_SECONDARY}


def test_numbers_after_separators():
    hl = categories("x = 42 + 3.14;")
    assert span(hl, 4, 6) == {H.NUMBER}
    assert span(hl, 9, 13) == {H.NUMBER}
    assert hl[13] == H.NORMAL


def test_digits_inside_identifier_are_not_numbers():
    hl = categories("abc123 = 0;")
    assert span(hl, 0, 6) == {H.NORMAL}
    assert hl[9] == H.NUMBER


def test_string_with_escape_and_matching_quote():
    text = 'x = "a\\"b" + \'c\';'
    hl = categories(text)
    assert span(hl, 4, 10) == {H.STRING}
    assert hl[10] == H.NORMAL
    assert span(hl, 13, 16) == {H.STRING}
    assert hl[16] == H.NORMAL


def test_single_quote_does_not_close_double_quoted_string():
    hl = categories('"it\'s" x')
    assert span(hl, 0, 6) == {H.STRING}
    assert hl[7] == H.NORMAL


def test_comment_markers_inside_string_are_string():
    hl = categories('s = "// not /* a comment";')
    assert span(hl, 4, 25) == {H.STRING}
    _, open_ = classify('s = "/* x";', False, C)
    assert open_ is False


def test_line_comment_runs_to_end_of_row():
    text = "x = 1; // int 42"
    hl = categories(text)
    assert span(hl, 7, len(text)) == {H.LINE_COMMENT}
    assert hl[4] == H.NUMBER


def test_block_comment_on_one_row():
    text = "a /* int */ int"
    highlight, open_ = classify(text, False, C)
    assert span(highlight, 2, 11) == {H.BLOCK_COMMENT}
    assert span(highlight, 12, 15) == {H.KEYWORD_SECONDARY}
    assert open_ is False


def test_unterminated_block_comment_stays_open():
    highlight, open_ = classify("x /* open", False, C)
    assert span(highlight, 2, 9) == {H.BLOCK_COMMENT}
    assert open_ is True


def test_continuation_in_starts_inside_comment():
    highlight, open_ = classify("still */ int", True, C)
    assert span(highlight, 0, 8) == {H.BLOCK_COMMENT}
    assert span(highlight, 9, 12) == {H.KEYWORD_SECONDARY}
    assert open_ is False


def test_row_entirely_inside_comment():
    highlight, open_ = classify("int x = 1;", True, C)
    assert set(highlight) == {H.BLOCK_COMMENT}
    assert open_ is True


def test_line_comment_marker_inside_block_comment_is_ignored():
    highlight, open_ = classify("/* // */ x", False, C)
    assert span(highlight, 0, 8) == {H.BLOCK_COMMENT}
    assert highlight[9] == H.NORMAL
    assert open_ is False


def test_separators():
    for ch in ",.()+-/*=~%<>[]; \t":
        assert is_separator(ch)
    assert is_separator("")
    for ch in "a_Z0{}":
        assert not is_separator(ch)


def test_select_language_by_extension():
    assert select_language("main.c") is C
    assert select_language("/tmp/dir/header.h") is C
    assert select_language("prog.cpp") is C
    assert select_language("notes.txt") is None
    assert select_language("Makefile") is None
    assert select_language(None) is None


def test_keyword_table_marks_secondary_tier():
    assert "int|" in C_KEYWORDS
    assert "if" in C_KEYWORDS
