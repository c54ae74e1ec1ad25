"""Highlight categories assigned to rendered characters."""

from enum import Enum


class Highlight(Enum):
    """Classification of one rendered character."""
    NORMAL = "normal"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    KEYWORD_PRIMARY = "keyword_primary"
    KEYWORD_SECONDARY = "keyword_secondary"
    STRING = "string"
    NUMBER = "number"
    MATCH = "match"  # Temporary search-match overlay


# Display color per category, as blessed color attribute names.
HIGHLIGHT_COLORS = {
    Highlight.LINE_COMMENT: "cyan",
    Highlight.BLOCK_COMMENT: "cyan",
    Highlight.KEYWORD_PRIMARY: "yellow",
    Highlight.KEYWORD_SECONDARY: "green",
    Highlight.STRING: "magenta",
    Highlight.NUMBER: "red",
    Highlight.MATCH: "blue",
}


def highlight_color(hl: Highlight) -> str:
    """Return the blessed color name for a category ('normal' for plain text)."""
    return HIGHLIGHT_COLORS.get(hl, "normal")
