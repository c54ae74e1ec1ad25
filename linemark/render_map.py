"""Conversion between raw character offsets and rendered columns.

A row's rendered form is its raw text with every tab expanded to spaces up to
the next multiple of the tab width. All other characters are one column wide.
"""

from .constants import EditorConstants


def _advance(rendered_col: int, ch: str, tab_width: int) -> int:
    """Return the rendered column after drawing ch at rendered_col."""
    if ch == '\t':
        return rendered_col + tab_width - (rendered_col % tab_width)
    return rendered_col + 1


def expand_tabs(raw: str, tab_width: int = EditorConstants.TAB_WIDTH) -> str:
    """Render raw text, replacing each tab with one or more spaces.

    A tab always produces at least one space and advances to the next
    multiple of tab_width.
    """
    if '\t' not in raw:
        return raw
    out: list[str] = []
    col = 0
    for ch in raw:
        if ch == '\t':
            next_col = _advance(col, ch, tab_width)
            out.append(' ' * (next_col - col))
            col = next_col
        else:
            out.append(ch)
            col += 1
    return ''.join(out)


def raw_to_rendered(raw: str, raw_col: int, tab_width: int = EditorConstants.TAB_WIDTH) -> int:
    """Return the rendered column of raw offset raw_col.

    raw_col is clamped to [0, len(raw)].
    """
    raw_col = max(0, min(raw_col, len(raw)))
    rendered_col = 0
    for ch in raw[:raw_col]:
        rendered_col = _advance(rendered_col, ch, tab_width)
    return rendered_col


def rendered_to_raw(raw: str, rendered_col: int, tab_width: int = EditorConstants.TAB_WIDTH) -> int:
    """Return the raw offset of the character drawn at rendered_col.

    A rendered column inside a tab's expansion maps to the tab itself.
    Columns past the end of the row map to len(raw).
    """
    current = 0
    for raw_col, ch in enumerate(raw):
        current = _advance(current, ch, tab_width)
        if current > rendered_col:
            return raw_col
    return len(raw)
