"""Cursor and scroll state for the visible window onto a document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .highlight import Highlight
from .render_map import raw_to_rendered

if TYPE_CHECKING:
    from .model import Document


@dataclass
class ViewportSnapshot:
    cursor_row: int
    cursor_col: int
    row_offset: int
    col_offset: int


# A visible screen row: rendered text in the horizontal window and its highlights.
VisibleLine = Optional[tuple[str, list[Highlight]]]


class Viewport:
    """Logical cursor plus the scroll offsets of the text area.

    cursor_row may equal the document's row count: that is the empty line
    past the end where typing appends a new row. rendered_col is derived
    from cursor_col by scroll() and must not be set directly.
    """
    cursor_row: int = 0
    cursor_col: int = 0
    rendered_col: int = 0
    row_offset: int = 0
    col_offset: int = 0
    screen_rows: int
    screen_cols: int

    def __init__(self, screen_rows: int = 24, screen_cols: int = 80):
        self.screen_rows = max(1, screen_rows)
        self.screen_cols = max(1, screen_cols)

    def resize(self, screen_rows: int, screen_cols: int) -> None:
        self.screen_rows = max(1, screen_rows)
        self.screen_cols = max(1, screen_cols)

    def _row_length(self, document: Document) -> int:
        if self.cursor_row < document.row_count:
            return len(document[self.cursor_row].raw)
        return 0

    def clamp(self, document: Document) -> None:
        """Pull the cursor back inside the document."""
        self.cursor_row = max(0, min(self.cursor_row, document.row_count))
        self.cursor_col = max(0, min(self.cursor_col, self._row_length(document)))

    def scroll(self, document: Document) -> None:
        """Recompute the rendered column and scroll so the cursor is visible."""
        self.rendered_col = 0
        if self.cursor_row < document.row_count:
            self.rendered_col = raw_to_rendered(document[self.cursor_row].raw, self.cursor_col,
                                                document.tab_width)

        if self.cursor_row < self.row_offset:
            self.row_offset = self.cursor_row
        if self.cursor_row >= self.row_offset + self.screen_rows:
            self.row_offset = self.cursor_row - self.screen_rows + 1
        if self.rendered_col < self.col_offset:
            self.col_offset = self.rendered_col
        if self.rendered_col >= self.col_offset + self.screen_cols:
            self.col_offset = self.rendered_col - self.screen_cols + 1

    def reveal_row(self, row: int) -> None:
        """Scroll so that `row` is the first visible row."""
        self.row_offset = max(0, row)
        self.col_offset = 0

    def move_cursor(self, document: Document, direction: str) -> None:
        """Move one step 'left', 'right', 'up' or 'down'.

        Horizontal moves wrap across row boundaries. The column is snapped
        to the length of the row the cursor ends up on.
        """
        if direction == 'left':
            if self.cursor_col > 0:
                self.cursor_col -= 1
            elif self.cursor_row > 0:
                self.cursor_row -= 1
                self.cursor_col = self._row_length(document)
        elif direction == 'right':
            if self.cursor_row < document.row_count:
                if self.cursor_col < self._row_length(document):
                    self.cursor_col += 1
                else:
                    self.cursor_row += 1
                    self.cursor_col = 0
        elif direction == 'up':
            if self.cursor_row > 0:
                self.cursor_row -= 1
        elif direction == 'down':
            if self.cursor_row < document.row_count:
                self.cursor_row += 1

        self.cursor_col = min(self.cursor_col, self._row_length(document))

    def home(self) -> None:
        self.cursor_col = 0

    def end(self, document: Document) -> None:
        if self.cursor_row < document.row_count:
            self.cursor_col = self._row_length(document)

    def page_up(self, document: Document) -> None:
        """Jump to the top of the screen, then up one screenful."""
        self.cursor_row = self.row_offset
        for _ in range(self.screen_rows):
            self.move_cursor(document, 'up')

    def page_down(self, document: Document) -> None:
        """Jump to the bottom of the screen, then down one screenful."""
        self.cursor_row = min(self.row_offset + self.screen_rows - 1, document.row_count)
        for _ in range(self.screen_rows):
            self.move_cursor(document, 'down')

    def snapshot(self) -> ViewportSnapshot:
        return ViewportSnapshot(self.cursor_row, self.cursor_col, self.row_offset, self.col_offset)

    def restore(self, snapshot: ViewportSnapshot) -> None:
        self.cursor_row = snapshot.cursor_row
        self.cursor_col = snapshot.cursor_col
        self.row_offset = snapshot.row_offset
        self.col_offset = snapshot.col_offset

    def visible_lines(self, document: Document) -> list[VisibleLine]:
        """Return one entry per screen row; None past the end of the document."""
        lines: list[VisibleLine] = []
        start = self.col_offset
        stop = self.col_offset + self.screen_cols
        for y in range(self.screen_rows):
            file_row = self.row_offset + y
            if file_row >= document.row_count:
                lines.append(None)
                continue
            row = document[file_row]
            lines.append((row.render[start:stop], row.highlight[start:stop]))
        return lines

    def screen_cursor(self) -> tuple[int, int]:
        """Cursor position relative to the top-left of the text area."""
        return (self.cursor_row - self.row_offset, self.rendered_col - self.col_offset)
