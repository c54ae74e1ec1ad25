"""The document: an ordered store of rows with derived render and highlight data."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from .constants import EditorConstants
from .highlight import Highlight
from .render_map import expand_tabs
from .syntax import LanguageDefinition, classify

logger = logging.getLogger(__name__)


@dataclass
class Row:
    """One line of the document.

    raw is authoritative. render, highlight and continuation_open are derived
    by the owning Document and are never edited directly.
    """
    index: int
    raw: str = ""
    render: str = ""
    highlight: list[Highlight] = field(default_factory=list)
    continuation_open: bool = False  # Row ends inside a block comment
    continuation_in: bool = False  # Predecessor state used for the last classification

    def __len__(self) -> int:
        return len(self.raw)


class Document:
    """Owns the rows of one open file.

    Every mutating method re-derives the rows it touched and propagates
    block-comment state forward before returning, so a Row's render and
    highlight always match its raw text. Out-of-range positions are
    clamped or ignored; no method raises for them.
    """
    rows: list[Row]
    modified: bool
    language: Optional[LanguageDefinition]
    tab_width: int

    def __init__(self, lines: Optional[Iterable[str]] = None,
                 language: Optional[LanguageDefinition] = None,
                 tab_width: int = EditorConstants.TAB_WIDTH):
        self.rows = []
        self.language = language
        self.tab_width = tab_width
        self.modified = False
        if lines is not None:
            self.load_lines(lines)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def lines(self) -> list[str]:
        """Return the raw text of every row."""
        return [row.raw for row in self.rows]

    # --- Derivation ---

    def _update_row(self, at: int) -> None:
        """Re-render row `at` and reclassify it and any affected successors."""
        row = self.rows[at]
        row.render = expand_tabs(row.raw, self.tab_width)
        self._rehighlight(at)

    def _rehighlight(self, start: int) -> int:
        """Classify rows from `start` until continuation state stops changing.

        A successor is queued only when its recorded input state differs
        from the new output of the row before it.

        Returns:
            Number of rows classified.
        """
        if not 0 <= start < len(self.rows):
            return 0
        pending = deque([start])
        classified = 0
        while pending:
            at = pending.popleft()
            row = self.rows[at]
            carried = self.rows[at - 1].continuation_open if at > 0 else False
            row.highlight, row.continuation_open = classify(row.render, carried, self.language)
            row.continuation_in = carried
            classified += 1
            following = at + 1
            if following < len(self.rows) and self.rows[following].continuation_in != row.continuation_open:
                pending.append(following)
        if classified > 1:
            logger.debug(f"Highlight change at row {start} propagated through {classified} rows")
        return classified

    def _reindex(self, start: int) -> None:
        for i in range(start, len(self.rows)):
            self.rows[i].index = i

    def set_language(self, language: Optional[LanguageDefinition]) -> None:
        """Switch the active language and reclassify the whole document."""
        self.language = language
        for row in self.rows:
            carried = self.rows[row.index - 1].continuation_open if row.index > 0 else False
            row.highlight, row.continuation_open = classify(row.render, carried, language)
            row.continuation_in = carried

    # --- Row operations ---

    def load_lines(self, lines: Iterable[str]) -> None:
        """Replace the document with the given lines and mark it unmodified."""
        self.rows = []
        for text in lines:
            self.insert_row(len(self.rows), text)
        self.modified = False

    def insert_row(self, at: int, text: str = "") -> None:
        """Insert a row at `at`, clamped to [0, row_count]."""
        at = max(0, min(at, len(self.rows)))
        # Start from the state the old occupant of `at` saw, so a successor is
        # only revisited when the new row actually changes its input.
        carried = self.rows[at - 1].continuation_open if at > 0 else False
        row = Row(index=at, raw=text, continuation_open=carried, continuation_in=carried)
        self.rows.insert(at, row)
        self._reindex(at + 1)
        self.modified = True
        self._update_row(at)

    def append_row(self, text: str = "") -> None:
        self.insert_row(len(self.rows), text)

    def delete_row(self, at: int) -> None:
        """Remove row `at`; silently ignore out-of-range indices."""
        if not 0 <= at < len(self.rows):
            return
        del self.rows[at]
        self._reindex(at)
        self.modified = True
        if at < len(self.rows):
            carried = self.rows[at - 1].continuation_open if at > 0 else False
            if self.rows[at].continuation_in != carried:
                self._rehighlight(at)

    def insert_char(self, row: int, col: int, ch: str) -> None:
        """Insert ch into row's raw text at col (clamped to the row)."""
        if not 0 <= row < len(self.rows):
            return
        target = self.rows[row]
        col = max(0, min(col, len(target.raw)))
        target.raw = target.raw[:col] + ch + target.raw[col:]
        self.modified = True
        self._update_row(row)

    def delete_char(self, row: int, col: int) -> None:
        """Delete the character at col; no-op if col is outside the row."""
        if not 0 <= row < len(self.rows):
            return
        target = self.rows[row]
        if not 0 <= col < len(target.raw):
            return
        target.raw = target.raw[:col] + target.raw[col + 1:]
        self.modified = True
        self._update_row(row)

    def split_row(self, row: int, col: int) -> None:
        """Break row at col: keep [0, col) and insert [col, end) after it."""
        if not 0 <= row < len(self.rows):
            return
        target = self.rows[row]
        col = max(0, min(col, len(target.raw)))
        tail = target.raw[col:]
        target.raw = target.raw[:col]
        self._update_row(row)
        self.insert_row(row + 1, tail)

    def join_with_previous(self, row: int) -> None:
        """Append row's raw text to the previous row and delete row."""
        if not 0 < row < len(self.rows):
            return
        previous = self.rows[row - 1]
        previous.raw += self.rows[row].raw
        self.delete_row(row)
        self._update_row(row - 1)

    # --- Serialization ---

    def to_text(self) -> str:
        """Serialize the document: every row followed by a newline."""
        return "".join(f"{row.raw}\n" for row in self.rows)
