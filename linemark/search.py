"""Incremental search over the rendered rows of a document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .highlight import Highlight
from .render_map import rendered_to_raw

if TYPE_CHECKING:
    from .model import Document
    from .view import Viewport

logger = logging.getLogger(__name__)


class SearchDirection(Enum):
    FORWARD = 1
    BACKWARD = -1


class SearchSignal(Enum):
    """Navigation input accompanying one search step."""
    ACCEPT = "accept"
    CANCEL = "cancel"
    NEXT = "next"
    PREVIOUS = "previous"
    EDIT = "edit"  # Query changed or first step of a session


@dataclass
class SearchHit:
    row: int
    raw_col: int
    rendered_col: int


@dataclass
class SearchState:
    last_match_row: Optional[int] = None
    direction: SearchDirection = SearchDirection.FORWARD
    saved_row: Optional[int] = None
    saved_highlight: Optional[list[Highlight]] = None


class SearchEngine:
    """Steps through matches of a query, one row at a time.

    The row holding the current match shows MATCH over the matched span.
    Its previous highlight is kept and put back before the next step and
    when the session ends. Raw row text is never modified.
    """

    def __init__(self, document: Document, viewport: Viewport):
        self.document = document
        self.viewport = viewport
        self.state = SearchState()

    def _restore_highlight(self) -> None:
        """Undo the match overlay, if one is shown."""
        state = self.state
        if state.saved_row is not None and state.saved_highlight is not None:
            if state.saved_row < self.document.row_count:
                row = self.document[state.saved_row]
                if len(row.highlight) == len(state.saved_highlight):
                    row.highlight = state.saved_highlight
        state.saved_row = None
        state.saved_highlight = None

    def reset(self) -> None:
        """End the session: remove any overlay and forget the last match."""
        self._restore_highlight()
        self.state.last_match_row = None
        self.state.direction = SearchDirection.FORWARD

    def step(self, query: str, signal: SearchSignal) -> Optional[SearchHit]:
        """Advance the search by one step.

        Args:
            query: Current query text (matched case-sensitively).
            signal: What the user did since the previous step.

        Returns:
            The new match, or None when the session ended or nothing matched.
        """
        self._restore_highlight()

        if signal in (SearchSignal.ACCEPT, SearchSignal.CANCEL):
            self.reset()
            return None

        state = self.state
        if signal == SearchSignal.NEXT:
            state.direction = SearchDirection.FORWARD
        elif signal == SearchSignal.PREVIOUS:
            state.direction = SearchDirection.BACKWARD
        else:
            state.last_match_row = None
            state.direction = SearchDirection.FORWARD

        if state.last_match_row is None:
            state.direction = SearchDirection.FORWARD

        hit = self._scan(query)
        if hit is None:
            return None

        row = self.document[hit.row]
        state.last_match_row = hit.row
        self.viewport.cursor_row = hit.row
        self.viewport.cursor_col = hit.raw_col
        self.viewport.reveal_row(hit.row)

        state.saved_row = hit.row
        state.saved_highlight = list(row.highlight)
        end = min(hit.rendered_col + len(query), len(row.highlight))
        row.highlight[hit.rendered_col:end] = [Highlight.MATCH] * (end - hit.rendered_col)
        return hit

    def _scan(self, query: str) -> Optional[SearchHit]:
        """Find the next row containing query, wrapping around once."""
        count = self.document.row_count
        if not query or count == 0:
            return None
        step = self.state.direction.value
        current = self.state.last_match_row if self.state.last_match_row is not None else -1
        for _ in range(count):
            current += step
            if current < 0:
                current = count - 1
            elif current >= count:
                current = 0
            row = self.document[current]
            offset = row.render.find(query)
            if offset != -1:
                raw_col = rendered_to_raw(row.raw, offset, self.document.tab_width)
                logger.debug(f"Search match for {query!r} at row {current}, column {raw_col}")
                return SearchHit(row=current, raw_col=raw_col, rendered_col=offset)
        return None
