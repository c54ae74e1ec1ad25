"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional, Sequence
import sys
import select

from .highlight import Highlight, highlight_color

# Screen rows used by the status bar and the message bar
STATUS_ROWS = 2


class TerminalInterface:
    """Handles terminal I/O using Blessed."""
    
    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False
        
    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception:
                # Justification: curtsies may fail to initialize without a
                # real tty (CI, pipes). The editor then receives no input.
                self._curtsies_input = None
                self._curtsies_active = False
        
    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Justification: teardown should never crash the app. Any
                # failure to exit raw mode is non-fatal at this point.
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def compose_line(self, text: str, highlights: Optional[Sequence[Highlight]] = None) -> str:
        """Return text with a color change wherever the highlight category changes."""
        if not highlights:
            return text
        out = []
        current = 'normal'
        for i, ch in enumerate(text):
            hl = highlights[i] if i < len(highlights) else Highlight.NORMAL
            color = highlight_color(hl)
            if color != current:
                out.append(getattr(self.term, color))
                current = color
            out.append(ch)
        if current != 'normal':
            out.append(self.term.normal)
        return ''.join(out)

    def draw_frame(self, lines: list[str], cursor_y: int, cursor_x: int,
                   status_left: str, status_right: str, message: str = ""):
        """Draw one full frame: text rows, status bar, message bar, cursor.

        Args:
            lines: Already composed text rows, one per screen row
            cursor_y: Cursor row relative to the text area
            cursor_x: Cursor column relative to the text area
            status_left: Left part of the status bar
            status_right: Right-justified part of the status bar
            message: Message bar text
        """
        width = self.width
        out = [self.term.hide_cursor, self.term.home]
        for y, line in enumerate(lines):
            out.append(self.term.move(y, 0) + line + self.term.normal + self.term.clear_eol)

        # Status bar in reverse video
        left = status_left[:width]
        gap = width - len(left) - len(status_right)
        bar = left + ' ' * gap + status_right if gap >= 0 else left.ljust(width)
        out.append(self.term.move(len(lines), 0) + self.term.reverse + bar + self.term.normal)

        out.append(self.term.move(len(lines) + 1, 0) + message[:width] + self.term.clear_eol)
        out.append(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)
            
        Returns:
            The curtsies key name, or None if no key arrived.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))  # blocks
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))
    
    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width
        
    @property  
    def height(self):
        """Terminal height in rows available for text."""
        return max(1, self.term.height - STATUS_ROWS)
