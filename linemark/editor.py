"""Main editor controller for the line editor."""

import os
import sys
import time
import select
import signal
import termios
import tempfile
import errno
import logging
from typing import Optional

from . import __version__
from .terminal import TerminalInterface
from .model import Document
from .view import Viewport
from .search import SearchEngine, SearchSignal
from .syntax import select_language
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .constants import EditorConstants
from .commands import CommandRegistry
from .config import EditorSettings, SettingsStore

logger = logging.getLogger(__name__)


class LoadError(OSError):
    """A file exists but could not be read."""


class Editor:
    """Line editor application controller."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.settings = settings or SettingsStore().load()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.document = Document(tab_width=self.settings.tab_width)
        self.viewport = Viewport(self.terminal.height, self.terminal.width)
        self.search = SearchEngine(self.document, self.viewport)
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.running = False
        self.filename: Optional[str] = None
        self.status_message = ""
        self.status_message_time = 0.0
        self.prompt_mode: Optional[str] = None  # None, 'save_as' or 'search'
        self.prompt_input = ""
        self.quit_times = self.settings.quit_times
        self._search_origin = None
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    @property
    def modified(self) -> bool:
        return self.document.modified

    def set_status_message(self, message: str):
        self.status_message = message
        self.status_message_time = time.time()

    def current_message(self) -> str:
        """Text for the message bar: the active prompt or a fresh status message."""
        if self.prompt_mode == 'search':
            return EditorConstants.SEARCH_PROMPT.format(self.prompt_input)
        if self.prompt_mode == 'save_as':
            return EditorConstants.SAVE_AS_PROMPT.format(self.prompt_input)
        if self.status_message and time.time() - self.status_message_time < self.settings.status_message_timeout:
            return self.status_message
        return ""

    # --- Editing at the cursor ---

    def insert_char(self, ch: str):
        """Insert ch at the cursor, creating the row if the cursor is past the end."""
        vp = self.viewport
        if vp.cursor_row >= self.document.row_count:
            self.document.append_row("")
            vp.cursor_row = self.document.row_count - 1
        self.document.insert_char(vp.cursor_row, vp.cursor_col, ch)
        vp.cursor_col += 1

    def insert_newline(self):
        """Break the line at the cursor and move to the start of the new line."""
        vp = self.viewport
        if vp.cursor_row >= self.document.row_count:
            self.document.append_row("")
        elif vp.cursor_col == 0:
            self.document.insert_row(vp.cursor_row, "")
        else:
            self.document.split_row(vp.cursor_row, vp.cursor_col)
        vp.cursor_row += 1
        vp.cursor_col = 0

    def delete_backward(self):
        """Delete the character before the cursor, joining lines at column 0."""
        vp = self.viewport
        if vp.cursor_row >= self.document.row_count:
            return
        if vp.cursor_col == 0 and vp.cursor_row == 0:
            return
        if vp.cursor_col > 0:
            self.document.delete_char(vp.cursor_row, vp.cursor_col - 1)
            vp.cursor_col -= 1
        else:
            vp.cursor_col = len(self.document[vp.cursor_row - 1].raw)
            self.document.join_with_previous(vp.cursor_row)
            vp.cursor_row -= 1

    def delete_forward(self):
        """Delete the character under the cursor, joining the next line at the end."""
        vp = self.viewport
        if vp.cursor_row >= self.document.row_count:
            return
        if vp.cursor_col < len(self.document[vp.cursor_row].raw):
            self.document.delete_char(vp.cursor_row, vp.cursor_col)
        elif vp.cursor_row + 1 < self.document.row_count:
            self.document.join_with_previous(vp.cursor_row + 1)

    # --- Files ---

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file opens an empty document that will be saved under
        that name.

        Args:
            filename: Path to file to load

        Raises:
            LoadError: The file exists but cannot be read.
        """
        self.filename = filename
        self.document.set_language(select_language(filename))
        try:
            with open(filename, 'rb') as f:
                content = f.read().decode('utf-8', errors='replace')
        except FileNotFoundError:
            logger.info(f"{filename} does not exist, starting a new file")
            self.document.load_lines([])
            return
        except OSError as e:
            raise LoadError(e.errno, f"Cannot open {filename}: {e.strerror}") from e

        # An empty file has no rows; a final newline does not start another one
        lines = content.split('\n') if content else []
        if content.endswith('\n'):
            lines.pop()
        self.document.load_lines(line[:-1] if line.endswith('\r') else line for line in lines)
        self.viewport.clamp(self.document)
        logger.info(f"Loaded {self.document.row_count} lines from {filename}")

    def save_file(self, filename: str) -> bool:
        """Save the current document to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        data = self.document.to_text().encode('utf-8')
        temp_filename = None
        try:
            # Temp file in the same directory keeps the rename on one filesystem
            dir_name = os.path.dirname(filename) or '.'
            suffix = os.path.splitext(filename)[1]
            with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(data)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, filename)
        except PermissionError:
            self.set_status_message(f"Can't save! Permission denied: {filename}")
            self._remove_temp_file(temp_filename)
            return False
        except OSError as e:
            if e.errno == errno.ENOSPC:
                self.set_status_message("Can't save! No space left on device")
            else:
                self.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
            self._remove_temp_file(temp_filename)
            logger.warning(f"Saving {filename} failed: {e}")
            return False

        self.filename = filename
        self.document.modified = False
        self.set_status_message(f"{len(data)} bytes written to disk")
        logger.info(f"Wrote {len(data)} bytes to {filename}")
        return True

    @staticmethod
    def _remove_temp_file(temp_filename: Optional[str]):
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError:
                pass

    def handle_save(self):
        """Handle Ctrl-S save command."""
        if self.filename:
            self.save_file(self.filename)
        else:
            self.prompt_mode = 'save_as'
            self.prompt_input = ""

    def _handle_save_as_prompt(self, key_event: KeyEvent):
        """Handle keypress during the save-as prompt."""
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            self.prompt_mode = None
            self.prompt_input = ""
            self.set_status_message("Save aborted")
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                filename = self.prompt_input
                self.prompt_mode = None
                self.prompt_input = ""
                self.document.set_language(select_language(filename))
                self.save_file(filename)
        elif self._is_prompt_backspace(key_event):
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR and ord(key_event.value[0]) >= 32:
            self.prompt_input += key_event.value

    @staticmethod
    def _is_prompt_backspace(key_event: KeyEvent) -> bool:
        return ((key_event.key_type == KeyType.SPECIAL and key_event.value in ('backspace', 'delete'))
                or (key_event.key_type == KeyType.CTRL and key_event.value == 'h'))

    # --- Search ---

    def start_search(self):
        """Enter the incremental search prompt."""
        self._search_origin = self.viewport.snapshot()
        self.prompt_mode = 'search'
        self.prompt_input = ""

    def _end_search(self, signal_: SearchSignal):
        self.search.step(self.prompt_input, signal_)
        if self._search_origin is not None:
            self.viewport.restore(self._search_origin)
        self._search_origin = None
        self.prompt_mode = None
        self.prompt_input = ""
        self.set_status_message("")

    def _handle_search_prompt(self, key_event: KeyEvent):
        """Handle keypress during incremental search."""
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            self._end_search(SearchSignal.CANCEL)
            return
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            self._end_search(SearchSignal.ACCEPT)
            return

        if key_event.key_type == KeyType.SPECIAL and key_event.value in ('right', 'down'):
            signal_ = SearchSignal.NEXT
        elif key_event.key_type == KeyType.SPECIAL and key_event.value in ('left', 'up'):
            signal_ = SearchSignal.PREVIOUS
        elif self._is_prompt_backspace(key_event):
            if not self.prompt_input:
                return
            self.prompt_input = self.prompt_input[:-1]
            signal_ = SearchSignal.EDIT
        elif key_event.key_type == KeyType.REGULAR and ord(key_event.value[0]) >= 32:
            if len(self.prompt_input) >= EditorConstants.QUERY_MAX_LENGTH:
                return
            self.prompt_input += key_event.value
            signal_ = SearchSignal.EDIT
        else:
            return
        self.search.step(self.prompt_input, signal_)

    # --- Quitting ---

    def request_quit(self):
        """Handle Ctrl-Q: quit, or warn while unsaved changes remain."""
        if self.modified and self.quit_times > 0:
            self.set_status_message(EditorConstants.QUIT_WARNING.format(self.quit_times))
            self.quit_times -= 1
            return
        self.running = False

    # --- Input ---

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        if self.prompt_mode == 'search':
            self._handle_search_prompt(key_event)
            return
        if self.prompt_mode == 'save_as':
            self._handle_save_as_prompt(key_event)
            return

        self.command_registry.execute(self, key_event)
        if not (key_event.key_type == KeyType.CTRL and key_event.value == 'q'):
            self.quit_times = self.settings.quit_times

    # --- Drawing ---

    def status_bar(self) -> tuple[str, str]:
        """Left and right parts of the status bar."""
        name = (self.filename or EditorConstants.NO_NAME)[:EditorConstants.STATUS_FILENAME_WIDTH]
        left = f"{name} - {self.document.row_count} lines"
        if self.modified:
            left += " (modified)"
        filetype = self.document.language.filetype if self.document.language else EditorConstants.NO_FILETYPE
        right = f"{filetype} | {self.viewport.cursor_row + 1}/{self.document.row_count}"
        return left, right

    def frame_lines(self) -> list[str]:
        """Compose the text area, one string per screen row."""
        lines = []
        width = self.viewport.screen_cols
        for y, visible in enumerate(self.viewport.visible_lines(self.document)):
            if visible is not None:
                text, highlights = visible
                lines.append(self.terminal.compose_line(text, highlights))
            elif self.document.row_count == 0 and y == self.viewport.screen_rows // 3:
                welcome = f"linemark editor -- version {__version__}"[:width]
                padding = (width - len(welcome)) // 2
                lines.append(("~" + " " * (padding - 1) if padding else "") + welcome)
            else:
                lines.append("~")
        return lines

    def refresh_screen(self):
        """Recompute scrolling and draw one frame."""
        self.viewport.scroll(self.document)
        left, right = self.status_bar()
        cursor_y, cursor_x = self.viewport.screen_cursor()
        self.terminal.draw_frame(self.frame_lines(), cursor_y, cursor_x,
                                 left, right, self.current_message())

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        old_settings = None
        try:
            # Deliver Ctrl-S, Ctrl-Q and Ctrl-C to the editor instead of the tty
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                new_settings[3] &= ~(termios.ISIG | termios.IEXTEN)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, AttributeError, OSError):
                old_settings = None

            self.set_status_message(EditorConstants.HELP_MESSAGE)
            while self.running:
                self.refresh_screen()

                # Use file descriptor 0 for stdin to work in all environments
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.viewport.resize(self.terminal.height, self.terminal.width)
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self._handle_key_event(key_event)
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    # Best-effort restore of terminal settings
                    pass
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
