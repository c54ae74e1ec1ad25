"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"  # Printable character (including tab)
    CTRL = "ctrl"
    SPECIAL = "special"  # Named keys: arrows, enter, backspace, ...


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from curtsies


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'escape',
}


class KeyboardHandler:
    """Turns curtsies key names into KeyEvents."""
    
    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface
        
    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None if nothing arrived before the timeout."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)
    
    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent.
        
        Args:
            key: Key token such as 'a', '<LEFT>' or '<Ctrl-s>'
            
        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<PAGEUP>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            lower = key_str[1:-1].lower().replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            base = parts[-1]
            mods = set(parts[:-1])
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'
            elif base in ('esc', 'escape'):
                base = 'escape'
            elif base in ('del',):
                base = 'delete'

            # Named whitespace tokens are regular characters
            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            if 'ctrl' in mods and len(base) == 1:
                return self._ctrl_event(base, key_str)
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if o == 127:
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26 and key_str != '\t':  # Ctrl-A .. Ctrl-Z
                return self._ctrl_event(chr(ord('a') + o - 1), key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    @staticmethod
    def _ctrl_event(letter: str, raw: str) -> KeyEvent:
        # Ctrl-J / Ctrl-M are what terminals send for Enter
        if letter in ('j', 'm'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=raw)
        return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=raw)
