#!/usr/bin/env python3
"""Linemark - a small terminal text editor.

Usage:
    python main.py [filename]
    
Controls:
    Arrow keys, Home, End, Page Up/Down: Move the cursor
    Ctrl-S: Save file (asks for a name if there is none)
    Ctrl-Q: Quit (press repeatedly to discard unsaved changes)
    Ctrl-F: Incremental search (arrows step between matches)
    Type to insert text
    Backspace/Delete: Delete character
    Enter: Split line
"""

import sys
from linemark.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
