"""Constants and configuration for the linemark editor."""

class EditorConstants:
    """Central configuration constants for the editor."""
    
    # Rendering
    TAB_WIDTH = 8  # Tab stops every N rendered columns
    
    # Editing
    QUIT_TIMES = 3  # Extra Ctrl-Q presses needed to quit with unsaved changes
    QUERY_MAX_LENGTH = 256  # Longest search query accepted at the prompt
    
    # Status line
    STATUS_MESSAGE_TIMEOUT = 5  # Seconds a status message stays visible
    STATUS_FILENAME_WIDTH = 20  # Characters of the file name shown in the status bar
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"
    SEARCH_PROMPT = "Search: {} (Use ESC/Arrows/Enter)"
    SAVE_AS_PROMPT = "Save as: {} (ESC to cancel)"
    QUIT_WARNING = "WARNING!!! File has unsaved changes. Press Ctrl-Q {} more times to quit."
    NO_NAME = "[No Name]"
    NO_FILETYPE = "no ft"
    
    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
