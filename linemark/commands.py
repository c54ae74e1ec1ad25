"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""
    
    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.
        
        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
            
        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""
    
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(editor, key_event)
        return False
    
    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class ArrowCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.move_cursor(editor.document, key_event.value)


class HomeCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.home()


class EndCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.end(editor.document)


class PageUpCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.page_up(editor.document)


class PageDownCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.page_down(editor.document)


class EditCommand(EditorCommand):
    """Base class for editing commands."""
    
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Editing commands modify the document."""
        self._edit(editor, key_event)
        return True
    
    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.delete_backward()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.delete_forward()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_newline()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if len(char) == 1 and (ord(char) >= 32 or char == '\t'):
            editor.insert_char(char)


class SystemCommand(EditorCommand):
    """Base class for system commands like save, quit, find."""
    
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False
    
    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class FindCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.start_search()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""
    
    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()
    
    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        arrow = ArrowCommand()
        for direction in ('left', 'right', 'up', 'down'):
            self.register((KeyType.SPECIAL, direction), arrow)
        self.register((KeyType.SPECIAL, 'home'), HomeCommand())
        self.register((KeyType.SPECIAL, 'end'), EndCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())
        
        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.CTRL, 'h'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        
        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'f'), FindCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.
        
        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)
        
        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)
        
        return False
