"""Linemark - a small terminal text editor with syntax highlighting and search."""

__version__ = "0.1.0"

from .model import Document, Row
from .search import SearchEngine, SearchSignal
from .syntax import LanguageDefinition, select_language
from .view import Viewport

__all__ = [
    'Document',
    'Row',
    'SearchEngine',
    'SearchSignal',
    'LanguageDefinition',
    'select_language',
    'Viewport',
]
