"""Syntax classification of rendered rows.

Each rendered character of a row is assigned a Highlight category under the
active LanguageDefinition. Block comments may span rows: classify() takes the
predecessor's continuation state and returns the row's own, which the
Document feeds forward to the next row.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Flag
from functools import lru_cache
from typing import Optional

from .highlight import Highlight

logger = logging.getLogger(__name__)

SEPARATORS = ",.()+-/*=~%<>[];"
ASCII_WHITESPACE = " \t\n\r\x0c"
QUOTES = ('"', "'")
SECONDARY_KEYWORD_MARKER = "|"


class HighlightFlags(Flag):
    """Optional classification features of a language."""
    NONE = 0
    NUMBERS = 1
    STRINGS = 2


@dataclass(frozen=True)
class LanguageDefinition:
    """Static highlighting rules for one language.

    Keywords ending with SECONDARY_KEYWORD_MARKER belong to the secondary
    tier; the marker is not part of the keyword text.
    """
    filetype: str
    extensions: frozenset[str]
    keywords: tuple[str, ...]
    line_comment: str = ""
    block_comment_start: str = ""
    block_comment_end: str = ""
    flags: HighlightFlags = HighlightFlags.NONE

    @property
    def has_block_comments(self) -> bool:
        return bool(self.block_comment_start and self.block_comment_end)


C_KEYWORDS = (
    "switch", "if", "while", "for", "break", "continue", "return", "else",
    "struct", "union", "typedef", "static", "enum", "class", "case",
    # Types (secondary tier)
    "int|", "long|", "double|", "float|", "char|", "unsigned|", "signed|",
    "void|",
)

HLDB: tuple[LanguageDefinition, ...] = (
    LanguageDefinition(
        filetype="c",
        extensions=frozenset({"c", "h", "cpp"}),
        keywords=C_KEYWORDS,
        line_comment="//",
        block_comment_start="/*",
        block_comment_end="*/",
        flags=HighlightFlags.NUMBERS | HighlightFlags.STRINGS,
    ),
)


def is_separator(ch: str) -> bool:
    """True for ASCII whitespace, punctuation separators and end of row ('')."""
    return not ch or ch in ASCII_WHITESPACE or ch in SEPARATORS


def select_language(filename: Optional[str]) -> Optional[LanguageDefinition]:
    """Pick the language whose extension set contains filename's extension."""
    if not filename:
        return None
    extension = os.path.splitext(os.path.basename(filename))[1][1:]
    if not extension:
        return None
    for language in HLDB:
        if extension in language.extensions:
            logger.debug(f"Selected {language.filetype} highlighting for {filename}")
            return language
    return None


@lru_cache(maxsize=None)
def _keyword_table(keywords: tuple[str, ...]) -> tuple[tuple[str, Highlight], ...]:
    """Strip tier markers, pairing each keyword with its category."""
    table = []
    for keyword in keywords:
        if keyword.endswith(SECONDARY_KEYWORD_MARKER):
            token = keyword[:-len(SECONDARY_KEYWORD_MARKER)]
            category = Highlight.KEYWORD_SECONDARY
        else:
            token = keyword
            category = Highlight.KEYWORD_PRIMARY
        if token:
            table.append((token, category))
    return tuple(table)


def _match_keyword(render: str, i: int, keywords) -> Optional[tuple[str, Highlight]]:
    for token, category in keywords:
        end = i + len(token)
        if render.startswith(token, i) and is_separator(render[end:end + 1]):
            return token, category
    return None


def classify(render: str, continuation_in: bool,
             language: Optional[LanguageDefinition]) -> tuple[list[Highlight], bool]:
    """Classify every character of a rendered row.

    Args:
        render: The row's rendered (tab-expanded) text.
        continuation_in: True if the previous row ended inside a block comment.
        language: Active language, or None for plain text.

    Returns:
        (highlight, continuation_open) where highlight has one entry per
        character of render and continuation_open tells whether the row ends
        inside an unterminated block comment.
    """
    n = len(render)
    hl = [Highlight.NORMAL] * n
    if language is None:
        return hl, False

    line_comment = language.line_comment
    block_start = language.block_comment_start
    block_end = language.block_comment_end
    block_comments = language.has_block_comments
    strings = bool(language.flags & HighlightFlags.STRINGS)
    numbers = bool(language.flags & HighlightFlags.NUMBERS)
    keywords = _keyword_table(language.keywords)

    prev_sep = True
    in_string = ""  # Quote character of the open string
    in_comment = continuation_in and block_comments

    i = 0
    while i < n:
        ch = render[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if line_comment and not in_string and not in_comment and render.startswith(line_comment, i):
            hl[i:] = [Highlight.LINE_COMMENT] * (n - i)
            break

        if block_comments and not in_string:
            if in_comment:
                if render.startswith(block_end, i):
                    end = i + len(block_end)
                    hl[i:end] = [Highlight.BLOCK_COMMENT] * len(block_end)
                    i = end
                    in_comment = False
                    prev_sep = True
                    continue
                hl[i] = Highlight.BLOCK_COMMENT
                i += 1
                continue
            if render.startswith(block_start, i):
                end = i + len(block_start)
                hl[i:end] = [Highlight.BLOCK_COMMENT] * len(block_start)
                i = end
                in_comment = True
                continue

        if strings:
            if in_string:
                hl[i] = Highlight.STRING
                if ch == '\\' and i + 1 < n:
                    hl[i + 1] = Highlight.STRING
                    i += 2
                    continue
                if ch == in_string:
                    in_string = ""
                i += 1
                prev_sep = True
                continue
            if ch in QUOTES:
                in_string = ch
                hl[i] = Highlight.STRING
                i += 1
                continue

        if numbers and (
            ('0' <= ch <= '9' and (prev_sep or prev_hl == Highlight.NUMBER))
            or (ch == '.' and prev_hl == Highlight.NUMBER)
        ):
            hl[i] = Highlight.NUMBER
            i += 1
            prev_sep = False
            continue

        if prev_sep:
            matched = _match_keyword(render, i, keywords)
            if matched:
                token, category = matched
                hl[i:i + len(token)] = [category] * len(token)
                i += len(token)
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    return hl, in_comment
