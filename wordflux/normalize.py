#!/usr/bin/env python3
"""
Token Normalizer
================
Turns a raw wordlist token into a canonical word, or rejects it.

A canonical word is lowercase, 1-24 characters long and made of Cyrillic
letter runs, optionally joined by a single apostrophe or hyphen:

    "Думать"   -> "думать"
    "п'ять"    -> "п'ять"
    "темно-синий" -> "темно-синий"
    "мова-2"   -> None
    "12345"    -> None
"""

import re
from typing import Any, Optional

MIN_WORD_LENGTH = 1
MAX_WORD_LENGTH = 24

# Cyrillic letters: the blocks minus U+0482-U+0489 (thousands sign and
# combining marks), plus the two Cyrillic letters in Phonetic Extensions
CYRILLIC_LETTERS = (
    "\u0400-\u0481"   # Cyrillic, up to the thousands sign
    "\u048a-\u052f"   # rest of Cyrillic + Cyrillic Supplement
    "\u1c80-\u1c8f"   # Extended-C
    "\u1d2b\u1d78"
    "\u2de0-\u2dff"   # Extended-A
    "\ua640-\ua69f"   # Extended-B
    "\U0001e030-\U0001e08f"  # Extended-D
)
APOSTROPHES = "'’ʼ"
JOINERS = APOSTROPHES + "-"

TOKEN_RE = re.compile(
    rf"^[{CYRILLIC_LETTERS}]+(?:[{re.escape(JOINERS)}][{CYRILLIC_LETTERS}]+)*$"
)


def normalize_word(raw: Any) -> Optional[str]:
    """
    Normalize a raw token.

    Args:
        raw: Anything; only strings can succeed.

    Returns:
        The canonical word, or None if the token is rejected.
    """
    if not isinstance(raw, str):
        return None
    word = raw.strip().lower()
    if not MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH:
        return None
    if not TOKEN_RE.match(word):
        return None
    if word.isdecimal():
        return None
    return word


def is_valid_word(word: Any) -> bool:
    """True if `word` is already in canonical form."""
    return isinstance(word, str) and normalize_word(word) == word


__all__ = [
    'normalize_word',
    'is_valid_word',
    'MIN_WORD_LENGTH',
    'MAX_WORD_LENGTH',
    'TOKEN_RE',
]
