#!/usr/bin/env python3
"""
Preset Lexicons
===============
Plain newline-delimited word lists: one normalized word per line, no
header, no frequency column. Presets are already filtered and
deduplicated, so file order is rank order.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .entries import DictionaryEntry
from .normalize import normalize_word
from .settings import require_setting
from .strata import assign_strata

logger = logging.getLogger(__name__)

DIGIT_RE = re.compile(r"\d")

PathLike = Union[str, Path]


def read_preset_words(path: PathLike) -> List[str]:
    """Non-blank, stripped lines of a preset file."""
    text = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines() if line.strip()]


def load_preset(path: PathLike) -> List[DictionaryEntry]:
    """
    Load a preset file as ranked, stratified entries.

    Lines that do not normalize are skipped; of repeated words only the
    first is kept.
    """
    path = Path(path)
    words = {}
    rejected = 0
    for raw in read_preset_words(path):
        word = normalize_word(raw)
        if word is None:
            rejected += 1
            continue
        words.setdefault(word, None)

    if rejected:
        logger.warning(f"Preset {path} has {rejected} lines that are not valid words")

    source = str(path)
    entries = [
        DictionaryEntry(word=word, source=source, order=position, rank=position)
        for position, word in enumerate(words)
    ]
    return assign_strata(entries)


def write_preset(entries: Iterable[DictionaryEntry], path: PathLike) -> int:
    """Write entries in rank order, one word per line; returns the word count."""
    ordered = sorted(entries, key=lambda e: (e.rank is None, e.rank or 0))
    words = list(dict.fromkeys(entry.word for entry in ordered))
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{word}\n" for word in words), encoding="utf-8")
    return len(words)


def validate_preset(path: PathLike, min_words: Optional[int] = None) -> List[str]:
    """
    Check a preset file.

    Args:
        path: Preset file
        min_words: Required word count (default: presets.min_words)

    Returns:
        List of problems; empty when the preset is usable
    """
    path = Path(path)
    if min_words is None:
        min_words = require_setting("presets.min_words")
    if not path.exists():
        return [f"{path.name} is missing"]

    words = read_preset_words(path)
    problems = []
    if len(words) < min_words:
        problems.append(f"{path.name} has only {len(words)} words (need {min_words})")

    seen = set()
    duplicates = []
    for word in words:
        key = word.lower()
        if key in seen:
            duplicates.append(word)
        seen.add(key)
    if duplicates:
        sample = ', '.join(duplicates[:5])
        problems.append(f"{path.name} has {len(duplicates)} duplicate words ({sample})")

    with_digits = [word for word in words if DIGIT_RE.search(word)]
    if with_digits:
        sample = ', '.join(with_digits[:5])
        problems.append(f"{path.name} has {len(with_digits)} words with digits ({sample})")

    return problems


__all__ = [
    'load_preset',
    'read_preset_words',
    'validate_preset',
    'write_preset',
]
