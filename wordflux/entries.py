#!/usr/bin/env python3
"""
Dictionary Entries
==================
The record type shared by the merger, the stratifier and the sampler.
"""

import math
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Any, Mapping, Optional

DEFAULT_SOURCE_KEY = "default"


class Stratum(str, Enum):
    """Frequency band of a word, by rank percentile."""
    HEAD = "head"    # most frequent 5%
    MID = "mid"      # up to the 40th percentile
    TAIL = "tail"    # everything else

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> Optional["Stratum"]:
        """Stratum for a name like "head", or None if it is not one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class DictionaryEntry:
    """One canonical word of a merged lexicon."""
    word: str
    frequency: float = 0.0
    source: str = DEFAULT_SOURCE_KEY
    source_index: int = 0
    order: int = 0                     # ingestion sequence, breaks frequency ties
    rank: Optional[int] = None         # dense 0..N-1 after sorting
    stratum: Optional[Stratum] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data['stratum'] = self.stratum.value if self.stratum else None
        return data

    @classmethod
    def from_value(cls, item: Any, index: int = 0) -> Optional["DictionaryEntry"]:
        """
        Coerce an entry-like value.

        Accepts DictionaryEntry instances and mappings with the same keys
        (``sourceIndex`` is accepted as an alias of ``source_index``).
        Returns None when the value carries no string word.
        """
        if isinstance(item, cls):
            if not isinstance(item.word, str):
                return None
            return replace(
                item,
                frequency=_finite_or_zero(item.frequency),
                rank=item.rank if _is_number(item.rank) else index,
                stratum=Stratum.parse(item.stratum),
            )
        if not isinstance(item, Mapping):
            return None
        word = item.get('word')
        if not isinstance(word, str):
            return None
        rank = item.get('rank')
        source_index = item.get('source_index', item.get('sourceIndex'))
        return cls(
            word=word,
            frequency=_finite_or_zero(item.get('frequency')),
            source=item.get('source') or DEFAULT_SOURCE_KEY,
            source_index=source_index if _is_number(source_index) else 0,
            order=item.get('order') if _is_number(item.get('order')) else index,
            rank=rank if _is_number(rank) else index,
            stratum=Stratum.parse(item.get('stratum')),
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite_or_zero(value: Any) -> float:
    if _is_number(value) and math.isfinite(value):
        return float(value)
    return 0.0


def frequency_sort_key(entry: DictionaryEntry):
    """Frequency descending, then ingestion order ascending."""
    return (-entry.frequency, entry.order)


__all__ = [
    'DictionaryEntry',
    'Stratum',
    'DEFAULT_SOURCE_KEY',
    'frequency_sort_key',
]
