#!/usr/bin/env python3
"""
Stratifier
==========
Splits a ranked entry list into head / mid / tail bands.

For N entries:
- head: the first max(1, floor(0.05 * N)) ranks
- mid:  up to max(head_end, floor(0.40 * N))
- tail: the remainder
"""

import math
from dataclasses import replace
from typing import List, Sequence, Tuple

from .entries import DictionaryEntry, Stratum

HEAD_SHARE = 0.05
MID_SHARE = 0.40

STRATA: Tuple[Stratum, ...] = (Stratum.HEAD, Stratum.MID, Stratum.TAIL)


def stratum_bounds(total: int) -> Tuple[int, int]:
    """Return (head_end, mid_end) as exclusive rank positions."""
    head_end = max(1, math.floor(total * HEAD_SHARE))
    mid_end = max(head_end, math.floor(total * MID_SHARE))
    return head_end, mid_end


def assign_strata(entries: Sequence[DictionaryEntry]) -> List[DictionaryEntry]:
    """
    Annotate entries with their stratum, by list position.

    The input is expected to be sorted by rank already. A new list of new
    entries is returned; an empty input comes back as an empty list.
    """
    total = len(entries)
    if not total:
        return list(entries)
    head_end, mid_end = stratum_bounds(total)
    result = []
    for position, entry in enumerate(entries):
        if position < head_end:
            stratum = Stratum.HEAD
        elif position < mid_end:
            stratum = Stratum.MID
        else:
            stratum = Stratum.TAIL
        result.append(replace(entry, stratum=stratum))
    return result


def assign_ranks(entries: Sequence[DictionaryEntry]) -> List[DictionaryEntry]:
    """Give each entry its list position as a dense rank."""
    return [replace(entry, rank=position) for position, entry in enumerate(entries)]


__all__ = [
    'assign_strata',
    'assign_ranks',
    'stratum_bounds',
    'STRATA',
    'HEAD_SHARE',
    'MID_SHARE',
]
