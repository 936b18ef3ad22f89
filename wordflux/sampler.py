#!/usr/bin/env python3
"""
Stratified Anti-Repeat Sampler
==============================
Draws an endless word stream from a ranked lexicon.

Each draw:
1. Rolls a stratum by fixed weights (head 0.6, mid 0.3, tail 0.1),
   skipping strata that hold no words.
2. Visits strata in a fallback order that starts with the rolled one.
3. Inside a stratum, walks the per-source cycle round-robin and picks a
   uniformly random word from the selected source (without consuming it).
4. Accepts the word only if it is not in the recent-history window, unless
   every word of the vocabulary is already in the window.

After max(10, window_size) rejected attempts one unconstrained draw is
made, so a call only fails when there are no words at all.

Usage:
    sampler = create_sampler(entries, seed=42, window_size=50)
    word = sampler()

    batch = create_batch_sampler(sampler)
    words = batch(2)
"""

import logging
import math
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Set, Tuple

from .entries import DEFAULT_SOURCE_KEY, DictionaryEntry, Stratum
from .errors import SamplerConstructionError, SamplerExhaustionError
from .rng import Xorshift32, default_seed
from .strata import STRATA, assign_strata

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_WINDOW_SIZE = 200
MIN_WINDOW_SIZE = 1
MAX_WINDOW_SIZE = 2000
MIN_ATTEMPTS = 10

STRATUM_WEIGHTS: Tuple[Tuple[Stratum, float], ...] = (
    (Stratum.HEAD, 0.6),
    (Stratum.MID, 0.3),
    (Stratum.TAIL, 0.1),
)

FALLBACK_ORDER: Dict[Stratum, Tuple[Stratum, ...]] = {
    Stratum.HEAD: (Stratum.HEAD, Stratum.MID, Stratum.TAIL),
    Stratum.MID: (Stratum.MID, Stratum.HEAD, Stratum.TAIL),
    Stratum.TAIL: (Stratum.TAIL, Stratum.HEAD, Stratum.MID),
}

MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 3


def clamp_window_size(value: Any) -> int:
    """Window size in [1, 2000]; anything non-numeric gives the default."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return DEFAULT_WINDOW_SIZE
    return max(MIN_WINDOW_SIZE, min(MAX_WINDOW_SIZE, math.floor(value)))


def clamp_batch_size(value: Any) -> int:
    """Batch size in [1, 3]; non-numeric or non-positive input gives 1."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return MIN_BATCH_SIZE
    return max(MIN_BATCH_SIZE, min(MAX_BATCH_SIZE, math.floor(value)))


# =============================================================================
# Stratum Pool
# =============================================================================

class StratumPool:
    """
    Words of one stratum, grouped by source and visited round-robin.

    Word groups are shuffled once at construction and never change after;
    the visiting cycle is reshuffled each time the cursor wraps around.
    """

    def __init__(self, groups: Dict[str, List[str]], cycle: List[str], size: int):
        self.groups = groups
        self.cycle = cycle
        self.cursor = 0
        self.size = size

    @classmethod
    def build(cls, entries: Iterable[DictionaryEntry], rng: Xorshift32) -> "StratumPool":
        groups: Dict[str, List[str]] = {}
        size = 0
        for entry in entries:
            groups.setdefault(entry.source or DEFAULT_SOURCE_KEY, []).append(entry.word)
            size += 1
        for words in groups.values():
            rng.shuffle(words)
        cycle = list(groups)
        if len(cycle) > 1:
            rng.shuffle(cycle)
        return cls(groups, cycle, size)

    def __len__(self) -> int:
        return self.size

    def draw(self, rng: Xorshift32) -> Optional[str]:
        """Next source in the cycle, then a random word from it (None if nothing found)."""
        if not self.cycle:
            return None
        for _ in range(len(self.cycle)):
            if self.cursor >= len(self.cycle):
                self.cursor = 0
                if len(self.cycle) > 1:
                    rng.shuffle(self.cycle)
            source = self.cycle[self.cursor]
            self.cursor += 1
            words = self.groups.get(source)
            if not words:
                continue
            return words[int(rng.random() * len(words))]
        return None


# =============================================================================
# History Window
# =============================================================================

class HistoryWindow:
    """Most recently emitted words, bounded to `capacity`."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._order: Deque[str] = deque()
        self._members: Set[str] = set()

    def __contains__(self, word: str) -> bool:
        return word in self._members

    def __len__(self) -> int:
        return len(self._order)

    @property
    def distinct(self) -> int:
        return len(self._members)

    def record(self, word: str) -> None:
        self._order.append(word)
        self._members.add(word)
        if len(self._order) > self.capacity:
            self._members.discard(self._order.popleft())

    def recent(self) -> List[str]:
        return list(self._order)


# =============================================================================
# Sampler
# =============================================================================

def _prepare_entries(words: Any) -> List[DictionaryEntry]:
    if words is None or isinstance(words, (str, bytes)):
        raise SamplerConstructionError("Words must be a non-empty sequence of entries.")
    items = list(words)
    if not items:
        raise SamplerConstructionError("Words array must be non-empty.")

    entries = [
        entry for entry in (DictionaryEntry.from_value(item, idx) for idx, item in enumerate(items))
        if entry is not None
    ]
    if not entries:
        raise SamplerConstructionError("No usable words provided for sampler.")

    entries.sort(key=lambda e: (-e.frequency, e.rank))
    if any(entry.stratum is None for entry in entries):
        entries = assign_strata(entries)
    return entries


class WordSampler:
    """
    Stateful word generator over a stratified lexicon.

    Not safe for concurrent use: one instance owns one history window and
    one set of stratum pools.

    Usage:
        sampler = WordSampler(entries, seed=7)
        words = [sampler() for _ in range(10)]
    """

    def __init__(self, words: Iterable[Any], seed: Optional[int] = None, window_size: Any = None):
        """
        Build the sampler.

        Args:
            words: DictionaryEntry records or mappings with the same keys
            seed: RNG seed (default: derived from the clock)
            window_size: Anti-repeat window, clamped to [1, 2000] (default 200)

        Raises:
            SamplerConstructionError: no usable words
        """
        entries = _prepare_entries(words)

        self.seed = default_seed() if seed is None else int(seed)
        self.window_size = clamp_window_size(window_size)
        self._rng = Xorshift32(self.seed)

        self._pools: Dict[Stratum, StratumPool] = {
            stratum: StratumPool.build((e for e in entries if e.stratum == stratum), self._rng)
            for stratum in STRATA
        }
        self._history = HistoryWindow(self.window_size)
        self.vocabulary_size = len({entry.word for entry in entries})

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def stratum_sizes(self) -> Dict[Stratum, int]:
        return {stratum: pool.size for stratum, pool in self._pools.items()}

    @property
    def history(self) -> List[str]:
        return self._history.recent()

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def _choose_stratum(self) -> Optional[Stratum]:
        roll = self._rng.random()
        cumulative = 0.0
        for stratum, weight in STRATUM_WEIGHTS:
            cumulative += weight
            if roll < cumulative and self._pools[stratum].size > 0:
                return stratum
        for stratum in STRATA:
            if self._pools[stratum].size > 0:
                return stratum
        return None

    def _admissible(self, word: str) -> bool:
        return word not in self._history or self._history.distinct >= self.vocabulary_size

    def next_word(self) -> str:
        """
        Return the next word.

        Raises:
            SamplerExhaustionError: no stratum holds any word
        """
        attempts = max(MIN_ATTEMPTS, self.window_size)
        for _ in range(attempts):
            first = self._choose_stratum()
            if first is None:
                break
            for stratum in FALLBACK_ORDER[first]:
                pool = self._pools[stratum]
                if pool.size == 0:
                    continue
                candidate = pool.draw(self._rng)
                if candidate is None:
                    continue
                if self._admissible(candidate):
                    self._history.record(candidate)
                    return candidate

        logger.debug(f"No unseen word after {attempts} attempts, drawing without history check")
        for stratum in STRATA:
            pool = self._pools[stratum]
            if pool.size == 0:
                continue
            candidate = pool.draw(self._rng)
            if candidate is not None:
                self._history.record(candidate)
                return candidate

        raise SamplerExhaustionError("Sampler could not produce a word.")

    __call__ = next_word

    def __iter__(self):
        while True:
            yield self.next_word()


def create_sampler(entries: Iterable[Any],
                   seed: Optional[int] = None,
                   window_size: Any = None) -> WordSampler:
    """Build a WordSampler; call the result to draw words."""
    return WordSampler(entries, seed=seed, window_size=window_size)


# =============================================================================
# Batch Wrapper
# =============================================================================

class BatchSampler:
    """Pulls small batches (1-3 words) from a sampler callable."""

    def __init__(self, sampler: Callable[[], str]):
        if not callable(sampler):
            raise SamplerConstructionError("Sampler function is required.")
        self.sampler = sampler

    def next_batch(self, n: Any = 1) -> List[str]:
        size = clamp_batch_size(n)
        return [self.sampler() for _ in range(size)]

    __call__ = next_batch


def create_batch_sampler(sampler: Callable[[], str]) -> BatchSampler:
    return BatchSampler(sampler)


__all__ = [
    'WordSampler',
    'StratumPool',
    'HistoryWindow',
    'BatchSampler',
    'create_sampler',
    'create_batch_sampler',
    'clamp_window_size',
    'clamp_batch_size',
    'STRATUM_WEIGHTS',
    'FALLBACK_ORDER',
    'DEFAULT_WINDOW_SIZE',
    'MAX_WINDOW_SIZE',
    'MAX_BATCH_SIZE',
]
