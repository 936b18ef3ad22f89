#!/usr/bin/env python3
"""
Source Merger
=============
Merges several word-frequency lists for one language into a single
ranked, deduplicated and stratified lexicon.

Pipeline:
    sources -> [parallel fetch] -> parse lines -> normalize tokens
            -> dedupe (higher frequency wins, ties go to the first seen)
            -> sort (frequency desc, order asc) -> rank -> stratify

Each line of a source is ``<token> [... <frequency>]``: the first field is
the token, the last field (when there are at least two) the frequency.

Usage:
    from wordflux.merger import load_dictionary

    entries = load_dictionary("ru", ["https://example.org/extra.txt"])
    print(entries[0].word, entries[0].stratum)
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .entries import DictionaryEntry, frequency_sort_key
from .errors import EmptyResultError
from .normalize import normalize_word
from .sources import RetryHandler, SourceFetcher, build_source_list, resolve_fetch
from .strata import assign_ranks, assign_strata

logger = logging.getLogger(__name__)

# ASCII digits only; no underscores or other float() extensions
DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)
RADIX_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")


@dataclass(frozen=True)
class SourceSkip:
    """A source that contributed nothing, and why."""
    source: str
    reason: str


@dataclass
class MergeResult:
    """Outcome of a merge run."""
    language: str
    sources: List[str]
    entries: List[DictionaryEntry]
    skipped: List[SourceSkip] = field(default_factory=list)

    @property
    def loaded_sources(self) -> List[str]:
        skipped = {skip.source for skip in self.skipped}
        return [source for source in self.sources if source not in skipped]


def parse_frequency(field_value: Optional[str]) -> float:
    """Parse a frequency field; anything unusable counts as 0."""
    if field_value is None:
        return 0.0
    try:
        if DECIMAL_RE.match(field_value):
            value = float(field_value)
        elif RADIX_RE.match(field_value):
            value = float(int(field_value, 0))
        else:
            return 0.0
    except (ValueError, OverflowError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_lines(text: str) -> Iterator[Tuple[str, float]]:
    """Yield (normalized word, frequency) for every usable line."""
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        parts = line.split()
        word = normalize_word(parts[0])
        if not word:
            continue
        frequency = parse_frequency(parts[-1] if len(parts) > 1 else None)
        yield word, frequency


class LexiconBuilder:
    """
    Accumulates observations from many sources, keeping one entry per word.

    The ingestion counter lives here, so one builder equals one merge run.
    """

    def __init__(self):
        self._entries: Dict[str, DictionaryEntry] = {}
        self._next_order = 0

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, word: str, frequency: float, source: str, source_index: int) -> DictionaryEntry:
        """Record one observation and return the entry now winning for `word`."""
        candidate = DictionaryEntry(
            word=word,
            frequency=frequency,
            source=source,
            source_index=source_index,
            order=self._next_order,
        )
        self._next_order += 1

        current = self._entries.get(word)
        if current is None or self._beats(candidate, current):
            self._entries[word] = candidate
            return candidate
        return current

    def add_text(self, text: str, source: str, source_index: int) -> int:
        """Ingest a whole document; returns the number of accepted lines."""
        accepted = 0
        for word, frequency in parse_lines(text):
            self.add(word, frequency, source, source_index)
            accepted += 1
        return accepted

    @staticmethod
    def _beats(candidate: DictionaryEntry, current: DictionaryEntry) -> bool:
        if candidate.frequency != current.frequency:
            return candidate.frequency > current.frequency
        return candidate.order < current.order

    def build(self) -> List[DictionaryEntry]:
        """Ranked and stratified entries, as a fresh list."""
        ordered = sorted(self._entries.values(), key=frequency_sort_key)
        return assign_strata(assign_ranks(ordered))


def merge_sources(language: str,
                  extra_sources: Iterable[str] = (),
                  fetch: Optional[Callable] = None,
                  include_defaults: bool = True,
                  max_workers: Optional[int] = None,
                  retry_handler: RetryHandler = None,
                  log: Optional[logging.Logger] = None) -> MergeResult:
    """
    Fetch and merge every source for `language`.

    Args:
        language: Language code ("ru" or "uk")
        extra_sources: Additional URLs/keys, appended after the defaults
        fetch: Fetch capability ``fetch(source, options) -> response``
        include_defaults: Include the built-in sources for the language
        max_workers: Max concurrent fetches
        retry_handler: Retry policy for transient transport errors
        log: Logger for skipped sources (default: this module's logger)

    Returns:
        MergeResult with the ranked entries and the skipped sources

    Raises:
        ConfigurationError: unsupported language, no sources, unusable fetch
        EmptyResultError: no source yielded text, or no word survived
    """
    log = log or logger
    sources = build_source_list(language, extra_sources, include_defaults)
    fetcher = SourceFetcher(resolve_fetch(fetch), max_workers=max_workers,
                            retry_handler=retry_handler)

    builder = LexiconBuilder()
    skipped: List[SourceSkip] = []
    seen_any = False

    for outcome in fetcher.fetch_all(sources):
        if not outcome.ok:
            reason = outcome.error.reason if outcome.error else "no content"
            log.warning(f"Skipping dictionary source {outcome.source}: {reason}")
            skipped.append(SourceSkip(outcome.source, reason))
            continue
        seen_any = True
        accepted = builder.add_text(outcome.text, outcome.source, outcome.index)
        log.debug(f"Read {accepted} words from {outcome.source}")

    if not seen_any or not len(builder):
        raise EmptyResultError(f"Unable to load any dictionary data for {language}.")

    entries = builder.build()
    log.info(f"Merged {len(entries)} words for {language} from "
             f"{len(sources) - len(skipped)}/{len(sources)} sources")
    return MergeResult(language=language, sources=sources, entries=entries, skipped=skipped)


def load_dictionary(language: str,
                    extra_sources: Iterable[str] = (),
                    fetch: Optional[Callable] = None,
                    **options) -> List[DictionaryEntry]:
    """Merge the sources for `language` and return just the ranked entries."""
    return merge_sources(language, extra_sources, fetch=fetch, **options).entries


__all__ = [
    'LexiconBuilder',
    'MergeResult',
    'SourceSkip',
    'load_dictionary',
    'merge_sources',
    'parse_frequency',
    'parse_lines',
]
