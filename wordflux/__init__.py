#!/usr/bin/env python3
"""
WordFlux - Frequency-Stratified Word Stream
===========================================

Merges word-frequency lists into one ranked lexicon per language and
draws an endless, reproducible word stream from it that favours common
words, still surfaces rare ones, and avoids short-term repetition.

Quick Start
-----------
    from wordflux import WordFlux

    flux = WordFlux("ru", seed=42)
    flux.next_word()
    flux.next_batch(3)

Lower level:

    from wordflux import load_dictionary, create_sampler, create_batch_sampler

    entries = load_dictionary("uk", ["https://example.org/uk_extra.txt"])
    sampler = create_sampler(entries, seed=7, window_size=100)
    batch = create_batch_sampler(sampler)

Modules
-------
    wordflux.normalize - token validation and normalization
    wordflux.sources   - default sources and concurrent fetching
    wordflux.merger    - multi-source merge, ranking and stratification
    wordflux.sampler   - stratified anti-repeat sampler and batch wrapper
    wordflux.presets   - plain word-list files

CLI Usage
---------
    python -m wordflux sources
    python -m wordflux build ru --output ru.txt
    python -m wordflux sample --preset ru.txt -n 20 --seed 1
"""

__version__ = "0.1.0"
__author__ = "WordFlux"

import logging
from typing import Any, Callable, Iterable, List, Optional

from .entries import DictionaryEntry, Stratum, DEFAULT_SOURCE_KEY
from .errors import (
    WordFluxError,
    ConfigurationError,
    SourceFetchError,
    EmptyResultError,
    SamplerConstructionError,
    SamplerExhaustionError,
)
from .normalize import normalize_word, is_valid_word
from .strata import assign_strata, stratum_bounds
from .rng import Xorshift32
from .sources import (
    DEFAULT_SOURCES,
    SUPPORTED_LANGUAGES,
    HttpResponse,
    RetryHandler,
    SourceFetcher,
    default_fetch,
)
from .merger import (
    MergeResult,
    SourceSkip,
    load_dictionary,
    merge_sources,
)
from .sampler import (
    WordSampler,
    BatchSampler,
    create_sampler,
    create_batch_sampler,
)
from .presets import load_preset, write_preset, validate_preset


# =============================================================================
# WordFlux Main Class
# =============================================================================

class WordFlux:
    """
    Load a language's lexicon once and sample words from it.

    Examples
    --------
        >>> flux = WordFlux("uk", seed=1, fetch=my_fetch)
        >>> flux.next_batch(2)
        ['мова', 'світ']
    """

    def __init__(self,
                 language: str,
                 extra_sources: Iterable[str] = (),
                 fetch: Optional[Callable] = None,
                 seed: Optional[int] = None,
                 window_size: Any = None,
                 include_defaults: bool = True,
                 log: Optional[logging.Logger] = None):
        """
        Parameters
        ----------
        language : str
            "ru" or "uk"
        extra_sources : iterable of str
            Sources merged after the defaults
        fetch : callable, optional
            Fetch capability; defaults to HTTP/file fetching
        seed : int, optional
            Sampler seed, for reproducible streams
        window_size : int, optional
            Anti-repeat window (default 200)
        """
        self.language = language
        self.extra_sources = list(extra_sources or ())
        self.fetch = fetch
        self.seed = seed
        self.window_size = window_size
        self.include_defaults = include_defaults
        self.log = log

        self._result: Optional[MergeResult] = None
        self._sampler: Optional[WordSampler] = None
        self._batch: Optional[BatchSampler] = None

    def load(self) -> MergeResult:
        """Merge sources and build the sampler (only the first call does work)."""
        if self._result is None:
            result = merge_sources(
                self.language,
                self.extra_sources,
                fetch=self.fetch,
                include_defaults=self.include_defaults,
                log=self.log,
            )
            self._sampler = create_sampler(result.entries, seed=self.seed, window_size=self.window_size)
            self._batch = create_batch_sampler(self._sampler)
            self._result = result
        return self._result

    @property
    def entries(self) -> List[DictionaryEntry]:
        return self.load().entries

    @property
    def skipped(self) -> List[SourceSkip]:
        return self.load().skipped

    @property
    def sampler(self) -> WordSampler:
        self.load()
        return self._sampler

    def next_word(self) -> str:
        return self.sampler()

    def next_batch(self, n: Any = 1) -> List[str]:
        self.load()
        return self._batch(n)


__all__ = [
    'WordFlux',
    # Entries
    'DictionaryEntry',
    'Stratum',
    'DEFAULT_SOURCE_KEY',
    # Errors
    'WordFluxError',
    'ConfigurationError',
    'SourceFetchError',
    'EmptyResultError',
    'SamplerConstructionError',
    'SamplerExhaustionError',
    # Pipeline
    'normalize_word',
    'is_valid_word',
    'assign_strata',
    'stratum_bounds',
    'DEFAULT_SOURCES',
    'SUPPORTED_LANGUAGES',
    'HttpResponse',
    'RetryHandler',
    'SourceFetcher',
    'default_fetch',
    'MergeResult',
    'SourceSkip',
    'load_dictionary',
    'merge_sources',
    # Sampling
    'Xorshift32',
    'WordSampler',
    'BatchSampler',
    'create_sampler',
    'create_batch_sampler',
    # Presets
    'load_preset',
    'write_preset',
    'validate_preset',
]
