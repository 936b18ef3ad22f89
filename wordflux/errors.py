#!/usr/bin/env python3
"""
Error Taxonomy
==============
Exceptions raised by the dictionary pipeline and the sampler.

Fatal:
- ConfigurationError        unsupported language, no sources, no fetch capability
- EmptyResultError          nothing usable came back from any source
- SamplerConstructionError  empty or unusable vocabulary
- SamplerExhaustionError    no stratum holds any word

Recovered:
- SourceFetchError          one source failed; the merge skips it and continues
"""


class WordFluxError(Exception):
    """Base class for all WordFlux errors."""


class ConfigurationError(WordFluxError, ValueError):
    """The merge or sampler was configured with something it cannot use."""


class SourceFetchError(WordFluxError):
    """A single source could not be fetched or read."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class EmptyResultError(WordFluxError):
    """Every source failed, or no token survived normalization."""


class SamplerConstructionError(WordFluxError, ValueError):
    """The sampler was given no usable words."""


class SamplerExhaustionError(WordFluxError, RuntimeError):
    """The sampler has no words left in any stratum."""


__all__ = [
    'WordFluxError',
    'ConfigurationError',
    'SourceFetchError',
    'EmptyResultError',
    'SamplerConstructionError',
    'SamplerExhaustionError',
]
