"""
Tests for the WordFlux Facade
=============================
Tests for the WordFlux class in wordflux/__init__.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wordflux import (
    DEFAULT_SOURCES,
    ConfigurationError,
    EmptyResultError,
    HttpResponse,
    WordFlux,
)

UK_TEXT = "мова 100\nсвіт 90\nдім 80\nкіт 70\nліс 60\nсад 50\nчай 40\nсон 30\nніс 20\nдуб 10\n"


class CountingFetch:
    """Fetch capability serving one payload per source and counting calls."""

    def __init__(self, payloads):
        self.payloads = payloads
        self.calls = []

    def __call__(self, source, options):
        self.calls.append(source)
        if source not in self.payloads:
            raise OSError("offline")
        return HttpResponse(source, 200, self.payloads[source].encode("utf-8"))


@pytest.fixture
def uk_fetch():
    return CountingFetch({DEFAULT_SOURCES["uk"][0]: UK_TEXT})


class TestWordFlux:
    """Tests for lazy loading and sampling."""

    def test_nothing_fetched_until_used(self, uk_fetch):
        """Test nothing fetched until used."""
        WordFlux("uk", fetch=uk_fetch, seed=1)
        assert uk_fetch.calls == []

    def test_loads_once(self, uk_fetch):
        """Test loads once."""
        flux = WordFlux("uk", fetch=uk_fetch, seed=1)
        flux.next_word()
        flux.next_batch(3)
        assert len(flux.entries) == 10
        assert uk_fetch.calls == [DEFAULT_SOURCES["uk"][0]]

    def test_entries_ranked(self, uk_fetch):
        """Test entries ranked."""
        flux = WordFlux("uk", fetch=uk_fetch)
        assert [e.word for e in flux.entries[:3]] == ["мова", "світ", "дім"]

    def test_next_batch_clamped(self, uk_fetch):
        """Test next batch clamped."""
        flux = WordFlux("uk", fetch=uk_fetch, seed=2)
        assert len(flux.next_batch(2)) == 2
        assert len(flux.next_batch(9)) == 3
        assert len(flux.next_batch(0)) == 1

    def test_same_seed_same_stream(self, uk_fetch):
        """Test same seed same stream."""
        a = WordFlux("uk", fetch=uk_fetch, seed=5, window_size=3)
        b = WordFlux("uk", fetch=uk_fetch, seed=5, window_size=3)
        assert [a.next_word() for _ in range(20)] == [b.next_word() for _ in range(20)]

    def test_skipped_sources_reported(self, uk_fetch):
        """Test skipped sources reported."""
        flux = WordFlux("uk", ["https://example.test/down.txt"], fetch=uk_fetch)
        assert [s.source for s in flux.skipped] == ["https://example.test/down.txt"]
        assert flux.sampler.vocabulary_size == 10

    def test_extra_sources_only(self):
        """Test extra sources only."""
        fetch = CountingFetch({"extra": "мир 1\n"})
        flux = WordFlux("ru", ["extra"], fetch=fetch, include_defaults=False)
        assert flux.next_word() == "мир"

    def test_errors_propagate(self):
        """Test merge errors propagate."""
        with pytest.raises(ConfigurationError):
            WordFlux("en", fetch=CountingFetch({})).load()
        with pytest.raises(EmptyResultError):
            WordFlux("uk", fetch=CountingFetch({})).next_word()
