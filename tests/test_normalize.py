"""
Tests for Token Normalization
=============================
Tests for normalize_word() in wordflux/normalize.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wordflux.normalize import normalize_word, is_valid_word, MAX_WORD_LENGTH


class TestNormalizeAccepts:
    """Tokens that normalize to a word."""

    def test_lowercases_and_trims(self):
        """Test lowercases and trims."""
        assert normalize_word("  Думать \n") == "думать"

    def test_ukrainian_letters(self):
        """Test Ukrainian letters."""
        assert normalize_word("Їжак") == "їжак"
        assert normalize_word("ґанок") == "ґанок"

    @pytest.mark.parametrize("token", ["п'ять", "м’ята", "сім'я", "пʼять"])
    def test_apostrophe_joined(self, token):
        """Test apostrophe joined."""
        assert normalize_word(token) == token

    def test_hyphen_joined(self):
        """Test hyphen joined."""
        assert normalize_word("Темно-Синий") == "темно-синий"

    def test_several_joined_runs(self):
        """Test several joined runs."""
        assert normalize_word("из-за-угла") == "из-за-угла"

    def test_single_letter(self):
        """Test single letter."""
        assert normalize_word("я") == "я"

    def test_max_length(self):
        """Test max length."""
        word = "а" * MAX_WORD_LENGTH
        assert normalize_word(word) == word


class TestNormalizeRejects:
    """Tokens that are rejected."""

    @pytest.mark.parametrize("value", [None, 42, 3.5, b"bytes", ["слово"]])
    def test_non_text(self, value):
        """Test non-text values."""
        assert normalize_word(value) is None

    @pytest.mark.parametrize("token", ["", "   ", "\t\n"])
    def test_empty(self, token):
        """Test blank tokens."""
        assert normalize_word(token) is None

    def test_too_long(self):
        """Test too long."""
        assert normalize_word("а" * (MAX_WORD_LENGTH + 1)) is None

    def test_pure_digits(self):
        """Test pure digits."""
        assert normalize_word("12345") is None

    @pytest.mark.parametrize("token", ["мова-2", "слово1", "2слово"])
    def test_digits_mixed_in(self, token):
        """Test digits mixed in."""
        assert normalize_word(token) is None

    @pytest.mark.parametrize("token", ["hello", "word", "cлово"])
    def test_latin_letters(self, token):
        """Test Latin letters."""
        # "cлово" starts with a Latin c
        assert normalize_word(token) is None

    @pytest.mark.parametrize("token", ["-слово", "слово-", "'слово", "слово'", "сло--во", "сло-'во"])
    def test_bad_separators(self, token):
        """Test bad separators."""
        assert normalize_word(token) is None

    @pytest.mark.parametrize("token", ["сло во", "слово!", "слово.", "«слово»"])
    def test_punctuation_and_spaces(self, token):
        """Test punctuation and spaces."""
        assert normalize_word(token) is None

    @pytest.mark.parametrize("token", ["҂", "сло҃во", "слово҆", "҈҉"])
    def test_cyrillic_signs_and_combining_marks(self, token):
        """Test Cyrillic signs and combining marks."""
        assert normalize_word(token) is None

    def test_letters_around_excluded_range(self):
        """Test letters around excluded range."""
        assert normalize_word("ҁ") == "ҁ"
        assert normalize_word("ҋ") == "ҋ"


class TestNormalizeIdempotent:
    """Normalizing a normalized word changes nothing."""

    @pytest.mark.parametrize("token", ["Думать", " ВЕСТИ ", "п'ять", "Темно-Синий", "світ"])
    def test_idempotent(self, token):
        """Test normalizing twice."""
        once = normalize_word(token)
        assert once is not None
        assert normalize_word(once) == once

    def test_is_valid_word(self):
        """Test is valid word."""
        assert is_valid_word("думать")
        assert not is_valid_word("Думать")
        assert not is_valid_word("12345")
        assert not is_valid_word(None)
