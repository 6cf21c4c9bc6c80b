"""
Tests for shingle extraction.
"""

from pipelines.entity_resolution.features import (
    SHINGLE_STRATEGIES,
    shingle,
    shingle_chars,
    shingle_hybrid,
    shingle_words,
    shingle_words_normalized,
)


class TestShingleStrategies:
    """Test each shingling strategy."""

    def test_char_shingles_are_space_padded(self):
        """Character shingles include the boundary padding."""
        assert shingle_chars("Acme", 3) == {" ac", "acm", "cme", "me "}

    def test_char_shingles_respect_n(self):
        """The window size controls shingle length."""
        assert all(len(s) == 2 for s in shingle_chars("Target", 2))

    def test_word_shingles(self):
        """Each normalized word is a shingle."""
        assert shingle_words("The Home Depot, Inc.") == {"home", "depot"}

    def test_word_normalized_adds_joined_form(self):
        """The space-stripped name is added as one more shingle."""
        assert shingle_words_normalized("Home Depot") == {"home", "depot", "homedepot"}
        assert shingle_words_normalized("HomeDepot") == {"homedepot"}

    def test_hybrid_tags_words_and_ngrams(self):
        """Words are tagged w:, per-word n-grams are tagged c:."""
        assert shingle_hybrid("Acme Go") == {"w:acme", "c:acm", "c:cme", "w:go"}

    def test_default_is_word_normalized(self):
        """The default strategy ignores n and uses word-normalized shingles."""
        assert shingle("Home Depot", 5) == shingle_words_normalized("Home Depot")

    def test_blank_names_yield_empty_sets(self):
        """Blank input never produces shingles."""
        for strategy in SHINGLE_STRATEGIES.values():
            assert strategy("   ") == set()
            assert strategy("") == set()

    def test_registry_names(self):
        """All four strategies are registered."""
        assert set(SHINGLE_STRATEGIES) == {"chars", "words", "words-normalized", "hybrid"}
