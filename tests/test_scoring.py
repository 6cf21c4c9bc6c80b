"""
Tests for similarity scorers.
"""

import pytest

from pipelines.entity_resolution.scoring import (
    SIMILARITY_SCORERS,
    combined_scorer,
    dice_scorer,
    get_scorer,
    jaccard_scorer,
    jaro_winkler_scorer,
    levenshtein_scorer,
)


class TestScorers:
    """Test each pairwise scorer."""

    def test_jaro_winkler_prefix_weighted(self):
        """Shared prefixes push Jaro-Winkler close to 1."""
        assert jaro_winkler_scorer.compare("Walmart", "Wal-Mart") == pytest.approx(0.9708, abs=1e-3)

    def test_levenshtein_normalized(self):
        """One edit over four characters scores 0.75."""
        assert levenshtein_scorer.compare("Acme", "Acne") == pytest.approx(0.75)

    def test_dice_bigram_overlap(self):
        """One shared bigram out of four per side."""
        assert dice_scorer.compare("night", "nacht") == pytest.approx(0.25)

    def test_dice_ignores_whitespace(self):
        """Spacing differences alone give a perfect Dice score."""
        assert dice_scorer.compare("Home Depot", "HomeDepot") == 1.0

    def test_dice_short_strings(self):
        """Strings shorter than a bigram score 0 unless identical."""
        assert dice_scorer.compare("X", "Xy") == 0.0

    def test_jaccard_tokens(self):
        """Jaccard uses normalized word tokens."""
        assert jaccard_scorer.compare("a b c", "a b c") == 1
        assert jaccard_scorer.compare("a b", "") == 0
        assert jaccard_scorer.compare("Home Depot", "Home Goods") == pytest.approx(1 / 3)

    def test_combined_is_mean(self):
        """Combined is the mean of Jaro-Winkler, Levenshtein and Dice."""
        a, b = "Starbucks", "Starbuck's Coffee"
        expected = (
            jaro_winkler_scorer.compare(a, b)
            + levenshtein_scorer.compare(a, b)
            + dice_scorer.compare(a, b)
        ) / 3
        assert combined_scorer.compare(a, b) == pytest.approx(expected)

    @pytest.mark.parametrize("scorer", SIMILARITY_SCORERS, ids=lambda s: s.name)
    def test_empty_side_scores_zero(self, scorer):
        """A side that is empty after normalization scores 0."""
        assert scorer.compare("Walmart", "") == 0
        assert scorer.compare("", "Walmart") == 0
        assert scorer.compare("The Inc.", "Walmart") == 0

    @pytest.mark.parametrize("scorer", SIMILARITY_SCORERS, ids=lambda s: s.name)
    def test_scores_in_unit_interval(self, scorer):
        """Scores stay within [0, 1]."""
        pairs = [("Walmart", "Wal-Mart"), ("Target", "Walmart"), ("Acme", "Acme Corp")]
        for a, b in pairs:
            assert 0.0 <= scorer.compare(a, b) <= 1.0

    @pytest.mark.parametrize("scorer", SIMILARITY_SCORERS, ids=lambda s: s.name)
    def test_identical_names_score_one(self, scorer):
        """Identical names score 1."""
        assert scorer.compare("Home Depot", "Home Depot") == pytest.approx(1.0)


class TestScorerRegistry:
    """Test registry lookups."""

    def test_registry_names(self):
        """All five scorers are registered."""
        assert [s.name for s in SIMILARITY_SCORERS] == [
            "jaro-winkler", "levenshtein", "dice-coefficient", "jaccard", "combined",
        ]

    def test_lookup(self):
        """Scorers can be looked up by name."""
        assert get_scorer("jaccard") is jaccard_scorer

    def test_unknown_name(self):
        """Unknown names raise KeyError."""
        with pytest.raises(KeyError):
            get_scorer("cosine")
