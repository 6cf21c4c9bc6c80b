"""
Tests for the match orchestrator.
"""

import pytest

from pipelines.entity_resolution.keys import double_metaphone_generator, normalized_key_generator
from pipelines.entity_resolution.minhash import WORD_SHINGLE_CONFIG
from pipelines.entity_resolution.resolver import (
    MatchResult,
    hybrid_match,
    hybrid_match_result,
    match_by_key,
    match_by_score,
    resolve_batch,
)
from pipelines.entity_resolution.scoring import jaro_winkler_scorer, levenshtein_scorer


class TestHybridMatch:
    """Test the primary boolean decision."""

    def test_hyphenated_variant_matches(self):
        """Wal-Mart is Walmart."""
        assert hybrid_match("Walmart", "Wal-Mart", 0.85)

    def test_distinct_companies_do_not_match(self):
        """Target is not Walmart."""
        assert not hybrid_match("Target", "Walmart", 0.85)

    def test_default_threshold(self):
        """Default Jaro-Winkler threshold is 0.85."""
        assert hybrid_match("Walmart", "Wal-Mart") == hybrid_match("Walmart", "Wal-Mart", 0.85)

    def test_phonetic_key_match_ignores_threshold(self):
        """Equal phonetic keys match even with an unreachable threshold."""
        assert hybrid_match("Phillips", "Philips", threshold=1.01)

    def test_blank_names_never_match(self):
        """Blank names have empty keys and score 0."""
        assert not hybrid_match("", "   ")

    def test_result_agrees_with_boolean(self):
        """The auditing variant makes the same decision."""
        for a, b in [("Walmart", "Wal-Mart"), ("Target", "Walmart"), ("Phillips", "Philips")]:
            result = hybrid_match_result(a, b)
            assert result.is_match == hybrid_match(a, b)
            assert result.algorithm == "hybrid"


class TestMatchByKey:
    """Test key-based match results."""

    def test_baseline_match_iff_stripped_forms_equal(self):
        """Baseline generator matches exactly when whitespace-free forms agree."""
        assert match_by_key("Home Depot", "HomeDepot", normalized_key_generator).is_match
        assert match_by_key("Wal-Mart", "Walmart Inc.", normalized_key_generator).is_match
        assert not match_by_key("Home Depot", "Home Depot Supply", normalized_key_generator).is_match

    def test_result_fields(self):
        """Result records names, normalized forms and keys."""
        result = match_by_key("The Home Depot", "HomeDepot", normalized_key_generator)
        assert result == MatchResult(
            algorithm="normalized",
            name_a="The Home Depot",
            name_b="HomeDepot",
            normalized_a="home depot",
            normalized_b="homedepot",
            key_a="homedepot",
            key_b="homedepot",
            is_match=True,
        )
        assert result.score is None

    def test_empty_keys_do_not_match(self):
        """Two blank names are not a match."""
        result = match_by_key("", "Inc.", double_metaphone_generator)
        assert result.key_a == "" and result.key_b == ""
        assert not result.is_match


class TestMatchByScore:
    """Test score-based match results."""

    def test_threshold_is_inclusive(self):
        """A score equal to the threshold is a match."""
        score = levenshtein_scorer.compare("Acme", "Acne")
        assert match_by_score("Acme", "Acne", levenshtein_scorer, score).is_match
        assert not match_by_score("Acme", "Acne", levenshtein_scorer, score + 0.01).is_match

    def test_result_fields(self):
        """Result carries the score and no keys."""
        result = match_by_score("Walmart", "Wal-Mart", jaro_winkler_scorer, 0.85)
        assert result.algorithm == "jaro-winkler"
        assert result.score == pytest.approx(jaro_winkler_scorer.compare("Walmart", "Wal-Mart"))
        assert result.key_a is None and result.key_b is None
        assert result.to_dict()["is_match"] is True


class TestResolveBatch:
    """Test batch resolution over a blocking index."""

    def test_finds_variant_pairs(self):
        """Spacing and hyphen variants resolve; unrelated names do not."""
        names = ["Home Depot", "HomeDepot", "Lowes", "Walmart", "Wal-Mart"]
        matches = resolve_batch(names, WORD_SHINGLE_CONFIG)
        assert [(m.name_a, m.name_b) for m in matches] == [
            ("Home Depot", "HomeDepot"),
            ("Wal-Mart", "Walmart"),
        ]

    def test_each_pair_compared_once(self, quiet_logger):
        """Unordered pairs are compared once, duplicates collapsed."""
        resolve_batch(["Walmart", "WALMART Inc.", "Walmart"])
        assert quiet_logger.metrics["comparisons"] == 1
        assert quiet_logger.metrics["matches"] == 1

    def test_empty_batch(self):
        """No names, no matches."""
        assert resolve_batch([]) == []
