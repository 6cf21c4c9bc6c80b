"""
Entity Resolution Orchestrator.

Responsibilities:
- Turn key generators and scorers into explainable match decisions.
- Coordinate candidate selection and pairwise decisions for a batch.

Non-Responsibilities:
- No database access.
- No feature computation.
- No mutation of persistent state.

Invariant:
This module must be deterministic given the same inputs.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from employermatch.logger import get_logger
from employermatch.normalize import normalize_company

from .candidate_selector import build_blocking_index, find_candidates
from .keys import KeyGenerator, double_metaphone_generator, keys_match
from .minhash import DEFAULT_CONFIG, MinHashConfig
from .scoring import SimilarityScorer, jaro_winkler_scorer

HYBRID_ALGORITHM = "hybrid"


@dataclass(frozen=True)
class MatchResult:
    algorithm: str
    name_a: str
    name_b: str
    normalized_a: str
    normalized_b: str
    is_match: bool
    key_a: Optional[str] = None
    key_b: Optional[str] = None
    score: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def match_by_key(a: str, b: str, generator: KeyGenerator) -> MatchResult:
    key_a = generator.generate_key(a)
    key_b = generator.generate_key(b)
    return MatchResult(
        algorithm=generator.name,
        name_a=a,
        name_b=b,
        normalized_a=normalize_company(a),
        normalized_b=normalize_company(b),
        key_a=key_a,
        key_b=key_b,
        is_match=keys_match(key_a, key_b),
    )


def match_by_score(a: str, b: str, scorer: SimilarityScorer, threshold: float) -> MatchResult:
    score = scorer.compare(a, b)
    return MatchResult(
        algorithm=scorer.name,
        name_a=a,
        name_b=b,
        normalized_a=normalize_company(a),
        normalized_b=normalize_company(b),
        score=score,
        is_match=score >= threshold,
    )


def hybrid_match(a: str, b: str, threshold: float = 0.85) -> bool:
    """
    Phonetic key match, falling back to Jaro-Winkler.

    True if both double-metaphone keys are non-empty and equal, or the
    Jaro-Winkler score reaches the threshold.
    """
    key_a = double_metaphone_generator.generate_key(a)
    key_b = double_metaphone_generator.generate_key(b)
    if keys_match(key_a, key_b):
        return True
    return jaro_winkler_scorer.compare(a, b) >= threshold


def hybrid_match_result(a: str, b: str, threshold: float = 0.85) -> MatchResult:
    """Same decision as hybrid_match, with keys and score kept for auditing."""
    key_a = double_metaphone_generator.generate_key(a)
    key_b = double_metaphone_generator.generate_key(b)
    score = jaro_winkler_scorer.compare(a, b)
    return MatchResult(
        algorithm=HYBRID_ALGORITHM,
        name_a=a,
        name_b=b,
        normalized_a=normalize_company(a),
        normalized_b=normalize_company(b),
        key_a=key_a,
        key_b=key_b,
        score=score,
        is_match=keys_match(key_a, key_b) or score >= threshold,
    )


def resolve_batch(
    names: Iterable[str],
    config: MinHashConfig = DEFAULT_CONFIG,
    threshold: float = 0.85,
) -> List[MatchResult]:
    """
    Find matching name pairs in one batch without a full pairwise scan.

    Builds a blocking index over the batch, looks up candidates for each
    name and runs the hybrid decision once per unordered candidate pair.

    Args:
        names: Raw company names (duplicates are collapsed)
        config: MinHash configuration for blocking
        threshold: Jaro-Winkler fallback threshold

    Returns:
        Matching MatchResults, ordered by (name_a, name_b) with name_a < name_b
    """
    logger = get_logger()
    unique = sorted(set(names))
    index = build_blocking_index(unique, config)

    matches: List[MatchResult] = []
    for name in unique:
        for candidate in sorted(find_candidates(name, index, config)):
            if candidate <= name:
                continue
            result = hybrid_match_result(name, candidate, threshold)
            logger.record_comparison(HYBRID_ALGORITHM, result.is_match)
            if result.is_match:
                matches.append(result)

    logger.info(
        "Batch resolved",
        names=len(unique),
        matches=len(matches),
        threshold=threshold,
    )
    return matches
