"""
Similarity Scoring for Entity Resolution.

Responsibilities:
- Compute a deterministic similarity in [0, 1] between two company names.
- Expose every scorer through one registry.

Non-Responsibilities:
- No candidate selection.
- No threshold decisions.

Invariant:
Given identical inputs, every scorer returns the same score.
A name that is empty after normalization scores 0 against anything.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Callable, List

from rapidfuzz.distance import JaroWinkler, Levenshtein

from employermatch.normalize import normalize_company, tokenize


@dataclass(frozen=True)
class SimilarityScorer:
    name: str
    description: str
    compare: Callable[[str, str], float]


def jaro_winkler_similarity(a: str, b: str) -> float:
    norm_a = normalize_company(a)
    norm_b = normalize_company(b)
    if not norm_a or not norm_b:
        return 0.0
    return JaroWinkler.similarity(norm_a, norm_b, prefix_weight=0.1)


def levenshtein_similarity(a: str, b: str) -> float:
    """1 - edit distance / length of the longer normalized name."""
    norm_a = normalize_company(a)
    norm_b = normalize_company(b)
    if not norm_a or not norm_b:
        return 0.0
    distance = Levenshtein.distance(norm_a, norm_b)
    return 1 - distance / max(len(norm_a), len(norm_b))


def _bigrams(s: str) -> Counter:
    return Counter(s[i:i + 2] for i in range(len(s) - 1))


def dice_coefficient(a: str, b: str) -> float:
    """
    Sørensen-Dice coefficient over character bigrams.

    Whitespace is ignored and bigrams are counted as a multiset, so
    repeated bigrams only match as often as they occur on both sides.
    """
    norm_a = normalize_company(a)
    norm_b = normalize_company(b)
    if not norm_a or not norm_b:
        return 0.0

    first = "".join(norm_a.split())
    second = "".join(norm_b.split())
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    shared = sum((_bigrams(first) & _bigrams(second)).values())
    return 2.0 * shared / (len(first) + len(second) - 2)


def jaccard_similarity(a: str, b: str) -> float:
    tokens_a = set(tokenize(a))
    tokens_b = set(tokenize(b))
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / len(tokens_a | tokens_b)


jaro_winkler_scorer = SimilarityScorer(
    name="jaro-winkler",
    description="Edit distance weighted toward prefix matches",
    compare=jaro_winkler_similarity,
)

levenshtein_scorer = SimilarityScorer(
    name="levenshtein",
    description="Edit distance normalized to 0-1",
    compare=levenshtein_similarity,
)

dice_scorer = SimilarityScorer(
    name="dice-coefficient",
    description="Bigram overlap similarity (Sørensen-Dice)",
    compare=dice_coefficient,
)

jaccard_scorer = SimilarityScorer(
    name="jaccard",
    description="Set-based token similarity",
    compare=jaccard_similarity,
)


def combined_similarity(a: str, b: str) -> float:
    return (
        jaro_winkler_similarity(a, b)
        + levenshtein_similarity(a, b)
        + dice_coefficient(a, b)
    ) / 3


combined_scorer = SimilarityScorer(
    name="combined",
    description="Average of Jaro-Winkler, Levenshtein, and Dice",
    compare=combined_similarity,
)

SIMILARITY_SCORERS: List[SimilarityScorer] = [
    jaro_winkler_scorer,
    levenshtein_scorer,
    dice_scorer,
    jaccard_scorer,
    combined_scorer,
]


def get_scorer(name: str) -> SimilarityScorer:
    for scorer in SIMILARITY_SCORERS:
        if scorer.name == name:
            return scorer
    known = ", ".join(s.name for s in SIMILARITY_SCORERS)
    raise KeyError(f"Unknown similarity scorer '{name}'. Known: {known}")
