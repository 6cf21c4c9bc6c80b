"""
Evaluation of Matching Strategies.

Responsibilities:
- Score every key generator, scorer, the hybrid rule and MinHash blocking
  against a labeled set of match / non-match pairs.
- Report precision, recall, F1 and accuracy, plus the misclassified pairs.

Non-Responsibilities:
- No dataset loading or validation (see employermatch.schema).
- No tuning of production defaults.

Invariant:
Evaluation is read-only over the strategies: running it twice on the same
dataset yields identical reports.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from employermatch.logger import get_logger
from pipelines.entity_resolution.candidate_selector import generate_blocking_keys
from pipelines.entity_resolution.features import shingle
from pipelines.entity_resolution.keys import KEY_GENERATORS, KeyGenerator
from pipelines.entity_resolution.minhash import MinHashConfig, compute_signature, estimate_similarity
from pipelines.entity_resolution.resolver import (
    HYBRID_ALGORITHM,
    MatchResult,
    hybrid_match_result,
    match_by_key,
    match_by_score,
)
from pipelines.entity_resolution.scoring import SIMILARITY_SCORERS, SimilarityScorer

Pair = Tuple[str, str]

DEFAULT_THRESHOLDS = (0.7, 0.75, 0.8, 0.85, 0.9, 0.95)
DEFAULT_HASH_OPTIONS = (32, 64, 128)
DEFAULT_BAND_OPTIONS = (4, 8, 16, 32)

# (precision, recall) a strategy must reach to be recommended
MATCH_TARGETS = (0.9, 0.8)
BLOCKING_TARGETS = (0.9, 0.7)


@dataclass
class PairOutcome:
    pair: Pair
    expected: bool
    predicted: bool
    score: Optional[float] = None
    key_a: Optional[str] = None
    key_b: Optional[str] = None
    shared_keys: Optional[int] = None

    @property
    def correct(self) -> bool:
        return self.expected == self.predicted


@dataclass
class EvaluationResult:
    algorithm: str
    true_positives: int
    false_positives: int
    true_negatives: int
    false_negatives: int
    precision: float
    recall: float
    f1_score: float
    accuracy: float
    threshold: Optional[float] = None
    config: Optional[MinHashConfig] = None
    details: List[PairOutcome] = field(default_factory=list, repr=False)

    @property
    def label(self) -> str:
        if self.config is not None:
            return f"{self.algorithm} {self.config.num_hashes}h/{self.config.bands}b"
        if self.threshold is not None:
            return f"{self.algorithm} @{self.threshold}"
        return self.algorithm


def calculate_metrics(tp: int, fp: int, tn: int, fn: int) -> Dict[str, float]:
    """Precision, recall, F1 and accuracy; 0 wherever the denominator is 0."""
    precision = tp / (tp + fp) if tp + fp > 0 else 0.0
    recall = tp / (tp + fn) if tp + fn > 0 else 0.0
    f1_score = 2 * precision * recall / (precision + recall) if precision + recall > 0 else 0.0
    total = tp + fp + tn + fn
    accuracy = (tp + tn) / total if total > 0 else 0.0
    return {
        "precision": precision,
        "recall": recall,
        "f1_score": f1_score,
        "accuracy": accuracy,
    }


def _tally(
    algorithm: str,
    outcomes: List[PairOutcome],
    threshold: Optional[float] = None,
    config: Optional[MinHashConfig] = None,
) -> EvaluationResult:
    tp = sum(1 for o in outcomes if o.expected and o.predicted)
    fn = sum(1 for o in outcomes if o.expected and not o.predicted)
    fp = sum(1 for o in outcomes if not o.expected and o.predicted)
    tn = sum(1 for o in outcomes if not o.expected and not o.predicted)
    return EvaluationResult(
        algorithm=algorithm,
        true_positives=tp,
        false_positives=fp,
        true_negatives=tn,
        false_negatives=fn,
        threshold=threshold,
        config=config,
        details=outcomes,
        **calculate_metrics(tp, fp, tn, fn),
    )


def _labeled(true_matches: Sequence[Pair], true_non_matches: Sequence[Pair]):
    for a, b in true_matches:
        yield a, b, True
    for a, b in true_non_matches:
        yield a, b, False


def _outcome(result: MatchResult, expected: bool) -> PairOutcome:
    return PairOutcome(
        pair=(result.name_a, result.name_b),
        expected=expected,
        predicted=result.is_match,
        score=result.score,
        key_a=result.key_a,
        key_b=result.key_b,
    )


def evaluate_key_generator(
    generator: KeyGenerator,
    true_matches: Sequence[Pair],
    true_non_matches: Sequence[Pair],
) -> EvaluationResult:
    outcomes = [
        _outcome(match_by_key(a, b, generator), expected)
        for a, b, expected in _labeled(true_matches, true_non_matches)
    ]
    return _tally(generator.name, outcomes)


def evaluate_scorer(
    scorer: SimilarityScorer,
    true_matches: Sequence[Pair],
    true_non_matches: Sequence[Pair],
    threshold: float,
) -> EvaluationResult:
    outcomes = [
        _outcome(match_by_score(a, b, scorer, threshold), expected)
        for a, b, expected in _labeled(true_matches, true_non_matches)
    ]
    return _tally(scorer.name, outcomes, threshold=threshold)


def evaluate_hybrid(
    true_matches: Sequence[Pair],
    true_non_matches: Sequence[Pair],
    threshold: float = 0.85,
) -> EvaluationResult:
    outcomes = [
        _outcome(hybrid_match_result(a, b, threshold), expected)
        for a, b, expected in _labeled(true_matches, true_non_matches)
    ]
    return _tally(HYBRID_ALGORITHM, outcomes, threshold=threshold)


def _blocking_outcome(a: str, b: str, expected: bool, config: MinHashConfig) -> PairOutcome:
    keys_a = set(generate_blocking_keys(a, config))
    shared = sum(1 for k in generate_blocking_keys(b, config) if k in keys_a)
    sig_a = compute_signature(shingle(a, config.shingle_size), config.num_hashes)
    sig_b = compute_signature(shingle(b, config.shingle_size), config.num_hashes)
    return PairOutcome(
        pair=(a, b),
        expected=expected,
        predicted=shared > 0,
        score=estimate_similarity(sig_a, sig_b),
        shared_keys=shared,
    )


def evaluate_blocking(
    true_matches: Sequence[Pair],
    true_non_matches: Sequence[Pair],
    config: MinHashConfig,
) -> EvaluationResult:
    """
    Treat "shares a blocking key" as the prediction for each pair.

    Each outcome records the number of shared blocking keys and, as its
    score, the signature-estimated Jaccard similarity of the two names.
    """
    outcomes = [
        _blocking_outcome(a, b, expected, config)
        for a, b, expected in _labeled(true_matches, true_non_matches)
    ]
    return _tally("minhash-lsh", outcomes, config=config)


def grid_search_blocking(
    true_matches: Sequence[Pair],
    true_non_matches: Sequence[Pair],
    hash_options: Sequence[int] = DEFAULT_HASH_OPTIONS,
    band_options: Sequence[int] = DEFAULT_BAND_OPTIONS,
    shingle_size: int = 0,
) -> List[EvaluationResult]:
    """
    Evaluate blocking over a grid of (num_hashes, bands).

    Only configurations where bands divides num_hashes are tried.
    Results are sorted by F1, best first.
    """
    results = []
    for num_hashes in hash_options:
        for bands in band_options:
            if num_hashes % bands != 0:
                continue
            config = MinHashConfig(num_hashes=num_hashes, bands=bands, shingle_size=shingle_size)
            results.append(evaluate_blocking(true_matches, true_non_matches, config))
    return sorted(results, key=lambda r: r.f1_score, reverse=True)


def run_evaluation(
    true_matches: Sequence[Pair],
    true_non_matches: Sequence[Pair],
    thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
) -> List[EvaluationResult]:
    """
    Evaluate every registered key generator, every scorer at each
    threshold, and the hybrid rule at each threshold.

    Returns:
        All results sorted by F1, best first
    """
    logger = get_logger()
    logger.info(
        "Evaluating matching strategies",
        true_matches=len(true_matches),
        true_non_matches=len(true_non_matches),
    )

    results = [
        evaluate_key_generator(generator, true_matches, true_non_matches)
        for generator in KEY_GENERATORS
    ]
    for scorer in SIMILARITY_SCORERS:
        for threshold in thresholds:
            results.append(evaluate_scorer(scorer, true_matches, true_non_matches, threshold))
    for threshold in thresholds:
        results.append(evaluate_hybrid(true_matches, true_non_matches, threshold))

    results.sort(key=lambda r: r.f1_score, reverse=True)
    logger.debug("Evaluation complete", results=len(results), best=results[0].label if results else None)
    return results


def error_analysis(result: EvaluationResult, limit: int = 10) -> Dict[str, List[PairOutcome]]:
    """Misclassified pairs, split into false negatives and false positives."""
    errors = [o for o in result.details if not o.correct]
    return {
        "false_negatives": [o for o in errors if o.expected][:limit],
        "false_positives": [o for o in errors if not o.expected][:limit],
    }


def meets_targets(result: EvaluationResult, precision: float, recall: float) -> bool:
    return result.precision >= precision and result.recall >= recall


def results_meeting_targets(
    results: Sequence[EvaluationResult],
    targets: Tuple[float, float] = MATCH_TARGETS,
) -> List[EvaluationResult]:
    """Results reaching both target precision and recall, best F1 first."""
    precision, recall = targets
    passing = [r for r in results if meets_targets(r, precision, recall)]
    return sorted(passing, key=lambda r: r.f1_score, reverse=True)


def format_report(results: Sequence[EvaluationResult], title: str) -> str:
    lines = ["=" * 80, title, "=" * 80, ""]
    lines.append(f"{'Algorithm':<35} {'Precision':>10} {'Recall':>10} {'F1':>10} {'Accuracy':>10}")
    lines.append("-" * 80)
    for r in results:
        lines.append(
            f"{r.label[:35]:<35} {r.precision:>10.1%} {r.recall:>10.1%} "
            f"{r.f1_score:>10.1%} {r.accuracy:>10.1%}"
        )
    lines.append("-" * 80)
    return "\n".join(lines)
