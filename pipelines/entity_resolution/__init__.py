from .candidate_selector import (
    BlockingIndex,
    are_blocking_candidates,
    build_blocking_index,
    find_candidates,
    generate_blocking_keys,
    merge_blocking_indices,
    minhash_blocking,
    signature_to_blocking_keys,
)
from .features import (
    SHINGLE_STRATEGIES,
    shingle,
    shingle_chars,
    shingle_hybrid,
    shingle_words,
    shingle_words_normalized,
)
from .keys import KEY_GENERATORS, KeyGenerator, get_key_generator
from .minhash import (
    DEFAULT_CONFIG,
    WORD_SHINGLE_CONFIG,
    LengthMismatch,
    MinHashConfig,
    compute_signature,
    estimate_similarity,
)
from .resolver import MatchResult, hybrid_match, match_by_key, match_by_score, resolve_batch
from .scoring import SIMILARITY_SCORERS, SimilarityScorer, get_scorer, jaccard_scorer
