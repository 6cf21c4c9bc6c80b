"""
Candidate Selection Logic (MinHash LSH blocking).

Responsibilities:
- Derive a fixed number of blocking keys per name by banding its signature.
- Build an inverted index from blocking key to names for one batch.
- Select a bounded set of candidate names for comparison.

Non-Responsibilities:
- No scoring.
- No similarity computation beyond the signature itself.
- No resolution decisions.

Invariant:
A non-blank name yields exactly `bands` keys; a blank name yields none.
Keys carry their band index, so keys from different bands never collide.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Set

from employermatch.logger import get_logger

from .features import shingle
from .minhash import DEFAULT_CONFIG, MASK_32, MinHashConfig, compute_signature

BAND_MULTIPLIER = 0x9E3779B9
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

BlockingIndex = Dict[str, Set[str]]


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def hash_band(values: Sequence[int]) -> str:
    """Order-sensitive 32-bit mix of one band, rendered in base 36."""
    h = 0
    for value in values:
        h ^= value
        h = (h * BAND_MULTIPLIER) & MASK_32
        h ^= h >> 16
    return _to_base36(h)


def signature_to_blocking_keys(signature: Sequence[int], bands: int) -> List[str]:
    """
    Split a signature into bands and hash each band into a key.

    Rows per band is len(signature) // bands; positions past
    bands * rows are not used by any band.
    """
    rows = len(signature) // bands
    keys = []
    for b in range(bands):
        start = b * rows
        keys.append(f"b{b}_{hash_band(signature[start:start + rows])}")
    return keys


def generate_blocking_keys(name: str, config: MinHashConfig = DEFAULT_CONFIG) -> List[str]:
    if not name or not name.strip():
        return []
    shingles = shingle(name, config.shingle_size)
    if not shingles:
        return []
    signature = compute_signature(shingles, config.num_hashes)
    return signature_to_blocking_keys(signature, config.bands)


def are_blocking_candidates(
    name1: str,
    name2: str,
    config: MinHashConfig = DEFAULT_CONFIG,
) -> bool:
    """True if the two names share at least one blocking key."""
    keys1 = set(generate_blocking_keys(name1, config))
    return any(k in keys1 for k in generate_blocking_keys(name2, config))


def build_blocking_index(
    names: Iterable[str],
    config: MinHashConfig = DEFAULT_CONFIG,
) -> BlockingIndex:
    """
    Build an inverted index from blocking key to the names carrying it.

    Args:
        names: Raw company names for one batch
        config: MinHash configuration

    Returns:
        Dict of blocking key -> set of raw names. Blank names are left out.
    """
    logger = get_logger()
    index: BlockingIndex = {}
    indexed = skipped = 0

    for name in names:
        keys = generate_blocking_keys(name, config)
        if not keys:
            skipped += 1
            continue
        indexed += 1
        for key in keys:
            index.setdefault(key, set()).add(name)

    logger.record_index_build(indexed, skipped)
    logger.debug(
        "Blocking index built",
        names_indexed=indexed,
        blank_names_skipped=skipped,
        buckets=len(index),
        num_hashes=config.num_hashes,
        bands=config.bands,
    )
    return index


def find_candidates(
    name: str,
    index: BlockingIndex,
    config: MinHashConfig = DEFAULT_CONFIG,
) -> Set[str]:
    """
    Union of the index buckets for the name's own blocking keys.

    The query name itself is never part of the result.
    """
    candidates: Set[str] = set()
    for key in generate_blocking_keys(name, config):
        bucket = index.get(key)
        if bucket:
            candidates |= bucket
    candidates.discard(name)

    get_logger().record_candidate_query(len(candidates))
    return candidates


def merge_blocking_indices(*indices: BlockingIndex) -> BlockingIndex:
    """
    Merge partial indices built by separate workers.

    Same-key buckets are unioned; the inputs are left untouched.
    """
    merged: BlockingIndex = {}
    for index in indices:
        for key, bucket in index.items():
            merged.setdefault(key, set()).update(bucket)
    return merged


@dataclass(frozen=True)
class BlockingStrategy:
    name: str
    description: str
    generate_keys: Callable[..., List[str]]
    are_matches: Callable[..., bool]


minhash_blocking = BlockingStrategy(
    name="minhash-lsh",
    description="MinHash LSH blocking keys (multiple keys per name)",
    generate_keys=generate_blocking_keys,
    are_matches=are_blocking_candidates,
)
