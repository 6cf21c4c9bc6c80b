"""
MinHash Signatures for Entity Resolution.

Responsibilities:
- Compress a shingle set into a fixed-length fingerprint whose index-wise
  agreement rate estimates the Jaccard similarity of the underlying sets.
- Define the blocking configuration shared by the signature and banding code.

Non-Responsibilities:
- No shingling.
- No banding or indexing.

Invariant:
Signatures are bit-for-bit reproducible: every arithmetic step wraps at
32 bits exactly as an unsigned 32-bit multiply and logical shift would, so
signatures computed by separate processes or implementations compare equal.
"""

import struct
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

MASK_32 = 0xFFFFFFFF
SIGNATURE_MULTIPLIER = 0x5BD1E995


class LengthMismatch(ValueError):
    """Raised when two signatures of different lengths are compared."""
    pass


@dataclass(frozen=True)
class MinHashConfig:
    num_hashes: int = 128
    bands: int = 16
    shingle_size: int = 3

    @property
    def rows(self) -> int:
        return self.num_hashes // self.bands


DEFAULT_CONFIG = MinHashConfig()

# 2 rows per band; word shingles ignore shingle_size
WORD_SHINGLE_CONFIG = MinHashConfig(num_hashes=64, bands=32, shingle_size=0)


def _code_units(s: str) -> Tuple[int, ...]:
    # UTF-16 code units, so astral characters hash as surrogate pairs
    if s.isascii():
        return tuple(map(ord, s))
    raw = s.encode("utf-16-le", "surrogatepass")
    return struct.unpack(f"<{len(raw) // 2}H", raw)


def hash_with_seed(s: str, seed: int) -> int:
    """
    Seeded 32-bit string hash (MurmurHash2-style mixing).

    Args:
        s: String to hash
        seed: Hash function index

    Returns:
        Unsigned 32-bit hash value
    """
    return _hash_units(_code_units(s), seed)


def _hash_units(units: Sequence[int], seed: int) -> int:
    h = (seed ^ len(units)) & MASK_32
    for unit in units:
        h ^= unit
        h = (h * SIGNATURE_MULTIPLIER) & MASK_32
        h ^= h >> 15
    return h


def compute_signature(shingles: Iterable[str], num_hashes: int) -> List[int]:
    """
    Compute the MinHash signature of a shingle set.

    Position i holds the minimum of hash_with_seed(shingle, i) over all
    shingles. An empty shingle set yields all zeros.

    Args:
        shingles: Shingle strings (duplicates do not change the result)
        num_hashes: Signature length

    Returns:
        List of num_hashes unsigned 32-bit integers
    """
    signature = [None] * num_hashes
    for s in set(shingles):
        units = _code_units(s)
        for i in range(num_hashes):
            h = _hash_units(units, i)
            current = signature[i]
            if current is None or h < current:
                signature[i] = h
    return [0 if v is None else v for v in signature]


def estimate_similarity(sig1: Sequence[int], sig2: Sequence[int]) -> float:
    """
    Estimate Jaccard similarity as the fraction of equal positions.

    Raises:
        LengthMismatch: If the signatures differ in length
    """
    if len(sig1) != len(sig2):
        raise LengthMismatch(
            f"Signatures must have same length ({len(sig1)} != {len(sig2)})"
        )
    if not sig1:
        return 1.0
    matches = sum(1 for a, b in zip(sig1, sig2) if a == b)
    return matches / len(sig1)
