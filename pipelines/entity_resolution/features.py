"""
Shingle Extraction for Entity Resolution.

Responsibilities:
- Turn a company name into a set of shingles under one of several strategies.
- Provide the default production strategy (word-normalized).

Non-Responsibilities:
- No hashing.
- No normalization rules (delegated to employermatch.normalize).

Invariant:
Shingle sets are a pure function of (name, strategy, n).
A blank name always yields an empty set.
"""

from typing import Callable, Dict, Set

from employermatch.normalize import normalize_company, normalized_key


def shingle_chars(text: str, n: int = 3) -> Set[str]:
    """Character n-grams over the space-padded normalized name.

    Padding captures word boundaries at the start and end of the name.
    """
    normalized = normalize_company(text)
    if not normalized:
        return set()
    padded = f" {normalized} "
    return {padded[i:i + n] for i in range(len(padded) - n + 1)}


def shingle_words(text: str) -> Set[str]:
    return set(normalize_company(text).split())


def shingle_words_normalized(text: str) -> Set[str]:
    """Normalized words plus the whole name with spaces removed.

    The joined form is what lets "Home Depot" and "HomeDepot" share a shingle.
    """
    shingles = shingle_words(text)
    joined = normalized_key(text)
    if joined:
        shingles.add(joined)
    return shingles


def shingle_hybrid(text: str, char_n: int = 3) -> Set[str]:
    """Tagged words ("w:") plus tagged character n-grams of each word ("c:")."""
    shingles: Set[str] = set()
    for word in normalize_company(text).split():
        shingles.add(f"w:{word}")
        for i in range(len(word) - char_n + 1):
            shingles.add(f"c:{word[i:i + char_n]}")
    return shingles


def shingle(text: str, n: int = 3) -> Set[str]:
    # n is accepted for signature compatibility; the default strategy is word-level
    return shingle_words_normalized(text)


SHINGLE_STRATEGIES: Dict[str, Callable[..., Set[str]]] = {
    "chars": shingle_chars,
    "words": shingle_words,
    "words-normalized": shingle_words_normalized,
    "hybrid": shingle_hybrid,
}
