"""
Key Generators for Entity Resolution.

Responsibilities:
- Map a company name to a short deterministic code.
- Expose every generator through one registry.

Non-Responsibilities:
- No pairwise scoring.
- No match decisions.

Invariant:
The same name always produces the same key. A name that is empty after
normalization produces "", and "" never counts as a key match.
"""

from dataclasses import dataclass
from typing import Callable, List

import jellyfish
from metaphone import doublemetaphone

from employermatch.normalize import normalize_for_phonetic, normalized_key

KEY_SEPARATOR = "|"


@dataclass(frozen=True)
class KeyGenerator:
    name: str
    description: str
    generate_key: Callable[[str], str]


def _per_word_key(name: str, encode: Callable[[str], str]) -> str:
    normalized = normalize_for_phonetic(name)
    if not normalized:
        return ""
    return KEY_SEPARATOR.join(encode(word) for word in normalized.split())


def double_metaphone_key(name: str) -> str:
    """Primary double-metaphone code of each word, joined with "|"."""
    return _per_word_key(name, lambda word: doublemetaphone(word)[0] or "")


def soundex_key(name: str) -> str:
    return _per_word_key(name, jellyfish.soundex)


double_metaphone_generator = KeyGenerator(
    name="double-metaphone",
    description="Phonetic key based on pronunciation",
    generate_key=double_metaphone_key,
)

soundex_generator = KeyGenerator(
    name="soundex",
    description="Classic phonetic algorithm",
    generate_key=soundex_key,
)

# Baseline: measures how much normalization alone buys over phonetic encoding
normalized_key_generator = KeyGenerator(
    name="normalized",
    description="Normalized string with suffixes removed",
    generate_key=normalized_key,
)

KEY_GENERATORS: List[KeyGenerator] = [
    double_metaphone_generator,
    soundex_generator,
    normalized_key_generator,
]


def keys_match(key_a: str, key_b: str) -> bool:
    return key_a != "" and key_b != "" and key_a == key_b


def get_key_generator(name: str) -> KeyGenerator:
    for generator in KEY_GENERATORS:
        if generator.name == name:
            return generator
    known = ", ".join(g.name for g in KEY_GENERATORS)
    raise KeyError(f"Unknown key generator '{name}'. Known: {known}")
