from typing import Any, Dict, List, Tuple

PAIR_LIST_FIELDS = ["true_matches", "true_non_matches"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_pair(v: Any) -> bool:
    return isinstance(v, (list, tuple)) and len(v) == 2 and all(_is_non_empty_str(x) for x in v)


def validate_dataset(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages for a labeled-pair dataset.
    Empty list means valid.

    Expected shape:
        {"description": str, "true_matches": [[a, b], ...], "true_non_matches": [[a, b], ...]}
    """
    errors: List[str] = []

    if not isinstance(data, dict):
        return ["Dataset must be a JSON object"]

    if "description" in data and not isinstance(data["description"], str):
        errors.append("Field 'description' must be a string if provided")

    for f in PAIR_LIST_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
            continue
        pairs = data[f]
        if not isinstance(pairs, list):
            errors.append(f"Field '{f}' must be a list of name pairs")
            continue
        for i, pair in enumerate(pairs):
            if not _is_pair(pair):
                errors.append(f"Field '{f}' item {i} must be a pair of non-empty strings")

    if not errors and not any(data[f] for f in PAIR_LIST_FIELDS):
        errors.append("Dataset must contain at least one labeled pair")

    return errors


def validate_dataset_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """
    Strict validation: structural checks plus label consistency.

    Rejects pairs listed twice and pairs labeled both match and non-match
    (order of the two names does not matter).
    """
    errors = validate_dataset(data)
    if errors:
        return False, errors

    seen: Dict[frozenset, str] = {}
    for f in PAIR_LIST_FIELDS:
        for a, b in data[f]:
            key = frozenset((a, b))
            if key in seen:
                if seen[key] == f:
                    errors.append(f"Duplicate pair in '{f}': {a!r} / {b!r}")
                else:
                    errors.append(f"Pair labeled both match and non-match: {a!r} / {b!r}")
            else:
                seen[key] = f

    return len(errors) == 0, errors


def load_pairs(data: Dict[str, Any]) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
    """Split a validated dataset into (true_matches, true_non_matches)."""
    return (
        [(a, b) for a, b in data["true_matches"]],
        [(a, b) for a, b in data["true_non_matches"]],
    )
