"""
Runtime configuration for matching runs.

Configuration is a plain value built once by the caller (usually the CLI)
and passed explicitly into every engine call.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from pipelines.entity_resolution.minhash import DEFAULT_CONFIG, MinHashConfig

DEFAULT_JARO_THRESHOLD = 0.85
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class MatchSettings:
    minhash: MinHashConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    jaro_threshold: float = DEFAULT_JARO_THRESHOLD
    log_level: str = "INFO"


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    return int(raw) if raw else default


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key, "").strip()
    return float(raw) if raw else default


def _env_log_level(env: Mapping[str, str], key: str, default: str) -> str:
    raw = env.get(key, "").strip().upper()
    if not raw:
        return default
    if raw not in LOG_LEVELS:
        raise ValueError(f"{key} must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return raw


def load_config(env: Optional[Mapping[str, str]] = None) -> MatchSettings:
    """
    Build settings from MATCH_* environment variables.

    Args:
        env: Mapping to read from (default: os.environ)

    Returns:
        MatchSettings with defaults for any unset variable

    Raises:
        ValueError: If a numeric variable holds non-numeric text, or
            MATCH_LOG_LEVEL is not a logging level name
    """
    if env is None:
        env = os.environ

    minhash = MinHashConfig(
        num_hashes=_env_int(env, "MATCH_NUM_HASHES", DEFAULT_CONFIG.num_hashes),
        bands=_env_int(env, "MATCH_BANDS", DEFAULT_CONFIG.bands),
        shingle_size=_env_int(env, "MATCH_SHINGLE_SIZE", DEFAULT_CONFIG.shingle_size),
    )
    return MatchSettings(
        minhash=minhash,
        jaro_threshold=_env_float(env, "MATCH_JARO_THRESHOLD", DEFAULT_JARO_THRESHOLD),
        log_level=_env_log_level(env, "MATCH_LOG_LEVEL", "INFO"),
    )
