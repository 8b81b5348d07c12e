"""
Global settings and configuration helpers for DPI.

This module loads the runtime configuration for the inspector: key point
values, suggestion thresholds, parallelism and debug switches. Values are
frozen into a Settings object so a training run is reproducible; callers
that need different values construct their own Settings and pass it in
explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dpi.config.constants import (
    KEY_PATTERN_POINTS,
    KEY_REGEX_POINTS,
    KEY_WORD_POINTS,
    NEIGHBOR_OFFSETS,
    SIMILAR_WORD_RATIO,
    TF_LIMIT,
    TFIDF_LIMIT,
)

# ------------------------------------------------------------
# Settings Dataclass
# ------------------------------------------------------------

@dataclass(frozen=True)
class Settings:
    """Centralised, immutable configuration object."""

    # Key point values
    key_word_points: float = KEY_WORD_POINTS
    key_regex_points: float = KEY_REGEX_POINTS
    key_pattern_points: float = KEY_PATTERN_POINTS

    # Suggestion thresholds
    tfidf_limit: float = TFIDF_LIMIT
    tf_limit: float = TF_LIMIT
    similar_word_ratio: float = SIMILAR_WORD_RATIO
    neighbor_offsets: tuple[int, ...] = field(default=NEIGHBOR_OFFSETS)

    # Worker threads for classification and per-document counting
    n_jobs: int = 1

    # Reference key library
    reference_library_path: Path = Path(__file__).resolve().parent / "reference_library.yaml"

    # Debug/logging flags
    debug_training: bool = False

    def __post_init__(self) -> None:
        points = (self.key_word_points, self.key_regex_points, self.key_pattern_points)
        # train_from_keys dispatches groups by weight, so weights must be distinct.
        if len(set(points)) != len(points):
            raise ValueError(f"Key point values must be distinct, got {points}")
        if any(p < 0 for p in points):
            raise ValueError(f"Key point values cannot be negative, got {points}")
        if not 0.0 <= self.tf_limit <= 1.0:
            raise ValueError(f"tf_limit must be within [0, 1], got {self.tf_limit}")
        if self.n_jobs == 0:
            raise ValueError("n_jobs cannot be 0")


# ------------------------------------------------------------
# Global settings cache
# ------------------------------------------------------------

_SETTINGS: Optional[Settings] = None


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------

def _env_flag(key: str) -> bool:
    return os.getenv(key, "").lower() in {"1", "true", "yes", "on"}


def _env_path(key: str, default: Path) -> Path:
    """Resolve a path from environment or fall back to default."""
    value = os.getenv(key)
    return Path(value).expanduser() if value else default


# ------------------------------------------------------------
# Load Settings
# ------------------------------------------------------------

def _load_settings() -> Settings:
    defaults = Settings()

    return Settings(
        n_jobs=int(os.getenv("DPI_N_JOBS", "1")),
        reference_library_path=_env_path("DPI_REFERENCE_PATH", defaults.reference_library_path),
        debug_training=_env_flag("DPI_DEBUG_TRAINING"),
    )


# ------------------------------------------------------------
# Public Settings Getter
# ------------------------------------------------------------

def get_settings() -> Settings:
    """Return a cached Settings instance."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = _load_settings()
    return _SETTINGS


def reset_settings() -> None:
    """Drop the cached Settings so the next call re-reads the environment."""
    global _SETTINGS
    _SETTINGS = None
