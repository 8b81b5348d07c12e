"""Fixed point values and thresholds used by the inspector."""

from __future__ import annotations

# Points credited to a key each time it is found in a trained document.
KEY_WORD_POINTS = 100.0
KEY_REGEX_POINTS = 90.0
KEY_PATTERN_POINTS = 80.0

# Minimum corpus-wide average TF-IDF for a candidate to become a suggestion.
TFIDF_LIMIT = 0.50

# Maximum in-document frequency ratio for a neighbour to be a candidate.
TF_LIMIT = 0.15

# Normalised edit distance at or below which two words are "similar".
SIMILAR_WORD_RATIO = 0.30

# Neighbour offsets scanned around each key occurrence.
NEIGHBOR_OFFSETS: tuple[int, ...] = (-2, -1, 1, 2)

__all__ = [
    "KEY_WORD_POINTS",
    "KEY_REGEX_POINTS",
    "KEY_PATTERN_POINTS",
    "TFIDF_LIMIT",
    "TF_LIMIT",
    "SIMILAR_WORD_RATIO",
    "NEIGHBOR_OFFSETS",
]
