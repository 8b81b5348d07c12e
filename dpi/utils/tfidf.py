"""
Token frequency and TF-IDF computation.

Documents are represented as frequency vectors: ``[(token, count), ...]``
as produced by `frequency_counts_as_vec` (a ``{token: count}`` mapping is
accepted too). Counting is a numpy group-by so ordering is deterministic:
ranked vectors sort by count descending, then token ascending.
"""

from __future__ import annotations

import math
from typing import Dict, List, Mapping, Sequence, Tuple, Union

import numpy as np

FrequencyVector = List[Tuple[str, int]]
FrequencyDoc = Union[Sequence[Tuple[str, int]], Mapping[str, int]]

# Weight of the raw frequency in augmented TF: tf = K + (1 - K) * count / max.
TF_NORMALIZATION_K = 0.5


def _group_counts(tokens: Sequence[str]) -> tuple[np.ndarray, np.ndarray]:
    """Unique tokens (ascending) and their counts.

    An object array keeps each token exactly; fixed-width unicode arrays
    strip trailing NUL characters.
    """
    values, counts = np.unique(np.array(list(tokens), dtype=object), return_counts=True)
    return values, counts


def frequency_counts_as_vec(tokens: Sequence[str]) -> FrequencyVector:
    """Count tokens and rank them by count desc, then token asc."""
    if len(tokens) == 0:
        return []

    values, counts = _group_counts(tokens)
    # values are already ascending, a stable sort keeps that order within ties.
    order = np.argsort(-counts, kind="stable")
    return [(str(values[i]), int(counts[i])) for i in order]


def frequency_counts(tokens: Sequence[str]) -> Dict[str, int]:
    """Count tokens; keys are in ascending token order."""
    if len(tokens) == 0:
        return {}

    values, counts = _group_counts(tokens)
    return {str(v): int(c) for v, c in zip(values, counts)}


def _as_mapping(doc: FrequencyDoc) -> Mapping[str, int]:
    return doc if isinstance(doc, Mapping) else dict(doc)


def term_frequency(term: str, doc: FrequencyDoc) -> float:
    """Augmented term frequency of `term` in `doc`.

    ``0.5 + 0.5 * count / max_count``; a term missing from a non-empty
    document scores the 0.5 floor and an empty document scores 0.0.
    """
    counts = _as_mapping(doc)
    if not counts:
        return 0.0
    max_count = max(counts.values())
    return TF_NORMALIZATION_K + (1.0 - TF_NORMALIZATION_K) * (counts.get(term, 0) / max_count)


def inverse_document_frequency(term: str, docs: Sequence[FrequencyDoc]) -> float:
    """Natural-log IDF: ``ln(len(docs) / docs containing term)``; 0.0 if unseen."""
    containing = sum(1 for doc in docs if _as_mapping(doc).get(term, 0) > 0)
    if containing == 0:
        return 0.0
    return math.log(len(docs) / containing)


def tfidf(term: str, doc_index: int, docs: Sequence[FrequencyDoc]) -> float:
    """TF-IDF of `term` in ``docs[doc_index]`` relative to the whole collection."""
    if not 0 <= doc_index < len(docs):
        raise IndexError(f"doc_index {doc_index} out of range for {len(docs)} documents")
    return term_frequency(term, docs[doc_index]) * inverse_document_frequency(term, docs)


def average_tfidf(term: str, docs: Sequence[FrequencyDoc]) -> float:
    """Mean TF-IDF of `term` across every document of the collection."""
    if not docs:
        return 0.0
    total = 0.0
    for idx in range(len(docs)):
        total += tfidf(term, idx, docs)
    return total / len(docs)


__all__ = [
    "FrequencyVector",
    "frequency_counts_as_vec",
    "frequency_counts",
    "term_frequency",
    "inverse_document_frequency",
    "tfidf",
    "average_tfidf",
]
