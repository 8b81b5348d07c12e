"""Tokenizer and n-gram helpers used across the inspector."""

from __future__ import annotations

import re
import unicodedata
from typing import List

# Characters that separate tokens. Hyphens, slashes and @ are NOT delimiters
# so identifiers like "003-67-0998" or "a/c" stay in one piece.
DELIMITERS = " ,.!?;'\":\t\n\r(){}"

_SPLIT_RE = re.compile("[" + re.escape(DELIMITERS) + "]")


def normalize_text(text: str) -> str:
    """Apply lightweight NFKC normalisation before tokenizing.

    Visually similar unicode (full-width digits, ligatures) is folded into a
    consistent representation. Case and whitespace are left untouched.
    """
    if not text:
        return ""
    return unicodedata.normalize("NFKC", text)


def tokenize(text: str) -> List[str]:
    """Split text into word tokens on DELIMITERS.

    Empty pieces between consecutive delimiters are dropped; order and
    duplicates are preserved.
    """
    if not text:
        return []
    return [piece for piece in _SPLIT_RE.split(text) if piece]


def ngram(text: str, n: int, pad: str = "") -> List[List[str]]:
    """Return overlapping windows of `n` tokens.

    Args:
        text: Raw text, tokenized with `tokenize`.
        n: Window size. Must be >= 1.
        pad: Filler for missing context. When non-empty, n-1 left-padded
            windows are prepended and n-1 right-padded windows appended.

    Returns:
        A list of windows. Text with fewer than `n` tokens yields [].
    """
    if n < 1:
        raise ValueError(f"n must be a positive integer, got {n}")

    tokens = tokenize(text)
    if len(tokens) < n:
        return []

    if pad:
        filler = [pad] * (n - 1)
        tokens = filler + tokens + filler

    return [tokens[i:i + n] for i in range(len(tokens) - n + 1)]
