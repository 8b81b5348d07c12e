"""
Structural pattern classifier.

Every character is mapped to one of nine symbolic classes so a token can be
compared by *shape* rather than content, e.g. "Hello World" -> "CvccvSCvccc"
and "003-67-0998" -> "###@##@####".
"""

from __future__ import annotations

import logging
import string
import unicodedata
from enum import Enum
from typing import Iterable, List

from joblib import Parallel, delayed

from dpi.config import get_settings

LOG = logging.getLogger(__name__)

VOWELS = frozenset("aeiou")
ASCII_PUNCTUATION = frozenset(string.punctuation)


class SymbolClass(Enum):
    """Character classes and the symbol each one is rendered as."""

    UNKNOWN = "?"
    CONSONANT_UPPER = "C"
    CONSONANT_LOWER = "c"
    VOWEL_UPPER = "V"
    VOWEL_LOWER = "v"
    NUMERIC = "#"
    SPECIAL_CHAR = "~"
    WHITE_SPACE = "S"
    PUNCTUATION = "@"

    @property
    def symbol(self) -> str:
        return self.value


SYMBOL_MAP: dict[SymbolClass, str] = {cls: cls.symbol for cls in SymbolClass}


def classify_char(ch: str) -> SymbolClass:
    """Classify a single character.

    Evaluation order: consonant-upper, consonant-lower, vowel-upper,
    vowel-lower, numeric, whitespace, punctuation, special char, unknown.
    Letters, digits and punctuation are the ASCII sets; non-ASCII symbols
    and punctuation fall into SPECIAL_CHAR.

    Signatures built by classifiers without the SPECIAL_CHAR class render
    those characters as UNKNOWN ("€100" is "?###" there, "~###" here),
    so stored patterns containing them do not carry over between the two.
    """
    if ch.isascii() and ch.isalpha():
        if ch.lower() in VOWELS:
            return SymbolClass.VOWEL_UPPER if ch.isupper() else SymbolClass.VOWEL_LOWER
        return SymbolClass.CONSONANT_UPPER if ch.isupper() else SymbolClass.CONSONANT_LOWER
    if ch in string.digits:
        return SymbolClass.NUMERIC
    if ch.isspace():
        return SymbolClass.WHITE_SPACE
    if ch in ASCII_PUNCTUATION:
        return SymbolClass.PUNCTUATION
    if unicodedata.category(ch)[0] in {"S", "P"}:
        return SymbolClass.SPECIAL_CHAR
    return SymbolClass.UNKNOWN


def analyze(text: str) -> str:
    """Return the structural signature of `text`, one symbol per character."""
    return "".join(classify_char(ch).symbol for ch in text)


def analyze_entities(entities: Iterable[str], n_jobs: int | None = None) -> List[str]:
    """Signature of every entity, in input order.

    Work is spread over a joblib thread pool; `n_jobs` defaults to
    Settings.n_jobs.
    """
    entities = list(entities)
    if not entities:
        return []

    jobs = n_jobs if n_jobs is not None else get_settings().n_jobs
    return Parallel(n_jobs=jobs, prefer="threads")(delayed(analyze)(entity) for entity in entities)


__all__ = ["SymbolClass", "SYMBOL_MAP", "classify_char", "analyze", "analyze_entities"]
