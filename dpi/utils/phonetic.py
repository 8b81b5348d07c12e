"""
Phonetic and spelling similarity helpers.

Two independent approximate-match signals live here:
    - soundex codes ("sounds like")
    - normalised Levenshtein distance ("similar spelling")
They answer different questions and are never combined into one score.
"""

from __future__ import annotations

from dpi.config.constants import SIMILAR_WORD_RATIO

SOUNDEX_LENGTH = 4

# h/w only separate letters so that codes on either side do not collapse.
# Marker and placeholder are private-use code points so literal digits in
# the input survive their removal.
_MARKER = "\ue000"
_PLACEHOLDER = "\ue001"
_PAD = "0"

_SOUNDEX_GROUPS = {
    "bfpv": "1",
    "cgjkqsxz": "2",
    "dt": "3",
    "l": "4",
    "mn": "5",
    "r": "6",
    "hw": _MARKER,
    "aeiou": _PLACEHOLDER,
}

_SOUNDEX_DIGITS: dict[str, str] = {
    letter: digit for letters, digit in _SOUNDEX_GROUPS.items() for letter in letters
}


def soundex(word: str) -> str:
    """Encode `word` as a 4 character soundex-style code.

    The first character is kept verbatim. Following characters are mapped
    to their group digit; characters outside every group (e.g. "y", digits)
    are carried through unchanged. h/w markers are removed, runs of the same
    digit collapsed, vowel placeholders removed, and the result is padded
    with "0" or truncated to 4 characters.
    """
    if not word:
        return _PAD * SOUNDEX_LENGTH

    first, rest = word[0], word[1:].lower()
    coded = "".join(_SOUNDEX_DIGITS.get(ch, ch) for ch in rest)
    coded = coded.replace(_MARKER, "")

    collapsed: list[str] = []
    for ch in coded:
        if collapsed and collapsed[-1] == ch:
            continue
        collapsed.append(ch)

    code = first + "".join(ch for ch in collapsed if ch != _PLACEHOLDER)
    return code[:SOUNDEX_LENGTH].ljust(SOUNDEX_LENGTH, _PAD)


def sounds_like(a: str, b: str) -> bool:
    """True when both words share a soundex code."""
    return soundex(a) == soundex(b)


def levenshtein(a: str, b: str) -> int:
    """Edit distance (insert/delete/substitute) between two strings."""
    if len(a) < len(b):
        a, b = b, a
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        curr = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            curr.append(min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost))
        prev = curr
    return prev[-1]


def similar_word(a: str, b: str, ratio: float = SIMILAR_WORD_RATIO) -> bool:
    """True when the edit distance relative to the mean length is <= `ratio`."""
    mean_len = (len(a) + len(b)) / 2
    if mean_len == 0:
        return True
    return levenshtein(a, b) / mean_len <= ratio


__all__ = ["soundex", "sounds_like", "levenshtein", "similar_word"]
