"""Result types produced by the inspector."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dpi.utils.pattern import analyze

DIGIT_REGEX = "[0-9]"
LETTER_REGEX = "[aA-zZ]"
OTHER_REGEX = r"[^a-zA-Z\d\s:]"


def regex_for_word(word: str) -> str:
    """Describe `word` as a character-by-character regex.

    Digits become [0-9], ASCII letters [aA-zZ], anything else
    [^a-zA-Z\\d\\s:]. This is a descriptive aid, it is not learned.
    """
    parts = []
    for ch in word:
        if ch in string.digits:
            parts.append(DIGIT_REGEX)
        elif ch in string.ascii_letters:
            parts.append(LETTER_REGEX)
        else:
            parts.append(OTHER_REGEX)
    return "".join(parts)


@dataclass
class Suggestion:
    """A candidate key proposed by training."""

    word: str
    regex: Optional[str] = None
    pattern: Optional[str] = None
    points: float = 0.0

    @classmethod
    def for_word(cls, word: str, points: float) -> Suggestion:
        """Suggestion with a regex and pattern synthesised from the word itself."""
        return cls(word=word, regex=regex_for_word(word), pattern=analyze(word), points=points)

    def to_dict(self) -> dict[str, Any]:
        return {"word": self.word, "regex": self.regex, "pattern": self.pattern, "points": self.points}


@dataclass
class Inspection:
    """Outcome of inspecting a single text.

    Fields:
        word_matches / regex_matches / pattern_matches:
            key -> number of matching tokens, only keys with >= 1 match.
        fuzzy_matches:
            key word -> tokens that sound like or are spelled like it
            without matching it exactly.
        points:
            key -> ledger points of every matched key.
        score:
            Sum of `points`.
    """

    token_count: int = 0
    word_matches: Dict[str, int] = field(default_factory=dict)
    regex_matches: Dict[str, int] = field(default_factory=dict)
    pattern_matches: Dict[str, int] = field(default_factory=dict)
    fuzzy_matches: Dict[str, list[str]] = field(default_factory=dict)
    points: Dict[str, float] = field(default_factory=dict)
    score: float = 0.0

    @property
    def matched(self) -> bool:
        return bool(self.word_matches or self.regex_matches or self.pattern_matches)
