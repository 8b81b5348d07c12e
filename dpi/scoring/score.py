"""Dataclasses for the scoring layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class ScoreKey(Enum):
    """Where a scored key came from. Used for weighting, never for lookup."""

    KEY_WORD = "KeyWord"
    KEY_PATTERN = "KeyPattern"
    KEY_REGEX = "KeyRegex"


@dataclass
class Score:
    """Accumulated relevance points of a single key.

    Identity is `key_value`; a ledger holds at most one Score per key_value.
    """

    key_type: ScoreKey
    key_value: str
    points: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.key_type, ScoreKey):
            self.key_type = ScoreKey(self.key_type)
        self.points = float(self.points)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key_type": self.key_type.value,
            "key_value": self.key_value,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Score:
        """Build a Score from its serialized form.

        Raises KeyError/ValueError/TypeError on malformed input; the DPI
        decoder turns those into DPIDecodeError.
        """
        key_value = data["key_value"]
        if not isinstance(key_value, str):
            raise TypeError(f"key_value must be a string, got {type(key_value).__name__}")
        points = data["points"]
        if isinstance(points, bool) or not isinstance(points, (int, float)):
            raise TypeError(f"points must be a number, got {type(points).__name__}")
        return cls(key_type=ScoreKey(data["key_type"]), key_value=key_value, points=points)
