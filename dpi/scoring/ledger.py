"""
The ScoreLedger maps each key to its accumulated relevance points.

Points only grow: `add_to_score_points` rejects negative deltas and the only
way to lower a score is to replace it wholesale with `upsert_score` or to
load a different snapshot. Increments hold a lock so that concurrent callers
never lose updates.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterator, Mapping

from .score import Score, ScoreKey

LOG = logging.getLogger(__name__)


class ScoreLedger:
    """Key -> Score mapping with upsert and incremental add."""

    def __init__(self, scores: Mapping[str, Score] | None = None) -> None:
        self._scores: Dict[str, Score] = {}
        self._lock = threading.Lock()
        for score in (scores or {}).values():
            self.upsert_score(score)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_score(self, key: str) -> Score:
        """Return the Score for `key`, or a zero-point KeyWord Score if absent.

        The returned object is a copy; mutate the ledger through its methods.
        """
        with self._lock:
            score = self._scores.get(key)
            if score is None:
                return Score(key_type=ScoreKey.KEY_WORD, key_value=key, points=0.0)
            return Score(score.key_type, score.key_value, score.points)

    def __contains__(self, key: object) -> bool:
        return key in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._scores))

    def total_points(self) -> float:
        with self._lock:
            return sum(score.points for score in self._scores.values())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def upsert_score(self, score: Score) -> None:
        """Insert `score`, replacing any Score with the same key_value."""
        with self._lock:
            self._scores[score.key_value] = Score(score.key_type, score.key_value, score.points)

    def add_to_score_points(self, key: str, delta: float, key_type: ScoreKey = ScoreKey.KEY_WORD) -> Score:
        """Add `delta` points to `key`, creating the Score on first reference.

        `key_type` is only used when the key is not yet in the ledger.
        """
        if delta < 0:
            raise ValueError(f"Score points can only increase, got delta={delta}")

        with self._lock:
            score = self._scores.get(key)
            if score is None:
                score = Score(key_type=key_type, key_value=key, points=0.0)
                self._scores[key] = score
            score.points += float(delta)
            LOG.debug("Score for %r is now %.4f (+%.4f).", key, score.points, delta)
            return Score(score.key_type, score.key_value, score.points)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serializable form, keyed by key_value in ascending order."""
        with self._lock:
            return {key: self._scores[key].to_dict() for key in sorted(self._scores)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> ScoreLedger:
        ledger = cls()
        for key, raw in data.items():
            score = Score.from_dict(raw)
            if score.key_value != key:
                raise ValueError(f"Score key {key!r} does not match key_value {score.key_value!r}")
            ledger.upsert_score(score)
        return ledger

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreLedger):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ScoreLedger({len(self)} scores)"
