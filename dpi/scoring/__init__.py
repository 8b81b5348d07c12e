"""Scoring layer."""

from .ledger import ScoreLedger
from .score import Score, ScoreKey

__all__ = ["Score", "ScoreKey", "ScoreLedger"]
