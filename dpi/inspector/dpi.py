"""
The Data Privacy Inspector (DPI).

A DPI is configured with up to three lists of known keys:

    - key words     matched case-insensitively against whole tokens
    - key regexs    searched within each token
    - key patterns  compared to each token's structural signature

Each configured key carries a fixed point value (word 100, regex 90,
pattern 80). Training on sample documents credits those points to every
key found in a document and proposes new candidate keys from the tokens
that surround known key occurrences.

Example:
    >>> dpi = DPI.with_keys(words=["ssn"], regexs=[r"^\\d{3}-\\d{2}-\\d{4}$"])
    >>> suggestions = dpi.train(["My ssn is 003-67-0998"])
    >>> dpi.get_score("ssn").points
    200.0
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from joblib import Parallel, delayed

from dpi.config import Settings, get_settings
from dpi.errors import DPIDecodeError, InvalidRegexError
from dpi.scoring import Score, ScoreKey, ScoreLedger
from dpi.utils.pattern import analyze, analyze_entities
from dpi.utils.phonetic import similar_word, sounds_like
from dpi.utils.text import normalize_text, tokenize
from dpi.utils.tfidf import average_tfidf, frequency_counts

from . import debug_logging
from .suggestion import Inspection, Suggestion

LOG = logging.getLogger(__name__)

KeyPoints = Tuple[str, float]
WeightedKeyGroup = Tuple[float, Sequence[str]]

# Stable field order of the serialized form.
SERIALIZED_FIELDS = ("key_patterns", "key_regexs", "key_words")


def validate_regexs(regexs: Iterable[str]) -> List[str]:
    """Return every regex in `regexs` that fails to compile.

    The whole list is always checked; an empty result means all are valid.
    """
    invalid: List[str] = []
    for regex in regexs:
        try:
            re.compile(regex)
        except (re.error, TypeError):
            invalid.append(regex)
    return invalid


def _prepare_document(doc: str) -> tuple[list[str], dict[str, int]]:
    tokens = tokenize(normalize_text(doc))
    return tokens, frequency_counts(tokens)


def _string_list(data: Mapping[str, Any], field_name: str) -> Optional[List[str]]:
    value = data.get(field_name)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DPIDecodeError(f"'{field_name}' must be a list of strings")
    return value


class DPI:
    """Scores text against known keys and learns new candidate keys."""

    def __init__(
        self,
        key_words: Optional[Sequence[str]] = None,
        key_regexs: Optional[Sequence[str]] = None,
        key_patterns: Optional[Sequence[str]] = None,
        *,
        scores: Optional[ScoreLedger] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """Build an inspector.

        Args:
            key_words / key_regexs / key_patterns:
                Optional key lists; None means the class is not configured.
            scores:
                Existing ledger to adopt. When omitted the ledger is seeded
                with one Score per configured key at its class point value.
            settings:
                Explicit configuration; defaults to get_settings().

        Raises:
            InvalidRegexError: listing every regex that does not compile.
        """
        self.settings = settings or get_settings()

        invalid = validate_regexs(key_regexs or [])
        if invalid:
            LOG.error("DPI: rejecting %d invalid regex(s): %s", len(invalid), invalid)
            raise InvalidRegexError(invalid)

        self.key_words: Optional[List[str]] = list(key_words) if key_words is not None else None
        self.key_regexs: Optional[List[str]] = list(key_regexs) if key_regexs is not None else None
        self.key_patterns: Optional[List[str]] = list(key_patterns) if key_patterns is not None else None

        self._compiled: Dict[str, re.Pattern[str]] = {r: re.compile(r) for r in self.key_regexs or []}
        self._lowered_words = {w.lower() for w in self.key_words or []}
        self._pattern_set = set(self.key_patterns or [])

        if scores is None:
            self.scores = ScoreLedger()
            self._seed_scores()
        else:
            self.scores = scores

        LOG.info(
            "DPI initialised with %d words, %d regexs, %d patterns and %d scores.",
            len(self.key_words or []),
            len(self.key_regexs or []),
            len(self.key_patterns or []),
            len(self.scores),
        )

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def with_keys(
        cls,
        words: Optional[Sequence[str]] = None,
        regexs: Optional[Sequence[str]] = None,
        patterns: Optional[Sequence[str]] = None,
        *,
        settings: Optional[Settings] = None,
    ) -> DPI:
        return cls(words, regexs, patterns, settings=settings)

    @classmethod
    def with_key_words(cls, words: Sequence[str], *, settings: Optional[Settings] = None) -> DPI:
        return cls(key_words=words, settings=settings)

    @classmethod
    def with_key_regexs(cls, regexs: Sequence[str], *, settings: Optional[Settings] = None) -> DPI:
        return cls(key_regexs=regexs, settings=settings)

    @classmethod
    def with_key_patterns(cls, patterns: Sequence[str], *, settings: Optional[Settings] = None) -> DPI:
        return cls(key_patterns=patterns, settings=settings)

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def _key_types(self) -> Dict[float, ScoreKey]:
        s = self.settings
        return {
            s.key_word_points: ScoreKey.KEY_WORD,
            s.key_regex_points: ScoreKey.KEY_REGEX,
            s.key_pattern_points: ScoreKey.KEY_PATTERN,
        }

    def _seed_scores(self) -> None:
        for points, keys in self._weighted_key_groups():
            key_type = self._key_types()[points]
            for key in keys:
                self.scores.upsert_score(Score(key_type=key_type, key_value=key, points=points))

    def get_score(self, key: str) -> Score:
        return self.scores.get_score(key)

    def upsert_score(self, score: Score) -> None:
        self.scores.upsert_score(score)

    def add_to_score_points(self, key: str, points: float) -> Score:
        return self.scores.add_to_score_points(key, points)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def _regex(self, key: str) -> re.Pattern[str]:
        compiled = self._compiled.get(key)
        if compiled is None:
            try:
                compiled = re.compile(key)
            except re.error as exc:
                raise InvalidRegexError([key]) from exc
        return compiled

    def contains_key_word(self, key: str, tokens: Sequence[str]) -> int:
        """Number of tokens equal to `key`, ignoring case."""
        lowered = key.lower()
        return sum(1 for token in tokens if token.lower() == lowered)

    def contains_key_regex(self, key: str, tokens: Sequence[str]) -> int:
        """Number of tokens in which the regex `key` finds a match."""
        compiled = self._regex(key)
        return sum(1 for token in tokens if compiled.search(token))

    def contains_key_pattern(self, key: str, tokens: Sequence[str]) -> int:
        """Number of tokens whose structural signature equals `key`."""
        signatures = analyze_entities(tokens, n_jobs=self.settings.n_jobs)
        return signatures.count(key)

    # ------------------------------------------------------------------
    # Training on known keys
    # ------------------------------------------------------------------

    def _weighted_key_groups(self) -> List[WeightedKeyGroup]:
        s = self.settings
        groups: List[WeightedKeyGroup] = []
        if self.key_words is not None:
            groups.append((s.key_word_points, self.key_words))
        if self.key_regexs is not None:
            groups.append((s.key_regex_points, self.key_regexs))
        if self.key_patterns is not None:
            groups.append((s.key_pattern_points, self.key_patterns))
        return groups

    def train_for_key_words(self, keys: Sequence[str], tokens: Sequence[str]) -> List[KeyPoints]:
        points = self.settings.key_word_points
        return [(key, points) for key in keys if self.contains_key_word(key, tokens) > 0]

    def train_for_key_regexs(self, keys: Sequence[str], tokens: Sequence[str]) -> List[KeyPoints]:
        points = self.settings.key_regex_points
        return [(key, points) for key in keys if self.contains_key_regex(key, tokens) > 0]

    def train_for_key_patterns(self, keys: Sequence[str], tokens: Sequence[str]) -> List[KeyPoints]:
        points = self.settings.key_pattern_points
        signatures = analyze_entities(tokens, n_jobs=self.settings.n_jobs)
        return [(key, points) for key in keys if key in signatures]

    def train_from_keys(self, weighted_key_groups: Sequence[WeightedKeyGroup], tokens: Sequence[str]) -> List[KeyPoints]:
        """Match every weighted key group against `tokens`.

        Each group's weight selects the matcher (word, regex or pattern).
        Nothing is written to the ledger; callers apply the results.
        """
        s = self.settings
        handlers: Dict[float, Callable[[Sequence[str], Sequence[str]], List[KeyPoints]]] = {
            s.key_word_points: self.train_for_key_words,
            s.key_regex_points: self.train_for_key_regexs,
            s.key_pattern_points: self.train_for_key_patterns,
        }

        results: List[KeyPoints] = []
        for weight, keys in weighted_key_groups:
            handler = handlers.get(weight)
            if handler is None:
                raise ValueError(f"No key class is weighted {weight}")
            results.extend(handler(keys, tokens))
        return results

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def _candidates(
        self,
        doc_tokens: Sequence[Sequence[str]],
        freq_docs: Sequence[Mapping[str, int]],
        is_match: Callable[[str], bool],
        key_class: str,
    ) -> List[str]:
        """Neighbours of key occurrences that are rare within their document.

        Offsets that fall outside the token sequence are skipped.
        """
        tf_limit = self.settings.tf_limit
        candidates: Dict[str, None] = {}

        for tokens, counts in zip(doc_tokens, freq_docs):
            total = len(tokens)
            for idx, token in enumerate(tokens):
                if not is_match(token):
                    continue
                for offset in self.settings.neighbor_offsets:
                    pos = idx + offset
                    if not 0 <= pos < total:
                        continue
                    neighbor = tokens[pos]
                    if neighbor in candidates:
                        continue
                    ratio = counts[neighbor] / total
                    if ratio > tf_limit:
                        debug_logging.log_decision(
                            stage="candidate",
                            action="reject",
                            token=neighbor,
                            key=token,
                            score=ratio,
                            details={"key_class": key_class, "tf_limit": tf_limit},
                            settings=self.settings,
                        )
                        continue
                    candidates[neighbor] = None

        return list(candidates)

    def _suggest(
        self,
        doc_tokens: Sequence[Sequence[str]],
        freq_docs: Sequence[Mapping[str, int]],
        is_match: Callable[[str], bool],
        key_class: str,
    ) -> Dict[str, Suggestion]:
        tfidf_limit = self.settings.tfidf_limit
        suggestions: Dict[str, Suggestion] = {}

        for candidate in self._candidates(doc_tokens, freq_docs, is_match, key_class):
            average = average_tfidf(candidate, freq_docs)
            accepted = average >= tfidf_limit
            debug_logging.log_decision(
                stage="suggest",
                action="accept" if accepted else "reject",
                token=candidate,
                score=average,
                details={"key_class": key_class, "tfidf_limit": tfidf_limit},
                settings=self.settings,
            )
            if accepted:
                suggestions[candidate] = Suggestion.for_word(candidate, average * 100.0)

        return suggestions

    def suggest_from_key_words(self, doc_tokens, freq_docs) -> Dict[str, Suggestion]:
        if not self.key_words:
            return {}
        lowered = self._lowered_words
        return self._suggest(doc_tokens, freq_docs, lambda token: token.lower() in lowered, "word")

    def suggest_from_key_regexs(self, doc_tokens, freq_docs) -> Dict[str, Suggestion]:
        if not self.key_regexs:
            return {}
        compiled = list(self._compiled.values())
        return self._suggest(
            doc_tokens,
            freq_docs,
            lambda token: any(rx.search(token) for rx in compiled),
            "regex",
        )

    def suggest_from_key_patterns(self, doc_tokens, freq_docs) -> Dict[str, Suggestion]:
        if not self.key_patterns:
            return {}
        patterns = self._pattern_set
        return self._suggest(doc_tokens, freq_docs, lambda token: analyze(token) in patterns, "pattern")

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def train(self, docs: Iterable[str]) -> Dict[str, Suggestion]:
        """Credit key points per document and propose new candidate keys.

        Every configured key found in a document earns its class point value
        once for that document. Suggestions are keyed by word.
        """
        docs = list(docs)
        if not docs:
            return {}

        prepared = Parallel(n_jobs=self.settings.n_jobs, prefer="threads")(
            delayed(_prepare_document)(doc) for doc in docs
        )
        doc_tokens = [tokens for tokens, _ in prepared]
        freq_docs = [counts for _, counts in prepared]

        groups = self._weighted_key_groups()
        key_types = self._key_types()
        for tokens in doc_tokens:
            for key, points in self.train_from_keys(groups, tokens):
                self.scores.add_to_score_points(key, points, key_type=key_types[points])

        suggestions: Dict[str, Suggestion] = {}
        for found in (
            self.suggest_from_key_words(doc_tokens, freq_docs),
            self.suggest_from_key_regexs(doc_tokens, freq_docs),
            self.suggest_from_key_patterns(doc_tokens, freq_docs),
        ):
            for word, suggestion in found.items():
                current = suggestions.get(word)
                if current is None or suggestion.points > current.points:
                    suggestions[word] = suggestion

        LOG.info(
            "DPI trained on %d documents: %d suggestions, %d scores.",
            len(docs),
            len(suggestions),
            len(self.scores),
        )
        return dict(sorted(suggestions.items()))

    def inspect(self, text: str) -> Inspection:
        """Score `text` against the configured keys without changing the ledger."""
        tokens = tokenize(normalize_text(text))
        result = Inspection(token_count=len(tokens))
        if not tokens:
            return result

        for key in self.key_words or []:
            count = self.contains_key_word(key, tokens)
            if count:
                result.word_matches[key] = count

            lowered = key.lower()
            fuzzy: List[str] = []
            for token in tokens:
                candidate = token.lower()
                if candidate == lowered or token in fuzzy:
                    continue
                if sounds_like(candidate, lowered) or similar_word(
                    candidate, lowered, self.settings.similar_word_ratio
                ):
                    fuzzy.append(token)
            if fuzzy:
                result.fuzzy_matches[key] = fuzzy

        for key in self.key_regexs or []:
            count = self.contains_key_regex(key, tokens)
            if count:
                result.regex_matches[key] = count

        if self.key_patterns:
            signatures = analyze_entities(tokens, n_jobs=self.settings.n_jobs)
            for key in self.key_patterns:
                count = signatures.count(key)
                if count:
                    result.pattern_matches[key] = count

        for matches in (result.word_matches, result.regex_matches, result.pattern_matches):
            for key in matches:
                result.points[key] = self.scores.get_score(key).points
        result.score = sum(result.points.values())
        return result

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for field_name in SERIALIZED_FIELDS:
            value = getattr(self, field_name)
            if value is not None:
                data[field_name] = list(value)
        data["scores"] = self.scores.to_dict()
        return data

    def serialize(self) -> str:
        """Compact JSON snapshot of the configured keys and the ledger."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_serialized(cls, serialized: str, *, settings: Optional[Settings] = None) -> DPI:
        """Rebuild a DPI from `serialize` output.

        Snapshots without a "scores" field are seeded from their keys.

        Raises:
            DPIDecodeError: on malformed JSON, wrong field types or invalid regexs.
        """
        try:
            data = json.loads(serialized)
        except (TypeError, json.JSONDecodeError) as exc:
            raise DPIDecodeError(f"DPI snapshot is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise DPIDecodeError("DPI snapshot must be a JSON object")

        words = _string_list(data, "key_words")
        regexs = _string_list(data, "key_regexs")
        patterns = _string_list(data, "key_patterns")

        ledger: Optional[ScoreLedger] = None
        raw_scores = data.get("scores")
        if raw_scores is not None:
            if not isinstance(raw_scores, dict):
                raise DPIDecodeError("'scores' must be a JSON object")
            try:
                ledger = ScoreLedger.from_dict(raw_scores)
            except (KeyError, TypeError, ValueError) as exc:
                raise DPIDecodeError(f"Invalid score entry: {exc}") from exc

        try:
            return cls(words, regexs, patterns, scores=ledger, settings=settings)
        except InvalidRegexError as exc:
            raise DPIDecodeError(str(exc)) from exc

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DPI):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"DPI(key_words={self.key_words!r}, key_regexs={self.key_regexs!r}, "
            f"key_patterns={self.key_patterns!r}, scores={len(self.scores)})"
        )
