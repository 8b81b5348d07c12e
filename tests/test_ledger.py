from concurrent.futures import ThreadPoolExecutor

import pytest

from dpi.scoring import Score, ScoreKey, ScoreLedger


def test_missing_key_is_a_zero_keyword_score():
    ledger = ScoreLedger()
    score = ledger.get_score("missing")
    assert score == Score(key_type=ScoreKey.KEY_WORD, key_value="missing", points=0.0)
    assert "missing" not in ledger


def test_add_to_score_points_accumulates():
    ledger = ScoreLedger()
    ledger.add_to_score_points("ssn", 1.5)
    ledger.add_to_score_points("ssn", 2.25)
    assert ledger.get_score("ssn").points == 3.75
    assert len(ledger) == 1


def test_add_to_score_points_rejects_negative_delta():
    ledger = ScoreLedger()
    with pytest.raises(ValueError):
        ledger.add_to_score_points("ssn", -1.0)


def test_add_to_score_points_uses_key_type_on_creation_only():
    ledger = ScoreLedger()
    ledger.add_to_score_points("^\\d+$", 90.0, key_type=ScoreKey.KEY_REGEX)
    ledger.add_to_score_points("^\\d+$", 90.0, key_type=ScoreKey.KEY_PATTERN)
    score = ledger.get_score("^\\d+$")
    assert score.key_type is ScoreKey.KEY_REGEX
    assert score.points == 180.0


def test_upsert_replaces_existing_score():
    ledger = ScoreLedger()
    ledger.upsert_score(Score(ScoreKey.KEY_PATTERN, "####", 80.0))
    ledger.upsert_score(Score(ScoreKey.KEY_PATTERN, "####", 10.0))
    assert ledger.get_score("####").points == 10.0
    assert len(ledger) == 1


def test_get_score_returns_a_copy():
    ledger = ScoreLedger()
    ledger.add_to_score_points("ssn", 5.0)
    score = ledger.get_score("ssn")
    score.points = 1000.0
    assert ledger.get_score("ssn").points == 5.0


def test_concurrent_increments_are_not_lost():
    ledger = ScoreLedger()
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: ledger.add_to_score_points("ssn", 1.0), range(1000)))
    assert ledger.get_score("ssn").points == 1000.0


def test_ledger_dict_round_trip_is_sorted():
    ledger = ScoreLedger()
    ledger.add_to_score_points("zip", 1.0)
    ledger.upsert_score(Score(ScoreKey.KEY_REGEX, "acct", 90.0))
    data = ledger.to_dict()
    assert list(data) == ["acct", "zip"]
    assert data["acct"] == {"key_type": "KeyRegex", "key_value": "acct", "points": 90.0}
    assert ScoreLedger.from_dict(data) == ledger
    assert list(ledger) == ["acct", "zip"]


def test_from_dict_rejects_mismatched_keys():
    with pytest.raises(ValueError):
        ScoreLedger.from_dict({"a": {"key_type": "KeyWord", "key_value": "b", "points": 1.0}})


def test_score_from_dict_rejects_bad_types():
    with pytest.raises(ValueError):
        Score.from_dict({"key_type": "Nope", "key_value": "a", "points": 1.0})
    with pytest.raises(TypeError):
        Score.from_dict({"key_type": "KeyWord", "key_value": "a", "points": "1"})
