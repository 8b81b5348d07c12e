import pytest

from dpi.utils.text import tokenize
from dpi.utils.tfidf import (
    average_tfidf,
    frequency_counts,
    frequency_counts_as_vec,
    inverse_document_frequency,
    term_frequency,
    tfidf,
)


@pytest.fixture
def docs():
    texts = [
        "Hello, my name is John. What is your name?",
        "A name is a personal identifier. Never share your name!",
        "My ssn is 003-67-0998",
    ]
    return [frequency_counts_as_vec(tokenize(text)) for text in texts]


def test_corpus_tokens_match_reference_documents():
    assert tokenize("Hello, my name is John. What is your name?") == [
        "Hello", "my", "name", "is", "John", "What", "is", "your", "name",
    ]
    assert tokenize("My ssn is 003-67-0998") == ["My", "ssn", "is", "003-67-0998"]


def test_tfidf_known_values(docs):
    assert tfidf("ssn", 2, docs) == 1.0986122886681098
    assert tfidf("name", 1, docs) == 0.4054651081081644


def test_tfidf_term_in_every_document_is_zero(docs):
    assert tfidf("is", 0, docs) == 0.0
    assert average_tfidf("is", docs) == 0.0


def test_tfidf_unknown_term_is_zero(docs):
    assert tfidf("passport", 0, docs) == 0.0


def test_tfidf_accepts_mappings(docs):
    as_maps = [dict(doc) for doc in docs]
    assert tfidf("ssn", 2, as_maps) == tfidf("ssn", 2, docs)


def test_tfidf_rejects_bad_index(docs):
    with pytest.raises(IndexError):
        tfidf("ssn", 3, docs)


def test_term_frequency_is_augmented():
    doc = [("the", 4), ("bank", 2), ("3869", 1)]
    assert term_frequency("the", doc) == 1.0
    assert term_frequency("bank", doc) == 0.75
    assert term_frequency("3869", doc) == 0.625
    assert term_frequency("absent", doc) == 0.5
    assert term_frequency("absent", []) == 0.0


def test_inverse_document_frequency(docs):
    assert inverse_document_frequency("name", docs) == pytest.approx(0.4054651081081644)
    assert inverse_document_frequency("nowhere", docs) == 0.0


def test_frequency_counts_as_vec_ranking():
    tokens = ["b", "a", "b", "c", "a", "b"]
    assert frequency_counts_as_vec(tokens) == [("b", 3), ("a", 2), ("c", 1)]


def test_frequency_counts_as_vec_ties_break_by_token():
    assert frequency_counts_as_vec(["z", "y", "x", "y", "z"]) == [("y", 2), ("z", 2), ("x", 1)]


def test_frequency_counts_conserve_token_total():
    for tokens in ([], ["a"], tokenize("the cat and the hat and the bat"), list("mississippi")):
        assert sum(count for _, count in frequency_counts_as_vec(tokens)) == len(tokens)


def test_frequency_counts_keyed_in_token_order():
    counts = frequency_counts(["b", "a", "b", "C"])
    assert counts == {"C": 1, "a": 1, "b": 2}
    assert list(counts) == ["C", "a", "b"]
    assert frequency_counts([]) == {}


def test_frequency_counts_keep_trailing_nul():
    assert frequency_counts(["ab\x00", "ab", "ab"]) == {"ab": 2, "ab\x00": 1}
    assert frequency_counts_as_vec(["ab\x00", "ab", "ab"]) == [("ab", 2), ("ab\x00", 1)]
