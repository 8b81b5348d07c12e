import pytest

from dpi.utils.text import ngram, normalize_text, tokenize


def test_tokenize_drops_empty_pieces():
    assert tokenize(" a  b ") == ["a", "b"]


def test_tokenize_plain_sentence():
    assert tokenize("My personal data") == ["My", "personal", "data"]


def test_tokenize_keeps_hyphenated_identifiers():
    assert tokenize('{"ssn":"003-08-5546"}') == ["ssn", "003-08-5546"]


def test_tokenize_all_delimiters():
    text = "a,b.c!d?e;f'g\"h:i\tj\nk\rl(m)n{o}p"
    assert tokenize(text) == list("abcdefghijklmnop")


def test_tokenize_keeps_duplicates_in_order():
    assert tokenize("the cat, the hat") == ["the", "cat", "the", "hat"]


def test_tokenize_empty_text():
    assert tokenize("") == []
    assert tokenize(" ,.;") == []


def test_normalize_text_folds_full_width_digits():
    assert normalize_text("ＳＳＮ １２３") == "SSN 123"


def test_ngram_without_padding():
    assert ngram("a b c d", 2) == [["a", "b"], ["b", "c"], ["c", "d"]]


def test_ngram_with_padding_adds_boundary_windows():
    assert ngram("a b c", 3, pad="_") == [
        ["_", "_", "a"],
        ["_", "a", "b"],
        ["a", "b", "c"],
        ["b", "c", "_"],
        ["c", "_", "_"],
    ]


def test_ngram_shorter_text_than_window_is_empty():
    assert ngram("a b", 3) == []
    assert ngram("a b", 3, pad="_") == []
    assert ngram("", 1) == []


def test_ngram_rejects_non_positive_window():
    with pytest.raises(ValueError):
        ngram("a b c", 0)
