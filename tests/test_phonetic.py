from dpi.utils.phonetic import levenshtein, similar_word, soundex, sounds_like


def test_soundex_is_deterministic():
    assert soundex("hello") == soundex("hello")
    assert soundex("hello") == "h400"


def test_soundex_rupert_robert_sound_alike():
    assert soundex("rupert") == "r163"
    assert soundex("robert") == "r163"
    assert sounds_like("rupert", "robert")


def test_soundex_sunday_smith_differ():
    assert soundex("smith") == "s530"
    assert soundex("sunday") == "s53y"
    assert not sounds_like("sunday", "smith")


def test_soundex_hw_does_not_join_letters():
    # "ashcraft": s and c are separated by h, yet still collapse as one code.
    assert soundex("ashcraft") == "a261"


def test_soundex_keeps_first_character_verbatim():
    assert soundex("Robert") == "R163"
    assert not sounds_like("Robert", "robert")


def test_soundex_pads_short_words():
    assert soundex("a") == "a000"
    assert len(soundex("")) == 4


def test_levenshtein():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("same", "same") == 0


def test_similar_word_threshold():
    assert similar_word("account", "acount")
    # distance 2 over mean length 6.5 is just above 0.30
    assert not similar_word("account", "amount")
    assert similar_word("", "")


def test_similar_word_is_independent_from_soundex():
    assert not similar_word("rupert", "robert")
    assert sounds_like("rupert", "robert")


def test_soundex_keeps_literal_digits():
    assert soundex("a909") == "a909"
    assert soundex("b10") == "b100"
    assert soundex("r2d2") == "r232"
