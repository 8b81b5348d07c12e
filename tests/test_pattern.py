import string

from dpi.utils.pattern import SYMBOL_MAP, SymbolClass, analyze, analyze_entities, classify_char


def test_symbol_map_is_a_bijection():
    assert len(SYMBOL_MAP) == 9
    assert len(set(SYMBOL_MAP.values())) == 9


def test_analyze_hello_world():
    assert analyze("Hello World") == "CvccvSCvccc"


def test_analyze_ssn_and_account():
    assert analyze("003-67-0998") == "###@##@####"
    assert analyze("Account") == "Vccvvcc"
    assert analyze("ACCOUNT") == "VCCVVCC"


def test_every_printable_ascii_char_has_one_symbol():
    symbols = set(SYMBOL_MAP.values())
    for ch in string.printable:
        result = analyze(ch)
        assert len(result) == 1
        assert result in symbols


def test_classification_of_non_ascii():
    assert classify_char("€") is SymbolClass.SPECIAL_CHAR
    assert classify_char("é") is SymbolClass.UNKNOWN
    assert classify_char(" ") is SymbolClass.WHITE_SPACE


def test_analyze_preserves_length():
    text = "Call 555-0100 (ext. 7)!"
    assert len(analyze(text)) == len(text)


def test_analyze_entities_keeps_input_order():
    entities = ["Hi", "42", "a-b", "", "Zed"]
    assert analyze_entities(entities, n_jobs=2) == ["Cv", "##", "v@c", "", "Cvc"]


def test_analyze_entities_empty():
    assert analyze_entities([]) == []


def test_non_ascii_symbols_are_special_chars():
    assert analyze("€100") == "~###"
    assert analyze("«é»") == "~?~"
