from unconfuse.core.extractor import (
    ARRAY_LITERAL, PACKED_FUNCTION_TABLE, QUOTED_ALPHANUMERIC, LiteralExtractor, normalize_escapes,
)


def texts(candidates):
    return [c.text for c in candidates]


def test_normalize_escapes():
    assert normalize_escapes(r'\x48i!') == 'Hi!'
    assert normalize_escapes('plain') == 'plain'
    # other escapes are left alone
    assert normalize_escapes(r"it\'s") == r"it\'s"


def test_array_literal_keeps_single_quoted_strings_only():
    source = r"""var a = ['<~87cUR~>', "dq", 42, '{65,1}', foo, '\x41b'];"""
    candidates = LiteralExtractor().extract(source)
    assert texts(candidates) == ['<~87cUR~>', '{65,1}', 'Ab']
    assert candidates[0].method == ARRAY_LITERAL
    assert candidates[0].raw == "'<~87cUR~>'"


def test_array_literal_preserves_commas_inside_strings():
    source = "var a = ['{1,2}', '{3,4}'];"
    assert texts(LiteralExtractor().extract(source)) == ['{1,2}', '{3,4}']


def test_only_first_array_is_used():
    source = "var a = ['<~aa~>', '<~bb~>']; var b = ['<~cc~>', '<~dd~>'];"
    assert texts(LiteralExtractor().extract(source)) == ['<~aa~>', '<~bb~>']


def test_single_element_array_is_skipped():
    source = "var a = ['<~aa~>']; var b = ['<~cc~>', '<~dd~>'];"
    assert texts(LiteralExtractor().extract(source)) == ['<~cc~>', '<~dd~>']


def test_packed_function_table():
    source = "function getTable() { return 'hello1world'; }"
    candidates = LiteralExtractor().extract(source)
    assert [(c.text, c.method) for c in candidates] == [
        ('hello', PACKED_FUNCTION_TABLE),
        ('world', PACKED_FUNCTION_TABLE),
        ('hello1world', QUOTED_ALPHANUMERIC),
    ]


def test_packed_function_table_with_dictionary_codes():
    source = r"function t(){return '<~a1bā'}"
    packed = [c.text for c in LiteralExtractor().extract(source) if c.method == PACKED_FUNCTION_TABLE]
    # code 257 was registered as '~a' after the third symbol
    assert packed == ['<~a', 'b~a']


def test_function_with_arguments_is_not_a_table():
    source = "function t(x) { return '<~a1b~>'; }"
    assert LiteralExtractor().extract(source) == []


def test_quoted_alphanumeric():
    source = r"""x('abc123'); y('with space'); z('\x41Bc'); w("dq123");"""
    candidates = LiteralExtractor().extract(source)
    assert texts(candidates) == ['abc123', 'ABc']
    assert all(c.method == QUOTED_ALPHANUMERIC for c in candidates)


def test_deduplicated_in_first_occurrence_order():
    source = "var a = ['abc', 'def']; f('def'); g('abc'); h('ghi');"
    assert texts(LiteralExtractor().extract(source)) == ['abc', 'def', 'ghi']


def test_empty_strings_are_dropped():
    source = "var a = ['', '<~aa~>'];"
    assert texts(LiteralExtractor().extract(source)) == ['<~aa~>']


def test_nothing_to_extract():
    assert LiteralExtractor().extract("var a = 1 + 2;") == []
    assert LiteralExtractor().extract("") == []


def test_candidate_from_text():
    extractor = LiteralExtractor()
    candidate = extractor.candidate_from_text(r'\x41BC', 'direct')
    assert candidate.text == 'ABC'
    assert candidate.method == 'direct'
    assert extractor.candidate_from_text('', 'direct') is None
