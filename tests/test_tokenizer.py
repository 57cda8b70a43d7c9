from unconfuse.core.tokenizer import (
    IDENTIFIER, NUMBER, PUNCTUATOR, REGEX, STRING, JSTokenizer, find_closing, split_top_level,
)


def kinds_and_values(source):
    return [(t.kind, t.value) for t in JSTokenizer().tokenize(source)]


def test_basic_statement():
    assert kinds_and_values("var a = 'x';") == [
        (IDENTIFIER, 'var'), (IDENTIFIER, 'a'), (PUNCTUATOR, '='), (STRING, "'x'"), (PUNCTUATOR, ';'),
    ]


def test_comments_are_dropped():
    tokens = kinds_and_values("a // 'not a string'\n/* function f(a, b) */ b")
    assert tokens == [(IDENTIFIER, 'a'), (IDENTIFIER, 'b')]


def test_escaped_quote_stays_inside_string():
    tokens = JSTokenizer().tokenize(r"'it\'s' + 'x'")
    assert tokens[0].value == r"'it\'s'"
    assert tokens[0].content == r"it\'s"
    assert tokens[1].is_punct('+')


def test_multi_char_punctuators():
    values = [v for _, v in kinds_and_values("a === b => c >>>= d")]
    assert values == ['a', '===', 'b', '=>', 'c', '>>>=', 'd']


def test_regex_vs_division():
    tokens = kinds_and_values("x = a / 2; y = /'[/]/g;")
    assert (PUNCTUATOR, '/') in tokens
    assert (REGEX, "/'[/]/g") in tokens
    # the quote inside the regex must not open a string
    assert all(kind != STRING for kind, _ in tokens)


def test_numbers():
    values = [(k, v) for k, v in kinds_and_values("0x1F 3.14 1e3 .5")]
    assert values == [(NUMBER, '0x1F'), (NUMBER, '3.14'), (NUMBER, '1e3'), (NUMBER, '.5')]


def test_unterminated_string_does_not_raise():
    tokens = JSTokenizer().tokenize("var a = 'abc\nvar b")
    assert tokens[3].kind == STRING
    assert tokens[3].content == 'abc'
    assert tokens[-1].value == 'b'


def test_find_closing_and_split():
    tokens = JSTokenizer().tokenize("f(a, [b, c], d)")
    close = find_closing(tokens, 1)
    assert tokens[close].is_punct(')')
    groups = split_top_level(tokens, 2, close)
    assert [[t.value for t in g] for g in groups] == [['a'], ['[', 'b', ',', 'c', ']'], ['d']]


def test_find_closing_unterminated():
    tokens = JSTokenizer().tokenize("f(a, b")
    assert find_closing(tokens, 1) == -1
