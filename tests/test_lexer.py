import pytest

from jmlang.lexer import (
    InvalidInteger,
    Lexer,
    LexingError,
    Token,
    TokenKind,
    UndefinedToken,
    tokenize,
)


def tokens(source):
    return [token for _, token, _ in tokenize(source)]


def test_keywords():
    assert tokens("null if else") == [
        Token(TokenKind.NULL),
        Token(TokenKind.IF),
        Token(TokenKind.ELSE),
    ]


def test_types():
    assert tokens("String Float Bool Int Array Object Null") == [
        Token(TokenKind.STRING_TYPE),
        Token(TokenKind.FLOAT_TYPE),
        Token(TokenKind.BOOL_TYPE),
        Token(TokenKind.INT_TYPE),
        Token(TokenKind.ARRAY_TYPE),
        Token(TokenKind.OBJECT_TYPE),
        Token(TokenKind.NULL_TYPE),
    ]


def test_operators():
    assert tokens("+-*/ == != < > <= >= && || ! =") == [
        Token(TokenKind.PLUS),
        Token(TokenKind.MINUS),
        Token(TokenKind.STAR),
        Token(TokenKind.SLASH),
        Token(TokenKind.EQUAL),
        Token(TokenKind.NOT_EQUAL),
        Token(TokenKind.LESS_THAN),
        Token(TokenKind.GREATER_THAN),
        Token(TokenKind.LESS_EQUAL),
        Token(TokenKind.GREATER_EQUAL),
        Token(TokenKind.AND),
        Token(TokenKind.OR),
        Token(TokenKind.NOT),
        Token(TokenKind.ASSIGN),
    ]


def test_symbols():
    assert tokens(". , : ; () [] {} =>") == [
        Token(TokenKind.DOT),
        Token(TokenKind.COMMA),
        Token(TokenKind.COLON),
        Token(TokenKind.SEMICOLON),
        Token(TokenKind.LPAREN),
        Token(TokenKind.RPAREN),
        Token(TokenKind.LBRACKET),
        Token(TokenKind.RBRACKET),
        Token(TokenKind.LBRACE),
        Token(TokenKind.RBRACE),
        Token(TokenKind.ARROW),
    ]


def test_identifiers():
    assert tokens("foo bar _baz qux123") == [
        Token(TokenKind.IDENTIFIER, "foo"),
        Token(TokenKind.IDENTIFIER, "bar"),
        Token(TokenKind.IDENTIFIER, "_baz"),
        Token(TokenKind.IDENTIFIER, "qux123"),
    ]


def test_string_literals():
    assert tokens('"hello" "world"') == [
        Token(TokenKind.STRING_LITERAL, "hello"),
        Token(TokenKind.STRING_LITERAL, "world"),
    ]


def test_int_literals():
    assert tokens("123 456 789") == [
        Token(TokenKind.INT_LITERAL, 123),
        Token(TokenKind.INT_LITERAL, 456),
        Token(TokenKind.INT_LITERAL, 789),
    ]


def test_float_literals():
    assert tokens("0.123 1.23 123.456 1e10 1E-10 1.23e+10") == [
        Token(TokenKind.FLOAT_LITERAL, 0.123),
        Token(TokenKind.FLOAT_LITERAL, 1.23),
        Token(TokenKind.FLOAT_LITERAL, 123.456),
        Token(TokenKind.FLOAT_LITERAL, 1e10),
        Token(TokenKind.FLOAT_LITERAL, 1e-10),
        Token(TokenKind.FLOAT_LITERAL, 1.23e10),
    ]


def test_bool_literals():
    assert tokens("true false") == [
        Token(TokenKind.BOOL_LITERAL, True),
        Token(TokenKind.BOOL_LITERAL, False),
    ]


def test_comments():
    assert tokens("// This is a comment\n foo = 42; // Another comment") == [
        Token(TokenKind.IDENTIFIER, "foo"),
        Token(TokenKind.ASSIGN),
        Token(TokenKind.INT_LITERAL, 42),
        Token(TokenKind.SEMICOLON),
    ]


def test_hash_comment_needs_newline():
    assert tokens("# note\nx") == [Token(TokenKind.IDENTIFIER, "x")]
    with pytest.raises(UndefinedToken):
        tokenize("x # trailing")


def test_undefined_token():
    with pytest.raises(UndefinedToken) as info:
        tokenize("@")
    assert info.value.span == (0, 1)
    assert isinstance(info.value, LexingError)


def test_undefined_token_from_lexer_iteration():
    with pytest.raises(UndefinedToken) as info:
        list(Lexer("@"))
    assert info.value.span == (0, 1)


def test_undefined_token_is_lexing_error():
    with pytest.raises(LexingError):
        tokenize("foo @ bar")


def test_identifier_span():
    lexer = Lexer("myVar")
    assert next(lexer) == (0, Token(TokenKind.IDENTIFIER, "myVar"), 5)
    with pytest.raises(StopIteration):
        next(lexer)


def test_string_literal_span():
    assert tokenize('"hello"') == [(0, Token(TokenKind.STRING_LITERAL, "hello"), 7)]


def test_int_literal_span():
    assert tokenize("12345") == [(0, Token(TokenKind.INT_LITERAL, 12345), 5)]


def test_float_literal_span():
    assert tokenize("123.45") == [(0, Token(TokenKind.FLOAT_LITERAL, 123.45), 6)]


def test_operator_plus():
    assert tokenize("+") == [(0, Token(TokenKind.PLUS), 1)]


def test_combined_expression():
    assert tokenize("x = 123 + 456.78") == [
        (0, Token(TokenKind.IDENTIFIER, "x"), 1),
        (2, Token(TokenKind.ASSIGN), 3),
        (4, Token(TokenKind.INT_LITERAL, 123), 7),
        (8, Token(TokenKind.PLUS), 9),
        (10, Token(TokenKind.FLOAT_LITERAL, 456.78), 16),
    ]


def test_header_and_concat():
    assert tokens("--- ++") == [Token(TokenKind.HEADER), Token(TokenKind.CONCAT)]


def test_keyword_prefix_is_identifier():
    assert tokens("nullx iffy") == [
        Token(TokenKind.IDENTIFIER, "nullx"),
        Token(TokenKind.IDENTIFIER, "iffy"),
    ]


def test_escaped_quote_kept_raw():
    source = r'"a\"b"'
    assert tokens(source) == [Token(TokenKind.STRING_LITERAL, source[1:-1])]


def test_unterminated_string_fails():
    with pytest.raises(UndefinedToken):
        tokenize('"open')


def test_underscore_integer_is_invalid():
    with pytest.raises(InvalidInteger):
        tokenize("1_000")


def test_integer_overflow_is_invalid():
    with pytest.raises(InvalidInteger) as info:
        tokenize("9223372036854775808")
    assert info.value.span == (0, 19)


def test_largest_integer_accepted():
    assert tokens("9223372036854775807") == [
        Token(TokenKind.INT_LITERAL, 9223372036854775807)
    ]


def test_carriage_return_is_not_whitespace():
    with pytest.raises(UndefinedToken):
        tokenize("x\r\ny")


def test_token_display():
    assert str(Token(TokenKind.IDENTIFIER, "foo")) == "foo"
    assert str(Token(TokenKind.BOOL_LITERAL, True)) == "true"
    assert str(Token(TokenKind.HEADER)) == "Header"