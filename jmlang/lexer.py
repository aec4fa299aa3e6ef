"""Tokenizer for the JML language."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

_I64_MAX = 2**63 - 1


class LexingError(Exception):
    """Raised when the source text cannot be split into tokens."""

    def __init__(self, message: str, span: Optional[Tuple[int, int]] = None) -> None:
        super().__init__(message)
        self.span = span


class UndefinedToken(LexingError):
    """No token matches the text at a position."""

    def __init__(self, position: int) -> None:
        super().__init__(f"undefined token at offset {position}", (position, 1))
        self.position = position


class InvalidFloat(LexingError):
    """A float literal could not be converted to a number."""

    def __init__(self, source: str, span: Tuple[int, int], text: str) -> None:
        super().__init__(f"invalid float literal: {text!r}", span)
        self.source = source
        self.text = text


class InvalidInteger(LexingError):
    """An integer literal could not be converted to a 64-bit integer."""

    def __init__(self, source: str, span: Tuple[int, int], text: str) -> None:
        super().__init__(f"invalid integer literal: {text!r}", span)
        self.source = source
        self.text = text


class TokenKind(enum.Enum):
    # Keywords
    HEADER = "Header"
    NULL = "Null"
    FN = "Fn"
    IF = "If"
    THEN = "Then"
    ELSE = "Else"
    # Type names
    STRING_TYPE = "StringType"
    FLOAT_TYPE = "FloatType"
    BOOL_TYPE = "BoolType"
    INT_TYPE = "IntType"
    ARRAY_TYPE = "ArrayType"
    OBJECT_TYPE = "ObjectType"
    NULL_TYPE = "NullType"
    # Identifiers and literals
    IDENTIFIER = "Identifier"
    STRING_LITERAL = "StringLiteral"
    INT_LITERAL = "IntLiteral"
    FLOAT_LITERAL = "FloatLiteral"
    BOOL_LITERAL = "BoolLiteral"
    # Operators
    POW = "Pow"
    MOD = "Mod"
    CONCAT = "Concat"
    PLUS = "Plus"
    MINUS = "Minus"
    STAR = "Star"
    SLASH = "Slash"
    BACK_SLASH = "BackSlash"
    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    LESS_THAN = "LessThan"
    GREATER_THAN = "GreaterThan"
    LESS_EQUAL = "LessEqual"
    GREATER_EQUAL = "GreaterEqual"
    AND = "And"
    OR = "Or"
    NOT = "Not"
    ASSIGN = "Assign"
    # Symbols
    DOT = "Dot"
    COMMA = "Comma"
    COLON = "Colon"
    SEMICOLON = "Semicolon"
    LPAREN = "LParen"
    RPAREN = "RParen"
    LBRACKET = "LBracket"
    RBRACKET = "RBracket"
    LBRACE = "LBrace"
    RBRACE = "RBrace"
    ARROW = "Arrow"


TokenValue = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Token:
    """A token kind with the value it carries, if any."""

    kind: TokenKind
    value: TokenValue = None

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.value
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


_KEYWORDS = {
    "null": Token(TokenKind.NULL),
    "fn": Token(TokenKind.FN),
    "if": Token(TokenKind.IF),
    "then": Token(TokenKind.THEN),
    "else": Token(TokenKind.ELSE),
    "String": Token(TokenKind.STRING_TYPE),
    "Float": Token(TokenKind.FLOAT_TYPE),
    "Bool": Token(TokenKind.BOOL_TYPE),
    "Int": Token(TokenKind.INT_TYPE),
    "Array": Token(TokenKind.ARRAY_TYPE),
    "Object": Token(TokenKind.OBJECT_TYPE),
    "Null": Token(TokenKind.NULL_TYPE),
    "true": Token(TokenKind.BOOL_LITERAL, True),
    "false": Token(TokenKind.BOOL_LITERAL, False),
}

_SYMBOLS = sorted(
    {
        "---": TokenKind.HEADER,
        "^": TokenKind.POW,
        "%": TokenKind.MOD,
        "++": TokenKind.CONCAT,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
        "/": TokenKind.SLASH,
        "\\": TokenKind.BACK_SLASH,
        "==": TokenKind.EQUAL,
        "!=": TokenKind.NOT_EQUAL,
        "<": TokenKind.LESS_THAN,
        ">": TokenKind.GREATER_THAN,
        "<=": TokenKind.LESS_EQUAL,
        ">=": TokenKind.GREATER_EQUAL,
        "&&": TokenKind.AND,
        "||": TokenKind.OR,
        "!": TokenKind.NOT,
        "=": TokenKind.ASSIGN,
        ".": TokenKind.DOT,
        ",": TokenKind.COMMA,
        ":": TokenKind.COLON,
        ";": TokenKind.SEMICOLON,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        "=>": TokenKind.ARROW,
    }.items(),
    key=lambda item: -len(item[0]),
)

_SKIP = (
    re.compile(r"[ \t\n\f]+"),
    re.compile(r"#[^\n]*\n"),
    re.compile(r"//[^\n]*"),
)
_IDENT = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
_STRING = re.compile(r'"(?:[^"\\]|\\["\\bnfrt])*"')
_INT = re.compile(r"[0-9][_0-9]*")
_FLOAT = re.compile(r"(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[Ee][-+]?[0-9]+)?")

Spanned = Tuple[int, Token, int]


class Lexer:
    """Iterates over ``(start, token, end)`` triples of a source text.

    Raises a :class:`LexingError` subclass when the text holds something
    that is not a token.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self._tokens = self._scan()

    def __iter__(self) -> "Lexer":
        return self

    def __next__(self) -> Spanned:
        return next(self._tokens)

    def _scan(self) -> Iterator[Spanned]:
        source = self.source
        pos = 0
        while pos < len(source):
            skipped = self._skip(pos)
            if skipped:
                pos = skipped
                continue
            token, end = self._token_at(pos)
            yield pos, token, end
            pos = end

    def _skip(self, pos: int) -> int:
        for pattern in _SKIP:
            match = pattern.match(self.source, pos)
            if match:
                return match.end()
        return 0

    def _token_at(self, pos: int) -> Tuple[Token, int]:
        source = self.source
        char = source[pos]

        if char == '"':
            match = _STRING.match(source, pos)
            if not match:
                raise UndefinedToken(pos)
            return Token(TokenKind.STRING_LITERAL, match.group()[1:-1]), match.end()

        ident = _IDENT.match(source, pos)
        if ident:
            word = ident.group()
            return _KEYWORDS.get(word, Token(TokenKind.IDENTIFIER, word)), ident.end()

        if char.isascii() and char.isdigit():
            return self._number_at(pos)

        for text, kind in _SYMBOLS:
            if source.startswith(text, pos):
                return Token(kind), pos + len(text)

        raise UndefinedToken(pos)

    def _number_at(self, pos: int) -> Tuple[Token, int]:
        source = self.source
        int_match = _INT.match(source, pos)
        float_match = _FLOAT.match(source, pos)
        int_end = int_match.end() if int_match else pos
        float_end = float_match.end() if float_match else pos

        if int_end >= float_end:
            text = source[pos:int_end]
            span = (pos, int_end - pos)
            if "_" in text or int(text) > _I64_MAX:
                raise InvalidInteger(source, span, text)
            return Token(TokenKind.INT_LITERAL, int(text)), int_end

        text = source[pos:float_end]
        try:
            value = float(text)
        except ValueError:
            raise InvalidFloat(source, (pos, float_end - pos), text) from None
        return Token(TokenKind.FLOAT_LITERAL, value), float_end


def tokenize(source: str) -> list:
    """Return every ``(start, token, end)`` triple of ``source``."""
    return list(Lexer(source))