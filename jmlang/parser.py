"""Recursive-descent parser producing the JML syntax tree."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple, TypeVar

from .ast import (
    Apply,
    BinaryExpr,
    BinaryOp,
    Bind,
    BoolLiteral,
    Expression,
    FloatLiteral,
    Identifier,
    IfExpr,
    IndexAccess,
    IntLiteral,
    Jml,
    Key,
    LambdaExpr,
    ListExpr,
    NullLiteral,
    ObjectExpr,
    Selector,
    StringLiteral,
    UnaryExpr,
    UnaryOp,
    Variable,
)
from .lexer import LexingError, TokenKind, tokenize

_T = TypeVar("_T")

_BINARY_LEVELS = (
    {TokenKind.OR: BinaryOp.OR},
    {TokenKind.AND: BinaryOp.AND},
    {TokenKind.EQUAL: BinaryOp.EQ, TokenKind.NOT_EQUAL: BinaryOp.NE},
    {
        TokenKind.LESS_THAN: BinaryOp.LT,
        TokenKind.GREATER_THAN: BinaryOp.GT,
        TokenKind.LESS_EQUAL: BinaryOp.LE,
        TokenKind.GREATER_EQUAL: BinaryOp.GE,
    },
    {TokenKind.CONCAT: BinaryOp.CONCAT},
    {TokenKind.PLUS: BinaryOp.SUM, TokenKind.MINUS: BinaryOp.SUB},
    {TokenKind.STAR: BinaryOp.MUL, TokenKind.SLASH: BinaryOp.DIV, TokenKind.MOD: BinaryOp.MOD},
)

_UNARY = {TokenKind.MINUS: UnaryOp.MINUS, TokenKind.NOT: UnaryOp.NOT}

_ATOMS = {
    TokenKind.NULL: lambda _value, **span: NullLiteral(**span),
    TokenKind.INT_LITERAL: IntLiteral,
    TokenKind.FLOAT_LITERAL: FloatLiteral,
    TokenKind.BOOL_LITERAL: BoolLiteral,
    TokenKind.STRING_LITERAL: StringLiteral,
    TokenKind.IDENTIFIER: Variable,
}


class ParseError(Exception):
    """Raised when the source is not a well-formed JML program."""

    def __init__(self, message: str, span: Optional[Tuple[int, int]] = None) -> None:
        super().__init__(message)
        self.span = span


class Parser:
    """Parses one source text into programs, statements or expressions."""

    def __init__(self, source: str) -> None:
        self.source = source
        try:
            self._tokens = tokenize(source)
        except LexingError as exc:
            raise ParseError(f"lexing error: {exc}", exc.span) from exc
        self._pos = 0

    # Entry points

    def parse_program(self) -> Jml:
        """Parse header statements, the ``---`` separator and the body."""
        header: List[Bind] = []
        if self._accept(TokenKind.HEADER) is None and self._starts_statement():
            while self._accept(TokenKind.HEADER) is None:
                if self._peek_kind() is None:
                    raise self._unexpected("'---'")
                header.append(self._statement())
        body = self._expression()
        self._finish()
        return Jml(tuple(header), body)

    def parse_statement(self) -> Bind:
        """Parse a single binding that spans the whole source."""
        statement = self._statement()
        self._finish()
        return statement

    def parse_expression(self) -> Expression:
        """Parse a single expression that spans the whole source."""
        expression = self._expression()
        self._finish()
        return expression

    # Token helpers

    def _peek_kind(self, ahead: int = 0) -> Optional[TokenKind]:
        index = self._pos + ahead
        if index < len(self._tokens):
            return self._tokens[index][1].kind
        return None

    def _advance(self):
        if self._pos >= len(self._tokens):
            raise self._unexpected()
        triple = self._tokens[self._pos]
        self._pos += 1
        return triple

    def _accept(self, kind: TokenKind):
        if self._peek_kind() is kind:
            return self._advance()
        return None

    def _expect(self, kind: TokenKind, what: str):
        if self._peek_kind() is not kind:
            raise self._unexpected(what)
        return self._advance()

    def _unexpected(self, expected: Optional[str] = None) -> ParseError:
        suffix = f", expected {expected}" if expected else ""
        if self._pos >= len(self._tokens):
            return ParseError(f"unexpected end of input{suffix}", (len(self.source), 0))
        start, token, end = self._tokens[self._pos]
        return ParseError(
            f"unexpected token '{token}' at offset {start}{suffix}", (start, end - start)
        )

    def _finish(self) -> None:
        if self._pos < len(self._tokens):
            raise self._unexpected("end of input")

    def _starts_statement(self) -> bool:
        return (
            self._peek_kind() is TokenKind.IDENTIFIER
            and self._peek_kind(1) is TokenKind.ASSIGN
        )

    def _separated(self, item: Callable[[], _T], closing: TokenKind) -> List[_T]:
        items: List[_T] = []
        while self._peek_kind() is not closing:
            items.append(item())
            if self._accept(TokenKind.COMMA) is None:
                break
        return items

    # Grammar

    def _statement(self) -> Bind:
        start, token, end = self._expect(TokenKind.IDENTIFIER, "a name to bind")
        identifier = Identifier(token.value, l=start, r=end)
        self._expect(TokenKind.ASSIGN, "'='")
        expression = self._expression()
        semicolon = self._accept(TokenKind.SEMICOLON)
        stop = semicolon[2] if semicolon else expression.r
        return Bind(identifier, expression, l=start, r=stop)

    def _expression(self) -> Expression:
        return self._binary(0)

    def _binary(self, level: int) -> Expression:
        if level == len(_BINARY_LEVELS):
            return self._power()
        operators = _BINARY_LEVELS[level]
        left = self._binary(level + 1)
        while self._peek_kind() in operators:
            op = operators[self._advance()[1].kind]
            right = self._binary(level + 1)
            left = BinaryExpr(op, left, right, l=left.l, r=right.r)
        return left

    def _power(self) -> Expression:
        base = self._unary()
        if self._accept(TokenKind.POW) is None:
            return base
        exponent = self._power()
        return BinaryExpr(BinaryOp.POW, base, exponent, l=base.l, r=exponent.r)

    def _unary(self) -> Expression:
        kind = self._peek_kind()
        if kind in _UNARY:
            start = self._advance()[0]
            operand = self._unary()
            return UnaryExpr(_UNARY[kind], operand, l=start, r=operand.r)
        return self._postfix()

    def _postfix(self) -> Expression:
        expr = self._primary()
        while True:
            if self._accept(TokenKind.LBRACKET):
                index = self._expression()
                end = self._expect(TokenKind.RBRACKET, "']'")[2]
                expr = IndexAccess(expr, index, l=expr.l, r=end)
            elif self._accept(TokenKind.DOT):
                _, token, end = self._expect(TokenKind.IDENTIFIER, "a field name")
                expr = Selector(expr, token.value, l=expr.l, r=end)
            elif self._accept(TokenKind.LPAREN):
                args = self._separated(self._expression, TokenKind.RPAREN)
                end = self._expect(TokenKind.RPAREN, "')'")[2]
                expr = Apply(expr, tuple(args), l=expr.l, r=end)
            else:
                return expr

    def _primary(self) -> Expression:
        kind = self._peek_kind()
        if kind is TokenKind.IF:
            return self._if_expr()
        if kind in (TokenKind.FN, TokenKind.BACK_SLASH):
            return self._lambda()
        if kind is TokenKind.LPAREN:
            self._advance()
            inner = self._expression()
            self._expect(TokenKind.RPAREN, "')'")
            return inner
        if kind is TokenKind.LBRACKET:
            return self._list()
        if kind is TokenKind.LBRACE:
            return self._object()
        factory = _ATOMS.get(kind)
        if factory is None:
            raise self._unexpected("an expression")
        start, token, end = self._advance()
        return factory(token.value, l=start, r=end)

    def _if_expr(self) -> Expression:
        start = self._advance()[0]
        condition = self._expression()
        self._expect(TokenKind.THEN, "'then'")
        then_branch = self._expression()
        self._expect(TokenKind.ELSE, "'else'")
        else_branch = self._expression()
        return IfExpr(condition, then_branch, else_branch, l=start, r=else_branch.r)

    def _lambda(self) -> Expression:
        if self._peek_kind() is TokenKind.FN:
            start = self._advance()[0]
            self._expect(TokenKind.LPAREN, "'('")
            params = self._separated(self._param, TokenKind.RPAREN)
            self._expect(TokenKind.RPAREN, "')'")
        else:
            start = self._expect(TokenKind.BACK_SLASH, "'\\'")[0]
            params = self._separated(self._param, TokenKind.ARROW)
        self._expect(TokenKind.ARROW, "'=>'")
        body = self._expression()
        return LambdaExpr(tuple(params), body, l=start, r=body.r)

    def _param(self) -> Identifier:
        start, token, end = self._expect(TokenKind.IDENTIFIER, "a parameter name")
        return Identifier(token.value, l=start, r=end)

    def _list(self) -> Expression:
        start = self._advance()[0]
        items = self._separated(self._expression, TokenKind.RBRACKET)
        end = self._expect(TokenKind.RBRACKET, "']'")[2]
        return ListExpr(tuple(items), l=start, r=end)

    def _object(self) -> Expression:
        start = self._advance()[0]
        entries = self._separated(self._entry, TokenKind.RBRACE)
        end = self._expect(TokenKind.RBRACE, "'}'")[2]
        return ObjectExpr(tuple(entries), l=start, r=end)

    def _entry(self) -> Tuple[Key, Expression]:
        key: Key
        if (
            self._peek_kind() is TokenKind.IDENTIFIER
            and self._peek_kind(1) is TokenKind.COLON
        ):
            start, token, end = self._advance()
            key = Identifier(token.value, l=start, r=end)
        else:
            key = self._expression()
        self._expect(TokenKind.COLON, "':'")
        return key, self._expression()


def parse(source: str) -> Jml:
    """Parse a whole JML program."""
    return Parser(source).parse_program()


def parse_statement(source: str) -> Bind:
    """Parse a single ``name = expression`` binding."""
    return Parser(source).parse_statement()


def parse_expression(source: str) -> Expression:
    """Parse a single expression."""
    return Parser(source).parse_expression()