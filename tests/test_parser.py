import pytest

from jmlang.ast import (
    Apply,
    BinaryExpr,
    BinaryOp,
    Identifier,
    IfExpr,
    IndexAccess,
    IntLiteral,
    LambdaExpr,
    ListExpr,
    ObjectExpr,
    Selector,
    StringLiteral,
    UnaryExpr,
    UnaryOp,
    Variable,
)
from jmlang.lexer import LexingError
from jmlang.parser import ParseError, Parser, parse, parse_expression, parse_statement


def test_parse_jml():
    source = """
            x = 42
            y = "hello"
            --- 
            y
            """
    jml = parse(source)
    assert len(jml.header) == 2
    first, second = jml.header
    assert first.identifier.name == "x"
    assert first.expression == IntLiteral(42)
    assert second.identifier.name == "y"
    assert second.expression == StringLiteral("hello")
    assert jml.body == Variable("y")


def test_parse_statement():
    statement = parse_statement("x = 42")
    assert statement.identifier.name == "x"
    assert statement.expression == IntLiteral(42)


def test_parser_class_statement():
    statement = Parser("x = 42").parse_statement()
    assert statement.identifier == Identifier("x")
    assert statement.expression.value == 42


def test_parse_expression():
    assert parse_expression("42") == IntLiteral(42)
    assert Parser("42").parse_expression() == IntLiteral(42)


def test_parse_object():
    expression = parse_expression('{"key1": 42, "key2": "value"}')
    assert isinstance(expression, ObjectExpr)
    assert len(expression.entries) == 2
    assert expression.entries[0] == (StringLiteral("key1"), IntLiteral(42))
    assert expression.entries[1] == (StringLiteral("key2"), StringLiteral("value"))


def test_parse_object_identifier_key():
    expression = parse_expression("{ id: 1 }")
    assert expression == ObjectExpr(((Identifier("id"), IntLiteral(1)),))


def test_parse_list():
    expression = parse_expression("[1, 2, 3]")
    assert isinstance(expression, ListExpr)
    assert expression.items == (IntLiteral(1), IntLiteral(2), IntLiteral(3))


def test_program_without_header():
    jml = parse("-5")
    assert jml.header == ()
    assert jml.body == UnaryExpr(UnaryOp.MINUS, IntLiteral(5))


def test_multiplication_binds_tighter_than_addition():
    assert parse_expression("1 + 2 * 3") == BinaryExpr(
        BinaryOp.SUM,
        IntLiteral(1),
        BinaryExpr(BinaryOp.MUL, IntLiteral(2), IntLiteral(3)),
    )


def test_left_associative_arithmetic():
    assert parse_expression("(1 + 2) * 3 / 2") == BinaryExpr(
        BinaryOp.DIV,
        BinaryExpr(
            BinaryOp.MUL,
            BinaryExpr(BinaryOp.SUM, IntLiteral(1), IntLiteral(2)),
            IntLiteral(3),
        ),
        IntLiteral(2),
    )


def test_unary_minus_binds_tighter_than_power():
    assert parse_expression("-3 ^ 2") == BinaryExpr(
        BinaryOp.POW, UnaryExpr(UnaryOp.MINUS, IntLiteral(3)), IntLiteral(2)
    )


def test_subtracting_negative_number():
    assert parse_expression("5 - -3") == BinaryExpr(
        BinaryOp.SUB, IntLiteral(5), UnaryExpr(UnaryOp.MINUS, IntLiteral(3))
    )


def test_postfix_chain():
    assert parse_expression("users[1].name") == Selector(
        IndexAccess(Variable("users"), IntLiteral(1)), "name"
    )


def test_nested_if():
    source = """
        if x > 5 then
            if x < 15 then
                "Between 5 and 15"
             else
                "Greater than or equal to 15"
        else
            "5 or less"
    """
    expression = parse_expression(source)
    assert isinstance(expression, IfExpr)
    assert expression.condition == BinaryExpr(BinaryOp.GT, Variable("x"), IntLiteral(5))
    assert isinstance(expression.then_branch, IfExpr)
    assert expression.else_branch == StringLiteral("5 or less")


def test_lambda_and_application():
    assert parse_expression("fn(x, y) => x + y") == LambdaExpr(
        (Identifier("x"), Identifier("y")),
        BinaryExpr(BinaryOp.SUM, Variable("x"), Variable("y")),
    )
    assert parse_expression("\\x => x") == LambdaExpr((Identifier("x"),), Variable("x"))
    assert parse_expression("f(1, 2)") == Apply(Variable("f"), (IntLiteral(1), IntLiteral(2)))


def test_spans_cover_source():
    source = "1 + 2"
    expression = parse_expression(source)
    assert (expression.l, expression.r) == (0, len(source))
    assert (expression.lhs.l, expression.lhs.r) == (0, 1)


def test_incomplete_expression_raises():
    with pytest.raises(ParseError):
        parse_expression("1 +")


def test_trailing_tokens_raise():
    with pytest.raises(ParseError):
        parse_expression("1 2")


def test_missing_separator_raises():
    with pytest.raises(ParseError):
        parse("x = 1")


def test_lexing_error_is_wrapped():
    with pytest.raises(ParseError) as info:
        parse_expression("@")
    assert isinstance(info.value.__cause__, LexingError)