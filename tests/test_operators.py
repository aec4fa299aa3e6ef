import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from jmlang.ast import BinaryOp, UnaryOp
from jmlang.errors import (
    DivisionByZero,
    InvalidBinaryOperator,
    InvalidUnaryOperator,
    NotOrderedType,
    Overflow,
)
from jmlang.operators import binary_op, unary_op
from jmlang.types import JmlType
from jmlang.values import Lambda, type_of

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

small = st.integers(min_value=-1000, max_value=1000)
nonzero = small.filter(lambda n: n != 0)


@given(small, small)
def test_sum_and_sub_round_trip(a, b):
    total = binary_op(BinaryOp.SUM, a, b)
    assert binary_op(BinaryOp.SUB, total, b) == a
    assert binary_op(BinaryOp.SUM, b, a) == total


@given(small, nonzero)
def test_division_identity_and_truncation(a, b):
    quotient = binary_op(BinaryOp.DIV, a, b)
    remainder = binary_op(BinaryOp.MOD, a, b)
    product = binary_op(BinaryOp.MUL, quotient, b)
    assert binary_op(BinaryOp.SUM, product, remainder) == a
    assert abs(remainder) < abs(b)
    assert remainder == 0 or (remainder < 0) == (a < 0)


def test_integer_division_truncates_toward_zero():
    assert binary_op(BinaryOp.DIV, -7, 2) == -3
    assert binary_op(BinaryOp.MOD, -7, 2) == -1


def test_mixed_int_float_gives_float():
    result = binary_op(BinaryOp.SUM, 3, 0.5)
    assert type_of(result) == JmlType.FLOAT
    assert binary_op(BinaryOp.SUB, result, 0.5) == float(3)


@pytest.mark.parametrize("op", [BinaryOp.DIV, BinaryOp.MOD])
@pytest.mark.parametrize("zero", [0, 0.0, -0.0])
def test_division_by_zero(op, zero):
    with pytest.raises(DivisionByZero):
        binary_op(op, 1, zero)


def test_division_by_zero_is_checked_before_types():
    with pytest.raises(DivisionByZero):
        binary_op(BinaryOp.DIV, "text", 0)


@pytest.mark.parametrize(
    "op, a, b",
    [
        (BinaryOp.SUM, I64_MAX, 1),
        (BinaryOp.SUB, I64_MIN, 1),
        (BinaryOp.MUL, I64_MAX, 2),
        (BinaryOp.DIV, I64_MIN, -1),
        (BinaryOp.MOD, I64_MIN, -1),
        (BinaryOp.POW, 2, 64),
        (BinaryOp.POW, 2, -1),
    ],
)
def test_integer_overflow(op, a, b):
    with pytest.raises(Overflow):
        binary_op(op, a, b)


def test_pow_fits_i64_min():
    assert binary_op(BinaryOp.POW, -2, 63) == I64_MIN


def test_pow_unit_bases_with_negative_exponent():
    assert binary_op(BinaryOp.POW, 1, -1) == 1
    assert binary_op(BinaryOp.POW, -1, -1) == -1


def test_float_pow_of_negative_base_is_nan():
    result = binary_op(BinaryOp.POW, -8.0, 0.5)
    assert type_of(result) == JmlType.FLOAT
    assert math.isnan(result)


@given(small, small)
def test_comparisons_are_consistent(a, b):
    lt = binary_op(BinaryOp.LT, a, b)
    gt = binary_op(BinaryOp.GT, a, b)
    eq = binary_op(BinaryOp.EQ, a, b)
    assert [lt, eq, gt].count(True) == 1
    assert binary_op(BinaryOp.GT, b, a) is lt
    assert binary_op(BinaryOp.LE, a, b) is (lt or eq)
    assert binary_op(BinaryOp.GE, a, b) is (gt or eq)


def test_strings_and_bools_are_ordered():
    assert binary_op(BinaryOp.LT, "apple", "banana") is True
    assert binary_op(BinaryOp.GT, True, False) is True


@pytest.mark.parametrize("value", [[1], {"a": 1}, Lambda(("x",), None)])
def test_unordered_types_rejected(value):
    with pytest.raises(NotOrderedType) as info:
        binary_op(BinaryOp.LT, value, 1)
    assert info.value.found == type_of(value)


def test_ordering_mismatched_types_rejected():
    with pytest.raises(InvalidBinaryOperator) as info:
        binary_op(BinaryOp.GE, "a", 1)
    assert info.value.operator == ">="
    assert info.value.left == JmlType.STRING
    assert info.value.right == JmlType.INT


def test_equality_distinguishes_types():
    assert binary_op(BinaryOp.EQ, 1, 1.0) is False
    assert binary_op(BinaryOp.NE, 1, True) is True
    assert binary_op(BinaryOp.EQ, [1, {"a": None}], [1, {"a": None}]) is True


@given(st.booleans(), st.booleans())
def test_logical_operators(a, b):
    assert binary_op(BinaryOp.AND, a, b) is (a and b)
    assert binary_op(BinaryOp.OR, a, b) is (a or b)


def test_logical_requires_bools():
    with pytest.raises(InvalidBinaryOperator) as info:
        binary_op(BinaryOp.AND, True, 1)
    assert info.value.operator == "&&"


@given(st.lists(small), st.lists(small))
def test_list_concat(left, right):
    result = binary_op(BinaryOp.CONCAT, left, right)
    assert result[: len(left)] == left
    assert result[len(left):] == right


def test_string_concat():
    assert binary_op(BinaryOp.CONCAT, "foo", "bar") == "foo" + "bar"


def test_object_concat_right_wins_and_keeps_order():
    left = {"a": 1, "b": 2}
    right = {"b": 3, "c": 4}
    merged = binary_op(BinaryOp.CONCAT, left, right)
    assert list(merged) == ["a", "b", "c"]
    assert merged["b"] == right["b"]
    assert left == {"a": 1, "b": 2}


def test_concat_mismatch():
    with pytest.raises(InvalidBinaryOperator) as info:
        binary_op(BinaryOp.CONCAT, "a", [1])
    assert info.value.operator == "concat"


def test_arithmetic_on_strings_rejected():
    with pytest.raises(InvalidBinaryOperator) as info:
        binary_op(BinaryOp.SUM, "a", "b")
    assert info.value.operator == "+"


@given(small)
def test_unary_minus_round_trip(n):
    assert unary_op(UnaryOp.MINUS, unary_op(UnaryOp.MINUS, n)) == n
    assert binary_op(BinaryOp.SUM, n, unary_op(UnaryOp.MINUS, n)) == 0


def test_unary_minus_float():
    value = unary_op(UnaryOp.MINUS, 2.5)
    assert type_of(value) == JmlType.FLOAT
    assert unary_op(UnaryOp.MINUS, value) == 2.5


def test_unary_minus_overflow():
    with pytest.raises(Overflow):
        unary_op(UnaryOp.MINUS, I64_MIN)


@given(st.booleans())
def test_not(value):
    assert unary_op(UnaryOp.NOT, value) is (not value)


def test_invalid_unary_operators():
    with pytest.raises(InvalidUnaryOperator) as info:
        unary_op(UnaryOp.MINUS, "x")
    assert info.value.right == JmlType.STRING
    with pytest.raises(InvalidUnaryOperator) as info:
        unary_op(UnaryOp.NOT, 1)
    assert info.value.operator == "!"