"""Unary and binary operators on JML values.

Failures raise the error kinds of :mod:`jmlang.errors`; the evaluator
attaches the source span.
"""

from __future__ import annotations

import math
import operator
from typing import Any, Callable

from .ast import BinaryOp, UnaryOp
from .errors import (
    DivisionByZero,
    InvalidBinaryOperator,
    InvalidUnaryOperator,
    NotOrderedType,
    Overflow,
)
from .types import JmlType
from .values import is_zero, type_of, values_equal

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_COMPARISONS = {
    BinaryOp.GT: operator.gt,
    BinaryOp.LT: operator.lt,
    BinaryOp.GE: operator.ge,
    BinaryOp.LE: operator.le,
}


def _checked(value: int) -> int:
    if not _I64_MIN <= value <= _I64_MAX:
        raise Overflow()
    return value


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _int_div(a: int, b: int) -> int:
    return _checked(_trunc_div(a, b))


def _int_rem(a: int, b: int) -> int:
    if a == _I64_MIN and b == -1:
        raise Overflow()
    return a - b * _trunc_div(a, b)


def _fmod(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


def _is_odd_integer(number: float) -> bool:
    return math.isfinite(number) and number.is_integer() and int(number) % 2 == 1


def _powf(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        negative = base < 0 and _is_odd_integer(exponent)
        return -math.inf if negative else math.inf
    except ValueError:
        if base == 0:
            negative = math.copysign(1.0, base) < 0 and _is_odd_integer(exponent)
            return -math.inf if negative else math.inf
        return math.nan


def _int_pow(base: int, exponent: int) -> int:
    # The exponent is reinterpreted as an unsigned 32-bit number.
    exponent &= 0xFFFFFFFF
    if base in (0, 1):
        return 1 if exponent == 0 else base
    if base == -1:
        return -1 if exponent % 2 else 1
    if exponent > 63:
        raise Overflow()
    return _checked(base**exponent)


def _arithmetic(
    symbol: str,
    left: Any,
    right: Any,
    on_floats: Callable[[float, float], float],
    on_ints: Callable[[int, int], int],
) -> Any:
    left_type, right_type = type_of(left), type_of(right)
    if left_type.is_number() and right_type.is_number():
        if left_type == right_type == JmlType.INT:
            return on_ints(left, right)
        return on_floats(float(left), float(right))
    raise InvalidBinaryOperator(symbol, left_type, right_type)


def _compare(op: BinaryOp, left: Any, right: Any) -> bool:
    left_type, right_type = type_of(left), type_of(right)
    if not left_type.is_ord():
        raise NotOrderedType(left_type)
    if not right_type.is_ord():
        raise NotOrderedType(right_type)
    compare = _COMPARISONS[op]
    if left_type.is_number() and right_type.is_number():
        if left_type == right_type == JmlType.INT:
            return compare(left, right)
        return compare(float(left), float(right))
    if left_type == right_type and left_type in (JmlType.BOOL, JmlType.STRING):
        return compare(left, right)
    raise InvalidBinaryOperator(op.symbol(), left_type, right_type)


def _logical(op: BinaryOp, left: Any, right: Any) -> bool:
    left_type, right_type = type_of(left), type_of(right)
    if left_type == right_type == JmlType.BOOL:
        return (left and right) if op is BinaryOp.AND else (left or right)
    raise InvalidBinaryOperator(op.symbol(), left_type, right_type)


def _concat(left: Any, right: Any) -> Any:
    left_type, right_type = type_of(left), type_of(right)
    if left_type == right_type:
        if left_type == JmlType.STRING:
            return left + right
        if left_type == JmlType.LIST:
            return [*left, *right]
        if left_type == JmlType.OBJECT:
            merged = dict(left)
            merged.update(right)
            return merged
    raise InvalidBinaryOperator("concat", left_type, right_type)


def binary_op(op: BinaryOp, left: Any, right: Any) -> Any:
    """Apply a binary operator to two evaluated operands."""
    if op is BinaryOp.EQ:
        return values_equal(left, right)
    if op is BinaryOp.NE:
        return not values_equal(left, right)
    if op in _COMPARISONS:
        return _compare(op, left, right)
    if op in (BinaryOp.AND, BinaryOp.OR):
        return _logical(op, left, right)
    if op is BinaryOp.CONCAT:
        return _concat(left, right)
    symbol = op.symbol()
    if op is BinaryOp.SUM:
        return _arithmetic(symbol, left, right, operator.add, lambda a, b: _checked(a + b))
    if op is BinaryOp.SUB:
        return _arithmetic(symbol, left, right, operator.sub, lambda a, b: _checked(a - b))
    if op is BinaryOp.MUL:
        return _arithmetic(symbol, left, right, operator.mul, lambda a, b: _checked(a * b))
    if op is BinaryOp.DIV:
        if is_zero(right):
            raise DivisionByZero()
        return _arithmetic(symbol, left, right, operator.truediv, _int_div)
    if op is BinaryOp.MOD:
        if is_zero(right):
            raise DivisionByZero()
        return _arithmetic(symbol, left, right, _fmod, _int_rem)
    if op is BinaryOp.POW:
        return _arithmetic(symbol, left, right, _powf, _int_pow)
    raise ValueError(f"unknown binary operator: {op!r}")


def unary_op(op: UnaryOp, value: Any) -> Any:
    """Apply a unary operator to an evaluated operand."""
    value_type = type_of(value)
    if op is UnaryOp.MINUS:
        if value_type == JmlType.FLOAT:
            return -value
        if value_type == JmlType.INT:
            return _checked(-value)
        raise InvalidUnaryOperator("-", value_type)
    if op is UnaryOp.NOT:
        if value_type == JmlType.BOOL:
            return not value
        raise InvalidUnaryOperator("!", value_type)
    raise ValueError(f"unknown unary operator: {op!r}")