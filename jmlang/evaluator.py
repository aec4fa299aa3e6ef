"""Evaluation of JML expressions and header statements."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Sequence, Tuple

from .ast import (
    Apply,
    BinaryExpr,
    Bind,
    BoolLiteral,
    FloatLiteral,
    Identifier,
    IfExpr,
    IndexAccess,
    IntLiteral,
    LambdaExpr,
    ListExpr,
    NullLiteral,
    ObjectExpr,
    Selector,
    StringLiteral,
    UnaryExpr,
    Variable,
)
from .context import Context, ExpressionBinding
from .errors import (
    ArgumentCountMismatch,
    JmlRuntimeError,
    JmlTypeError,
    MismatchedTypes,
    RuntimeErrorKind,
    TypeErrorKind,
)
from .operators import binary_op, unary_op
from .types import JmlType
from .values import (
    Lambda,
    as_int,
    as_str,
    display,
    is_truthy,
    list_item,
    object_item,
    string_char,
    type_of,
)

Span = Tuple[int, int]


def _span(node: Any) -> Span:
    return (node.l, node.r - node.l)


@contextmanager
def _located(span: Span) -> Iterator[None]:
    """Attach ``span`` to any error kind raised inside the block."""
    try:
        yield
    except TypeErrorKind as exc:
        raise JmlTypeError(span, exc) from exc
    except RuntimeErrorKind as exc:
        raise JmlRuntimeError(span, exc) from exc


def eval_stmt(stmt: Bind, ctx: Context) -> None:
    """Bind the statement's name to its unevaluated expression."""
    ctx.bind_expr(stmt.identifier.name, stmt.expression)


def eval_expr(expr: Any, ctx: Context) -> Any:
    """Evaluate an expression in ``ctx`` and return its value."""
    handler = _HANDLERS.get(type(expr))
    if handler is None:
        raise TypeError(f"not a JML expression: {expr!r}")
    return handler(expr, ctx)


def _check_callable(span: Span, function: Any, arg_count: int) -> Lambda:
    if not isinstance(function, Lambda):
        raise JmlTypeError(
            span, MismatchedTypes([JmlType.lambda_of(arg_count)], type_of(function))
        )
    if len(function.params) != arg_count:
        raise JmlTypeError(span, ArgumentCountMismatch(len(function.params), arg_count))
    return function


def apply_lambda(span: Span, function: Any, args: Sequence[Any], ctx: Context) -> Any:
    """Call a lambda value with already evaluated arguments."""
    function = _check_callable(span, function, len(args))
    if function.is_native:
        return function.body(span, list(args), ctx)
    local = Context(ctx.copy())
    for param, arg in zip(function.params, args):
        local.bind_value(param, arg)
    return eval_expr(function.body, local)


def _eval_apply(expr: Apply, ctx: Context) -> Any:
    span = _span(expr)
    function = _check_callable(span, eval_expr(expr.function, ctx), len(expr.args))
    if function.is_native:
        args = [eval_expr(arg, ctx) for arg in expr.args]
        return function.body(span, args, ctx)
    local = Context(ctx.copy())
    for param, arg in zip(function.params, expr.args):
        local.bind_value(param, eval_expr(arg, ctx))
    return eval_expr(function.body, local)


def _eval_lambda(expr: LambdaExpr, ctx: Context) -> Lambda:
    return Lambda(tuple(param.name for param in expr.params), expr.body)


def _eval_variable(expr: Variable, ctx: Context) -> Any:
    with _located(_span(expr)):
        binding = ctx.lookup(expr.name)
    if isinstance(binding, ExpressionBinding):
        return eval_expr(binding.expression, ctx)
    return binding.value


def _eval_selector(expr: Selector, ctx: Context) -> Any:
    target = eval_expr(expr.target, ctx)
    if isinstance(target, dict):
        return object_item(target, expr.key)
    raise JmlTypeError(
        _span(expr.target),
        MismatchedTypes([JmlType.LIST, JmlType.STRING], type_of(target)),
    )


def _eval_index_access(expr: IndexAccess, ctx: Context) -> Any:
    target = eval_expr(expr.target, ctx)
    index_span = _span(expr.index)
    if isinstance(target, list):
        with _located(index_span):
            index = as_int(eval_expr(expr.index, ctx))
        return list_item(target, index)
    if isinstance(target, str):
        with _located(index_span):
            index = as_int(eval_expr(expr.index, ctx))
        return string_char(target, index)
    if isinstance(target, dict):
        with _located(index_span):
            key = as_str(eval_expr(expr.index, ctx))
        return object_item(target, key)
    raise JmlTypeError(
        _span(expr.target),
        MismatchedTypes([JmlType.LIST, JmlType.STRING], type_of(target)),
    )


def _eval_unary(expr: UnaryExpr, ctx: Context) -> Any:
    value = eval_expr(expr.operand, ctx)
    with _located(_span(expr)):
        return unary_op(expr.op, value)


def _eval_binary(expr: BinaryExpr, ctx: Context) -> Any:
    left = eval_expr(expr.lhs, ctx)
    right = eval_expr(expr.rhs, ctx)
    with _located(_span(expr)):
        return binary_op(expr.op, left, right)


def _eval_if(expr: IfExpr, ctx: Context) -> Any:
    condition = eval_expr(expr.condition, ctx)
    if not type_of(condition).is_bool():
        raise JmlTypeError(
            _span(expr.condition), MismatchedTypes([JmlType.BOOL], type_of(condition))
        )
    branch = expr.then_branch if is_truthy(condition) else expr.else_branch
    return eval_expr(branch, ctx)


def _eval_list(expr: ListExpr, ctx: Context) -> List[Any]:
    return [eval_expr(item, ctx) for item in expr.items]


def _object_key(key: Any, ctx: Context) -> str:
    if isinstance(key, Identifier):
        return key.name
    value = eval_expr(key, ctx)
    value_type = type_of(value)
    if value_type == JmlType.STRING:
        return value
    if value_type == JmlType.INT:
        return str(value)
    if value_type == JmlType.FLOAT:
        return display(value)
    raise JmlTypeError(_span(key), MismatchedTypes([JmlType.STRING], value_type))


def _eval_object(expr: ObjectExpr, ctx: Context) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value_expr in expr.entries:
        value = eval_expr(value_expr, ctx)
        result[_object_key(key, ctx)] = value
    return result


def _literal(expr: Any, ctx: Context) -> Any:
    return expr.value


_HANDLERS: Dict[type, Callable[[Any, Context], Any]] = {
    NullLiteral: lambda expr, ctx: None,
    FloatLiteral: _literal,
    BoolLiteral: _literal,
    IntLiteral: _literal,
    StringLiteral: _literal,
    ObjectExpr: _eval_object,
    ListExpr: _eval_list,
    Variable: _eval_variable,
    IndexAccess: _eval_index_access,
    Selector: _eval_selector,
    UnaryExpr: _eval_unary,
    BinaryExpr: _eval_binary,
    IfExpr: _eval_if,
    LambdaExpr: _eval_lambda,
    Apply: _eval_apply,
}