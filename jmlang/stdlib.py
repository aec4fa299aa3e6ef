"""Built-in functions available to every JML program."""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

from .context import Context
from .errors import JmlTypeError, MismatchedTypes
from .evaluator import apply_lambda
from .types import JmlType
from .values import Lambda, display, type_of

Span = Tuple[int, int]


def _expect(span: Span, value: Any, kind: type, jml_type: JmlType) -> Any:
    if not isinstance(value, kind):
        raise JmlTypeError(span, MismatchedTypes([jml_type], type_of(value)))
    return value


def log(span: Span, args: Sequence[Any], ctx: Context) -> Any:
    """Print ``message : value`` and return the value."""
    print(f"{display(args[0])} : {display(args[1])}")
    return args[1]


def map_list(span: Span, args: Sequence[Any], ctx: Context) -> List[Any]:
    """Apply a lambda to every element of a list."""
    items = _expect(span, args[0], list, JmlType.LIST)
    return [apply_lambda(span, args[1], [item], ctx) for item in items]


def filter_list(span: Span, args: Sequence[Any], ctx: Context) -> List[Any]:
    """Keep the elements for which the lambda returns ``true``."""
    items = _expect(span, args[0], list, JmlType.LIST)
    return [item for item in items if apply_lambda(span, args[1], [item], ctx) is True]


def reduce_list(span: Span, args: Sequence[Any], ctx: Context) -> Any:
    """Fold a list with a lambda called as ``(element, accumulator)``."""
    items = _expect(span, args[0], list, JmlType.LIST)
    accumulator = args[1]
    for item in items:
        accumulator = apply_lambda(span, args[2], [item, accumulator], ctx)
    return accumulator


def pluck(span: Span, args: Sequence[Any], ctx: Context) -> List[Any]:
    """Turn an object into a list of ``{"key": ..., "value": ...}`` objects."""
    mapping = _expect(span, args[0], dict, JmlType.OBJECT)
    return [{"key": key, "value": value} for key, value in mapping.items()]


def define_std_lib(ctx: Context) -> None:
    """Bind the built-in functions in ``ctx``."""
    ctx.bind_value("log", Lambda(("msg", "to_log"), log))
    ctx.bind_value("map", Lambda(("list", "lambda"), map_list))
    ctx.bind_value("filter", Lambda(("list", "lambda"), filter_list))
    ctx.bind_value("reduce", Lambda(("list", "acc", "lambda"), reduce_list))
    ctx.bind_value("pluck", Lambda(("object",), pluck))