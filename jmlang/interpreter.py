"""Running whole JML programs."""

from __future__ import annotations

from typing import Any

from .ast import Jml
from .context import Context
from .errors import EvalError
from .evaluator import eval_expr, eval_stmt
from .stdlib import define_std_lib


def eval_with_ctx(jml: Jml, ctx: Context) -> Any:
    """Evaluate a program in ``ctx`` after defining the built-ins there."""
    define_std_lib(ctx)
    for stmt in jml.header:
        eval_stmt(stmt, ctx)
    return eval_expr(jml.body, ctx)


def eval_with_ctx_source(jml: Jml, source: str, ctx: Context) -> Any:
    """Like :func:`eval_with_ctx`; errors carry the source as ``.source``."""
    try:
        return eval_with_ctx(jml, ctx)
    except EvalError as exc:
        exc.source = source
        raise


def eval_with_source(jml: Jml, source: str) -> Any:
    """Evaluate a program in a fresh context; errors carry the source."""
    return eval_with_ctx_source(jml, source, Context())