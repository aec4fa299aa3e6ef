"""Variable scopes used while evaluating JML programs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .errors import UndefinedVariable


@dataclass(frozen=True)
class ExpressionBinding:
    """A name bound to an expression that has not been evaluated yet."""

    expression: Any


@dataclass(frozen=True)
class ValueBinding:
    """A name bound to an evaluated value."""

    value: Any


Binding = Union[ExpressionBinding, ValueBinding]


class Context:
    """A scope of bindings that falls back to an optional parent scope."""

    def __init__(self, parent: Optional["Context"] = None) -> None:
        self.parent = parent
        self._bindings: Dict[str, Binding] = {}

    def bind_expr(self, name: str, expr: Any) -> None:
        """Bind ``name`` to an unevaluated expression in this scope."""
        self._bindings[str(name)] = ExpressionBinding(expr)

    def bind_value(self, name: str, value: Any) -> None:
        """Bind ``name`` to a value in this scope, replacing any binding."""
        self._bindings[str(name)] = ValueBinding(value)

    def lookup(self, name: str) -> Binding:
        """Find the binding of ``name`` here or in an enclosing scope.

        Raises :class:`UndefinedVariable` when no scope binds the name.
        """
        scope: Optional[Context] = self
        while scope is not None:
            binding = scope._bindings.get(name)
            if binding is not None:
                return binding
            scope = scope.parent
        raise UndefinedVariable(name)

    def copy(self) -> "Context":
        """A new scope with the same bindings and the same parent."""
        duplicate = Context(self.parent)
        duplicate._bindings = dict(self._bindings)
        return duplicate

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            self.lookup(name)
        except UndefinedVariable:
            return False
        return True