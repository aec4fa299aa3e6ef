"""Errors raised while evaluating JML programs."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from .types import JmlType

Span = Tuple[int, int]


class TypeErrorKind(Exception):
    """Base of the kinds of type errors."""

    code = "type_error"

    @property
    def help(self) -> Optional[str]:
        return None


class MismatchedTypes(TypeErrorKind):
    code = "type_error::mismatched_types"

    def __init__(self, expected: Iterable[JmlType], found: JmlType) -> None:
        self.expected = list(expected)
        self.found = found
        super().__init__(f"Mismatched types: expected {self.expected!r}, found {found!r}")


class ArgumentCountMismatch(TypeErrorKind):
    code = "type_error::argument_count_mismatch"

    def __init__(self, expected_count: int, actual_count: int) -> None:
        self.expected_count = expected_count
        self.actual_count = actual_count
        super().__init__(f"Expected {expected_count} arguments, but got {actual_count}")

    @property
    def help(self) -> Optional[str]:
        return (
            "Check the function call to ensure the correct number "
            "of arguments are provided."
        )


class NotOrderedType(TypeErrorKind):
    code = "type_error::not_ordered"

    def __init__(self, found: JmlType) -> None:
        self.found = found
        super().__init__(f"Type {found} is not ordered")


class InvalidBinaryOperator(TypeErrorKind):
    code = "type_error::invalid_binary_operator"

    def __init__(self, operator: str, left: JmlType, right: JmlType) -> None:
        self.operator = operator
        self.left = left
        self.right = right
        super().__init__(
            f"Binary operator '{operator}' cannot be applied to types {left} and {right}"
        )

    @property
    def help(self) -> Optional[str]:
        return f"Ensure the operator '{self.operator}' is used with compatible types."


class InvalidUnaryOperator(TypeErrorKind):
    code = "type_error::invalid_binary_operator"

    def __init__(self, operator: str, right: JmlType) -> None:
        self.operator = operator
        self.right = right
        super().__init__(
            f"Unary operator '{operator}' cannot be applied to type {right!r}"
        )

    @property
    def help(self) -> Optional[str]:
        return f"Ensure the operator '{self.operator}' is used with compatible type."


class RuntimeErrorKind(Exception):
    """Base of the kinds of runtime errors."""

    code = "eval"

    @property
    def help(self) -> Optional[str]:
        return None


class DivisionByZero(RuntimeErrorKind):
    code = "eval::division_by_zero"

    def __init__(self) -> None:
        super().__init__("Division by zero")

    @property
    def help(self) -> Optional[str]:
        return "Ensure the divisor is not zero before performing division."


class UndefinedVariable(RuntimeErrorKind):
    code = "eval::undefined_variable"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Undefined variable during evaluation: {name}")

    @property
    def help(self) -> Optional[str]:
        return f"Check if the variable '{self.name}' is defined before using it."


class Overflow(RuntimeErrorKind):
    code = "eval::overflow"

    def __init__(self) -> None:
        super().__init__("Overflow occurred during evaluation.")

    @property
    def help(self) -> Optional[str]:
        return (
            "Consider using a larger data type or rethinking the operation "
            "to avoid overflow."
        )


class GenericError(RuntimeErrorKind):
    code = "runtime_error::generic_runtime_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EvalError(Exception):
    """An error kind tied to the span of source where it happened."""

    title = "evaluation error"
    label = "Error occurred here"

    def __init__(self, span: Span, kind: Exception) -> None:
        super().__init__(f"{self.title}: {kind}")
        self.span = (span[0], span[1])
        self.kind = kind

    def render(self, source: str) -> str:
        """Describe the error with the line of ``source`` it points at."""
        offset = max(0, min(self.span[0], len(source)))
        line_start = source.rfind("\n", 0, offset) + 1
        line_end = source.find("\n", offset)
        if line_end == -1:
            line_end = len(source)
        line_no = source.count("\n", 0, offset) + 1
        column = offset - line_start + 1
        text = source[line_start:line_end]
        width = max(1, min(self.span[1], len(text) - column + 1))

        lines = [f"{self.title}: {self.kind}"]
        code = getattr(self.kind, "code", None)
        if code:
            lines.append(f"  [{code}]")
        lines.append(f"  --> {line_no}:{column}")
        lines.append(f"   | {text}")
        lines.append("   | " + " " * (column - 1) + "^" * width + f" {self.label}")
        help_text = getattr(self.kind, "help", None)
        if help_text:
            lines.append(f"  help: {help_text}")
        return "\n".join(lines)


class JmlTypeError(EvalError):
    """A type error at a span of source."""

    title = "type error"


class JmlRuntimeError(EvalError):
    """A runtime error at a span of source."""

    title = "runtime error"
    label = "Runtime error occurred here"