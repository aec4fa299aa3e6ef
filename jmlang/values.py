"""JML runtime values.

Values are plain Python objects: ``None`` (null), ``bool``, ``int``,
``float``, ``str``, ``list``, ``dict`` (insertion ordered) and
:class:`Lambda`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Tuple, Union

from .errors import MismatchedTypes
from .types import JmlType

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


@dataclass(eq=False)
class Lambda:
    """A function value; the body is an expression or a native callable."""

    params: Tuple[str, ...]
    body: Union[Any, Callable[..., Any]]

    def __post_init__(self) -> None:
        self.params = tuple(self.params)

    @property
    def is_native(self) -> bool:
        return callable(self.body)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Lambda):
            return NotImplemented
        return len(self.params) == len(other.params)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"lambda ({', '.join(self.params)}) -> output"


def type_of(value: Any) -> JmlType:
    """The JML type of a value."""
    if value is None:
        return JmlType.NULL
    if isinstance(value, bool):
        return JmlType.BOOL
    if isinstance(value, int):
        return JmlType.INT
    if isinstance(value, float):
        return JmlType.FLOAT
    if isinstance(value, str):
        return JmlType.STRING
    if isinstance(value, list):
        return JmlType.LIST
    if isinstance(value, dict):
        return JmlType.OBJECT
    if isinstance(value, Lambda):
        return JmlType.lambda_of(len(value.params))
    raise TypeError(f"not a JML value: {value!r}")


def values_equal(left: Any, right: Any) -> bool:
    """Structural equality; values of different types are never equal."""
    if type_of(left).name != type_of(right).name:
        return False
    if isinstance(left, list):
        return len(left) == len(right) and all(
            values_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, dict):
        return left.keys() == right.keys() and all(
            values_equal(item, right[key]) for key, item in left.items()
        )
    return left == right


def is_truthy(value: Any) -> bool:
    """Only the boolean ``true`` is truthy."""
    return value is True


def is_zero(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0


def as_int(value: Any) -> int:
    """Return an Int value, or raise :class:`MismatchedTypes`."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise MismatchedTypes([JmlType.INT], type_of(value))


def as_str(value: Any) -> str:
    """Return a String value, or raise :class:`MismatchedTypes`."""
    if isinstance(value, str):
        return value
    raise MismatchedTypes([JmlType.INT], type_of(value))


def list_item(items: list, index: int) -> Any:
    """The element at ``index``, or null when it is out of range."""
    if 0 <= index < len(items):
        return items[index]
    return None


def string_char(text: str, index: int) -> Any:
    """The character at ``index`` as a string, or null."""
    if 0 <= index < len(text):
        return text[index]
    return None


def object_item(mapping: dict, key: str) -> Any:
    """The value under ``key``, or null when absent."""
    return mapping.get(key)


def _format_float(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer():
        text = str(int(number))
        if text == "0" and math.copysign(1.0, number) < 0:
            return "-0"
        return text
    return format(Decimal(repr(number)), "f")


def display(value: Any) -> str:
    """Human-readable text of a value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list):
        return "[" + ", ".join(display(item) for item in value) + "]"
    if isinstance(value, dict):
        entries = (f'"{key}": {display(item)}' for key, item in value.items())
        return "{" + ", ".join(entries) + "}"
    if isinstance(value, Lambda):
        return str(value)
    raise TypeError(f"not a JML value: {value!r}")


def from_json(data: Any) -> Any:
    """Build a JML value from data decoded from JSON."""
    if data is None or isinstance(data, (bool, str, float)):
        return data
    if isinstance(data, int):
        return data if _I64_MIN <= data <= _I64_MAX else float(data)
    if isinstance(data, list):
        return [from_json(item) for item in data]
    if isinstance(data, dict):
        return {str(key): from_json(item) for key, item in data.items()}
    raise TypeError(f"not JSON data: {data!r}")


def to_json(value: Any) -> Any:
    """Turn a JML value into data that the ``json`` module can encode."""
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, list):
        return [to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    if isinstance(value, Lambda):
        raise ValueError("a lambda cannot be serialized to JSON")
    raise TypeError(f"not a JML value: {value!r}")