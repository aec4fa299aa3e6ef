"""Runtime types of JML values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

_NAMES = ("Null", "String", "Bool", "Int", "Float", "List", "Object", "Lambda")


@dataclass(frozen=True)
class JmlType:
    """A JML type; lambda types also carry their arity."""

    name: str
    arity: Optional[int] = None

    NULL: ClassVar["JmlType"]
    STRING: ClassVar["JmlType"]
    BOOL: ClassVar["JmlType"]
    INT: ClassVar["JmlType"]
    FLOAT: ClassVar["JmlType"]
    LIST: ClassVar["JmlType"]
    OBJECT: ClassVar["JmlType"]

    def __post_init__(self) -> None:
        if self.name not in _NAMES:
            raise ValueError(f"unknown JML type: {self.name!r}")
        if (self.name == "Lambda") != (self.arity is not None):
            raise ValueError("only lambda types carry an arity")

    @staticmethod
    def lambda_of(arity: int) -> "JmlType":
        """The type of a lambda taking ``arity`` arguments."""
        return JmlType("Lambda", arity)

    def is_comparable(self) -> bool:
        return self.name != "Lambda"

    def is_ord(self) -> bool:
        return self.name not in ("Lambda", "Object", "List")

    def is_number(self) -> bool:
        return self.name in ("Float", "Int")

    def is_bool(self) -> bool:
        return self.name == "Bool"

    def __str__(self) -> str:
        if self.arity is None:
            return self.name
        params = ", ".join(chr(ord("a") + i) for i in range(self.arity))
        return f"Fn ({params}) -> output"

    def __repr__(self) -> str:
        if self.arity is None:
            return self.name
        return f"Lambda {{ arity: {self.arity} }}"


JmlType.NULL = JmlType("Null")
JmlType.STRING = JmlType("String")
JmlType.BOOL = JmlType("Bool")
JmlType.INT = JmlType("Int")
JmlType.FLOAT = JmlType("Float")
JmlType.LIST = JmlType("List")
JmlType.OBJECT = JmlType("Object")