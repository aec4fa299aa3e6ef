"""Syntax tree of a JML program.

Every node records the offsets ``l`` and ``r`` of the text it was parsed
from. Offsets take no part in equality, so trees can be compared by shape.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Tuple, Union


class BinaryOp(enum.Enum):
    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    SUM = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    MOD = "%"
    AND = "&&"
    OR = "||"
    CONCAT = "++"

    def symbol(self) -> str:
        """The operator as written in source text."""
        return self.value


class UnaryOp(enum.Enum):
    MINUS = "-"
    NOT = "!"


@dataclass(frozen=True)
class _Node:
    l: int = field(default=0, kw_only=True, compare=False)
    r: int = field(default=0, kw_only=True, compare=False)


@dataclass(frozen=True)
class Identifier(_Node):
    name: str


@dataclass(frozen=True)
class NullLiteral(_Node):
    pass


@dataclass(frozen=True)
class FloatLiteral(_Node):
    value: float


@dataclass(frozen=True)
class BoolLiteral(_Node):
    value: bool


@dataclass(frozen=True)
class IntLiteral(_Node):
    value: int


@dataclass(frozen=True)
class StringLiteral(_Node):
    value: str


@dataclass(frozen=True)
class ObjectExpr(_Node):
    """Object constructor; a key is an identifier or an expression."""

    entries: Tuple[Tuple["Key", "Expression"], ...]


@dataclass(frozen=True)
class ListExpr(_Node):
    items: Tuple["Expression", ...]


@dataclass(frozen=True)
class Variable(_Node):
    name: str


@dataclass(frozen=True)
class IndexAccess(_Node):
    target: "Expression"
    index: "Expression"


@dataclass(frozen=True)
class Selector(_Node):
    target: "Expression"
    key: str


@dataclass(frozen=True)
class UnaryExpr(_Node):
    op: UnaryOp
    operand: "Expression"


@dataclass(frozen=True)
class BinaryExpr(_Node):
    op: BinaryOp
    lhs: "Expression"
    rhs: "Expression"


@dataclass(frozen=True)
class IfExpr(_Node):
    condition: "Expression"
    then_branch: "Expression"
    else_branch: "Expression"


@dataclass(frozen=True)
class LambdaExpr(_Node):
    params: Tuple[Identifier, ...]
    body: "Expression"


@dataclass(frozen=True)
class Apply(_Node):
    function: "Expression"
    args: Tuple["Expression", ...]


Expression = Union[
    NullLiteral,
    FloatLiteral,
    BoolLiteral,
    IntLiteral,
    StringLiteral,
    ObjectExpr,
    ListExpr,
    Variable,
    IndexAccess,
    Selector,
    UnaryExpr,
    BinaryExpr,
    IfExpr,
    LambdaExpr,
    Apply,
]

Key = Union[Identifier, Expression]


@dataclass(frozen=True)
class Bind(_Node):
    """A header statement binding a name to an expression."""

    identifier: Identifier
    expression: Expression


Statement = Bind


@dataclass(frozen=True)
class Jml:
    """A whole program: header statements followed by a body expression."""

    header: Tuple[Bind, ...]
    body: Expression