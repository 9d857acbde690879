"""AST for match expressions.

The Ast union type is pattern-matchable via match/case, so an evaluator can
dispatch on node kind exhaustively:

    match node:
        case Comparison(operator=op, left=Identifier(kind=k), right=Literal(value=v)):
            ...
        case LogicalExpression(left=lhs, right=rhs):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Operator(Enum):
    EQUALS = "=="
    NOT_EQUALS = "!="


class LogicalOperator(Enum):
    AND = "and"


class IdentifierKind(Enum):
    """Response attribute a comparison reads."""

    CODE = "code"
    SIZE = "size"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class Identifier:
    kind: IdentifierKind


@dataclass(frozen=True, slots=True)
class Literal:
    value: str


@dataclass(frozen=True, slots=True)
class Comparison:
    """``left operator right``, e.g. ``code == "200"``."""

    operator: Operator
    left: Identifier
    right: Literal


@dataclass(frozen=True, slots=True)
class LogicalExpression:
    """Both sides must hold. Chains fold to the left."""

    operator: LogicalOperator
    left: Ast
    right: Ast


type Ast = Comparison | LogicalExpression | Identifier | Literal


def unparse(node: Ast) -> str:
    """Render a node back to expression source.

    ``parse(unparse(ast)) == ast`` for every tree the parser produces.
    """
    match node:
        case Identifier(kind=kind):
            return kind.value
        case Literal(value=value):
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        case Comparison(operator=op, left=left, right=right):
            return f"{unparse(left)} {op.value} {unparse(right)}"
        case LogicalExpression(operator=op, left=left, right=right):
            return f"{unparse(left)} {op.value} {unparse(right)}"
        case _:  # pragma: no cover
            msg = f"unknown AST node: {type(node).__name__}"
            raise TypeError(msg)
