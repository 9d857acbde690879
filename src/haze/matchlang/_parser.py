"""Finite-state parser for match expressions.

The parser pulls tokens from a cursor and walks an explicit state machine:

    CONSUMING -> CONSUMED_LEFT -> CONSUMED_OPERATOR -> CONSUMED_RIGHT
    CONSUMED_RIGHT -> DONE                      (no tokens left)
    CONSUMED_RIGHT -> CONSUMED_LOGICAL_OPERATOR (read 'and')
    CONSUMED_LOGICAL_OPERATOR -> CONSUMED_LEFT

Each pass through CONSUMED_RIGHT turns one (identifier, operator, literal)
triple into a Comparison. Comparisons joined by ``and`` fold to the left:

    a and b and c  ->  LogicalExpression(LogicalExpression(a, b), c)

Two comparisons with nothing between them are a syntax error.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from haze.matchlang._ast import (
    Ast,
    Comparison,
    Identifier,
    IdentifierKind,
    Literal,
    LogicalExpression,
    LogicalOperator,
    Operator,
)
from haze.matchlang._lexer import (
    IDENTIFIER_TOKENS,
    OPERATOR_TOKENS,
    MatchSyntaxError,
    TokenType,
    lex,
)

if TYPE_CHECKING:
    from collections.abc import Collection

    from haze.matchlang._lexer import Token

_IDENTIFIERS = {
    TokenType.CODE: IdentifierKind.CODE,
    TokenType.SIZE: IdentifierKind.SIZE,
    TokenType.TEXT: IdentifierKind.TEXT,
}
_OPERATORS = {
    TokenType.EQUALS: Operator.EQUALS,
    TokenType.NOT_EQUALS: Operator.NOT_EQUALS,
}


class ParserState(Enum):
    CONSUMING = auto()
    CONSUMED_LEFT = auto()
    CONSUMED_OPERATOR = auto()
    CONSUMED_RIGHT = auto()
    CONSUMED_LOGICAL_OPERATOR = auto()
    DONE = auto()


class TokenCursor:
    """Pull-based cursor over a token list."""

    def __init__(self, tokens: list[Token], end: int) -> None:
        self._tokens = tokens
        self._pos = 0
        self.end = end

    def peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def take(self, expected: Collection[TokenType], what: str) -> Token:
        """Consume the next token, which must be one of ``expected``."""
        token = self.peek()
        if token is None:
            msg = f"unexpected end of expression, expected {what}"
            raise MatchSyntaxError(msg, self.end)
        if token.type not in expected:
            msg = f"unexpected {token.value!r}, expected {what}"
            raise MatchSyntaxError(msg, token.position)
        self._pos += 1
        return token


class Parser:
    """One-shot parser: each instance owns its cursor and state."""

    def __init__(self, text: str) -> None:
        self.state = ParserState.CONSUMING
        self._cursor = TokenCursor(lex(text), len(text))
        self._ast: Ast | None = None
        # identifier, operator and literal of the comparison being read
        self._triple: list[Token] = []

    def parse(self) -> Ast:
        """Run the machine to completion and return the AST.

        Raises:
            MatchSyntaxError: On empty input, a token of the wrong kind,
                a truncated comparison or a trailing ``and``.
        """
        if self._cursor.peek() is None:
            raise MatchSyntaxError("empty expression", 0)
        while self.consume():
            pass
        if self._ast is None:
            raise MatchSyntaxError("empty expression", 0)
        return self._ast

    def consume(self) -> bool:
        """Advance one state. Returns False once the machine is done."""
        match self.state:
            case ParserState.DONE:
                return False
            case ParserState.CONSUMING | ParserState.CONSUMED_LOGICAL_OPERATOR:
                self._triple = [
                    self._cursor.take(IDENTIFIER_TOKENS, "an identifier (code, size or text)")
                ]
                self.state = ParserState.CONSUMED_LEFT
            case ParserState.CONSUMED_LEFT:
                self._triple.append(self._cursor.take(OPERATOR_TOKENS, "'==' or '!='"))
                self.state = ParserState.CONSUMED_OPERATOR
            case ParserState.CONSUMED_OPERATOR:
                self._triple.append(self._cursor.take({TokenType.LITERAL}, "a literal"))
                self.state = ParserState.CONSUMED_RIGHT
            case ParserState.CONSUMED_RIGHT:
                self._fold(self._comparison())
                if self._cursor.peek() is None:
                    self.state = ParserState.DONE
                else:
                    self._cursor.take({TokenType.AND}, "'and' or end of expression")
                    self.state = ParserState.CONSUMED_LOGICAL_OPERATOR
        return True

    def _comparison(self) -> Comparison:
        left, operator, right = self._triple
        return Comparison(
            operator=_OPERATORS[operator.type],
            left=Identifier(_IDENTIFIERS[left.type]),
            right=Literal(right.value),
        )

    def _fold(self, comparison: Comparison) -> None:
        if self._ast is None:
            self._ast = comparison
        else:
            self._ast = LogicalExpression(LogicalOperator.AND, self._ast, comparison)


def parse(text: str) -> Ast:
    """Parse a match expression into an AST.

    >>> from haze.matchlang import unparse
    >>> unparse(parse('code=="200"  and size!=0'))
    'code == "200" and size != "0"'
    """
    return Parser(text).parse()
