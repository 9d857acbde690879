"""Lexer for the match expression language.

    code == "200" and size != "0"

Keywords are ``code``, ``size``, ``text`` (identifiers) and ``and``.
Operators are ``==`` and ``!=``. Literals are double-quoted strings with
``\\"`` and ``\\\\`` escapes, or bare words such as ``200``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MatchSyntaxError(ValueError):
    """A match expression could not be tokenized or parsed."""

    def __init__(self, message: str, position: int) -> None:
        self.message = message
        self.position = position
        super().__init__(f"{message} at position {position}")


class TokenType(Enum):
    CODE = "code"
    SIZE = "size"
    TEXT = "text"
    EQUALS = "=="
    NOT_EQUALS = "!="
    AND = "and"
    LITERAL = "literal"


IDENTIFIER_TOKENS = frozenset({TokenType.CODE, TokenType.SIZE, TokenType.TEXT})
OPERATOR_TOKENS = frozenset({TokenType.EQUALS, TokenType.NOT_EQUALS})

_KEYWORDS = {
    "code": TokenType.CODE,
    "size": TokenType.SIZE,
    "text": TokenType.TEXT,
    "and": TokenType.AND,
}
_OPERATORS = {
    "==": TokenType.EQUALS,
    "!=": TokenType.NOT_EQUALS,
}
_ESCAPES = {'"': '"', "\\": "\\"}
# Characters that end a bare word.
_DELIMITERS = frozenset('"=!')


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    value: str
    position: int


def lex(text: str) -> list[Token]:
    """Split an expression into tokens.

    Raises:
        MatchSyntaxError: On an unterminated string, an unknown escape or a
            lone ``=`` / ``!``.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char.isspace():
            pos += 1
        elif char == '"':
            token, pos = _lex_string(text, pos)
            tokens.append(token)
        elif char in "=!":
            op = text[pos : pos + 2]
            if op not in _OPERATORS:
                msg = f"unexpected character {char!r}, expected '==' or '!='"
                raise MatchSyntaxError(msg, pos)
            tokens.append(Token(_OPERATORS[op], op, pos))
            pos += 2
        else:
            token, pos = _lex_word(text, pos)
            tokens.append(token)
    return tokens


def _lex_string(text: str, start: int) -> tuple[Token, int]:
    chars: list[str] = []
    pos = start + 1
    while pos < len(text):
        char = text[pos]
        if char == '"':
            return Token(TokenType.LITERAL, "".join(chars), start), pos + 1
        if char == "\\":
            escaped = text[pos + 1 : pos + 2]
            if not escaped:
                break
            if escaped not in _ESCAPES:
                msg = f"unknown escape sequence '\\{escaped}'"
                raise MatchSyntaxError(msg, pos)
            chars.append(_ESCAPES[escaped])
            pos += 2
        else:
            chars.append(char)
            pos += 1
    raise MatchSyntaxError("unterminated string literal", start)


def _lex_word(text: str, start: int) -> tuple[Token, int]:
    pos = start
    while pos < len(text) and not text[pos].isspace() and text[pos] not in _DELIMITERS:
        pos += 1
    word = text[start:pos]
    token_type = _KEYWORDS.get(word, TokenType.LITERAL)
    return Token(token_type, word, start), pos
