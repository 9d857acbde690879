"""haze.matchlang: the match expression language.

    from haze.matchlang import parse
    ast = parse('code == "200" and size != "0"')

Parsing only: evaluating an AST against a response is left to the caller.
"""

from haze.matchlang._ast import (
    Ast,
    Comparison,
    Identifier,
    IdentifierKind,
    Literal,
    LogicalExpression,
    LogicalOperator,
    Operator,
    unparse,
)
from haze.matchlang._lexer import MatchSyntaxError, Token, TokenType, lex
from haze.matchlang._parser import Parser, ParserState, parse

__all__ = [
    # AST
    "Ast",
    "Comparison",
    "Identifier",
    "IdentifierKind",
    "Literal",
    "LogicalExpression",
    "LogicalOperator",
    "Operator",
    "unparse",
    # Lexer
    "MatchSyntaxError",
    "Token",
    "TokenType",
    "lex",
    # Parser
    "Parser",
    "ParserState",
    "parse",
]
