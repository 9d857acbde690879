"""Tests for the match expression lexer."""

from __future__ import annotations

import pytest

from haze.matchlang import MatchSyntaxError, Token, TokenType, lex


def types(text: str) -> list[TokenType]:
    return [t.type for t in lex(text)]


class TestLex:
    def test_comparison(self) -> None:
        assert lex('code == "200"') == [
            Token(TokenType.CODE, "code", 0),
            Token(TokenType.EQUALS, "==", 5),
            Token(TokenType.LITERAL, "200", 8),
        ]

    def test_keywords(self) -> None:
        assert types("code size text and") == [
            TokenType.CODE,
            TokenType.SIZE,
            TokenType.TEXT,
            TokenType.AND,
        ]

    def test_not_equals(self) -> None:
        assert types('size != "0"') == [
            TokenType.SIZE,
            TokenType.NOT_EQUALS,
            TokenType.LITERAL,
        ]

    def test_no_whitespace_needed_around_operators(self) -> None:
        assert [t.value for t in lex('text!="x"')] == ["text", "!=", "x"]

    def test_bare_literal(self) -> None:
        tokens = lex("code == 404")
        assert tokens[2] == Token(TokenType.LITERAL, "404", 8)

    def test_quoted_keyword_is_literal(self) -> None:
        assert lex('text == "code"')[2].type is TokenType.LITERAL

    def test_keywords_are_case_sensitive(self) -> None:
        assert types("CODE") == [TokenType.LITERAL]

    def test_escapes(self) -> None:
        assert lex(r'text == "say \"hi\" \\o/"')[2].value == 'say "hi" \\o/'

    def test_literal_with_spaces(self) -> None:
        assert lex('text == "not found"')[2].value == "not found"

    def test_empty_literal(self) -> None:
        assert lex('text == ""')[2].value == ""

    def test_empty_input(self) -> None:
        assert lex("   ") == []


class TestLexErrors:
    def test_unterminated_string(self) -> None:
        with pytest.raises(MatchSyntaxError, match="unterminated") as exc_info:
            lex('code == "200')
        assert exc_info.value.position == 8

    def test_trailing_backslash_is_unterminated(self) -> None:
        with pytest.raises(MatchSyntaxError, match="unterminated") as exc_info:
            lex('text == "abc\\')
        assert exc_info.value.position == 8

    def test_single_equals(self) -> None:
        with pytest.raises(MatchSyntaxError) as exc_info:
            lex('code = "200"')
        assert exc_info.value.position == 5

    def test_lone_bang(self) -> None:
        with pytest.raises(MatchSyntaxError):
            lex("code ! 200")

    def test_unknown_escape(self) -> None:
        with pytest.raises(MatchSyntaxError, match="escape"):
            lex(r'text == "\n"')
