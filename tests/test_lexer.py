"""Tests for Swiftlet lexer — tokenization of keywords, literals and operators."""

import pytest

from swiftlet.lexer import Lexer, Token, TokenType, tokenize
from swiftlet.errors import LexerError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def lex(source: str) -> list[Token]:
    """Convenience: tokenize source and return the token list."""
    return Lexer(source).tokenize()


def types(source: str) -> list[TokenType]:
    """Return just the token types (excluding EOF) for quick assertions."""
    return [t.type for t in lex(source) if t.type != TokenType.EOF]


def values(source: str) -> list[str]:
    """Return just the token values (excluding EOF)."""
    return [t.value for t in lex(source) if t.type != TokenType.EOF]


# ---------------------------------------------------------------------------
# Empty / Minimal Input
# ---------------------------------------------------------------------------

class TestEmptyInput:
    def test_empty_string(self):
        tokens = lex("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_whitespace_only(self):
        assert types("   \t \n\r\n  ") == []

    def test_comment_only(self):
        assert types("// nothing to see here") == []

    def test_comment_ends_at_newline(self):
        assert types("// note\nx") == [TokenType.IDENTIFIER]

    def test_tokenize_wrapper(self):
        assert [t.type for t in tokenize("x")] == [TokenType.IDENTIFIER, TokenType.EOF]


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

class TestNumbers:
    def test_integer(self):
        tokens = lex("42")
        assert tokens[0].type == TokenType.DECIMAL_LITERAL
        assert tokens[0].value == "42"

    def test_fraction_is_split_into_tokens(self):
        assert types("3.14") == [TokenType.DECIMAL_LITERAL, TokenType.DOT, TokenType.DECIMAL_LITERAL]
        assert values("3.14") == ["3", ".", "14"]

    def test_leading_dot(self):
        assert types(".5") == [TokenType.DOT, TokenType.DECIMAL_LITERAL]

    def test_negative_is_separate_minus(self):
        assert types("-5") == [TokenType.MINUS, TokenType.DECIMAL_LITERAL]

    @pytest.mark.parametrize("source", ["²", "1²", "².5", "a.²", "٣"])
    def test_non_ascii_digits_are_rejected(self, source):
        with pytest.raises(LexerError, match="Unexpected character"):
            lex(source)

    def test_digit_run_stops_before_non_ascii(self):
        with pytest.raises(LexerError) as exc_info:
            lex("12³")
        assert (exc_info.value.line, exc_info.value.column) == (1, 3)

    def test_range_after_number(self):
        assert types("0..<10") == [
            TokenType.DECIMAL_LITERAL,
            TokenType.HALF_OPEN_RANGE,
            TokenType.DECIMAL_LITERAL,
        ]
        assert types("1...4") == [
            TokenType.DECIMAL_LITERAL,
            TokenType.CLOSED_RANGE,
            TokenType.DECIMAL_LITERAL,
        ]


# ---------------------------------------------------------------------------
# Strings and characters
# ---------------------------------------------------------------------------

class TestQuoted:
    def test_string(self):
        tokens = lex('"hello world"')
        assert tokens[0].type == TokenType.STRING_LITERAL
        assert tokens[0].value == "hello world"

    def test_empty_string(self):
        tokens = lex('""')
        assert tokens[0].type == TokenType.STRING_LITERAL
        assert tokens[0].value == ""

    def test_escape_kept_verbatim(self):
        tokens = lex(r'"say \"hi\""')
        assert tokens[0].value == r'say \"hi\"'

    def test_character(self):
        tokens = lex("'a'")
        assert tokens[0].type == TokenType.CHARACTER_LITERAL
        assert tokens[0].value == "a"

    def test_unterminated_string(self):
        with pytest.raises(LexerError, match="Unterminated string"):
            lex('"oops')

    def test_string_cannot_span_lines(self):
        with pytest.raises(LexerError):
            lex('"one\ntwo"')

    def test_unterminated_character(self):
        with pytest.raises(LexerError, match="Unterminated character"):
            lex("'a")


# ---------------------------------------------------------------------------
# Identifiers and keywords
# ---------------------------------------------------------------------------

class TestIdentifiersAndKeywords:
    def test_identifier(self):
        tokens = lex("player_one2")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "player_one2"

    def test_underscore_alone_is_wildcard(self):
        assert types("_") == [TokenType.UNDERSCORE]

    def test_underscore_prefix_is_identifier(self):
        assert types("_x") == [TokenType.IDENTIFIER]

    def test_control_keywords(self):
        assert types("for in while repeat if else break continue return") == [
            TokenType.FOR,
            TokenType.IN,
            TokenType.WHILE,
            TokenType.REPEAT,
            TokenType.IF,
            TokenType.ELSE,
            TokenType.BREAK,
            TokenType.CONTINUE,
            TokenType.RETURN,
        ]

    @pytest.mark.parametrize("source", ["é", "café", "naïve = 1"])
    def test_non_ascii_letters_are_rejected(self, source):
        with pytest.raises(LexerError, match="Unexpected character"):
            lex(source)

    def test_identifier_with_digits_and_underscores(self):
        assert values("gem_2 _x9") == ["gem_2", "_x9"]

    def test_declaration_keywords(self):
        assert types("let var func") == [TokenType.LET, TokenType.VAR, TokenType.FUNC]

    def test_type_keywords_are_case_sensitive(self):
        assert types("Int Bool Double Character String Void") == [
            TokenType.INT,
            TokenType.BOOL,
            TokenType.DOUBLE,
            TokenType.CHARACTER,
            TokenType.STRING,
            TokenType.VOID,
        ]
        assert types("int") == [TokenType.IDENTIFIER]

    def test_booleans(self):
        assert types("true false") == [TokenType.TRUE, TokenType.FALSE]


# ---------------------------------------------------------------------------
# Operators and punctuation
# ---------------------------------------------------------------------------

class TestOperators:
    def test_arithmetic(self):
        assert types("+ - * / % ^") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.STAR,
            TokenType.SLASH,
            TokenType.PERCENT,
            TokenType.CARET,
        ]

    def test_comparison(self):
        assert types("> < >= <= == !=") == [
            TokenType.GT,
            TokenType.LT,
            TokenType.GTE,
            TokenType.LTE,
            TokenType.DOUBLE_EQUALS,
            TokenType.NOT_EQUALS,
        ]

    def test_compound_assignment(self):
        assert types("*= /= %= += -=") == [
            TokenType.STAR_EQUALS,
            TokenType.SLASH_EQUALS,
            TokenType.PERCENT_EQUALS,
            TokenType.PLUS_EQUALS,
            TokenType.MINUS_EQUALS,
        ]

    def test_logical(self):
        assert types("&& || !") == [TokenType.AND, TokenType.OR, TokenType.BANG]

    def test_arrow_wins_over_minus(self):
        assert types("->") == [TokenType.ARROW]

    def test_empty_parens_is_one_token(self):
        assert types("f()") == [TokenType.IDENTIFIER, TokenType.EMPTY_PARENS]

    def test_spaced_parens_stay_separate(self):
        assert types("f( )") == [TokenType.IDENTIFIER, TokenType.LPAREN, TokenType.RPAREN]

    def test_punctuation(self):
        assert types(". = , : ; { } ( )") == [
            TokenType.DOT,
            TokenType.EQUALS,
            TokenType.COMMA,
            TokenType.COLON,
            TokenType.SEMICOLON,
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.LPAREN,
            TokenType.RPAREN,
        ]

    def test_bang_equals_is_not_equals(self):
        assert types("a!=b") == [TokenType.IDENTIFIER, TokenType.NOT_EQUALS, TokenType.IDENTIFIER]

    def test_double_dot_is_an_error(self):
        with pytest.raises(LexerError, match="range operator"):
            lex("a..b")

    def test_unknown_character(self):
        with pytest.raises(LexerError, match="Unexpected character"):
            lex("x = @")


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

class TestPositions:
    def test_line_and_column(self):
        tokens = lex("let x = 1\n  x += 2")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (1, 5)
        plus_eq = tokens[5]
        assert plus_eq.type == TokenType.PLUS_EQUALS
        assert (plus_eq.line, plus_eq.column) == (2, 5)

    def test_eof_position(self):
        tokens = lex("x\n")
        assert tokens[-1].type == TokenType.EOF
        assert tokens[-1].line == 2

    def test_error_position(self):
        with pytest.raises(LexerError) as exc_info:
            lex("let x = 1\nlet y = #")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 9

    def test_token_repr(self):
        tok = lex("abc")[0]
        assert repr(tok) == "Token(IDENTIFIER, 'abc', L1:1)"
