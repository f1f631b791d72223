"""Swiftlet error types with source location info."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from swiftlet.lexer import Token, TokenType


class SwiftletError(Exception):
    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Line {line}, Col {column}: {message}")


class LexerError(SwiftletError):
    pass


class ConfigError(SwiftletError):
    """Invalid value in swiftlet.config."""
    pass


class ParseError(SwiftletError):
    """Base syntax error.

    Carries the set of token types that would have been accepted at the
    failing position and the token actually found there.
    """

    kind = "syntax-error"
    recoverable = True

    def __init__(
        self,
        message: str,
        line: int = 0,
        column: int = 0,
        expected: frozenset[TokenType] = frozenset(),
        actual: Token | None = None,
    ):
        super().__init__(message, line, column)
        self.expected = frozenset(expected)
        self.actual = actual


class UnexpectedToken(ParseError):
    kind = "unexpected-token"


class UnterminatedConstruct(ParseError):
    """A block, parenthesis or argument list ran into end of input."""
    kind = "unterminated-construct"


class NoViableAlternative(ParseError):
    kind = "no-viable-alternative"


class NestingTooDeep(ParseError):
    """Recursion guard tripped. Always fatal for the parse that raised it."""
    kind = "nesting-too-deep"
    recoverable = False
