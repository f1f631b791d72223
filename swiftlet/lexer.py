"""Swiftlet lexer — scans source text into a flat list of tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from swiftlet.errors import LexerError


# ---------------------------------------------------------------------------
# Token types
# ---------------------------------------------------------------------------

class TokenType(Enum):
    # Literals
    IDENTIFIER = auto()
    DECIMAL_LITERAL = auto()
    STRING_LITERAL = auto()
    CHARACTER_LITERAL = auto()

    # Keywords
    TRUE = auto()
    FALSE = auto()
    FOR = auto()
    IN = auto()
    WHILE = auto()
    REPEAT = auto()
    IF = auto()
    ELSE = auto()
    BREAK = auto()
    CONTINUE = auto()
    RETURN = auto()
    LET = auto()
    VAR = auto()
    FUNC = auto()
    UNDERSCORE = auto()    # _

    # Type keywords
    INT = auto()
    BOOL = auto()
    DOUBLE = auto()
    CHARACTER = auto()
    STRING = auto()
    VOID = auto()

    # Arithmetic
    PLUS = auto()          # +
    MINUS = auto()         # -
    STAR = auto()          # *
    SLASH = auto()         # /
    PERCENT = auto()       # %
    CARET = auto()         # ^

    # Comparison
    GT = auto()            # >
    LT = auto()            # <
    GTE = auto()           # >=
    LTE = auto()           # <=
    DOUBLE_EQUALS = auto() # ==
    NOT_EQUALS = auto()    # !=

    # Compound assignment
    STAR_EQUALS = auto()   # *=
    SLASH_EQUALS = auto()  # /=
    PERCENT_EQUALS = auto()  # %=
    PLUS_EQUALS = auto()   # +=
    MINUS_EQUALS = auto()  # -=

    # Logical
    AND = auto()           # &&
    OR = auto()            # ||
    BANG = auto()          # !

    # Ranges
    HALF_OPEN_RANGE = auto()  # ..<
    CLOSED_RANGE = auto()     # ...

    # Punctuation
    ARROW = auto()         # ->
    DOT = auto()           # .
    EQUALS = auto()        # =
    COMMA = auto()         # ,
    COLON = auto()         # :
    SEMICOLON = auto()     # ;
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    EMPTY_PARENS = auto()  # ()
    LBRACE = auto()        # {
    RBRACE = auto()        # }

    EOF = auto()


# ---------------------------------------------------------------------------
# Keyword and operator lookup
# ---------------------------------------------------------------------------

KEYWORDS: dict[str, TokenType] = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "in": TokenType.IN,
    "while": TokenType.WHILE,
    "repeat": TokenType.REPEAT,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "return": TokenType.RETURN,
    "let": TokenType.LET,
    "var": TokenType.VAR,
    "func": TokenType.FUNC,
    "_": TokenType.UNDERSCORE,
    "Int": TokenType.INT,
    "Bool": TokenType.BOOL,
    "Double": TokenType.DOUBLE,
    "Character": TokenType.CHARACTER,
    "String": TokenType.STRING,
    "Void": TokenType.VOID,
}

# Grouped by length; the scanner tries the longest group first.
OPERATORS: dict[str, TokenType] = {
    "..<": TokenType.HALF_OPEN_RANGE,
    "...": TokenType.CLOSED_RANGE,
    "->": TokenType.ARROW,
    "()": TokenType.EMPTY_PARENS,
    ">=": TokenType.GTE,
    "<=": TokenType.LTE,
    "==": TokenType.DOUBLE_EQUALS,
    "!=": TokenType.NOT_EQUALS,
    "*=": TokenType.STAR_EQUALS,
    "/=": TokenType.SLASH_EQUALS,
    "%=": TokenType.PERCENT_EQUALS,
    "+=": TokenType.PLUS_EQUALS,
    "-=": TokenType.MINUS_EQUALS,
    "&&": TokenType.AND,
    "||": TokenType.OR,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "^": TokenType.CARET,
    ">": TokenType.GT,
    "<": TokenType.LT,
    "!": TokenType.BANG,
    ".": TokenType.DOT,
    "=": TokenType.EQUALS,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

_OPERATOR_LENGTHS = sorted({len(op) for op in OPERATORS}, reverse=True)


# Identifiers and numbers are ASCII only; str.isdigit/isalpha accept any Unicode.
def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_identifier_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_identifier_char(ch: str) -> bool:
    return _is_identifier_start(ch) or _is_digit(ch)


# ---------------------------------------------------------------------------
# Token dataclass
# ---------------------------------------------------------------------------

@dataclass
class Token:
    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

class Lexer:
    """Scans Swiftlet source text and produces a flat list of Token objects.

    Whitespace and ``//`` comments are dropped here, so the parser never
    sees layout tokens.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos: int = 0
        self.line: int = 1
        self.col: int = 1

    # -- Character-level helpers -------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at EOF."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def peek(self) -> str:
        """Look ahead one character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < len(self.source):
            return self.source[next_pos]
        return ""

    def advance(self) -> str:
        """Consume and return the current character, advancing position."""
        ch = self._current()
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    # -- Main entry point --------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return a list of tokens ending with EOF."""
        tokens: list[Token] = []

        while self.pos < len(self.source):
            ch = self._current()

            if ch in (" ", "\t", "\r", "\n"):
                self.advance()
                continue

            # Comments: // to end of line
            if ch == "/" and self.peek() == "/":
                self._skip_comment()
                continue

            if ch == '"':
                tokens.append(self._read_quoted('"', TokenType.STRING_LITERAL, "string"))
                continue

            if ch == "'":
                tokens.append(self._read_quoted("'", TokenType.CHARACTER_LITERAL, "character"))
                continue

            if _is_digit(ch):
                tokens.append(self._read_number())
                continue

            if _is_identifier_start(ch):
                tokens.append(self._read_identifier())
                continue

            op_token = self._read_operator()
            if op_token is not None:
                tokens.append(op_token)
                continue

            raise LexerError(f"Unexpected character: {ch!r}", self.line, self.col)

        tokens.append(Token(TokenType.EOF, "", self.line, self.col))
        return tokens

    # -- Token readers -----------------------------------------------------

    def _skip_comment(self) -> None:
        """Consume from // to end of line (or end of source)."""
        while self.pos < len(self.source) and self._current() != "\n":
            self.advance()

    def _read_quoted(self, quote: str, token_type: TokenType, what: str) -> Token:
        """Read a quoted literal. The content is kept verbatim, escapes included."""
        start_line = self.line
        start_col = self.col
        self.advance()  # consume opening quote

        value_chars: list[str] = []

        while self.pos < len(self.source):
            ch = self._current()
            if ch == quote:
                self.advance()  # consume closing quote
                return Token(token_type, "".join(value_chars), start_line, start_col)
            if ch == "\n":
                raise LexerError(f"Unterminated {what} literal", start_line, start_col)
            if ch == "\\" and self.peek() != "":
                value_chars.append(self.advance())
            value_chars.append(self.advance())

        raise LexerError(f"Unterminated {what} literal", start_line, start_col)

    def _read_number(self) -> Token:
        """Read a digit run. Fractions are assembled by the parser from DOT tokens."""
        start_line = self.line
        start_col = self.col
        chars: list[str] = []

        while self.pos < len(self.source) and _is_digit(self._current()):
            chars.append(self.advance())

        return Token(TokenType.DECIMAL_LITERAL, "".join(chars), start_line, start_col)

    def _read_identifier(self) -> Token:
        """Read an identifier or keyword: [a-zA-Z_][a-zA-Z0-9_]*"""
        start_line = self.line
        start_col = self.col
        chars: list[str] = []

        while self.pos < len(self.source) and _is_identifier_char(self._current()):
            chars.append(self.advance())

        word = "".join(chars)
        token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
        return Token(token_type, word, start_line, start_col)

    def _read_operator(self) -> Token | None:
        """Match the longest operator or punctuation at the current position."""
        if self.source.startswith("..", self.pos) and self.source[self.pos:self.pos + 3] not in OPERATORS:
            raise LexerError("Incomplete range operator: expected '..<' or '...'", self.line, self.col)

        for length in _OPERATOR_LENGTHS:
            text = self.source[self.pos:self.pos + length]
            token_type = OPERATORS.get(text)
            if token_type is None:
                continue
            tok = Token(token_type, text, self.line, self.col)
            for _ in range(length):
                self.advance()
            return tok
        return None


def tokenize(source: str) -> list[Token]:
    """Convenience wrapper: scan *source* into tokens."""
    return Lexer(source).tokenize()
