"""Swiftlet parser — recursive-descent parser producing an AST from tokens.

Statements and declarations are parsed by plain recursive descent.
Expressions use precedence climbing over ``BINARY_OPERATORS``; the
primary alternatives (assignment, literal, call, member, variable, ``!``,
parenthesized) are told apart with at most two tokens of lookahead, so the
parser never rewinds.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable

from swiftlet.config import get_config, max_depth_ceiling
from swiftlet.lexer import Token, TokenType
from swiftlet.errors import (
    NestingTooDeep,
    NoViableAlternative,
    UnexpectedToken,
    UnterminatedConstruct,
)
from swiftlet.ast_nodes import (
    Program,
    Block,
    TypeName,
    IdentifierPattern,
    WildcardPattern,
    IntegerLiteral,
    DoubleLiteral,
    BooleanLiteral,
    StringLiteral,
    CharacterLiteral,
    Variable,
    MemberAccess,
    FunctionCall,
    Assignment,
    CompoundAssignment,
    NotExpression,
    BinaryOp,
    Parenthesized,
    ExpressionStatement,
    ForInStatement,
    WhileStatement,
    RepeatWhileStatement,
    IfStatement,
    BreakStatement,
    ContinueStatement,
    ReturnStatement,
    ConstantDeclaration,
    VariableDeclaration,
    FunctionDeclaration,
    Parameter,
)


# ---------------------------------------------------------------------------
# Operator table
# ---------------------------------------------------------------------------

LEFT = "left"
RIGHT = "right"
NONASSOC = "none"


@dataclass(frozen=True)
class BinaryOperator:
    symbol: str
    level: int
    assoc: str


BINARY_OPERATORS: dict[TokenType, BinaryOperator] = {
    TokenType.CARET: BinaryOperator("^", 10, RIGHT),
    TokenType.STAR: BinaryOperator("*", 9, LEFT),
    TokenType.SLASH: BinaryOperator("/", 9, LEFT),
    TokenType.PERCENT: BinaryOperator("%", 9, LEFT),
    TokenType.PLUS: BinaryOperator("+", 8, LEFT),
    TokenType.MINUS: BinaryOperator("-", 8, LEFT),
    TokenType.AND: BinaryOperator("&&", 7, LEFT),
    TokenType.OR: BinaryOperator("||", 7, LEFT),
    TokenType.GT: BinaryOperator(">", 5, LEFT),
    TokenType.LT: BinaryOperator("<", 5, LEFT),
    TokenType.GTE: BinaryOperator(">=", 5, LEFT),
    TokenType.LTE: BinaryOperator("<=", 5, LEFT),
    TokenType.DOUBLE_EQUALS: BinaryOperator("==", 4, LEFT),
    TokenType.NOT_EQUALS: BinaryOperator("!=", 4, LEFT),
    TokenType.HALF_OPEN_RANGE: BinaryOperator("..<", 1, NONASSOC),
    TokenType.CLOSED_RANGE: BinaryOperator("...", 1, NONASSOC),
}

RANGE_OPERATORS = frozenset({"..<", "..."})

# Operand of prefix ``!``: takes ``&&``/``||`` and tighter, stops at comparisons.
NOT_OPERAND_LEVEL = 6
# Value of a compound assignment stops short of range operators.
COMPOUND_VALUE_LEVEL = 3

COMPOUND_ASSIGNMENT_OPERATORS: dict[TokenType, str] = {
    TokenType.STAR_EQUALS: "*=",
    TokenType.SLASH_EQUALS: "/=",
    TokenType.PERCENT_EQUALS: "%=",
    TokenType.PLUS_EQUALS: "+=",
    TokenType.MINUS_EQUALS: "-=",
}

TYPE_NAMES: dict[TokenType, TypeName] = {
    TokenType.INT: TypeName.INT,
    TokenType.BOOL: TypeName.BOOL,
    TokenType.DOUBLE: TypeName.DOUBLE,
    TokenType.CHARACTER: TypeName.CHARACTER,
    TokenType.STRING: TypeName.STRING,
    TokenType.VOID: TypeName.VOID,
}


# ---------------------------------------------------------------------------
# First sets
# ---------------------------------------------------------------------------

PATTERN_START = frozenset({TokenType.IDENTIFIER, TokenType.UNDERSCORE})

NUMERIC_START = frozenset({TokenType.MINUS, TokenType.DECIMAL_LITERAL, TokenType.DOT})

LITERAL_START = NUMERIC_START | {
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.STRING_LITERAL,
    TokenType.CHARACTER_LITERAL,
}

EXPRESSION_START = LITERAL_START | PATTERN_START | {TokenType.BANG, TokenType.LPAREN}

STATEMENT_START = EXPRESSION_START | {
    TokenType.LET,
    TokenType.VAR,
    TokenType.FUNC,
    TokenType.FOR,
    TokenType.WHILE,
    TokenType.REPEAT,
    TokenType.IF,
    TokenType.BREAK,
    TokenType.CONTINUE,
    TokenType.RETURN,
}

# Tokens allowed right after a complete expression.
EXPRESSION_FOLLOW = STATEMENT_START | {
    TokenType.SEMICOLON,
    TokenType.COMMA,
    TokenType.RPAREN,
    TokenType.LBRACE,
    TokenType.RBRACE,
    TokenType.EOF,
}


def _describe(expected: Iterable[TokenType]) -> str:
    names = sorted(t.name for t in expected)
    if len(names) == 1:
        return names[0]
    return "one of " + ", ".join(names)


class Parser:
    """Recursive-descent parser for the Swiftlet language.

    Consumes a flat list of tokens (from the Lexer) and produces an AST
    rooted at a ``Program`` node.  Nesting of expressions, blocks and
    ``else if`` chains is capped at *max_depth*, itself capped at
    ``max_depth_ceiling()``; past it the parser raises ``NestingTooDeep``
    instead of exhausting the interpreter stack.
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        max_depth: int | None = None,
        allow_bare_return: bool | None = None,
    ) -> None:
        self.tokens = list(tokens)
        self.pos: int = 0
        self.depth: int = 0

        if max_depth is None or allow_bare_return is None:
            settings = get_config()["parser"]
            if max_depth is None:
                max_depth = settings["max_depth"]
            if allow_bare_return is None:
                allow_bare_return = settings["allow_bare_return"]
        self.max_depth = min(max_depth, max_depth_ceiling())
        self.allow_bare_return = allow_bare_return

    # -- Navigation helpers ------------------------------------------------

    def current(self) -> Token:
        """Return the token at the current position, or an EOF token if past end."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        # Synthesise an EOF token so callers never crash
        last = self.tokens[-1] if self.tokens else Token(TokenType.EOF, "", 1, 1)
        return Token(TokenType.EOF, "", last.line, last.column)

    def peek(self, offset: int = 1) -> Token:
        """Look ahead *offset* tokens without consuming."""
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        last = self.tokens[-1] if self.tokens else Token(TokenType.EOF, "", 1, 1)
        return Token(TokenType.EOF, "", last.line, last.column)

    def advance(self) -> Token:
        """Consume and return the current token, then increment pos."""
        tok = self.current()
        self.pos += 1
        return tok

    def expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches one of *types*, else raise UnexpectedToken."""
        if self.current().type not in types:
            raise self._unexpected(frozenset(types))
        return self.advance()

    def match(self, *types: TokenType) -> Token | None:
        """If the current token matches any of *types*, consume and return it; else None."""
        if self.current().type in types:
            return self.advance()
        return None

    def at_end(self) -> bool:
        """Check whether the current token is EOF."""
        return self.current().type == TokenType.EOF

    # -- Error helpers -----------------------------------------------------

    def _unexpected(self, expected: frozenset[TokenType]) -> UnexpectedToken:
        tok = self.current()
        return UnexpectedToken(
            f"Expected {_describe(expected)} but got {tok.type.name} ({tok.value!r})",
            tok.line,
            tok.column,
            expected=expected,
            actual=tok,
        )

    def _expect_closing(
        self,
        closer: TokenType,
        opener: Token,
        construct: str,
        alternatives: frozenset[TokenType] = frozenset(),
    ) -> Token:
        """Consume *closer*, reporting an unterminated *construct* if input ran out first."""
        tok = self.current()
        if tok.type == closer:
            return self.advance()
        expected = alternatives | {closer}
        self._check_not_eof(opener, construct, expected)
        raise self._unexpected(expected)

    def _check_not_eof(self, opener: Token, construct: str, expected: frozenset[TokenType]) -> None:
        """Report an unterminated *construct* when input ends inside it."""
        tok = self.current()
        if tok.type == TokenType.EOF:
            raise UnterminatedConstruct(
                f"Unterminated {construct} opened at line {opener.line}, col {opener.column}",
                tok.line,
                tok.column,
                expected=expected,
                actual=tok,
            )

    @contextmanager
    def _nested(self):
        """Track one level of syntactic nesting for the duration of the block."""
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                tok = self.current()
                raise NestingTooDeep(
                    f"Nesting exceeds the maximum depth of {self.max_depth}",
                    tok.line,
                    tok.column,
                    actual=tok,
                )
            yield
        finally:
            self.depth -= 1

    # -- Top-level ---------------------------------------------------------

    def parse(self) -> Program:
        """Parse the full token stream into a ``Program`` AST node."""
        first = self.current()
        statements = self._parse_statements()
        if not self.at_end():
            raise self._unexpected(STATEMENT_START | {TokenType.EOF})
        return Program(statements=tuple(statements), line=first.line, col=first.column)

    # -- Statement parsing -------------------------------------------------

    _STATEMENT_DISPATCH = {
        TokenType.LET: "_parse_constant_declaration",
        TokenType.VAR: "_parse_variable_declaration",
        TokenType.FUNC: "_parse_function_declaration",
        TokenType.FOR: "_parse_for_in",
        TokenType.WHILE: "_parse_while",
        TokenType.REPEAT: "_parse_repeat_while",
        TokenType.IF: "_parse_if",
        TokenType.BREAK: "_parse_break",
        TokenType.CONTINUE: "_parse_continue",
        TokenType.RETURN: "_parse_return",
    }

    def _parse_statements(self) -> list:
        """Parse statements until a token that cannot start one."""
        stmts = []
        while self.current().type in STATEMENT_START:
            stmts.append(self.parse_statement())
        return stmts

    def parse_statement(self):
        """Parse a single statement and its optional ``;`` terminator."""
        tok = self.current()
        handler = self._STATEMENT_DISPATCH.get(tok.type)

        if handler is not None:
            stmt = getattr(self, handler)()
        elif tok.type in EXPRESSION_START:
            expression = self.parse_expression()
            stmt = ExpressionStatement(expression=expression, line=tok.line, col=tok.column)
        else:
            raise NoViableAlternative(
                f"Expected a statement but got {tok.type.name} ({tok.value!r})",
                tok.line,
                tok.column,
                expected=STATEMENT_START,
                actual=tok,
            )

        self.match(TokenType.SEMICOLON)
        return stmt

    def parse_block(self) -> Block:
        """Parse ``{ <statements> }`` and return a ``Block``."""
        with self._nested():
            lbrace = self.expect(TokenType.LBRACE)
            stmts = self._parse_statements()
            self._expect_closing(TokenType.RBRACE, lbrace, "block", STATEMENT_START)
            return Block(statements=tuple(stmts), line=lbrace.line, col=lbrace.column)

    def _parse_for_in(self):
        """Parse ``for <pattern> in <expression> <block>``."""
        tok = self.expect(TokenType.FOR)
        pattern = self.parse_pattern()
        self.expect(TokenType.IN)
        sequence = self.parse_expression()
        body = self.parse_block()
        return ForInStatement(
            pattern=pattern,
            sequence=sequence,
            body=body,
            line=tok.line,
            col=tok.column,
        )

    def _parse_while(self):
        """Parse ``while <expression> <block>``."""
        tok = self.expect(TokenType.WHILE)
        condition = self.parse_expression()
        body = self.parse_block()
        return WhileStatement(condition=condition, body=body, line=tok.line, col=tok.column)

    def _parse_repeat_while(self):
        """Parse ``repeat <block> while <expression>``."""
        tok = self.expect(TokenType.REPEAT)
        body = self.parse_block()
        self.expect(TokenType.WHILE)
        condition = self.parse_expression()
        return RepeatWhileStatement(body=body, condition=condition, line=tok.line, col=tok.column)

    def _parse_if(self):
        """Parse an if statement with an optional else clause.

        ``else if`` recurses into this method, so every ``else`` attaches
        to the nearest ``if`` that has none yet.
        """
        with self._nested():
            tok = self.expect(TokenType.IF)
            condition = self.parse_expression()
            then_block = self.parse_block()

            else_branch = None
            if self.match(TokenType.ELSE):
                if self.current().type == TokenType.IF:
                    else_branch = self._parse_if()
                elif self.current().type == TokenType.LBRACE:
                    else_branch = self.parse_block()
                else:
                    raise self._unexpected(frozenset({TokenType.IF, TokenType.LBRACE}))

            return IfStatement(
                condition=condition,
                then_block=then_block,
                else_branch=else_branch,
                line=tok.line,
                col=tok.column,
            )

    def _parse_break(self):
        tok = self.expect(TokenType.BREAK)
        return BreakStatement(line=tok.line, col=tok.column)

    def _parse_continue(self):
        tok = self.expect(TokenType.CONTINUE)
        return ContinueStatement(line=tok.line, col=tok.column)

    def _parse_return(self):
        """Parse ``return <expression>``; bare ``return`` only when configured."""
        tok = self.expect(TokenType.RETURN)
        if self.allow_bare_return and self.current().type in (
            TokenType.RBRACE,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ):
            return ReturnStatement(value=None, line=tok.line, col=tok.column)
        value = self.parse_expression()
        return ReturnStatement(value=value, line=tok.line, col=tok.column)

    # -- Declaration parsing -----------------------------------------------

    def _parse_constant_declaration(self):
        """Parse ``let <pattern> = <expression>``."""
        tok = self.expect(TokenType.LET)
        pattern = self.parse_pattern()
        self.expect(TokenType.EQUALS)
        value = self.parse_expression()
        return ConstantDeclaration(pattern=pattern, value=value, line=tok.line, col=tok.column)

    def _parse_variable_declaration(self):
        """Parse ``var <pattern> = <expression>``."""
        tok = self.expect(TokenType.VAR)
        pattern = self.parse_pattern()
        self.expect(TokenType.EQUALS)
        value = self.parse_expression()
        return VariableDeclaration(pattern=pattern, value=value, line=tok.line, col=tok.column)

    def _parse_function_declaration(self):
        """Parse a function declaration.

        ::

            func name(param: Type, ...) [-> Type] {
                <body>
            }
        """
        tok = self.expect(TokenType.FUNC)
        name_tok = self.expect(TokenType.IDENTIFIER)
        parameters = self._parse_parameter_clause()

        result_type = None
        if self.match(TokenType.ARROW):
            result_type = self.parse_type()

        body = self.parse_block()
        return FunctionDeclaration(
            name=name_tok.value,
            parameters=parameters,
            result_type=result_type,
            body=body,
            line=tok.line,
            col=tok.column,
        )

    def _parse_parameter_clause(self) -> tuple:
        """Parse ``()`` or ``(name: Type, ...)``."""
        if self.match(TokenType.EMPTY_PARENS):
            return ()
        lparen = self.expect(TokenType.LPAREN, TokenType.EMPTY_PARENS)

        params: list[Parameter] = []
        self._check_not_eof(lparen, "parameter list", frozenset({TokenType.IDENTIFIER, TokenType.RPAREN}))
        if self.current().type != TokenType.RPAREN:
            params.append(self._parse_parameter())
            while self.match(TokenType.COMMA):
                self._check_not_eof(lparen, "parameter list", frozenset({TokenType.IDENTIFIER}))
                params.append(self._parse_parameter())

        self._expect_closing(
            TokenType.RPAREN, lparen, "parameter list", frozenset({TokenType.COMMA})
        )
        return tuple(params)

    def _parse_parameter(self) -> Parameter:
        name_tok = self.expect(TokenType.IDENTIFIER)
        self.expect(TokenType.COLON)
        param_type = self.parse_type()
        return Parameter(name=name_tok.value, type=param_type, line=name_tok.line, col=name_tok.column)

    # -- Patterns, types and literals --------------------------------------

    def parse_pattern(self):
        """Parse an identifier pattern or the ``_`` wildcard."""
        tok = self.current()
        if tok.type == TokenType.IDENTIFIER:
            self.advance()
            return IdentifierPattern(name=tok.value, line=tok.line, col=tok.column)
        if tok.type == TokenType.UNDERSCORE:
            self.advance()
            return WildcardPattern(line=tok.line, col=tok.column)
        raise self._unexpected(PATTERN_START)

    def parse_type(self) -> TypeName:
        """Parse one of the built-in type keywords."""
        type_name = TYPE_NAMES.get(self.current().type)
        if type_name is None:
            raise self._unexpected(frozenset(TYPE_NAMES))
        self.advance()
        return type_name

    def parse_literal(self):
        """Parse a numeric, boolean, string or character literal."""
        tok = self.current()

        if tok.type in NUMERIC_START:
            return self._parse_numeric_literal()

        if tok.type in (TokenType.TRUE, TokenType.FALSE):
            self.advance()
            return BooleanLiteral(value=tok.type == TokenType.TRUE, line=tok.line, col=tok.column)

        if tok.type == TokenType.STRING_LITERAL:
            self.advance()
            return StringLiteral(value=tok.value, line=tok.line, col=tok.column)

        if tok.type == TokenType.CHARACTER_LITERAL:
            self.advance()
            return CharacterLiteral(value=tok.value, line=tok.line, col=tok.column)

        raise self._unexpected(LITERAL_START)

    def _parse_numeric_literal(self):
        """Parse ``[-] N``, ``[-] N.``, ``[-] N.N`` or ``[-] .N``.

        The lexer emits digit runs and dots separately, so doubles are
        assembled here.  The node keeps the source spelling.
        """
        start = self.current()
        sign = "-" if self.match(TokenType.MINUS) else ""
        tok = self.current()

        if tok.type == TokenType.DECIMAL_LITERAL:
            self.advance()
            if not self.match(TokenType.DOT):
                return IntegerLiteral(text=sign + tok.value, line=start.line, col=start.column)
            fraction = self.match(TokenType.DECIMAL_LITERAL)
            text = f"{sign}{tok.value}.{fraction.value if fraction else ''}"
            return DoubleLiteral(text=text, line=start.line, col=start.column)

        if tok.type == TokenType.DOT:
            self.advance()
            fraction = self.expect(TokenType.DECIMAL_LITERAL)
            return DoubleLiteral(text=f"{sign}.{fraction.value}", line=start.line, col=start.column)

        raise self._unexpected(frozenset({TokenType.DECIMAL_LITERAL, TokenType.DOT}))

    # -- Expression parsing (precedence climbing) --------------------------

    def parse_expression(self, min_level: int = 0):
        """Parse an expression whose binary operators all bind at *min_level* or tighter."""
        with self._nested():
            left = self._parse_primary()

            while True:
                op_tok = self.current()
                operator = BINARY_OPERATORS.get(op_tok.type)
                if operator is None or operator.level < min_level:
                    return left

                if operator.assoc == NONASSOC and isinstance(left, BinaryOp) and left.op in RANGE_OPERATORS:
                    raise UnexpectedToken(
                        f"Range operators cannot be chained: '{left.op}' followed by "
                        f"'{operator.symbol}'; parenthesize one side",
                        op_tok.line,
                        op_tok.column,
                        expected=EXPRESSION_FOLLOW,
                        actual=op_tok,
                    )

                self.advance()
                next_level = operator.level if operator.assoc == RIGHT else operator.level + 1
                right = self.parse_expression(next_level)
                left = BinaryOp(left=left, op=operator.symbol, right=right, line=left.line, col=left.col)

    def _parse_primary(self):
        """Pick a primary alternative from the current and next token."""
        tok = self.current()
        next_type = self.peek().type

        if tok.type in PATTERN_START:
            if next_type == TokenType.EQUALS:
                return self._parse_assignment()
            if next_type in COMPOUND_ASSIGNMENT_OPERATORS:
                return self._parse_compound_assignment()

        if tok.type in LITERAL_START:
            return self.parse_literal()

        if tok.type == TokenType.IDENTIFIER:
            if next_type in (TokenType.LPAREN, TokenType.EMPTY_PARENS):
                return self._parse_call()
            if next_type == TokenType.DOT:
                return self._parse_member_access()
            self.advance()
            return Variable(name=tok.value, line=tok.line, col=tok.column)

        if tok.type == TokenType.BANG:
            self.advance()
            operand = self.parse_expression(NOT_OPERAND_LEVEL)
            return NotExpression(operand=operand, line=tok.line, col=tok.column)

        if tok.type == TokenType.LPAREN:
            return self._parse_parenthesized()

        raise NoViableAlternative(
            f"Expected an expression but got {tok.type.name} ({tok.value!r})",
            tok.line,
            tok.column,
            expected=EXPRESSION_START,
            actual=tok,
        )

    def _parse_assignment(self):
        """Parse ``<pattern> = <expression>``."""
        pattern = self.parse_pattern()
        self.expect(TokenType.EQUALS)
        value = self.parse_expression()
        return Assignment(pattern=pattern, value=value, line=pattern.line, col=pattern.col)

    def _parse_compound_assignment(self):
        """Parse ``<pattern> op= <expression>``."""
        pattern = self.parse_pattern()
        op_tok = self.expect(*COMPOUND_ASSIGNMENT_OPERATORS)
        value = self.parse_expression(COMPOUND_VALUE_LEVEL)
        return CompoundAssignment(
            pattern=pattern,
            op=COMPOUND_ASSIGNMENT_OPERATORS[op_tok.type],
            value=value,
            line=pattern.line,
            col=pattern.col,
        )

    def _parse_call(self):
        """Parse ``name()`` or ``name(arg, ...)``."""
        name_tok = self.expect(TokenType.IDENTIFIER)
        if self.match(TokenType.EMPTY_PARENS):
            return FunctionCall(name=name_tok.value, line=name_tok.line, col=name_tok.column)

        lparen = self.expect(TokenType.LPAREN, TokenType.EMPTY_PARENS)
        args: list = []
        self._check_not_eof(lparen, "argument list", EXPRESSION_START | {TokenType.RPAREN})
        if self.current().type != TokenType.RPAREN:
            args.append(self.parse_expression())
            while self.match(TokenType.COMMA):
                self._check_not_eof(lparen, "argument list", EXPRESSION_START)
                args.append(self.parse_expression())

        self._expect_closing(
            TokenType.RPAREN, lparen, "argument list", frozenset({TokenType.COMMA})
        )
        return FunctionCall(
            name=name_tok.value,
            arguments=tuple(args),
            line=name_tok.line,
            col=name_tok.column,
        )

    def _parse_member_access(self):
        """Parse ``variable.name``, ``variable.0`` or ``variable.call(...)``."""
        base_tok = self.expect(TokenType.IDENTIFIER)
        base = Variable(name=base_tok.value, line=base_tok.line, col=base_tok.column)
        self.expect(TokenType.DOT)

        tok = self.current()
        if tok.type == TokenType.IDENTIFIER:
            if self.peek().type in (TokenType.LPAREN, TokenType.EMPTY_PARENS):
                member = self._parse_call()
            else:
                self.advance()
                member = tok.value
        elif tok.type == TokenType.DECIMAL_LITERAL:
            self.advance()
            member = int(tok.value)
        else:
            raise self._unexpected(frozenset({TokenType.IDENTIFIER, TokenType.DECIMAL_LITERAL}))

        return MemberAccess(base=base, member=member, line=base_tok.line, col=base_tok.column)

    def _parse_parenthesized(self):
        """Parse ``( <expression> )``; the inner expression starts from level 0."""
        lparen = self.expect(TokenType.LPAREN)
        self._check_not_eof(lparen, "parenthesized expression", EXPRESSION_START)
        inner = self.parse_expression()
        self._expect_closing(TokenType.RPAREN, lparen, "parenthesized expression")
        return Parenthesized(inner=inner, line=lparen.line, col=lparen.column)


def parse_tokens(tokens: Iterable[Token], **options) -> Program:
    """Parse an already tokenized program."""
    return Parser(tokens, **options).parse()
