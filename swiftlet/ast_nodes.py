"""Swiftlet AST node definitions.

Every node is a frozen Python dataclass carrying ``line`` and ``col`` for
source-location tracking.  Locations are excluded from equality, so two
parses of equivalent source compare equal even when their layout differs.
Child sequences are tuples; a finished tree is never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


# ── Base ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Node:
    """Base class for every AST node."""
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)


# ── Types and patterns ──────────────────────────────────────────────────────

class TypeName(Enum):
    INT = "Int"
    BOOL = "Bool"
    DOUBLE = "Double"
    CHARACTER = "Character"
    STRING = "String"
    VOID = "Void"


@dataclass(frozen=True)
class IdentifierPattern(Node):
    name: str = ""


@dataclass(frozen=True)
class WildcardPattern(Node):
    pass


# ── Literals ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class IntegerLiteral(Node):
    text: str = "0"

    @property
    def value(self) -> int:
        return int(self.text)


@dataclass(frozen=True)
class DoubleLiteral(Node):
    text: str = "0.0"

    @property
    def value(self) -> float:
        return float(self.text)


@dataclass(frozen=True)
class BooleanLiteral(Node):
    value: bool = False


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str = ""


@dataclass(frozen=True)
class CharacterLiteral(Node):
    value: str = ""


# ── Expressions ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Variable(Node):
    name: str = ""


@dataclass(frozen=True)
class FunctionCall(Node):
    name: str = ""
    arguments: tuple = ()


@dataclass(frozen=True)
class MemberAccess(Node):
    """``base.member`` where member is a field name, a tuple index or a call."""
    base: Variable | None = None
    member: str | int | FunctionCall = ""


@dataclass(frozen=True)
class Assignment(Node):
    pattern: Pattern | None = None
    value: Expression | None = None


@dataclass(frozen=True)
class CompoundAssignment(Node):
    pattern: Pattern | None = None
    op: str = ""
    value: Expression | None = None


@dataclass(frozen=True)
class NotExpression(Node):
    operand: Expression | None = None


@dataclass(frozen=True)
class BinaryOp(Node):
    left: Expression | None = None
    op: str = ""
    right: Expression | None = None


@dataclass(frozen=True)
class Parenthesized(Node):
    inner: Expression | None = None


# ── Statements ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Block(Node):
    statements: tuple = ()


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Expression | None = None


@dataclass(frozen=True)
class ForInStatement(Node):
    pattern: Pattern | None = None
    sequence: Expression | None = None
    body: Block = field(default_factory=Block)


@dataclass(frozen=True)
class WhileStatement(Node):
    condition: Expression | None = None
    body: Block = field(default_factory=Block)


@dataclass(frozen=True)
class RepeatWhileStatement(Node):
    body: Block = field(default_factory=Block)
    condition: Expression | None = None


@dataclass(frozen=True)
class IfStatement(Node):
    condition: Expression | None = None
    then_block: Block = field(default_factory=Block)
    else_branch: Block | IfStatement | None = None


@dataclass(frozen=True)
class BreakStatement(Node):
    pass


@dataclass(frozen=True)
class ContinueStatement(Node):
    pass


@dataclass(frozen=True)
class ReturnStatement(Node):
    value: Expression | None = None


# ── Declarations ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ConstantDeclaration(Node):
    pattern: Pattern | None = None
    value: Expression | None = None


@dataclass(frozen=True)
class VariableDeclaration(Node):
    pattern: Pattern | None = None
    value: Expression | None = None


@dataclass(frozen=True)
class Parameter(Node):
    name: str = ""
    type: TypeName = TypeName.VOID


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    name: str = ""
    parameters: tuple = ()
    result_type: TypeName | None = None
    body: Block = field(default_factory=Block)


# ── Program ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Program(Node):
    statements: tuple = ()


# ── Variant aliases ─────────────────────────────────────────────────────────

Pattern = Union[IdentifierPattern, WildcardPattern]

Literal = Union[IntegerLiteral, DoubleLiteral, BooleanLiteral, StringLiteral, CharacterLiteral]

Expression = Union[
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
]

Declaration = Union[ConstantDeclaration, VariableDeclaration, FunctionDeclaration]

Statement = Union[
    ExpressionStatement,
    ConstantDeclaration,
    VariableDeclaration,
    FunctionDeclaration,
    ForInStatement,
    WhileStatement,
    RepeatWhileStatement,
    IfStatement,
    BreakStatement,
    ContinueStatement,
    ReturnStatement,
]
