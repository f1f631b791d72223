"""Tests for Swiftlet AST node definitions."""

import dataclasses

import pytest

from swiftlet.ast_nodes import (
    # Base
    Node,
    # Containers
    Program,
    Block,
    # Types and patterns
    TypeName,
    IdentifierPattern,
    WildcardPattern,
    # Literals
    IntegerLiteral,
    DoubleLiteral,
    BooleanLiteral,
    StringLiteral,
    CharacterLiteral,
    # Expressions
    Variable,
    MemberAccess,
    FunctionCall,
    Assignment,
    CompoundAssignment,
    NotExpression,
    BinaryOp,
    Parenthesized,
    # Statements
    ExpressionStatement,
    ForInStatement,
    WhileStatement,
    RepeatWhileStatement,
    IfStatement,
    BreakStatement,
    ContinueStatement,
    ReturnStatement,
    # Declarations
    ConstantDeclaration,
    VariableDeclaration,
    FunctionDeclaration,
    Parameter,
)


def test_every_node_is_a_node():
    for cls in (
        Program, Block, IdentifierPattern, WildcardPattern, IntegerLiteral,
        DoubleLiteral, BooleanLiteral, StringLiteral, CharacterLiteral,
        Variable, MemberAccess, FunctionCall, Assignment, CompoundAssignment,
        NotExpression, BinaryOp, Parenthesized, ExpressionStatement,
        ForInStatement, WhileStatement, RepeatWhileStatement, IfStatement,
        BreakStatement, ContinueStatement, ReturnStatement,
        ConstantDeclaration, VariableDeclaration, FunctionDeclaration, Parameter,
    ):
        assert issubclass(cls, Node)
        assert dataclasses.is_dataclass(cls)


def test_nodes_are_frozen():
    node = Variable(name="x", line=1, col=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "y"


def test_location_is_ignored_by_equality():
    assert Variable(name="x", line=1, col=1) == Variable(name="x", line=7, col=3)
    assert Variable(name="x") != Variable(name="y")


def test_nested_equality():
    a = BinaryOp(left=IntegerLiteral(text="1", line=1, col=1), op="+",
                 right=IntegerLiteral(text="2", line=1, col=5), line=1, col=1)
    b = BinaryOp(left=IntegerLiteral(text="1", line=3, col=9), op="+",
                 right=IntegerLiteral(text="2", line=3, col=11), line=3, col=9)
    assert a == b


def test_nodes_are_hashable():
    nodes = {Variable(name="x", line=1, col=1), Variable(name="x", line=2, col=2)}
    assert len(nodes) == 1


def test_containers_default_to_empty():
    assert Program().statements == ()
    assert Block().statements == ()
    assert FunctionCall(name="f").arguments == ()


def test_integer_literal_value():
    assert IntegerLiteral(text="42").value == 42
    assert IntegerLiteral(text="-3").value == -3


def test_double_literal_value():
    assert DoubleLiteral(text="5.").value == 5.0
    assert DoubleLiteral(text=".25").value == 0.25
    assert DoubleLiteral(text="-1.5").value == -1.5


def test_literal_text_distinguishes_spelling():
    assert DoubleLiteral(text="5.") != DoubleLiteral(text="5.0")


def test_type_name_values():
    assert [t.value for t in TypeName] == ["Int", "Bool", "Double", "Character", "String", "Void"]


def test_member_access_variants():
    base = Variable(name="p")
    assert MemberAccess(base=base, member="x").member == "x"
    assert MemberAccess(base=base, member=0).member == 0
    call = FunctionCall(name="move", arguments=(IntegerLiteral(text="1"),))
    assert MemberAccess(base=base, member=call).member.name == "move"


def test_if_statement_else_branch_defaults_to_none():
    node = IfStatement(condition=BooleanLiteral(value=True), then_block=Block())
    assert node.else_branch is None


def test_function_declaration():
    node = FunctionDeclaration(
        name="area",
        parameters=(Parameter(name="w", type=TypeName.INT), Parameter(name="h", type=TypeName.INT)),
        result_type=TypeName.INT,
        body=Block(statements=(ReturnStatement(value=Variable(name="w")),)),
    )
    assert [p.name for p in node.parameters] == ["w", "h"]
    assert node.result_type is TypeName.INT
