"""Swiftlet tree printer — renders an AST as a compact S-expression.

``format_node(parse_source("2 + 3 * 4"))`` gives
``Program(Add(Lit(2), Mul(Lit(3), Lit(4))))``.  Nodes are dispatched with
structural pattern matching over the closed set in ``ast_nodes``.
"""

from __future__ import annotations

from swiftlet.ast_nodes import (
    Program,
    Block,
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

BINARY_NAMES = {
    "^": "Exp",
    "*": "Mul",
    "/": "Div",
    "%": "Mod",
    "+": "Add",
    "-": "Sub",
    "&&": "And",
    "||": "Or",
    ">": "Gt",
    "<": "Lt",
    ">=": "Ge",
    "<=": "Le",
    "==": "Eq",
    "!=": "Ne",
    "..<": "HalfOpenRange",
    "...": "ClosedRange",
}

COMPOUND_NAMES = {
    "*=": "MulAssign",
    "/=": "DivAssign",
    "%=": "ModAssign",
    "+=": "AddAssign",
    "-=": "SubAssign",
}


def _call(name: str, *parts: str) -> str:
    return f"{name}({', '.join(parts)})"


def _all(nodes) -> list[str]:
    return [format_node(n) for n in nodes]


def format_node(node) -> str:
    """Render any AST node (or ``None``) as an S-expression string."""
    match node:
        case None:
            return "None"

        # Containers
        case Program(statements=stmts):
            return _call("Program", *_all(stmts))
        case Block(statements=stmts):
            return _call("Block", *_all(stmts))

        # Patterns
        case IdentifierPattern(name=name):
            return _call("Id", name)
        case WildcardPattern():
            return "Wildcard"

        # Literals
        case IntegerLiteral(text=text) | DoubleLiteral(text=text):
            return _call("Lit", text)
        case BooleanLiteral(value=value):
            return _call("Lit", "true" if value else "false")
        case StringLiteral(value=value):
            return _call("Str", f'"{value}"')
        case CharacterLiteral(value=value):
            return _call("Char", f"'{value}'")

        # Expressions
        case Variable(name=name):
            return _call("Var", name)
        case MemberAccess(base=base, member=FunctionCall() as call):
            return _call("Member", format_node(base), format_node(call))
        case MemberAccess(base=base, member=member):
            return _call("Member", format_node(base), str(member))
        case FunctionCall(name=name, arguments=args):
            return _call("Call", name, *_all(args))
        case Assignment(pattern=pattern, value=value):
            return _call("Assign", format_node(pattern), format_node(value))
        case CompoundAssignment(pattern=pattern, op=op, value=value):
            return _call(COMPOUND_NAMES[op], format_node(pattern), format_node(value))
        case NotExpression(operand=operand):
            return _call("Not", format_node(operand))
        case BinaryOp(left=left, op=op, right=right):
            return _call(BINARY_NAMES[op], format_node(left), format_node(right))
        case Parenthesized(inner=inner):
            return _call("Paren", format_node(inner))

        # Statements
        case ExpressionStatement(expression=expression):
            return format_node(expression)
        case ForInStatement(pattern=pattern, sequence=sequence, body=body):
            return _call("ForIn", format_node(pattern), format_node(sequence), format_node(body))
        case WhileStatement(condition=condition, body=body):
            return _call("While", format_node(condition), format_node(body))
        case RepeatWhileStatement(body=body, condition=condition):
            return _call("RepeatWhile", format_node(body), format_node(condition))
        case IfStatement(condition=condition, then_block=then_block, else_branch=None):
            return _call("If", format_node(condition), format_node(then_block))
        case IfStatement(condition=condition, then_block=then_block, else_branch=else_branch):
            return _call("If", format_node(condition), format_node(then_block), format_node(else_branch))
        case BreakStatement():
            return "Break"
        case ContinueStatement():
            return "Continue"
        case ReturnStatement(value=None):
            return "Return"
        case ReturnStatement(value=value):
            return _call("Return", format_node(value))

        # Declarations
        case ConstantDeclaration(pattern=pattern, value=value):
            return _call("Let", format_node(pattern), format_node(value))
        case VariableDeclaration(pattern=pattern, value=value):
            return _call("VarDecl", format_node(pattern), format_node(value))
        case Parameter(name=name, type=param_type):
            return f"{name}: {param_type.value}"
        case FunctionDeclaration(name=name, parameters=params, result_type=result_type, body=body):
            result = result_type.value if result_type is not None else "Void"
            return _call("Func", name, f"[{', '.join(_all(params))}]", result, format_node(body))

    raise TypeError(f"Cannot format {type(node).__name__}")
