"""End-to-end tests: source files -> tokens -> AST -> printed tree."""

import os
import glob

from swiftlet import parse_source
from swiftlet.ast_nodes import FunctionDeclaration, ForInStatement, IfStatement
from swiftlet.printer import format_node

EXAMPLES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "examples")


def parse_example(name: str):
    with open(os.path.join(EXAMPLES_DIR, name)) as f:
        return parse_source(f.read())


def test_hello_e2e():
    program = parse_example("hello.swift")
    assert len(program.statements) > 0
    assert format_node(program).startswith("Program(")


def test_math_e2e():
    program = parse_example("math.swift")
    printed = format_node(program)
    assert "Let(Id(a), Add(Lit(2), Mul(Lit(3), Lit(4))))" in printed
    assert "Let(Id(b), Exp(Lit(2), Exp(Lit(3), Lit(2))))" in printed
    assert "Let(Id(c), Sub(Sub(Lit(10), Lit(3)), Lit(2)))" in printed
    assert "Let(Id(e), Lit(-5.5))" in printed
    assert "Let(Id(f), Lit(.25))" in printed
    assert "VarDecl(Id(g), Lit(5.))" in printed
    assert "Member(Var(position), 0)" in printed
    functions = [s for s in program.statements if isinstance(s, FunctionDeclaration)]
    assert [f.name for f in functions] == ["distance", "isEven"]
    loop = program.statements[-1]
    assert isinstance(loop, ForInStatement)
    assert isinstance(loop.body.statements[0], IfStatement)


def test_all_examples_parse():
    """Every .swift file in examples/ must parse without errors."""
    files = glob.glob(os.path.join(EXAMPLES_DIR, "*.swift"))
    assert len(files) >= 3, f"Expected at least 3 example files, found {len(files)}"
    for filepath in files:
        with open(filepath) as f:
            source = f.read()
        program = parse_source(source)
        assert program.statements, f"{filepath} produced an empty program"


def test_layout_does_not_change_tree():
    compact = "func f(a: Int) -> Int { if a > 0 { return a } else { return 0 } }"
    spread = """
    func f(a: Int) -> Int {
        if a > 0 {
            return a
        } else {
            return 0
        }
    }
    """
    assert parse_source(compact) == parse_source(spread)
