"""Swiftlet MCP Server — exposes Swiftlet syntax tools via MCP protocol."""

from mcp.server.fastmcp import FastMCP

from swiftlet import parse_source
from swiftlet.diagnostics import CollectingSink
from swiftlet.errors import SwiftletError
from swiftlet.lexer import Lexer, TokenType
from swiftlet.printer import format_node

mcp = FastMCP("swiftlet")


def _read_source(filepath: str) -> tuple[str | None, str | None]:
    """Return (source, None) or (None, error message)."""
    try:
        with open(filepath) as f:
            return f.read(), None
    except FileNotFoundError:
        return None, f"Error: file not found: {filepath}"
    except OSError as e:
        return None, f"Error reading file: {e}"


def _report(err: SwiftletError, sink: CollectingSink) -> str:
    if sink.diagnostics:
        diagnostic = sink.diagnostics[-1]
        return f"Error [{diagnostic.kind}]: {diagnostic.format()}"
    return f"Error: {err}"


@mcp.tool()
def swiftlet_check(filepath: str) -> str:
    """Check Swiftlet syntax. Validates that the file parses without errors.

    Args:
        filepath: Path to the .swift file to check
    """
    return check_swiftlet_file(filepath)


def check_swiftlet_file(filepath: str) -> str:
    """Core logic for checking a swiftlet file — testable without MCP."""
    source, error = _read_source(filepath)
    if error:
        return error

    sink = CollectingSink()
    try:
        program = parse_source(source, sink=sink)
    except SwiftletError as e:
        return _report(e, sink)
    return f"OK: {filepath} ({len(program.statements)} statements)"


@mcp.tool()
def swiftlet_parse(filepath: str) -> str:
    """Parse a Swiftlet file and return its syntax tree as an S-expression.

    Args:
        filepath: Path to the .swift file to parse
    """
    return parse_swiftlet_file(filepath)


def parse_swiftlet_file(filepath: str) -> str:
    """Core logic for parsing a swiftlet file — testable without MCP."""
    source, error = _read_source(filepath)
    if error:
        return error

    sink = CollectingSink()
    try:
        program = parse_source(source, sink=sink)
    except SwiftletError as e:
        return _report(e, sink)
    return format_node(program)


@mcp.tool()
def swiftlet_tokens(filepath: str) -> str:
    """List the tokens of a Swiftlet file, one per line.

    Args:
        filepath: Path to the .swift file to tokenize
    """
    return tokenize_swiftlet_file(filepath)


def tokenize_swiftlet_file(filepath: str) -> str:
    """Core logic for tokenizing a swiftlet file — testable without MCP."""
    source, error = _read_source(filepath)
    if error:
        return error

    try:
        tokens = Lexer(source).tokenize()
    except SwiftletError as e:
        return f"Error: {e}"
    lines = [
        f"{tok.line}:{tok.column} {tok.type.name} {tok.value}"
        for tok in tokens
        if tok.type != TokenType.EOF
    ]
    return "\n".join(lines) if lines else "(no tokens)"


SWIFTLET_LANGUAGE_GUIDE = """\
# Writing Swiftlet Programs

Swiftlet is a small Swift-like scripting language. Use swiftlet_check to validate a file and
swiftlet_parse to see how it is structured.

## Declarations
```
let answer = 42
var total = 0.5
let _ = compute()
func area(width: Int, height: Int) -> Int {
    return width * height
}
```

## Expressions
```
x = 2 + 3 * 4        // * binds tighter than +
y = 2 ^ 3 ^ 2        // ^ is right-associative
total += 1           // also -= *= /= %=
ok = !done && ready  // ! applies to `done && ready`
pos.x                // member, also pos.0 and pos.move()
```

## Control Flow
```
for i in 0..<10 { total += i }
while total > 0 { total -= 1 }
repeat { count += 1 } while count < 3
if a { 1 } else if b { 2 } else { 3 }
```

## Important Rules
1. Statements may end with an optional `;`
2. `return` always takes a value
3. Ranges (`..<`, `...`) cannot be chained without parentheses
4. Comments use //
5. Types: Int, Bool, Double, Character, String, Void
"""


@mcp.prompt()
def swiftlet_guide() -> str:
    """Guide to the Swiftlet language. Use this when writing Swiftlet source files."""
    return SWIFTLET_LANGUAGE_GUIDE


if __name__ == "__main__":
    mcp.run(transport="stdio")
