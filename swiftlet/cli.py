"""Swiftlet CLI — swiftlet check, swiftlet parse, swiftlet tokens."""
import sys
import os

from swiftlet import parse_source
from swiftlet.config import get_config
from swiftlet.diagnostics import log_sink
from swiftlet.errors import SwiftletError
from swiftlet.lexer import Lexer, TokenType
from swiftlet.printer import format_node

COMMANDS = ("check", "parse", "tokens")


def main():
    if len(sys.argv) < 2:
        print("Usage: swiftlet <command> [file.swift]", file=sys.stderr)
        print("Commands: check, parse, tokens", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]

    if command not in COMMANDS:
        print(f"Unknown command: {command}", file=sys.stderr)
        sys.exit(1)

    if len(sys.argv) < 3:
        print(f"Usage: swiftlet {command} <file.swift>", file=sys.stderr)
        sys.exit(1)
    filepath = sys.argv[2]
    if not os.path.exists(filepath):
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        sys.exit(1)
    with open(filepath) as f:
        source = f.read()

    reported = []

    try:
        show_expected = get_config()["diagnostics"]["show_expected"]

        def sink(diagnostic):
            reported.append(diagnostic)
            log_sink(diagnostic, show_expected)

        if command == "tokens":
            for tok in Lexer(source).tokenize():
                if tok.type != TokenType.EOF:
                    print(f"{tok.line}:{tok.column}\t{tok.type.name}\t{tok.value}")
            sys.exit(0)

        tree = parse_source(source, sink=sink)

        if command == "check":
            print(f"OK: {filepath}")
            sys.exit(0)

        if command == "parse":
            print(format_node(tree))
            sys.exit(0)

    except SwiftletError as e:
        if not reported:
            print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
