"""Swiftlet — syntax analyzer for a small Swift-like scripting language."""

from swiftlet.ast_nodes import Program
from swiftlet.config import get_config
from swiftlet.diagnostics import Diagnostic, DiagnosticSink, log, log_sink
from swiftlet.errors import (
    SwiftletError,
    LexerError,
    ConfigError,
    ParseError,
    UnexpectedToken,
    UnterminatedConstruct,
    NoViableAlternative,
    NestingTooDeep,
)
from swiftlet.lexer import Token, TokenType, tokenize
from swiftlet.parser import Parser


def parse_source(
    source: str,
    *,
    sink: DiagnosticSink | None = None,
    config_dir: str | None = None,
) -> Program:
    """Tokenize and parse *source* into a ``Program``.

    On failure the error is reported to *sink* as a ``Diagnostic`` and then
    re-raised; no partial tree is ever returned.
    """
    try:
        settings = get_config(config_dir)["parser"]
        tokens = tokenize(source)
        return Parser(
            tokens,
            max_depth=settings["max_depth"],
            allow_bare_return=settings["allow_bare_return"],
        ).parse()
    except SwiftletError as e:
        if sink is not None:
            sink(Diagnostic.from_error(e))
        raise


__all__ = [
    "parse_source", "tokenize", "Parser", "Program", "Token", "TokenType",
    "Diagnostic", "DiagnosticSink", "log", "log_sink", "get_config",
    "SwiftletError", "LexerError", "ConfigError", "ParseError",
    "UnexpectedToken", "UnterminatedConstruct", "NoViableAlternative",
    "NestingTooDeep",
]
