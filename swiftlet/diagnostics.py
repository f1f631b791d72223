"""Structured diagnostics for failed parses.

A ``Diagnostic`` is the caller-facing form of a ``SwiftletError``: error
kind, position, accepted token kinds and the token actually found.  It is
handed to a sink callable; ``log_sink`` prints it with the ``[swiftlet]``
prefix.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable

from swiftlet.errors import LexerError, ParseError, SwiftletError


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    line: int
    column: int
    message: str
    expected: tuple[str, ...] = ()
    actual: str | None = None
    recoverable: bool = True

    @classmethod
    def from_error(cls, err: SwiftletError) -> Diagnostic:
        if isinstance(err, ParseError):
            actual = None
            if err.actual is not None:
                actual = f"{err.actual.type.name} ({err.actual.value!r})"
            return cls(
                kind=err.kind,
                line=err.line,
                column=err.column,
                message=err.message,
                expected=tuple(sorted(t.name for t in err.expected)),
                actual=actual,
                recoverable=err.recoverable,
            )
        kind = "lexer-error" if isinstance(err, LexerError) else "error"
        return cls(kind=kind, line=err.line, column=err.column, message=err.message)

    def format(self, show_expected: bool = True) -> str:
        text = f"Line {self.line}, Col {self.column}: {self.message}"
        if show_expected and self.expected:
            text += f" (expected one of: {', '.join(self.expected)})"
        return text


DiagnosticSink = Callable[[Diagnostic], None]


def log(message: str) -> None:
    """Log a message with [swiftlet] prefix."""
    print(f"[swiftlet] {message}", file=sys.stderr)


def log_sink(diagnostic: Diagnostic, show_expected: bool = True) -> None:
    """Default sink: print the diagnostic through ``log``."""
    log(f"{diagnostic.kind}: {diagnostic.format(show_expected)}")


class CollectingSink:
    """Sink that keeps every diagnostic it receives, in order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
