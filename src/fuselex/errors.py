"""Config errors and unrecognized-input diagnostics with source context."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from fuselex.tokens import Span, Token, TokenType


class ConfigError(Exception):
    """Raised for invalid lexer options or an unreadable config file."""


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A run of unrecognized input, reported without aborting the lex."""

    message: str
    span: Span
    source: str

    def format(self, filename: str = "input.fuse") -> str:
        """Render the run with its source line and a caret underline.

        Unrecognized runs never contain a newline, so the underline always
        sits on the start line.
        """
        start = self.span.start
        line_start = self.source.rfind("\n", 0, start.offset) + 1
        line_end = self.source.find("\n", start.offset)
        if line_end == -1:
            line_end = len(self.source)
        text = self.source[line_start:line_end].rstrip("\r")

        number = str(start.line)
        margin = " " * len(number)
        carets = "^" * (self.span.end.offset - start.offset)
        return "\n".join(
            [
                f"error: {self.message}",
                f"{margin} --> {filename}:{start.line}:{start.column}",
                f"{margin} |",
                f"{number} | {text}",
                f"{margin} | {' ' * (start.column - 1)}{carets}",
            ]
        )


def collect_diagnostics(tokens: Iterable[Token], source: str) -> list[Diagnostic]:
    """Group adjacent Error tokens into one Diagnostic per run."""
    diagnostics: list[Diagnostic] = []
    run: list[Token] = []

    def flush() -> None:
        if not run:
            return
        text = "".join(t.value for t in run)
        diagnostics.append(
            Diagnostic(
                f"unrecognized input {text!r}",
                Span(run[0].span.start, run[-1].span.end),
                source,
            )
        )
        run.clear()

    for tok in tokens:
        if tok.type == TokenType.ERROR:
            run.append(tok)
        else:
            flush()
    flush()
    return diagnostics
