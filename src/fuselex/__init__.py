"""Stateful regex lexer for the Fuse language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fuselex.config import LexerOptions
    from fuselex.tokens import Token

__version__ = "0.1.0"


def tokenize(source: str, options: LexerOptions | None = None) -> Iterator[Token]:
    """Lazily tokenize Fuse source text."""
    from fuselex.lexer import tokenize as _tokenize

    return _tokenize(source, options)
