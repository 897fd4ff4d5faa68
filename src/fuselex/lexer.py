"""Fuse lexer — binds options and the grammar to the engine."""

from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache

from fuselex import metadata
from fuselex.config import LexerOptions
from fuselex.engine import Engine
from fuselex.grammar import grammar_table
from fuselex.rules import build_states
from fuselex.tokens import Token, TokenType


@lru_cache(maxsize=16)
def _engine_for(options: LexerOptions) -> Engine:
    return Engine(build_states(grammar_table(options)))


class FuseLexer:
    """Tokenize Fuse source text into a lazy stream of Token objects."""

    name = metadata.NAME
    tag = metadata.TAG
    filenames = metadata.FILENAMES
    mimetypes = metadata.MIMETYPES

    def __init__(self, options: LexerOptions | None = None) -> None:
        self.options = options or LexerOptions()
        self._engine = _engine_for(self.options)

    def tokenize(self, source: str) -> Iterator[Token]:
        """Yield positioned tokens covering source exactly once."""
        return self._engine.tokenize(source)

    def lex(self, source: str) -> Iterator[tuple[TokenType, str]]:
        """Yield bare (type, text) pairs."""
        return self._engine.lex(source)

    @staticmethod
    def detect(text: str) -> bool:
        return metadata.detect(text)


def tokenize(source: str, options: LexerOptions | None = None) -> Iterator[Token]:
    """Convenience function: lazily tokenize source text."""
    return FuseLexer(options).tokenize(source)
