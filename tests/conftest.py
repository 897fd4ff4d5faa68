"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from fuselex.config import LexerOptions
from fuselex.lexer import tokenize
from fuselex.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source (with optional lexer options) into a list."""

    def _lex(source: str, **options) -> list[Token]:
        opts = LexerOptions(**options) if options else None
        return list(tokenize(source, opts))

    return _lex


def pairs(tokens: list[Token]) -> list[tuple[TokenType, str]]:
    """Return (type, value) pairs for compact comparisons."""
    return [(t.type, t.value) for t in tokens]


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def find_tokens(tokens: list[Token], tt: TokenType) -> list[Token]:
    """Return all tokens of the given type."""
    return [t for t in tokens if t.type == tt]


def significant(tokens: list[Token]) -> list[tuple[TokenType, str]]:
    """(type, value) pairs with whitespace Text tokens dropped."""
    return [(t.type, t.value) for t in tokens if not (t.type == TokenType.TEXT and not t.value.strip())]
