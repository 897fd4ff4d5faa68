"""Token types and data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Token categories. Each value is a dotted name; the prefix is the parent."""

    TEXT = "Text"
    ERROR = "Error"

    COMMENT = "Comment"
    COMMENT_SINGLE = "Comment.Single"
    COMMENT_MULTILINE = "Comment.Multiline"
    COMMENT_PREPROC = "Comment.Preproc"

    KEYWORD = "Keyword"
    KEYWORD_DECLARATION = "Keyword.Declaration"
    KEYWORD_CONSTANT = "Keyword.Constant"

    OPERATOR = "Operator"
    OPERATOR_WORD = "Operator.Word"
    PUNCTUATION = "Punctuation"

    NUMBER = "Number"
    NUMBER_INTEGER = "Number.Integer"
    NUMBER_FLOAT = "Number.Float"
    NUMBER_HEX = "Number.Hex"
    NUMBER_BIN = "Number.Bin"

    STRING = "String"
    STRING_ESCAPE = "String.Escape"
    STRING_INTERPOL = "String.Interpol"
    STRING_REGEX = "String.Regex"

    NAME = "Name"
    NAME_BUILTIN = "Name.Builtin"
    NAME_CLASS = "Name.Class"
    NAME_FUNCTION = "Name.Function"

    @property
    def parent(self) -> TokenType | None:
        """The enclosing category, or None for a top-level one."""
        head, sep, _ = self.value.rpartition(".")
        if not sep:
            return None
        return TokenType(head)

    def is_a(self, other: TokenType) -> bool:
        """Return True if self is other or one of its subcategories."""
        return self.value == other.value or self.value.startswith(other.value + ".")


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A classified, contiguous slice of the input."""

    type: TokenType
    value: str
    span: Span


class PositionTracker:
    """Turn a stream of (type, text) pairs into Tokens with spans.

    Texts must arrive in input order; the tracker only counts characters.
    """

    def __init__(self) -> None:
        self._line = 1
        self._col = 1
        self._offset = 0

    def current(self) -> Position:
        return Position(self._line, self._col, self._offset)

    def make(self, tt: TokenType, text: str) -> Token:
        start = self.current()
        newlines = text.count("\n")
        if newlines:
            self._line += newlines
            self._col = len(text) - text.rfind("\n")
        else:
            self._col += len(text)
        self._offset += len(text)
        return Token(tt, text, Span(start, self.current()))
