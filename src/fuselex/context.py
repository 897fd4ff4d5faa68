"""Per-run mutable lexer state: the state stack and the string register."""

from __future__ import annotations

from dataclasses import dataclass

from fuselex.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class OpenString:
    """One open quoted string: its prefix flags and opening delimiter."""

    prefix: str
    delimiter: str


class StringRegister:
    """Stack of open strings; only the top delimiter can close a string."""

    def __init__(self) -> None:
        self._entries: list[OpenString] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def top(self) -> OpenString | None:
        return self._entries[-1] if self._entries else None

    def register(self, prefix: str = "", delimiter: str = "'") -> None:
        self._entries.append(OpenString(prefix, delimiter))

    def remove(self) -> OpenString | None:
        if not self._entries:
            return None
        return self._entries.pop()

    def closes(self, delimiter: str) -> bool:
        """Return True if delimiter closes the innermost open string."""
        top = self.top
        return top is not None and top.delimiter == delimiter


class LexerContext:
    """State stack for one tokenization run. Never shrinks below one frame."""

    def __init__(self, start: str = "root") -> None:
        self._stack: list[str] = [start]
        self.strings = StringRegister()

    @property
    def current(self) -> str:
        return self._stack[-1]

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._stack)

    def push(self, state: str) -> None:
        self._stack.append(state)

    def pop(self, count: int = 1) -> None:
        keep = max(1, len(self._stack) - count)
        if keep > len(self._stack) - count:
            logger.debug("pop of %d from %r would empty the stack; kept bottom frame", count, self._stack)
        del self._stack[keep:]

    def goto(self, state: str) -> None:
        self._stack[-1] = state
