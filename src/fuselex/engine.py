"""Core driver — runs a state table over source text, lazily."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping

from fuselex.context import LexerContext
from fuselex.log import get_logger
from fuselex.rules import Computed, Emit, EmitGroups, Goto, Pop, Push, Recurse, Rule, State
from fuselex.tokens import PositionTracker, Token, TokenType

logger = get_logger(__name__)

# Consecutive zero-width steps allowed at one offset before the driver
# treats the character as unrecognized.
MAX_ZERO_WIDTH = 16


class Engine:
    """Tokenize text against a resolved state table.

    Every character of the input ends up in exactly one emitted token.
    Characters no rule accepts become single-character Error tokens.
    """

    def __init__(self, states: Mapping[str, State], start: str = "root") -> None:
        if start not in states:
            raise ValueError(f"unknown start state '{start}'")
        self._states = dict(states)
        self._start = start

    def tokenize(self, text: str) -> Iterator[Token]:
        """Yield positioned tokens for text."""
        tracker = PositionTracker()
        for tt, value in self.lex(text):
            yield tracker.make(tt, value)

    def lex(self, text: str, start: str | None = None) -> Iterator[tuple[TokenType, str]]:
        """Yield (type, text) pairs for text from a fresh context."""
        return self._run(text, LexerContext(start or self._start))

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def _run(self, text: str, ctx: LexerContext) -> Iterator[tuple[TokenType, str]]:
        pos = 0
        end = len(text)
        zero_width = 0

        while pos < end:
            matched = False
            if zero_width <= MAX_ZERO_WIDTH:
                for r in self._states[ctx.current].rules:
                    m = r.pattern.match(text, pos)
                    if m is None:
                        continue
                    if m.end() == pos:
                        # Zero-width matches count only when they move the stack.
                        before = ctx.snapshot()
                        for _ in self._apply(r, m, ctx):
                            pass
                        if ctx.snapshot() == before:
                            continue
                        zero_width += 1
                    else:
                        yield from self._apply(r, m, ctx)
                        pos = m.end()
                        zero_width = 0
                    matched = True
                    break
            else:
                logger.debug("zero-width limit hit at offset %d in state %r", pos, ctx.current)

            if not matched:
                logger.debug(
                    "unrecognized input %r at offset %d in state %r", text[pos], pos, ctx.current
                )
                yield TokenType.ERROR, text[pos]
                pos += 1
                zero_width = 0

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _apply(
        self, r: Rule, m: re.Match[str], ctx: LexerContext
    ) -> Iterator[tuple[TokenType, str]]:
        match r.action:
            case Emit(type=tt):
                if m.group():
                    yield tt, m.group()
            case EmitGroups(types=types):
                yield from _emit_groups(m, types)
            case Recurse(state=state):
                yield from self._run(m.group(), LexerContext(state))
            case Computed(func=func):
                for tt, value in func(ctx, m):
                    if value:
                        yield tt, value

        match r.transition:
            case Push(state=state):
                ctx.push(state)
            case Pop(count=count):
                ctx.pop(count)
            case Goto(state=state):
                ctx.goto(state)
            case None:
                pass


def _emit_groups(
    m: re.Match[str], types: tuple[TokenType, ...]
) -> Iterator[tuple[TokenType, str]]:
    """Emit capture groups in order; uncovered text inside the match is Text."""
    text = m.string
    cursor = m.start()
    for index, tt in enumerate(types, start=1):
        start, stop = m.span(index)
        if start < cursor or start == stop:
            continue
        if start > cursor:
            yield TokenType.TEXT, text[cursor:start]
        yield tt, text[start:stop]
        cursor = stop
    if cursor < m.end():
        yield TokenType.TEXT, text[cursor : m.end()]
