"""Rule tables — patterns, tagged actions, and state transitions."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fuselex.tokens import TokenType

if TYPE_CHECKING:
    from fuselex.context import LexerContext

# A computed action receives the live context and the match, may drive the
# context itself, and yields (type, text) pairs covering the match.
ComputedFunc = Callable[["LexerContext", re.Match[str]], Iterable[tuple[TokenType, str]]]


# ----------------------------------------------------------------------
# Actions
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Emit:
    """Emit the whole match as one token."""

    type: TokenType


@dataclass(frozen=True, slots=True)
class EmitGroups:
    """Emit each capture group with the type at the same position.

    Groups that did not participate or matched nothing are skipped.
    """

    types: tuple[TokenType, ...]


@dataclass(frozen=True, slots=True)
class Recurse:
    """Re-tokenize the matched text from a fresh stack seeded at `state`."""

    state: str = "base"


@dataclass(frozen=True, slots=True)
class Computed:
    """Run a function that decides the tokens (and any transition) itself."""

    func: ComputedFunc


Action = Emit | EmitGroups | Recurse | Computed


# ----------------------------------------------------------------------
# Transitions
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Push:
    state: str


@dataclass(frozen=True, slots=True)
class Pop:
    count: int = 1


@dataclass(frozen=True, slots=True)
class Goto:
    state: str


Transition = Push | Pop | Goto


# ----------------------------------------------------------------------
# Rules and states
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Rule:
    """A pattern anchored at the current offset, plus what to do on a match."""

    pattern: re.Pattern[str]
    action: Action
    transition: Transition | None = None


@dataclass(frozen=True, slots=True)
class Include:
    """Mix another state's rules in at this point of a declaration."""

    state: str


@dataclass(frozen=True, slots=True)
class State:
    name: str
    rules: tuple[Rule, ...]


def rule(
    pattern: str,
    action: TokenType | Sequence[TokenType] | ComputedFunc | Action,
    transition: Transition | None = None,
    flags: int = 0,
) -> Rule:
    """Build a Rule, wrapping a bare token type, type tuple, or function."""
    if isinstance(action, TokenType):
        action = Emit(action)
    elif isinstance(action, (tuple, list)):
        action = EmitGroups(tuple(action))
    elif not isinstance(action, (Emit, EmitGroups, Recurse, Computed)):
        action = Computed(action)
    return Rule(re.compile(pattern, flags), action, transition)


def include(state: str) -> Include:
    return Include(state)


def build_states(table: Mapping[str, Sequence[Rule | Include]]) -> dict[str, State]:
    """Resolve includes and check transitions; return name -> State.

    Raises ValueError on an unknown state name or a cyclic include.
    """
    resolved: dict[str, tuple[Rule, ...]] = {}

    def resolve(name: str, chain: tuple[str, ...]) -> tuple[Rule, ...]:
        if name in resolved:
            return resolved[name]
        if name in chain:
            raise ValueError(f"cyclic include: {' -> '.join(chain + (name,))}")
        if name not in table:
            raise ValueError(f"unknown state '{name}'")
        rules: list[Rule] = []
        for entry in table[name]:
            if isinstance(entry, Include):
                rules.extend(resolve(entry.state, chain + (name,)))
            else:
                rules.append(entry)
        resolved[name] = tuple(rules)
        return resolved[name]

    states: dict[str, State] = {}
    for name in table:
        states[name] = State(name, resolve(name, ()))

    for state in states.values():
        for r in state.rules:
            target = None
            if isinstance(r.transition, (Push, Goto)):
                target = r.transition.state
            elif isinstance(r.action, Recurse):
                target = r.action.state
            if target is not None and target not in states:
                raise ValueError(f"state '{state.name}' refers to unknown state '{target}'")
    return states
