"""Fuse state tables: keywords, builtins, strings, interpolation, gsub regexes."""

from __future__ import annotations

import re
from collections.abc import Iterator

from fuselex.config import LexerOptions
from fuselex.context import LexerContext
from fuselex.rules import ComputedFunc, Goto, Include, Pop, Push, Recurse, Rule, include, rule
from fuselex.tokens import TokenType as T

IDENT = r"[A-Za-z_][A-Za-z0-9_]*"

BUILTINS = frozenset(
    """
    number string ustring any unknown never unsafe default namespace
    _G _VERSION assert assert_eq collectgarbage dofile error getmetatable
    ipairs load loadfile next pairs pcall print rawequal rawget rawlen
    rawset select setmetatable tonumber tostring xpcall typeof
    """.split()
)

# Standard-library tables; `math.floor` highlights `math` unless disabled.
BUILTIN_MODULES = frozenset(
    "coroutine debug io math os package string table utf8".split()
)

# Names that open a pattern-substitution call with regex arguments.
PATTERN_FUNCTIONS = frozenset({"gsub"})

_CONTROL_KEYWORDS = (
    "break do else elseif end for if in repeat return then until while".split()
)

_DIALECT_KEYWORDS = {
    "fuse": (
        "as enum struct type trait impl union import from export match when is "
        "try catch finally pub".split()
    ),
    "classic": (
        "as enum struct type trait union import from export match when is try catch finally".split()
    ),
}

_DIALECT_DECLARATIONS = {
    "fuse": ["const", "let", "static"],
    "classic": ["const", "let", "global"],
}

# Longest first within each alternation.
_DIALECT_OPERATORS = {
    "fuse": r"==|!=|<=|>=|<<|>>|\.\.\.|[?&|!=+\-*/%^<>#]",
    "classic": r"==|~=|<=|>=|\.\.\.|\.\.|[=+\-*/%^<>#]",
}

_ESCAPE = r"""\\(?:\d{1,3}|[nrt\\"'0\s]|x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8})"""

_FLOAT = r"(?:\d[\d_]*\.\d[\d_]*|\.\d[\d_]*|\d[\d_]*\.(?![.A-Za-z_]))(?:[eE][+-]?\d+)?"


def _words(words: list[str]) -> str:
    return r"(?:%s)\b" % "|".join(sorted(words, key=len, reverse=True))


def effective_builtins(options: LexerOptions) -> frozenset[str]:
    """The builtin names that classify as Name.Builtin under options."""
    if not options.function_highlighting:
        return frozenset()
    names = BUILTINS | BUILTIN_MODULES
    if options.dialect == "classic":
        names -= {"unsafe"}
    return names - frozenset(options.disabled_modules)


# ----------------------------------------------------------------------
# Computed actions
# ----------------------------------------------------------------------


def _open_string(ctx: LexerContext, m: re.Match[str]) -> Iterator[tuple[T, str]]:
    ctx.strings.register(prefix=m.group(1).lower(), delimiter=m.group(2))
    ctx.push("generic_string")
    yield T.STRING, m.group()


def _string_quote(ctx: LexerContext, m: re.Match[str]) -> Iterator[tuple[T, str]]:
    if ctx.strings.closes(m.group()):
        ctx.strings.remove()
        ctx.pop()
    yield T.STRING, m.group()


def _open_regex(ctx: LexerContext, m: re.Match[str]) -> Iterator[tuple[T, str]]:
    ctx.strings.register(delimiter=m.group())
    ctx.push("regex")
    yield T.STRING_REGEX, m.group()


def _regex_quote(ctx: LexerContext, m: re.Match[str]) -> Iterator[tuple[T, str]]:
    if ctx.strings.closes(m.group()):
        ctx.strings.remove()
        ctx.goto("regex_end")
    yield T.STRING_REGEX, m.group()


def _regex_group_quote(ctx: LexerContext, m: re.Match[str]) -> Iterator[tuple[T, str]]:
    # An unclosed [...] ends with the regex itself.
    if ctx.strings.closes(m.group()):
        ctx.strings.remove()
        ctx.pop()
        ctx.goto("regex_end")
    yield T.STRING_REGEX, m.group()


def _identifier_action(builtins: frozenset[str], highlighting: bool) -> ComputedFunc:
    builtin_type = T.NAME_BUILTIN if highlighting else T.NAME

    def classify(ctx: LexerContext, m: re.Match[str]) -> Iterator[tuple[T, str]]:
        name = m.group()
        if name in PATTERN_FUNCTIONS:
            ctx.push("gsub")
            yield builtin_type, name
        elif name in builtins:
            yield T.NAME_BUILTIN, name
        elif "." in name:
            # Only a standard-library table keeps its builtin class as a prefix.
            head, _, tail = name.partition(".")
            module = head in BUILTIN_MODULES and head in builtins
            yield (T.NAME_BUILTIN if module else T.NAME), head
            yield T.PUNCTUATION, "."
            yield T.NAME, tail
        else:
            yield T.NAME, name

    return classify


# ----------------------------------------------------------------------
# Table
# ----------------------------------------------------------------------


def grammar_table(options: LexerOptions) -> dict[str, list[Rule | Include]]:
    """Return the unresolved state table for options."""
    dialect = options.dialect
    builtins = effective_builtins(options)

    numbers = [
        rule(_FLOAT, T.NUMBER_FLOAT),
        rule(r"\d[\d_]*[eE][+-]?\d+", T.NUMBER_FLOAT),
    ]
    if dialect == "fuse":
        numbers.append(rule(r"0[bB][01_]+", T.NUMBER_BIN))
        numbers.append(rule(r"0[xX][0-9a-fA-F_]+", T.NUMBER_HEX))
    else:
        numbers.append(rule(r"0[xX][0-9a-fA-F]+", T.NUMBER_HEX))
    numbers.append(rule(r"\d[\d_]*", T.NUMBER_INTEGER))

    return {
        "root": [
            rule(r"#!.*", T.COMMENT_PREPROC),
            rule(r"", T.TEXT, Push("base")),
        ],
        "base": [
            rule(r"--\[(=*)\[[\s\S]*?\]\1\]", T.COMMENT_MULTILINE),
            rule(r"--.*", T.COMMENT_SINGLE),
            *numbers,
            rule(r"\n", T.TEXT),
            rule(r"[^\S\n]+", T.TEXT),
            rule(_DIALECT_OPERATORS[dialect], T.OPERATOR),
            rule(r"[\[\]{}().,:;]", T.PUNCTUATION),
            rule(_words(["and", "or", "not"]), T.OPERATOR_WORD),
            rule(_words(_CONTROL_KEYWORDS), T.KEYWORD),
            rule(_words(_DIALECT_KEYWORDS[dialect]), T.KEYWORD),
            rule(_words(_DIALECT_DECLARATIONS[dialect]), T.KEYWORD_DECLARATION),
            rule(_words(["true", "false", "nil"]), T.KEYWORD_CONSTANT),
            rule(_words(["function", "fn"]), T.KEYWORD, Push("function_name")),
            rule(r"([uU]?)(['\"])", _open_string),
            rule(r"(u?r)(#*)([\"'])[\s\S]*?\3\2", T.STRING),
            rule(IDENT + r"(?:\." + IDENT + r")?",
                 _identifier_action(builtins, options.function_highlighting)),
        ],
        "function_name": [
            rule(r"\s+", T.TEXT),
            rule(r"(?:(%s)(\.))?(%s)" % (IDENT, IDENT),
                 (T.NAME_CLASS, T.PUNCTUATION, T.NAME_FUNCTION), Pop()),
            # inline function: leave the paren to base
            rule(r"(?=\()", T.PUNCTUATION, Pop()),
            rule(r"", T.TEXT, Pop()),
        ],
        "generic_escape": [
            rule(_ESCAPE, T.STRING_ESCAPE),
        ],
        "generic_string": [
            include("generic_escape"),
            rule(r"['\"]", _string_quote),
            rule(r"\$\{", T.STRING_INTERPOL, Push("generic_interpol")),
            rule(r"[^'\"\\$]+", T.STRING),
            rule(r"\$", T.STRING),
        ],
        "interpol_body": [
            rule(r"[^${}]+", Recurse("base")),
            rule(r"\$\{", T.STRING_INTERPOL, Push("generic_interpol")),
            rule(r"\{", T.PUNCTUATION, Push("interpol_brace")),
        ],
        "generic_interpol": [
            include("interpol_body"),
            rule(r"\}", T.STRING_INTERPOL, Pop()),
        ],
        "interpol_brace": [
            include("interpol_body"),
            rule(r"\}", T.PUNCTUATION, Pop()),
        ],
        "gsub": [
            rule(r"\s+", T.TEXT),
            rule(r"\(", T.PUNCTUATION, Goto("gsub_args")),
            rule(r"", T.TEXT, Pop()),
        ],
        "gsub_args": [
            rule(r"\)", T.PUNCTUATION, Pop()),
            rule(r"\(", T.PUNCTUATION, Push("gsub_args")),
            rule(r",", T.PUNCTUATION),
            rule(r"\s+", T.TEXT),
            rule(r"['\"]", _open_regex),
            rule(r"[^()'\",\s]+", Recurse("base")),
        ],
        "regex": [
            rule(r"['\"]", _regex_quote),
            rule(r"\[\^?", T.STRING_ESCAPE, Push("regex_group")),
            rule(r"\\[\s\S]", T.STRING_ESCAPE),
            rule(r"\(\?[:=<!]", T.STRING_ESCAPE),
            rule(r"\{[\d,]+\}", T.STRING_ESCAPE),
            rule(r"[()?*+^$|]", T.STRING_ESCAPE),
            rule(r"[\s\S]", T.STRING_REGEX),
        ],
        "regex_end": [
            rule(r"\$+", T.STRING_REGEX, Pop()),
            rule(r"", T.TEXT, Pop()),
        ],
        "regex_group": [
            rule(r"/", T.STRING_ESCAPE),
            rule(r"\]", T.STRING_ESCAPE, Pop()),
            rule(r"(\\)([\s\S])", (T.STRING_ESCAPE, T.STRING_REGEX)),
            rule(r"['\"]", _regex_group_quote),
            rule(r"[\s\S]", T.STRING_REGEX),
        ],
    }
