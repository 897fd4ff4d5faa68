"""Token stream renderers — HTML spans, JSON, and a plain debug dump."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import TextIO

from fuselex.tokens import Token, TokenType

# Short CSS class per token type (pygments-compatible names).
CSS_CLASSES: dict[TokenType, str] = {
    TokenType.TEXT: "",
    TokenType.ERROR: "err",
    TokenType.COMMENT: "c",
    TokenType.COMMENT_SINGLE: "c1",
    TokenType.COMMENT_MULTILINE: "cm",
    TokenType.COMMENT_PREPROC: "cp",
    TokenType.KEYWORD: "k",
    TokenType.KEYWORD_DECLARATION: "kd",
    TokenType.KEYWORD_CONSTANT: "kc",
    TokenType.OPERATOR: "o",
    TokenType.OPERATOR_WORD: "ow",
    TokenType.PUNCTUATION: "p",
    TokenType.NUMBER: "m",
    TokenType.NUMBER_INTEGER: "mi",
    TokenType.NUMBER_FLOAT: "mf",
    TokenType.NUMBER_HEX: "mh",
    TokenType.NUMBER_BIN: "mb",
    TokenType.STRING: "s",
    TokenType.STRING_ESCAPE: "se",
    TokenType.STRING_INTERPOL: "si",
    TokenType.STRING_REGEX: "sr",
    TokenType.NAME: "n",
    TokenType.NAME_BUILTIN: "nb",
    TokenType.NAME_CLASS: "nc",
    TokenType.NAME_FUNCTION: "nf",
}


def _escape_html(text: str) -> str:
    """Escape text for HTML body content."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ch == '"':
            result.append("&quot;")
        else:
            result.append(ch)
    return "".join(result)


def render_html(tokens: Iterable[Token]) -> str:
    """Render tokens as a `<pre class="highlight">` block of classed spans.

    Adjacent tokens of the same type share one span.
    """
    parts: list[str] = ['<pre class="highlight"><code>']
    pending: list[str] = []
    pending_type: TokenType | None = None

    def flush() -> None:
        if pending_type is None:
            return
        text = _escape_html("".join(pending))
        css = CSS_CLASSES[pending_type]
        parts.append(f'<span class="{css}">{text}</span>' if css else text)
        pending.clear()

    for tok in tokens:
        if tok.type != pending_type:
            flush()
            pending_type = tok.type
        pending.append(tok.value)
    flush()

    parts.append("</code></pre>\n")
    return "".join(parts)


def render_json(tokens: Iterable[Token]) -> str:
    """Render tokens as a JSON array of {type, value, line, column, offset}."""
    items = [
        {
            "type": tok.type.value,
            "value": tok.value,
            "line": tok.span.start.line,
            "column": tok.span.start.column,
            "offset": tok.span.start.offset,
        }
        for tok in tokens
    ]
    return json.dumps(items, indent=2) + "\n"


def render_tokens(tokens: Iterable[Token]) -> str:
    """Render one `line:col  Type  'text'` line per token."""
    lines = [
        f"{tok.span.start.line}:{tok.span.start.column}\t{tok.type.value}\t{tok.value!r}"
        for tok in tokens
    ]
    return "".join(line + "\n" for line in lines)


def dump_tokens(tokens: Iterable[Token], *, file: TextIO) -> None:
    """Write the plain token dump to file."""
    file.write(render_tokens(tokens))
