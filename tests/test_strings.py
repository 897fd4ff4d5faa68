"""Test quoted strings, delimiter matching, escapes, and raw strings."""

import pytest

from fuselex.tokens import TokenType

from .conftest import find_tokens, pairs

S = TokenType.STRING


class TestQuotedStrings:
    def test_double_quoted(self, lex):
        assert pairs(lex('"hello"')) == [(S, '"'), (S, "hello"), (S, '"')]

    def test_single_quoted(self, lex):
        assert pairs(lex("'hello'")) == [(S, "'"), (S, "hello"), (S, "'")]

    def test_empty_string(self, lex):
        assert pairs(lex('""')) == [(S, '"'), (S, '"')]

    def test_unicode_prefix(self, lex):
        tokens = lex("u'x'")
        assert pairs(tokens) == [(S, "u'"), (S, "x"), (S, "'")]

    def test_upper_unicode_prefix(self, lex):
        assert lex('U"x"')[0].value == 'U"'

    def test_string_then_code(self, lex):
        tokens = lex('"a" b')
        assert tokens[-1].type == TokenType.NAME

    def test_adjacent_strings_both_close(self, lex):
        tokens = lex("'a' \"b\" c")
        assert tokens[-1].type == TokenType.NAME
        assert tokens[-1].value == "c"

    def test_dollar_without_brace_is_content(self, lex):
        assert pairs(lex('"a$b"')) == [(S, '"'), (S, "a"), (S, "$"), (S, "b"), (S, '"')]

    def test_multiline_string(self, lex):
        tokens = lex('"a\nb" c')
        assert tokens[-1].type == TokenType.NAME


class TestDelimiterMatching:
    def test_double_quotes_inside_single(self, lex):
        tokens = lex("'it is a \"test\"'")
        assert all(t.type == S for t in tokens)
        assert "".join(t.value for t in tokens) == "'it is a \"test\"'"
        # outer string closed: code follows
        tokens = lex("'it is a \"test\"' x")
        assert tokens[-1].type == TokenType.NAME

    def test_single_quote_inside_double(self, lex):
        tokens = lex("\"don't\" x")
        assert pairs(tokens) == [
            (S, '"'),
            (S, "don"),
            (S, "'"),
            (S, "t"),
            (S, '"'),
            (TokenType.TEXT, " "),
            (TokenType.NAME, "x"),
        ]


class TestEscapes:
    @pytest.mark.parametrize(
        "escape",
        ["\\n", "\\r", "\\t", "\\\\", '\\"', "\\'", "\\0", "\\65", "\\123", "\\x41", "\\u00e9", "\\U0001F600"],
    )
    def test_valid_escape(self, lex, escape):
        tokens = lex(f'"{escape}"')
        assert pairs(tokens) == [(S, '"'), (TokenType.STRING_ESCAPE, escape), (S, '"')]

    def test_escaped_newline(self, lex):
        tokens = lex('"a\\\nb"')
        assert find_tokens(tokens, TokenType.STRING_ESCAPE)[0].value == "\\\n"

    def test_decimal_escape_takes_three_digits(self, lex):
        tokens = lex('"\\1234"')
        assert pairs(tokens) == [(S, '"'), (TokenType.STRING_ESCAPE, "\\123"), (S, "4"), (S, '"')]

    def test_escaped_quote_does_not_close(self, lex):
        tokens = lex('"a\\"b" c')
        assert pairs(tokens)[:5] == [
            (S, '"'),
            (S, "a"),
            (TokenType.STRING_ESCAPE, '\\"'),
            (S, "b"),
            (S, '"'),
        ]
        assert tokens[-1].type == TokenType.NAME

    def test_invalid_escape_recovers(self, lex):
        tokens = lex('"\\q"')
        assert pairs(tokens) == [(S, '"'), (TokenType.ERROR, "\\"), (S, "q"), (S, '"')]

    def test_short_hex_escape_recovers(self, lex):
        tokens = lex('"\\xZ"')
        assert pairs(tokens) == [(S, '"'), (TokenType.ERROR, "\\"), (S, "xZ"), (S, '"')]


class TestRawStrings:
    def test_raw_string_is_one_token(self, lex):
        assert pairs(lex('r"a\\nb"')) == [(S, 'r"a\\nb"')]

    def test_unicode_raw_string(self, lex):
        assert pairs(lex("ur'x'")) == [(S, "ur'x'")]

    def test_fenced_raw_string(self, lex):
        source = 'r#"has "quotes" inside"#'
        assert pairs(lex(source)) == [(S, source)]

    def test_fence_count_must_match(self, lex):
        source = 'r##"a"# b"##'
        assert pairs(lex(source)) == [(S, source)]

    def test_raw_string_spans_lines(self, lex):
        assert pairs(lex("r'a\nb'")) == [(S, "r'a\nb'")]

    def test_unterminated_raw_string(self, lex):
        tokens = lex('r"abc')
        assert pairs(tokens) == [(TokenType.NAME, "r"), (S, '"'), (S, "abc")]


class TestUnterminated:
    def test_unterminated_string_covers_input(self, lex):
        source = '"abc\nlet x'
        tokens = lex(source)
        assert "".join(t.value for t in tokens) == source
        assert all(t.type.is_a(S) for t in tokens)
