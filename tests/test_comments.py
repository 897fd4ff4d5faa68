"""Test shebang, line comments, and balanced long comments."""

from fuselex.tokens import TokenType

from .conftest import assert_types, pairs


class TestShebang:
    def test_leading_shebang(self, lex):
        tokens = lex("#!/usr/bin/env fuse\nprint(1)")
        assert pairs(tokens)[:2] == [
            (TokenType.COMMENT_PREPROC, "#!/usr/bin/env fuse"),
            (TokenType.TEXT, "\n"),
        ]
        assert tokens[2].type == TokenType.NAME_BUILTIN

    def test_shebang_only_at_start(self, lex):
        tokens = lex("x\n#!y")
        assert pairs(tokens) == [
            (TokenType.NAME, "x"),
            (TokenType.TEXT, "\n"),
            (TokenType.OPERATOR, "#"),
            (TokenType.OPERATOR, "!"),
            (TokenType.NAME, "y"),
        ]


class TestLineComments:
    def test_line_comment(self, lex):
        tokens = lex("-- hello\nx")
        assert pairs(tokens) == [
            (TokenType.COMMENT_SINGLE, "-- hello"),
            (TokenType.TEXT, "\n"),
            (TokenType.NAME, "x"),
        ]

    def test_comment_after_code(self, lex):
        tokens = lex("x = 1 -- note")
        assert tokens[-1].type == TokenType.COMMENT_SINGLE
        assert tokens[-1].value == "-- note"

    def test_minus_is_operator(self, lex):
        tokens = lex("a - b")
        assert tokens[2].type == TokenType.OPERATOR


class TestLongComments:
    def test_level_zero(self, lex):
        tokens = lex("--[[ block ]]")
        assert pairs(tokens) == [(TokenType.COMMENT_MULTILINE, "--[[ block ]]")]

    def test_spans_lines(self, lex):
        tokens = lex("--[[ one\ntwo ]]x")
        assert pairs(tokens) == [
            (TokenType.COMMENT_MULTILINE, "--[[ one\ntwo ]]"),
            (TokenType.NAME, "x"),
        ]

    def test_matching_level_required(self, lex):
        source = "--[==[ a ]=] still comment ]==]"
        tokens = lex(source)
        assert pairs(tokens) == [(TokenType.COMMENT_MULTILINE, source)]

    def test_closes_at_first_matching_level(self, lex):
        tokens = lex("--[=[ a ]=] b ]=]")
        assert tokens[0].value == "--[=[ a ]=]"
        assert tokens[0].type == TokenType.COMMENT_MULTILINE

    def test_unclosed_falls_back_to_line_comment(self, lex):
        tokens = lex("--[==[ a ]=]\nx")
        assert pairs(tokens) == [
            (TokenType.COMMENT_SINGLE, "--[==[ a ]=]"),
            (TokenType.TEXT, "\n"),
            (TokenType.NAME, "x"),
        ]

    def test_code_after_comment(self, lex):
        tokens = lex("--[[c]] let")
        assert_types(
            tokens,
            [TokenType.COMMENT_MULTILINE, TokenType.TEXT, TokenType.KEYWORD_DECLARATION],
        )
