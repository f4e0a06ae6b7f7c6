"""Test quoted strings: escapes, line continuations and offsets."""

from cmdlang.tokens import TokenKind


class TestStrings:
    def test_simple(self, lex):
        tokens = lex('"hello world"')
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == "hello world"

    def test_span_covers_both_quotes(self, lex):
        tokens = lex('set "ab" x')
        assert (tokens[1].begin, tokens[1].end) == (4, 8)
        assert tokens[2].begin == 9

    def test_empty(self, lex):
        tokens = lex('""')
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == ""

    def test_blanks_preserved(self, lex):
        tokens = lex('"  a\tb  "')
        assert tokens[0].text == "  a\tb  "

    def test_newline_inside_string(self, lex):
        tokens = lex('"a\nb"')
        assert len(tokens) == 1
        assert tokens[0].text == "a\nb"


class TestEscapes:
    def test_escaped_quote(self, lex):
        tokens = lex(r'"say \"hi\""')
        assert tokens[0].text == 'say "hi"'

    def test_escaped_backslash(self, lex):
        tokens = lex(r'"a\\b"')
        assert tokens[0].text == "a\\b"

    def test_letters_taken_literally(self, lex):
        tokens = lex(r'"a\nb\tc"')
        assert tokens[0].text == "antbtc"

    def test_line_continuation(self, lex):
        tokens = lex('"abc\\\ndef"')
        assert tokens[0].text == "abcdef"

    def test_crlf_line_continuation(self, lex):
        tokens = lex('"abc\\\r\ndef"')
        assert tokens[0].text == "abcdef"


class TestUnterminated:
    def test_runs_to_end_of_input(self, lex):
        tokens = lex('"never closed\nsecond line')
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == "never closed\nsecond line"
        assert tokens[0].end == 25
