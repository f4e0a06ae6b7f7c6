"""Test greedy number lexing and integer/float/unknown classification."""

import pytest

from cmdlang.tokens import Token, TokenKind, classify_number, number_value


class TestIntegers:
    @pytest.mark.parametrize("text", ["0", "10", "-3", "+42", "007"])
    def test_integer(self, lex, text):
        tokens = lex(text)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.INTEGER
        assert tokens[0].text == text

    def test_integer_offsets(self, lex):
        tokens = lex("spin 123")
        assert (tokens[1].begin, tokens[1].end) == (5, 8)

    def test_suffix_on_integer_is_unknown(self, lex):
        tokens = lex("10f")
        assert tokens[0].kind == TokenKind.UNKNOWN

    def test_out_of_int64_range_is_float(self):
        assert classify_number("9223372036854775807") == TokenKind.INTEGER
        assert classify_number("9223372036854775808") == TokenKind.FLOAT

    def test_leading_zeros_do_not_count_toward_range(self):
        text = "0" * 30 + "42"
        assert classify_number(text) == TokenKind.INTEGER
        assert number_value(Token(TokenKind.INTEGER, text, 0, len(text))) == 42

    def test_very_long_digit_run_is_unknown(self, lex):
        tokens = lex("cmd " + "1" * 5000)
        assert tokens[1].kind == TokenKind.UNKNOWN
        assert tokens[1].end == 5004


class TestFloats:
    @pytest.mark.parametrize("text", ["1.5", ".5", "5.", "-0.25", "1e5", "2.5E-3", "1.5f", "3.F"])
    def test_float(self, lex, text):
        tokens = lex(text)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.FLOAT

    def test_suffix_value(self):
        assert number_value(Token(TokenKind.FLOAT, "1.5f", 0, 4)) == 1.5

    def test_overflow_is_unknown(self):
        assert classify_number("1e999") == TokenKind.UNKNOWN


class TestGreedyRun:
    def test_interior_letters_make_one_unknown(self, lex):
        tokens = lex("1x2 y")
        assert tokens[0].kind == TokenKind.UNKNOWN
        assert tokens[0].text == "1x2"
        assert (tokens[0].begin, tokens[0].end) == (0, 3)
        assert tokens[1].kind == TokenKind.IDENTIFIER

    def test_trailing_letters(self, lex):
        tokens = lex("12ab")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.UNKNOWN

    @pytest.mark.parametrize("text", ["-", "+", ".", "1.5ff", "1+2", "--1", "1_000"])
    def test_malformed(self, lex, text):
        tokens = lex(text)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.UNKNOWN

    def test_run_stops_at_comma(self, lex):
        tokens = lex("1,2.5")
        assert [t.kind for t in tokens] == [TokenKind.INTEGER, TokenKind.COMMA, TokenKind.FLOAT]

    def test_run_stops_at_bracket(self, lex):
        tokens = lex("(1)")
        assert tokens[1].kind == TokenKind.INTEGER
        assert tokens[2].kind == TokenKind.RIGHT_PAREN


class TestNumberValue:
    def test_integer_value(self):
        assert number_value(Token(TokenKind.INTEGER, "+7", 0, 2)) == 7

    def test_not_a_number(self):
        with pytest.raises(ValueError):
            number_value(Token(TokenKind.IDENTIFIER, "x", 0, 1))
