"""Property-based tests for tokenisation invariants using Hypothesis.

These tests check properties that must hold for every input, not just
the hand-picked samples in the unit tests.
"""
from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from pushlex.grammar.tokens import Token, TokenType
from pushlex.lexer.config import LexerConfig
from pushlex.lexer.engine import RegexLexer
from pushlex.lexers import DIFF, INI, PLAINTEXT

NESTED = RegexLexer(
    LexerConfig(name="Nested"),
    {
        "root": [
            (r"a+", TokenType.NAME),
            (r"\(", TokenType.PUNCTUATION, "nested"),
            (r"\s+", TokenType.TEXT_WHITESPACE),
        ],
        "nested": [
            (r"b+", TokenType.STRING),
            (r"\(", TokenType.PUNCTUATION, "#push"),
            (r"\)", TokenType.PUNCTUATION, "#pop"),
        ],
    },
)

EMPTY = RegexLexer(None, {"root": []})


class TestCoverage:
    """Every character of the input ends up in exactly one token."""

    @given(st.text(alphabet="ab() \nx", max_size=300))
    @settings(max_examples=200)
    def test_values_reassemble_input(self, source: str) -> None:
        tokens = NESTED.tokenize(source)
        assert "".join(t.value for t in tokens) == source

    @given(st.text(max_size=300))
    @settings(max_examples=100)
    def test_tokens_are_never_empty(self, source: str) -> None:
        for token in NESTED.tokenize(source):
            assert token.value, f"Empty token {token!r}"

    @given(st.text(alphabet="[]=:;# \t\n\"ab", max_size=300))
    @settings(max_examples=200)
    def test_ini_covers_any_input_without_errors(self, source: str) -> None:
        tokens = INI.tokenize(source)
        assert "".join(t.value for t in tokens) == source
        assert not any(t.is_error for t in tokens)
        assert all(t.value for t in tokens)

    @given(st.text(max_size=300))
    @settings(max_examples=100)
    def test_diff_and_plaintext_cover_any_input(self, source: str) -> None:
        for lexer in (DIFF, PLAINTEXT):
            tokens = lexer.tokenize(source)
            assert "".join(t.value for t in tokens) == source
            assert not any(t.is_error for t in tokens)


class TestRecovery:
    """Unmatched input is reported character by character."""

    @given(st.text(max_size=200))
    @settings(max_examples=100)
    def test_empty_grammar_yields_one_error_per_character(self, source: str) -> None:
        assert EMPTY.tokenize(source) == [Token(TokenType.ERROR, c) for c in source]

    @given(st.text(alphabet="xyz", max_size=100))
    @settings(max_examples=50)
    def test_foreign_characters_are_errors(self, source: str) -> None:
        tokens = NESTED.tokenize(source)
        assert all(t.type is TokenType.ERROR for t in tokens)
        assert len(tokens) == len(source)


class TestDeterminism:
    @given(st.text(alphabet="ab() \n", max_size=200))
    @settings(max_examples=100)
    def test_repeated_runs_agree(self, source: str) -> None:
        assert NESTED.tokenize(source) == NESTED.tokenize(source)
