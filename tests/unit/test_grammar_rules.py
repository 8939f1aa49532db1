"""Unit tests for pushlex.grammar.rules: Rule coercion and the words() helper."""
from __future__ import annotations

import re

import pytest

from pushlex.grammar.rules import Rule, words
from pushlex.grammar.tokens import TokenType


class TestRuleCoerce:
    def test_rule_instance_is_returned_unchanged(self) -> None:
        rule = Rule(r"\d+", TokenType.NUMBER)
        assert Rule.coerce(rule) is rule

    def test_one_element_tuple(self) -> None:
        assert Rule.coerce((r"\s+",)) == Rule(r"\s+")

    def test_three_element_tuple(self) -> None:
        rule = Rule.coerce((r'"', TokenType.STRING, "string"))
        assert rule.pattern == '"'
        assert rule.action is TokenType.STRING
        assert rule.mutator == "string"

    def test_list_is_accepted(self) -> None:
        assert Rule.coerce([r"x", TokenType.TEXT]) == Rule(r"x", TokenType.TEXT)

    @pytest.mark.parametrize("value", [
        "just-a-pattern",
        (),
        (r"x", TokenType.TEXT, None, "extra"),
        (42, TokenType.TEXT),
        None,
    ])
    def test_invalid_shapes_raise_type_error(self, value: object) -> None:
        with pytest.raises(TypeError):
            Rule.coerce(value)  # type: ignore[arg-type]


class TestWords:
    def test_matches_each_word(self) -> None:
        pattern = re.compile(words("if", "else", "while"))
        for word in ("if", "else", "while"):
            assert pattern.fullmatch(word)

    def test_respects_word_boundaries(self) -> None:
        pattern = re.compile(words("in"))
        assert pattern.match("int") is None
        assert pattern.match("in x") is not None

    def test_longer_literal_wins(self) -> None:
        pattern = re.compile(words("+", "+=", prefix="", suffix=""))
        match = pattern.match("+= 1")
        assert match is not None
        assert match.group(0) == "+="

    def test_literals_are_escaped(self) -> None:
        pattern = re.compile(words("a.b", prefix="", suffix=""))
        assert pattern.match("axb") is None
        assert pattern.match("a.b") is not None
