"""Unit tests for pushlex.grammar.tokens: TokenType enum and Token dataclass."""
from __future__ import annotations

import dataclasses

import pytest

from pushlex.grammar.tokens import Token, TokenType


# ---------------------------------------------------------------------------
# TokenType enum
# ---------------------------------------------------------------------------


class TestTokenTypeEnum:
    def test_token_type_members_are_unique(self) -> None:
        values = [t.value for t in TokenType]
        assert len(values) == len(set(values))

    def test_error_type_is_reserved(self) -> None:
        assert TokenType.ERROR.name == "ERROR"

    def test_every_subtype_has_an_existing_category(self) -> None:
        for member in TokenType:
            assert isinstance(member.category, TokenType)


@pytest.mark.parametrize("member, category", [
    (TokenType.STRING_DOUBLE, TokenType.STRING),
    (TokenType.KEYWORD_CONSTANT, TokenType.KEYWORD),
    (TokenType.NAME_FUNCTION, TokenType.NAME),
    (TokenType.TEXT_WHITESPACE, TokenType.TEXT),
    (TokenType.GENERIC_ERROR, TokenType.GENERIC),
    (TokenType.ERROR, TokenType.ERROR),
    (TokenType.NUMBER, TokenType.NUMBER),
])
def test_category(member: TokenType, category: TokenType) -> None:
    assert member.category is category


class TestInCategory:
    def test_subtype_is_in_parent_category(self) -> None:
        assert TokenType.COMMENT_SINGLE.in_category(TokenType.COMMENT)

    def test_type_is_in_its_own_category(self) -> None:
        assert TokenType.COMMENT.in_category(TokenType.COMMENT)

    def test_parent_is_not_in_subtype_category(self) -> None:
        assert not TokenType.COMMENT.in_category(TokenType.COMMENT_SINGLE)

    def test_generic_error_is_not_an_error_token(self) -> None:
        assert not TokenType.GENERIC_ERROR.in_category(TokenType.ERROR)


@pytest.mark.parametrize("name, expected", [
    ("STRING_DOUBLE", TokenType.STRING_DOUBLE),
    ("String.Double", TokenType.STRING_DOUBLE),
    ("keyword", TokenType.KEYWORD),
    ("  Text.Whitespace ", TokenType.TEXT_WHITESPACE),
])
def test_from_name(name: str, expected: TokenType) -> None:
    assert TokenType.from_name(name) is expected


def test_from_name_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown token type"):
        TokenType.from_name("Literal.Nonsense")


# ---------------------------------------------------------------------------
# Token dataclass
# ---------------------------------------------------------------------------


class TestToken:
    def test_fields(self) -> None:
        token = Token(TokenType.NAME, "foo")
        assert token.type is TokenType.NAME
        assert token.value == "foo"

    def test_is_frozen(self) -> None:
        token = Token(TokenType.NAME, "foo")
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.value = "bar"  # type: ignore[misc]

    def test_equality_is_by_value(self) -> None:
        assert Token(TokenType.NAME, "x") == Token(TokenType.NAME, "x")
        assert Token(TokenType.NAME, "x") != Token(TokenType.KEYWORD, "x")

    def test_str_is_the_value(self) -> None:
        assert str(Token(TokenType.STRING, "hi")) == "hi"

    def test_repr(self) -> None:
        assert repr(Token(TokenType.STRING, "hi")) == "Token(STRING, 'hi')"

    def test_is_error(self) -> None:
        assert Token(TokenType.ERROR, "?").is_error
        assert not Token(TokenType.TEXT, "?").is_error
