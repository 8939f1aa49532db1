"""Shared test fixtures for pushlex.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from pushlex.grammar.tokens import TokenType
from pushlex.lexer.config import LexerConfig
from pushlex.lexer.engine import RegexLexer


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "pushlex"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def nested_lexer() -> RegexLexer:
    """A two-state grammar: parentheses switch from ``root`` to ``nested``."""
    return RegexLexer(
        LexerConfig(name="Nested", aliases=("nested",)),
        {
            "root": [
                (r"a", TokenType.NAME),
                (r"\(", TokenType.PUNCTUATION, "nested"),
                (r"\s+", TokenType.TEXT_WHITESPACE),
            ],
            "nested": [
                (r"b", TokenType.STRING),
                (r"\)", TokenType.PUNCTUATION, "#pop"),
            ],
        },
    )


@pytest.fixture()
def number_lexer() -> RegexLexer:
    """A single-state grammar for arithmetic on integers."""
    return RegexLexer(
        LexerConfig(name="Numbers", aliases=("numbers",)),
        {
            "root": [
                (r"\d+", TokenType.NUMBER_INTEGER),
                (r"[-+*/]", TokenType.OPERATOR),
                (r"\s+", TokenType.TEXT_WHITESPACE),
            ],
        },
    )
