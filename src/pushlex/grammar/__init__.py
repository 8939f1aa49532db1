"""pushlex grammar module.

Exports the token taxonomy and the rule building blocks grammars are
written with.
"""
from __future__ import annotations

from pushlex.grammar.rules import ROOT_STATE, Rule, StateMap, words
from pushlex.grammar.tokens import Token, TokenType

__all__ = [
    # Token types
    "TokenType",
    "Token",
    # Rules
    "Rule",
    "StateMap",
    "ROOT_STATE",
    "words",
]
