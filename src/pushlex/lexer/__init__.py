"""pushlex lexer engine.

Exports the ``RegexLexer`` engine, its configuration, the action and
mutator building blocks, the selection helper and the error types.
"""
from __future__ import annotations

from pushlex.lexer.actions import (
    ByGroups,
    Emitter,
    EmitterFunc,
    TokenEmitter,
    Using,
    UsingSelf,
)
from pushlex.lexer.compiler import CompiledRule, compile_pattern, compile_rules
from pushlex.lexer.config import LexerConfig, TokeniseOptions
from pushlex.lexer.engine import Analyser, Lexer, RegexLexer, tokenise
from pushlex.lexer.errors import (
    DelegationError,
    GrammarError,
    LexerError,
    StateStackError,
    TokenisationError,
    UnknownStateError,
)
from pushlex.lexer.mutators import (
    Combined,
    Mutator,
    MutatorFunc,
    Pop,
    Push,
    Replace,
    ReplaceStack,
)
from pushlex.lexer.selection import Lexers, pick
from pushlex.lexer.state import LexerState

__all__ = [
    # Engine
    "RegexLexer",
    "Lexer",
    "Analyser",
    "tokenise",
    "LexerConfig",
    "TokeniseOptions",
    "LexerState",
    # Compilation
    "CompiledRule",
    "compile_pattern",
    "compile_rules",
    # Actions
    "Emitter",
    "TokenEmitter",
    "ByGroups",
    "Using",
    "UsingSelf",
    "EmitterFunc",
    # Mutators
    "Mutator",
    "Push",
    "Pop",
    "Replace",
    "ReplaceStack",
    "Combined",
    "MutatorFunc",
    # Selection
    "pick",
    "Lexers",
    # Errors
    "LexerError",
    "GrammarError",
    "TokenisationError",
    "StateStackError",
    "UnknownStateError",
    "DelegationError",
]
