"""Error types for pushlex lexers.

Two families of errors exist:

``GrammarError``
    Raised while a lexer is being constructed.  The grammar is unusable
    and no lexer instance is produced.
``TokenisationError``
    Raised while a single ``tokenise`` call is running.  The call is
    aborted; the compiled lexer itself is unaffected and later calls may
    still succeed.

Input that no rule matches is *not* an error: it is emitted as
``TokenType.ERROR`` tokens and scanning continues.
"""
from __future__ import annotations


class LexerError(Exception):
    """Base class for every error raised by pushlex."""


class GrammarError(LexerError):
    """Raised when a grammar cannot be compiled into a lexer.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    state:
        Name of the state that owns the faulty rule, if known.
    pattern:
        Source of the faulty pattern, if known.
    """

    def __init__(
        self,
        message: str,
        state: str | None = None,
        pattern: str | None = None,
    ) -> None:
        location = ""
        if state is not None:
            location = f" in state {state!r}"
        if pattern is not None:
            location += f" (pattern {pattern!r})"
        super().__init__(f"{message}{location}")
        self.grammar_message = message
        self.state = state
        self.pattern = pattern


class TokenisationError(LexerError):
    """Raised when a tokenisation run cannot continue.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    pos:
        0-based offset in the input where the run stopped.
    """

    def __init__(self, message: str, pos: int) -> None:
        super().__init__(f"{message} at offset {pos}")
        self.run_message = message
        self.pos = pos


class StateStackError(TokenisationError):
    """Raised when a mutator tries to pop more states than the stack holds."""


class UnknownStateError(TokenisationError):
    """Raised when the active state is not defined by the grammar.

    Parameters
    ----------
    state:
        The undefined state name.
    pos:
        0-based offset in the input where the state became active.
    """

    def __init__(self, state: str, pos: int) -> None:
        super().__init__(f"Unknown state {state!r}", pos)
        self.state = state


class DelegationError(TokenisationError):
    """Raised when a delegated (nested) tokenisation fails.

    The inner exception is available as ``__cause__``.

    Parameters
    ----------
    lexer_name:
        Name of the lexer the match was delegated to.
    pos:
        0-based offset in the *outer* input just after the delegated match.
    """

    def __init__(self, lexer_name: str, pos: int) -> None:
        super().__init__(f"Delegated tokenisation with {lexer_name or '<anonymous>'!r} failed", pos)
        self.lexer_name = lexer_name
