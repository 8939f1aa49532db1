"""The regex lexer engine.

``RegexLexer`` is a pushdown automaton over named states.  Each call to
``tokenise`` seeds a stack with the start state and then loops:

1. Stop when the input is exhausted or the stack is empty.
2. Try the active state's rules in order at the current offset; the
   first match wins.  A zero-length match counts only if its mutator
   changes the stack (at most ``MAX_ZERO_WIDTH_TRANSITIONS`` times in a
   row); otherwise the next rule is tried.
3. No match: emit the next character as a ``TokenType.ERROR`` token and
   advance by one.
4. Match: advance past it, apply the rule's mutator to the stack, then
   run the rule's action.  Zero-length transitions run no action.

Unmatched input never aborts a run.  Run errors (a pop on an empty stack,
an undefined active state, a failed delegated run) abort the current
call only; the compiled lexer is immutable and can be reused.

Thread Safety:
    A ``RegexLexer`` holds no per-call state.  Concurrent ``tokenise``
    calls on one instance are safe; each owns its ``LexerState``.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Protocol, runtime_checkable

from pushlex.grammar.rules import ROOT_STATE, StateMap
from pushlex.grammar.tokens import Token, TokenType
from pushlex.lexer.actions import TokenSink
from pushlex.lexer.compiler import CompiledRule, compile_rules
from pushlex.lexer.config import DEFAULT_OPTIONS, LexerConfig, TokeniseOptions
from pushlex.lexer.errors import UnknownStateError
from pushlex.lexer.state import LexerState

# Zero-width matches that change the stack are allowed this many times in
# a row at one offset; after that they are skipped like a failed match.
MAX_ZERO_WIDTH_TRANSITIONS = 64


@runtime_checkable
class Lexer(Protocol):
    """Anything that can tokenise text into a token sink."""

    @property
    def config(self) -> LexerConfig: ...

    def tokenise(
        self,
        text: str,
        out: TokenSink,
        options: TokeniseOptions | None = None,
    ) -> None: ...


@runtime_checkable
class Analyser(Protocol):
    """A lexer that can rate how well it suits a text sample."""

    def analyse_text(self, text: str) -> float: ...


class RegexLexer:
    """State-stack driven regular expression lexer.

    Parameters
    ----------
    config:
        Lexer settings.  ``None`` means ``LexerConfig()``.
    rules:
        The state map.  Must contain a ``"root"`` state.
    analyser:
        Optional function scoring a text sample between 0.0 and 1.0.

    Raises
    ------
    GrammarError
        If the state map cannot be compiled.

    Example
    -------
    ::

        lexer = RegexLexer(
            LexerConfig(name="Words"),
            {"root": [(r"\\w+", TokenType.NAME), (r"\\s+", TokenType.TEXT)]},
        )
        tokens = lexer.tokenize("hello world")
    """

    __slots__ = ("_config", "_rules", "_analyser")

    def __init__(
        self,
        config: LexerConfig | None,
        rules: StateMap,
        analyser: Callable[[str], float] | None = None,
    ) -> None:
        self._config = config if config is not None else LexerConfig()
        self._rules: Mapping[str, tuple[CompiledRule, ...]] = compile_rules(rules, self._config)
        self._analyser = analyser

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> LexerConfig:
        """The lexer's immutable configuration."""
        return self._config

    @property
    def rules(self) -> Mapping[str, tuple[CompiledRule, ...]]:
        """The compiled, read-only rule table."""
        return self._rules

    def __repr__(self) -> str:
        return f"RegexLexer(name={self._config.name!r}, states={sorted(self._rules)})"

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def set_analyser(self, analyser: Callable[[str], float] | None) -> RegexLexer:
        """Attach a content analyser and return the lexer for chaining."""
        self._analyser = analyser
        return self

    def analyse_text(self, text: str) -> float:
        """Return how well this lexer suits ``text``, from 0.0 to 1.0.

        Without an analyser the score is always 0.0.
        """
        if self._analyser is None:
            return 0.0
        score = float(self._analyser(text))
        return min(max(score, 0.0), 1.0)

    # ------------------------------------------------------------------
    # Tokenisation
    # ------------------------------------------------------------------

    def tokenise(
        self,
        text: str,
        out: TokenSink,
        options: TokeniseOptions | None = None,
    ) -> None:
        """Tokenise ``text``, passing every token to ``out`` in order.

        Parameters
        ----------
        text:
            Input text.
        out:
            Token consumer, called once per token.
        options:
            Per-call options; defaults to starting in ``"root"``.

        Raises
        ------
        pushlex.lexer.errors.TokenisationError
            If the run cannot continue.  Tokens already passed to ``out``
            stay emitted.
        """
        if options is None:
            options = DEFAULT_OPTIONS
        state = LexerState(text=text, rules=self._rules, lexer=self, stack=[options.state])
        text_len = len(text)
        zero_width = 0

        while state.pos < text_len and state.stack:
            state.state = state.stack[-1]
            rules = self._rules.get(state.state)
            if rules is None:
                raise UnknownStateError(state.state, state.pos)

            found = _match_rules(state, rules, zero_width < MAX_ZERO_WIDTH_TRANSITIONS)
            if found is None:
                _recover(state, out)
                zero_width = 0
                continue

            crule, match = found
            if match.end() == state.pos:
                # Mutator already applied; the action has nothing to consume.
                zero_width += 1
                continue

            state.pos = match.end()
            zero_width = 0
            if crule.mutator is not None:
                crule.mutator.mutate(state)
            if crule.action is not None:
                crule.action.emit(state.groups, self, out, state)

    def tokenize(self, text: str, state: str = ROOT_STATE) -> list[Token]:
        """Tokenise ``text`` starting in ``state`` and return the tokens."""
        return tokenise(self, text, TokeniseOptions(state=state))


def _match_rules(
    state: LexerState, rules: tuple[CompiledRule, ...], allow_zero_width: bool
) -> tuple[CompiledRule, re.Match[str]] | None:
    """Return the first rule that matches at ``state.pos``.

    A zero-width match only counts when its mutator changes the stack, in
    which case the mutation has already been applied on return.  Any
    other zero-width match is skipped and the next rule is tried.
    """
    for index, crule in enumerate(rules):
        match = crule.regex.match(state.text, state.pos)
        if match is None:
            continue
        state.rule = index
        state.groups = (match.group(0), *match.groups())
        if match.end() > state.pos:
            return crule, match
        if not allow_zero_width or crule.mutator is None:
            continue
        before = list(state.stack)
        crule.mutator.mutate(state)
        if state.stack != before:
            return crule, match
        state.stack[:] = before
    return None


def _recover(state: LexerState, out: TokenSink) -> None:
    out(Token(TokenType.ERROR, state.text[state.pos]))
    state.pos += 1


def tokenise(
    lexer: Lexer, text: str, options: TokeniseOptions | None = None
) -> list[Token]:
    """Tokenise ``text`` with ``lexer`` and return the tokens as a list.

    Raises
    ------
    pushlex.lexer.errors.TokenisationError
        If the run cannot continue.
    """
    tokens: list[Token] = []
    lexer.tokenise(text, tokens.append, options)
    return tokens
