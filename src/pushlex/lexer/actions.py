"""Rule actions ("emitters").

An emitter turns the captured groups of a successful match into zero or
more tokens, either directly or by running another lexer over the
matched text.  ``groups[0]`` is always the whole match; ``groups[1:]``
are the user's capture groups, ``None`` where a group did not take part
in the match.

Built-in emitters:

``TokenEmitter``
    Emit the whole match as one token of a fixed type.  A bare
    ``TokenType`` in a rule is shorthand for this.
``ByGroups``
    Apply one sub-emitter per capture group, in order.
``Using``
    Tokenise the whole match with another lexer.
``UsingSelf``
    Tokenise the whole match with the owning lexer from a given state.
``EmitterFunc``
    Wrap an arbitrary callable.

Absent (``None``) values never produce tokens.  A group that took part in
the match but captured nothing still gets its token, so a ``ByGroups``
match yields one token per participating group.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from pushlex.grammar.rules import ROOT_STATE
from pushlex.grammar.tokens import Token, TokenType
from pushlex.lexer.config import TokeniseOptions
from pushlex.lexer.errors import DelegationError, LexerError

if TYPE_CHECKING:
    from pushlex.grammar.rules import ActionSpec
    from pushlex.lexer.engine import Lexer
    from pushlex.lexer.state import LexerState

Groups = Sequence["str | None"]
TokenSink = Callable[[Token], None]


class Emitter(ABC):
    """Abstract base class for rule actions."""

    @abstractmethod
    def emit(
        self,
        groups: Groups,
        lexer: Lexer,
        out: TokenSink,
        state: LexerState | None = None,
    ) -> None:
        """Emit tokens for the given match groups.

        Parameters
        ----------
        groups:
            Match groups; index 0 is the whole match.
        lexer:
            The lexer that owns the matching rule.
        out:
            Token consumer.
        state:
            The run state of the calling tokenisation, if any.
        """


class TokenEmitter(Emitter):
    """Emit ``groups[0]`` as a single token of ``token_type``."""

    def __init__(self, token_type: TokenType) -> None:
        self.token_type = token_type

    def emit(
        self,
        groups: Groups,
        lexer: Lexer,
        out: TokenSink,
        state: LexerState | None = None,
    ) -> None:
        if groups and groups[0] is not None:
            out(Token(self.token_type, groups[0]))

    def __repr__(self) -> str:
        return f"TokenEmitter({self.token_type.name})"


class ByGroups(Emitter):
    """Apply sub-emitter *i* to capture group *i + 1*.

    A ``None`` sub-emitter skips its group, as does a group that did not
    take part in the match.  The rule's pattern must have exactly as many
    capture groups as there are sub-emitters, and a nested ``ByGroups``
    must have none; the lexer checks both when it is constructed.
    """

    def __init__(self, *emitters: ActionSpec | None) -> None:
        self._emitters = tuple(
            None if e is None else as_emitter(e) for e in emitters
        )

    @property
    def arity(self) -> int:
        """Number of capture groups this emitter expects."""
        return len(self._emitters)

    @property
    def emitters(self) -> tuple[Emitter | None, ...]:
        return self._emitters

    def emit(
        self,
        groups: Groups,
        lexer: Lexer,
        out: TokenSink,
        state: LexerState | None = None,
    ) -> None:
        if len(groups) - 1 != len(self._emitters):
            raise ValueError(
                f"ByGroups expects {len(self._emitters)} capture group(s), "
                f"got {len(groups) - 1}"
            )
        for emitter, group in zip(self._emitters, groups[1:]):
            if emitter is None or group is None:
                continue
            emitter.emit((group,), lexer, out, state)

    def __repr__(self) -> str:
        return f"ByGroups({', '.join(repr(e) for e in self._emitters)})"


class Using(Emitter):
    """Tokenise the whole match with another lexer.

    Parameters
    ----------
    lexer:
        The lexer to delegate to.
    state:
        State to start the delegated run in.  Defaults to ``"root"``.

    Raises
    ------
    DelegationError
        From ``emit`` when the delegated run fails; the outer run is
        aborted with it.
    """

    def __init__(self, lexer: Lexer, state: str = ROOT_STATE) -> None:
        self._lexer = lexer
        self._options = TokeniseOptions(state=state)

    def emit(
        self,
        groups: Groups,
        lexer: Lexer,
        out: TokenSink,
        state: LexerState | None = None,
    ) -> None:
        _delegate(self._lexer, self._options, groups, out, state)

    def __repr__(self) -> str:
        return f"Using({self._lexer.config.name!r}, state={self._options.state!r})"


class UsingSelf(Emitter):
    """Tokenise the whole match with the owning lexer, starting at ``state``."""

    def __init__(self, state: str) -> None:
        self._options = TokeniseOptions(state=state)

    @property
    def target(self) -> str:
        return self._options.state

    def emit(
        self,
        groups: Groups,
        lexer: Lexer,
        out: TokenSink,
        state: LexerState | None = None,
    ) -> None:
        _delegate(lexer, self._options, groups, out, state)

    def __repr__(self) -> str:
        return f"UsingSelf({self._options.state!r})"


class EmitterFunc(Emitter):
    """Wrap a callable with the ``Emitter.emit`` signature."""

    def __init__(self, func: Callable[..., None]) -> None:
        self._func = func

    def emit(
        self,
        groups: Groups,
        lexer: Lexer,
        out: TokenSink,
        state: LexerState | None = None,
    ) -> None:
        self._func(groups, lexer, out, state)

    def __repr__(self) -> str:
        return f"EmitterFunc({getattr(self._func, '__qualname__', self._func)!r})"


def _delegate(
    lexer: Lexer,
    options: TokeniseOptions,
    groups: Groups,
    out: TokenSink,
    state: LexerState | None,
) -> None:
    text = groups[0] if groups else None
    if not text:
        return
    try:
        lexer.tokenise(text, out, options)
    except LexerError as exc:
        raise DelegationError(lexer.config.name, state.pos if state is not None else 0) from exc


def as_emitter(value: ActionSpec | None) -> Emitter | None:
    """Normalise action shorthand into an ``Emitter`` instance.

    Raises
    ------
    TypeError
        If ``value`` is not an emitter, a ``TokenType`` or a callable.
    """
    if value is None or isinstance(value, Emitter):
        return value
    if isinstance(value, TokenType):
        return TokenEmitter(value)
    if callable(value):
        return EmitterFunc(value)
    raise TypeError(f"Cannot use {value!r} as a rule action")
