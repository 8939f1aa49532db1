"""State-stack mutators.

A mutator changes the state stack in response to a match.  It runs
*before* the rule's action, so an action that re-enters the same lexer
(``UsingSelf``) observes the updated stack.

The built-in variants cover the usual pushdown operations; ``MutatorFunc``
wraps an arbitrary callable for anything else.  Grammar authors normally
use the string shorthand accepted by ``as_mutator``:

``"name"``
    Push state ``name``.
``"#push"``
    Push the currently active state again.
``"#pop"``
    Pop the active state.
``("#pop", "other")``
    Apply each entry in order.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pushlex.grammar.rules import MutatorSpec
    from pushlex.lexer.state import LexerState

POP = "#pop"
PUSH = "#push"


class Mutator(ABC):
    """Abstract base class for state-stack mutations."""

    @abstractmethod
    def mutate(self, state: LexerState) -> None:
        """Apply this mutation to ``state.stack``.

        Raises
        ------
        pushlex.lexer.errors.TokenisationError
            If the mutation cannot be applied; the run is aborted.
        """

    @property
    def targets(self) -> tuple[str, ...]:
        """State names this mutator can make active.

        Used at construction time to reject references to undefined
        states.  Mutators that cannot know their targets return ``()``.
        """
        return ()


class Push(Mutator):
    """Push one or more states; with no arguments re-push the active state."""

    def __init__(self, *states: str) -> None:
        self._states = states

    def mutate(self, state: LexerState) -> None:
        if self._states:
            state.push(*self._states)
        else:
            state.push(state.state)

    @property
    def targets(self) -> tuple[str, ...]:
        return self._states

    def __repr__(self) -> str:
        return f"Push({', '.join(repr(s) for s in self._states)})"


class Pop(Mutator):
    """Pop ``count`` states off the stack."""

    def __init__(self, count: int = 1) -> None:
        if count < 1:
            raise ValueError(f"Pop count must be at least 1, got {count}")
        self._count = count

    def mutate(self, state: LexerState) -> None:
        state.pop(self._count)

    def __repr__(self) -> str:
        return f"Pop({self._count})"


class Replace(Mutator):
    """Replace the active (top) state with ``target``."""

    def __init__(self, target: str) -> None:
        self._target = target

    def mutate(self, state: LexerState) -> None:
        state.pop(1)
        state.push(self._target)

    @property
    def targets(self) -> tuple[str, ...]:
        return (self._target,)

    def __repr__(self) -> str:
        return f"Replace({self._target!r})"


class ReplaceStack(Mutator):
    """Replace the whole stack with ``states`` (bottom first)."""

    def __init__(self, *states: str) -> None:
        self._states = states

    def mutate(self, state: LexerState) -> None:
        state.stack[:] = self._states

    @property
    def targets(self) -> tuple[str, ...]:
        return self._states

    def __repr__(self) -> str:
        return f"ReplaceStack({', '.join(repr(s) for s in self._states)})"


class Combined(Mutator):
    """Apply several mutators in order."""

    def __init__(self, *mutators: Mutator) -> None:
        self._mutators = mutators

    def mutate(self, state: LexerState) -> None:
        for mutator in self._mutators:
            mutator.mutate(state)

    @property
    def targets(self) -> tuple[str, ...]:
        return tuple(t for m in self._mutators for t in m.targets)

    def __repr__(self) -> str:
        return f"Combined({', '.join(repr(m) for m in self._mutators)})"


class MutatorFunc(Mutator):
    """Wrap a plain callable taking the ``LexerState``."""

    def __init__(self, func: Callable[[LexerState], None]) -> None:
        self._func = func

    def mutate(self, state: LexerState) -> None:
        self._func(state)

    def __repr__(self) -> str:
        return f"MutatorFunc({getattr(self._func, '__qualname__', self._func)!r})"


def as_mutator(value: MutatorSpec | None) -> Mutator | None:
    """Normalise mutator shorthand into a ``Mutator`` instance.

    Raises
    ------
    TypeError
        If ``value`` is not a mutator, a string or a tuple of strings.
    """
    if value is None or isinstance(value, Mutator):
        return value
    if isinstance(value, str):
        if value == POP:
            return Pop()
        if value == PUSH:
            return Push()
        return Push(value)
    if isinstance(value, tuple):
        return Combined(*(_require(as_mutator(item)) for item in value))
    if callable(value):
        return MutatorFunc(value)
    raise TypeError(f"Cannot use {value!r} as a state mutator")


def _require(mutator: Mutator | None) -> Mutator:
    if mutator is None:
        raise TypeError("None is not allowed inside a combined mutator")
    return mutator
