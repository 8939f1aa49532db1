"""Rule definitions for pushlex grammars.

A grammar is a *state map*: a mapping from state name to an ordered
sequence of rules.  Each rule pairs a regular expression with an
optional action (what to emit) and an optional mutator (how to change
the state stack).  Within a state the first matching rule wins.

Rules may be written as ``Rule`` instances or as plain tuples::

    rules = {
        "root": [
            (r"\\s+", TokenType.TEXT_WHITESPACE),
            (r'"', TokenType.STRING, "string"),
            (words("if", "else", "while"), TokenType.KEYWORD),
            (r"\\w+", TokenType.NAME),
        ],
        "string": [
            (r'[^"\\\\]+', TokenType.STRING),
            (r"\\\\.", TokenType.STRING_ESCAPE),
            (r'"', TokenType.STRING, "#pop"),
        ],
    }

The state named ``"root"`` is mandatory and is the default start state.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from pushlex.grammar.tokens import TokenType
    from pushlex.lexer.actions import Emitter
    from pushlex.lexer.mutators import Mutator

ROOT_STATE = "root"

# Shorthand accepted wherever a mutator is expected: a state name to push,
# "#pop", "#push", or a tuple of those applied in order.
MutatorSpec = Union["Mutator", str, tuple[str, ...]]
ActionSpec = Union["Emitter", "TokenType"]


@dataclass(frozen=True, slots=True)
class Rule:
    """A single pattern/action/mutator triple.

    Parameters
    ----------
    pattern:
        Regular expression source.  It is matched anchored at the current
        scan offset.
    action:
        An ``Emitter`` or, as shorthand, a ``TokenType`` to emit for the
        whole match.  ``None`` consumes the match silently.
    mutator:
        A ``Mutator`` or mutator shorthand applied to the state stack
        before the action runs.
    """

    pattern: str
    action: ActionSpec | None = None
    mutator: MutatorSpec | None = None

    @classmethod
    def coerce(cls, value: Rule | Sequence[Any]) -> Rule:
        """Return ``value`` as a ``Rule``, accepting 1 to 3 element tuples.

        Raises
        ------
        TypeError
            If ``value`` is neither a ``Rule`` nor a short sequence whose
            first element is a pattern string.
        """
        if isinstance(value, Rule):
            return value
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise TypeError(f"Expected a Rule or a tuple, got {value!r}")
        if not 1 <= len(value) <= 3 or not isinstance(value[0], str):
            raise TypeError(
                f"Rule tuples take (pattern, action, mutator); got {value!r}"
            )
        return cls(*value)


StateMap = Mapping[str, Sequence[Union[Rule, Sequence[Any]]]]


def words(*literals: str, prefix: str = r"\b", suffix: str = r"\b") -> str:
    """Build a pattern matching any of the given literal words.

    Each literal is escaped; longer literals are tried first so that
    ``words("in", "int")`` matches ``int`` in full.

    Example
    -------
    ::

        words("if", "else")        # r"\\b(?:else|if)\\b"
        words("+", "+=", suffix="")  # r"\\b(?:\\+=|\\+)"
    """
    ordered = sorted(set(literals), key=lambda w: (-len(w), w))
    alternation = "|".join(re.escape(w) for w in ordered)
    return f"{prefix}(?:{alternation}){suffix}"
