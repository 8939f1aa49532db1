"""Per-call mutable scan state.

A fresh ``LexerState`` is created for every ``tokenise`` call and handed
to mutators and emitters explicitly.  The compiled rule table it refers
to is shared and read-only; everything else belongs to the call.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pushlex.lexer.errors import StateStackError

if TYPE_CHECKING:
    from pushlex.lexer.compiler import CompiledRule
    from pushlex.lexer.engine import RegexLexer


@dataclass
class LexerState:
    """Scan state of one tokenisation run.

    Parameters
    ----------
    text:
        The complete input text.  Never modified.
    rules:
        The owning lexer's compiled rule table.
    lexer:
        The lexer running this state.
    pos:
        Current 0-based scan offset.
    stack:
        State names; the last entry is the active state.
    state:
        Name of the state the current rule was selected from.
    rule:
        Index of the matched rule within ``state``, or ``-1``.
    groups:
        Captured groups of the most recent match.  Index 0 is the whole
        match; groups that did not participate are ``None``.
    """

    text: str
    rules: Mapping[str, tuple[CompiledRule, ...]]
    lexer: RegexLexer | None = None
    pos: int = 0
    stack: list[str] = field(default_factory=list)
    state: str = ""
    rule: int = -1
    groups: tuple[str | None, ...] = ()

    @property
    def depth(self) -> int:
        """Return the current stack depth."""
        return len(self.stack)

    def push(self, *states: str) -> None:
        """Push one or more state names, leftmost first."""
        self.stack.extend(states)

    def pop(self, count: int = 1) -> None:
        """Pop ``count`` states off the stack.

        Popping the last entry leaves the stack empty, which ends the run.

        Raises
        ------
        StateStackError
            If fewer than ``count`` states are on the stack.
        """
        if count > len(self.stack):
            raise StateStackError(
                f"Cannot pop {count} state(s) from a stack of depth {len(self.stack)}",
                self.pos,
            )
        del self.stack[len(self.stack) - count :]
