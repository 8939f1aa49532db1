"""Pick the most suitable lexer for a text sample.

Only lexers implementing ``Analyser`` take part; the rest are skipped.
The highest score wins and ties go to the lexer that comes first, so
grammar authors control precedence through ordering.
"""
from __future__ import annotations

from collections.abc import Iterable

from pushlex.lexer.engine import Analyser, Lexer


def pick(lexers: Iterable[Lexer], text: str) -> Lexer | None:
    """Return the lexer that scores ``text`` highest, or ``None``.

    Parameters
    ----------
    lexers:
        Candidate lexers, in order of precedence.
    text:
        Sample of the text to be tokenised.

    Returns
    -------
    Lexer | None
        The first lexer to report the maximum score.  ``None`` if no
        candidate implements ``Analyser``.
    """
    picked: Lexer | None = None
    highest = -1.0
    for lexer in lexers:
        if not isinstance(lexer, Analyser):
            continue
        score = lexer.analyse_text(text)
        if score > highest:
            highest = score
            picked = lexer
    return picked


class Lexers(list):
    """A list of lexers with a ``pick`` shortcut."""

    def pick(self, text: str) -> Lexer | None:
        """Return ``pick(self, text)``."""
        return pick(self, text)
