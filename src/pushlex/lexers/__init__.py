"""Lexer lookup for pushlex.

A default ``LexerRegistry`` holds the built-in lexers plus any lexers
installed packages declare under the "pushlex.lexers" entry-point group
(loaded on first use).

Example
-------
::

    from pushlex.lexers import get_lexer, guess_lexer

    ini = get_lexer("ini")
    lexer = guess_lexer(source, filename="setup.cfg")
"""
from __future__ import annotations

from pushlex.lexer.engine import Lexer
from pushlex.lexers.builtin import BUILTIN_LEXERS, DIFF, INI, PLAINTEXT
from pushlex.lexers.registry import (
    ENTRY_POINT_GROUP,
    LexerAlreadyRegisteredError,
    LexerNotFoundError,
    LexerRegistry,
)

_REGISTRY = LexerRegistry("default")
for _lexer in BUILTIN_LEXERS:
    _REGISTRY.register(_lexer)
_entrypoints_loaded = False


def default_registry() -> LexerRegistry:
    """Return the default registry, loading entry-point lexers once."""
    global _entrypoints_loaded
    if not _entrypoints_loaded:
        _entrypoints_loaded = True
        _REGISTRY.load_entrypoints(ENTRY_POINT_GROUP)
    return _REGISTRY


def get_lexer(name: str) -> Lexer:
    """Return the lexer registered under ``name`` or an alias.

    Raises
    ------
    LexerNotFoundError
        If no such lexer is registered.
    """
    return default_registry().get(name)


def guess_lexer(text: str, filename: str | None = None) -> Lexer:
    """Return the most suitable lexer for ``text``.

    A file name match wins over content analysis.  When neither yields a
    lexer the plain-text lexer is returned.
    """
    registry = default_registry()
    if filename:
        by_name = registry.match_filename(filename)
        if by_name is not None:
            return by_name
    picked = registry.analyse(text)
    return picked if picked is not None else PLAINTEXT


__all__ = [
    "LexerRegistry",
    "LexerNotFoundError",
    "LexerAlreadyRegisteredError",
    "ENTRY_POINT_GROUP",
    "default_registry",
    "get_lexer",
    "guess_lexer",
    "BUILTIN_LEXERS",
    "PLAINTEXT",
    "INI",
    "DIFF",
]
