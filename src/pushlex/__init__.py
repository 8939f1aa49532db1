"""pushlex: rule-driven, state-stack regular expression lexers.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import pushlex
    from pushlex import LexerConfig, RegexLexer, TokenType

    lexer = RegexLexer(
        LexerConfig(name="Shout"),
        {
            "root": [
                (r"[A-Z]+", TokenType.KEYWORD),
                (r"\\(", TokenType.PUNCTUATION, "paren"),
                (r"\\s+", TokenType.TEXT_WHITESPACE),
            ],
            "paren": [
                (r"[^)]+", TokenType.COMMENT),
                (r"\\)", TokenType.PUNCTUATION, "#pop"),
            ],
        },
    )
    tokens = pushlex.tokenise(lexer, "HELLO (quietly) WORLD")

    # Built-in and installed lexers
    ini = pushlex.get_lexer("ini")
    guessed = pushlex.guess_lexer(source, filename="setup.cfg")

    # Grammars from YAML files
    custom = pushlex.load_grammar_file("my-grammar.yaml")

    pushlex.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from pushlex.grammar.rules import ROOT_STATE, Rule, words
from pushlex.grammar.tokens import Token, TokenType
from pushlex.lexer.config import LexerConfig, TokeniseOptions
from pushlex.lexer.engine import RegexLexer

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from pathlib import Path

    from pushlex.lexer.engine import Lexer


def tokenise(
    lexer: "Lexer | str | None",
    text: str,
    state: str = ROOT_STATE,
    filename: str | None = None,
) -> list[Token]:
    """Tokenise ``text`` and return the token list.

    Parameters
    ----------
    lexer:
        A lexer instance, the registered name of one, or ``None`` to
        guess from ``filename`` and the content.
    text:
        Input text.
    state:
        State to start in.
    filename:
        Optional file name used when guessing.

    Returns
    -------
    list[Token]
        All tokens in input order.

    Raises
    ------
    pushlex.lexers.LexerNotFoundError
        If ``lexer`` is a name that is not registered.
    pushlex.lexer.TokenisationError
        If the run cannot continue.
    """
    from pushlex.lexer.engine import tokenise as _tokenise

    if lexer is None:
        lexer = guess_lexer(text, filename=filename)
    elif isinstance(lexer, str):
        lexer = get_lexer(lexer)
    return _tokenise(lexer, text, TokeniseOptions(state=state))


def get_lexer(name: str) -> "Lexer":
    """Return a registered lexer by name or alias.

    Raises
    ------
    pushlex.lexers.LexerNotFoundError
        If no lexer is registered under ``name``.
    """
    from pushlex.lexers import get_lexer as _get_lexer

    return _get_lexer(name)


def guess_lexer(text: str, filename: str | None = None) -> "Lexer":
    """Return the registered lexer best suited to ``text``.

    Falls back to the plain-text lexer.
    """
    from pushlex.lexers import guess_lexer as _guess_lexer

    return _guess_lexer(text, filename=filename)


def load_grammar_file(path: "str | Path") -> RegexLexer:
    """Build a lexer from a YAML or JSON grammar file.

    Raises
    ------
    pushlex.lexer.GrammarError
        If the document is malformed or the grammar does not compile.
    """
    from pushlex.loader import load_grammar_file as _load_grammar_file

    return _load_grammar_file(path)


__all__ = [
    "__version__",
    "tokenise",
    "get_lexer",
    "guess_lexer",
    "load_grammar_file",
    "RegexLexer",
    "LexerConfig",
    "TokeniseOptions",
    "Rule",
    "Token",
    "TokenType",
    "words",
]
