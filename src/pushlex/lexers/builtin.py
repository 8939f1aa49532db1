"""Built-in lexers.

A small set of grammars shipped with pushlex: a plain-text fallback, INI
configuration files and unified diffs.  They double as worked examples
of the rule syntax.
"""
from __future__ import annotations

import re

from pushlex.grammar.tokens import TokenType
from pushlex.lexer.actions import ByGroups
from pushlex.lexer.config import LexerConfig
from pushlex.lexer.engine import RegexLexer
from pushlex.lexer.mutators import Replace

# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------

PLAINTEXT = RegexLexer(
    LexerConfig(
        name="plaintext",
        aliases=("text", "plain", "no-highlight"),
        filenames=("*.txt",),
        mime_types=("text/plain",),
        dot_all=True,
    ),
    {"root": [(r".+", TokenType.TEXT)]},
)

# ---------------------------------------------------------------------------
# INI
# ---------------------------------------------------------------------------

_INI_SECTION = re.compile(r"^\[[^\]\n]+\][ \t]*$", re.MULTILINE)
_INI_ASSIGNMENT = re.compile(r"^[^\s;#=\[][^=\n]*=", re.MULTILINE)


def _analyse_ini(text: str) -> float:
    score = 0.0
    if _INI_SECTION.search(text):
        score += 0.4
        if _INI_ASSIGNMENT.search(text):
            score += 0.1
    return score


INI = RegexLexer(
    LexerConfig(
        name="INI",
        aliases=("ini", "cfg", "dosini"),
        filenames=("*.ini", "*.cfg", "*.inf"),
        alias_filenames=("*.conf",),
        mime_types=("text/x-ini", "text/inf"),
    ),
    {
        "root": [
            (r"\s+", TokenType.TEXT_WHITESPACE),
            (r"[;#].*", TokenType.COMMENT_SINGLE),
            (
                r"(\[)([^\]\n]+)(\])",
                ByGroups(TokenType.PUNCTUATION, TokenType.KEYWORD, TokenType.PUNCTUATION),
            ),
            (r"(\[)(\])", ByGroups(TokenType.PUNCTUATION, TokenType.PUNCTUATION)),
            (r"[^=:\n]+?(?=[ \t]*[=:])", TokenType.NAME_ATTRIBUTE, "assign"),
            (r"[^\n]+", TokenType.NAME_ATTRIBUTE),
        ],
        "assign": [
            (r"[ \t]+", TokenType.TEXT_WHITESPACE),
            (r"[=:]", TokenType.OPERATOR, Replace("value")),
        ],
        "value": [
            (r"[ \t]+", TokenType.TEXT_WHITESPACE),
            (r'"[^"\n]*"', TokenType.STRING_DOUBLE, "#pop"),
            (r"[^\n]+", TokenType.STRING, "#pop"),
            (r"(?=\n)", None, "#pop"),
        ],
    },
    analyser=_analyse_ini,
)

# ---------------------------------------------------------------------------
# Unified diff
# ---------------------------------------------------------------------------


def _analyse_diff(text: str) -> float:
    if text.startswith("diff ") or text.startswith("Index: "):
        return 1.0
    if text.startswith("--- ") and "\n+++ " in text:
        return 0.9
    return 0.0


DIFF = RegexLexer(
    LexerConfig(
        name="Diff",
        aliases=("diff", "udiff", "patch"),
        filenames=("*.diff", "*.patch"),
        mime_types=("text/x-diff", "text/x-patch"),
    ),
    {
        "root": [
            (r"\+\+\+.*\n?|---.*\n?", TokenType.GENERIC_HEADING),
            (r"@@.*\n?", TokenType.GENERIC_SUBHEADING),
            (r"\+.*\n?", TokenType.GENERIC_INSERTED),
            (r"-.*\n?", TokenType.GENERIC_DELETED),
            (r"(?:diff|index|Index:) .*\n?", TokenType.GENERIC_HEADING),
            (r"=.*\n?", TokenType.GENERIC_HEADING),
            (r".*\n?", TokenType.TEXT),
        ],
    },
    analyser=_analyse_diff,
)

BUILTIN_LEXERS: tuple[RegexLexer, ...] = (PLAINTEXT, INI, DIFF)
