"""Lexer configuration objects.

``LexerConfig`` holds the identity metadata of a lexer (used by the
registry and selection helpers) and the three regex behaviour flags
applied when its rules are compiled.  ``TokeniseOptions`` holds the
per-call options.  Both are frozen: a lexer's configuration is fixed
at construction time.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from pushlex.grammar.rules import ROOT_STATE


@dataclass(frozen=True)
class LexerConfig:
    """Immutable per-lexer settings.

    Parameters
    ----------
    name:
        Human-readable lexer name, e.g. ``"INI"``.
    aliases:
        Short names the lexer can be looked up by, e.g. ``("ini", "cfg")``.
    filenames:
        Primary file name globs, e.g. ``("*.ini",)``.
    alias_filenames:
        Secondary globs, consulted only when no primary glob matched.
    mime_types:
        MIME types handled by this lexer.
    case_insensitive:
        Compile every rule with ``re.IGNORECASE``.
    dot_all:
        Compile every rule with ``re.DOTALL`` so ``.`` matches newlines.
    not_multiline:
        When ``True``, ``^`` and ``$`` only match at the very start and
        end of the text.  By default they match at every line boundary.
    """

    name: str = ""
    aliases: tuple[str, ...] = field(default_factory=tuple)
    filenames: tuple[str, ...] = field(default_factory=tuple)
    alias_filenames: tuple[str, ...] = field(default_factory=tuple)
    mime_types: tuple[str, ...] = field(default_factory=tuple)
    case_insensitive: bool = False
    dot_all: bool = False
    not_multiline: bool = False

    def __post_init__(self) -> None:
        # Accept lists for convenience but store tuples so the config
        # stays hashable and immutable.
        for attr in ("aliases", "filenames", "alias_filenames", "mime_types"):
            value = getattr(self, attr)
            if isinstance(value, str):
                raise TypeError(f"LexerConfig.{attr} must be a sequence of strings, not str")
            object.__setattr__(self, attr, tuple(value))


@dataclass(frozen=True)
class TokeniseOptions:
    """Options for a single tokenisation call.

    Parameters
    ----------
    state:
        The state to start in.  Defaults to ``"root"``.
    """

    state: str = ROOT_STATE


DEFAULT_OPTIONS = TokeniseOptions()
