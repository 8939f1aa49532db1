"""Token definitions for pushlex.

Defines the token type taxonomy shared by every lexer.  Token types form
a shallow hierarchy expressed through member names: ``STRING_DOUBLE`` is
a subtype of ``STRING``, ``KEYWORD_CONSTANT`` of ``KEYWORD`` and so on.
Grammars pick whichever level of detail they need; consumers such as
formatters can fall back to the parent category.

Every scanned token is represented by a ``Token`` dataclass that carries
its type and raw text.  ``ERROR`` is reserved for input that no rule in
the active state matched.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Exhaustive enumeration of token types."""

    # -----------------------------------------------------------------
    # Meta
    # -----------------------------------------------------------------
    ERROR = auto()
    OTHER = auto()

    # -----------------------------------------------------------------
    # Text
    # -----------------------------------------------------------------
    TEXT = auto()
    TEXT_WHITESPACE = auto()

    # -----------------------------------------------------------------
    # Keywords
    # -----------------------------------------------------------------
    KEYWORD = auto()
    KEYWORD_CONSTANT = auto()
    KEYWORD_DECLARATION = auto()
    KEYWORD_NAMESPACE = auto()
    KEYWORD_PSEUDO = auto()
    KEYWORD_RESERVED = auto()
    KEYWORD_TYPE = auto()

    # -----------------------------------------------------------------
    # Names
    # -----------------------------------------------------------------
    NAME = auto()
    NAME_ATTRIBUTE = auto()
    NAME_BUILTIN = auto()
    NAME_CLASS = auto()
    NAME_CONSTANT = auto()
    NAME_DECORATOR = auto()
    NAME_ENTITY = auto()
    NAME_EXCEPTION = auto()
    NAME_FUNCTION = auto()
    NAME_LABEL = auto()
    NAME_NAMESPACE = auto()
    NAME_PROPERTY = auto()
    NAME_TAG = auto()
    NAME_VARIABLE = auto()

    # -----------------------------------------------------------------
    # Literals
    # -----------------------------------------------------------------
    LITERAL = auto()
    LITERAL_DATE = auto()

    STRING = auto()
    STRING_AFFIX = auto()
    STRING_BACKTICK = auto()
    STRING_CHAR = auto()
    STRING_DELIMITER = auto()
    STRING_DOC = auto()
    STRING_DOUBLE = auto()
    STRING_ESCAPE = auto()
    STRING_HEREDOC = auto()
    STRING_INTERPOL = auto()
    STRING_OTHER = auto()
    STRING_REGEX = auto()
    STRING_SINGLE = auto()
    STRING_SYMBOL = auto()

    NUMBER = auto()
    NUMBER_BIN = auto()
    NUMBER_FLOAT = auto()
    NUMBER_HEX = auto()
    NUMBER_INTEGER = auto()
    NUMBER_OCT = auto()

    # -----------------------------------------------------------------
    # Operators and punctuation
    # -----------------------------------------------------------------
    OPERATOR = auto()
    OPERATOR_WORD = auto()
    PUNCTUATION = auto()

    # -----------------------------------------------------------------
    # Comments
    # -----------------------------------------------------------------
    COMMENT = auto()
    COMMENT_HASHBANG = auto()
    COMMENT_MULTILINE = auto()
    COMMENT_PREPROC = auto()
    COMMENT_SINGLE = auto()
    COMMENT_SPECIAL = auto()

    # -----------------------------------------------------------------
    # Generic (diffs, console sessions, markup)
    # -----------------------------------------------------------------
    GENERIC = auto()
    GENERIC_DELETED = auto()
    GENERIC_EMPH = auto()
    GENERIC_ERROR = auto()
    GENERIC_HEADING = auto()
    GENERIC_INSERTED = auto()
    GENERIC_OUTPUT = auto()
    GENERIC_PROMPT = auto()
    GENERIC_STRONG = auto()
    GENERIC_SUBHEADING = auto()
    GENERIC_TRACEBACK = auto()

    @property
    def category(self) -> TokenType:
        """Return the top-level category this type belongs to.

        ``STRING_DOUBLE.category`` is ``STRING``; a top-level type is its
        own category.
        """
        head = self.name.split("_", 1)[0]
        return TokenType[head]

    def in_category(self, other: TokenType) -> bool:
        """Return True if this type is ``other`` or one of its subtypes."""
        return self is other or self.name.startswith(other.name + "_")

    @classmethod
    def from_name(cls, name: str) -> TokenType:
        """Resolve a token type from its member name.

        Accepts ``"STRING_DOUBLE"`` as well as the dotted spelling
        ``"String.Double"`` used by many grammar files.

        Raises
        ------
        ValueError
            If ``name`` does not name a token type.
        """
        key = name.strip().replace(".", "_").upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown token type {name!r}") from None


@dataclass(frozen=True, slots=True)
class Token:
    """A single emitted token.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    value:
        The raw text as it appeared in the input.
    """

    type: TokenType
    value: str

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r})"

    @property
    def is_error(self) -> bool:
        """Return True if this token covers unmatched input."""
        return self.type is TokenType.ERROR
