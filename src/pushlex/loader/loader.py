"""Grammar loading from YAML / JSON documents.

Grammars are plain data, so they can live outside Python code.  A
grammar document is a mapping with a ``config`` section (the fields of
``LexerConfig``) and a ``rules`` section (the state map)::

    config:
      name: Greeting
      aliases: [greet]
      filenames: ["*.greet"]
      case_insensitive: true
    rules:
      root:
        - pattern: '\\s+'
          token: Text.Whitespace
        - pattern: '(hello)(\\s+)(\\w+)'
          groups: [Keyword, Text.Whitespace, Name]
        - pattern: '"'
          token: String
          push: string
      string:
        - pattern: '[^"]+'
          token: String
        - pattern: '"'
          token: String
          pop: 1

Rule keys:

``pattern``
    Required regular expression.
``token`` | ``groups`` | ``using_self`` | ``using``
    At most one action.  ``groups`` lists one token type (or ``null``) per
    capture group; ``using`` names a registered lexer and may be combined
    with ``using_state``.
``push`` | ``pop`` | ``replace``
    Stack mutation.  ``push`` takes a state name or a list; ``pop`` a
    count.  ``pop`` and ``push`` together pop first, then push.

JSON is a subset of YAML, so JSON documents load through the same path.

Usage
-----
::

    from pushlex.loader import load_grammar_file

    lexer = load_grammar_file("greeting.yaml")
    tokens = lexer.tokenize("hello world")
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from pushlex.grammar.rules import Rule
from pushlex.grammar.tokens import TokenType
from pushlex.lexer.actions import ByGroups, Emitter, TokenEmitter, Using, UsingSelf
from pushlex.lexer.config import LexerConfig
from pushlex.lexer.engine import Lexer, RegexLexer
from pushlex.lexer.errors import GrammarError
from pushlex.lexer.mutators import Combined, Mutator, Pop, Push, Replace

if TYPE_CHECKING:
    from pushlex.lexers.registry import LexerRegistry

logger = logging.getLogger(__name__)

_CONFIG_FIELDS = frozenset(f.name for f in fields(LexerConfig))
_ACTION_KEYS = ("token", "groups", "using_self", "using")
_RULE_KEYS = frozenset(("pattern", "using_state", "push", "pop", "replace", *_ACTION_KEYS))


class GrammarLoader:
    """Builds ``RegexLexer`` instances from grammar documents.

    Parameters
    ----------
    registry:
        Registry used to resolve ``using`` references.  Defaults to the
        pushlex default registry.
    """

    def __init__(self, registry: LexerRegistry | None = None) -> None:
        self._registry = registry

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def from_dict(self, data: Mapping[str, Any]) -> RegexLexer:
        """Build a lexer from an already parsed grammar document.

        Raises
        ------
        GrammarError
            If the document is malformed or the grammar does not compile.
        """
        if not isinstance(data, Mapping):
            raise GrammarError(f"Grammar document must be a mapping, got {type(data).__name__}")
        unknown = set(data) - {"config", "rules"}
        if unknown:
            raise GrammarError(f"Unknown top-level key(s): {', '.join(sorted(map(str, unknown)))}")

        config = self._config_from_dict(data.get("config") or {})
        raw_rules = data.get("rules")
        if not isinstance(raw_rules, Mapping):
            raise GrammarError("Grammar document needs a 'rules' mapping")

        states: dict[str, list[Rule]] = {}
        for state, entries in raw_rules.items():
            if not isinstance(entries, list):
                raise GrammarError("Rules of a state must be a list", str(state))
            states[str(state)] = [self._rule_from_dict(entry, str(state)) for entry in entries]

        lexer = RegexLexer(config, states)
        logger.debug("Loaded grammar %r with %d state(s)", config.name, len(states))
        return lexer

    def from_yaml(self, text: str) -> RegexLexer:
        """Build a lexer from YAML (or JSON) text."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise GrammarError(f"Invalid YAML: {exc}") from exc
        return self.from_dict(data)

    def from_file(self, path: str | Path) -> RegexLexer:
        """Build a lexer from a YAML or JSON file."""
        return self.from_yaml(Path(path).read_text(encoding="utf-8"))

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _config_from_dict(self, data: Any) -> LexerConfig:
        if not isinstance(data, Mapping):
            raise GrammarError("'config' must be a mapping")
        unknown = set(data) - _CONFIG_FIELDS
        if unknown:
            raise GrammarError(f"Unknown config key(s): {', '.join(sorted(map(str, unknown)))}")
        try:
            return LexerConfig(**data)
        except TypeError as exc:
            raise GrammarError(f"Invalid config: {exc}") from exc

    def _rule_from_dict(self, entry: Any, state: str) -> Rule:
        if not isinstance(entry, Mapping) or "pattern" not in entry:
            raise GrammarError(f"Rule must be a mapping with a 'pattern' key, got {entry!r}", state)
        pattern = entry["pattern"]
        unknown = set(entry) - _RULE_KEYS
        if unknown:
            raise GrammarError(
                f"Unknown rule key(s): {', '.join(sorted(map(str, unknown)))}", state, pattern
            )
        actions = [key for key in _ACTION_KEYS if key in entry]
        if len(actions) > 1:
            raise GrammarError(f"Rule has more than one action: {', '.join(actions)}", state, pattern)
        if "replace" in entry and ("push" in entry or "pop" in entry):
            raise GrammarError("'replace' cannot be combined with 'push' or 'pop'", state, pattern)

        action = self._action(entry, actions[0], state) if actions else None
        return Rule(pattern, action, self._mutator(entry, state))

    def _action(self, entry: Mapping[str, Any], key: str, state: str) -> Emitter:
        pattern = entry["pattern"]
        value = entry[key]
        try:
            if key == "token":
                return TokenEmitter(TokenType.from_name(str(value)))
            if key == "groups":
                if not isinstance(value, list):
                    raise GrammarError("'groups' must be a list", state, pattern)
                return ByGroups(*(None if v is None else TokenType.from_name(str(v)) for v in value))
            if key == "using_self":
                return UsingSelf(str(value))
        except ValueError as exc:
            raise GrammarError(str(exc), state, pattern) from exc
        return Using(self._resolve(str(value), state, pattern), state=str(entry.get("using_state", "root")))

    def _mutator(self, entry: Mapping[str, Any], state: str) -> Mutator | None:
        pattern = entry["pattern"]
        parts: list[Mutator] = []
        if "pop" in entry:
            count = entry["pop"]
            if count is True:
                count = 1
            if not isinstance(count, int) or isinstance(count, bool) or count < 1:
                raise GrammarError("'pop' must be a positive integer", state, pattern)
            parts.append(Pop(count))
        if "push" in entry:
            targets = entry["push"]
            if isinstance(targets, str):
                targets = [targets]
            if not isinstance(targets, list) or not all(isinstance(t, str) for t in targets):
                raise GrammarError("'push' must be a state name or a list of names", state, pattern)
            parts.append(Push(*targets))
        if "replace" in entry:
            parts.append(Replace(str(entry["replace"])))

        if not parts:
            return None
        if len(parts) == 1:
            return parts[0]
        return Combined(*parts)

    def _resolve(self, name: str, state: str, pattern: str) -> Lexer:
        from pushlex.lexers import LexerNotFoundError, default_registry

        registry = self._registry if self._registry is not None else default_registry()
        try:
            return registry.get(name)
        except LexerNotFoundError as exc:
            raise GrammarError(f"'using' refers to unknown lexer {name!r}", state, pattern) from exc


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def load_grammar(data: Mapping[str, Any], registry: LexerRegistry | None = None) -> RegexLexer:
    """Build a lexer from a grammar mapping."""
    return GrammarLoader(registry).from_dict(data)


def load_grammar_yaml(text: str, registry: LexerRegistry | None = None) -> RegexLexer:
    """Build a lexer from YAML or JSON text."""
    return GrammarLoader(registry).from_yaml(text)


def load_grammar_file(path: str | Path, registry: LexerRegistry | None = None) -> RegexLexer:
    """Build a lexer from a YAML or JSON file."""
    return GrammarLoader(registry).from_file(path)
