"""Rule compilation.

Turns a state map of raw rules into the read-only table a ``RegexLexer``
scans with.  Every pattern is compiled exactly once, with flags derived
from the lexer's ``LexerConfig``:

* ``re.MULTILINE`` unless ``not_multiline`` is set
* ``re.IGNORECASE`` when ``case_insensitive`` is set
* ``re.DOTALL`` when ``dot_all`` is set

Matching is anchored by calling ``Pattern.match(text, pos)``, which only
succeeds at ``pos``.  Line anchors still refer to the full input: ``^``
matches at ``pos`` only when ``pos`` starts a line.

Compilation is all-or-nothing.  Any problem raises ``GrammarError`` and
no partial table is returned.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from pushlex.grammar.rules import ROOT_STATE, Rule, StateMap
from pushlex.lexer.actions import ByGroups, Emitter, UsingSelf, as_emitter
from pushlex.lexer.config import LexerConfig
from pushlex.lexer.errors import GrammarError
from pushlex.lexer.mutators import Mutator, as_mutator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledRule:
    """A ``Rule`` paired with its compiled pattern and normalised parts.

    Parameters
    ----------
    rule:
        The rule as written in the grammar.
    regex:
        The compiled pattern.
    action:
        The normalised emitter, or ``None``.
    mutator:
        The normalised mutator, or ``None``.
    """

    rule: Rule
    regex: re.Pattern[str]
    action: Emitter | None
    mutator: Mutator | None

    @property
    def pattern(self) -> str:
        """The pattern source as written in the grammar."""
        return self.rule.pattern


def regex_flags(config: LexerConfig) -> int:
    """Return the ``re`` flags implied by ``config``."""
    flags = 0
    if not config.not_multiline:
        flags |= re.MULTILINE
    if config.case_insensitive:
        flags |= re.IGNORECASE
    if config.dot_all:
        flags |= re.DOTALL
    return flags


def compile_pattern(pattern: str, config: LexerConfig, state: str | None = None) -> re.Pattern[str]:
    """Compile a single rule pattern for ``config``.

    Parameters
    ----------
    pattern:
        Regular expression source.
    config:
        Configuration of the owning lexer.
    state:
        Name of the owning state, used in error messages.

    Raises
    ------
    GrammarError
        If ``pattern`` is not a string or not a valid regular expression.
    """
    if not isinstance(pattern, str):
        raise GrammarError(f"Pattern must be a string, got {type(pattern).__name__}", state)
    try:
        return re.compile(pattern, regex_flags(config))
    except re.error as exc:
        raise GrammarError(f"Invalid pattern: {exc}", state, pattern) from exc


def compile_rules(
    states: StateMap, config: LexerConfig
) -> Mapping[str, tuple[CompiledRule, ...]]:
    """Compile every rule of every state.

    Returns
    -------
    Mapping[str, tuple[CompiledRule, ...]]
        A read-only mapping from state name to its compiled rules, in
        declaration order.

    Raises
    ------
    GrammarError
        If ``"root"`` is missing, a pattern does not compile, a rule has
        an unusable action or mutator, a ``ByGroups`` action does not
        match its pattern's group count, or a rule refers to a state the
        grammar does not define.
    """
    if ROOT_STATE not in states:
        raise GrammarError(f"Grammar has no {ROOT_STATE!r} state")

    compiled: dict[str, tuple[CompiledRule, ...]] = {}
    for state_name, rules in states.items():
        if not isinstance(state_name, str):
            raise GrammarError(f"State names must be strings, got {state_name!r}")
        compiled[state_name] = tuple(
            _compile_rule(raw, config, state_name) for raw in rules
        )

    for state_name, crules in compiled.items():
        for crule in crules:
            _check_targets(crule, state_name, compiled)

    logger.debug(
        "Compiled %d rule(s) across %d state(s) for lexer %r",
        sum(len(r) for r in compiled.values()),
        len(compiled),
        config.name,
    )
    return MappingProxyType(compiled)


def _compile_rule(raw: object, config: LexerConfig, state: str) -> CompiledRule:
    try:
        rule = Rule.coerce(raw)  # type: ignore[arg-type]
    except TypeError as exc:
        raise GrammarError(str(exc), state) from exc

    regex = compile_pattern(rule.pattern, config, state)
    try:
        action = as_emitter(rule.action)
        mutator = as_mutator(rule.mutator)
    except (TypeError, ValueError) as exc:
        raise GrammarError(str(exc), state, rule.pattern) from exc

    if isinstance(action, ByGroups):
        if action.arity != regex.groups:
            raise GrammarError(
                f"ByGroups has {action.arity} action(s) but the pattern has "
                f"{regex.groups} capture group(s)",
                state,
                rule.pattern,
            )
        _check_nested_groups(action, state, rule.pattern)
    return CompiledRule(rule=rule, regex=regex, action=action, mutator=mutator)


def _check_nested_groups(action: ByGroups, state: str, pattern: str) -> None:
    # A sub-emitter only ever sees its own group, so it has no captures.
    for sub in action.emitters:
        if not isinstance(sub, ByGroups):
            continue
        if sub.arity:
            raise GrammarError(
                f"Nested ByGroups has {sub.arity} action(s) but receives a "
                f"single group with no captures",
                state,
                pattern,
            )
        _check_nested_groups(sub, state, pattern)


def _check_targets(
    crule: CompiledRule, state: str, compiled: Mapping[str, object]
) -> None:
    targets: tuple[str, ...] = ()
    if crule.mutator is not None:
        targets += crule.mutator.targets
    if isinstance(crule.action, UsingSelf):
        targets += (crule.action.target,)
    for target in targets:
        if target not in compiled:
            raise GrammarError(
                f"Rule refers to undefined state {target!r}", state, crule.pattern
            )
