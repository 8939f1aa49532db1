"""Lexer registry for pushlex.

Keeps lexer instances addressable by name and alias, and resolves them
from file names, MIME types or the content of a text sample.  Third-party
packages contribute lexers by declaring entry-points in their own
``pyproject.toml`` under the "pushlex.lexers" group.

Example
-------
Register a lexer and look it up::

    from pushlex.lexers.registry import LexerRegistry

    registry = LexerRegistry("mine")
    registry.register(my_lexer)

    registry.get("ini")
    registry.match_filename("setup.cfg")
    registry.analyse("[section]\\nkey = value\\n")

Declare lexers for automatic discovery::

    [project.entry-points."pushlex.lexers"]
    toml = "my_package.lexers:toml_lexer"

then::

    registry.load_entrypoints("pushlex.lexers")

An entry-point may name a lexer instance or a zero-argument callable
returning one.
"""
from __future__ import annotations

import fnmatch
import importlib.metadata
import logging
import os
from collections.abc import Iterator

from pushlex.lexer.engine import Lexer
from pushlex.lexer.selection import pick

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "pushlex.lexers"


class LexerNotFoundError(KeyError):
    """Raised when a requested lexer name is not in the registry."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.lexer_name = name
        self.registry_name = registry_name
        super().__init__(
            f"Lexer {name!r} is not registered in the {registry_name!r} registry. "
            "Check the name or alias, and that the package providing it is installed."
        )


class LexerAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a name or alias that already exists."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.lexer_name = name
        self.registry_name = registry_name
        super().__init__(
            f"Lexer {name!r} is already registered in the {registry_name!r} registry. "
            "Use a unique name or explicitly deregister the existing entry first."
        )


def _key(name: str) -> str:
    return name.strip().lower()


class LexerRegistry:
    """Name- and alias-indexed collection of lexers.

    Lookups are case-insensitive.  Iteration and ``analyse`` follow
    registration order, which is also the tie-break order for content
    analysis.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in error messages).
    """

    def __init__(self, name: str = "default") -> None:
        self._name = name
        self._lexers: list[Lexer] = []
        self._index: dict[str, Lexer] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, lexer: Lexer) -> Lexer:
        """Register ``lexer`` under its configured name and aliases.

        Returns the lexer unchanged so module-level grammars can be
        registered in place.

        Raises
        ------
        LexerAlreadyRegisteredError
            If the name or any alias is already in use.
        TypeError
            If ``lexer`` does not implement the ``Lexer`` protocol or has
            no name.
        """
        if not isinstance(lexer, Lexer):
            raise TypeError(f"Cannot register {lexer!r}: it does not implement Lexer.")
        config = lexer.config
        if not config.name:
            raise TypeError(f"Cannot register {lexer!r}: its LexerConfig has no name.")

        keys = [_key(config.name)] + [_key(a) for a in config.aliases]
        for key in keys:
            if key in self._index:
                raise LexerAlreadyRegisteredError(key, self._name)

        self._lexers.append(lexer)
        for key in keys:
            self._index[key] = lexer
        logger.debug(
            "Registered lexer %r (aliases %s) in registry %r",
            config.name,
            list(config.aliases),
            self._name,
        )
        return lexer

    def deregister(self, name: str) -> None:
        """Remove a lexer, looked up by name or alias, from the registry.

        Raises
        ------
        LexerNotFoundError
            If ``name`` is not currently registered.
        """
        lexer = self.get(name)
        self._lexers.remove(lexer)
        self._index = {k: v for k, v in self._index.items() if v is not lexer}
        logger.debug("Deregistered lexer %r from registry %r", lexer.config.name, self._name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> Lexer:
        """Return the lexer registered under ``name`` or one of its aliases.

        Raises
        ------
        LexerNotFoundError
            If no lexer is registered under ``name``.
        """
        try:
            return self._index[_key(name)]
        except KeyError:
            raise LexerNotFoundError(name, self._name) from None

    def match_filename(self, filename: str) -> Lexer | None:
        """Return the first lexer whose file globs match ``filename``.

        Primary globs of every lexer are tried before any secondary
        (alias) glob.  Only the base name of ``filename`` is matched.
        """
        base = os.path.basename(filename)
        for attr in ("filenames", "alias_filenames"):
            for lexer in self._lexers:
                for glob in getattr(lexer.config, attr):
                    if fnmatch.fnmatch(base, glob):
                        return lexer
        return None

    def match_mime_type(self, mime_type: str) -> Lexer | None:
        """Return the first lexer declaring ``mime_type``."""
        wanted = _key(mime_type)
        for lexer in self._lexers:
            if any(_key(m) == wanted for m in lexer.config.mime_types):
                return lexer
        return None

    def analyse(self, text: str) -> Lexer | None:
        """Return the registered lexer best suited to ``text``, if any."""
        return pick(self._lexers, text)

    def names(self) -> list[str]:
        """Return a sorted list of all registered lexer names."""
        return sorted(lexer.config.name for lexer in self._lexers)

    def __iter__(self) -> Iterator[Lexer]:
        return iter(list(self._lexers))

    def __contains__(self, name: object) -> bool:
        """Support ``"ini" in registry`` membership test."""
        return isinstance(name, str) and _key(name) in self._index

    def __len__(self) -> int:
        """Return the number of registered lexers."""
        return len(self._lexers)

    def __repr__(self) -> str:
        return f"LexerRegistry(name={self._name!r}, lexers={self.names()})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRY_POINT_GROUP) -> None:
        """Discover and register lexers declared as package entry-points.

        Lexers whose name is already registered are skipped with a
        debug-level log entry, so repeated calls are idempotent.  Entry
        points that fail to load are logged and skipped.
        """
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self:
                logger.debug(
                    "Entry-point %r already registered in %r; skipping.",
                    ep.name,
                    self._name,
                )
                continue
            try:
                loaded = ep.load()
                lexer = loaded if isinstance(loaded, Lexer) else loaded()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register(lexer)
            except (LexerAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but could not be registered "
                    "in registry %r; skipping.",
                    ep.name,
                    self._name,
                )
