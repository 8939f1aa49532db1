"""Grammar loading module.

Exports the ``GrammarLoader`` class and the ``load_grammar*`` convenience
functions.
"""
from __future__ import annotations

from pushlex.loader.loader import (
    GrammarLoader,
    load_grammar,
    load_grammar_file,
    load_grammar_yaml,
)

__all__ = ["GrammarLoader", "load_grammar", "load_grammar_yaml", "load_grammar_file"]
