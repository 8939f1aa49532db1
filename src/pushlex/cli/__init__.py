"""CLI package.

Holds the Click application (``pushlex.cli.main:cli``) and its commands.
Commands import library modules lazily so ``pushlex --help`` stays fast.
"""
from __future__ import annotations
