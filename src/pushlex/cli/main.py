"""CLI entry point for pushlex.

Invoked as::

    pushlex [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m pushlex.cli.main

Commands
--------
tokenize    Tokenise a file and list the tokens
guess       Show which lexer would be picked for a file
lexers      List registered lexers
check       Compile a YAML/JSON grammar file and report problems
version     Show version information
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from pushlex.grammar.tokens import Token
    from pushlex.lexer.engine import Lexer, RegexLexer

console = Console()
err_console = Console(stderr=True)


def _read_source(path: str) -> str:
    """Read an input file, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _load_grammar_or_exit(path: str) -> "RegexLexer":
    """Load a grammar file, printing errors and exiting on failure."""
    from pushlex.lexer.errors import GrammarError
    from pushlex.loader import GrammarLoader

    source = _read_source(path)
    try:
        return GrammarLoader().from_yaml(source)
    except GrammarError as exc:
        err_console.print(f"[red]Grammar error[/red] in {path}: {exc}")
        sys.exit(1)


def _select_lexer(file: str, source: str, lexer_name: str | None, grammar: str | None) -> "Lexer":
    """Resolve the lexer requested on the command line, or guess one."""
    from pushlex.lexers import LexerNotFoundError, get_lexer, guess_lexer

    if grammar:
        return _load_grammar_or_exit(grammar)
    if lexer_name:
        try:
            return get_lexer(lexer_name)
        except LexerNotFoundError:
            err_console.print(f"[red]Error:[/red] Unknown lexer {lexer_name!r}")
            sys.exit(1)
    return guess_lexer(source, filename=file)


def _token_style(token: "Token") -> str:
    """Map a token's category to a Rich style for the listing."""
    from pushlex.grammar.tokens import TokenType

    styles = {
        TokenType.ERROR: "bold red",
        TokenType.KEYWORD: "magenta",
        TokenType.NAME: "cyan",
        TokenType.STRING: "green",
        TokenType.NUMBER: "yellow",
        TokenType.COMMENT: "dim",
        TokenType.GENERIC: "blue",
    }
    return styles.get(token.type.category, "white")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="pushlex")
def cli() -> None:
    """Rule-driven, state-stack regular expression lexers."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from pushlex import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]pushlex[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# lexers command
# ---------------------------------------------------------------------------


@cli.command(name="lexers")
def lexers_command() -> None:
    """List all registered lexers, including those loaded from entry-points."""
    from pushlex.lexers import default_registry

    table = Table(title="Registered lexers")
    table.add_column("Name", style="bold")
    table.add_column("Aliases")
    table.add_column("Filenames")
    table.add_column("MIME types")
    for lexer in default_registry():
        config = lexer.config
        table.add_row(
            config.name,
            ", ".join(config.aliases),
            ", ".join(config.filenames + config.alias_filenames),
            ", ".join(config.mime_types),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# tokenize command
# ---------------------------------------------------------------------------


@cli.command(name="tokenize")
@click.argument("file", type=click.Path(exists=False))
@click.option("--lexer", "-l", "lexer_name", default=None, help="Registered lexer name or alias")
@click.option("--grammar", "-g", default=None, help="YAML/JSON grammar file to build the lexer from")
@click.option("--state", default="root", show_default=True, help="State to start in")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    default="table",
    help="Token listing format",
)
@click.option("--output", "-o", default=None, help="Output file for json/yaml listings (defaults to stdout)")
def tokenize_command(
    file: str,
    lexer_name: str | None,
    grammar: str | None,
    state: str,
    output_format: str,
    output: str | None,
) -> None:
    """Tokenise FILE and list the tokens.

    Without --lexer or --grammar the lexer is guessed from the file name
    and content.

    Examples:

    \b
        pushlex tokenize setup.cfg
        pushlex tokenize notes.txt --lexer ini --format json
        pushlex tokenize input.greet --grammar greeting.yaml
    """
    from pushlex.lexer.config import TokeniseOptions
    from pushlex.lexer.engine import tokenise
    from pushlex.lexer.errors import TokenisationError

    if output and output_format == "table":
        raise click.UsageError("--output needs --format json or --format yaml")

    source = _read_source(file)
    lexer = _select_lexer(file, source, lexer_name, grammar)

    try:
        tokens = tokenise(lexer, source, TokeniseOptions(state=state))
    except TokenisationError as exc:
        err_console.print(f"[red]Tokenisation error[/red] in {file}: {exc}")
        sys.exit(1)

    if output_format == "table":
        table = Table(title=f"{file} ({lexer.config.name or 'anonymous'})")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Type", min_width=12)
        table.add_column("Value")
        for index, token in enumerate(tokens):
            style = _token_style(token)
            table.add_row(str(index), f"[{style}]{token.type.name}[/{style}]", repr(token.value))
        console.print(table)
        errors = sum(1 for t in tokens if t.is_error)
        console.print(f"\n[bold]{len(tokens)}[/bold] token(s), {errors} error token(s)")
        return

    records = [{"type": t.type.name, "value": t.value} for t in tokens]
    if output_format == "json":
        text = json.dumps(records, indent=2, ensure_ascii=False)
    else:
        text = yaml.safe_dump(records, sort_keys=False, allow_unicode=True)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Tokens written to[/green] {output}")
    else:
        console.print(Syntax(text, output_format, line_numbers=True))


# ---------------------------------------------------------------------------
# guess command
# ---------------------------------------------------------------------------


@cli.command(name="guess")
@click.argument("file", type=click.Path(exists=False))
@click.option("--content-only", is_flag=True, default=False, help="Ignore the file name")
def guess_command(file: str, content_only: bool) -> None:
    """Show which lexer would be picked for FILE."""
    from pushlex.lexers import guess_lexer

    source = _read_source(file)
    lexer = guess_lexer(source, filename=None if content_only else file)
    score = lexer.analyse_text(source) if hasattr(lexer, "analyse_text") else None

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Lexer[/bold]", lexer.config.name)
    table.add_row("Aliases", ", ".join(lexer.config.aliases) or "-")
    table.add_row("Score", "-" if score is None else f"{score:.2f}")
    console.print(table)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("grammar", type=click.Path(exists=False))
def check_command(grammar: str) -> None:
    """Compile the YAML/JSON GRAMMAR file and report problems."""
    lexer = _load_grammar_or_exit(grammar)

    table = Table(title=f"Grammar: {lexer.config.name or grammar}")
    table.add_column("State", style="bold")
    table.add_column("Rules", justify="right")
    for state, rules in lexer.rules.items():
        table.add_row(state, str(len(rules)))
    console.print(table)
    console.print(f"[green]OK:[/green] {len(lexer.rules)} state(s) compiled from {grammar}")


if __name__ == "__main__":
    cli()
