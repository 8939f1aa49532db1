#!/usr/bin/env python3
"""Example: pushlex quickstart

Minimal working example: tokenise with a built-in lexer, guess a lexer
from a file name, and define a small grammar of your own.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install pushlex
"""
from __future__ import annotations

import pushlex
from pushlex import LexerConfig, RegexLexer, TokenType

INI_SOURCE = '''\
[server]
host = example.com
port: 8080
; trailing comment
'''

TEMPLATE_SOURCE = "Hello {{ name }}, you have {{ count }} new {{ items }}."


def main() -> None:
    print(f"pushlex version: {pushlex.__version__}")

    # Step 1: Tokenise with a built-in lexer looked up by alias
    tokens = pushlex.tokenise("ini", INI_SOURCE)
    print(f"INI: {len(tokens)} tokens")
    for token in tokens[:6]:
        print(f"  {token.type.name:<16} {token.value!r}")

    # Step 2: Let pushlex pick the lexer from the file name
    lexer = pushlex.guess_lexer(INI_SOURCE, filename="server.cfg")
    print(f"\nGuessed lexer for server.cfg: {lexer.config.name}")

    # Step 3: A two-state grammar of your own
    template = RegexLexer(
        LexerConfig(name="Template"),
        {
            "root": [
                (r"\{\{", TokenType.PUNCTUATION, "expr"),
                (r"[^{]+|\{", TokenType.TEXT),
            ],
            "expr": [
                (r"\s+", TokenType.TEXT_WHITESPACE),
                (r"\w+", TokenType.NAME_VARIABLE),
                (r"\}\}", TokenType.PUNCTUATION, "#pop"),
            ],
        },
    )
    names = [t.value for t in template.tokenize(TEMPLATE_SOURCE) if t.type is TokenType.NAME_VARIABLE]
    print(f"\nTemplate variables: {', '.join(names)}")


if __name__ == "__main__":
    main()
