"""Benchmark: tokenisation throughput.

Measures how many tokenise calls per second the built-in INI lexer and a
delegating grammar complete, using the public pushlex APIs.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pushlex
from pushlex.lexer.actions import ByGroups, Using

_ITERATIONS: int = 500
_DELEGATION_ITERATIONS: int = 500

_SAMPLE_INI = "\n".join(
    f"[section_{n}]\n"
    f"; generated section {n}\n"
    f"name = value {n}\n"
    f'quoted = "text {n}"\n'
    f"empty =\n"
    for n in range(20)
)


def _embedded_lexer() -> pushlex.RegexLexer:
    """A grammar that hands ``<<ini ... >>`` blocks to the INI lexer."""
    return pushlex.RegexLexer(
        pushlex.LexerConfig(name="Embedded"),
        {
            "root": [
                (
                    r"(?s)(<<ini\n)(.*?)(>>)",
                    ByGroups(
                        pushlex.TokenType.KEYWORD,
                        Using(pushlex.get_lexer("ini")),
                        pushlex.TokenType.KEYWORD,
                    ),
                ),
                (r"[^<]+|<", pushlex.TokenType.TEXT),
            ],
        },
    )


def _report(operation: str, iterations: int, total: float, chars: int) -> dict[str, object]:
    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "chars_per_second": round(iterations * chars / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_tokenise_throughput() -> dict[str, object]:
    """Benchmark INI tokenisation throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    chars_per_second, avg_latency_ms.
    """
    lexer = pushlex.get_lexer("ini")
    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        pushlex.tokenise(lexer, _SAMPLE_INI)
    total = time.perf_counter() - start
    return _report("ini_tokenise_throughput", _ITERATIONS, total, len(_SAMPLE_INI))


def bench_delegation_throughput() -> dict[str, object]:
    """Benchmark a grammar that delegates embedded blocks to another lexer.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    chars_per_second, avg_latency_ms.
    """
    lexer = _embedded_lexer()
    text = f"prose before\n<<ini\n{_SAMPLE_INI}>>\nprose after\n"
    start = time.perf_counter()
    for _ in range(_DELEGATION_ITERATIONS):
        pushlex.tokenise(lexer, text)
    total = time.perf_counter() - start
    return _report("delegation_throughput", _DELEGATION_ITERATIONS, total, len(text))


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_tokenise_throughput, "tokenise_throughput_baseline.json"),
        (bench_delegation_throughput, "delegation_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
