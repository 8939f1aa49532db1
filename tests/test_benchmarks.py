"""Structural tests for the pushlex benchmark module."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))


def test_bench_throughput_importable() -> None:
    """Verify bench_throughput module can be imported."""
    mod = importlib.import_module("bench_throughput")
    assert hasattr(mod, "bench_tokenise_throughput")
    assert hasattr(mod, "bench_delegation_throughput")


def test_tokenise_throughput_returns_expected_keys() -> None:
    """Verify bench_tokenise_throughput returns expected result keys."""
    from bench_throughput import bench_tokenise_throughput

    result = bench_tokenise_throughput()
    assert "operation" in result
    assert "iterations" in result
    assert "ops_per_second" in result
    assert "avg_latency_ms" in result
    assert float(result["ops_per_second"]) > 0  # type: ignore[arg-type]


def test_delegation_throughput_returns_expected_keys() -> None:
    """Verify bench_delegation_throughput returns expected result keys."""
    from bench_throughput import bench_delegation_throughput

    result = bench_delegation_throughput()
    assert "operation" in result
    assert "chars_per_second" in result
    assert "avg_latency_ms" in result


def test_embedded_grammar_delegates_to_ini() -> None:
    """The benchmark grammar must produce INI tokens inside the block."""
    import pushlex
    from bench_throughput import _embedded_lexer

    tokens = pushlex.tokenise(_embedded_lexer(), "x\n<<ini\n[a]\n>>\n")
    assert pushlex.Token(pushlex.TokenType.KEYWORD, "a") in tokens
    assert not any(t.is_error for t in tokens)
