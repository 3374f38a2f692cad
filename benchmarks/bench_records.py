#!/usr/bin/env python3
"""
Record performance benchmarks.

Measures construction, chain traversal and formatting cost.
"""

import time
from collections.abc import Callable
from typing import Any

from handler_errors import (
    CodeHandlerError,
    HandlerError,
    JsonFormatter,
    register_default_features,
)


def build_chain(depth: int) -> HandlerError:
    """Build a chain of the given depth."""
    error = HandlerError("root")
    for i in range(depth - 1):
        error = HandlerError(f"level {i}", f"E{i:03d}", {"depth": i}, error)
    return error


def measure(name: str, iterations: int, operation: Callable[[], Any]) -> dict[str, Any]:
    """Time an operation over a number of iterations."""
    start = time.perf_counter()
    for _ in range(iterations):
        operation()
    elapsed = time.perf_counter() - start

    return {
        "name": name,
        "iterations": iterations,
        "elapsed_seconds": elapsed,
        "throughput_ops": iterations / elapsed,
        "latency_us": (elapsed / iterations) * 1_000_000,
    }


def benchmark_construct_plain(iterations: int = 20000) -> dict[str, Any]:
    """Benchmark constructing a record with only a message."""
    return measure("Construct (message only)", iterations, lambda: HandlerError("boom"))


def benchmark_construct_full(iterations: int = 20000) -> dict[str, Any]:
    """Benchmark constructing a record with code, metadata and cause."""
    cause = ValueError("native")
    return measure(
        "Construct (code, metadata, cause)",
        iterations,
        lambda: HandlerError("boom", "E001", {"user": "ana"}, cause),
    )


def benchmark_construct_with_capabilities(iterations: int = 20000) -> dict[str, Any]:
    """Benchmark construction with the default capability groups registered."""
    register_default_features()
    return measure(
        "Construct (default capabilities)", iterations, lambda: HandlerError("boom")
    )


def benchmark_construct_from_catalog(iterations: int = 20000) -> dict[str, Any]:
    """Benchmark a code-driven error with template formatting."""
    CodeHandlerError.register_catalog(
        {"VAL001": {"message": "Invalid {{ field }} for {{ user }}", "severity": "warning"}},
        replace=True,
    )
    metadata = {"field": "email", "user": "ana"}
    return measure(
        "Construct (catalog + template)",
        iterations,
        lambda: CodeHandlerError("VAL001", metadata),
    )


def benchmark_chain_walk(depth: int = 50, iterations: int = 5000) -> dict[str, Any]:
    """Benchmark walking a deep chain."""
    error = build_chain(depth)
    return measure(f"Chain walk (depth {depth})", iterations, error.chain.get)


def benchmark_serialize(depth: int = 10, iterations: int = 2000) -> dict[str, Any]:
    """Benchmark full-tree serialization."""
    error = build_chain(depth)
    return measure(f"Serialize (depth {depth})", iterations, error.to_dict)


def benchmark_json_chain(depth: int = 10, iterations: int = 2000) -> dict[str, Any]:
    """Benchmark JSON chain formatting."""
    error = build_chain(depth)
    formatter = JsonFormatter(indent=None)
    return measure(
        f"JSON format_chain (depth {depth})",
        iterations,
        lambda: formatter.format_chain(error),
    )


def run_benchmarks() -> None:
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("Record Benchmarks")
    print("=" * 60)
    print()

    benchmarks = [
        benchmark_construct_plain,
        benchmark_construct_full,
        benchmark_construct_with_capabilities,
        benchmark_construct_from_catalog,
        benchmark_chain_walk,
        benchmark_serialize,
        benchmark_json_chain,
    ]

    for bench in benchmarks:
        result = bench()
        print(f"{result['name']}:")
        print(f"  Throughput: {result['throughput_ops']:.0f} ops/sec")
        print(f"  Latency: {result['latency_us']:.2f} µs/op")
        print()


if __name__ == "__main__":
    run_benchmarks()
