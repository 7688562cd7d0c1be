"""
Timing harness comparing the power-set strategies.

Results are purely observational: nothing here checks correctness.
"""
from __future__ import annotations

import logging
import statistics
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass

from python_powerset.config import get
from python_powerset.powerset import Strategy, get_strategy
from python_powerset.utils import reset_timings, timed, timings


@dataclass(frozen=True)
class BenchmarkResult:
    strategy: str
    input_size: int
    iterations: int
    mean_ms: float


def demo_input(size: int) -> set[int]:
    """The integers 1 through size."""
    return set(range(1, size + 1))


def run_average(iterations: int, input_set: Collection, generate: Strategy,
                label: str = "powerset") -> float:
    """
    Run generate on input_set `iterations` times, materializing the result
    each time, and return the mean elapsed time in milliseconds.
    """
    if iterations < 1:
        raise ValueError("iterations must be at least 1")
    reset_timings(label)
    for _ in range(iterations):
        with timed(label):
            list(generate(input_set))
    return statistics.mean(timings()[label]) * 1000.0


def run_strategy(name: str, iterations: int, input_set: Collection) -> BenchmarkResult:
    """Time one strategy and print its report lines."""
    generate = get_strategy(name)
    print(f"{name}: ...")
    mean_ms = run_average(iterations, input_set, generate, label=name)
    print(f"{name}: ... {mean_ms:.3f}ms")
    print()
    return BenchmarkResult(name, len(input_set), iterations, mean_ms)


def run_benchmark(names: Iterable[str] | None = None,
                  *,
                  input_size: int | None = None,
                  iterations: int | None = None) -> Sequence[BenchmarkResult]:
    """Time each named strategy, falling back to the configured defaults."""
    cfg = get()
    names = list(cfg.strategies if names is None else names)
    input_size = cfg.input_size if input_size is None else input_size
    iterations = cfg.iterations if iterations is None else iterations
    input_set = demo_input(input_size)
    logging.info("Benchmarking %s on %d elements, %d iterations each",
                 names, input_size, iterations)
    return [run_strategy(name, iterations, input_set) for name in names]
