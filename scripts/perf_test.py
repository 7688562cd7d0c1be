#!/usr/bin/env python3
from __future__ import annotations

import argparse
import contextlib
import csv
import io
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from python_powerset.benchmark import demo_input, run_strategy  # noqa: E402
from python_powerset.powerset import strategies as available_strategies  # noqa: E402

DEFAULT_OUTPUT_DIR = ROOT_DIR / "tests" / "perf" / "perf_results"
DEFAULT_SIZES = [4, 8, 12, 16, 20]
DEFAULT_ITERATIONS = 5


def _run_case(name: str, size: int, iterations: int) -> dict[str, Any]:
    # run_strategy prints its own report lines; keep the script output compact
    with contextlib.redirect_stdout(io.StringIO()):
        result = run_strategy(name, iterations, demo_input(size))
    return {
        "input_size": size,
        "strategy": name,
        "iterations": iterations,
        "mean_ms": result.mean_ms,
        "status": "success",
        "details": "",
    }


def _write_csv(path: Path, results: list[dict[str, Any]]) -> None:
    fieldnames = ["input_size", "strategy", "iterations", "mean_ms", "status", "details"]
    ordered = sorted(results, key=lambda r: (r["strategy"], r["input_size"]))
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        for row in ordered:
            writer.writerow(
                {
                    **row,
                    "mean_ms": f"{row['mean_ms']:.3f}",
                }
            )


def _write_markdown(
    path: Path,
    *,
    results: list[dict[str, Any]],
    timestamp: str,
    sizes: list[int],
    iterations: int,
) -> None:
    names = sorted({r["strategy"] for r in results})
    lines = [
        "# Python-Powerset Performance Results",
        "",
        f"- Timestamp: {timestamp}",
        f"- Input sizes: {', '.join(str(s) for s in sizes)}",
        f"- Iterations per run: {iterations}",
        f"- Total runs: {len(results)}",
        "",
        "## Mean latency (ms)",
        "",
        "| strategy | " + " | ".join(f"n={s}" for s in sizes) + " |",
        "|---|" + "---|" * len(sizes),
    ]
    for name in names:
        cells = []
        for size in sizes:
            match = [r for r in results if r["strategy"] == name and r["input_size"] == size]
            if not match:
                cells.append("-")
            else:
                cells.append(f"{match[0]['mean_ms']:.3f}")
        lines.append(f"| {name} | " + " | ".join(cells) + " |")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Time every power-set strategy over a range of input sizes.",
    )
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=DEFAULT_SIZES,
        help="Input sizes to benchmark (the integers 1 through N).",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=DEFAULT_ITERATIONS,
        help="Timed runs per strategy and size.",
    )
    parser.add_argument(
        "--strategy",
        action="append",
        choices=list(available_strategies),
        default=None,
        help="Strategy to include (repeatable). Defaults to all strategies.",
    )
    parser.add_argument(
        "--output-dir",
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory for the CSV and Markdown reports.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.iterations < 1:
        print("--iterations must be at least 1", file=sys.stderr)
        return 1
    if any(size < 0 for size in args.sizes):
        print("--sizes must be non-negative", file=sys.stderr)
        return 1
    names = args.strategy or list(available_strategies)

    results = []
    for name in names:
        for size in args.sizes:
            row = _run_case(name, size, args.iterations)
            print(f"{name} n={size}: {row['mean_ms']:.3f}ms")
            results.append(row)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    csv_path = output_dir / f"perf_results_{timestamp}.csv"
    md_path = output_dir / f"perf_results_{timestamp}.md"
    _write_csv(csv_path, results)
    _write_markdown(
        md_path,
        results=results,
        timestamp=timestamp,
        sizes=args.sizes,
        iterations=args.iterations,
    )
    print(f"CSV report: {csv_path}")
    print(f"Markdown report: {md_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
