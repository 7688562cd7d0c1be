#!/usr/bin/env python3
from __future__ import annotations

import argparse
import csv
import statistics
import sys
from pathlib import Path
from typing import Any


def _load_results(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        raise SystemExit(f"Report not found: {path}")
    rows: list[dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            if not row.get("strategy") or not row.get("input_size"):
                continue
            if row.get("status", "success") != "success":
                continue
            try:
                mean_ms = float(row.get("mean_ms", "") or "0")
                input_size = int(row["input_size"])
            except ValueError as exc:
                raise SystemExit(
                    f"Invalid row in {path}: {row}"
                ) from exc
            rows.append(
                {
                    "strategy": row["strategy"],
                    "input_size": input_size,
                    "mean_ms": mean_ms,
                }
            )
    return rows


def _summaries(results: list[dict[str, Any]]) -> dict[str, dict[int, float]]:
    """Mean latency per strategy and input size."""
    summaries: dict[str, dict[int, float]] = {}
    for name in sorted({r["strategy"] for r in results}):
        sizes = sorted({r["input_size"] for r in results if r["strategy"] == name})
        summaries[name] = {
            size: statistics.mean(
                r["mean_ms"] for r in results
                if r["strategy"] == name and r["input_size"] == size
            )
            for size in sizes
        }
    return summaries


def _compare_metric(
    *,
    label: str,
    baseline: float | None,
    current: float | None,
    max_regression_pct: float,
    min_ms: float,
) -> str | None:
    if baseline is None or current is None:
        return None
    if baseline <= 0 or max(baseline, current) < min_ms:
        return None
    regression_pct = (current - baseline) / baseline * 100.0
    if regression_pct > max_regression_pct:
        return (
            f"{label} regression {regression_pct:.1f}% "
            f"(baseline {baseline:.3f}ms, current {current:.3f}ms)"
        )
    return None


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare two perf_test CSV reports and flag regressions.",
    )
    parser.add_argument("--baseline", required=True, help="Baseline CSV report.")
    parser.add_argument("--current", required=True, help="Current CSV report.")
    parser.add_argument(
        "--max-regression-pct",
        type=float,
        default=20.0,
        help="Max allowed regression (percent) of the mean latency.",
    )
    parser.add_argument(
        "--min-ms",
        type=float,
        default=1.0,
        help="Ignore runs where both means are below this many milliseconds.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    baseline_summary = _summaries(_load_results(Path(args.baseline)))
    current_summary = _summaries(_load_results(Path(args.current)))

    issues: list[str] = []
    names = sorted(set(baseline_summary) | set(current_summary))
    if not names:
        print("No comparable results.", file=sys.stderr)
        return 1

    for name in names:
        base = baseline_summary.get(name)
        cur = current_summary.get(name)
        if base is None or cur is None:
            issues.append(f"{name}: missing data in baseline or current report")
            continue
        for size in sorted(set(base) & set(cur)):
            issue = _compare_metric(
                label=f"n={size}",
                baseline=base[size],
                current=cur[size],
                max_regression_pct=args.max_regression_pct,
                min_ms=args.min_ms,
            )
            if issue:
                issues.append(f"{name}: {issue}")

    if issues:
        print("Performance regressions detected:", file=sys.stderr)
        for issue in issues:
            print(f"- {issue}", file=sys.stderr)
        return 1

    print("No performance regressions detected.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
