"""
Conformance checks for power-set strategies.

Outputs are compared as unordered collections of unordered subsets.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from typing import Optional

from python_powerset.powerset import Strategy


@dataclass(frozen=True)
class Scenario:
    name: str
    input_set: frozenset
    expected: Optional[tuple[frozenset, ...]] = None
    expected_count: Optional[int] = None


def _subsets(*sets: Iterable) -> tuple[frozenset, ...]:
    return tuple(frozenset(s) for s in sets)


SCENARIOS: tuple[Scenario, ...] = (
    Scenario("empty", frozenset(), expected=_subsets(())),
    Scenario("single", frozenset({1}), expected=_subsets((), {1})),
    Scenario("double", frozenset({1, 2}), expected=_subsets((), {1}, {2}, {1, 2})),
    Scenario("triple", frozenset({1, 2, 3}),
             expected=_subsets((), {1}, {2}, {3}, {1, 2}, {1, 3}, {2, 3}, {1, 2, 3})),
    Scenario("large", frozenset(range(1, 9)), expected_count=2 ** 8),
)


def is_equivalent(result: Iterable[Collection], expected: Iterable[Collection]) -> bool:
    """True if both hold the same subsets the same number of times, in any order."""
    return Counter(frozenset(s) for s in result) == Counter(frozenset(s) for s in expected)


def check_scenario(generate: Strategy, scenario: Scenario) -> bool:
    result = list(generate(scenario.input_set))
    if scenario.expected is not None and not is_equivalent(result, scenario.expected):
        return False
    if scenario.expected_count is not None and len(result) != scenario.expected_count:
        return False
    return True


def verify(generate: Strategy) -> dict[str, bool]:
    """Run all scenarios against generate and report pass/fail by scenario name."""
    outcome = {scenario.name: check_scenario(generate, scenario) for scenario in SCENARIOS}
    failed = [name for name, ok in outcome.items() if not ok]
    if failed:
        logging.warning("Scenarios failed for %s: %s",
                        getattr(generate, '__name__', generate), failed)
    return outcome


def check_properties(generate: Strategy, s: Collection) -> list[str]:
    """
    Check the power-set properties of generate(s).

    Returns a description of each violated property; an empty list means the
    output is a correct power set of s.
    """
    universe = frozenset(s)
    result = [frozenset(subset) for subset in generate(s)]
    problems: list[str] = []
    if len(result) != 2 ** len(universe):
        problems.append(f"expected {2 ** len(universe)} subsets, got {len(result)}")
    duplicates = [subset for subset, n in Counter(result).items() if n > 1]
    if duplicates:
        problems.append(f"duplicate subsets: {duplicates}")
    if frozenset() not in result:
        problems.append("empty subset missing")
    if universe not in result:
        problems.append("full set missing")
    foreign = [subset for subset in result if not subset <= universe]
    if foreign:
        problems.append(f"subsets with foreign elements: {foreign}")
    return problems
