"""
Power-set generation strategies.

Every strategy takes a finite collection of distinct hashable elements and
produces all 2^n subsets as frozensets. They are interchangeable and are
registered by name in `strategies`.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from functools import reduce
from typing import TypeVar

T = TypeVar('T')


def _as_list(s: Iterable[T]) -> list[T]:
    """Fix an order for the elements of s, checking that they are distinct."""
    elements = list(s)
    if not isinstance(s, (set, frozenset)) and len(set(elements)) != len(elements):
        raise ValueError("Power set input must consist of distinct elements")
    return elements


def _recursive_powerset(working: frozenset[T], found: set[frozenset[T]]) -> None:
    if not working or working in found:
        return
    found.add(working)
    for x in working:
        _recursive_powerset(working - {x}, found)


def recursive_powerset(s: Iterable[T]) -> set[frozenset[T]]:
    """
    Compute the power set of s by recursively removing one element at a time.

    Subsets are deduplicated by content, and a subset already found through
    another removal order is not explored again. The empty subset is never
    recorded by the recursion (it stops at empty working sets) and is added
    at the end.
    """
    found: set[frozenset[T]] = set()
    _recursive_powerset(frozenset(_as_list(s)), found)
    found.add(frozenset())
    return found


def bitmask_powerset(s: Iterable[T]) -> Iterator[frozenset[T]]:
    """
    A generator for the power set of s, one subset per bitmask.

    Masks run from 1 to 2^n inclusive. Mask 0 is skipped and mask 2^n has no
    bit below n set, so the empty subset comes out last.
    """
    array = _as_list(s)
    n = len(array)
    for bitmask in range(1, (1 << n) + 1):
        yield frozenset(array[i] for i in range(n) if bitmask & (1 << i))


def doubling_powerset(s: Iterable[T]) -> list[frozenset[T]]:
    """
    Compute the power set of s by index doubling.

    When processing the i-th element, slots [0, 2^i) already hold the power
    set of the first i elements; each of them is extended with the element
    into slot 2^i + j. Slot k ends up holding the subset selected by bitmask k.
    """
    array = _as_list(s)
    table: list[frozenset[T]] = [frozenset()] * (1 << len(array))

    def extend(acc: list[frozenset[T]], indexed: tuple[int, T]) -> list[frozenset[T]]:
        i, current = indexed
        count = 1 << i
        for j in range(count):
            acc[count + j] = acc[j] | {current}
        return acc

    return reduce(extend, enumerate(array), table)


Strategy = Callable[[Iterable[T]], Iterable[frozenset[T]]]

strategies: dict[str, Strategy] = {
    'recursive': recursive_powerset,
    'iterative': bitmask_powerset,
    'doubling': doubling_powerset,
}


def get_strategy(name: str) -> Strategy:
    """Return the generation function registered under name."""
    try:
        return strategies[name]
    except KeyError:
        raise ValueError(
            f"Unknown strategy '{name}'. Must be one of {list(strategies)}") from None

