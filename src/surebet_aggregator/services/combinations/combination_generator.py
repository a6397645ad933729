# -*- coding: utf-8 -*-
"""Broker combination enumeration.

Pure, no I/O, no shared state: safe to call from anywhere without locking.
"""

from __future__ import annotations

from collections.abc import Iterable

from surebet_aggregator.exceptions import CombinationLimitExceededError

Combination = tuple[str, ...]

DEFAULT_MAX_BROKERS = 20
MIN_COMBINATION_SIZE = 2


def expected_combination_count(n: int) -> int:
    """Number of subsets of size >= 2 of n distinct items: 2^n - n - 1 (0 for n < 2)."""
    if n < MIN_COMBINATION_SIZE:
        return 0
    return 2**n - n - 1


def generate_combinations(
    brokers: Iterable[str],
    *,
    max_brokers: int | None = DEFAULT_MAX_BROKERS,
) -> list[Combination]:
    """Return every sorted sub-combination of size >= 2 of the distinct brokers.

    Duplicates in the input are collapsed first, so the result never holds two
    equal combinations and its length is expected_combination_count(distinct).
    Elements are sorted before enumeration, so every emitted tuple is already
    canonical. Result order is deterministic for a given input but callers must
    only rely on membership.

    Uses choose/skip backtracking over the sorted index range (no 2^n bitmask).

    Args:
        brokers: Broker identifiers in any order.
        max_brokers: Cap on distinct brokers; None disables the cap.

    Returns:
        List of combinations (tuples), empty when fewer than 2 distinct brokers.

    Raises:
        CombinationLimitExceededError: If distinct brokers exceed max_brokers.
    """
    items = sorted(set(brokers))
    n = len(items)
    if n < MIN_COMBINATION_SIZE:
        return []
    if max_brokers is not None and n > max_brokers:
        raise CombinationLimitExceededError(n, max_brokers)

    results: list[Combination] = []
    current: list[str] = []

    def backtrack(start: int) -> None:
        if len(current) >= MIN_COMBINATION_SIZE:
            results.append(tuple(current))
        for i in range(start, n):
            current.append(items[i])
            backtrack(i + 1)
            current.pop()

    backtrack(0)
    return results


class CombinationGenerator:
    """Callable wrapper holding the configured broker cap (for injection)."""

    def __init__(self, *, max_brokers: int | None = DEFAULT_MAX_BROKERS) -> None:
        self._max_brokers = max_brokers

    @property
    def max_brokers(self) -> int | None:
        return self._max_brokers

    def generate(self, brokers: Iterable[str]) -> list[Combination]:
        """See generate_combinations."""
        return generate_combinations(brokers, max_brokers=self._max_brokers)
