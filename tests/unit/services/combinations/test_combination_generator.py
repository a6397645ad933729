# -*- coding: utf-8 -*-
"""Unit tests for broker combination enumeration."""

from __future__ import annotations

import pytest

from surebet_aggregator.exceptions import CombinationLimitExceededError
from surebet_aggregator.services.combinations.combination_generator import (
    CombinationGenerator,
    expected_combination_count,
    generate_combinations,
)


def test_three_brokers_yield_four_sorted_combinations() -> None:
    result = generate_combinations(["A", "B", "C"])
    assert set(result) == {("A", "B"), ("A", "C"), ("B", "C"), ("A", "B", "C")}
    assert len(result) == 4


@pytest.mark.parametrize("n", range(0, 11))
def test_count_is_two_to_the_n_minus_n_minus_one(n: int) -> None:
    brokers = [f"broker-{i:02d}" for i in range(n)]
    result = generate_combinations(brokers)

    assert len(result) == expected_combination_count(n)
    assert len(set(result)) == len(result)
    assert all(len(c) >= 2 for c in result)
    assert all(list(c) == sorted(c) for c in result)


def test_fewer_than_two_brokers_yield_nothing() -> None:
    assert generate_combinations([]) == []
    assert generate_combinations(["A"]) == []


def test_input_order_does_not_change_combinations() -> None:
    forward = generate_combinations(["Pinnacle", "Bet365", "Unibet"])
    backward = generate_combinations(["Unibet", "Bet365", "Pinnacle"])
    assert set(forward) == set(backward)
    assert ("Bet365", "Pinnacle", "Unibet") in forward


def test_duplicate_brokers_are_collapsed() -> None:
    result = generate_combinations(["A", "B", "A", "B"])
    assert result == [("A", "B")]


def test_only_duplicates_yield_nothing() -> None:
    assert generate_combinations(["A", "A", "A"]) == []


def test_repeated_calls_are_identical() -> None:
    brokers = ["C", "A", "D", "B"]
    assert generate_combinations(brokers) == generate_combinations(brokers)


def test_limit_exceeded_raises() -> None:
    with pytest.raises(CombinationLimitExceededError) as exc_info:
        generate_combinations([str(i) for i in range(6)], max_brokers=5)
    assert exc_info.value.count == 6
    assert exc_info.value.limit == 5


def test_limit_counts_distinct_brokers_only() -> None:
    result = generate_combinations(["A", "B", "A", "B", "A", "B"], max_brokers=2)
    assert result == [("A", "B")]


def test_limit_none_disables_cap() -> None:
    result = generate_combinations([str(i) for i in range(12)], max_brokers=None)
    assert len(result) == expected_combination_count(12)


def test_generator_wrapper_applies_configured_cap() -> None:
    generator = CombinationGenerator(max_brokers=3)
    assert generator.max_brokers == 3
    assert len(generator.generate(["A", "B", "C"])) == 4
    with pytest.raises(CombinationLimitExceededError):
        generator.generate(["A", "B", "C", "D"])


def test_expected_count_small_values() -> None:
    assert [expected_combination_count(n) for n in range(6)] == [0, 0, 1, 4, 11, 26]
