# -*- coding: utf-8 -*-
"""Broker combination enumeration."""

from surebet_aggregator.services.combinations.combination_generator import (
    Combination,
    CombinationGenerator,
    expected_combination_count,
    generate_combinations,
)

__all__ = [
    "Combination",
    "CombinationGenerator",
    "expected_combination_count",
    "generate_combinations",
]
