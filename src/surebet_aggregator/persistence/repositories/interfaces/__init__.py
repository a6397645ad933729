# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, file/, apify/."""

from surebet_aggregator.persistence.repositories.interfaces.key_value_store import IKeyValueStore
from surebet_aggregator.persistence.repositories.interfaces.results_sink import IResultsSink

__all__ = ["IKeyValueStore", "IResultsSink"]
