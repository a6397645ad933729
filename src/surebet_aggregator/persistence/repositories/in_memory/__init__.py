"""In-memory repository implementations."""

from surebet_aggregator.persistence.repositories.in_memory.key_value_store import (
    InMemoryKeyValueStore,
)
from surebet_aggregator.persistence.repositories.in_memory.results_sink import (
    InMemoryResultsSink,
)

__all__ = ["InMemoryKeyValueStore", "InMemoryResultsSink"]
