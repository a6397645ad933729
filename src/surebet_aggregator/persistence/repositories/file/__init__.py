"""Local-disk repository implementations."""

from surebet_aggregator.persistence.repositories.file.key_value_store import JsonFileKeyValueStore
from surebet_aggregator.persistence.repositories.file.results_sink import JsonLinesResultsSink

__all__ = ["JsonFileKeyValueStore", "JsonLinesResultsSink"]
