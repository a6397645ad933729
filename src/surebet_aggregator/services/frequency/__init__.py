"""Per-combination frequency aggregation."""

from surebet_aggregator.services.frequency.frequency_table import FrequencyTable

__all__ = ["FrequencyTable"]
