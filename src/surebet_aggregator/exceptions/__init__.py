"""Exceptions subpackage."""

from surebet_aggregator.exceptions.exceptions import (
    ApifyAPIError,
    CombinationLimitExceededError,
    FingerprintError,
    MissingRequiredConfigError,
    RateLimitError,
    ScraperRunError,
    SurebetAggregatorError,
)
from surebet_aggregator.exceptions.state_exceptions import (
    CorruptStateError,
    StateError,
    StateLoadError,
    StatePersistError,
)

__all__ = [
    "ApifyAPIError",
    "CombinationLimitExceededError",
    "CorruptStateError",
    "FingerprintError",
    "MissingRequiredConfigError",
    "RateLimitError",
    "ScraperRunError",
    "StateError",
    "StateLoadError",
    "StatePersistError",
    "SurebetAggregatorError",
]
