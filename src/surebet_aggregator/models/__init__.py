# -*- coding: utf-8 -*-
"""Domain models."""

from surebet_aggregator.models.aggregated_record import AggregatedRecord
from surebet_aggregator.models.surebet_record import SurebetRecord

__all__ = [
    "AggregatedRecord",
    "SurebetRecord",
]
