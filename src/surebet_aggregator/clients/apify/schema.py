"""Apify API and scraper dataset response types."""

from __future__ import annotations

from typing import Any, TypedDict


class OutcomeSchema(TypedDict, total=False):
    """One leg of a surebet: the broker quoting it (plus scraper-specific extras)."""

    broker: str
    odds: float
    outcome: str


class AllocationSchema(TypedDict, total=False):
    isSurebet: bool


class SurebetItemSchema(TypedDict, total=False):
    """Scraper dataset item. Only `outcomes` and `date` matter to the engine."""

    outcomes: list[OutcomeSchema]
    date: str
    allocation: AllocationSchema


class ActorRunSchema(TypedDict, total=False):
    """Subset of the Apify Run object (GET /v2/actor-runs/{id} -> data)."""

    id: str
    actId: str
    actorTaskId: str
    status: str
    startedAt: str
    finishedAt: str
    defaultDatasetId: str
    defaultKeyValueStoreId: str
    statusMessage: str


class StorageSchema(TypedDict, total=False):
    """Subset of an Apify key-value store or dataset object."""

    id: str
    name: str
    userId: str
    itemCount: int
    stats: dict[str, Any]


RUN_TERMINAL_STATUSES = frozenset({"SUCCEEDED", "FAILED", "ABORTED", "TIMED-OUT", "TIMED_OUT"})
