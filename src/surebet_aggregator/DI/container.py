# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from surebet_aggregator.clients.apify import ApifyApiClient
from surebet_aggregator.clients.http import AsyncHttpClient
from surebet_aggregator.config import Settings, get_settings
from surebet_aggregator.exceptions import MissingRequiredConfigError
from surebet_aggregator.persistence.repositories.apify import ApifyDatasetSink, ApifyKeyValueStore
from surebet_aggregator.persistence.repositories.file import (
    JsonFileKeyValueStore,
    JsonLinesResultsSink,
)
from surebet_aggregator.persistence.repositories.in_memory import (
    InMemoryKeyValueStore,
    InMemoryResultsSink,
)
from surebet_aggregator.persistence.repositories.interfaces import IKeyValueStore, IResultsSink
from surebet_aggregator.persistence.repositories.state import (
    DedupLedgerRepository,
    FrequencyTableRepository,
)
from surebet_aggregator.services.aggregation import AggregationEngine, AggregationRunner
from surebet_aggregator.services.combinations import CombinationGenerator
from surebet_aggregator.services.ingestion import (
    IRecordSource,
    JsonFileRecordSource,
    ScraperTaskRecordSource,
)

DEFAULT_RESULTS_DATASET = "results"


def _build_key_value_store(
    settings: Settings,
    apify_client: ApifyApiClient,
    name: str,
) -> IKeyValueStore:
    """Build the state store for the configured storage backend."""
    backend = settings.storage.backend
    if backend == "memory":
        return InMemoryKeyValueStore(name=name)
    if backend == "apify":
        if not settings.effective_token:
            raise MissingRequiredConfigError("APIFY_TOKEN")
        return ApifyKeyValueStore(apify_client, name)
    return JsonFileKeyValueStore(settings.storage.data_dir, name)


def _build_state_store(settings: Settings, apify_client: ApifyApiClient) -> IKeyValueStore:
    return _build_key_value_store(settings, apify_client, settings.storage.state_store_name)


def _build_counts_store(settings: Settings, apify_client: ApifyApiClient) -> IKeyValueStore:
    return _build_key_value_store(settings, apify_client, settings.storage.counts_store_name)


def _build_results_sink(settings: Settings, apify_client: ApifyApiClient) -> IResultsSink:
    """Build the results sink for the configured storage backend."""
    backend = settings.storage.backend
    name = settings.storage.results_dataset_name
    if backend == "memory":
        return InMemoryResultsSink()
    if backend == "apify":
        if not settings.effective_token:
            raise MissingRequiredConfigError("APIFY_TOKEN")
        if name:
            return ApifyDatasetSink(apify_client, dataset_name=name)
        if settings.actor_default_dataset_id:
            return ApifyDatasetSink(apify_client, dataset_id=settings.actor_default_dataset_id)
        return ApifyDatasetSink(apify_client, dataset_name=DEFAULT_RESULTS_DATASET)
    return JsonLinesResultsSink(settings.storage.data_dir, name or DEFAULT_RESULTS_DATASET)


def _build_record_source(settings: Settings, apify_client: ApifyApiClient) -> IRecordSource:
    """Build the raw item source for the configured source backend."""
    if settings.source.backend == "file":
        if not settings.source.input_path:
            raise MissingRequiredConfigError("SOURCE__INPUT_PATH")
        return JsonFileRecordSource(settings.source.input_path)
    if not settings.effective_token:
        raise MissingRequiredConfigError("APIFY_TOKEN")
    return ScraperTaskRecordSource(apify_client, settings.effective_task_id)


def _build_generator(settings: Settings) -> CombinationGenerator:
    return CombinationGenerator(max_brokers=settings.engine.max_brokers)


def _key_delimiter(settings: Settings) -> str:
    return settings.engine.key_delimiter


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP/Apify clients, stores, engine and runner."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    apify_client = providers.Singleton(
        ApifyApiClient,
        http_client=http_client,
        settings=config,
    )

    state_store = providers.Singleton(_build_state_store, config, apify_client)

    counts_store = providers.Singleton(_build_counts_store, config, apify_client)

    results_sink = providers.Singleton(_build_results_sink, config, apify_client)

    record_source = providers.Singleton(_build_record_source, config, apify_client)

    key_delimiter = providers.Callable(_key_delimiter, config)

    dedup_ledger_repository = providers.Singleton(
        DedupLedgerRepository,
        store=state_store,
        delimiter=key_delimiter,
    )

    frequency_table_repository = providers.Singleton(
        FrequencyTableRepository,
        store=counts_store,
    )

    combination_generator = providers.Singleton(_build_generator, config)

    aggregation_engine = providers.Singleton(
        AggregationEngine,
        generator=combination_generator,
        delimiter=key_delimiter,
    )

    aggregation_runner = providers.Singleton(
        AggregationRunner,
        source=record_source,
        ledger_repository=dedup_ledger_repository,
        frequency_repository=frequency_table_repository,
        results_sink=results_sink,
        engine=aggregation_engine,
    )
