# -*- coding: utf-8 -*-
"""Unit tests for Apify-backed key-value store and dataset sink."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest

from surebet_aggregator.persistence.repositories.apify import ApifyDatasetSink, ApifyKeyValueStore


def _client() -> Any:
    return SimpleNamespace(
        get_or_create_key_value_store=AsyncMock(return_value={"id": "kv-1", "name": "STATE"}),
        get_record=AsyncMock(return_value=["abc"]),
        set_record=AsyncMock(),
        get_or_create_dataset=AsyncMock(return_value={"id": "ds-9"}),
        push_items=AsyncMock(),
    )


async def test_key_value_store_resolves_store_once() -> None:
    client = _client()
    store = ApifyKeyValueStore(cast(Any, client), "STATE")

    assert await store.get_value("seenHashes") == ["abc"]
    await store.set_value("seenHashes", ["abc", "def"])

    client.get_or_create_key_value_store.assert_awaited_once_with("STATE")
    client.get_record.assert_awaited_once_with("kv-1", "seenHashes")
    client.set_record.assert_awaited_once_with("kv-1", "seenHashes", ["abc", "def"])


async def test_key_value_store_missing_id_raises() -> None:
    client = _client()
    client.get_or_create_key_value_store = AsyncMock(return_value={})
    store = ApifyKeyValueStore(cast(Any, client), "STATE")

    with pytest.raises(ValueError):
        await store.get_value("seenHashes")


async def test_dataset_sink_uses_given_id() -> None:
    client = _client()
    sink = ApifyDatasetSink(cast(Any, client), dataset_id="default-ds")
    records = [{"brokers": ["A", "B"], "timestamp": "t"}]

    await sink.append_batch(records)

    client.push_items.assert_awaited_once_with("default-ds", records)
    client.get_or_create_dataset.assert_not_awaited()


async def test_dataset_sink_resolves_named_dataset() -> None:
    client = _client()
    sink = ApifyDatasetSink(cast(Any, client), dataset_name="results")

    await sink.append({"brokers": ["A", "B"], "timestamp": "t"})

    client.get_or_create_dataset.assert_awaited_once_with("results")
    client.push_items.assert_awaited_once_with("ds-9", [{"brokers": ["A", "B"], "timestamp": "t"}])


async def test_dataset_sink_skips_empty_batch() -> None:
    client = _client()
    sink = ApifyDatasetSink(cast(Any, client), dataset_name="results")

    await sink.append_batch([])

    client.push_items.assert_not_awaited()


def test_dataset_sink_requires_id_or_name() -> None:
    with pytest.raises(ValueError):
        ApifyDatasetSink(cast(Any, _client()))


async def test_dataset_sink_resolves_named_dataset_once() -> None:
    client = _client()
    sink = ApifyDatasetSink(cast(Any, client), dataset_name="results")

    await sink.append({"brokers": ["A", "B"], "timestamp": "t1"})
    await sink.append({"brokers": ["A", "C"], "timestamp": "t2"})

    client.get_or_create_dataset.assert_awaited_once_with("results")
    assert client.push_items.await_count == 2


async def test_dataset_sink_named_dataset_without_id_raises() -> None:
    client = _client()
    client.get_or_create_dataset = AsyncMock(return_value={"name": "results"})
    sink = ApifyDatasetSink(cast(Any, client), dataset_name="results")

    with pytest.raises(ValueError):
        await sink.append({"brokers": ["A", "B"], "timestamp": "t"})

    client.push_items.assert_not_awaited()
