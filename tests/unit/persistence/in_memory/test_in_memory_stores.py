# -*- coding: utf-8 -*-
"""Unit tests for in-memory key-value store and results sink."""

from __future__ import annotations

from surebet_aggregator.persistence.repositories.in_memory import (
    InMemoryKeyValueStore,
    InMemoryResultsSink,
)


async def test_missing_key_returns_none() -> None:
    store = InMemoryKeyValueStore()
    assert await store.get_value("seenHashes") is None


async def test_set_replaces_value_wholesale() -> None:
    store = InMemoryKeyValueStore(name="STATE")
    await store.set_value("seenHashes", ["a", "b"])
    await store.set_value("seenHashes", ["c"])

    assert await store.get_value("seenHashes") == ["c"]
    assert store.name == "STATE"


async def test_values_are_copied_in_and_out() -> None:
    store = InMemoryKeyValueStore()
    value = {"A|B": 1}
    await store.set_value("comboCounts", value)
    value["A|B"] = 5

    loaded = await store.get_value("comboCounts")
    loaded["A|B"] = 7

    assert await store.get_value("comboCounts") == {"A|B": 1}


async def test_initial_values_are_visible() -> None:
    store = InMemoryKeyValueStore(initial={"comboCounts": {"A|B": 3}})
    assert await store.get_value("comboCounts") == {"A|B": 3}


async def test_sink_preserves_append_order() -> None:
    sink = InMemoryResultsSink()
    await sink.append({"brokers": ["A", "B"], "timestamp": "t1"})
    await sink.append_batch(
        [
            {"brokers": ["A", "C"], "timestamp": "t2"},
            {"brokers": ["B", "C"], "timestamp": "t3"},
        ]
    )

    assert [r["timestamp"] for r in sink.items] == ["t1", "t2", "t3"]
