# -*- coding: utf-8 -*-
"""Key-value store backed by a named Apify key-value store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from surebet_aggregator.persistence.repositories.interfaces.key_value_store import IKeyValueStore

if TYPE_CHECKING:
    from surebet_aggregator.clients.apify import ApifyApiClient


class ApifyKeyValueStore(IKeyValueStore):
    """Resolves (or creates) the named store on first use, then reads/writes records by key.

    Atomicity of set_value is the platform's: a PUT replaces the record wholesale.
    """

    def __init__(self, client: ApifyApiClient, name: str) -> None:
        self._client = client
        self._name = name
        self._store_id: str | None = None

    @property
    def name(self) -> str:
        return self._name

    async def _resolve_id(self) -> str:
        if self._store_id is None:
            store = await self._client.get_or_create_key_value_store(self._name)
            store_id = store.get("id")
            if not store_id:
                raise ValueError(f"key-value store {self._name!r} has no id")
            self._store_id = store_id
        return self._store_id

    async def get_value(self, key: str) -> Any | None:
        return await self._client.get_record(await self._resolve_id(), key)

    async def set_value(self, key: str, value: Any) -> None:
        await self._client.set_record(await self._resolve_id(), key, value)
