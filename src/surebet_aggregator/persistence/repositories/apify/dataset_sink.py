"""Results sink backed by an Apify dataset."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from surebet_aggregator.persistence.repositories.interfaces.results_sink import IResultsSink

if TYPE_CHECKING:
    from surebet_aggregator.clients.apify import ApifyApiClient


class ApifyDatasetSink(IResultsSink):
    """Pushes records to a dataset given by id, or a named dataset created on first use."""

    def __init__(
        self,
        client: ApifyApiClient,
        *,
        dataset_id: str | None = None,
        dataset_name: str | None = None,
    ) -> None:
        if not dataset_id and not dataset_name:
            raise ValueError("dataset_id or dataset_name is required")
        self._client = client
        self._dataset_id = dataset_id
        self._dataset_name = dataset_name

    async def _resolve_id(self) -> str:
        if self._dataset_id is not None:
            return self._dataset_id
        if not self._dataset_name:
            raise ValueError("dataset_id or dataset_name is required")
        dataset = await self._client.get_or_create_dataset(self._dataset_name)
        dataset_id = dataset.get("id")
        if not dataset_id:
            raise ValueError(f"dataset {self._dataset_name!r} has no id")
        self._dataset_id = dataset_id
        return dataset_id

    async def append(self, record: dict[str, Any]) -> None:
        await self.append_batch([record])

    async def append_batch(self, records: list[dict[str, Any]]) -> None:
        if not records:
            return
        await self._client.push_items(await self._resolve_id(), records)
