"""Results sink appending JSON lines to a local file."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from surebet_aggregator.persistence.repositories.interfaces.results_sink import IResultsSink


class JsonLinesResultsSink(IResultsSink):
    """Appends one JSON object per line to <root>/datasets/<name>.jsonl."""

    def __init__(self, root_dir: str | Path, name: str = "results") -> None:
        self._path = Path(root_dir) / "datasets" / f"{name}.jsonl"

    @property
    def path(self) -> Path:
        return self._path

    async def append(self, record: dict[str, Any]) -> None:
        await self.append_batch([record])

    async def append_batch(self, records: list[dict[str, Any]]) -> None:
        if not records:
            return
        await asyncio.to_thread(self._write_lines, records)

    def _write_lines(self, records: list[dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        lines = "".join(json.dumps(r, ensure_ascii=False) + "\n" for r in records)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(lines)
