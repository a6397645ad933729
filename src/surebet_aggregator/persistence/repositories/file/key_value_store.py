# -*- coding: utf-8 -*-
"""Key-value store backed by one JSON file per key on local disk."""

from __future__ import annotations

import asyncio
import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from surebet_aggregator.exceptions import CorruptStateError, StateLoadError, StatePersistError
from surebet_aggregator.persistence.repositories.interfaces.key_value_store import IKeyValueStore

_SAFE_KEY = re.compile(r"^[A-Za-z0-9!\-_.'()]+$")


class JsonFileKeyValueStore(IKeyValueStore):
    """Stores <root>/key_value_stores/<name>/<key>.json.

    Writes go to a temp file in the same directory and are moved into place with
    os.replace, so a crash mid-write leaves the previous value intact.
    Disk access runs in a worker thread.
    """

    def __init__(self, root_dir: str | Path, name: str) -> None:
        self._name = name
        self._dir = Path(root_dir) / "key_value_stores" / name

    @property
    def name(self) -> str:
        return self._name

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"invalid key {key!r}")
        return self._dir / f"{key}.json"

    async def get_value(self, key: str) -> Any | None:
        return await asyncio.to_thread(self._read, key)

    async def set_value(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._write, key, value)

    def _read(self, key: str) -> Any | None:
        path = self._path(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StateLoadError(f"cannot read {path}: {e}", store=self._name, key=key) from e
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"{path} is not valid JSON: {e}", store=self._name, key=key) from e

    def _write(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp_name: str | None = None
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._dir,
                prefix=f".{key}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                json.dump(value, fh, ensure_ascii=False, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            raise StatePersistError(f"cannot write {path}: {e}", key=key) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
