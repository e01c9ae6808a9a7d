"""Data sources the explorer can prompt for a record."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import orjson

from .config import ExplorerSettings

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


@runtime_checkable
class DataSource(Protocol):
    """Prompt the user for a selection and return the matching records."""

    async def prompt(self, settings: ExplorerSettings) -> Sequence[Record] | None: ...


class JsonFileDataSource:
    """Reads records from a JSON file holding one object or a list of objects."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def prompt(self, settings: ExplorerSettings) -> list[Record]:
        raw = await asyncio.to_thread(self.path.read_bytes)
        payload = orjson.loads(raw) if raw.strip() else None
        if payload is None:
            return []
        records = payload if isinstance(payload, list) else [payload]
        logger.debug(f"Loaded {len(records)} record(s) from {self.path}")
        return [record for record in records if isinstance(record, Mapping)]


class StaticDataSource:
    """Returns a fixed list of records; useful for embedding and tests."""

    def __init__(self, records: Sequence[Record] | None):
        self.records = records

    async def prompt(self, settings: ExplorerSettings) -> Sequence[Record] | None:
        return self.records
