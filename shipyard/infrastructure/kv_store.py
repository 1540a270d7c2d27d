"""Key-Value Store — async get/put/delete of JSON documents in the kv_entries table.

Invariants:
    - put_many upserts every given key in one flush; callers commit
    - Values round-trip as JSON (dict, list, str, int, bool, None)
    - Unknown keys read as absent, never as errors

Design Decisions:
    - Thin wrapper over AsyncSession: transaction boundaries stay with the caller
      (ADR: one load -> mutate -> save cycle per request)
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from shipyard.models.kv_entry import KvEntry

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Persistent key -> JSON document mapping for one profile."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> dict[str, object]:
        result = await self.db.execute(select(KvEntry))
        return {entry.key: entry.value for entry in result.scalars().all()}

    async def get(self, key: str) -> object | None:
        entry = await self.db.get(KvEntry, key)
        return entry.value if entry else None

    async def put_many(self, documents: dict[str, object]) -> None:
        existing = await self._entries(list(documents))
        for key, value in documents.items():
            entry = existing.get(key)
            if entry is None:
                self.db.add(KvEntry(key=key, value=value))
            else:
                entry.value = value
        await self.db.flush()
        logger.debug(f"Stored {len(documents)} keys")

    async def _entries(self, keys: list[str]) -> dict[str, KvEntry]:
        if not keys:
            return {}
        result = await self.db.execute(
            select(KvEntry).where(KvEntry.key.in_(keys)),
        )
        return {entry.key: entry for entry in result.scalars().all()}

    async def delete_keys(self, keys: list[str]) -> None:
        if not keys:
            return
        await self.db.execute(delete(KvEntry).where(KvEntry.key.in_(keys)))
        logger.info(
            f"Deleted {len(keys)} storage keys",
            extra={"storage_key": ",".join(keys)},
        )

    async def commit(self) -> None:
        await self.db.commit()
