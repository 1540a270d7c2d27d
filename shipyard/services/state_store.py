"""State Store — load, migrate and save the profile's AppState through the key-value store.

Invariants:
    - load() runs the schema upgrade at most once per stored version; an upgraded
      document set is written back and legacy keys deleted in the same commit
    - load() purges expired sessions and clears a dead current-session pointer
      before handing the state out, and persists either change immediately
    - save() writes every state key and commits; nothing is saved on error paths

Design Decisions:
    - Load -> mutate -> save per request: no in-process cache, the database is the
      single source of truth (ADR: the profile may be opened by a fresh process)
    - Clock and TTL passed in so tests can move time
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from shipyard.core.app_state import AppState
from shipyard.core.sessions import cleanup_expired, resolve_current_user
from shipyard.core.state_migration import LEGACY_KEYS, upgrade_documents
from shipyard.core.state_snapshot import (
    SCHEMA_VERSION, state_from_documents, state_to_documents,
)
from shipyard.infrastructure.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class StateStore:
    """Reads and writes one profile's AppState."""

    def __init__(self, db: AsyncSession, session_ttl: timedelta):
        self.kv = KeyValueStore(db)
        self.session_ttl = session_ttl

    async def load(self, now: datetime) -> AppState:
        documents = await self.kv.get_all()
        upgraded, original_version = upgrade_documents(
            documents, now, self.session_ttl,
        )
        state = state_from_documents(upgraded)
        if original_version != SCHEMA_VERSION:
            await self._write_upgrade(state, documents)
        pointer = state.current_session
        removed = cleanup_expired(state, now)
        resolve_current_user(state, now)
        if removed or state.current_session is not pointer:
            logger.info(
                f"Healed stored sessions: purged {removed}, "
                f"pointer cleared={state.current_session is None}",
            )
            await self.save(state)
        return state

    async def _write_upgrade(self, state: AppState, documents: dict) -> None:
        stale = [key for key in LEGACY_KEYS if key in documents]
        await self.kv.delete_keys(stale)
        await self.kv.put_many(state_to_documents(state))
        await self.kv.commit()
        logger.info(
            "Stored state upgraded",
            extra={"schema_version": SCHEMA_VERSION},
        )

    async def save(self, state: AppState) -> None:
        await self.kv.put_many(state_to_documents(state))
        await self.kv.commit()
