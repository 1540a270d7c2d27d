"""KvEntry ORM — one persisted key of the profile's key-value store.

Invariants:
    - key is the primary key (one row per storage key)
    - value holds a JSON document (list, dict, scalar or null)
    - updated_at moves on every write

Design Decisions:
    - JSON column over per-entity tables: the stored layout is a versioned document
      set that the core migrates itself (ADR: schema evolution lives in state_migration)
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from shipyard.db.base import Base


class KvEntry(Base):
    """A single key -> JSON document row."""
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[object] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
