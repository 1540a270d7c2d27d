"""Declarative Base — metadata root shared by the ORM model and alembic.

Invariants:
    - Every mapped table (today only kv_entries) registers on Base.metadata
    - alembic/env.py and the auto-create path read the same metadata object

Design Decisions:
    - Own module: models and migrations import Base without importing each other
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for Shipyard ORM models."""
