"""Database Infrastructure — SQLAlchemy Base for the key-value table.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite by default (one local file per profile), asyncpg when pointed at PostgreSQL
"""
