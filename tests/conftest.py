"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use, so the environment is fixed before any import
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("ADMIN_EMAIL", "admin@shipyard.test")
os.environ.setdefault("LOG_FORMAT", "text")
