"""Request Dependencies — clock, state store, current user and admin guard.

Invariants:
    - One clock reading per request: every core call in a request sees the same `now`
    - require_user() raises NoActiveUserError; routes that tolerate anonymous
      callers use resolve_current_user() directly
    - The admin guard checks identity before the route touches any state

Design Decisions:
    - Clock as a dependency so tests override it via app.dependency_overrides
      (ADR: core functions take `now`, they never read the wall clock)
"""

from datetime import datetime, timezone
from typing import Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shipyard.config import Settings, get_settings
from shipyard.core.admin import require_admin
from shipyard.core.app_state import AppState
from shipyard.core.errors import NoActiveUserError
from shipyard.core.records import User
from shipyard.core.sessions import resolve_current_user
from shipyard.infrastructure.database import get_db
from shipyard.services.state_store import StateStore

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_clock() -> Clock:
    return utc_now


def get_state_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> StateStore:
    return StateStore(db, settings.session_ttl)


def require_user(state: AppState, now: datetime) -> User:
    user = resolve_current_user(state, now)
    if user is None:
        raise NoActiveUserError()
    return user


def require_admin_user(
    state: AppState, now: datetime, settings: Settings, action: str,
) -> User:
    """Resolve the current user and insist they are the configured administrator."""
    return require_admin(resolve_current_user(state, now), settings.admin_email, action)
