"""Session Manager — issue, resolve, and expire login sessions.

Invariants:
    - expires_at = created_at + ttl, ttl > 0
    - A session is EXPIRED once now >= expires_at, even if still stored
    - resolve_current_user clears the pointer whenever it cannot return a user
      (no session, expired session, deleted or deactivated user)
    - logout clears the pointer only; the session row remains until cleanup
    - cleanup_expired never touches the pointer

Design Decisions:
    - Lazy expiry on read, no timers: the only time-based transition in the system
    - `now` is always passed in so the whole lifecycle is testable without a clock
"""

import logging
import uuid
from datetime import datetime, timedelta

from shipyard.core.app_state import AppState
from shipyard.core.credentials import find_user
from shipyard.core.domain_types import SessionId, SessionStatus, UserId
from shipyard.core.records import Session, User

logger = logging.getLogger(__name__)

SESSION_TTL = timedelta(days=7)


def create_session(
    state: AppState, user_id: UserId, now: datetime,
    ttl: timedelta = SESSION_TTL,
) -> Session:
    if ttl <= timedelta(0):
        raise ValueError("session ttl must be positive")
    session = Session(
        id=SessionId(uuid.uuid4().hex),
        user_id=user_id,
        created_at=now,
        expires_at=now + ttl,
    )
    state.sessions.append(session)
    state.current_session = session
    return session


def session_status(session: Session, now: datetime) -> SessionStatus:
    if now < session.created_at:
        return SessionStatus.CREATED
    if now < session.expires_at:
        return SessionStatus.ACTIVE
    return SessionStatus.EXPIRED


def resolve_current_user(state: AppState, now: datetime) -> User | None:
    """Return the logged-in user, self-healing a dead pointer."""
    session = state.current_session
    if session is None:
        return None
    user = find_user(state, session.user_id)
    if (
        user is None
        or not user.is_active
        or session_status(session, now) == SessionStatus.EXPIRED
    ):
        logger.info(
            "Clearing stale current session",
            extra={"user_id": session.user_id},
        )
        state.current_session = None
        return None
    return user


def logout(state: AppState) -> None:
    state.current_session = None


def cleanup_expired(state: AppState, now: datetime) -> int:
    """Drop expired sessions from the registry. Returns how many were removed."""
    alive = [
        s for s in state.sessions
        if session_status(s, now) != SessionStatus.EXPIRED
    ]
    removed = len(state.sessions) - len(alive)
    state.sessions = alive
    return removed
