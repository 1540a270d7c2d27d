"""Session Manager — creation, lazy status, current-user resolution, cleanup.

Invariants:
    - Status is CREATED before created_at, ACTIVE until expires_at, then EXPIRED
    - resolve_current_user clears a dead pointer instead of raising
    - logout keeps the session row
"""

from datetime import timedelta

import pytest

from shipyard.core.credentials import delete_user, set_user_active
from shipyard.core.domain_types import SessionStatus
from shipyard.core.sessions import (
    SESSION_TTL, cleanup_expired, create_session, logout,
    resolve_current_user, session_status,
)

from tests.core.sample_data import NOW


def test_create_session_sets_current(state, seller):
    session = create_session(state, seller.id, NOW)
    assert state.sessions == [session]
    assert state.current_session is session
    assert session.expires_at - session.created_at == SESSION_TTL


def test_create_session_rejects_non_positive_ttl(state, seller):
    with pytest.raises(ValueError):
        create_session(state, seller.id, NOW, timedelta(0))


def test_session_status_transitions(state, seller):
    session = create_session(state, seller.id, NOW)
    assert session_status(session, NOW - timedelta(seconds=1)) == SessionStatus.CREATED
    assert session_status(session, NOW) == SessionStatus.ACTIVE
    assert session_status(session, session.expires_at - timedelta(seconds=1)) == SessionStatus.ACTIVE
    assert session_status(session, session.expires_at) == SessionStatus.EXPIRED


def test_resolve_current_user(state, seller):
    create_session(state, seller.id, NOW)
    assert resolve_current_user(state, NOW + timedelta(days=1)) is seller


def test_resolve_clears_expired_pointer(state, seller):
    create_session(state, seller.id, NOW)
    assert resolve_current_user(state, NOW + SESSION_TTL) is None
    assert state.current_session is None


def test_resolve_clears_pointer_to_deleted_user(state, seller):
    create_session(state, seller.id, NOW)
    delete_user(state, seller.id)
    assert resolve_current_user(state, NOW) is None
    assert state.current_session is None


def test_resolve_clears_pointer_to_deactivated_user(state, seller):
    create_session(state, seller.id, NOW)
    set_user_active(state, seller.id, False)
    assert resolve_current_user(state, NOW) is None
    assert state.current_session is None


def test_resolve_without_session(state):
    assert resolve_current_user(state, NOW) is None


def test_logout_keeps_session_row(state, seller):
    session = create_session(state, seller.id, NOW)
    logout(state)
    assert state.current_session is None
    assert state.sessions == [session]


def test_cleanup_removes_only_expired(state, seller, buyer):
    old = create_session(state, seller.id, NOW - SESSION_TTL - timedelta(hours=1))
    fresh = create_session(state, buyer.id, NOW)
    assert cleanup_expired(state, NOW) == 1
    assert state.sessions == [fresh]
    assert old not in state.sessions


def test_cleanup_never_touches_pointer(state, seller):
    create_session(state, seller.id, NOW - SESSION_TTL - timedelta(hours=1))
    current = state.current_session
    cleanup_expired(state, NOW)
    assert state.current_session is current
