"""Admin Aggregator — overview counts and guarded deletions.

Invariants:
    - Overview never raises on empty state
    - Non-admin callers are rejected before any mutation
"""

import pytest

from shipyard.core.admin import (
    admin_delete_listing, admin_delete_message, admin_delete_user,
    admin_set_user_active, compute_admin_overview, is_admin,
)
from shipyard.core.app_state import AppState
from shipyard.core.credentials import register
from shipyard.core.errors import PermissionDeniedError
from shipyard.core.messaging import send_message

from tests.core.sample_data import NOW, STRONG_PASSWORD

ADMIN_EMAIL = "admin@shipyard.test"


@pytest.fixture
def admin(state):
    return register(state, "Harbor Master", "harbor#0001", "Admin@Shipyard.test", STRONG_PASSWORD, NOW)


def test_overview_on_empty_state():
    assert compute_admin_overview(AppState()) == {
        "total_users": 0, "total_listings": 0, "total_messages": 0,
        "active_listings": 0, "unread_messages": 0, "active_users": 0,
    }


def test_overview_counts(state, seller, buyer, listing):
    send_message(state, listing, buyer, "hello", NOW)
    overview = compute_admin_overview(state)
    assert overview["total_users"] == 2
    assert overview["total_listings"] == overview["active_listings"] == 1
    assert overview["total_messages"] == overview["unread_messages"] == 1


def test_is_admin_is_case_insensitive(admin, seller):
    assert is_admin(admin, ADMIN_EMAIL)
    assert not is_admin(seller, ADMIN_EMAIL)
    assert not is_admin(None, ADMIN_EMAIL)
    assert not is_admin(admin, "")


def test_non_admin_cannot_delete(state, seller, listing):
    with pytest.raises(PermissionDeniedError):
        admin_delete_listing(state, seller, ADMIN_EMAIL, listing.id)
    assert state.listings == [listing]


def test_admin_delete_listing_returns_overview(state, admin, listing):
    overview = admin_delete_listing(state, admin, ADMIN_EMAIL, listing.id)
    assert overview["total_listings"] == 0
    assert admin_delete_listing(state, admin, ADMIN_EMAIL, listing.id)["total_listings"] == 0


def test_admin_delete_user_and_message(state, admin, buyer, listing):
    message = send_message(state, listing, buyer, "hello", NOW)
    assert admin_delete_message(state, admin, ADMIN_EMAIL, message.id)["total_messages"] == 0
    assert admin_delete_user(state, admin, ADMIN_EMAIL, buyer.id)["total_users"] == 2


def test_admin_deactivate_user(state, admin, buyer):
    overview = admin_set_user_active(state, admin, ADMIN_EMAIL, buyer.id, False)
    assert buyer.is_active is False
    assert overview["active_users"] == overview["total_users"] - 1


def test_anonymous_cannot_change_status(state, buyer):
    with pytest.raises(PermissionDeniedError):
        admin_set_user_active(state, None, ADMIN_EMAIL, buyer.id, False)
    assert buyer.is_active
