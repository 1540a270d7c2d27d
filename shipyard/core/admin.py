"""Admin Aggregator — read-only rollups plus administrator deletions.

Invariants:
    - compute_admin_overview is pure and never raises on empty state
    - active_listings == total_listings (no deactivation state exists for listings)
    - Every admin_delete_* returns the re-aggregated overview
    - Non-admin callers get PermissionDeniedError before any mutation

Design Decisions:
    - Pure function, not a method on AppState (ADR: AppState is data, stats are presentation)
    - Admin identity is an email comparison against configuration, case-insensitive
"""

from shipyard.core.app_state import AppState
from shipyard.core.catalog import remove_listing
from shipyard.core.credentials import delete_user, set_user_active
from shipyard.core.errors import PermissionDeniedError
from shipyard.core.messaging import delete_message
from shipyard.core.records import User


def is_admin(user: User | None, admin_email: str) -> bool:
    if user is None or not admin_email:
        return False
    return user.email.lower() == admin_email.strip().lower()


def require_admin(user: User | None, admin_email: str, action: str) -> User:
    if not is_admin(user, admin_email):
        raise PermissionDeniedError(action)
    return user


def compute_admin_overview(state: AppState) -> dict:
    """Compute operator counts from AppState. Pure, no IO."""
    return {
        "total_users": len(state.users),
        "total_listings": len(state.listings),
        "total_messages": len(state.messages),
        "active_listings": len(state.listings),
        "unread_messages": sum(1 for m in state.messages if not m.read),
        "active_users": sum(1 for u in state.users if u.is_active),
    }


def admin_delete_user(state: AppState, actor: User | None, admin_email: str, user_id: str) -> dict:
    require_admin(actor, admin_email, "delete users")
    delete_user(state, user_id)
    return compute_admin_overview(state)


def admin_delete_listing(
    state: AppState, actor: User | None, admin_email: str, listing_id: str,
) -> dict:
    require_admin(actor, admin_email, "delete listings")
    remove_listing(state, listing_id)
    return compute_admin_overview(state)


def admin_delete_message(
    state: AppState, actor: User | None, admin_email: str, message_id: str,
) -> dict:
    require_admin(actor, admin_email, "delete messages")
    delete_message(state, message_id)
    return compute_admin_overview(state)


def admin_set_user_active(
    state: AppState, actor: User | None, admin_email: str, user_id: str, active: bool,
) -> dict:
    require_admin(actor, admin_email, "change account status")
    set_user_active(state, user_id, active)
    return compute_admin_overview(state)
