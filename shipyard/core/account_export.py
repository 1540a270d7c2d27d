"""Account Export — portable JSON document of one user's profile and preferences.

Invariants:
    - The profile never includes password_hash or password_salt
    - messages are those where the user is buyer or seller, in ledger order
    - parse_account_export(export_account(...)) recovers identical preferences and messages

Design Decisions:
    - Versioned document (format_version) independent of the storage schema version:
      exports leave the system, storage does not
"""

from dataclasses import dataclass
from datetime import datetime

from shipyard.core.app_state import AppState
from shipyard.core.errors import ExportFormatError
from shipyard.core.messaging import conversations_for
from shipyard.core.records import Message, Purchase, User
from shipyard.core.state_snapshot import (
    dump_datetime, parse_datetime, message_to_doc, message_from_doc,
    purchase_to_doc, purchase_from_doc,
)

EXPORT_FORMAT_VERSION = 1


@dataclass
class AccountExport:
    format_version: int
    exported_at: datetime
    profile: dict
    favorites: list[str]
    wishlist: list[str]
    purchases: list[Purchase]
    own_listings: list[str]
    custom_search_tags: set[str]
    messages: list[Message]


def _profile(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "handle": user.handle,
        "email": user.email,
        "joined_at": dump_datetime(user.joined_at),
        "last_login_at": dump_datetime(user.last_login_at),
        "login_count": user.login_count,
        "is_active": user.is_active,
    }


def export_account(state: AppState, user: User, now: datetime) -> dict:
    """Build the export document for `user`. Pure, no IO."""
    return {
        "format_version": EXPORT_FORMAT_VERSION,
        "exported_at": dump_datetime(now),
        "profile": _profile(user),
        "preferences": {
            "favorites": list(state.favorites),
            "wishlist": list(state.wishlist),
            "purchases": [purchase_to_doc(p) for p in state.purchases],
            "own_listings": list(state.own_listings),
            "custom_search_tags": sorted(state.custom_search_tags),
        },
        "messages": [
            message_to_doc(m) for m in conversations_for(state.messages, user)
        ],
    }


def parse_account_export(document: dict) -> AccountExport:
    if not isinstance(document, dict):
        raise ExportFormatError("Export must be a JSON object")
    version = document.get("format_version")
    if version != EXPORT_FORMAT_VERSION:
        raise ExportFormatError(f"Unsupported export format version: {version!r}")
    try:
        prefs = document["preferences"]
        return AccountExport(
            format_version=version,
            exported_at=parse_datetime(document["exported_at"]),
            profile=dict(document["profile"]),
            favorites=list(prefs["favorites"]),
            wishlist=list(prefs["wishlist"]),
            purchases=[purchase_from_doc(p) for p in prefs["purchases"]],
            own_listings=list(prefs["own_listings"]),
            custom_search_tags=set(prefs["custom_search_tags"]),
            messages=[message_from_doc(m) for m in document["messages"]],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ExportFormatError(f"Malformed export document: {e}")
