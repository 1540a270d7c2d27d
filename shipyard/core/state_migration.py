"""State Migration — upgrade stored documents to the current schema, once, at load time.

Invariants:
    - upgrade_documents returns schema-v2 documents or raises StorageSchemaError
    - An empty store is already current (nothing to upgrade)
    - A store without schema_version but with legacy keys is schema v1
    - Plaintext passwords never survive an upgrade
    - Versions newer than SCHEMA_VERSION are rejected, never guessed at

Design Decisions:
    - One function per version step (_upgrade_v1_to_v2), chained by _UPGRADES:
      adding v3 means adding one step, not editing the loader
    - Legacy rows keyed seller/buyer by display name; ids are resolved by name at
      upgrade time and left None when no user matches
"""

import logging
import uuid
from datetime import datetime, timedelta

from shipyard.core.credentials import hash_password, new_salt
from shipyard.core.catalog import normalize_tags
from shipyard.core.domain_types import DEFAULT_DESCRIPTION, PaymentMethod
from shipyard.core.errors import StorageSchemaError
from shipyard.core.state_snapshot import (
    SCHEMA_VERSION, KEY_SCHEMA_VERSION, KEY_USERS, KEY_SESSIONS,
    KEY_CURRENT_SESSION, KEY_LISTINGS, KEY_FAVORITES, KEY_WISHLIST,
    KEY_PURCHASES, KEY_OWN_LISTINGS, KEY_CUSTOM_SEARCH_TAGS, KEY_MESSAGES,
    dump_datetime, parse_datetime,
)

logger = logging.getLogger(__name__)

# Storage keys written by schema v1
LEGACY_KEYS: tuple[str, ...] = (
    "registeredUsers", "currentUser", "ships", "userFavorites",
    "userWishlist", "userPurchases", "userListings", "customSearchTags",
)


def detect_version(documents: dict) -> int:
    if KEY_SCHEMA_VERSION in documents:
        version = documents[KEY_SCHEMA_VERSION]
        if not isinstance(version, int):
            raise StorageSchemaError(
                f"schema_version must be an integer, got {version!r}",
                key=KEY_SCHEMA_VERSION,
            )
        return version
    if any(key in documents for key in LEGACY_KEYS):
        return 1
    if _has_legacy_messages(documents.get(KEY_MESSAGES)):
        return 1
    return SCHEMA_VERSION


def _has_legacy_messages(messages) -> bool:
    # v1 shares the "messages" key with v2; its rows reference listings by shipId
    return isinstance(messages, list) and any(
        isinstance(row, dict) and "shipId" in row for row in messages
    )


def _legacy_id(value) -> str:
    return str(value) if value is not None else uuid.uuid4().hex


def _legacy_time(value, fallback: datetime) -> str:
    if not value:
        return dump_datetime(fallback)
    return dump_datetime(parse_datetime(str(value)))


def _user_ids_by_name(users: list[dict]) -> dict[str, str]:
    ids: dict[str, str] = {}
    for user in users:
        ids.setdefault(user["name"], user["id"])
    return ids


def _upgrade_users(legacy: list[dict], now: datetime) -> list[dict]:
    users = []
    for row in legacy:
        salt = new_salt()
        users.append({
            "id": _legacy_id(row.get("id")),
            "name": row["name"],
            "handle": row.get("discord", ""),
            "email": row["email"],
            "password_hash": hash_password(row.get("password", ""), salt),
            "password_salt": salt,
            "joined_at": _legacy_time(row.get("joinDate"), now),
            "last_login_at": None,
            "login_count": 0,
            "is_active": True,
        })
    return users


def _upgrade_listings(legacy: list[dict], ids_by_name: dict[str, str], now: datetime) -> list[dict]:
    listings = []
    for row in legacy:
        payment = row.get("paymentMethod") or PaymentMethod.IN_PERSON.value
        if payment not in {m.value for m in PaymentMethod}:
            payment = PaymentMethod.BANK_TRANSFER.value
        listings.append({
            "id": _legacy_id(row.get("id")),
            "name": row["name"],
            "price": max(int(row.get("price") or 0), 0),
            "description": row.get("description") or DEFAULT_DESCRIPTION,
            "category": row.get("category", ""),
            "tags": list(normalize_tags(row.get("tags") or [])),
            "image": row.get("image") or "",
            "seller_id": ids_by_name.get(row.get("seller", "")),
            "seller_name": row.get("seller", ""),
            "seller_handle": row.get("discord", ""),
            "created_at": _legacy_time(row.get("dateAdded"), now),
            "blueprint_file": row.get("blueprintFile") or None,
            "blueprint_image": row.get("blueprintImage"),
            "payment_method": payment,
        })
    return listings


def _upgrade_messages(legacy: list[dict], ids_by_name: dict[str, str], now: datetime) -> list[dict]:
    messages = []
    for row in legacy:
        messages.append({
            "id": _legacy_id(row.get("id")),
            "listing_id": _legacy_id(row.get("shipId")),
            "listing_name": row.get("shipName", ""),
            "buyer_id": ids_by_name.get(row.get("buyerName", "")),
            "buyer_name": row.get("buyerName", ""),
            "buyer_handle": row.get("buyerDiscord", ""),
            "seller_id": ids_by_name.get(row.get("sellerName", "")),
            "seller_name": row.get("sellerName", ""),
            "seller_handle": row.get("sellerDiscord", ""),
            "body": row.get("message", ""),
            "sent_at": _legacy_time(row.get("timestamp"), now),
            "read": bool(row.get("read", False)),
        })
    return messages


def _upgrade_purchases(legacy: list[dict], now: datetime) -> list[dict]:
    return [
        {
            "listing_name": row.get("shipName", ""),
            "price": int(row.get("price") or 0),
            "date": _legacy_time(row.get("date"), now),
        }
        for row in legacy
    ]


def _upgrade_current_user(
    legacy: dict | None, users: list[dict], now: datetime, ttl: timedelta,
) -> dict | None:
    """The v1 pointer was a copy of the user; v2 points at a session instead."""
    if not legacy:
        return None
    user_id = _legacy_id(legacy.get("id"))
    if not any(u["id"] == user_id for u in users):
        return None
    return {
        "id": uuid.uuid4().hex,
        "user_id": user_id,
        "created_at": dump_datetime(now),
        "expires_at": dump_datetime(now + ttl),
    }


def _upgrade_v1_to_v2(documents: dict, now: datetime, ttl: timedelta) -> dict:
    users = _upgrade_users(documents.get("registeredUsers") or [], now)
    ids_by_name = _user_ids_by_name(users)
    current = _upgrade_current_user(documents.get("currentUser"), users, now, ttl)
    return {
        KEY_SCHEMA_VERSION: 2,
        KEY_USERS: users,
        KEY_SESSIONS: [current] if current else [],
        KEY_CURRENT_SESSION: current,
        KEY_LISTINGS: _upgrade_listings(documents.get("ships") or [], ids_by_name, now),
        KEY_FAVORITES: [str(i) for i in documents.get("userFavorites") or []],
        KEY_WISHLIST: [str(i) for i in documents.get("userWishlist") or []],
        KEY_PURCHASES: _upgrade_purchases(documents.get("userPurchases") or [], now),
        KEY_OWN_LISTINGS: [str(i) for i in documents.get("userListings") or []],
        KEY_CUSTOM_SEARCH_TAGS: sorted(
            set(normalize_tags(documents.get("customSearchTags") or [])),
        ),
        KEY_MESSAGES: _upgrade_messages(documents.get(KEY_MESSAGES) or [], ids_by_name, now),
    }


_UPGRADES = {
    1: _upgrade_v1_to_v2,
}


def upgrade_documents(
    documents: dict, now: datetime, ttl: timedelta,
) -> tuple[dict, int]:
    """Upgrade stored documents to SCHEMA_VERSION. Returns (documents, original version)."""
    original = detect_version(documents)
    if original > SCHEMA_VERSION:
        raise StorageSchemaError(
            f"Stored schema version {original} is newer than supported {SCHEMA_VERSION}",
            key=KEY_SCHEMA_VERSION,
        )
    version = original
    while version < SCHEMA_VERSION:
        step = _UPGRADES.get(version)
        if step is None:
            raise StorageSchemaError(
                f"No upgrade path from schema version {version}",
                key=KEY_SCHEMA_VERSION,
            )
        try:
            documents = step(documents, now, ttl)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StorageSchemaError(f"Cannot upgrade schema v{version}: {e}")
        logger.info(
            f"Upgraded stored state from schema v{version}",
            extra={"schema_version": version + 1},
        )
        version += 1
    return documents, original
