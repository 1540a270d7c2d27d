"""State Snapshot — serialization / deserialization between AppState and stored documents.

Invariants:
    - to_documents produces one JSON-safe value per storage key (no sets, no Enums, no datetimes)
    - from_documents reconstructs an AppState from schema-v2 documents only
    - Missing keys fall back to empty collections; malformed records raise StorageSchemaError
    - Datetimes are ISO-8601 strings, always timezone-aware after parsing (naive = UTC)

Design Decisions:
    - One serializer pair per record type, reused by account_export
    - Explicit field lists over dataclasses.asdict: the stored shape is a contract, not
      an accident of the dataclass layout
"""

from datetime import datetime, timezone

from shipyard.core.app_state import AppState
from shipyard.core.domain_types import PaymentMethod
from shipyard.core.errors import StorageSchemaError
from shipyard.core.records import User, Session, Listing, Message, Purchase

SCHEMA_VERSION = 2

KEY_SCHEMA_VERSION = "schema_version"
KEY_USERS = "users"
KEY_SESSIONS = "sessions"
KEY_CURRENT_SESSION = "current_session"
KEY_LISTINGS = "listings"
KEY_FAVORITES = "favorites"
KEY_WISHLIST = "wishlist"
KEY_PURCHASES = "purchases"
KEY_OWN_LISTINGS = "own_listings"
KEY_CUSTOM_SEARCH_TAGS = "custom_search_tags"
KEY_MESSAGES = "messages"

STATE_KEYS: tuple[str, ...] = (
    KEY_SCHEMA_VERSION, KEY_USERS, KEY_SESSIONS, KEY_CURRENT_SESSION,
    KEY_LISTINGS, KEY_FAVORITES, KEY_WISHLIST, KEY_PURCHASES,
    KEY_OWN_LISTINGS, KEY_CUSTOM_SEARCH_TAGS, KEY_MESSAGES,
)


# ─── Scalars ─────────────────────────────────────────────────────

def dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def parse_datetime(value: str | None) -> datetime | None:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ─── Records ─────────────────────────────────────────────────────

def user_to_doc(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "handle": user.handle,
        "email": user.email,
        "password_hash": user.password_hash,
        "password_salt": user.password_salt,
        "joined_at": dump_datetime(user.joined_at),
        "last_login_at": dump_datetime(user.last_login_at),
        "login_count": user.login_count,
        "is_active": user.is_active,
    }


def user_from_doc(doc: dict) -> User:
    return User(
        id=doc["id"],
        name=doc["name"],
        handle=doc["handle"],
        email=doc["email"],
        password_hash=doc["password_hash"],
        password_salt=doc["password_salt"],
        joined_at=parse_datetime(doc["joined_at"]),
        last_login_at=parse_datetime(doc.get("last_login_at")),
        login_count=int(doc.get("login_count", 0)),
        is_active=bool(doc.get("is_active", True)),
    )


def session_to_doc(session: Session) -> dict:
    return {
        "id": session.id,
        "user_id": session.user_id,
        "created_at": dump_datetime(session.created_at),
        "expires_at": dump_datetime(session.expires_at),
    }


def session_from_doc(doc: dict) -> Session:
    session = Session(
        id=doc["id"],
        user_id=doc["user_id"],
        created_at=parse_datetime(doc["created_at"]),
        expires_at=parse_datetime(doc["expires_at"]),
    )
    if session.expires_at <= session.created_at:
        raise ValueError(f"session {session.id} expires before it was created")
    return session


def listing_to_doc(listing: Listing) -> dict:
    return {
        "id": listing.id,
        "name": listing.name,
        "price": listing.price,
        "description": listing.description,
        "category": listing.category,
        "tags": list(listing.tags),
        "image": listing.image,
        "seller_id": listing.seller_id,
        "seller_name": listing.seller_name,
        "seller_handle": listing.seller_handle,
        "created_at": dump_datetime(listing.created_at),
        "blueprint_file": listing.blueprint_file,
        "blueprint_image": listing.blueprint_image,
        "payment_method": listing.payment_method.value,
    }


def listing_from_doc(doc: dict) -> Listing:
    price = int(doc["price"])
    if price < 0:
        raise ValueError(f"listing {doc['id']} has a negative price")
    return Listing(
        id=doc["id"],
        name=doc["name"],
        price=price,
        description=doc["description"],
        category=doc["category"],
        tags=tuple(doc["tags"]),
        image=doc.get("image", ""),
        seller_id=doc.get("seller_id"),
        seller_name=doc["seller_name"],
        seller_handle=doc["seller_handle"],
        created_at=parse_datetime(doc["created_at"]),
        blueprint_file=doc.get("blueprint_file"),
        blueprint_image=doc.get("blueprint_image"),
        payment_method=PaymentMethod(doc.get("payment_method", PaymentMethod.IN_PERSON.value)),
    )


def message_to_doc(message: Message) -> dict:
    return {
        "id": message.id,
        "listing_id": message.listing_id,
        "listing_name": message.listing_name,
        "buyer_id": message.buyer_id,
        "buyer_name": message.buyer_name,
        "buyer_handle": message.buyer_handle,
        "seller_id": message.seller_id,
        "seller_name": message.seller_name,
        "seller_handle": message.seller_handle,
        "body": message.body,
        "sent_at": dump_datetime(message.sent_at),
        "read": message.read,
    }


def message_from_doc(doc: dict) -> Message:
    return Message(
        id=doc["id"],
        listing_id=doc["listing_id"],
        listing_name=doc["listing_name"],
        buyer_id=doc.get("buyer_id"),
        buyer_name=doc["buyer_name"],
        buyer_handle=doc["buyer_handle"],
        seller_id=doc.get("seller_id"),
        seller_name=doc["seller_name"],
        seller_handle=doc["seller_handle"],
        body=doc["body"],
        sent_at=parse_datetime(doc["sent_at"]),
        read=bool(doc.get("read", False)),
    )


def purchase_to_doc(purchase: Purchase) -> dict:
    return {
        "listing_name": purchase.listing_name,
        "price": purchase.price,
        "date": dump_datetime(purchase.date),
    }


def purchase_from_doc(doc: dict) -> Purchase:
    return Purchase(
        listing_name=doc["listing_name"],
        price=int(doc["price"]),
        date=parse_datetime(doc["date"]),
    )


# ─── Whole state ─────────────────────────────────────────────────

def state_to_documents(state: AppState) -> dict:
    """Serialize AppState to one JSON-safe value per storage key. Pure, no IO."""
    current = state.current_session
    return {
        KEY_SCHEMA_VERSION: SCHEMA_VERSION,
        KEY_USERS: [user_to_doc(u) for u in state.users],
        KEY_SESSIONS: [session_to_doc(s) for s in state.sessions],
        KEY_CURRENT_SESSION: session_to_doc(current) if current else None,
        KEY_LISTINGS: [listing_to_doc(lst) for lst in state.listings],
        KEY_FAVORITES: list(state.favorites),
        KEY_WISHLIST: list(state.wishlist),
        KEY_PURCHASES: [purchase_to_doc(p) for p in state.purchases],
        KEY_OWN_LISTINGS: list(state.own_listings),
        KEY_CUSTOM_SEARCH_TAGS: sorted(state.custom_search_tags),
        KEY_MESSAGES: [message_to_doc(m) for m in state.messages],
    }


def _load_list(documents: dict, key: str, parse) -> list:
    raw = documents.get(key) or []
    if not isinstance(raw, list):
        raise StorageSchemaError(f"'{key}' must be a list", key=key)
    try:
        return [parse(item) for item in raw]
    except (KeyError, TypeError, ValueError) as e:
        raise StorageSchemaError(f"Malformed record in '{key}': {e}", key=key)


def state_from_documents(documents: dict) -> AppState:
    """Reconstruct AppState from schema-v2 documents. Pure, no IO."""
    version = documents.get(KEY_SCHEMA_VERSION, SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise StorageSchemaError(
            f"Expected schema version {SCHEMA_VERSION}, found {version}",
            key=KEY_SCHEMA_VERSION,
        )

    current = None
    current_doc = documents.get(KEY_CURRENT_SESSION)
    if current_doc:
        try:
            current = session_from_doc(current_doc)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageSchemaError(
                f"Malformed current session: {e}", key=KEY_CURRENT_SESSION,
            )

    return AppState(
        users=_load_list(documents, KEY_USERS, user_from_doc),
        sessions=_load_list(documents, KEY_SESSIONS, session_from_doc),
        current_session=current,
        listings=_load_list(documents, KEY_LISTINGS, listing_from_doc),
        custom_search_tags=set(_load_list(documents, KEY_CUSTOM_SEARCH_TAGS, str)),
        favorites=_load_list(documents, KEY_FAVORITES, str),
        wishlist=_load_list(documents, KEY_WISHLIST, str),
        purchases=_load_list(documents, KEY_PURCHASES, purchase_from_doc),
        own_listings=_load_list(documents, KEY_OWN_LISTINGS, str),
        messages=_load_list(documents, KEY_MESSAGES, message_from_doc),
    )
