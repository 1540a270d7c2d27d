"""Records — the persisted entities of the marketplace as plain dataclasses.

Invariants:
    - User never holds a plaintext password, only password_hash + password_salt
    - Session.expires_at > Session.created_at
    - Listing is frozen; seller_name/seller_handle are copies taken at creation time
    - Message.read is the only field mutated after creation

Design Decisions:
    - Dataclasses, not ORM rows: records live inside AppState and are persisted
      as JSON documents by state_snapshot (ADR: storage is a key-value mirror)
    - seller_id / buyer_id stored next to the display copies so ownership never
      depends on a mutable display name
"""

from dataclasses import dataclass
from datetime import datetime

from shipyard.core.domain_types import (
    UserId, SessionId, ListingId, MessageId, PaymentMethod, Price, Tag,
)


@dataclass
class User:
    id: UserId
    name: str
    handle: str
    email: str
    password_hash: str
    password_salt: str
    joined_at: datetime
    last_login_at: datetime | None = None
    login_count: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class Session:
    id: SessionId
    user_id: UserId
    created_at: datetime
    expires_at: datetime


@dataclass
class ListingDraft:
    """Form input for a new listing, files already encoded."""
    name: str
    price: int
    category: str
    description: str = ""
    tags: str | list[str] = ""
    image: str = ""
    blueprint_file: str | None = None
    blueprint_image: str | None = None
    payment_method: PaymentMethod = PaymentMethod.IN_PERSON


@dataclass(frozen=True)
class Listing:
    id: ListingId
    name: str
    price: Price
    description: str
    category: str
    tags: tuple[Tag, ...]
    image: str
    seller_id: UserId | None
    seller_name: str
    seller_handle: str
    created_at: datetime
    blueprint_file: str | None = None
    blueprint_image: str | None = None
    payment_method: PaymentMethod = PaymentMethod.IN_PERSON


@dataclass
class Message:
    id: MessageId
    listing_id: ListingId
    listing_name: str
    buyer_id: UserId | None
    buyer_name: str
    buyer_handle: str
    seller_id: UserId | None
    seller_name: str
    seller_handle: str
    body: str
    sent_at: datetime
    read: bool = False


@dataclass(frozen=True)
class Purchase:
    listing_name: str
    price: Price
    date: datetime


@dataclass(frozen=True)
class TagAffordance:
    """One tag button offered by the filter bar."""
    tag: str
    custom: bool = False
