"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, SessionId, ListingId, MessageId are opaque strings — never parse them
    - Price is a non-negative integer in the smallest currency unit
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (persisted documents are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
SessionId = NewType("SessionId", str)
ListingId = NewType("ListingId", str)
MessageId = NewType("MessageId", str)


# ─── Value Types ─────────────────────────────────────────────────

Price = NewType("Price", int)   # >= 0, smallest currency unit
Tag = NewType("Tag", str)       # normalized, always "@"-prefixed


TAG_MARKER = "@"
DEFAULT_DESCRIPTION = "No description provided."


# ─── Enums ───────────────────────────────────────────────────────

class SessionStatus(str, Enum):
    """Session lifecycle — transitions purely by time, detected lazily."""
    CREATED = "created"
    ACTIVE = "active"
    EXPIRED = "expired"


class Category(str, Enum):
    """Listing categories offered by the add-listing form."""
    COMBAT = "combat"
    STORAGE = "storage"
    TRANSPORT = "transport"
    MINING = "mining"
    UTILITY = "utility"
    OTHER = "other"


class PaymentMethod(str, Enum):
    """Description-only payment arrangement (no processing)."""
    IN_PERSON = "in-person"
    BANK_TRANSFER = "bank-transfer"


class PasswordStrength(str, Enum):
    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    FAIR = "Fair"
    GOOD = "Good"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"
