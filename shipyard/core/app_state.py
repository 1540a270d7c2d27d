"""App State — the single in-memory state of one marketplace profile.

Invariants:
    - listings and messages are most-recent-first
    - current_session, when set, is one of the rows in sessions (or was, before cleanup)
    - favorites / wishlist / own_listings hold listing ids, never Listing objects
    - custom_search_tags holds normalized tags only

Design Decisions:
    - Explicit dataclass owned by the request (load -> mutate -> save), passed to every
      core function: no module-level collections (ADR: no ambient globals)
    - Pure dataclass, no IO: the shell persists it through state_snapshot
"""

from dataclasses import dataclass, field

from shipyard.core.records import User, Session, Listing, Message, Purchase
from shipyard.core.domain_types import ListingId


@dataclass
class AppState:
    """Everything one profile persists — pure dataclass, no IO."""

    # Account system
    users: list[User] = field(default_factory=list)
    sessions: list[Session] = field(default_factory=list)
    current_session: Session | None = None

    # Catalog
    listings: list[Listing] = field(default_factory=list)
    custom_search_tags: set[str] = field(default_factory=set)

    # Profile preferences
    favorites: list[ListingId] = field(default_factory=list)
    wishlist: list[ListingId] = field(default_factory=list)
    purchases: list[Purchase] = field(default_factory=list)
    own_listings: list[ListingId] = field(default_factory=list)

    # Messaging ledger
    messages: list[Message] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.users or self.listings or self.messages)
