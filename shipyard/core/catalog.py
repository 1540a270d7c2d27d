"""Catalog — listing collection, tag normalization, tag index, custom search tags.

Invariants:
    - listings are most-recent-first (add_listing inserts at index 0)
    - Every stored tag is non-empty and carries exactly one leading "@"
    - Seller name/handle are copied by value at creation; seller_id is kept for ownership
    - remove_listing is idempotent and also drops the id from profile indexes
    - tag_index is derived, never stored

Design Decisions:
    - Listing is frozen: once created only the derived tag index changes around it
    - Custom search tags are normalized like listing tags so they can ever match
"""

import uuid
from datetime import datetime

from shipyard.core.app_state import AppState
from shipyard.core.domain_types import (
    DEFAULT_DESCRIPTION, TAG_MARKER, ListingId, Price, Tag,
)
from shipyard.core.errors import ResourceNotFoundError
from shipyard.core.records import Listing, ListingDraft, TagAffordance, User


def normalize_tag(raw: str) -> Tag | None:
    """Return "@tag" for a raw token, or None when nothing is left."""
    body = (raw or "").strip().lstrip(TAG_MARKER).strip()
    if not body:
        return None
    return Tag(f"{TAG_MARKER}{body}")


def normalize_tags(raw: str | list[str]) -> tuple[Tag, ...]:
    """Split, trim, mark and de-duplicate tags, keeping first-seen order."""
    tokens = raw.split() if isinstance(raw, str) else [
        part for item in raw for part in (item or "").split()
    ]
    seen: dict[Tag, None] = {}
    for token in tokens:
        tag = normalize_tag(token)
        if tag is not None:
            seen.setdefault(tag, None)
    return tuple(seen)


def add_listing(
    state: AppState, draft: ListingDraft, owner: User, now: datetime,
) -> Listing:
    if draft.price < 0:
        raise ValueError("price must be non-negative")
    listing = Listing(
        id=ListingId(uuid.uuid4().hex),
        name=draft.name.strip(),
        price=Price(draft.price),
        description=draft.description.strip() or DEFAULT_DESCRIPTION,
        category=draft.category,
        tags=normalize_tags(draft.tags),
        image=draft.image,
        seller_id=owner.id,
        seller_name=owner.name,
        seller_handle=owner.handle,
        created_at=now,
        blueprint_file=draft.blueprint_file or None,
        blueprint_image=draft.blueprint_image,
        payment_method=draft.payment_method,
    )
    state.listings.insert(0, listing)
    state.own_listings.insert(0, listing.id)
    return listing


def get_listing(state: AppState, listing_id: str) -> Listing:
    for listing in state.listings:
        if listing.id == listing_id:
            return listing
    raise ResourceNotFoundError("Listing", listing_id)


def remove_listing(state: AppState, listing_id: str) -> bool:
    before = len(state.listings)
    state.listings = [lst for lst in state.listings if lst.id != listing_id]
    state.favorites = [i for i in state.favorites if i != listing_id]
    state.wishlist = [i for i in state.wishlist if i != listing_id]
    state.own_listings = [i for i in state.own_listings if i != listing_id]
    return len(state.listings) != before


def tag_index(listings: list[Listing]) -> set[str]:
    return {tag for listing in listings for tag in listing.tags}


def add_custom_search_tag(state: AppState, raw: str) -> str | None:
    """Add a user-curated search tag. Returns the tag, or None if ignored."""
    tag = normalize_tag(raw)
    if tag is None or tag in state.custom_search_tags:
        return None
    state.custom_search_tags.add(tag)
    return tag


def tag_affordances(
    listings: list[Listing], custom_tags: set[str],
) -> list[TagAffordance]:
    """Tag buttons for the filter bar: index tags first, then unused custom tags."""
    index = tag_index(listings)
    buttons = [TagAffordance(tag) for tag in sorted(index)]
    buttons.extend(
        TagAffordance(tag, custom=True)
        for tag in sorted(custom_tags) if tag not in index
    )
    return buttons


def is_listed_by(listing: Listing, user: User) -> bool:
    if listing.seller_id is not None:
        return listing.seller_id == user.id
    return listing.seller_name == user.name
