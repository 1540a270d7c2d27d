"""Listing Schemas — public listing view, tag buttons, custom tag input.

Invariants:
    - ListingResponse never embeds file payloads; images are served by the
      /{id}/image and /{id}/blueprint-image routes
"""

from datetime import datetime

from pydantic import BaseModel, Field

from shipyard.core.domain_types import PaymentMethod
from shipyard.core.records import Listing, TagAffordance


class ListingResponse(BaseModel):
    id: str
    name: str
    price: int
    description: str
    category: str
    tags: list[str]
    has_image: bool
    seller_name: str
    seller_handle: str
    created_at: datetime
    blueprint_file: str | None
    has_blueprint_image: bool
    payment_method: PaymentMethod
    is_favorite: bool = False
    in_wishlist: bool = False

    @classmethod
    def from_listing(
        cls, listing: Listing, favorites: list[str] = (), wishlist: list[str] = (),
    ) -> "ListingResponse":
        return cls(
            id=listing.id,
            name=listing.name,
            price=listing.price,
            description=listing.description,
            category=listing.category,
            tags=list(listing.tags),
            has_image=bool(listing.image),
            seller_name=listing.seller_name,
            seller_handle=listing.seller_handle,
            created_at=listing.created_at,
            blueprint_file=listing.blueprint_file,
            has_blueprint_image=bool(listing.blueprint_image),
            payment_method=listing.payment_method,
            is_favorite=listing.id in favorites,
            in_wishlist=listing.id in wishlist,
        )


class ListingPage(BaseModel):
    count: int
    listings: list[ListingResponse]


class TagResponse(BaseModel):
    tag: str
    custom: bool

    @classmethod
    def from_affordance(cls, affordance: TagAffordance) -> "TagResponse":
        return cls(tag=affordance.tag, custom=affordance.custom)


class CustomTagRequest(BaseModel):
    tag: str = Field(min_length=1, max_length=64)
