"""Preference Schemas — toggles, purchase history, seller dashboard."""

from datetime import datetime

from pydantic import BaseModel

from shipyard.core.records import Purchase
from shipyard.schemas.listings import ListingResponse


class ToggleResponse(BaseModel):
    listing_id: str
    active: bool


class PurchaseRequest(BaseModel):
    listing_id: str


class PurchaseResponse(BaseModel):
    listing_name: str
    price: int
    date: datetime

    @classmethod
    def from_purchase(cls, purchase: Purchase) -> "PurchaseResponse":
        return cls(
            listing_name=purchase.listing_name,
            price=purchase.price,
            date=purchase.date,
        )


class SellerStats(BaseModel):
    total_listings: int
    total_sales: int
    total_revenue: int


class BuyerDashboard(BaseModel):
    favorites: list[ListingResponse]
    wishlist: list[ListingResponse]
    purchases: list[PurchaseResponse]


class SellerDashboard(BaseModel):
    listings: list[ListingResponse]
    stats: SellerStats
    unread_messages: int
