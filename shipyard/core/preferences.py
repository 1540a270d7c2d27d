"""Preferences — favorites, wishlist, purchase history and seller stats for a profile."""

from datetime import datetime

from shipyard.core.app_state import AppState
from shipyard.core.catalog import get_listing, is_listed_by
from shipyard.core.errors import NoActiveUserError
from shipyard.core.records import Listing, Purchase, User


def _toggle(ids: list[str], listing_id: str) -> bool:
    if listing_id in ids:
        ids.remove(listing_id)
        return False
    ids.append(listing_id)
    return True


def toggle_favorite(state: AppState, user: User | None, listing_id: str) -> bool:
    """Flip favorite membership. Returns True when the listing is now a favorite."""
    if user is None:
        raise NoActiveUserError()
    get_listing(state, listing_id)
    return _toggle(state.favorites, listing_id)


def toggle_wishlist(state: AppState, user: User | None, listing_id: str) -> bool:
    if user is None:
        raise NoActiveUserError()
    get_listing(state, listing_id)
    return _toggle(state.wishlist, listing_id)


def record_purchase(
    state: AppState, user: User | None, listing: Listing, now: datetime,
) -> Purchase:
    if user is None:
        raise NoActiveUserError()
    purchase = Purchase(listing_name=listing.name, price=listing.price, date=now)
    state.purchases.append(purchase)
    return purchase


def favorite_listings(state: AppState) -> list[Listing]:
    return [lst for lst in state.listings if lst.id in state.favorites]


def wishlist_listings(state: AppState) -> list[Listing]:
    return [lst for lst in state.listings if lst.id in state.wishlist]


def own_listings(listings: list[Listing], user: User) -> list[Listing]:
    return [lst for lst in listings if is_listed_by(lst, user)]


def seller_stats(listings: list[Listing], user: User) -> dict:
    # No sale state exists yet; every listing counts as a sale, as the dashboard always showed.
    mine = own_listings(listings, user)
    return {
        "total_listings": len(mine),
        "total_sales": len(mine),
        "total_revenue": sum(lst.price for lst in mine),
    }
