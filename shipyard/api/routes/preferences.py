"""Preference Routes — favorites, wishlist, purchases and the two dashboards.

Invariants:
    - Every endpoint requires a logged-in user
    - Toggles answer with the new membership, not the old one
"""

from fastapi import APIRouter, Depends, status

from shipyard.api.dependencies import Clock, get_clock, get_state_store, require_user
from shipyard.core.catalog import get_listing
from shipyard.core.messaging import unread_count
from shipyard.core.preferences import (
    favorite_listings, own_listings, record_purchase, seller_stats,
    toggle_favorite, toggle_wishlist, wishlist_listings,
)
from shipyard.schemas.listings import ListingResponse
from shipyard.schemas.preferences import (
    BuyerDashboard, PurchaseRequest, PurchaseResponse, SellerDashboard,
    SellerStats, ToggleResponse,
)
from shipyard.services.state_store import StateStore

router = APIRouter(prefix="/api/v1/me", tags=["preferences"])


@router.post("/favorites/{listing_id}", response_model=ToggleResponse)
async def flip_favorite(
    listing_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    active = toggle_favorite(state, require_user(state, now), listing_id)
    await store.save(state)
    return ToggleResponse(listing_id=listing_id, active=active)


@router.post("/wishlist/{listing_id}", response_model=ToggleResponse)
async def flip_wishlist(
    listing_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    active = toggle_wishlist(state, require_user(state, now), listing_id)
    await store.save(state)
    return ToggleResponse(listing_id=listing_id, active=active)


@router.post(
    "/purchases", response_model=PurchaseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def buy_listing(
    body: PurchaseRequest,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    user = require_user(state, now)
    purchase = record_purchase(state, user, get_listing(state, body.listing_id), now)
    await store.save(state)
    return PurchaseResponse.from_purchase(purchase)


@router.get("/buyer", response_model=BuyerDashboard)
async def buyer_dashboard(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    require_user(state, now)
    return BuyerDashboard(
        favorites=[
            ListingResponse.from_listing(lst, state.favorites, state.wishlist)
            for lst in favorite_listings(state)
        ],
        wishlist=[
            ListingResponse.from_listing(lst, state.favorites, state.wishlist)
            for lst in wishlist_listings(state)
        ],
        purchases=[PurchaseResponse.from_purchase(p) for p in state.purchases],
    )


@router.get("/seller", response_model=SellerDashboard)
async def seller_dashboard(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    user = require_user(state, now)
    return SellerDashboard(
        listings=[
            ListingResponse.from_listing(lst, state.favorites, state.wishlist)
            for lst in own_listings(state.listings, user)
        ],
        stats=SellerStats(**seller_stats(state.listings, user)),
        unread_messages=unread_count(state.messages, user),
    )
