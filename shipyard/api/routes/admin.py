"""Admin Routes — operator overview, record listings and deletions.

Invariants:
    - Every endpoint checks the configured admin identity first (403 otherwise)
    - Deletes are idempotent and answer with the re-aggregated overview
    - User views never include password material
"""

import logging

from fastapi import APIRouter, Depends

from shipyard.api.dependencies import Clock, get_clock, get_state_store, require_admin_user
from shipyard.config import Settings, get_settings
from shipyard.core.admin import (
    admin_delete_listing, admin_delete_message, admin_delete_user,
    admin_set_user_active, compute_admin_overview,
)
from shipyard.core.sessions import resolve_current_user
from shipyard.schemas.admin import AdminOverview, AdminUserView, UserStatusRequest
from shipyard.schemas.listings import ListingResponse
from shipyard.schemas.messages import MessageResponse
from shipyard.services.state_store import StateStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/overview", response_model=AdminOverview)
async def overview(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    require_admin_user(state, now, settings, "view the admin overview")
    return AdminOverview(**compute_admin_overview(state))


@router.get("/users", response_model=list[AdminUserView])
async def list_users(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    require_admin_user(state, now, settings, "list users")
    return [AdminUserView.from_user(u) for u in state.users]


@router.get("/listings", response_model=list[ListingResponse])
async def list_listings(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    require_admin_user(state, now, settings, "list listings")
    return [ListingResponse.from_listing(lst) for lst in state.listings]


@router.get("/messages", response_model=list[MessageResponse])
async def list_messages(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    require_admin_user(state, now, settings, "list messages")
    return [MessageResponse.from_message(m) for m in state.messages]


@router.delete("/users/{user_id}", response_model=AdminOverview)
async def delete_user(
    user_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    actor = resolve_current_user(state, now)
    result = admin_delete_user(state, actor, settings.admin_email, user_id)
    await store.save(state)
    logger.info("User deleted by admin", extra={"user_id": user_id})
    return AdminOverview(**result)


@router.patch("/users/{user_id}", response_model=AdminOverview)
async def change_user_status(
    user_id: str,
    body: UserStatusRequest,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    actor = resolve_current_user(state, now)
    result = admin_set_user_active(
        state, actor, settings.admin_email, user_id, body.active,
    )
    await store.save(state)
    logger.info(
        f"User {'activated' if body.active else 'deactivated'} by admin",
        extra={"user_id": user_id},
    )
    return AdminOverview(**result)


@router.delete("/listings/{listing_id}", response_model=AdminOverview)
async def delete_listing(
    listing_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    actor = resolve_current_user(state, now)
    result = admin_delete_listing(state, actor, settings.admin_email, listing_id)
    await store.save(state)
    logger.info("Listing deleted by admin", extra={"listing_id": listing_id})
    return AdminOverview(**result)


@router.delete("/messages/{message_id}", response_model=AdminOverview)
async def delete_message(
    message_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    actor = resolve_current_user(state, now)
    result = admin_delete_message(state, actor, settings.admin_email, message_id)
    await store.save(state)
    logger.info("Message deleted by admin", extra={"message_id": message_id})
    return AdminOverview(**result)
