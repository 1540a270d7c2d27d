"""Message Routes — contact a seller, read the inbox, mark messages read.

Invariants:
    - A message is always bound to an existing listing (404 otherwise)
    - Empty bodies are rejected before the sender is checked
    - Marking an unknown message, or one addressed to someone else, read is a no-op
"""

import logging

from fastapi import APIRouter, Depends, status

from shipyard.api.dependencies import Clock, get_clock, get_state_store, require_user
from shipyard.core.catalog import get_listing
from shipyard.core.messaging import (
    conversations_for, inbox_for, mark_read, send_message, unread_count,
)
from shipyard.core.sessions import resolve_current_user
from shipyard.schemas.messages import InboxResponse, MessageResponse, SendMessageRequest
from shipyard.services.state_store import StateStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.post(
    "", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def contact_seller(
    body: SendMessageRequest,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    listing = get_listing(state, body.listing_id)
    sender = resolve_current_user(state, now)
    message = send_message(state, listing, sender, body.body, now)
    await store.save(state)
    logger.info(
        "Message sent",
        extra={"message_id": message.id, "listing_id": listing.id, "user_id": sender.id},
    )
    return MessageResponse.from_message(message)


@router.get("/inbox", response_model=InboxResponse)
async def read_inbox(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    user = require_user(state, now)
    return InboxResponse(
        unread=unread_count(state.messages, user),
        messages=[
            MessageResponse.from_message(m) for m in inbox_for(state.messages, user)
        ],
    )


@router.get("/conversations", response_model=list[MessageResponse])
async def read_conversations(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    user = require_user(state, now)
    return [
        MessageResponse.from_message(m)
        for m in conversations_for(state.messages, user)
    ]


@router.post("/{message_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_message_read(
    message_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    reader = require_user(state, now)
    if mark_read(state, message_id, reader) is not None:
        await store.save(state)
