"""Messaging Ledger — buyer-to-seller messages keyed by listing.

Invariants:
    - messages are most-recent-first (send_message prepends)
    - A message is bound to the listing's seller at send time (id + display copy)
    - read is the only field that changes after creation
    - mark_read and delete_message are no-ops for unknown ids
    - Only the recipient (seller) can mark a message read through a reader-scoped call

Design Decisions:
    - Ownership resolved by seller_id/buyer_id; the display name is only consulted
      for legacy rows whose ids could not be resolved during migration
"""

import uuid
from datetime import datetime

from shipyard.core.app_state import AppState
from shipyard.core.domain_types import MessageId
from shipyard.core.errors import EmptyBodyError, NoActiveUserError
from shipyard.core.records import Listing, Message, User


def send_message(
    state: AppState, listing: Listing, sender: User | None, body: str,
    now: datetime,
) -> Message:
    text = (body or "").strip()
    if not text:
        raise EmptyBodyError()
    if sender is None:
        raise NoActiveUserError()
    message = Message(
        id=MessageId(uuid.uuid4().hex),
        listing_id=listing.id,
        listing_name=listing.name,
        buyer_id=sender.id,
        buyer_name=sender.name,
        buyer_handle=sender.handle,
        seller_id=listing.seller_id,
        seller_name=listing.seller_name,
        seller_handle=listing.seller_handle,
        body=text,
        sent_at=now,
    )
    state.messages.insert(0, message)
    return message


def mark_read(
    state: AppState, message_id: str, reader: User | None = None,
) -> Message | None:
    """Flag a message read. With a reader, only messages in their inbox match."""
    for message in state.messages:
        if message.id == message_id:
            if reader is not None and not _is_party(
                message.seller_id, message.seller_name, reader,
            ):
                return None
            message.read = True
            return message
    return None


def _is_party(party_id: str | None, party_name: str, user: User) -> bool:
    if party_id is not None:
        return party_id == user.id
    return party_name == user.name


def inbox_for(messages: list[Message], user: User) -> list[Message]:
    """Messages addressed to the user as seller, in ledger order."""
    return [m for m in messages if _is_party(m.seller_id, m.seller_name, user)]


def conversations_for(messages: list[Message], user: User) -> list[Message]:
    """Messages where the user is either the buyer or the seller."""
    return [
        m for m in messages
        if _is_party(m.seller_id, m.seller_name, user)
        or _is_party(m.buyer_id, m.buyer_name, user)
    ]


def unread_count(messages: list[Message], user: User) -> int:
    return sum(1 for m in inbox_for(messages, user) if not m.read)


def delete_message(state: AppState, message_id: str) -> bool:
    before = len(state.messages)
    state.messages = [m for m in state.messages if m.id != message_id]
    return len(state.messages) != before
