"""Message Schemas — contact-seller input and inbox views."""

from datetime import datetime

from pydantic import BaseModel, Field

from shipyard.core.records import Message


class SendMessageRequest(BaseModel):
    listing_id: str
    body: str = Field(max_length=5000)


class MessageResponse(BaseModel):
    id: str
    listing_id: str
    listing_name: str
    buyer_name: str
    buyer_handle: str
    seller_name: str
    seller_handle: str
    body: str
    sent_at: datetime
    read: bool

    @classmethod
    def from_message(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.id,
            listing_id=message.listing_id,
            listing_name=message.listing_name,
            buyer_name=message.buyer_name,
            buyer_handle=message.buyer_handle,
            seller_name=message.seller_name,
            seller_handle=message.seller_handle,
            body=message.body,
            sent_at=message.sent_at,
            read=message.read,
        )


class InboxResponse(BaseModel):
    unread: int
    messages: list[MessageResponse]
