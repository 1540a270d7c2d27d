"""Admin Schemas — overview counts and account status changes."""

from datetime import datetime

from pydantic import BaseModel

from shipyard.core.records import User


class AdminOverview(BaseModel):
    total_users: int
    total_listings: int
    total_messages: int
    active_listings: int
    unread_messages: int
    active_users: int


class UserStatusRequest(BaseModel):
    active: bool


class AdminUserView(BaseModel):
    id: str
    name: str
    handle: str
    email: str
    joined_at: datetime
    last_login_at: datetime | None
    login_count: int
    is_active: bool

    @classmethod
    def from_user(cls, user: User) -> "AdminUserView":
        return cls(
            id=user.id,
            name=user.name,
            handle=user.handle,
            email=user.email,
            joined_at=user.joined_at,
            last_login_at=user.last_login_at,
            login_count=user.login_count,
            is_active=user.is_active,
        )
