"""Auth Schemas — registration, login, and public user/session views.

Invariants:
    - RegisterRequest only checks presence and that passwords match; field rules
      (handle format, strength) are core validation so they report per field
    - UserResponse never carries password material
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from shipyard.core.domain_types import PasswordStrength, SessionStatus
from shipyard.core.records import Session, User


class RegisterRequest(BaseModel):
    name: str = Field(max_length=100)
    handle: str = Field(max_length=64)
    email: str = Field(max_length=254)
    password: str = Field(max_length=256)
    confirm_password: str | None = Field(None, max_length=256)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: str = Field(max_length=254)
    password: str = Field(max_length=256)


class PasswordCheckRequest(BaseModel):
    password: str = Field(max_length=256)


class PasswordCheckResponse(BaseModel):
    strength: PasswordStrength
    issues: list[str]


class UserResponse(BaseModel):
    id: str
    name: str
    handle: str
    email: str
    joined_at: datetime
    last_login_at: datetime | None
    login_count: int
    is_active: bool
    is_admin: bool = False

    @classmethod
    def from_user(cls, user: User, is_admin: bool = False) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            handle=user.handle,
            email=user.email,
            joined_at=user.joined_at,
            last_login_at=user.last_login_at,
            login_count=user.login_count,
            is_active=user.is_active,
            is_admin=is_admin,
        )


class SessionResponse(BaseModel):
    id: str
    created_at: datetime
    expires_at: datetime
    status: SessionStatus

    @classmethod
    def from_session(cls, session: Session, status: SessionStatus) -> "SessionResponse":
        return cls(
            id=session.id,
            created_at=session.created_at,
            expires_at=session.expires_at,
            status=status,
        )


class AuthResponse(BaseModel):
    user: UserResponse
    session: SessionResponse


class FieldProblem(BaseModel):
    field: str
    message: str


class RegistrationCheckResponse(BaseModel):
    valid: bool
    problems: list[FieldProblem]
