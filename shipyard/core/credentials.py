"""Credential Store — user registry, password hashing, authentication.

Invariants:
    - Email uniqueness is case-insensitive
    - Only password_hash + password_salt are stored, never the plaintext
    - hash_password is deterministic for a given (password, salt)
    - authenticate mutates last_login_at / login_count on the matched record in place
    - delete_user is idempotent

Design Decisions:
    - passlib pbkdf2_sha256 with a per-user random salt: a vetted slow hash that keeps
      the deterministic one-way contract (ADR: the legacy integer digest is not safe)
    - The salt is fixed per user so hash_password(password, salt) stays reproducible;
      verification goes through passlib (constant-time)
    - Check order in register: duplicate email, weak password, handle, email, name
"""

import secrets
import uuid
from datetime import datetime

from passlib.hash import pbkdf2_sha256

from shipyard.core.app_state import AppState
from shipyard.core.domain_types import UserId
from shipyard.core.errors import (
    DuplicateEmailError, WeakPasswordError, InvalidHandleError,
    InvalidEmailError, NameTooShortError, UnknownEmailError,
    BadPasswordError, InactiveAccountError,
)
from shipyard.core.records import User
from shipyard.core.validation import (
    MIN_NAME_LENGTH, is_valid_email, is_valid_handle, password_issues,
)

HASH_ITERATIONS = 100_000


def new_salt() -> str:
    return secrets.token_hex(16)


def hash_password(password: str, salt: str) -> str:
    """One-way digest of a password. Same inputs always give the same output."""
    hasher = pbkdf2_sha256.using(salt=bytes.fromhex(salt), rounds=HASH_ITERATIONS)
    return hasher.hash(password)


def verify_password(password: str, user: User) -> bool:
    return pbkdf2_sha256.verify(password, user.password_hash)


def find_user_by_email(state: AppState, email: str) -> User | None:
    needle = (email or "").strip().lower()
    for user in state.users:
        if user.email.lower() == needle:
            return user
    return None


def find_user(state: AppState, user_id: str) -> User | None:
    for user in state.users:
        if user.id == user_id:
            return user
    return None


def register(
    state: AppState, name: str, handle: str, email: str, password: str,
    now: datetime,
) -> User:
    """Validate and append a new user. Raises a field-level error on the first problem."""
    email = (email or "").strip()
    if find_user_by_email(state, email):
        raise DuplicateEmailError()
    issues = password_issues(password or "")
    if issues:
        raise WeakPasswordError(issues)
    if not is_valid_handle(handle):
        raise InvalidHandleError()
    if not is_valid_email(email):
        raise InvalidEmailError()
    name = (name or "").strip()
    if len(name) < MIN_NAME_LENGTH:
        raise NameTooShortError()

    salt = new_salt()
    user = User(
        id=UserId(uuid.uuid4().hex),
        name=name,
        handle=handle.strip(),
        email=email,
        password_hash=hash_password(password, salt),
        password_salt=salt,
        joined_at=now,
    )
    state.users.append(user)
    return user


def authenticate(state: AppState, email: str, password: str, now: datetime) -> User:
    user = find_user_by_email(state, email)
    if user is None:
        raise UnknownEmailError()
    if not verify_password(password or "", user):
        raise BadPasswordError()
    if not user.is_active:
        raise InactiveAccountError()
    user.last_login_at = now
    user.login_count += 1
    return user


def delete_user(state: AppState, user_id: str) -> bool:
    """Remove a user record. Returns whether anything was removed."""
    before = len(state.users)
    state.users = [u for u in state.users if u.id != user_id]
    return len(state.users) != before


def set_user_active(state: AppState, user_id: str, active: bool) -> User | None:
    user = find_user(state, user_id)
    if user is not None:
        user.is_active = active
    return user
