"""Auth Routes — registration, login, logout and the current account.

Invariants:
    - Registration logs the new user in (a session is created in the same save)
    - Login failures never say whether the email or the password was wrong
    - Logout clears the current-session pointer only; the session row stays until expiry
"""

import logging

from fastapi import APIRouter, Depends, status

from shipyard.api.dependencies import Clock, get_clock, get_state_store, require_user
from shipyard.config import Settings, get_settings
from shipyard.core.admin import is_admin
from shipyard.core.credentials import authenticate, register
from shipyard.core.sessions import create_session, logout, session_status
from shipyard.core.validation import (
    password_issues, password_strength, validate_registration,
)
from shipyard.schemas.auth import (
    AuthResponse, FieldProblem, LoginRequest, PasswordCheckRequest,
    PasswordCheckResponse, RegisterRequest, RegistrationCheckResponse,
    SessionResponse, UserResponse,
)
from shipyard.services.state_store import StateStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_account(
    body: RegisterRequest,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    user = register(state, body.name, body.handle, body.email, body.password, now)
    session = create_session(state, user.id, now, settings.session_ttl)
    await store.save(state)
    logger.info("User registered", extra={"user_id": user.id})
    return AuthResponse(
        user=UserResponse.from_user(user, is_admin(user, settings.admin_email)),
        session=SessionResponse.from_session(session, session_status(session, now)),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    user = authenticate(state, body.email, body.password, now)
    session = create_session(state, user.id, now, settings.session_ttl)
    await store.save(state)
    logger.info("User logged in", extra={"user_id": user.id})
    return AuthResponse(
        user=UserResponse.from_user(user, is_admin(user, settings.admin_email)),
        session=SessionResponse.from_session(session, session_status(session, now)),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout_account(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    state = await store.load(clock())
    logout(state)
    await store.save(state)


@router.get("/me", response_model=AuthResponse)
async def current_account(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    user = require_user(state, now)
    session = state.current_session
    return AuthResponse(
        user=UserResponse.from_user(user, is_admin(user, settings.admin_email)),
        session=SessionResponse.from_session(session, session_status(session, now)),
    )


@router.post("/password-strength", response_model=PasswordCheckResponse)
async def check_password(body: PasswordCheckRequest):
    return PasswordCheckResponse(
        strength=password_strength(body.password),
        issues=password_issues(body.password),
    )


@router.post("/check-registration", response_model=RegistrationCheckResponse)
async def check_registration(body: RegisterRequest):
    """Every field problem at once, for inline display before submitting."""
    problems = validate_registration(body.name, body.handle, body.email, body.password)
    return RegistrationCheckResponse(
        valid=not problems,
        problems=[FieldProblem(field=f, message=m) for f, m in problems],
    )
