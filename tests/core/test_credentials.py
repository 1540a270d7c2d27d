"""Credential Store — registration checks, hashing, authentication.

Invariants:
    - register checks duplicate email, weak password, handle, email, name (in that order)
    - Plaintext passwords are never stored
    - Unknown email and wrong password share one user-facing message
"""

from datetime import timedelta

import pytest

from shipyard.core.credentials import (
    authenticate, delete_user, find_user, find_user_by_email, hash_password,
    new_salt, register, set_user_active, verify_password,
)
from shipyard.core.errors import (
    AuthenticationError, BadPasswordError, DuplicateEmailError,
    InactiveAccountError, InvalidEmailError, InvalidHandleError,
    NameTooShortError, UnknownEmailError, WeakPasswordError,
)

from tests.core.sample_data import NOW, STRONG_PASSWORD


# -- Hashing -------------------------------------------------------------------

def test_hash_is_deterministic_for_same_salt():
    salt = new_salt()
    assert hash_password("Hunter2!x", salt) == hash_password("Hunter2!x", salt)


def test_hash_differs_across_salts():
    assert hash_password("Hunter2!x", new_salt()) != hash_password("Hunter2!x", new_salt())


def test_hash_never_contains_plaintext():
    assert "Hunter2!x" not in hash_password("Hunter2!x", new_salt())


# -- Register ------------------------------------------------------------------

def test_register_appends_user(state):
    user = register(state, " Ada ", "ada#1234", "ada@example.com", STRONG_PASSWORD, NOW)
    assert state.users == [user]
    assert user.name == "Ada"
    assert user.joined_at == NOW
    assert user.login_count == 0
    assert user.last_login_at is None
    assert user.is_active
    assert user.password_hash != STRONG_PASSWORD
    assert verify_password(STRONG_PASSWORD, user)


def test_register_rejects_duplicate_email_case_insensitive(state, seller):
    with pytest.raises(DuplicateEmailError):
        register(state, "Other", "other#0001", "ADA@Example.com", STRONG_PASSWORD, NOW)
    assert len(state.users) == 1


def test_register_duplicate_checked_before_password(state, seller):
    with pytest.raises(DuplicateEmailError):
        register(state, "Other", "bad", "ada@example.com", "weak", NOW)


def test_register_weak_password_carries_issues(state):
    with pytest.raises(WeakPasswordError) as exc_info:
        register(state, "Ada", "ada#1234", "ada@example.com", "weak", NOW)
    assert exc_info.value.issues
    assert exc_info.value.to_response()["error"]["field"] == "password"
    assert state.users == []


def test_register_password_checked_before_handle(state):
    with pytest.raises(WeakPasswordError):
        register(state, "Ada", "bad", "not-an-email", "weak", NOW)


def test_register_invalid_handle(state):
    with pytest.raises(InvalidHandleError):
        register(state, "Ada", "ada1234", "ada@example.com", STRONG_PASSWORD, NOW)


def test_register_invalid_email(state):
    with pytest.raises(InvalidEmailError):
        register(state, "Ada", "ada#1234", "ada.example.com", STRONG_PASSWORD, NOW)


def test_register_short_name(state):
    with pytest.raises(NameTooShortError):
        register(state, "  Al ", "ada#1234", "ada@example.com", STRONG_PASSWORD, NOW)


# -- Authenticate --------------------------------------------------------------

def test_authenticate_updates_login_stats(state, seller):
    later = NOW + timedelta(hours=1)
    user = authenticate(state, "ADA@example.com", STRONG_PASSWORD, later)
    assert user is seller
    assert user.last_login_at == later
    assert user.login_count == 1
    authenticate(state, "ada@example.com", STRONG_PASSWORD, later)
    assert user.login_count == 2


def test_authenticate_unknown_email(state, seller):
    with pytest.raises(UnknownEmailError):
        authenticate(state, "nobody@example.com", STRONG_PASSWORD, NOW)


def test_authenticate_wrong_password_leaves_stats(state, seller):
    with pytest.raises(BadPasswordError):
        authenticate(state, "ada@example.com", "Wrong1!xx", NOW)
    assert seller.login_count == 0
    assert seller.last_login_at is None


def test_auth_failures_share_user_message():
    unknown = UnknownEmailError().to_response()["error"]
    bad = BadPasswordError().to_response()["error"]
    assert unknown["message"] == bad["message"] == "Invalid email or password"
    assert unknown["code"] == bad["code"]
    assert issubclass(UnknownEmailError, AuthenticationError)


def test_authenticate_inactive_account(state, seller):
    set_user_active(state, seller.id, False)
    with pytest.raises(InactiveAccountError):
        authenticate(state, "ada@example.com", STRONG_PASSWORD, NOW)


# -- Lookup / admin mutations ---------------------------------------------------

def test_find_user_and_by_email(state, seller):
    assert find_user(state, seller.id) is seller
    assert find_user(state, "missing") is None
    assert find_user_by_email(state, " ada@EXAMPLE.com ") is seller


def test_delete_user_is_idempotent(state, seller):
    assert delete_user(state, seller.id) is True
    assert delete_user(state, seller.id) is False
    assert state.users == []


def test_set_user_active_unknown_id(state):
    assert set_user_active(state, "missing", False) is None


def test_hash_is_a_passlib_pbkdf2_string():
    assert hash_password("Hunter2!x", new_salt()).startswith("$pbkdf2-sha256$100000$")
