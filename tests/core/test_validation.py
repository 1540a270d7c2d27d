"""Validation — email/handle patterns, password rules and strength labels.

Invariants:
    - password_issues order is length -> uppercase -> lowercase -> digit -> symbol
    - password_strength depends only on length and issue count
"""

import pytest

from shipyard.core.domain_types import PasswordStrength
from shipyard.core.validation import (
    ISSUE_DIGIT, ISSUE_LENGTH, ISSUE_LOWERCASE, ISSUE_SYMBOL, ISSUE_UPPERCASE,
    is_valid_email, is_valid_handle, password_issues, password_strength,
    validate_registration,
)


@pytest.mark.parametrize("value", ["a@b.co", "pilot@fleet.space", "x.y@z.io"])
def test_valid_emails(value):
    assert is_valid_email(value)


@pytest.mark.parametrize("value", ["", "plain", "a@b", "a b@c.de", "@b.co"])
def test_invalid_emails(value):
    assert not is_valid_email(value)


def test_handle_requires_name_and_four_digits():
    assert is_valid_handle("ada#1234")
    assert is_valid_handle("a" * 32 + "#0000")
    assert not is_valid_handle("ab#1234")
    assert not is_valid_handle("a" * 33 + "#1234")
    assert not is_valid_handle("ada#123")
    assert not is_valid_handle("ada1234")


def test_password_issues_in_fixed_order():
    assert password_issues("") == [
        ISSUE_LENGTH, ISSUE_UPPERCASE, ISSUE_LOWERCASE, ISSUE_DIGIT, ISSUE_SYMBOL,
    ]


def test_password_issues_empty_for_strong_password():
    assert password_issues("Hunter2!x") == []


def test_password_issues_only_reports_missing_rules():
    assert password_issues("hunter2!x") == [ISSUE_UPPERCASE]
    assert password_issues("Hunter!xy") == [ISSUE_DIGIT]
    assert password_issues("Hunter22x") == [ISSUE_SYMBOL]


@pytest.mark.parametrize("password, expected", [
    ("Ab1!", PasswordStrength.VERY_WEAK),
    ("Ab1!xy", PasswordStrength.WEAK),
    (" " * 8, PasswordStrength.WEAK),
    ("abcdefgh", PasswordStrength.FAIR),
    ("abcdefg1", PasswordStrength.GOOD),
    ("abcdefG1", PasswordStrength.STRONG),
    ("abcdeG1!x", PasswordStrength.VERY_STRONG),
])
def test_password_strength_thresholds(password, expected):
    assert password_strength(password) == expected


def test_validate_registration_collects_every_problem():
    problems = validate_registration("Al", "bad", "nope", "short")
    fields = [f for f, _ in problems]
    assert fields[:3] == ["name", "handle", "email"]
    assert fields.count("password") == len(password_issues("short"))


def test_validate_registration_clean_input():
    assert validate_registration("Ada", "ada#1234", "ada@example.com", "Hunter2!x") == []
