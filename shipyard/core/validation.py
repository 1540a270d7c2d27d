"""Validation — pure predicates for registration fields and password strength.

Invariants:
    - No function here has side effects or depends on state
    - password_issues order is fixed: length -> uppercase -> lowercase -> digit -> symbol
    - password_strength depends only on len(pw) and len(password_issues(pw))
"""

import re

from shipyard.core.domain_types import PasswordStrength

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
HANDLE_PATTERN = re.compile(r"^.{3,32}#\d{4}$")

MIN_PASSWORD_LENGTH = 8
MIN_NAME_LENGTH = 3
PASSWORD_SYMBOLS = '!@#$%^&*(),.?":{}|<>'

ISSUE_LENGTH = f"At least {MIN_PASSWORD_LENGTH} characters"
ISSUE_UPPERCASE = "One uppercase letter"
ISSUE_LOWERCASE = "One lowercase letter"
ISSUE_DIGIT = "One number"
ISSUE_SYMBOL = "One special character"


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value or ""))


def is_valid_handle(value: str) -> bool:
    return bool(HANDLE_PATTERN.match(value or ""))


def password_issues(password: str) -> list[str]:
    """Return the violated password rules, in display order. Empty = acceptable."""
    issues = []
    if len(password) < MIN_PASSWORD_LENGTH:
        issues.append(ISSUE_LENGTH)
    if not re.search(r"[A-Z]", password):
        issues.append(ISSUE_UPPERCASE)
    if not re.search(r"[a-z]", password):
        issues.append(ISSUE_LOWERCASE)
    if not re.search(r"\d", password):
        issues.append(ISSUE_DIGIT)
    if not any(ch in PASSWORD_SYMBOLS for ch in password):
        issues.append(ISSUE_SYMBOL)
    return issues


def password_strength(password: str) -> PasswordStrength:
    """Label a password from its length and number of violated rules."""
    length = len(password)
    issues = len(password_issues(password))
    if length < 6:
        return PasswordStrength.VERY_WEAK
    if length < 8 or issues > 3:
        return PasswordStrength.WEAK
    if issues > 2:
        return PasswordStrength.FAIR
    if issues > 1:
        return PasswordStrength.GOOD
    if issues > 0:
        return PasswordStrength.STRONG
    return PasswordStrength.VERY_STRONG


def validate_registration(
    name: str, handle: str, email: str, password: str,
) -> list[tuple[str, str]]:
    """Collect every field-level problem at once, for inline display."""
    problems = []
    if len((name or "").strip()) < MIN_NAME_LENGTH:
        problems.append(("name", f"Name must be at least {MIN_NAME_LENGTH} characters"))
    if not is_valid_handle(handle):
        problems.append(("handle", "Handle must look like Name#1234"))
    if not is_valid_email(email):
        problems.append(("email", "Please enter a valid email address"))
    for issue in password_issues(password or ""):
        problems.append(("password", issue))
    return problems
