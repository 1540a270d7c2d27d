"""Error Hierarchy — typed, categorized exceptions for all Shipyard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are user-correctable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - Authentication failures share one user-facing message (no email enumeration)

Design Decisions:
    - Single hierarchy with ShipyardError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - UnknownEmailError / BadPasswordError stay distinct internally, identical on the wire
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    STORAGE = "storage"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    listing_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class ShipyardError(Exception):
    """Base exception for all Shipyard errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def details(self) -> dict:
        """Extra response fields for subclasses (field name, issue list...)."""
        return {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.context.user_message or self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        body.update(self.details())
        return {"error": body}


# ─── Validation Errors (400) ────────────────────────────────────

class FieldValidationError(ShipyardError):
    """A single user-supplied field failed validation (shown inline)."""

    def __init__(
        self, message: str, field: str, code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field

    def details(self) -> dict:
        return {"field": self.field}


class WeakPasswordError(FieldValidationError):
    """Password violates one or more strength rules."""
    def __init__(self, issues: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Password requirements not met: {', '.join(issues)}",
            "password", "WEAK_PASSWORD", context,
        )
        self.issues = issues

    def details(self) -> dict:
        return {"field": self.field, "issues": self.issues}


class InvalidEmailError(FieldValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please enter a valid email address",
            "email", "INVALID_EMAIL", context,
        )


class InvalidHandleError(FieldValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Handle must look like Name#1234",
            "handle", "INVALID_HANDLE", context,
        )


class NameTooShortError(FieldValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Name must be at least 3 characters",
            "name", "NAME_TOO_SHORT", context,
        )


class InvalidPriceRangeError(FieldValidationError):
    def __init__(self, raw: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid price range '{raw}' (expected min-max or min+)",
            "price", "INVALID_PRICE_RANGE", context,
        )


class EmptyBodyError(FieldValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please enter a message", "body", "EMPTY_BODY", context,
        )


class EncodeError(ShipyardError):
    """Uploaded file could not be encoded — aborts the add before any mutation."""
    def __init__(self, filename: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to process file '{filename}': {reason}",
            "ENCODE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.filename = filename


class ExportFormatError(ShipyardError):
    """Account export document has the wrong version or shape."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "EXPORT_FORMAT_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Conflict / Auth Errors ─────────────────────────────────────

class DuplicateEmailError(ShipyardError):
    """Email already registered (case-insensitive)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An account with this email already exists",
            "DUPLICATE_EMAIL", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.field = "email"

    def details(self) -> dict:
        return {"field": self.field}


class AuthenticationError(ShipyardError):
    """Bad credentials. Subclasses say why; the response never does."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = "Invalid email or password"
        super().__init__(
            f"Authentication failed: {reason}",
            "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, ctx, 401,
        )
        self.reason = reason


class UnknownEmailError(AuthenticationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("not_found", context)


class BadPasswordError(AuthenticationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("bad_password", context)


class InactiveAccountError(ShipyardError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User account is inactive",
            "ACCOUNT_INACTIVE", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class NoActiveUserError(ShipyardError):
    """Operation requires a logged-in user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please log in first",
            "NO_ACTIVE_USER", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(ShipyardError):
    """Operation is administrator-only."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Administrator access required to {action}",
            "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(ShipyardError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageSchemaError(ShipyardError):
    """Persisted documents do not match any known schema version."""
    def __init__(self, message: str, key: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "STORAGE_SCHEMA_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.key = key


class DatabaseError(ShipyardError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
