"""Error Hierarchy - typed exceptions for every SpeechKarma failure mode.

Invariants:
    - Every error has a message, an ErrorCode, an HTTP status and optional details
    - to_response() always renders {"error": {"message", "code", "details"?}}
    - Client errors (4xx) are recoverable; infrastructure errors (5xx) are critical
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SpeechKarmaError base: one FastAPI handler catches all
    - Services raise these directly instead of string-matching exception messages
"""

from enum import Enum
from typing import Any

from speechkarma.core.domain_types import DenialReason, ErrorCode


class ErrorSeverity(str, Enum):
    """Error severity for observability (drives the log level)."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class SpeechKarmaError(Exception):
    """Base exception for all SpeechKarma errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.details = details
        self.severity = severity

    def to_response(self) -> dict:
        """Convert to the standard REST error envelope."""
        error: dict[str, Any] = {
            "message": self.message,
            "code": self.code.value,
        }
        if self.details:
            error["details"] = self.details
        return {"error": error}


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestValidationFailed(SpeechKarmaError):
    """Input failed a business validation rule."""
    def __init__(
        self, message: str, field: str | None = None, **details: Any,
    ):
        if field:
            details = {"field": field, **details}
        super().__init__(
            message, ErrorCode.VALIDATION_ERROR, 400, details or None,
            ErrorSeverity.WARNING,
        )
        self.field = field


class AuthenticationRequiredError(SpeechKarmaError):
    """Missing or invalid bearer token on a protected route."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message, ErrorCode.AUTHENTICATION_REQUIRED, 401,
            severity=ErrorSeverity.INFO,
        )


class PermissionDeniedError(SpeechKarmaError):
    """Caller is not the owner, the grace period lapsed, or the row is deleted."""

    MESSAGES = {
        DenialReason.NOT_OWNER: "You do not own this statement",
        DenialReason.GRACE_PERIOD_EXPIRED: "Grace period ({minutes} minutes) has expired",
        DenialReason.DELETED: "Statement has been deleted",
    }

    def __init__(self, reason: DenialReason, grace_period_minutes: int = 15):
        super().__init__(
            self.MESSAGES[reason].format(minutes=grace_period_minutes),
            ErrorCode.PERMISSION_DENIED, 403, {"reason": reason.value},
            ErrorSeverity.WARNING,
        )
        self.reason = reason


class ResourceNotFoundError(SpeechKarmaError):
    """Requested resource does not exist (or is soft-deleted)."""
    def __init__(self, resource_type: str, resource_id: Any = None):
        super().__init__(
            f"{resource_type} not found", ErrorCode.NOT_FOUND, 404,
            {"id": str(resource_id)} if resource_id is not None else None,
            ErrorSeverity.INFO,
        )
        self.resource_type = resource_type


# ─── External / Infrastructure Errors ───────────────────────────

class AuthProviderError(SpeechKarmaError):
    """Hosted auth provider rejected a request or could not be reached.

    `raw_message` keeps the provider's text for map_auth_error; `message`
    is the user-facing translation.
    """
    def __init__(
        self,
        message: str,
        raw_message: str,
        provider_status: int | None = None,
        http_status: int = 400,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(
            message, code, http_status, severity=ErrorSeverity.WARNING,
        )
        self.raw_message = raw_message
        self.provider_status = provider_status


class RateLimitExceededError(AuthProviderError):
    """Auth provider is throttling this client (HTTP 429)."""
    def __init__(self, message: str, raw_message: str = "", provider_status: int = 429):
        super().__init__(
            message, raw_message or message, provider_status, 429,
            ErrorCode.RATE_LIMIT_EXCEEDED,
        )


class DatabaseError(SpeechKarmaError):
    """Database operation failed.

    The driver's text goes to the log only; callers see a generic message.
    Connection trouble is a 503, anything else a 500.
    """

    MESSAGES = {
        500: "An unexpected error occurred",
        503: "Service temporarily unavailable",
    }

    def __init__(self, operation: str, http_status: int = 500):
        super().__init__(
            self.MESSAGES.get(http_status, self.MESSAGES[500]),
            ErrorCode.INTERNAL_ERROR, http_status, severity=ErrorSeverity.CRITICAL,
        )
        self.operation = operation


class SummaryAPIError(SpeechKarmaError):
    """Statement summarizer call failed (never surfaced to API callers)."""
    def __init__(self, message: str, api_error_type: str):
        super().__init__(
            f"Summary API error ({api_error_type}): {message}",
            ErrorCode.INTERNAL_ERROR, 502, severity=ErrorSeverity.WARNING,
        )
        self.api_error_type = api_error_type
