"""Domain Types - enums and allowed-value sets shared by validation, services and routes.

Invariants:
    - Every enum-constrained query parameter has exactly one allowed-value tuple here
    - ErrorCode values are the only codes that appear in error envelopes

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Tuples (not sets) so allowed values keep a stable order
"""

from enum import Enum
from typing import Literal


# ─── Query Parameter Values ──────────────────────────────────────

TimeRange = Literal["7d", "30d", "365d", "all"]
SortOrder = Literal["asc", "desc"]
StatementSortField = Literal["created_at", "statement_timestamp"]
PoliticianSortField = Literal["last_name", "created_at"]
PartySortField = Literal["name", "created_at"]

TIME_RANGES: tuple[str, ...] = ("7d", "30d", "365d", "all")
SORT_ORDERS: tuple[str, ...] = ("asc", "desc")
STATEMENT_SORT_FIELDS: tuple[str, ...] = ("created_at", "statement_timestamp")
POLITICIAN_SORT_FIELDS: tuple[str, ...] = ("last_name", "created_at")
PARTY_SORT_FIELDS: tuple[str, ...] = ("name", "created_at")

TIME_RANGE_DAYS: dict[str, int] = {"7d": 7, "30d": 30, "365d": 365}


# ─── Limits ──────────────────────────────────────────────────────

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

STATEMENT_TEXT_MIN_LENGTH = 10
STATEMENT_TEXT_MAX_LENGTH = 5000
NAME_MAX_LENGTH = 100
BIOGRAPHY_MAX_LENGTH = 5000
DISPLAY_NAME_MAX_LENGTH = 100

DEFAULT_GRACE_PERIOD_MINUTES = 15


# ─── Enums ───────────────────────────────────────────────────────

class ErrorCode(str, Enum):
    """Machine-readable codes carried by every error envelope."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    GRACE_PERIOD_EXPIRED = "GRACE_PERIOD_EXPIRED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DenialReason(str, Enum):
    """Why a statement mutation was refused (surfaced in error details)."""
    NOT_OWNER = "NOT_OWNER"
    GRACE_PERIOD_EXPIRED = "GRACE_PERIOD_EXPIRED"
    DELETED = "DELETED"
