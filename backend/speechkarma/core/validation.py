"""Request Validation Utilities - pure checks and normalisers for API input.

Invariants:
    - Every function is pure, synchronous and never raises
    - Normalisers return a value from the allowed set (falling back to the default)
    - Predicates return False (not raise) for non-string input

Design Decisions:
    - Routes reject out-of-range query parameters with 400 at the boundary;
      services still run these normalisers so internal callers get the same defaults
    - is_valid_iso_date is a strict round-trip check against to_iso_string,
      so date-only strings are rejected
"""

import re
from dataclasses import dataclass
from typing import Any, Sequence

from speechkarma.core.domain_types import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    SORT_ORDERS,
    TIME_RANGES,
)
from speechkarma.core.timestamps import parse_timestamp, to_iso_string

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PaginationParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def is_valid_uuid(value: Any) -> bool:
    """Canonical 8-4-4-4-12 hex UUID (any version), case-insensitive."""
    if not value or not isinstance(value, str):
        return False
    return _UUID_PATTERN.match(value) is not None


def validate_pagination_params(
    page: int | None = None, limit: int | None = None,
) -> PaginationParams:
    """Clamp page to >= 1 and limit to 1..100 (defaults 1 and 50)."""
    validated_page = max(1, page or 1)
    validated_limit = min(MAX_PAGE_SIZE, max(1, limit or DEFAULT_PAGE_SIZE))
    return PaginationParams(page=validated_page, limit=validated_limit)


def validate_time_range(time_range: str | None = None) -> str:
    if not time_range or time_range not in TIME_RANGES:
        return "all"
    return time_range


def validate_sort_field(
    sort_by: str | None, allowed_fields: Sequence[str], default_field: str,
) -> str:
    if not sort_by or sort_by not in allowed_fields:
        return default_field
    return sort_by


def validate_sort_order(order: str | None = None) -> str:
    if not order or order not in SORT_ORDERS:
        return "desc"
    return order


def is_valid_iso_date(value: Any) -> bool:
    """True iff value parses and re-serialises to exactly the same string."""
    if not value or not isinstance(value, str):
        return False
    try:
        parsed = parse_timestamp(value)
    except ValueError:
        return False
    return to_iso_string(parsed) == value


def is_valid_string(value: Any, max_length: int | None = None) -> bool:
    """Non-blank string, optionally bounded by max_length (untrimmed length)."""
    if not value or not isinstance(value, str) or not value.strip():
        return False
    if max_length and len(value) > max_length:
        return False
    return True
