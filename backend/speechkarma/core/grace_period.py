"""Grace-Period Authorization - who may edit or delete a statement, and until when.

Invariants:
    - Only the owner may modify; anonymous callers never may
    - The window is inclusive: elapsed == grace period is still allowed
    - A created_at in the future (clock skew) gives negative elapsed and is allowed
    - can_edit and can_delete are always equal

Design Decisions:
    - `now` is injectable so boundary tests do not depend on wall-clock timing
    - Owner ids compared as strings so UUID objects and their text form are equal
"""

from datetime import datetime, timedelta
from typing import Any

from speechkarma.core.domain_types import DEFAULT_GRACE_PERIOD_MINUTES, DenialReason
from speechkarma.core.timestamps import parse_timestamp, utc_now


def can_user_modify_resource(
    owner_id: Any,
    acting_user_id: Any,
    created_at: str | datetime,
    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
    now: datetime | None = None,
) -> bool:
    """True iff acting_user_id owns the resource and the grace period has not lapsed."""
    if not acting_user_id:
        return False
    if str(acting_user_id) != str(owner_id):
        return False
    elapsed = (now or utc_now()) - parse_timestamp(created_at)
    return elapsed <= timedelta(minutes=grace_period_minutes)


def denial_reason(
    owner_id: Any,
    acting_user_id: Any,
    created_at: str | datetime,
    deleted: bool = False,
    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
    now: datetime | None = None,
) -> DenialReason | None:
    """Why a mutation must be refused, or None when it is allowed."""
    if deleted:
        return DenialReason.DELETED
    if not acting_user_id or str(acting_user_id) != str(owner_id):
        return DenialReason.NOT_OWNER
    if not can_user_modify_resource(
        owner_id, acting_user_id, created_at, grace_period_minutes, now,
    ):
        return DenialReason.GRACE_PERIOD_EXPIRED
    return None


def statement_permissions(
    owner_id: Any,
    acting_user_id: Any,
    created_at: str | datetime,
    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
    now: datetime | None = None,
) -> dict[str, bool]:
    allowed = can_user_modify_resource(
        owner_id, acting_user_id, created_at, grace_period_minutes, now,
    )
    return {"can_edit": allowed, "can_delete": allowed}
