"""Grace Period - ownership and time-window rule for statement edits and deletes.

Tests:
    - owner within the window may modify; the boundary is inclusive
    - one second past the window is refused
    - anonymous or different users are always refused
    - future created_at (clock skew) is allowed
    - denial_reason precedence: deleted, then ownership, then expiry
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from speechkarma.core.domain_types import DenialReason
from speechkarma.core.grace_period import (
    can_user_modify_resource,
    denial_reason,
    statement_permissions,
)

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
OWNER = uuid4()


def _created(minutes_ago: float) -> datetime:
    return NOW - timedelta(minutes=minutes_ago)


def test_owner_within_window_allowed():
    assert can_user_modify_resource(OWNER, OWNER, _created(14), now=NOW) is True


def test_exactly_at_boundary_allowed():
    assert can_user_modify_resource(OWNER, OWNER, _created(15), now=NOW) is True


def test_one_second_past_boundary_refused():
    created = NOW - timedelta(minutes=15, seconds=1)
    assert can_user_modify_resource(OWNER, OWNER, created, now=NOW) is False


def test_sixteen_minutes_refused():
    assert can_user_modify_resource(OWNER, OWNER, _created(16), now=NOW) is False


def test_anonymous_user_refused():
    assert can_user_modify_resource(OWNER, None, _created(0), now=NOW) is False
    assert can_user_modify_resource(OWNER, "", _created(0), now=NOW) is False


def test_other_user_refused_regardless_of_time():
    assert can_user_modify_resource(OWNER, uuid4(), _created(0), now=NOW) is False


def test_uuid_and_string_ids_compare_equal():
    assert can_user_modify_resource(
        str(OWNER), OWNER, _created(1), now=NOW,
    ) is True


def test_future_created_at_allowed():
    created = NOW + timedelta(minutes=5)
    assert can_user_modify_resource(OWNER, OWNER, created, now=NOW) is True


def test_zero_minute_window():
    assert can_user_modify_resource(
        OWNER, OWNER, NOW, grace_period_minutes=0, now=NOW,
    ) is True
    assert can_user_modify_resource(
        OWNER, OWNER, _created(0.01), grace_period_minutes=0, now=NOW,
    ) is False


def test_accepts_iso_strings_and_naive_datetimes():
    assert can_user_modify_resource(
        OWNER, OWNER, "2024-06-01T11:50:00.000Z", now=NOW,
    ) is True
    naive = datetime(2024, 6, 1, 11, 30, 0)
    assert can_user_modify_resource(OWNER, OWNER, naive, now=NOW) is False


def test_custom_grace_period():
    assert can_user_modify_resource(
        OWNER, OWNER, _created(25), grace_period_minutes=30, now=NOW,
    ) is True


# ─── denial_reason ───────────────────────────────────────────────

def test_denial_reason_none_when_allowed():
    assert denial_reason(OWNER, OWNER, _created(5), now=NOW) is None


def test_denial_reason_deleted_takes_precedence():
    assert denial_reason(
        OWNER, uuid4(), _created(60), deleted=True, now=NOW,
    ) == DenialReason.DELETED


def test_denial_reason_not_owner():
    assert denial_reason(OWNER, uuid4(), _created(1), now=NOW) == DenialReason.NOT_OWNER
    assert denial_reason(OWNER, None, _created(1), now=NOW) == DenialReason.NOT_OWNER


def test_denial_reason_expired():
    assert denial_reason(
        OWNER, OWNER, _created(16), now=NOW,
    ) == DenialReason.GRACE_PERIOD_EXPIRED


# ─── statement_permissions ───────────────────────────────────────

def test_permissions_flags_always_equal():
    for minutes in (0, 14, 15, 16):
        perms = statement_permissions(OWNER, OWNER, _created(minutes), now=NOW)
        assert perms["can_edit"] == perms["can_delete"]


def test_permissions_for_owner_and_stranger():
    assert statement_permissions(OWNER, OWNER, _created(1), now=NOW) == {
        "can_edit": True, "can_delete": True,
    }
    assert statement_permissions(OWNER, None, _created(1), now=NOW) == {
        "can_edit": False, "can_delete": False,
    }
