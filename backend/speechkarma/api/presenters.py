"""Presenters - ORM rows to the JSON shapes the API returns.

Invariants:
    - Ids are strings; timestamps use to_iso_string (YYYY-MM-DDTHH:MM:SS.sssZ)
    - Statements never expose deleted_at; their politician and author are embedded
    - Permission flags are computed for the caller and are advisory only
"""

from datetime import datetime
from typing import Any

from speechkarma.core.grace_period import statement_permissions
from speechkarma.core.timestamps import to_iso_string
from speechkarma.infrastructure.auth_provider import AuthenticatedUser
from speechkarma.models.party import Party
from speechkarma.models.politician import Politician
from speechkarma.models.profile import Profile
from speechkarma.models.statement import Statement


def _ts(value: datetime | None) -> str | None:
    return to_iso_string(value) if value is not None else None


def present_party(party: Party) -> dict[str, Any]:
    return {
        "id": str(party.id),
        "name": party.name,
        "abbreviation": party.abbreviation,
        "description": party.description,
        "color_hex": party.color_hex,
        "created_at": _ts(party.created_at),
        "updated_at": _ts(party.updated_at),
    }


def present_party_summary(party: Party) -> dict[str, Any]:
    """Party as embedded in politician and statement payloads."""
    return {
        "id": str(party.id),
        "name": party.name,
        "abbreviation": party.abbreviation,
        "color_hex": party.color_hex,
    }


def present_politician(politician: Politician) -> dict[str, Any]:
    return {
        "id": str(politician.id),
        "first_name": politician.first_name,
        "last_name": politician.last_name,
        "party_id": str(politician.party_id),
        "biography": politician.biography,
        "created_at": _ts(politician.created_at),
        "updated_at": _ts(politician.updated_at),
        "party": present_party_summary(politician.party),
    }


def present_politician_detail(
    politician: Politician, statements_count: int,
) -> dict[str, Any]:
    return {
        **present_politician(politician),
        "party": present_party(politician.party),
        "statements_count": statements_count,
    }


def present_statement(
    statement: Statement,
    viewer: AuthenticatedUser | None = None,
    grace_period_minutes: int | None = None,
) -> dict[str, Any]:
    """Statement with embedded politician and author.

    When grace_period_minutes is given, can_edit/can_delete are added for
    `viewer` (always false for anonymous callers).
    """
    politician = statement.politician
    data = {
        "id": str(statement.id),
        "politician_id": str(statement.politician_id),
        "statement_text": statement.statement_text,
        "statement_timestamp": _ts(statement.statement_timestamp),
        "created_by_user_id": str(statement.created_by_user_id),
        "created_at": _ts(statement.created_at),
        "updated_at": _ts(statement.updated_at),
        "politician": {
            "id": str(politician.id),
            "first_name": politician.first_name,
            "last_name": politician.last_name,
            "party": present_party_summary(politician.party),
        },
        "created_by": {
            "id": str(statement.created_by.id),
            "display_name": statement.created_by.display_name,
        },
    }
    if grace_period_minutes is not None:
        data.update(statement_permissions(
            owner_id=statement.created_by_user_id,
            acting_user_id=viewer.id if viewer else None,
            created_at=statement.created_at,
            grace_period_minutes=grace_period_minutes,
        ))
    return data


def present_deleted_statement(statement: Statement) -> dict[str, Any]:
    return {"id": str(statement.id), "deleted_at": _ts(statement.deleted_at)}


def present_profile(profile: Profile, email: str | None) -> dict[str, Any]:
    return {
        "id": str(profile.id),
        "display_name": profile.display_name,
        "is_admin": profile.is_admin,
        "created_at": _ts(profile.created_at),
        "updated_at": _ts(profile.updated_at),
        "email": email,
    }


def present_public_profile(profile: Profile) -> dict[str, Any]:
    return {
        "id": str(profile.id),
        "display_name": profile.display_name,
        "created_at": _ts(profile.created_at),
    }


def present_user(user: AuthenticatedUser) -> dict[str, Any]:
    return {"id": str(user.id), "email": user.email}
