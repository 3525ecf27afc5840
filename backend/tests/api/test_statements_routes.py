"""Statement Routes - feed, detail, creation and grace-period edit/delete.

Tests:
    - POST requires auth; 10 and 5000 characters accepted, 9 and 5001 rejected
    - POST with an unknown politician -> 404; with a bad UUID -> 400
    - POST provisions a profile for a first-time author
    - GET list is paginated, newest first, excludes deleted rows, never cached
    - GET detail carries can_edit/can_delete for the caller
    - PATCH/DELETE at 14 minutes succeed; at 16 minutes -> 403 PERMISSION_DENIED
    - PATCH/DELETE by another user -> 403; on a deleted statement -> 403;
      on a missing statement -> 404
    - PATCH rejects politician_id and timestamps after created_at
    - PATCH with an empty body changes nothing (updated_at kept); an explicit
      null statement_text -> 400
"""

from datetime import timedelta
from uuid import uuid4

from sqlalchemy import select

from speechkarma.core.timestamps import to_iso_string
from speechkarma.models.profile import Profile
from speechkarma.models.statement import Statement

from .conftest import NEWCOMER, NEWCOMER_HEADERS, OTHER_HEADERS, OWNER, OWNER_HEADERS, utcnow

PAST = "2024-01-15T10:30:00.000Z"


def _payload(politician_id, text="The budget will be balanced by next spring."):
    return {
        "politician_id": str(politician_id),
        "statement_text": text,
        "statement_timestamp": PAST,
    }


# ─── Create ──────────────────────────────────────────────────────

async def test_create_requires_authentication(client, seed_politician):
    res = await client.post("/api/statements", json=_payload(seed_politician.id))
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"


async def test_create_with_unknown_token_is_401(client, seed_politician):
    res = await client.post(
        "/api/statements", json=_payload(seed_politician.id),
        headers={"Authorization": "Bearer nope"},
    )
    assert res.status_code == 401


async def test_create_ten_characters(client, seed_politician, seed_profiles):
    res = await client.post(
        "/api/statements", json=_payload(seed_politician.id, "1234567890"),
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["statement_text"] == "1234567890"
    assert data["statement_timestamp"] == PAST
    assert data["created_by"] == {"id": str(OWNER.id), "display_name": "Owner"}
    assert data["politician"]["party"]["name"] == "Green Party"
    assert data["can_edit"] is True
    assert data["can_delete"] is True
    assert data["created_at"].endswith("Z")


async def test_create_nine_characters_rejected(client, seed_politician, seed_profiles):
    res = await client.post(
        "/api/statements", json=_payload(seed_politician.id, "123456789"),
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["fields"][0]["field"] == "statement_text"


async def test_create_five_thousand_characters(client, seed_politician, seed_profiles):
    res = await client.post(
        "/api/statements", json=_payload(seed_politician.id, "x" * 5000),
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 201
    assert len(res.json()["data"]["statement_text"]) == 5000


async def test_create_five_thousand_one_characters_rejected(
    client, seed_politician, seed_profiles,
):
    res = await client.post(
        "/api/statements", json=_payload(seed_politician.id, "x" * 5001),
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 400


async def test_create_future_timestamp_rejected(client, seed_politician, seed_profiles):
    payload = _payload(seed_politician.id)
    payload["statement_timestamp"] = to_iso_string(utcnow() + timedelta(days=1))
    res = await client.post("/api/statements", json=payload, headers=OWNER_HEADERS)
    assert res.status_code == 400


async def test_create_unknown_politician_is_404(client, seed_profiles):
    res = await client.post(
        "/api/statements", json=_payload(uuid4()), headers=OWNER_HEADERS,
    )
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Politician not found"


async def test_create_malformed_json_is_400(client, seed_politician):
    res = await client.post(
        "/api/statements", content=b"{not json",
        headers={**OWNER_HEADERS, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_provisions_profile_for_new_author(
    client, seed_politician, test_db,
):
    res = await client.post(
        "/api/statements", json=_payload(seed_politician.id),
        headers=NEWCOMER_HEADERS,
    )
    assert res.status_code == 201
    assert res.json()["data"]["created_by"]["display_name"] == "newcomer"
    profile = await test_db.get(Profile, NEWCOMER.id)
    assert profile is not None


# ─── List & detail ───────────────────────────────────────────────

async def test_list_is_newest_first_and_uncached(client, make_statement):
    older = await make_statement(minutes_ago=30, text="Older statement text.")
    newer = await make_statement(minutes_ago=5, text="Newer statement text.")

    res = await client.get("/api/statements")

    assert res.status_code == 200
    assert res.headers["cache-control"] == "no-cache, no-store, must-revalidate"
    body = res.json()
    assert [s["id"] for s in body["data"]] == [str(newer.id), str(older.id)]
    assert body["pagination"] == {"page": 1, "limit": 50, "total": 2, "total_pages": 1}
    assert "deleted_at" not in body["data"][0]


async def test_list_excludes_deleted(client, make_statement):
    await make_statement(deleted=True)
    live = await make_statement()

    body = (await client.get("/api/statements")).json()

    assert [s["id"] for s in body["data"]] == [str(live.id)]


async def test_list_pagination(client, make_statement):
    for minutes in range(1, 6):
        await make_statement(minutes_ago=minutes)

    body = (await client.get("/api/statements?page=2&limit=2")).json()

    assert len(body["data"]) == 2
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "total_pages": 3}


async def test_list_rejects_out_of_range_limit(client):
    res = await client.get("/api/statements?limit=101")
    assert res.status_code == 400


async def test_list_rejects_unknown_sort_field(client):
    res = await client.get("/api/statements?sort_by=statement_text")
    assert res.status_code == 400


async def test_list_filters_by_politician(client, make_statement):
    await make_statement()
    res = await client.get(f"/api/statements?politician_id={uuid4()}")
    assert res.json()["data"] == []


async def test_detail_permissions_for_owner_and_stranger(client, make_statement):
    statement = await make_statement(minutes_ago=2)

    mine = (await client.get(
        f"/api/statements/{statement.id}", headers=OWNER_HEADERS,
    )).json()["data"]
    theirs = (await client.get(
        f"/api/statements/{statement.id}", headers=OTHER_HEADERS,
    )).json()["data"]
    anonymous = (await client.get(f"/api/statements/{statement.id}")).json()["data"]

    assert (mine["can_edit"], mine["can_delete"]) == (True, True)
    assert (theirs["can_edit"], theirs["can_delete"]) == (False, False)
    assert anonymous["can_edit"] is False


async def test_detail_invalid_id_is_400(client):
    res = await client.get("/api/statements/not-a-uuid")
    assert res.status_code == 400
    assert res.json()["error"] == {
        "message": "Invalid statement ID format",
        "code": "VALIDATION_ERROR",
        "details": {"field": "id", "value": "not-a-uuid"},
    }


async def test_detail_deleted_is_404(client, make_statement):
    statement = await make_statement(deleted=True)
    res = await client.get(f"/api/statements/{statement.id}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


# ─── Update ──────────────────────────────────────────────────────

async def test_patch_within_grace_period(client, make_statement):
    statement = await make_statement(minutes_ago=14)

    res = await client.patch(
        f"/api/statements/{statement.id}",
        json={"statement_text": "Corrected statement text."},
        headers=OWNER_HEADERS,
    )

    assert res.status_code == 200
    assert res.json()["data"]["statement_text"] == "Corrected statement text."


async def test_patch_empty_body_leaves_statement_unchanged(client, make_statement):
    statement = await make_statement(minutes_ago=5)
    before = (await client.get(f"/api/statements/{statement.id}")).json()["data"]

    res = await client.patch(
        f"/api/statements/{statement.id}", json={}, headers=OWNER_HEADERS,
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["updated_at"] == before["updated_at"]
    assert data["statement_text"] == before["statement_text"]


async def test_patch_null_text_is_400(client, make_statement):
    statement = await make_statement(minutes_ago=5)
    res = await client.patch(
        f"/api/statements/{statement.id}",
        json={"statement_text": None},
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["message"] == "Statement text must be a string"
    assert error["details"]["fields"][0]["field"] == "statement_text"


async def test_patch_after_grace_period_is_403(client, make_statement):
    statement = await make_statement(minutes_ago=16)

    res = await client.patch(
        f"/api/statements/{statement.id}",
        json={"statement_text": "Too late to change this."},
        headers=OWNER_HEADERS,
    )

    assert res.status_code == 403
    error = res.json()["error"]
    assert error["code"] == "PERMISSION_DENIED"
    assert error["details"] == {"reason": "GRACE_PERIOD_EXPIRED"}


async def test_patch_by_other_user_is_403(client, make_statement):
    statement = await make_statement(minutes_ago=1)
    res = await client.patch(
        f"/api/statements/{statement.id}",
        json={"statement_text": "Not my statement at all."},
        headers=OTHER_HEADERS,
    )
    assert res.status_code == 403
    assert res.json()["error"]["details"]["reason"] == "NOT_OWNER"


async def test_patch_deleted_is_403(client, make_statement):
    statement = await make_statement(minutes_ago=1, deleted=True)
    res = await client.patch(
        f"/api/statements/{statement.id}",
        json={"statement_text": "Editing a deleted row."},
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 403
    assert res.json()["error"]["details"]["reason"] == "DELETED"


async def test_patch_missing_is_404(client, seed_profiles):
    res = await client.patch(
        f"/api/statements/{uuid4()}",
        json={"statement_text": "Nothing to edit here."},
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 404


async def test_patch_requires_authentication(client, make_statement):
    statement = await make_statement()
    res = await client.patch(
        f"/api/statements/{statement.id}", json={"statement_text": "Anonymous edit."},
    )
    assert res.status_code == 401


async def test_patch_cannot_change_politician(client, make_statement):
    statement = await make_statement()
    res = await client.patch(
        f"/api/statements/{statement.id}",
        json={"politician_id": str(uuid4())},
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 400


async def test_patch_timestamp_after_creation_rejected(client, make_statement):
    statement = await make_statement(minutes_ago=10)
    later = to_iso_string(utcnow() - timedelta(minutes=1))
    res = await client.patch(
        f"/api/statements/{statement.id}",
        json={"statement_timestamp": later},
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"]["field"] == "statement_timestamp"


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_within_grace_period(client, make_statement, test_db):
    statement = await make_statement(minutes_ago=14)

    res = await client.delete(f"/api/statements/{statement.id}", headers=OWNER_HEADERS)

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == str(statement.id)
    assert data["deleted_at"].endswith("Z")

    row = (await test_db.execute(
        select(Statement)
        .where(Statement.id == statement.id)
        .execution_options(populate_existing=True),
    )).scalar_one()
    assert row.deleted_at is not None

    listing = (await client.get("/api/statements")).json()
    assert listing["data"] == []


async def test_delete_after_grace_period_is_403(client, make_statement):
    statement = await make_statement(minutes_ago=16)
    res = await client.delete(f"/api/statements/{statement.id}", headers=OWNER_HEADERS)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "PERMISSION_DENIED"


async def test_delete_by_other_user_is_403(client, make_statement):
    statement = await make_statement()
    res = await client.delete(f"/api/statements/{statement.id}", headers=OTHER_HEADERS)
    assert res.status_code == 403


async def test_delete_twice_is_403(client, make_statement):
    statement = await make_statement()
    await client.delete(f"/api/statements/{statement.id}", headers=OWNER_HEADERS)
    res = await client.delete(f"/api/statements/{statement.id}", headers=OWNER_HEADERS)
    assert res.status_code == 403
    assert res.json()["error"]["details"]["reason"] == "DELETED"
