"""Error Envelopes - shape of validation failures produced by the global handlers.

Tests:
    - several invalid fields -> generic message with one entry per field
    - a single invalid field -> that field's message, without pydantic's prefix
"""

from .conftest import OWNER_HEADERS


async def test_multiple_field_errors(client, seed_profiles):
    res = await client.post("/api/statements", json={}, headers=OWNER_HEADERS)

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["message"] == "Invalid request data"
    fields = {f["field"] for f in error["details"]["fields"]}
    assert fields == {"politician_id", "statement_text", "statement_timestamp"}


async def test_single_field_error_uses_its_message(client, seed_politician, seed_profiles):
    res = await client.post(
        "/api/statements",
        json={
            "politician_id": str(seed_politician.id),
            "statement_text": "short",
            "statement_timestamp": "2024-01-15T10:30:00.000Z",
        },
        headers=OWNER_HEADERS,
    )
    error = res.json()["error"]
    assert error["message"] == "Statement text must be at least 10 characters"
    assert error["details"]["fields"][0]["type"] == "value_error"
