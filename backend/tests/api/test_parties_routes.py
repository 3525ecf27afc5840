"""Party Routes - listing, detail and creation.

Tests:
    - list returns data + count, ordered by name, cacheable for 5 minutes
    - detail 404s for unknown ids and 400s for malformed ones
    - creation requires auth, uppercases the colour, rejects duplicate names
"""

from uuid import uuid4

from speechkarma.models.party import Party

from .conftest import OWNER_HEADERS


async def test_list_parties(client, test_db, seed_party):
    test_db.add(Party(name="Blue Alliance"))
    await test_db.commit()

    res = await client.get("/api/parties")

    assert res.status_code == 200
    assert res.headers["cache-control"] == "public, max-age=300"
    body = res.json()
    assert body["count"] == 2
    assert [p["name"] for p in body["data"]] == ["Blue Alliance", "Green Party"]


async def test_list_parties_descending(client, test_db, seed_party):
    test_db.add(Party(name="Blue Alliance"))
    await test_db.commit()

    body = (await client.get("/api/parties?order=desc")).json()

    assert [p["name"] for p in body["data"]] == ["Green Party", "Blue Alliance"]


async def test_list_parties_rejects_unknown_sort(client):
    res = await client.get("/api/parties?sort=color_hex")
    assert res.status_code == 400


async def test_get_party(client, seed_party):
    res = await client.get(f"/api/parties/{seed_party.id}")
    data = res.json()["data"]
    assert data["abbreviation"] == "GP"
    assert data["created_at"].endswith("Z")


async def test_get_party_not_found(client):
    res = await client.get(f"/api/parties/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Party not found"


async def test_get_party_invalid_id(client):
    res = await client.get("/api/parties/xyz")
    assert res.status_code == 400


async def test_create_party(client):
    res = await client.post(
        "/api/parties",
        json={"name": " Red Party ", "abbreviation": "RP", "color_hex": "#ff0000"},
        headers=OWNER_HEADERS,
    )
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["name"] == "Red Party"
    assert data["color_hex"] == "#FF0000"


async def test_create_party_requires_auth(client):
    res = await client.post("/api/parties", json={"name": "Red Party"})
    assert res.status_code == 401


async def test_create_duplicate_party_name_is_400(client, seed_party):
    res = await client.post(
        "/api/parties", json={"name": "green party"}, headers=OWNER_HEADERS,
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"field": "name"}
