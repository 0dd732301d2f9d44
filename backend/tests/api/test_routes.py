"""Command Routes — end-to-end tests through FastAPI, stores and SQLite.

Tests cover:
    - Status mapping: 201 create, 204 delete, 200 otherwise
    - Error envelope and status for Unauthorized, Validation, NotFound, Conflict, Forbidden
    - Cross-tenant requests see NotFound for flocks and Forbidden for purchases
"""

from datetime import date, datetime, timezone
from uuid import uuid4

TODAY = datetime.now(timezone.utc).date().isoformat()


async def _create_flock(client, identifier="Layers"):
    coop = await client.post("/api/v1/coops", json={"name": f"Coop {uuid4()}"})
    assert coop.status_code == 201
    flock = await client.post(
        f"/api/v1/coops/{coop.json()['id']}/flocks",
        json={
            "identifier": identifier, "hatch_date": "2026-01-01",
            "initial_hens": 6, "initial_chicks": 4,
        },
    )
    assert flock.status_code == 201
    return flock.json()


async def test_create_coop_returns_201(client, tenant_headers):
    res = await client.post("/api/v1/coops", json={"name": "Hen house"})
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Hen house"
    assert body["tenant_id"] == tenant_headers["X-Tenant-Id"]


async def test_missing_identity_is_401(client):
    res = await client.post(
        "/api/v1/coops", json={"name": "Hen house"}, headers={"X-User-Id": ""},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "Error.Unauthorized"


async def test_missing_tenant_is_401(client):
    res = await client.post(
        "/api/v1/coops", json={"name": "Hen house"}, headers={"X-Tenant-Id": ""},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Tenant not found"


async def test_blank_coop_name_is_400_with_violations(client):
    res = await client.post("/api/v1/coops", json={"name": " "})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "Error.Validation"
    assert error["violations"] == [{"field": "name", "message": "Coop name is required."}]


async def test_malformed_body_is_400(client):
    res = await client.post(
        f"/api/v1/coops/{uuid4()}/flocks", json={"hatch_date": "not-a-date"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "Error.Validation"


async def test_daily_record_lifecycle(client):
    flock = await _create_flock(client)
    created = await client.post(
        f"/api/v1/flocks/{flock['id']}/daily-records",
        json={"record_date": TODAY, "egg_count": 25},
    )
    assert created.status_code == 201
    assert created.json()["egg_count"] == 25

    duplicate = await client.post(
        f"/api/v1/flocks/{flock['id']}/daily-records",
        json={"record_date": TODAY, "egg_count": 3},
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["message"] == (
        "A daily record already exists for this flock on the specified date"
    )

    record_id = created.json()["id"]
    updated = await client.put(
        f"/api/v1/daily-records/{record_id}", json={"egg_count": 27},
    )
    assert updated.status_code == 200
    assert updated.json()["egg_count"] == 27

    deleted = await client.delete(f"/api/v1/daily-records/{record_id}")
    assert deleted.status_code == 204
    assert deleted.content == b""


async def test_flock_archive_and_mature(client):
    flock = await _create_flock(client)
    matured = await client.post(
        f"/api/v1/flocks/{flock['id']}/mature-chicks",
        json={"chicks_to_mature": 4, "hens": 2, "roosters": 2},
    )
    assert matured.status_code == 200
    assert matured.json()["current_hens"] == 8
    assert matured.json()["current_chicks"] == 0

    for _ in range(2):
        archived = await client.post(f"/api/v1/flocks/{flock['id']}/archive")
        assert archived.status_code == 200
        assert archived.json() == {"success": True}


async def test_archive_other_tenants_flock_is_404(client):
    flock = await _create_flock(client)
    res = await client.post(
        f"/api/v1/flocks/{flock['id']}/archive",
        headers={"X-Tenant-Id": str(uuid4())},
    )
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Flock not found"


async def test_duplicate_flock_identifier_is_409(client):
    flock = await _create_flock(client)
    res = await client.post(
        f"/api/v1/coops/{flock['coop_id']}/flocks",
        json={"identifier": "Layers", "hatch_date": "2026-01-01", "initial_hens": 1},
    )
    assert res.status_code == 409


async def test_delete_coop_with_flocks_is_400(client):
    flock = await _create_flock(client)
    res = await client.delete(f"/api/v1/coops/{flock['coop_id']}")
    assert res.status_code == 400


async def test_purchase_of_other_tenant_is_403(client):
    created = await client.post("/api/v1/purchases", json={
        "name": "Layer pellets", "type": "Feed", "amount": "24.90",
        "quantity": "25", "unit": "Kg", "purchase_date": date(2026, 1, 5).isoformat(),
    })
    assert created.status_code == 201
    res = await client.delete(
        f"/api/v1/purchases/{created.json()['id']}",
        headers={"X-Tenant-Id": str(uuid4())},
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "Error.Forbidden"


async def test_history_notes_patch(client):
    coop = await client.post("/api/v1/coops", json={"name": "Barn"})
    flock = await client.post(
        f"/api/v1/coops/{coop.json()['id']}/flocks",
        json={"identifier": "A", "hatch_date": "2026-01-01", "initial_hens": 2},
    )
    missing = await client.patch(
        f"/api/v1/flock-history/{uuid4()}/notes", json={"notes": "x"},
    )
    assert flock.status_code == 201
    assert missing.status_code == 404
