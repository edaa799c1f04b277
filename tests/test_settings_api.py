import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.anyio

async def test_upsert_is_idempotent_on_key(test_client: AsyncClient, login):
    headers = await login()
    r = await test_client.post("/api/settings", headers=headers,
                               json={"key": "upi_id", "value": "old@upi", "category": "payment"})
    assert r.status_code == 200, r.text
    r = await test_client.post("/api/settings", headers=headers, json={"key": "upi_id", "value": "new@upi"})
    assert r.json()["value"] == "new@upi"
    assert r.json()["category"] == "payment"

    listed = (await test_client.get("/api/settings")).json()
    assert [(s["key"], s["value"]) for s in listed] == [("upi_id", "new@upi")]

async def test_public_read_sorted(test_client: AsyncClient, login):
    headers = await login()
    for key, category in (("site_title", "general"), ("contact_email", "contact"), ("bank_name", "payment")):
        await test_client.post("/api/settings", headers=headers,
                               json={"key": key, "value": "x", "category": category})
    keys = [s["key"] for s in (await test_client.get("/api/settings")).json()]
    assert keys == ["contact_email", "site_title", "bank_name"]
    assert (await test_client.get("/api/settings/bank_name")).json()["category"] == "payment"
    assert (await test_client.get("/api/settings/missing")).status_code == 404

async def test_update_and_delete(test_client: AsyncClient, login):
    headers = await login()
    await test_client.post("/api/settings", headers=headers, json={"key": "contact_phone", "value": "1"})
    r = await test_client.put("/api/settings/contact_phone", headers=headers, json={"value": "+91 99999 99999"})
    assert r.json()["value"] == "+91 99999 99999"

    assert (await test_client.put("/api/settings/nope", headers=headers, json={"value": 1})).status_code == 404
    assert (await test_client.delete("/api/settings/contact_phone", headers=headers)).status_code == 200
    assert (await test_client.get("/api/settings/contact_phone")).status_code == 404

async def test_locked_settings(test_client: AsyncClient, login, repo):
    headers = await login()
    await repo.insert_one("settings", {"key": "registration_no", "value": "REG-1",
                                       "category": "general", "is_editable": False})
    r = await test_client.put("/api/settings/registration_no", headers=headers, json={"value": "REG-2"})
    assert r.status_code == 403
    assert (await test_client.delete("/api/settings/registration_no", headers=headers)).status_code == 403
    r = await test_client.post("/api/settings", headers=headers, json={"key": "registration_no", "value": "x"})
    assert r.status_code == 403

async def test_settings_writes_need_permission(test_client: AsyncClient, login):
    assert (await test_client.post("/api/settings", json={"key": "a", "value": 1})).status_code == 401
    mod = await login("mod@example.com", role="moderator")
    assert (await test_client.post("/api/settings", headers=mod, json={"key": "a", "value": 1})).status_code == 403

async def test_bad_key(test_client: AsyncClient, login):
    headers = await login()
    r = await test_client.post("/api/settings", headers=headers, json={"key": "has space", "value": 1})
    assert r.status_code == 400

async def test_defaults_fill_only_missing(test_client: AsyncClient, login):
    headers = await login()
    await test_client.post("/api/settings", headers=headers,
                           json={"key": "upi_id", "value": "custom@upi", "category": "payment"})
    r = await test_client.post("/api/settings/defaults", headers=headers)
    assert r.status_code == 200
    assert "upi_id" not in r.json()["created"]
    assert len(r.json()["created"]) == 7
    assert (await test_client.get("/api/settings/upi_id")).json()["value"] == "custom@upi"

    again = await test_client.post("/api/settings/defaults", headers=headers)
    assert again.json()["created"] == []
