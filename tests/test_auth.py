import pytest
from httpx import AsyncClient

from seva_portal.services.seed import ensure_admin

pytestmark = pytest.mark.anyio

async def test_health(test_client: AsyncClient):
    r = await test_client.get("/health")
    assert r.json() == {"ok": True}

async def test_login_rejects_bad_password(test_client: AsyncClient, repo):
    await ensure_admin(repo, "admin@example.com", "secret123")
    r = await test_client.post("/api/auth/login", json={"email": "admin@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}

async def test_inactive_admin_cannot_login(test_client: AsyncClient, repo):
    admin = await ensure_admin(repo, "old@example.com", "secret123", role="admin")
    await repo.update_one("admins", {"_id": admin["_id"]}, {"is_active": False})
    r = await test_client.post("/api/auth/login", json={"email": "old@example.com", "password": "secret123"})
    assert r.status_code == 401

async def test_admin_routes_need_a_session(test_client: AsyncClient):
    for path in ("/api/donations", "/api/members", "/api/volunteers", "/api/stats/overview", "/api/auth/me"):
        r = await test_client.get(path)
        assert r.status_code == 401, path
        assert r.json() == {"error": "Unauthorized"}

async def test_garbage_token_is_rejected(test_client: AsyncClient):
    r = await test_client.get("/api/donations", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid session"

async def test_role_permissions(test_client: AsyncClient, login):
    mod = await login("mod@example.com", role="moderator")
    r = await test_client.get("/api/donations", headers=mod)
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden"}
    r = await test_client.post("/api/events", headers=mod, json={
        "title": "Blood Donation Camp", "description": "Annual camp",
        "date": "2030-01-10T09:00:00Z", "time": "9:00 AM", "venue": "Town Hall",
    })
    assert r.status_code == 201, r.text

async def test_explicit_permissions_extend_role(test_client: AsyncClient, login):
    mod = await login("treasurer@example.com", role="moderator", permissions=["donations"])
    r = await test_client.get("/api/donations", headers=mod)
    assert r.status_code == 200

async def test_cookie_session_and_logout(test_client: AsyncClient, repo):
    await ensure_admin(repo, "admin@example.com", "secret123")
    r = await test_client.post("/api/auth/login", json={"email": "admin@example.com", "password": "secret123"})
    assert r.status_code == 200
    assert "seva_session" in r.cookies

    me = await test_client.get("/api/auth/me")
    assert me.status_code == 200
    body = me.json()
    assert body["email"] == "admin@example.com"
    assert "*" in body["permissions"]
    assert "password_hash" not in body

    admin = await repo.find_one("admins", {"email": "admin@example.com"})
    assert admin["last_login"] is not None

    await test_client.post("/api/auth/logout")
    assert (await test_client.get("/api/auth/me")).status_code == 401

async def test_admin_accounts_are_super_admin_only(test_client: AsyncClient, login):
    root = await login()
    payload = {"name": "Editor", "email": "editor@example.com", "password": "editor123",
               "role": "moderator", "permissions": ["documents"]}
    r = await test_client.post("/api/admins", headers=root, json=payload)
    assert r.status_code == 201, r.text
    assert r.json()["role"] == "moderator"

    dup = await test_client.post("/api/admins", headers=root, json=payload)
    assert dup.status_code == 409

    plain = await login("plain@example.com", role="admin")
    assert (await test_client.get("/api/admins", headers=plain)).status_code == 403
    listed = await test_client.get("/api/admins", headers=root)
    assert {a["email"] for a in listed.json()} >= {"admin@example.com", "editor@example.com"}

async def test_token_of_deactivated_admin_is_rejected(test_client: AsyncClient, login, repo):
    headers = await login("leaving@example.com", role="admin")
    assert (await test_client.get("/api/auth/me", headers=headers)).status_code == 200

    await repo.update_one("admins", {"email": "leaving@example.com"}, {"is_active": False})
    r = await test_client.get("/api/auth/me", headers=headers)
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}
