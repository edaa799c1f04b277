import pytest
from httpx import AsyncClient

from seva_portal.core.config import settings
from seva_portal.services.seed import seed_demo

pytestmark = pytest.mark.anyio

async def test_overview_counts(test_client: AsyncClient, login, repo):
    await seed_demo(repo)
    await test_client.post("/api/volunteers", json={
        "first_name": "Asha", "last_name": "Rao", "email": "asha@example.com", "phone": "1", "age": 30})
    headers = await login("viewer@example.com", role="moderator")

    r = await test_client.get("/api/stats/overview", headers=headers)
    assert r.status_code == 200
    stats = r.json()
    assert stats["total_donations"] == 3
    assert stats["completed_donations"] == 3
    assert stats["total_amount"] == 8500
    assert stats["active_events"] == 3
    assert stats["upcoming_events"] == 3
    assert stats["pending_volunteers"] == 1
    assert stats["top_purposes"][0] == {"purpose": "General Donation", "count": 1, "amount": 5000}

async def test_seed_is_gated(test_client: AsyncClient, monkeypatch):
    assert (await test_client.get("/api/seed")).status_code == 200
    assert (await test_client.post("/api/seed")).status_code == 403

    monkeypatch.setattr(settings, "allow_seed", True)
    r = await test_client.post("/api/seed")
    assert r.status_code == 200
    assert r.json()["created"] == {"events": 3, "donations": 3, "team": 4, "settings": 8}

    # a second run leaves existing data alone
    r = await test_client.post("/api/seed")
    assert r.json()["created"] == {"events": 0, "donations": 0, "team": 0, "settings": 0}

    login = await test_client.post("/api/auth/login", json={
        "email": settings.seed_admin_email, "password": settings.seed_admin_password})
    assert login.status_code == 200
    assert login.json()["role"] == "super_admin"
