# tests/conftest.py
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from seva_portal.deps import get_repo
from seva_portal.main import app
from seva_portal.repos.inmemory import InMemoryRepo
from seva_portal.services.seed import ensure_admin

@pytest.fixture(scope="session")
def anyio_backend():
    # keep AnyIO on asyncio for the whole test session
    return "asyncio"

@pytest.fixture
def repo():
    return InMemoryRepo()

@pytest.fixture
async def test_client(repo):
    # every test gets an empty in-memory store
    app.dependency_overrides[get_repo] = lambda: repo
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app, raise_app_exceptions=True)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def login(test_client, repo):
    """Create an admin account and return bearer headers for it."""
    async def _login(email="admin@example.com", role="super_admin", permissions=None, password="secret123"):
        admin = await ensure_admin(repo, email, password, name=email.split("@")[0], role=role)
        if permissions is not None:
            await repo.update_one("admins", {"_id": admin["_id"]}, {"permissions": list(permissions)})
        r = await test_client.post("/api/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        # tests pick the session explicitly through headers
        test_client.cookies.clear()
        return {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _login
