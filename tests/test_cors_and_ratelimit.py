import pytest
from httpx import ASGITransport, AsyncClient

from findmygym.main import create_app
from findmygym.middleware.rate_limit import reset_limits


@pytest.fixture(autouse=True)
def _fresh_limits():
    reset_limits()
    yield
    reset_limits()


@pytest.mark.asyncio
async def test_cors_allowed_origin(monkeypatch):
    monkeypatch.setenv("ALLOW_ORIGINS", "http://localhost:3000,https://findmygym.example")
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.get("/health", headers={"Origin": "http://localhost:3000"})
        assert r.status_code == 200
        assert r.headers.get("access-control-allow-origin") == "http://localhost:3000"


@pytest.mark.asyncio
async def test_cors_disallowed_origin(monkeypatch):
    monkeypatch.setenv("ALLOW_ORIGINS", "https://findmygym.example")
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.get("/health", headers={"Origin": "http://evil.com"})
        assert r.status_code == 200
        assert r.headers.get("access-control-allow-origin") is None


@pytest.mark.asyncio
async def test_rate_limit_get_exceeded(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "1")
    monkeypatch.setenv("RATE_LIMIT_READ", "3/minute")
    monkeypatch.setenv("ALLOW_ORIGINS", "")

    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        for _ in range(3):
            r = await ac.get("/health")
            assert r.status_code == 200
            assert r.headers.get("X-RateLimit-Limit") == "3/minute"
        r = await ac.get("/health")
        assert r.status_code == 429
        body = r.json()
        assert body["error"]["code"] == "rate_limited"
        assert body["error"]["detail"]["method"] == "GET"


@pytest.mark.asyncio
async def test_rate_limit_counts_methods_separately(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "1")
    monkeypatch.setenv("RATE_LIMIT_READ", "1/minute")
    monkeypatch.setenv("RATE_LIMIT_WRITE", "1/minute")

    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        assert (await ac.get("/healthz")).status_code == 200
        assert (await ac.get("/healthz")).status_code == 429
        # 401 from the handler, but the write window is still open
        assert (await ac.post("/favorites", json={"gymId": 1})).status_code == 401
        assert (await ac.post("/favorites", json={"gymId": 1})).status_code == 429


@pytest.mark.asyncio
async def test_rate_limit_off_while_testing(app_client):
    for _ in range(70):
        r = await app_client.get("/healthz")
        assert r.status_code == 200
