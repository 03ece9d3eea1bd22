import pytest
from sqlalchemy.exc import OperationalError

from findmygym.services import health as health_module


@pytest.mark.asyncio
async def test_healthz_ok(app_client):
    r = await app_client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


@pytest.mark.asyncio
async def test_health_reports_env(app_client):
    r = await app_client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_readyz_ok(app_client):
    r = await app_client.get("/readyz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


@pytest.mark.asyncio
async def test_readyz_503_when_db_unreachable(app_client, monkeypatch):
    async def _boom(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("db down"))

    monkeypatch.setattr(health_module.AsyncSession, "execute", _boom)
    r = await app_client.get("/readyz")
    assert r.status_code == 503
    assert r.json() == {"detail": "Database unavailable"}
