# tests/conftest.py
import os
import random

# App settings are read at import time; point them at SQLite before importing findmygym
os.environ["TESTING"] = "1"
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.pop("SENTRY_DSN", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from findmygym import db
from findmygym.main import create_app
from findmygym.models import Base
from scripts.seed import seed_all


@pytest.fixture(scope="session", autouse=True)
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    # file-backed so every session in a test sees the same data
    db.configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield db.engine
    finally:
        await db.engine.dispose()


@pytest_asyncio.fixture(scope="function", name="session")
async def _session(engine):
    async with db.SessionLocal() as s:
        yield s
        if s.in_transaction():
            await s.rollback()


@pytest_asyncio.fixture
async def app_client(engine):
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def seeded(engine):
    """Full Bangalore demo data set (20 gyms, 8 users), deterministic."""
    async with db.SessionLocal() as sess:
        summary = await seed_all(sess, rng=random.Random(7), password_rounds=4)
        await sess.commit()
    return summary
