# findmygym/db.py
from collections.abc import AsyncIterator

from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from findmygym.core.config import get_settings

DATABASE_URL = ""

engine: AsyncEngine
SessionLocal: async_sessionmaker[AsyncSession]

# Sync or driverless Postgres URLs are served through asyncpg
_ASYNCPG_PREFIXES = (
    "postgresql+psycopg://",
    "postgresql+psycopg2://",
    "postgresql://",
    "postgres://",
)


def to_async_url(database_url: str) -> str:
    for prefix in _ASYNCPG_PREFIXES:
        if database_url.startswith(prefix):
            return "postgresql+asyncpg://" + database_url[len(prefix) :]
    return database_url


def _asyncpg_connect_args(url: URL) -> tuple[URL, dict]:
    """Move libpq-only query options out of the URL.

    asyncpg takes ``sslmode`` as its ``ssl`` argument and rejects
    ``channel_binding`` outright.
    """
    query = dict(url.query)
    connect_args = {}
    if "sslmode" in query:
        connect_args["ssl"] = query.pop("sslmode")
    query.pop("channel_binding", None)
    return url._replace(query=query), connect_args


def _create_engine(database_url: str) -> AsyncEngine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(url)

    connect_args = {}
    if url.get_driver_name() == "asyncpg":
        url, connect_args = _asyncpg_connect_args(url)
    return create_async_engine(url, pool_pre_ping=True, connect_args=connect_args)


def configure_engine(database_url: str | None = None) -> None:
    """(Re)bind the module-level engine and session factory."""

    global engine, SessionLocal, DATABASE_URL

    DATABASE_URL = database_url or get_settings().database_url
    engine = _create_engine(to_async_url(DATABASE_URL))
    SessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_async_session() -> AsyncIterator[AsyncSession]:
    async with SessionLocal() as session:
        yield session


configure_engine()
