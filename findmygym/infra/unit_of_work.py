"""Read-side unit of work for gym listing, detail and compare."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from findmygym.repositories.interfaces import GymReadRepository
from findmygym.repositories.sqlalchemy import SqlAlchemyGymReadRepository


class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    gyms: GymReadRepository


class SqlAlchemyUnitOfWork:
    """Opens one session per block and exposes the gym read repository.

    Nothing is written through this boundary. Exiting closes the session
    without expiring loaded rows, but callers still build their results
    inside the block so lazy relationships can load.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self.gyms: GymReadRepository

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.gyms = SqlAlchemyGymReadRepository(self._session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        session, self._session = self._session, None
        if session is not None:
            await session.close()
