"""
invest_portal.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Settings and request-scoped DB session dependencies.
- Encapsulate app.state access (sessionmaker).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invest_portal.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The settings the app was built with (`create_app`), not a fresh env read.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Endpoints commit explicitly; anything uncommitted is rolled back on close.
    async with session_factory() as session:
        yield session
