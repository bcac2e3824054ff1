"""
invest_portal.db.init_db

Dev/test schema bootstrap.

Responsibilities:
- Create tables when running outside prod (prod uses Alembic migrations).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from invest_portal.db import models  # noqa: F401  # register tables on Base.metadata
from invest_portal.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
