from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import Sez


class SezRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self, *, region_id: int | None = None) -> list[Sez]:
        stmt = select(Sez).order_by(Sez.name)
        if region_id is not None:
            stmt = stmt.where(Sez.region_id == region_id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, sez_id: int) -> Sez | None:
        return await self._session.get(Sez, sez_id)

    async def create(self, **fields: Any) -> Sez:
        sez = Sez(**fields)
        self._session.add(sez)
        await self._session.flush()
        return sez

    async def update(self, sez: Sez, **fields: Any) -> Sez:
        for key, value in fields.items():
            setattr(sez, key, value)
        await self._session.flush()
        return sez

    async def delete(self, sez: Sez) -> None:
        await self._session.delete(sez)
        await self._session.flush()
