from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import Region


class RegionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Region]:
        stmt = select(Region).order_by(Region.name)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, region_id: int) -> Region | None:
        return await self._session.get(Region, region_id)

    async def get_by_name(self, name: str) -> Region | None:
        stmt = select(Region).where(Region.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(self, *, name: str, color: str | None = None) -> Region:
        region = Region(name=name, color=color)
        self._session.add(region)
        await self._session.flush()
        return region

    async def update(self, region: Region, *, name: str, color: str | None) -> Region:
        region.name = name
        region.color = color
        await self._session.flush()
        return region

    async def delete(self, region: Region) -> None:
        await self._session.delete(region)
        await self._session.flush()
