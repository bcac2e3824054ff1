from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import IndustrialZone


class IndustrialZoneRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self, *, region_id: int | None = None) -> list[IndustrialZone]:
        stmt = select(IndustrialZone).order_by(IndustrialZone.name)
        if region_id is not None:
            stmt = stmt.where(IndustrialZone.region_id == region_id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, zone_id: int) -> IndustrialZone | None:
        return await self._session.get(IndustrialZone, zone_id)

    async def create(self, **fields: Any) -> IndustrialZone:
        zone = IndustrialZone(**fields)
        self._session.add(zone)
        await self._session.flush()
        return zone

    async def update(self, zone: IndustrialZone, **fields: Any) -> IndustrialZone:
        for key, value in fields.items():
            setattr(zone, key, value)
        await self._session.flush()
        return zone

    async def delete(self, zone: IndustrialZone) -> None:
        await self._session.delete(zone)
        await self._session.flush()
