from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import SubsoilUser


class SubsoilUserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self, *, region_id: int | None = None) -> list[SubsoilUser]:
        stmt = select(SubsoilUser).order_by(SubsoilUser.name)
        if region_id is not None:
            stmt = stmt.where(SubsoilUser.region_id == region_id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, subsoil_user_id: int) -> SubsoilUser | None:
        return await self._session.get(SubsoilUser, subsoil_user_id)

    async def create(self, **fields: Any) -> SubsoilUser:
        subsoil_user = SubsoilUser(**fields)
        self._session.add(subsoil_user)
        await self._session.flush()
        return subsoil_user

    async def update(self, subsoil_user: SubsoilUser, **fields: Any) -> SubsoilUser:
        for key, value in fields.items():
            setattr(subsoil_user, key, value)
        await self._session.flush()
        return subsoil_user

    async def delete(self, subsoil_user: SubsoilUser) -> None:
        await self._session.delete(subsoil_user)
        await self._session.flush()
