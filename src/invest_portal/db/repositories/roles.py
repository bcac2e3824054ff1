from __future__ import annotations

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import Role, User


class RoleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Role]:
        stmt = select(Role).order_by(desc(Role.created_at), desc(Role.id))
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, role_id: int) -> Role | None:
        return await self._session.get(Role, role_id)

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(Role).where(Role.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(self, *, name: str, display_name: str, description: str | None = None) -> Role:
        role = Role(name=name, display_name=display_name, description=description)
        self._session.add(role)
        await self._session.flush()
        return role

    async def update(
        self,
        role: Role,
        *,
        name: str,
        display_name: str,
        description: str | None,
    ) -> Role:
        role.name = name
        role.display_name = display_name
        role.description = description
        await self._session.flush()
        return role

    async def count_users(self, role_id: int) -> int:
        stmt = select(func.count()).select_from(User).where(User.role_id == role_id)
        return int((await self._session.execute(stmt)).scalar_one())

    async def delete(self, role: Role) -> None:
        await self._session.delete(role)
        await self._session.flush()
