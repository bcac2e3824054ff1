from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import ProjectType


class ProjectTypeRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[ProjectType]:
        stmt = select(ProjectType).order_by(ProjectType.name)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, project_type_id: int) -> ProjectType | None:
        return await self._session.get(ProjectType, project_type_id)

    async def get_by_name(self, name: str) -> ProjectType | None:
        stmt = select(ProjectType).where(ProjectType.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(self, *, name: str) -> ProjectType:
        project_type = ProjectType(name=name)
        self._session.add(project_type)
        await self._session.flush()
        return project_type

    async def update(self, project_type: ProjectType, *, name: str) -> ProjectType:
        project_type.name = name
        await self._session.flush()
        return project_type

    async def delete(self, project_type: ProjectType) -> None:
        await self._session.delete(project_type)
        await self._session.flush()
