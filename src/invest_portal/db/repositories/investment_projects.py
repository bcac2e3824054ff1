from __future__ import annotations

from decimal import Decimal

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import InvestmentProject, ProjectStatus


class InvestmentProjectRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self, *, region_id: int | None = None) -> list[InvestmentProject]:
        stmt = select(InvestmentProject).order_by(
            desc(InvestmentProject.created_at), desc(InvestmentProject.id)
        )
        if region_id is not None:
            stmt = stmt.where(InvestmentProject.region_id == region_id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, project_id: int) -> InvestmentProject | None:
        return await self._session.get(InvestmentProject, project_id)

    async def create(
        self,
        *,
        name: str,
        region_id: int,
        total_investment: Decimal,
        created_by: int,
        project_type_id: int | None = None,
        status: ProjectStatus = ProjectStatus.plan,
    ) -> InvestmentProject:
        project = InvestmentProject(
            name=name,
            region_id=region_id,
            project_type_id=project_type_id,
            total_investment=total_investment,
            status=status,
            created_by=created_by,
        )
        self._session.add(project)
        await self._session.flush()
        return project

    async def update(
        self,
        project: InvestmentProject,
        *,
        name: str,
        region_id: int,
        project_type_id: int | None,
        total_investment: Decimal,
        status: ProjectStatus,
    ) -> InvestmentProject:
        project.name = name
        project.region_id = region_id
        project.project_type_id = project_type_id
        project.total_investment = total_investment
        project.status = status
        await self._session.flush()
        return project

    async def delete(self, project: InvestmentProject) -> None:
        await self._session.delete(project)
        await self._session.flush()
