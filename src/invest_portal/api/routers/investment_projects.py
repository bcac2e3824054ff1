"""
invest_portal.api.routers.investment_projects

Investment project registry (`investment-projects.*`).

Responsibilities:
- List/read projects for every role (read-only roles included).
- Create/update/delete for roles allowed to modify data; the request gate
  turns those away for read-only roles before any handler here runs.
- Keep district-scoped users (executors, district baskarma) inside their region.
"""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
)

from invest_portal.access.deps import enforce_role_access
from invest_portal.access.scope import ensure_assignable, ensure_visible, region_filter
from invest_portal.api.deps import db_session
from invest_portal.auth.deps import get_principal
from invest_portal.auth.models import Principal
from invest_portal.db.models import InvestmentProject, ProjectStatus
from invest_portal.db.repositories.investment_projects import InvestmentProjectRepo
from invest_portal.db.repositories.project_types import ProjectTypeRepo
from invest_portal.db.repositories.regions import RegionRepo
from invest_portal.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(
    prefix="/v1/investment-projects",
    tags=["investment-projects"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)


class InvestmentProjectIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    region_id: int
    project_type_id: int | None = None
    total_investment: Decimal = Field(ge=0, max_digits=18, decimal_places=2)
    status: ProjectStatus = ProjectStatus.plan


class InvestmentProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    region_id: int
    project_type_id: int | None
    total_investment: Decimal
    status: ProjectStatus
    created_by: int


NOT_FOUND = "Investment project not found"


async def get_visible_project(
    session: AsyncSession, project_id: int, principal: Principal
) -> InvestmentProject:
    project = await InvestmentProjectRepo(session).get(project_id)
    if project is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    ensure_visible(principal, project.region_id, detail=NOT_FOUND)
    return project


async def _check_references(
    session: AsyncSession, body: InvestmentProjectIn, principal: Principal
) -> None:
    ensure_assignable(principal, body.region_id)
    if await RegionRepo(session).get(body.region_id) is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown region")
    if body.project_type_id is not None and await ProjectTypeRepo(session).get(body.project_type_id) is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown project type")


@router.get("", response_model=list[InvestmentProjectOut], name="investment-projects.index")
async def list_investment_projects(
    region_id: int | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[InvestmentProject]:
    return await InvestmentProjectRepo(session).list_all(
        region_id=region_filter(principal, region_id)
    )


@router.post(
    "",
    response_model=InvestmentProjectOut,
    status_code=HTTP_201_CREATED,
    name="investment-projects.store",
)
async def create_investment_project(
    body: InvestmentProjectIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> InvestmentProject:
    await _check_references(session, body, principal)
    project = await InvestmentProjectRepo(session).create(
        name=body.name,
        region_id=body.region_id,
        project_type_id=body.project_type_id,
        total_investment=body.total_investment,
        status=body.status,
        created_by=int(principal.subject),
    )
    await session.commit()
    log.info("investment_project_created", project_id=project.id, subject=principal.subject)
    return project


@router.get("/{project_id}", response_model=InvestmentProjectOut, name="investment-projects.show")
async def get_investment_project(
    project_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> InvestmentProject:
    return await get_visible_project(session, project_id, principal)


@router.put(
    "/{project_id}",
    response_model=InvestmentProjectOut,
    name="investment-projects.update",
)
async def update_investment_project(
    project_id: int,
    body: InvestmentProjectIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> InvestmentProject:
    project = await get_visible_project(session, project_id, principal)
    await _check_references(session, body, principal)
    await InvestmentProjectRepo(session).update(
        project,
        name=body.name,
        region_id=body.region_id,
        project_type_id=body.project_type_id,
        total_investment=body.total_investment,
        status=body.status,
    )
    await session.commit()
    return project


@router.delete(
    "/{project_id}",
    status_code=HTTP_204_NO_CONTENT,
    name="investment-projects.destroy",
)
async def delete_investment_project(
    project_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> None:
    project = await get_visible_project(session, project_id, principal)
    await InvestmentProjectRepo(session).delete(project)
    await session.commit()
