"""
invest_portal.api.routers.project_types

Project type directory endpoints (`project-types.*`), administrators only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

from invest_portal.access.deps import enforce_role_access
from invest_portal.api.deps import db_session
from invest_portal.auth.deps import get_principal
from invest_portal.db.models import ProjectType
from invest_portal.db.repositories.project_types import ProjectTypeRepo

router = APIRouter(
    prefix="/v1/project-types",
    tags=["project-types"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)


class ProjectTypeIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class ProjectTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


async def _get_or_404(repo: ProjectTypeRepo, project_type_id: int) -> ProjectType:
    project_type = await repo.get(project_type_id)
    if project_type is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Project type not found")
    return project_type


@router.get("", response_model=list[ProjectTypeOut], name="project-types.index")
async def list_project_types(session: AsyncSession = Depends(db_session)) -> list[ProjectType]:
    return await ProjectTypeRepo(session).list_all()


@router.post(
    "",
    response_model=ProjectTypeOut,
    status_code=HTTP_201_CREATED,
    name="project-types.store",
)
async def create_project_type(
    body: ProjectTypeIn,
    session: AsyncSession = Depends(db_session),
) -> ProjectType:
    repo = ProjectTypeRepo(session)
    if await repo.get_by_name(body.name) is not None:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Project type already exists")
    project_type = await repo.create(name=body.name)
    await session.commit()
    return project_type


@router.get("/{project_type_id}", response_model=ProjectTypeOut, name="project-types.show")
async def get_project_type(
    project_type_id: int,
    session: AsyncSession = Depends(db_session),
) -> ProjectType:
    return await _get_or_404(ProjectTypeRepo(session), project_type_id)


@router.put("/{project_type_id}", response_model=ProjectTypeOut, name="project-types.update")
async def update_project_type(
    project_type_id: int,
    body: ProjectTypeIn,
    session: AsyncSession = Depends(db_session),
) -> ProjectType:
    repo = ProjectTypeRepo(session)
    project_type = await _get_or_404(repo, project_type_id)
    existing = await repo.get_by_name(body.name)
    if existing is not None and existing.id != project_type.id:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Project type already exists")
    await repo.update(project_type, name=body.name)
    await session.commit()
    return project_type


@router.delete(
    "/{project_type_id}",
    status_code=HTTP_204_NO_CONTENT,
    name="project-types.destroy",
)
async def delete_project_type(
    project_type_id: int,
    session: AsyncSession = Depends(db_session),
) -> None:
    repo = ProjectTypeRepo(session)
    await repo.delete(await _get_or_404(repo, project_type_id))
    await session.commit()
