"""
invest_portal.api.routers.roles

Role management endpoints (`roles.*`), administrators only.

Responsibilities:
- CRUD over the `roles` table.
- Refuse to delete a role that is still assigned to users.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

from invest_portal.access.deps import enforce_role_access
from invest_portal.api.deps import db_session
from invest_portal.auth.deps import get_principal
from invest_portal.db.models import Role
from invest_portal.db.repositories.roles import RoleRepo
from invest_portal.observability.logging import get_logger

log = get_logger(__name__)

ROLE_IN_USE_MESSAGE = "Невозможно удалить роль, так как она назначена пользователям."

router = APIRouter(
    prefix="/v1/roles",
    tags=["roles"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)


class RoleIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    display_name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class RoleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    display_name: str
    description: str | None


async def _get_or_404(repo: RoleRepo, role_id: int) -> Role:
    role = await repo.get(role_id)
    if role is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Role not found")
    return role


@router.get("", response_model=list[RoleOut], name="roles.index")
async def list_roles(session: AsyncSession = Depends(db_session)) -> list[Role]:
    return await RoleRepo(session).list_all()


@router.post("", response_model=RoleOut, status_code=HTTP_201_CREATED, name="roles.store")
async def create_role(body: RoleIn, session: AsyncSession = Depends(db_session)) -> Role:
    repo = RoleRepo(session)
    if await repo.get_by_name(body.name) is not None:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Role already exists")
    role = await repo.create(
        name=body.name,
        display_name=body.display_name,
        description=body.description,
    )
    await session.commit()
    log.info("role_created", role=role.name)
    return role


@router.get("/{role_id}", response_model=RoleOut, name="roles.show")
async def get_role(role_id: int, session: AsyncSession = Depends(db_session)) -> Role:
    return await _get_or_404(RoleRepo(session), role_id)


@router.put("/{role_id}", response_model=RoleOut, name="roles.update")
async def update_role(
    role_id: int,
    body: RoleIn,
    session: AsyncSession = Depends(db_session),
) -> Role:
    repo = RoleRepo(session)
    role = await _get_or_404(repo, role_id)
    existing = await repo.get_by_name(body.name)
    if existing is not None and existing.id != role.id:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Role already exists")
    await repo.update(
        role,
        name=body.name,
        display_name=body.display_name,
        description=body.description,
    )
    await session.commit()
    return role


@router.delete("/{role_id}", status_code=HTTP_204_NO_CONTENT, name="roles.destroy")
async def delete_role(role_id: int, session: AsyncSession = Depends(db_session)) -> None:
    repo = RoleRepo(session)
    role = await _get_or_404(repo, role_id)
    if await repo.count_users(role.id) > 0:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail=ROLE_IN_USE_MESSAGE)
    await repo.delete(role)
    await session.commit()
    log.info("role_deleted", role=role.name)
