"""
invest_portal.api.routers.users

User management endpoints (`users.*`), administrators only.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from invest_portal.access.deps import enforce_role_access
from invest_portal.api.deps import db_session
from invest_portal.auth.deps import get_principal
from invest_portal.db.models import User
from invest_portal.db.repositories.regions import RegionRepo
from invest_portal.db.repositories.roles import RoleRepo
from invest_portal.db.repositories.users import UserRepo

router = APIRouter(
    prefix="/v1/users",
    tags=["users"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)


class UserIn(BaseModel):
    full_name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    role: str | None = Field(default=None, max_length=64)
    role_id: int | None = None
    region_id: int | None = None
    baskarma_type: Literal["district", "oblast"] | None = None


class RoleRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    display_name: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    role: str | None
    role_id: int | None
    region_id: int | None
    baskarma_type: str | None
    role_model: RoleRef | None


async def _get_or_404(repo: UserRepo, user_id: int) -> User:
    user = await repo.get(user_id)
    if user is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="User not found")
    return user


async def _check_references(session: AsyncSession, body: UserIn) -> None:
    if body.role_id is not None and await RoleRepo(session).get(body.role_id) is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown role")
    if body.region_id is not None and await RegionRepo(session).get(body.region_id) is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown region")


@router.get("", response_model=list[UserOut], name="users.index")
async def list_users(session: AsyncSession = Depends(db_session)) -> list[User]:
    return await UserRepo(session).list_all()


@router.post("", response_model=UserOut, status_code=HTTP_201_CREATED, name="users.store")
async def create_user(body: UserIn, session: AsyncSession = Depends(db_session)) -> User:
    repo = UserRepo(session)
    if await repo.get_by_email(body.email) is not None:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Email already registered")
    await _check_references(session, body)
    user = await repo.create(
        full_name=body.full_name,
        email=body.email,
        role=body.role,
        role_id=body.role_id,
        region_id=body.region_id,
        baskarma_type=body.baskarma_type,
    )
    user_id = user.id
    await session.commit()
    # Reload with role_model for the response.
    session.expire(user)
    return await _get_or_404(repo, user_id)


@router.get("/{user_id}", response_model=UserOut, name="users.show")
async def get_user(user_id: int, session: AsyncSession = Depends(db_session)) -> User:
    return await _get_or_404(UserRepo(session), user_id)


@router.put("/{user_id}", response_model=UserOut, name="users.update")
async def update_user(
    user_id: int,
    body: UserIn,
    session: AsyncSession = Depends(db_session),
) -> User:
    repo = UserRepo(session)
    user = await _get_or_404(repo, user_id)
    existing = await repo.get_by_email(body.email)
    if existing is not None and existing.id != user.id:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Email already registered")
    await _check_references(session, body)
    await repo.update(
        user,
        full_name=body.full_name,
        email=body.email,
        role=body.role,
        role_id=body.role_id,
        region_id=body.region_id,
        baskarma_type=body.baskarma_type,
    )
    await session.commit()
    session.expire(user)
    return await _get_or_404(repo, user_id)


@router.delete("/{user_id}", status_code=HTTP_204_NO_CONTENT, name="users.destroy")
async def delete_user(user_id: int, session: AsyncSession = Depends(db_session)) -> None:
    repo = UserRepo(session)
    await repo.delete(await _get_or_404(repo, user_id))
    await session.commit()
