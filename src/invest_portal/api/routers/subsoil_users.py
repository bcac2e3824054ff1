"""
invest_portal.api.routers.subsoil_users

Subsoil user (mining licence holder) registry (`subsoil-users.*`).
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, model_validator
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
from invest_portal.db.models import LicenseStatus, SubsoilUser
from invest_portal.db.repositories.regions import RegionRepo
from invest_portal.db.repositories.subsoil_users import SubsoilUserRepo

router = APIRouter(
    prefix="/v1/subsoil-users",
    tags=["subsoil-users"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)

NOT_FOUND = "Subsoil user not found"


class SubsoilUserIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    # Kazakhstan business identification number.
    bin: str = Field(pattern=r"^\d{12}$")
    region_id: int
    mineral_type: str = Field(min_length=1, max_length=255)
    license_status: LicenseStatus
    license_start: date | None = None
    license_end: date | None = None

    @model_validator(mode="after")
    def _license_period(self) -> SubsoilUserIn:
        if self.license_start and self.license_end and self.license_end < self.license_start:
            raise ValueError("license_end must not precede license_start")
        return self


class SubsoilUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    bin: str
    region_id: int
    mineral_type: str
    license_status: LicenseStatus
    license_start: date | None
    license_end: date | None


async def _get_or_404(session: AsyncSession, subsoil_user_id: int, principal: Principal) -> SubsoilUser:
    subsoil_user = await SubsoilUserRepo(session).get(subsoil_user_id)
    if subsoil_user is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    ensure_visible(principal, subsoil_user.region_id, detail=NOT_FOUND)
    return subsoil_user


async def _check_region(session: AsyncSession, region_id: int, principal: Principal) -> None:
    ensure_assignable(principal, region_id)
    if await RegionRepo(session).get(region_id) is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown region")


@router.get("", response_model=list[SubsoilUserOut], name="subsoil-users.index")
async def list_subsoil_users(
    region_id: int | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[SubsoilUser]:
    return await SubsoilUserRepo(session).list_all(region_id=region_filter(principal, region_id))


@router.post("", response_model=SubsoilUserOut, status_code=HTTP_201_CREATED, name="subsoil-users.store")
async def create_subsoil_user(
    body: SubsoilUserIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> SubsoilUser:
    await _check_region(session, body.region_id, principal)
    subsoil_user = await SubsoilUserRepo(session).create(**body.model_dump())
    await session.commit()
    return subsoil_user


@router.get("/{subsoil_user_id}", response_model=SubsoilUserOut, name="subsoil-users.show")
async def get_subsoil_user(
    subsoil_user_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> SubsoilUser:
    return await _get_or_404(session, subsoil_user_id, principal)


@router.put("/{subsoil_user_id}", response_model=SubsoilUserOut, name="subsoil-users.update")
async def update_subsoil_user(
    subsoil_user_id: int,
    body: SubsoilUserIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> SubsoilUser:
    subsoil_user = await _get_or_404(session, subsoil_user_id, principal)
    await _check_region(session, body.region_id, principal)
    await SubsoilUserRepo(session).update(subsoil_user, **body.model_dump())
    await session.commit()
    return subsoil_user


@router.delete(
    "/{subsoil_user_id}",
    status_code=HTTP_204_NO_CONTENT,
    name="subsoil-users.destroy",
)
async def delete_subsoil_user(
    subsoil_user_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> None:
    subsoil_user = await _get_or_404(session, subsoil_user_id, principal)
    await SubsoilUserRepo(session).delete(subsoil_user)
    await session.commit()
