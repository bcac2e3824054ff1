"""
invest_portal.api.routers.industrial_zones

Industrial zone registry (`industrial-zones.*`), scoped to the caller's district
for district-level users.
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
from invest_portal.db.models import IndustrialZone, ZoneStatus
from invest_portal.db.repositories.industrial_zones import IndustrialZoneRepo
from invest_portal.db.repositories.regions import RegionRepo

router = APIRouter(
    prefix="/v1/industrial-zones",
    tags=["industrial-zones"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)

NOT_FOUND = "Industrial zone not found"


class IndustrialZoneIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    region_id: int
    total_area: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    status: ZoneStatus = ZoneStatus.planned
    description: str | None = None


class IndustrialZoneOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    region_id: int
    total_area: Decimal | None
    status: ZoneStatus
    description: str | None


async def _get_or_404(session: AsyncSession, zone_id: int, principal: Principal) -> IndustrialZone:
    zone = await IndustrialZoneRepo(session).get(zone_id)
    if zone is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    ensure_visible(principal, zone.region_id, detail=NOT_FOUND)
    return zone


async def _check_region(session: AsyncSession, region_id: int, principal: Principal) -> None:
    ensure_assignable(principal, region_id)
    if await RegionRepo(session).get(region_id) is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown region")


@router.get("", response_model=list[IndustrialZoneOut], name="industrial-zones.index")
async def list_industrial_zones(
    region_id: int | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[IndustrialZone]:
    return await IndustrialZoneRepo(session).list_all(region_id=region_filter(principal, region_id))


@router.post(
    "",
    response_model=IndustrialZoneOut,
    status_code=HTTP_201_CREATED,
    name="industrial-zones.store",
)
async def create_industrial_zone(
    body: IndustrialZoneIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> IndustrialZone:
    await _check_region(session, body.region_id, principal)
    zone = await IndustrialZoneRepo(session).create(**body.model_dump())
    await session.commit()
    return zone


@router.get("/{zone_id}", response_model=IndustrialZoneOut, name="industrial-zones.show")
async def get_industrial_zone(
    zone_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> IndustrialZone:
    return await _get_or_404(session, zone_id, principal)


@router.put("/{zone_id}", response_model=IndustrialZoneOut, name="industrial-zones.update")
async def update_industrial_zone(
    zone_id: int,
    body: IndustrialZoneIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> IndustrialZone:
    zone = await _get_or_404(session, zone_id, principal)
    await _check_region(session, body.region_id, principal)
    await IndustrialZoneRepo(session).update(zone, **body.model_dump())
    await session.commit()
    return zone


@router.delete("/{zone_id}", status_code=HTTP_204_NO_CONTENT, name="industrial-zones.destroy")
async def delete_industrial_zone(
    zone_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> None:
    zone = await _get_or_404(session, zone_id, principal)
    await IndustrialZoneRepo(session).delete(zone)
    await session.commit()
