"""
invest_portal.api.routers.regions

Region directory endpoints (`regions.*`).

Read-only roles are blocked from the whole resource except `regions.show`;
limited roles may use it freely.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

from invest_portal.access.deps import enforce_role_access
from invest_portal.api.deps import db_session
from invest_portal.auth.deps import get_principal
from invest_portal.db.models import Region
from invest_portal.db.repositories.regions import RegionRepo

router = APIRouter(
    prefix="/v1/regions",
    tags=["regions"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)


class RegionIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    color: str | None = Field(default=None, max_length=32)


class RegionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str | None


async def _get_or_404(repo: RegionRepo, region_id: int) -> Region:
    region = await repo.get(region_id)
    if region is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Region not found")
    return region


@router.get("", response_model=list[RegionOut], name="regions.index")
async def list_regions(session: AsyncSession = Depends(db_session)) -> list[Region]:
    return await RegionRepo(session).list_all()


@router.post("", response_model=RegionOut, status_code=HTTP_201_CREATED, name="regions.store")
async def create_region(body: RegionIn, session: AsyncSession = Depends(db_session)) -> Region:
    repo = RegionRepo(session)
    if await repo.get_by_name(body.name) is not None:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Region already exists")
    region = await repo.create(name=body.name, color=body.color)
    await session.commit()
    return region


@router.get("/{region_id}", response_model=RegionOut, name="regions.show")
async def get_region(region_id: int, session: AsyncSession = Depends(db_session)) -> Region:
    return await _get_or_404(RegionRepo(session), region_id)


@router.put("/{region_id}", response_model=RegionOut, name="regions.update")
async def update_region(
    region_id: int,
    body: RegionIn,
    session: AsyncSession = Depends(db_session),
) -> Region:
    repo = RegionRepo(session)
    region = await _get_or_404(repo, region_id)
    existing = await repo.get_by_name(body.name)
    if existing is not None and existing.id != region.id:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Region already exists")
    await repo.update(region, name=body.name, color=body.color)
    await session.commit()
    return region


@router.delete("/{region_id}", status_code=HTTP_204_NO_CONTENT, name="regions.destroy")
async def delete_region(region_id: int, session: AsyncSession = Depends(db_session)) -> None:
    repo = RegionRepo(session)
    await repo.delete(await _get_or_404(repo, region_id))
    await session.commit()
