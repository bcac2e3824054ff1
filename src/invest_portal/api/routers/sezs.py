"""
invest_portal.api.routers.sezs

Special economic zone registry (`sezs.*`) and its issue log (`sezs.issues.*`).

Responsibilities:
- CRUD for SEZs, narrowed to the caller's district for district-scoped users.
- Nested issues under `/v1/sezs/{sez_id}/issues`; the three-segment route names
  go through the same gate, so read-only roles may list issues but not file them.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

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
from invest_portal.db.models import IssueSeverity, IssueStatus, Sez, SezIssue, ZoneStatus
from invest_portal.db.repositories.regions import RegionRepo
from invest_portal.db.repositories.sez_issues import SezIssueRepo
from invest_portal.db.repositories.sezs import SezRepo

router = APIRouter(
    prefix="/v1/sezs",
    tags=["sezs"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)

NOT_FOUND = "SEZ not found"


class SezIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    region_id: int
    total_area: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    # SEZs are never "planned".
    status: Literal["active", "developing"] = "active"
    description: str | None = None


class SezOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    region_id: int
    total_area: Decimal | None
    status: ZoneStatus
    description: str | None


class SezIssueIn(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: str | None = Field(default=None, max_length=255)
    severity: IssueSeverity
    status: IssueStatus = IssueStatus.open


class SezIssueOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sez_id: int
    title: str
    description: str
    category: str | None
    severity: IssueSeverity
    status: IssueStatus


async def _get_or_404(session: AsyncSession, sez_id: int, principal: Principal) -> Sez:
    sez = await SezRepo(session).get(sez_id)
    if sez is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    ensure_visible(principal, sez.region_id, detail=NOT_FOUND)
    return sez


async def _check_region(session: AsyncSession, region_id: int, principal: Principal) -> None:
    ensure_assignable(principal, region_id)
    if await RegionRepo(session).get(region_id) is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown region")


@router.get("", response_model=list[SezOut], name="sezs.index")
async def list_sezs(
    region_id: int | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[Sez]:
    return await SezRepo(session).list_all(region_id=region_filter(principal, region_id))


@router.post("", response_model=SezOut, status_code=HTTP_201_CREATED, name="sezs.store")
async def create_sez(
    body: SezIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> Sez:
    await _check_region(session, body.region_id, principal)
    sez = await SezRepo(session).create(**body.model_dump())
    await session.commit()
    return sez


@router.get("/{sez_id}", response_model=SezOut, name="sezs.show")
async def get_sez(
    sez_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> Sez:
    return await _get_or_404(session, sez_id, principal)


@router.put("/{sez_id}", response_model=SezOut, name="sezs.update")
async def update_sez(
    sez_id: int,
    body: SezIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> Sez:
    sez = await _get_or_404(session, sez_id, principal)
    await _check_region(session, body.region_id, principal)
    await SezRepo(session).update(sez, **body.model_dump())
    await session.commit()
    return sez


@router.delete("/{sez_id}", status_code=HTTP_204_NO_CONTENT, name="sezs.destroy")
async def delete_sez(
    sez_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> None:
    sez = await _get_or_404(session, sez_id, principal)
    await SezRepo(session).delete(sez)
    await session.commit()


async def _get_issue_or_404(session: AsyncSession, sez: Sez, issue_id: int) -> SezIssue:
    issue = await SezIssueRepo(session).get(issue_id)
    if issue is None or issue.sez_id != sez.id:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Issue not found")
    return issue


@router.get("/{sez_id}/issues", response_model=list[SezIssueOut], name="sezs.issues.index")
async def list_sez_issues(
    sez_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[SezIssue]:
    sez = await _get_or_404(session, sez_id, principal)
    return await SezIssueRepo(session).list_for_sez(sez.id)


@router.post(
    "/{sez_id}/issues",
    response_model=SezIssueOut,
    status_code=HTTP_201_CREATED,
    name="sezs.issues.store",
)
async def create_sez_issue(
    sez_id: int,
    body: SezIssueIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> SezIssue:
    sez = await _get_or_404(session, sez_id, principal)
    issue = await SezIssueRepo(session).create(sez_id=sez.id, **body.model_dump())
    await session.commit()
    return issue


@router.put("/{sez_id}/issues/{issue_id}", response_model=SezIssueOut, name="sezs.issues.update")
async def update_sez_issue(
    sez_id: int,
    issue_id: int,
    body: SezIssueIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> SezIssue:
    sez = await _get_or_404(session, sez_id, principal)
    issue = await _get_issue_or_404(session, sez, issue_id)
    await SezIssueRepo(session).update(issue, **body.model_dump())
    await session.commit()
    return issue


@router.delete(
    "/{sez_id}/issues/{issue_id}",
    status_code=HTTP_204_NO_CONTENT,
    name="sezs.issues.destroy",
)
async def delete_sez_issue(
    sez_id: int,
    issue_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> None:
    sez = await _get_or_404(session, sez_id, principal)
    issue = await _get_issue_or_404(session, sez, issue_id)
    await SezIssueRepo(session).delete(issue)
    await session.commit()
