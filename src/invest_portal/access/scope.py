"""
invest_portal.access.scope

Region scoping for district-level users.

Responsibilities:
- Narrow list filters to the caller's district.
- Hide rows from other districts (404) and refuse writes into them (400).
"""

from __future__ import annotations

from fastapi import HTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from invest_portal.access.classifier import district_region_id
from invest_portal.auth.models import Principal

OUT_OF_DISTRICT_MESSAGE = "Вы можете добавить запись только в свой район."


def region_filter(principal: Principal | None, requested: int | None) -> int | None:
    # A scoped caller's district always wins over the requested filter.
    scoped = district_region_id(principal)
    return scoped if scoped is not None else requested


def ensure_visible(principal: Principal | None, region_id: int, *, detail: str) -> None:
    scoped = district_region_id(principal)
    if scoped is not None and region_id != scoped:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=detail)


def ensure_assignable(principal: Principal | None, region_id: int) -> None:
    scoped = district_region_id(principal)
    if scoped is not None and region_id != scoped:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=OUT_OF_DISTRICT_MESSAGE)
