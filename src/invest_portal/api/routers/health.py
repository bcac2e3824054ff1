"""
invest_portal.api.routers.health

Liveness (`/healthz`) and readiness (`/readyz`, DB round-trip) checks.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.api.deps import db_session

router = APIRouter()


@router.get("/healthz", name="health.live")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz", name="health.ready")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
