from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_404_NOT_FOUND

from invest_portal.api.deps import db_session, settings_dep
from invest_portal.auth.jwt import JwtConfig, issue_token
from invest_portal.db.repositories.users import UserRepo
from invest_portal.settings import Settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(BaseModel):
    user_id: int = Field(ge=1)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/token", response_model=DevTokenResponse, name="dev.token")
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> DevTokenResponse:
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")
    if await UserRepo(session).get(body.user_id) is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="User not found")

    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=str(body.user_id),
        ttl=timedelta(minutes=body.ttl_minutes),
    )
    return DevTokenResponse(access_token=token)
