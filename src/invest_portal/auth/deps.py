"""
invest_portal.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Turn a bearer token into a typed `Principal` loaded from the users table.
- Offer an optional variant for surfaces that also serve anonymous callers.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED

from invest_portal.api.deps import db_session, settings_dep
from invest_portal.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from invest_portal.auth.models import Principal, Role
from invest_portal.db.models import User
from invest_portal.db.repositories.users import UserRepo
from invest_portal.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def principal_from_user(user: User) -> Principal:
    role = None
    if user.role_model is not None:
        role = Role(name=user.role_model.name, display_name=user.role_model.display_name)
    return Principal(
        subject=str(user.id),
        role_label=user.role,
        role=role,
        full_name=user.full_name,
        email=user.email,
        region_id=user.region_id,
        baskarma_type=user.baskarma_type,
    )


async def get_optional_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> Principal | None:
    # No bearer at all means an anonymous caller; a bad bearer is still an error.
    if creds is None or not creds.credentials:
        return None

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    if not subject.isdigit():
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")

    user = await UserRepo(session).get_with_role(int(subject))
    if user is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return principal_from_user(user)


def get_principal(principal: Principal | None = Depends(get_optional_principal)) -> Principal:
    if principal is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    return principal


# --- Module Notes -----------------------------------------------------------
# Authorization (who may reach which route) lives in `access.deps`, not here.
