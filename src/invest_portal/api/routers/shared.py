"""
invest_portal.api.routers.shared

Per-request props for the presentation layer (current user, `canModify`, ...).

Responsibilities:
- Serve `GET /v1/shared` for anonymous and authenticated callers alike.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from invest_portal.access.projection import shared_props
from invest_portal.api.deps import settings_dep
from invest_portal.auth.deps import get_optional_principal
from invest_portal.auth.models import Principal
from invest_portal.settings import Settings

router = APIRouter(prefix="/v1", tags=["shared"])


@router.get("/shared", name="shared")
async def get_shared_props(
    request: Request,
    principal: Principal | None = Depends(get_optional_principal),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    return shared_props(
        principal,
        app_name=settings.app_name,
        sidebar_cookie=request.cookies.get("sidebar_state"),
    )


# --- Module Notes -----------------------------------------------------------
# `canModify` only hides UI affordances; the resource routers still run the request gate.
