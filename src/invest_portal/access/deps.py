"""
invest_portal.access.deps

FastAPI wiring for the request gate.

Responsibilities:
- Expose the app-wide `RequestGate` as a dependency.
- Enforce the gate as a router-level dependency (before any endpoint body runs).
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from invest_portal.access.gate import AccessDeniedError, GateContext, RequestGate
from invest_portal.access.policy import resource_of
from invest_portal.auth.deps import get_optional_principal
from invest_portal.auth.models import Principal
from invest_portal.observability.logging import get_logger

log = get_logger(__name__)


def request_gate(request: Request) -> RequestGate:
    # Built once in `api.app.create_app` around the immutable route policy.
    return request.app.state.request_gate  # type: ignore[attr-defined]


def route_name_of(request: Request) -> str | None:
    # FastAPI stores the matched APIRoute in scope before dependencies run.
    route = request.scope.get("route")
    return getattr(route, "name", None) or None


def _proceed(ctx: GateContext) -> None:
    return None


async def enforce_role_access(
    request: Request,
    principal: Principal | None = Depends(get_optional_principal),
    gate: RequestGate = Depends(request_gate),
) -> None:
    ctx = GateContext(principal=principal, route_name=route_name_of(request), method=request.method)
    try:
        # The endpoint itself is the continuation; FastAPI runs it once this returns.
        gate.handle(ctx, _proceed)
    except AccessDeniedError as e:
        log.info(
            "access_denied",
            route=ctx.route_name,
            resource=resource_of(ctx.route_name),
            decision=e.decision.value,
            subject=principal.subject if principal is not None else None,
        )
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
