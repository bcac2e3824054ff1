"""
invest_portal.access.projection

Authorization state shared with the presentation layer.

Responsibilities:
- Compute the advisory `canModify` flag from the same classifier the gate uses.
- Assemble the per-request shared props payload.
"""

from __future__ import annotations

from typing import Any

from invest_portal.access.classifier import classify
from invest_portal.auth.models import Principal


def can_modify(principal: Principal | None) -> bool:
    # UI hint only; enforcement stays with `access.gate.RequestGate`.
    return not classify(principal).read_only


def shared_props(
    principal: Principal | None,
    *,
    app_name: str,
    sidebar_cookie: str | None = None,
) -> dict[str, Any]:
    return {
        "name": app_name,
        "auth": {"user": principal.as_shared() if principal is not None else None},
        "canModify": can_modify(principal),
        "sidebarOpen": sidebar_cookie is None or sidebar_cookie == "true",
    }


# --- Module Notes -----------------------------------------------------------
# No `unreadNotificationsCount`: notifications are not part of this service.
