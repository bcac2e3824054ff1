"""
tests.test_gate

Decision table for the request gate, without HTTP.
"""

from __future__ import annotations

import pytest

from invest_portal.access.gate import (
    DENY_RESOURCE_MESSAGE,
    DENY_WRITE_MESSAGE,
    AccessDecision,
    AccessDeniedError,
    GateContext,
    RequestGate,
)
from invest_portal.access.policy import DEFAULT_POLICY
from invest_portal.auth.models import Principal, Role

AKIM = Principal(subject="1", role=Role(name="akim", display_name="Аким"))
ISPOLNITEL = Principal(subject="2", role=Role(name="ispolnitel", display_name="Исполнитель"))
ADMIN = Principal(subject="3", role_label="admin", role=Role(name="superadmin", display_name="Суперадмин"))


@pytest.fixture
def gate() -> RequestGate:
    return RequestGate(DEFAULT_POLICY)


@pytest.mark.parametrize(
    ("principal", "route_name", "method", "expected"),
    [
        (AKIM, "users.index", "GET", AccessDecision.deny_resource),
        (AKIM, "regions.index", "GET", AccessDecision.deny_resource),
        (AKIM, "regions.show", "GET", AccessDecision.allow),
        (AKIM, "regions.update", "PUT", AccessDecision.deny_resource),
        (AKIM, "investment-projects.index", "GET", AccessDecision.allow),
        (AKIM, "investment-projects.update", "PUT", AccessDecision.deny_write),
        (AKIM, "investment-projects.create", "GET", AccessDecision.deny_write),
        (AKIM, None, "POST", AccessDecision.deny_write),
        (AKIM, None, "GET", AccessDecision.allow),
        (ISPOLNITEL, "roles.index", "GET", AccessDecision.deny_resource),
        (ISPOLNITEL, "users.store", "POST", AccessDecision.deny_resource),
        (ISPOLNITEL, "investment-projects.store", "POST", AccessDecision.allow),
        (ISPOLNITEL, "regions.index", "GET", AccessDecision.allow),
        (AKIM, "sezs.index", "GET", AccessDecision.allow),
        (AKIM, "sezs.issues.index", "GET", AccessDecision.allow),
        (AKIM, "sezs.issues.store", "POST", AccessDecision.deny_write),
        (AKIM, "investment-projects.tasks.completions.store", "POST", AccessDecision.deny_write),
        (AKIM, "investment-projects.tasks.completions.review", "PUT", AccessDecision.deny_write),
        (ISPOLNITEL, "investment-projects.tasks.completions.review", "PUT", AccessDecision.allow),
        (ISPOLNITEL, "subsoil-users.store", "POST", AccessDecision.allow),
        (ADMIN, "roles.destroy", "DELETE", AccessDecision.allow),
        (None, "users.index", "GET", AccessDecision.allow),
        (None, "investment-projects.store", "POST", AccessDecision.allow),
    ],
)
def test_evaluate(
    gate: RequestGate,
    principal: Principal | None,
    route_name: str | None,
    method: str,
    expected: AccessDecision,
) -> None:
    ctx = GateContext(principal=principal, route_name=route_name, method=method)
    assert gate.evaluate(ctx) is expected


def test_decisions_carry_status_and_message() -> None:
    assert AccessDecision.allow.status_code == 200
    assert AccessDecision.allow.message is None
    assert AccessDecision.deny_resource.status_code == 403
    assert AccessDecision.deny_resource.message == DENY_RESOURCE_MESSAGE
    assert AccessDecision.deny_write.status_code == 403
    assert AccessDecision.deny_write.message == DENY_WRITE_MESSAGE


def test_legacy_label_is_enough_for_read_only(gate: RequestGate) -> None:
    principal = Principal(subject="9", role_label="Заместитель акима")
    ctx = GateContext(principal=principal, route_name="investment-projects.store", method="POST")
    assert gate.evaluate(ctx) is AccessDecision.deny_write


def test_handle_passes_allowed_requests_through(gate: RequestGate) -> None:
    ctx = GateContext(principal=ISPOLNITEL, route_name="investment-projects.store", method="POST")
    assert gate.handle(ctx, lambda c: ("handled", c.route_name)) == (
        "handled",
        "investment-projects.store",
    )


def test_handle_stops_denied_requests(gate: RequestGate) -> None:
    calls: list[GateContext] = []
    ctx = GateContext(principal=AKIM, route_name="users.index", method="GET")

    with pytest.raises(AccessDeniedError) as excinfo:
        gate.handle(ctx, calls.append)

    assert calls == []
    assert excinfo.value.decision is AccessDecision.deny_resource
    assert excinfo.value.status_code == 403
    assert excinfo.value.message == DENY_RESOURCE_MESSAGE
