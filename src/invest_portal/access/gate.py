"""
invest_portal.access.gate

Per-request authorization decision.

Responsibilities:
- Run the ordered rule pipeline (read-only rule, then limited rule).
- Map each outcome to a status code and a fixed user-facing message.
- Short-circuit a request pipeline on denial (`RequestGate.handle`).
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from starlette.status import HTTP_200_OK, HTTP_403_FORBIDDEN

from invest_portal.access.classifier import RoleClassification, classify
from invest_portal.access.policy import RoutePolicy
from invest_portal.auth.models import Principal

T = TypeVar("T")

DENY_RESOURCE_MESSAGE = "У вас нет доступа к этому разделу."
DENY_WRITE_MESSAGE = "У вас нет прав на изменение данных."


class AccessDecision(enum.StrEnum):
    allow = "ALLOW"
    deny_resource = "DENY_RESOURCE"
    deny_write = "DENY_WRITE"

    @property
    def allowed(self) -> bool:
        return self is AccessDecision.allow

    @property
    def status_code(self) -> int:
        return HTTP_200_OK if self.allowed else HTTP_403_FORBIDDEN

    @property
    def message(self) -> str | None:
        return _MESSAGES.get(self)


_MESSAGES: dict[AccessDecision, str] = {
    AccessDecision.deny_resource: DENY_RESOURCE_MESSAGE,
    AccessDecision.deny_write: DENY_WRITE_MESSAGE,
}


class AccessDeniedError(Exception):
    def __init__(self, decision: AccessDecision) -> None:
        super().__init__(decision.message)
        self.decision = decision

    @property
    def status_code(self) -> int:
        return self.decision.status_code

    @property
    def message(self) -> str:
        return self.decision.message or ""


@dataclass(frozen=True, slots=True)
class GateContext:
    principal: Principal | None
    route_name: str | None
    method: str


Rule = Callable[[GateContext, RoleClassification], AccessDecision]


class RequestGate:
    """
    Stateless apart from the immutable policy, so one instance serves every request.
    """

    def __init__(self, policy: RoutePolicy) -> None:
        self._policy = policy
        self._rules: tuple[Rule, ...] = (self._read_only_rule, self._limited_rule)

    @property
    def policy(self) -> RoutePolicy:
        return self._policy

    def evaluate(self, ctx: GateContext) -> AccessDecision:
        # Anonymous traffic is left to the authentication layer.
        if ctx.principal is None:
            return AccessDecision.allow

        role_class = classify(ctx.principal)
        for rule in self._rules:
            decision = rule(ctx, role_class)
            if not decision.allowed:
                return decision
        return AccessDecision.allow

    def handle(self, ctx: GateContext, call_next: Callable[[GateContext], T]) -> T:
        decision = self.evaluate(ctx)
        if not decision.allowed:
            raise AccessDeniedError(decision)
        return call_next(ctx)

    def _read_only_rule(self, ctx: GateContext, role_class: RoleClassification) -> AccessDecision:
        if not role_class.read_only:
            return AccessDecision.allow
        if self._policy.resource_is_blocked(ctx.route_name, self._policy.read_only_blocked):
            return AccessDecision.deny_resource
        if self._policy.is_write_action(ctx.route_name, ctx.method):
            return AccessDecision.deny_write
        return AccessDecision.allow

    def _limited_rule(self, ctx: GateContext, role_class: RoleClassification) -> AccessDecision:
        if not role_class.limited:
            return AccessDecision.allow
        if self._policy.resource_is_blocked(ctx.route_name, self._policy.admin_only):
            return AccessDecision.deny_resource
        return AccessDecision.allow


# --- Module Notes -----------------------------------------------------------
# FastAPI wiring (route name + method extraction, 403 mapping) lives in `access.deps`.
