"""
invest_portal.access.policy

Declarative route policy table.

Responsibilities:
- Name the resources hidden from read-only roles and reserved for admins.
- Name the full routes exempt from those resource blocks.
- Recognize data-mutating routes by name suffix and HTTP method.
"""

from __future__ import annotations

from dataclasses import dataclass

SAFE_METHODS: frozenset[str] = frozenset({"GET", "HEAD"})


def resource_of(route_name: str | None) -> str | None:
    if not route_name:
        return None
    return route_name.split(".", 1)[0]


@dataclass(frozen=True, slots=True)
class RoutePolicy:
    """
    Route names follow `<resource>.<action>` (e.g. `regions.show`).
    A full route name in `allow_list` always beats a resource-level block.
    """

    read_only_blocked: tuple[str, ...]
    admin_only: tuple[str, ...]
    allow_list: tuple[str, ...]
    write_suffixes: tuple[str, ...]

    def resource_is_blocked(self, route_name: str | None, blocked: tuple[str, ...]) -> bool:
        if not route_name:
            return False
        if route_name in self.allow_list:
            return False
        return any(route_name == entry or route_name.startswith(entry + ".") for entry in blocked)

    def is_write_action(self, route_name: str | None, method: str) -> bool:
        if route_name and route_name.endswith(self.write_suffixes):
            return True
        # Unnamed or oddly named routes are still caught by their HTTP method.
        return method.upper() not in SAFE_METHODS


DEFAULT_POLICY = RoutePolicy(
    read_only_blocked=("regions", "project-types", "roles", "users"),
    admin_only=("project-types", "roles", "users"),
    allow_list=("regions.show",),
    write_suffixes=(".create", ".store", ".edit", ".update", ".destroy"),
)


# --- Module Notes -----------------------------------------------------------
# DEFAULT_POLICY is built once at import and stored on `app.state.route_policy` by the
# app factory; tests may build their own RoutePolicy and pass it to `RequestGate`.
