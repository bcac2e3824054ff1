"""
invest_portal.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity (`Principal`) and its normalized `Role`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Role:
    name: str
    display_name: str | None = None


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, loaded once per request.

    `role_label` is the legacy free-text role column; `role` is the normalized
    Role reference. The two may disagree for accounts that were never migrated.
    """

    subject: str
    role_label: str | None = None
    role: Role | None = None
    full_name: str | None = None
    email: str | None = None
    region_id: int | None = None
    baskarma_type: str | None = None

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role is not None else None

    @property
    def role_candidates(self) -> tuple[str, ...]:
        values = (
            self.role_label,
            self.role.name if self.role is not None else None,
            self.role.display_name if self.role is not None else None,
        )
        return tuple(v for v in values if v)

    def as_shared(self) -> dict[str, Any]:
        return {
            "id": self.subject,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role_label,
            "region_id": self.region_id,
            "baskarma_type": self.baskarma_type,
            "role_model": (
                {"name": self.role.name, "display_name": self.role.display_name}
                if self.role is not None
                else None
            ),
        }


# --- Module Notes -----------------------------------------------------------
# Principals are read-only inputs to `access.*`; nothing in the gate writes back to them.
