"""
invest_portal.access.classifier

Role classification shared by the request gate and the UI projection.

Responsibilities:
- Normalize free-text role labels (case, whitespace, Cyrillic spelling).
- Decide read-only and limited role-class membership.
"""

from __future__ import annotations

from dataclasses import dataclass

from invest_portal.auth.models import Principal

READ_ONLY_MARKERS: tuple[str, ...] = ("zamakim", "akim")
LIMITED_ROLE_NAMES: frozenset[str] = frozenset({"ispolnitel", "baskarma"})

# Russian + Kazakh lowercase letters; labels such as "Заместитель акима" must
# land on the same markers as their Latin machine names.
_CYRILLIC_TO_LATIN = str.maketrans(
    {
        "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "e",
        "ж": "zh", "з": "z", "и": "i", "й": "i", "к": "k", "л": "l", "м": "m",
        "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
        "ф": "f", "х": "kh", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "shch",
        "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
        "ә": "a", "ғ": "g", "қ": "k", "ң": "n", "ө": "o", "ұ": "u", "ү": "u",
        "һ": "h", "і": "i",
    }
)  # fmt: skip


def normalize_role_label(label: str | None) -> str:
    if not label:
        return ""
    return "".join(label.lower().split()).translate(_CYRILLIC_TO_LATIN)


def is_read_only_label(label: str | None) -> bool:
    normalized = normalize_role_label(label)
    if not normalized:
        return False
    # "zamakim" also contains "akim"; both markers stay so they can diverge later.
    return READ_ONLY_MARKERS[0] in normalized or READ_ONLY_MARKERS[1] in normalized


def is_limited_label(label: str | None) -> bool:
    # Exact, case-sensitive: these are stable machine names.
    return bool(label) and label in LIMITED_ROLE_NAMES


@dataclass(frozen=True, slots=True)
class RoleClassification:
    read_only: bool = False
    limited: bool = False

    @property
    def unrestricted(self) -> bool:
        return not (self.read_only or self.limited)


def classify(principal: Principal | None) -> RoleClassification:
    """
    Read-only membership considers every role candidate (legacy label, role
    name, role display name); limited membership only the normalized role name.
    """

    if principal is None:
        return RoleClassification()
    return RoleClassification(
        read_only=any(is_read_only_label(c) for c in principal.role_candidates),
        limited=is_limited_label(principal.role_name),
    )


def is_district_scoped(principal: Principal | None) -> bool:
    """
    Executors, and district-level baskarma, only see and edit their own region.
    Without a region_id nobody is scoped.
    """

    if principal is None or principal.region_id is None:
        return False
    if principal.role_name == "ispolnitel":
        return True
    return principal.role_name == "baskarma" and principal.baskarma_type == "district"


def district_region_id(principal: Principal | None) -> int | None:
    if not is_district_scoped(principal):
        return None
    return principal.region_id  # type: ignore[union-attr]
