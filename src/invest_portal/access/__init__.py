"""
invest_portal.access

Role-based request gating.

Responsibilities:
- Classify principals into role classes (`classifier`).
- Hold the immutable route policy table (`policy`).
- Decide allow/deny per request (`gate`) and wire it into FastAPI (`deps`).
- Project the `canModify` UI flag from the same classification (`projection`).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `classifier` and `policy` are pure and import nothing from FastAPI; keep it that way.
