"""
invest_portal.db.repositories

Repository package.

Responsibilities:
- Thin async data-access classes, one per table.
"""

# Package marker; repositories are imported directly from submodules.
