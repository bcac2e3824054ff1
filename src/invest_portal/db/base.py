"""
invest_portal.db.base

Declarative base shared by every ORM model (and by Alembic metadata discovery).
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
