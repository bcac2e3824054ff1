"""
invest_portal.db

Persistence package (SQLAlchemy async).

Responsibilities:
- ORM models, engine/session setup, seeding and repositories.
"""

# Package marker.
