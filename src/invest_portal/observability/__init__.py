"""
invest_portal.observability

Observability package.

Responsibilities:
- structlog configuration.
- Request-scoped log context.
"""

# Package marker.
