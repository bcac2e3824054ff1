"""
invest_portal

Top-level package for the regional investment portal API.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Import-time side effects stay out of this file; the app is built by `api.app.create_app`.
