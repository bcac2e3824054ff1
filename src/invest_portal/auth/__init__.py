"""
invest_portal.auth

Authentication package.

Responsibilities:
- JWT issuing/validation.
- FastAPI dependencies that resolve the request `Principal`.
"""

# Package marker.
