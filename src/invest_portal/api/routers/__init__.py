"""
invest_portal.api.routers

HTTP routers. Resource routes are named `<resource>.<action>`; the request gate
keys its policy on those names.
"""

# Package marker.
