"""
API v1 endpoints.

Route prefix constants for consistent API versioning.
"""

API_V1_PREFIX: str = "/api"

# Module-specific prefixes
MEMBERS_PREFIX: str = f"{API_V1_PREFIX}/members"
NEWSLETTER_PREFIX: str = f"{API_V1_PREFIX}/newsletter"

__all__ = [
    "API_V1_PREFIX",
    "MEMBERS_PREFIX",
    "NEWSLETTER_PREFIX",
]
