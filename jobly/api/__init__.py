"""
API package.
"""
from jobly.api.routes import api_router
from jobly.api.deps import (
    RequestContext,
    authenticate,
    require_logged_in,
    require_admin,
    require_self_or_admin,
)

__all__ = [
    "api_router",
    "RequestContext",
    "authenticate",
    "require_logged_in",
    "require_admin",
    "require_self_or_admin",
]
