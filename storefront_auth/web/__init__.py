"""
Web - FastAPI routes, cookie transport and route guards.
"""

from storefront_auth.web.routes import (
    SessionGuard,
    create_app,
    create_auth_router,
    install_error_handlers,
)

__all__ = [
    "SessionGuard",
    "create_app",
    "create_auth_router",
    "install_error_handlers",
]
