"""
Auth Routes - FastAPI boundary for the session principal manager.

The session id travels in an HTTP-only cookie. It is only a lookup key;
the principal itself stays server-side.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from storefront_auth.config import AuthSettings
from storefront_auth.domain.principal import SessionPrincipal
from storefront_auth.errors import AuthError, ErrorKind, InvalidInputError
from storefront_auth.sdk.manager import SessionPrincipalManager

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")


class LoginRequest(BaseModel):
    email: str
    password: str


class PrincipalResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    is_admin: bool = Field(default=False, alias="isAdmin")

    @classmethod
    def from_principal(cls, principal: SessionPrincipal) -> "PrincipalResponse":
        return cls(**principal.to_dict())


class MessageResponse(BaseModel):
    message: str


def _client_info(request: Request):
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


class SessionGuard:
    """
    Route dependencies that resolve the session cookie.

    Usage:
        guard = SessionGuard(manager)

        @app.get("/api/admin/orders")
        def orders(principal=Depends(guard.require_admin)):
            ...
    """

    def __init__(self, manager: SessionPrincipalManager, settings: Optional[AuthSettings] = None):
        self._manager = manager
        self._settings = settings or manager.settings

    def session_id(self, request: Request) -> Optional[str]:
        return request.cookies.get(self._settings.cookie_name) or None

    def set_cookie(self, response: Response, session_id: str):
        response.set_cookie(
            self._settings.cookie_name,
            session_id,
            max_age=self._settings.session_ttl,
            httponly=True,
            samesite="lax",
            secure=self._settings.cookie_secure,
        )

    def clear_cookie(self, response: Response):
        response.delete_cookie(
            self._settings.cookie_name,
            httponly=True,
            samesite="lax",
            secure=self._settings.cookie_secure,
        )

    def current_principal(self, request: Request, response: Response) -> Optional[SessionPrincipal]:
        """Principal for the request, or None. Re-issues the cookie (rolling expiry)."""
        session_id = self.session_id(request)
        principal = self._manager.resolve_principal(session_id)
        if principal is not None:
            self.set_cookie(response, session_id)
        return principal

    def require_user(self, request: Request, response: Response) -> SessionPrincipal:
        session_id = self.session_id(request)
        principal = self._manager.require_authenticated(session_id)
        self.set_cookie(response, session_id)
        return principal

    def require_admin(self, request: Request, response: Response) -> SessionPrincipal:
        session_id = self.session_id(request)
        principal = self._manager.require_admin(session_id)
        self.set_cookie(response, session_id)
        return principal


def create_auth_router(
    manager: SessionPrincipalManager,
    settings: Optional[AuthSettings] = None,
    guard: Optional[SessionGuard] = None,
) -> APIRouter:
    """
    Build the /api auth routes.

    Handlers are plain ``def`` so FastAPI runs them in its threadpool;
    password hashing never blocks the event loop.
    """
    guard = guard or SessionGuard(manager, settings)
    router = APIRouter(prefix="/api", tags=["auth"])

    @router.post("/register", status_code=201, response_model=PrincipalResponse)
    def register(body: RegisterRequest, request: Request, response: Response):
        ip_address, user_agent = _client_info(request)
        result = manager.register(
            body.email,
            body.password,
            first_name=body.first_name,
            last_name=body.last_name,
            phone_number=body.phone_number,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        guard.set_cookie(response, result.session_id)
        return PrincipalResponse.from_principal(result.principal)

    @router.post("/login", response_model=PrincipalResponse)
    def login(body: LoginRequest, request: Request, response: Response):
        ip_address, user_agent = _client_info(request)

        # A fresh login replaces whatever session the browser held
        previous = guard.session_id(request)
        result = manager.login(body.email, body.password, ip_address=ip_address, user_agent=user_agent)
        if previous:
            manager.logout(previous)

        guard.set_cookie(response, result.session_id)
        return PrincipalResponse.from_principal(result.principal)

    @router.post("/logout", response_model=MessageResponse)
    def logout(request: Request, response: Response):
        manager.logout(guard.session_id(request))
        guard.clear_cookie(response)
        return MessageResponse(message="Logged out")

    @router.get("/user", response_model=PrincipalResponse)
    def current_user(principal: SessionPrincipal = Depends(guard.require_user)):
        return PrincipalResponse.from_principal(principal)

    return router


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Map AuthError to its status code with a public message."""
    if exc.kind is ErrorKind.STORAGE:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.public_message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report a malformed request body as plain invalid input."""
    logger.info("%s %s rejected: %d invalid field(s)", request.method, request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=InvalidInputError.status_code,
        content={"message": InvalidInputError.public_message},
    )


def install_error_handlers(app: FastAPI):
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


def create_app(
    manager: SessionPrincipalManager,
    settings: Optional[AuthSettings] = None,
) -> FastAPI:
    """
    Build a FastAPI app with the auth routes and error handlers installed.

    Args:
        manager: Session principal manager
        settings: Cookie settings (defaults to the manager's)

    Returns:
        FastAPI app; ``app.state.guard`` holds the SessionGuard for other routes
    """
    app = FastAPI(title="Storefront Auth")
    guard = SessionGuard(manager, settings)
    app.state.guard = guard
    app.state.manager = manager

    app.include_router(create_auth_router(manager, settings, guard=guard))
    install_error_handlers(app)
    return app
