"""
trusts_auth.api.app

FastAPI app factory for the trusts-auth service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Own the shared upstream HTTP client (created on startup, closed on shutdown).
- Map authentication failures to login/unauthorised redirects and server errors.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from trusts_auth import __version__
from trusts_auth.api.rendering import (
    ErrorResponse,
    RedirectUrls,
    login_redirect,
    unauthorised_redirect,
)
from trusts_auth.api.routers.health import router as health_router
from trusts_auth.api.routers.trust_auth import router as trust_auth_router
from trusts_auth.auth.errors import (
    AuthorisationException,
    AuthProviderError,
    IdentityIncomplete,
    NoActiveSession,
)
from trusts_auth.observability.logging import configure_logging, get_logger
from trusts_auth.observability.middleware import RequestContextMiddleware
from trusts_auth.services.access_codes import AccessCodeChecker
from trusts_auth.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        app.state.http = httpx.AsyncClient(
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )
        try:
            yield
        finally:
            await app.state.http.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="Trusts Auth",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Immutable per-process configuration, handed to requests via `api.deps`.
    app.state.settings = settings
    app.state.redirect_urls = RedirectUrls.from_settings(settings)
    app.state.access_codes = AccessCodeChecker(settings.access_codes)

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(trust_auth_router)

    _register_exception_handlers(app)
    return app


def _register_exception_handlers(app: FastAPI) -> None:
    # Handlers are looked up by MRO, so NoActiveSession wins over AuthorisationException.
    @app.exception_handler(NoActiveSession)
    async def _no_active_session(request: Request, exc: NoActiveSession) -> Response:
        log.info("no_active_session", reason=exc.reason)
        return login_redirect(request.app.state.redirect_urls)

    @app.exception_handler(AuthorisationException)
    async def _not_authorised(request: Request, exc: AuthorisationException) -> Response:
        log.info("caller_rejected", reason=exc.reason)
        return unauthorised_redirect(request.app.state.redirect_urls)

    @app.exception_handler(IdentityIncomplete)
    async def _identity_incomplete(_: Request, exc: IdentityIncomplete) -> Response:
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(detail=str(exc)).model_dump(),
        )

    @app.exception_handler(AuthProviderError)
    async def _auth_provider_error(_: Request, exc: AuthProviderError) -> Response:
        log.warning("auth_provider_error", error=repr(exc))
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(detail="UPSTREAM_ERROR").model_dump(),
        )


# --- Module Notes -----------------------------------------------------------
# Decision endpoints turn provider rejections into outcomes themselves; these handlers
# cover the session-only paths (access codes) and the failures the engine lets escape.
