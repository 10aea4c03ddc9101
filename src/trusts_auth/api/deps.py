"""
trusts_auth.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide settings and the shared upstream HTTP client.
- Build the request-scoped decision engine bound to the caller's credential.
- Expose the immutable redirect URLs and access-code checker created at startup.
"""

from __future__ import annotations

import httpx
from fastapi import Depends, Request

from trusts_auth.api.rendering import RedirectUrls
from trusts_auth.auth.errors import UnsupportedAffinityGroup
from trusts_auth.auth.models import AuthContext, Role
from trusts_auth.auth.resolver import AuthContextResolver
from trusts_auth.clients.auth_provider import AuthProviderClient
from trusts_auth.clients.enrolment_store import EnrolmentStoreClient
from trusts_auth.decisions.checks import (
    ClaimStatusChecker,
    DelegatedAuthorityChecker,
    RelationshipChecker,
)
from trusts_auth.decisions.engine import DecisionEngine
from trusts_auth.services.access_codes import AccessCodeChecker
from trusts_auth.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def http_from_app(request: Request) -> httpx.AsyncClient:
    # The client is created in the app lifespan (see `trusts_auth.api.app.create_app`).
    return request.app.state.http  # type: ignore[attr-defined]


def redirect_urls_dep(request: Request) -> RedirectUrls:
    return request.app.state.redirect_urls  # type: ignore[attr-defined]


def access_code_checker_dep(request: Request) -> AccessCodeChecker:
    return request.app.state.access_codes  # type: ignore[attr-defined]


def auth_provider_dep(
    request: Request,
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(http_from_app),
) -> AuthProviderClient:
    return AuthProviderClient(
        base_url=settings.auth_base_url,
        http=http,
        authorization=request.headers.get("authorization"),
        request_id=getattr(request.state, "request_id", None),
    )


def enrolment_store_dep(
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(http_from_app),
) -> EnrolmentStoreClient:
    return EnrolmentStoreClient(base_url=settings.enrolment_store_proxy_url, http=http)


def resolver_dep(provider: AuthProviderClient = Depends(auth_provider_dep)) -> AuthContextResolver:
    return AuthContextResolver(provider=provider)


def decision_engine_dep(
    provider: AuthProviderClient = Depends(auth_provider_dep),
    store: EnrolmentStoreClient = Depends(enrolment_store_dep),
    resolver: AuthContextResolver = Depends(resolver_dep),
) -> DecisionEngine:
    return DecisionEngine(
        resolver=resolver,
        delegated=DelegatedAuthorityChecker(provider=provider),
        claims=ClaimStatusChecker(store=store),
        relationships=RelationshipChecker(provider=provider),
    )


async def require_session(
    resolver: AuthContextResolver = Depends(resolver_dep),
) -> AuthContext:
    # Agents and organisations only; the app's exception handlers render rejections.
    ctx = await resolver.resolve()
    if ctx.role is Role.unsupported:
        raise UnsupportedAffinityGroup()
    return ctx


# --- Module Notes -----------------------------------------------------------
# Nothing here is cached across requests: every engine is built fresh around the caller's
# own credential, so repeated requests see only upstream state.
