"""
trusts_auth.clients.auth_provider

HTTP client boundary for the authentication provider.

Responsibilities:
- Forward the caller's bearer credential to `POST /auth/authorise`.
- Turn 401 rejections into typed `AuthorisationException`s.
- Turn everything else that is not a 2xx into `AuthProviderError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from trusts_auth.auth.errors import (
    AuthorisationException,
    AuthProviderError,
    MissingBearerToken,
)
from trusts_auth.auth.predicates import Predicate, authorise_request_body
from trusts_auth.observability.logging import get_logger

log = get_logger(__name__)


class AuthProviderClient:
    """
    Bound to a single caller: every call carries that caller's `Authorization` header.
    """

    def __init__(
        self,
        *,
        base_url: str,
        http: httpx.AsyncClient,
        authorization: str | None,
        request_id: str | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http
        self._authorization = authorization
        self._request_id = request_id

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._authorization:
            headers["Authorization"] = self._authorization
        if self._request_id:
            headers["X-Request-ID"] = self._request_id
        return headers

    async def authorise(
        self,
        predicates: list[Predicate] | tuple[Predicate, ...] = (),
        retrievals: list[str] | tuple[str, ...] = (),
    ) -> dict[str, Any]:
        if not self._authorization:
            # The provider would answer the same; skip the round trip.
            raise MissingBearerToken()
        try:
            r = await self._http.post(
                f"{self._base_url}/auth/authorise",
                headers=self._headers(),
                json=authorise_request_body(predicates, retrievals),
            )
        except httpx.HTTPError as e:
            raise AuthProviderError(f"auth provider unreachable: {e!r}") from e

        if r.status_code == 401:
            exc = AuthorisationException.from_header(r.headers.get("WWW-Authenticate"))
            log.info("auth_provider_rejected", reason=exc.reason)
            raise exc
        if r.is_error:
            raise AuthProviderError(f"auth provider returned {r.status_code}")

        # A predicate-only call has nothing to retrieve; the provider may answer with an empty body.
        if not retrievals:
            return {}
        try:
            body = r.json()
        except ValueError as e:
            raise AuthProviderError("auth provider returned a non-JSON body") from e
        if not isinstance(body, dict):
            raise AuthProviderError("auth provider returned an unexpected body")
        return body


# --- Module Notes -----------------------------------------------------------
# Timeouts come from the shared AsyncClient created in the app lifespan. No retries here:
# a transient failure surfaces to the caller, who may retry the whole request.
