"""
trusts_auth.clients.enrolment_store

HTTP client boundary for the enrolment store proxy.

Responsibilities:
- Look up the principal users holding a given enrolment.
- Report failures as data (`PrincipalLookup.error`) rather than raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

import httpx

from trusts_auth.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PrincipalLookup:
    count: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class EnrolmentStoreClient:
    def __init__(self, *, base_url: str, http: httpx.AsyncClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http

    def _users_url(self, service_key: str, identifier_name: str, identifier_value: str) -> str:
        # One path segment; reserved characters in the value must not end it early.
        enrolment_key = quote(f"{service_key}~{identifier_name}~{identifier_value}", safe="~")
        return (
            f"{self._base_url}/enrolment-store-proxy/enrolment-store/enrolments/"
            f"{enrolment_key}/users"
        )

    async def lookup_principals(
        self,
        *,
        service_key: str,
        identifier_name: str,
        identifier_value: str,
    ) -> PrincipalLookup:
        url = self._users_url(service_key, identifier_name, identifier_value)
        log.info("enrolment_store_lookup", service_key=service_key)
        try:
            r = await self._http.get(url, params={"type": "principal"})
        except httpx.HTTPError as e:
            return PrincipalLookup(error=f"transport: {e!r}")

        # 204: the enrolment exists nowhere, i.e. nobody holds it.
        if r.status_code == 204:
            return PrincipalLookup(count=0)
        if r.status_code != 200:
            return PrincipalLookup(error=f"status {r.status_code}")

        try:
            body = r.json()
        except ValueError:
            return PrincipalLookup(error="non-JSON body")
        principals = body.get("principalUserIds", []) if isinstance(body, dict) else None
        if not isinstance(principals, list):
            return PrincipalLookup(error="unexpected body shape")
        return PrincipalLookup(count=len(principals))


# --- Module Notes -----------------------------------------------------------
# Only principal users count as a claim; delegated (agent) users are ignored.
