"""
tests.conftest

Shared fixtures: an in-memory emulation of the upstream services and an app wired to it.

Responsibilities:
- Emulate the auth provider (`POST /auth/authorise`) and the enrolment store proxy with
  `httpx.MockTransport`, recording every upstream request.
- Build the FastAPI app against that transport with its lifespan running.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import pytest_asyncio

from trusts_auth.api.app import create_app
from trusts_auth.auth.predicates import Predicate
from trusts_auth.settings import Settings

AUTH_BASE_URL = "http://auth.test"
ENROLMENT_STORE_URL = "http://enrolment-store.test"
BEARER = "Bearer test-token"

AGENT_ENROLMENT = {
    "key": "HMRC-AS-AGENT",
    "identifiers": [{"key": "AgentReferenceNumber", "value": "SomeARN"}],
    "state": "Activated",
}


def trust_enrolment(key: str, name: str, value: str, state: str = "Activated") -> dict[str, Any]:
    return {"key": key, "identifiers": [{"key": name, "value": value}], "state": state}


def _predicate_key(raw: dict[str, Any]) -> str:
    return json.dumps(raw, sort_keys=True)


@dataclass
class FakeUpstreams:
    """
    `retrievals` answers the identity call; `session_rejection` makes it a 401 instead.
    Predicate calls succeed only for predicates registered via `grant`.
    """

    retrievals: dict[str, Any] = field(default_factory=dict)
    session_rejection: str | None = None
    granted: set[str] = field(default_factory=set)
    predicate_failures: dict[str, int] = field(default_factory=dict)
    users: dict[str, tuple[int, Any]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def identify(
        self,
        *,
        affinity_group: str | None,
        enrolments: list[dict[str, Any]] | None = None,
        internal_id: str | None = "id",
    ) -> None:
        self.retrievals = {"allEnrolments": list(enrolments or [])}
        if internal_id is not None:
            self.retrievals["internalId"] = internal_id
        if affinity_group is not None:
            self.retrievals["affinityGroup"] = affinity_group

    def grant(self, predicate: Predicate) -> None:
        self.granted.add(_predicate_key(predicate.to_json()))

    def fail_predicate(self, predicate: Predicate, status: int = 500) -> None:
        self.predicate_failures[_predicate_key(predicate.to_json())] = status

    def principals(self, enrolment_key: str, *ids: str) -> None:
        self.users[enrolment_key] = (200, {"principalUserIds": list(ids), "delegatedUserIds": []})

    def users_response(self, enrolment_key: str, status: int, body: Any = None) -> None:
        self.users[enrolment_key] = (status, body)

    def authorise_calls(self) -> list[dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path == "/auth/authorise"
        ]

    def predicate_calls(self) -> list[dict[str, Any]]:
        return [p for body in self.authorise_calls() for p in body["authorise"]]

    def store_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "enrolment-store.test"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "auth.test" and request.url.path == "/auth/authorise":
            return self._authorise(request)
        if request.url.host == "enrolment-store.test":
            return self._users(request)
        return httpx.Response(404)

    def _authorise(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body["retrieve"]:
            if self.session_rejection is not None:
                return _rejection(self.session_rejection)
            return httpx.Response(200, json=self.retrievals)

        predicate = body["authorise"][0]
        key = _predicate_key(predicate)
        if key in self.predicate_failures:
            return httpx.Response(self.predicate_failures[key])
        if key in self.granted:
            return httpx.Response(200)
        if "relationship" in predicate:
            return _rejection("FailedRelationship")
        return _rejection("InsufficientEnrolments")

    def _users(self, request: httpx.Request) -> httpx.Response:
        # .../enrolments/{service~name~value}/users
        enrolment_key = request.url.path.split("/")[-2]
        status, body = self.users.get(enrolment_key, (204, None))
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


def _rejection(reason: str) -> httpx.Response:
    return httpx.Response(401, headers={"WWW-Authenticate": f'MDTP detail="{reason}"'})


@pytest.fixture
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        auth_base_url=AUTH_BASE_URL,
        enrolment_store_proxy_url=ENROLMENT_STORE_URL,
        access_codes=["known-access-code"],
    )


@pytest_asyncio.fixture
async def client(settings: Settings, upstreams: FakeUpstreams) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings, transport=httpx.MockTransport(upstreams.handler))

    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport,
            base_url="http://test",
            headers={"Authorization": BEARER},
        ) as c:
            yield c
