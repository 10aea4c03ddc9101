from __future__ import annotations

import json

import pytest

from trusts_auth.api.rendering import RedirectUrls, render_outcome
from trusts_auth.decisions.outcomes import (
    AgentAllowed,
    Allowed,
    Denied,
    Failed,
    FailureKind,
    RedirectTarget,
)
from trusts_auth.settings import Settings

urls = RedirectUrls.from_settings(Settings(env="test"))


def _body(outcome) -> tuple[int, dict]:
    response = render_outcome(outcome, urls)
    return response.status_code, json.loads(response.body)


def test_allowed() -> None:
    assert _body(Allowed()) == (200, {"authorised": True})


def test_agent_allowed() -> None:
    assert _body(AgentAllowed("SomeARN")) == (200, {"authorised": True, "arn": "SomeARN"})


@pytest.mark.parametrize("target", list(RedirectTarget))
def test_every_redirect_target_resolves_to_a_url(target: RedirectTarget) -> None:
    status, body = _body(Denied(target))
    assert status == 200
    assert body == {"authorised": False, "redirectUrl": urls.url_for(target)}
    assert body["redirectUrl"].startswith("http")


@pytest.mark.parametrize("reason", list(FailureKind))
def test_failures_are_server_errors(reason: FailureKind) -> None:
    status, _ = _body(Failed(reason))
    assert status == 500
