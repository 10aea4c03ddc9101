"""
trusts_auth.api.rendering

Renders engine outcomes as HTTP responses.

Responsibilities:
- Resolve symbolic redirect targets to configured URLs.
- Encode outcomes as the JSON contract consumed by the frontends.
- Map `Failed` outcomes to 500.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field
from starlette.status import HTTP_200_OK, HTTP_303_SEE_OTHER, HTTP_500_INTERNAL_SERVER_ERROR

from trusts_auth.decisions.outcomes import (
    AgentAllowed,
    Allowed,
    AuthorizationOutcome,
    Denied,
    Failed,
    RedirectTarget,
)
from trusts_auth.settings import Settings


@dataclass(frozen=True, slots=True)
class RedirectUrls:
    create_agent_services_account: str
    agent_not_authorised: str
    trust_not_claimed: str
    already_claimed_by_other: str
    claim_a_trust: str
    maintain_this_trust: str
    unauthorised: str
    login: str

    @classmethod
    def from_settings(cls, settings: Settings) -> RedirectUrls:
        query = urlencode({"continue": settings.login_continue_url, "origin": settings.login_origin})
        return cls(
            create_agent_services_account=settings.create_agent_services_account_url,
            agent_not_authorised=settings.agent_not_authorised_url,
            trust_not_claimed=settings.trust_not_claimed_url,
            already_claimed_by_other=settings.already_claimed_url,
            claim_a_trust=settings.claim_a_trust_url,
            maintain_this_trust=settings.maintain_this_trust_url,
            unauthorised=settings.unauthorised_url,
            login=f"{settings.login_url}?{query}",
        )

    def url_for(self, target: RedirectTarget) -> str:
        # Field names match the enum member names.
        return getattr(self, target.name)


class TrustAuthAllowedResponse(BaseModel):
    authorised: bool = True


class TrustAuthAgentAllowedResponse(BaseModel):
    authorised: bool = True
    arn: str


class TrustAuthDeniedResponse(BaseModel):
    authorised: bool = False
    redirect_url: str = Field(serialization_alias="redirectUrl")


class ErrorResponse(BaseModel):
    detail: str


def render_outcome(outcome: AuthorizationOutcome, urls: RedirectUrls) -> JSONResponse:
    if isinstance(outcome, Allowed):
        body: BaseModel = TrustAuthAllowedResponse()
    elif isinstance(outcome, AgentAllowed):
        body = TrustAuthAgentAllowedResponse(arn=outcome.arn)
    elif isinstance(outcome, Denied):
        body = TrustAuthDeniedResponse(redirect_url=urls.url_for(outcome.redirect))
    elif isinstance(outcome, Failed):
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(detail=str(outcome.reason)).model_dump(),
        )
    else:  # pragma: no cover
        raise TypeError(f"unknown outcome {outcome!r}")

    return JSONResponse(status_code=HTTP_200_OK, content=body.model_dump(by_alias=True))


def login_redirect(urls: RedirectUrls) -> RedirectResponse:
    return RedirectResponse(url=urls.login, status_code=HTTP_303_SEE_OTHER)


def unauthorised_redirect(urls: RedirectUrls) -> RedirectResponse:
    return RedirectResponse(url=urls.unauthorised, status_code=HTTP_303_SEE_OTHER)


# --- Module Notes -----------------------------------------------------------
# Denials are 200s: the calling frontend reads `redirectUrl` and sends the user
# there. Only engine failures are non-2xx.
