"""
trusts_auth.api.routers.trust_auth

Public authorisation endpoints called by the trusts frontends.

Responsibilities:
- `GET /agent-authorised`: is the agent onboarded with an agent services account?
- `GET /authorised/{identifier}`: may the caller act for this trust?
- `POST /authorise-access-code`: is the supplied code in the allow-list?
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from trusts_auth.api.deps import (
    access_code_checker_dep,
    decision_engine_dep,
    redirect_urls_dep,
    require_session,
)
from trusts_auth.api.rendering import RedirectUrls, render_outcome
from trusts_auth.decisions.engine import DecisionEngine
from trusts_auth.decisions.outcomes import Failed
from trusts_auth.services.access_codes import AccessCodeChecker

router = APIRouter(tags=["trust-auth"])


class AccessCodeResponse(BaseModel):
    authorised: bool


@router.get("/agent-authorised")
async def agent_authorised(
    engine: DecisionEngine = Depends(decision_engine_dep),
    urls: RedirectUrls = Depends(redirect_urls_dep),
) -> JSONResponse:
    outcome = await engine.agent_authorised()
    return render_outcome(outcome, urls)


@router.get("/authorised/{identifier}")
async def authorised_for_identifier(
    identifier: str,
    engine: DecisionEngine = Depends(decision_engine_dep),
    urls: RedirectUrls = Depends(redirect_urls_dep),
) -> JSONResponse:
    outcome = await engine.authorised_for_identifier(identifier)
    return render_outcome(outcome, urls)


@router.post("/authorise-access-code", dependencies=[Depends(require_session)])
async def authorise_access_code(
    request: Request,
    checker: AccessCodeChecker = Depends(access_code_checker_dep),
    urls: RedirectUrls = Depends(redirect_urls_dep),
) -> JSONResponse:
    # Body is a bare JSON string, e.g. "abc123".
    try:
        code = await request.json()
    except ValueError:
        code = None

    result = checker.authorise(code)
    if isinstance(result, Failed):
        return render_outcome(result, urls)
    return JSONResponse(content=AccessCodeResponse(authorised=result).model_dump())
