"""
trusts_auth.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that checks the upstream HTTP client is open.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from trusts_auth.api.deps import http_from_app

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(http: httpx.AsyncClient = Depends(http_from_app)) -> dict[str, str]:
    # Upstreams are not probed: their availability is reported per decision as a 500.
    if http.is_closed:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="HTTP client closed")
    return {"status": "ready"}
