"""
trusts_auth.api.__main__

Entrypoint for running the service via `python -m trusts_auth.api` (or `trusts-auth`).

Responsibilities:
- Load settings and create the app.
- Start uvicorn with structlog-compatible logging config, trusting proxy headers
  from the frontends that front this service.
"""

from __future__ import annotations

import uvicorn

from trusts_auth.api.app import create_app
from trusts_auth.settings import get_settings


def main() -> None:
    settings = get_settings()

    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        proxy_headers=True,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
