"""
trusts_auth.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hold upstream base URLs, redirect destinations and the access-code allow-list.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TRUSTS_AUTH_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "trusts-auth"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 9794

    # Upstreams
    auth_base_url: str = "http://localhost:8500"
    enrolment_store_proxy_url: str = "http://localhost:7775"
    http_timeout_seconds: float = 10.0

    # Login redirect for callers without an active session
    login_url: str = "http://localhost:9949/auth-login-stub/gg-sign-in"
    login_continue_url: str = "http://localhost:9781/trusts-registration"
    login_origin: str = "trusts-frontend"

    # Redirect destinations returned in denial payloads
    create_agent_services_account_url: str = (
        "https://www.gov.uk/guidance/get-an-hmrc-agent-services-account"
    )
    agent_not_authorised_url: str = (
        "http://localhost:9788/maintain-a-trust/agent-not-authorised"
    )
    trust_not_claimed_url: str = "http://localhost:9788/maintain-a-trust/trust-not-claimed"
    already_claimed_url: str = "http://localhost:9788/maintain-a-trust/status/already-claimed"
    claim_a_trust_url: str = "http://localhost:9785/claim-a-trust"
    maintain_this_trust_url: str = (
        "http://localhost:9789/trusts-identity-verification/maintain-this-trust"
    )
    unauthorised_url: str = "http://localhost:9788/maintain-a-trust/unauthorised"

    # Access codes; JSON list when supplied via env.
    access_codes: list[str] = Field(default_factory=list, repr=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Settings are converted once into immutable values (`RedirectUrls`, `AccessCodeChecker`)
# when the app is created; request handlers never read env directly.
