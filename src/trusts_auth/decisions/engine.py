"""
trusts_auth.decisions.engine

Authorization decision engine.

Responsibilities:
- Resolve the caller, then dispatch on role to the agent or organisation path.
- Call upstream checks sequentially; each call depends on the previous answer.
- Reduce everything to a single `AuthorizationOutcome`.

Never allows by default: `Allowed` is only returned after a positive delegated-authority
or relationship check for the exact identifier requested.
"""

from __future__ import annotations

from trusts_auth.auth.errors import AuthorisationException, AuthProviderError, NoActiveSession
from trusts_auth.auth.models import AuthContext, Role
from trusts_auth.auth.resolver import AuthContextResolver
from trusts_auth.decisions.checks import (
    ClaimStatusChecker,
    DelegatedAuthorityChecker,
    RelationshipChecker,
)
from trusts_auth.decisions.identifiers import TrustIdentifier, classify
from trusts_auth.decisions.outcomes import (
    AgentAllowed,
    Allowed,
    AuthorizationOutcome,
    ClaimStatus,
    DelegatedAuthority,
    Denied,
    Failed,
    FailureKind,
    RedirectTarget,
    RelationshipStatus,
)
from trusts_auth.observability.logging import get_logger

log = get_logger(__name__)

_UPSTREAM_ERROR = Failed(FailureKind.upstream_error)


class DecisionEngine:
    def __init__(
        self,
        *,
        resolver: AuthContextResolver,
        delegated: DelegatedAuthorityChecker,
        claims: ClaimStatusChecker,
        relationships: RelationshipChecker,
    ) -> None:
        self._resolver = resolver
        self._delegated = delegated
        self._claims = claims
        self._relationships = relationships

    async def agent_authorised(self) -> AuthorizationOutcome:
        """
        "Is this agent onboarded at all": no trust identifier in scope.
        """

        ctx = await self._resolve()
        if not isinstance(ctx, AuthContext):
            return ctx

        if ctx.role is not Role.agent:
            log.info("agent_query_denied", role=str(ctx.role))
            return Denied(RedirectTarget.unauthorised)

        arn = ctx.enrolments.agent_reference_number()
        if arn is None:
            log.info("agent_services_account_missing")
            return Denied(RedirectTarget.create_agent_services_account)

        log.info("agent_services_account_found")
        return AgentAllowed(arn)

    async def authorised_for_identifier(self, raw_identifier: str) -> AuthorizationOutcome:
        ctx = await self._resolve()
        if not isinstance(ctx, AuthContext):
            return ctx

        identifier = classify(raw_identifier)
        if ctx.role is Role.agent:
            return await self._authorise_agent(identifier)
        if ctx.role is Role.organisation:
            return await self._authorise_organisation(ctx, identifier)

        log.info("identifier_query_denied", role=str(ctx.role))
        return Denied(RedirectTarget.unauthorised)

    async def _resolve(self) -> AuthContext | Denied | Failed:
        try:
            ctx = await self._resolver.resolve()
        except NoActiveSession:
            raise
        except AuthorisationException as e:
            log.info("caller_rejected", reason=e.reason)
            return Denied(RedirectTarget.unauthorised)
        except AuthProviderError as e:
            log.warning("caller_resolution_failed", error=repr(e))
            return _UPSTREAM_ERROR
        return ctx

    async def _authorise_agent(self, identifier: TrustIdentifier) -> AuthorizationOutcome:
        authority = await self._delegated.check(identifier)
        if authority is DelegatedAuthority.authorised:
            return Allowed()
        if authority is DelegatedAuthority.error:
            return _UPSTREAM_ERROR

        # Not delegated: the claim status only decides which page explains why.
        status = await self._claims.check(identifier)
        if status is ClaimStatus.lookup_failed:
            return _UPSTREAM_ERROR
        if status is ClaimStatus.not_claimed:
            log.info("agent_denied", redirect=str(RedirectTarget.trust_not_claimed))
            return Denied(RedirectTarget.trust_not_claimed)
        log.info("agent_denied", redirect=str(RedirectTarget.agent_not_authorised))
        return Denied(RedirectTarget.agent_not_authorised)

    async def _authorise_organisation(
        self, ctx: AuthContext, identifier: TrustIdentifier
    ) -> AuthorizationOutcome:
        keys = identifier.keys
        enrolled = ctx.enrolments.has_activated(
            key=keys.service_key,
            identifier_name=keys.identifier_name,
            identifier_value=identifier.value,
        )

        if enrolled:
            relationship = await self._relationships.check(identifier)
            if relationship is RelationshipStatus.established:
                return Allowed()
            if relationship is RelationshipStatus.error:
                return _UPSTREAM_ERROR
            log.info("organisation_denied", redirect=str(RedirectTarget.maintain_this_trust))
            return Denied(RedirectTarget.maintain_this_trust)

        status = await self._claims.check(identifier)
        if status is ClaimStatus.lookup_failed:
            return _UPSTREAM_ERROR
        if status is ClaimStatus.already_claimed:
            log.info("organisation_denied", redirect=str(RedirectTarget.already_claimed_by_other))
            return Denied(RedirectTarget.already_claimed_by_other)
        log.info("organisation_denied", redirect=str(RedirectTarget.claim_a_trust))
        return Denied(RedirectTarget.claim_a_trust)


# --- Module Notes -----------------------------------------------------------
# `NoActiveSession` and `IdentityIncomplete` escape the engine: the first is an
# authentication failure (login redirect), the second a server error. Neither is a denial.
