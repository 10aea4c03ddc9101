"""
trusts_auth.decisions.checks

Upstream checks consulted by the decision engine.

Responsibilities:
- Delegated authority: does this agent act for the trust?
- Claim status: has any principal already claimed the trust?
- Relationship: has this organisation passed trust identity verification?

Each checker makes exactly one upstream call and reduces it to a tagged result.
Negative answers, upstream malfunction and unexpected errors are returned, never
raised; only a lost session (`NoActiveSession`) and cancellation propagate.
"""

from __future__ import annotations

from trusts_auth.auth.errors import (
    AuthorisationException,
    AuthProviderError,
    FailedRelationship,
    InsufficientEnrolments,
    NoActiveSession,
)
from trusts_auth.auth.predicates import (
    delegated_enrolment_predicate,
    trust_relationship_predicate,
)
from trusts_auth.clients.auth_provider import AuthProviderClient
from trusts_auth.clients.enrolment_store import EnrolmentStoreClient
from trusts_auth.decisions.identifiers import TrustIdentifier
from trusts_auth.decisions.outcomes import ClaimStatus, DelegatedAuthority, RelationshipStatus
from trusts_auth.observability.logging import get_logger

log = get_logger(__name__)


class DelegatedAuthorityChecker:
    def __init__(self, *, provider: AuthProviderClient) -> None:
        self._provider = provider

    async def check(self, identifier: TrustIdentifier) -> DelegatedAuthority:
        predicate = delegated_enrolment_predicate(identifier)
        try:
            await self._provider.authorise([predicate])
        except NoActiveSession:
            raise
        except InsufficientEnrolments:
            log.info("agent_not_delegated", identifier_kind=str(identifier.kind))
            return DelegatedAuthority.not_authorised
        except (AuthorisationException, AuthProviderError) as e:
            log.warning(
                "delegated_authority_check_failed",
                identifier_kind=str(identifier.kind),
                error=repr(e),
            )
            return DelegatedAuthority.error
        except Exception:
            log.exception("delegated_authority_check_crashed", identifier_kind=str(identifier.kind))
            return DelegatedAuthority.error

        log.info("agent_delegated", identifier_kind=str(identifier.kind))
        return DelegatedAuthority.authorised


class ClaimStatusChecker:
    def __init__(self, *, store: EnrolmentStoreClient) -> None:
        self._store = store

    async def check(self, identifier: TrustIdentifier) -> ClaimStatus:
        keys = identifier.keys
        try:
            lookup = await self._store.lookup_principals(
                service_key=keys.service_key,
                identifier_name=keys.identifier_name,
                identifier_value=identifier.value,
            )
        except Exception:
            log.exception("claim_status_lookup_crashed", identifier_kind=str(identifier.kind))
            return ClaimStatus.lookup_failed
        if lookup.failed:
            log.warning(
                "claim_status_lookup_failed",
                identifier_kind=str(identifier.kind),
                error=lookup.error,
            )
            return ClaimStatus.lookup_failed
        if lookup.count == 0:
            return ClaimStatus.not_claimed
        return ClaimStatus.already_claimed


class RelationshipChecker:
    def __init__(self, *, provider: AuthProviderClient) -> None:
        self._provider = provider

    async def check(self, identifier: TrustIdentifier) -> RelationshipStatus:
        predicate = trust_relationship_predicate(identifier)
        try:
            await self._provider.authorise([predicate])
        except NoActiveSession:
            raise
        except FailedRelationship:
            log.info("relationship_not_established", identifier_kind=str(identifier.kind))
            return RelationshipStatus.not_established
        except (AuthorisationException, AuthProviderError) as e:
            log.warning(
                "relationship_check_failed",
                identifier_kind=str(identifier.kind),
                error=repr(e),
            )
            return RelationshipStatus.error
        except Exception:
            log.exception("relationship_check_crashed", identifier_kind=str(identifier.kind))
            return RelationshipStatus.error

        return RelationshipStatus.established


# --- Module Notes -----------------------------------------------------------
# Identifier values are not logged; the kind is enough to trace a branch and
# the request id ties the line back to the HTTP call.
