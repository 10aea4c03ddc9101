"""
trusts_auth.auth.resolver

Resolves the caller's `AuthContext` from the authentication provider.

Responsibilities:
- Retrieve internal id, affinity group and all enrolments in a single call.
- Map the affinity group to a `Role` (unknown groups become `Role.unsupported`).
- Fail loudly when a session carries no internal id.
"""

from __future__ import annotations

from trusts_auth.auth.errors import AuthProviderError, IdentityIncomplete
from trusts_auth.auth.models import AuthContext, Enrolments, Role
from trusts_auth.auth.predicates import (
    RETRIEVE_AFFINITY_GROUP,
    RETRIEVE_ALL_ENROLMENTS,
    RETRIEVE_INTERNAL_ID,
)
from trusts_auth.clients.auth_provider import AuthProviderClient
from trusts_auth.observability.logging import get_logger

log = get_logger(__name__)

_RETRIEVALS = (RETRIEVE_INTERNAL_ID, RETRIEVE_AFFINITY_GROUP, RETRIEVE_ALL_ENROLMENTS)


class AuthContextResolver:
    def __init__(self, *, provider: AuthProviderClient) -> None:
        self._provider = provider

    async def resolve(self) -> AuthContext:
        """
        Raises `NoActiveSession` (and subclasses) when the caller is not signed in,
        `IdentityIncomplete` when the session has no internal id, and
        `AuthProviderError` when the provider misbehaves.
        """

        body = await self._provider.authorise(retrievals=_RETRIEVALS)

        internal_id = body.get(RETRIEVE_INTERNAL_ID)
        if not internal_id:
            log.warning("identity_incomplete", detail="unable to retrieve internal id")
            raise IdentityIncomplete("Unable to retrieve internal id")

        group = body.get(RETRIEVE_AFFINITY_GROUP)
        role = Role.from_affinity_group(group)
        if role is Role.unsupported:
            log.info("caller_unsupported", affinity_group=group)

        try:
            enrolments = Enrolments.from_json(body.get(RETRIEVE_ALL_ENROLMENTS))
        except (KeyError, TypeError, AttributeError) as e:
            raise AuthProviderError("auth provider returned malformed enrolments") from e

        log.info("caller_identified", role=str(role), enrolment_count=len(enrolments))
        return AuthContext(internal_id=str(internal_id), role=role, enrolments=enrolments)
