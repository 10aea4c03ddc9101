"""
trusts_auth.decisions.outcomes

Result types produced by the checkers and the decision engine.

Responsibilities:
- Define the tagged `AuthorizationOutcome` union returned by the engine.
- Define symbolic redirect targets (URL resolution happens at the HTTP boundary).
- Define per-checker result enums so engine branching stays exhaustive.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class RedirectTarget(enum.StrEnum):
    create_agent_services_account = "CREATE_AGENT_SERVICES_ACCOUNT"
    agent_not_authorised = "AGENT_NOT_AUTHORISED"
    trust_not_claimed = "TRUST_NOT_CLAIMED"
    already_claimed_by_other = "ALREADY_CLAIMED_BY_OTHER"
    claim_a_trust = "CLAIM_A_TRUST"
    maintain_this_trust = "MAINTAIN_THIS_TRUST"
    unauthorised = "UNAUTHORISED"


class FailureKind(enum.StrEnum):
    upstream_error = "UPSTREAM_ERROR"
    bad_request = "BAD_REQUEST"


@dataclass(frozen=True, slots=True)
class Allowed:
    pass


@dataclass(frozen=True, slots=True)
class AgentAllowed:
    arn: str


@dataclass(frozen=True, slots=True)
class Denied:
    redirect: RedirectTarget


@dataclass(frozen=True, slots=True)
class Failed:
    reason: FailureKind


AuthorizationOutcome = Allowed | AgentAllowed | Denied | Failed


class DelegatedAuthority(enum.StrEnum):
    authorised = "AUTHORISED"
    not_authorised = "NOT_AUTHORISED"
    error = "ERROR"


class ClaimStatus(enum.StrEnum):
    already_claimed = "ALREADY_CLAIMED"
    not_claimed = "NOT_CLAIMED"
    lookup_failed = "LOOKUP_FAILED"


class RelationshipStatus(enum.StrEnum):
    established = "ESTABLISHED"
    not_established = "NOT_ESTABLISHED"
    error = "ERROR"


# --- Module Notes -----------------------------------------------------------
# Outcomes own no resources; the API layer renders them immediately.
