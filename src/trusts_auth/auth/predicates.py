"""
trusts_auth.auth.predicates

Predicates sent to the authentication provider's `authorise` endpoint.

Responsibilities:
- Build enrolment (delegated authority) and relationship predicates for a trust identifier.
- Serialize predicates and retrievals into the provider's JSON request shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from trusts_auth.auth.models import ACTIVATED
from trusts_auth.decisions.identifiers import TrustIdentifier

DELEGATED_AUTH_RULE = "trust-auth"
TRUSTS_RELATIONSHIP = "Trusts"

RETRIEVE_INTERNAL_ID = "internalId"
RETRIEVE_AFFINITY_GROUP = "affinityGroup"
RETRIEVE_ALL_ENROLMENTS = "allEnrolments"


@dataclass(frozen=True, slots=True)
class EnrolmentPredicate:
    key: str
    identifiers: tuple[tuple[str, str], ...] = ()
    state: str = ACTIVATED
    delegated_auth_rule: str | None = None

    def with_identifier(self, name: str, value: str) -> EnrolmentPredicate:
        return EnrolmentPredicate(
            key=self.key,
            identifiers=(*self.identifiers, (name, value)),
            state=self.state,
            delegated_auth_rule=self.delegated_auth_rule,
        )

    def with_delegated_auth_rule(self, rule: str) -> EnrolmentPredicate:
        return EnrolmentPredicate(
            key=self.key,
            identifiers=self.identifiers,
            state=self.state,
            delegated_auth_rule=rule,
        )

    def to_json(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "enrolment": self.key,
            "identifiers": [{"key": k, "value": v} for k, v in self.identifiers],
            "state": self.state,
        }
        if self.delegated_auth_rule is not None:
            body["delegatedAuthRule"] = self.delegated_auth_rule
        return body


@dataclass(frozen=True, slots=True)
class BusinessKey:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class RelationshipPredicate:
    name: str
    business_keys: frozenset[BusinessKey]

    def to_json(self) -> dict[str, Any]:
        return {
            "relationship": self.name,
            "businessKeys": [
                {"name": bk.name, "value": bk.value}
                for bk in sorted(self.business_keys, key=lambda b: (b.name, b.value))
            ],
        }


Predicate = EnrolmentPredicate | RelationshipPredicate


def delegated_enrolment_predicate(identifier: TrustIdentifier) -> EnrolmentPredicate:
    keys = identifier.keys
    return (
        EnrolmentPredicate(keys.service_key)
        .with_identifier(keys.identifier_name, identifier.value)
        .with_delegated_auth_rule(DELEGATED_AUTH_RULE)
    )


def trust_relationship_predicate(identifier: TrustIdentifier) -> RelationshipPredicate:
    return RelationshipPredicate(
        name=TRUSTS_RELATIONSHIP,
        business_keys=frozenset({BusinessKey(identifier.keys.business_key, identifier.value)}),
    )


def authorise_request_body(
    predicates: list[Predicate] | tuple[Predicate, ...] = (),
    retrievals: list[str] | tuple[str, ...] = (),
) -> dict[str, Any]:
    # An empty predicate list means "any active session".
    return {
        "authorise": [p.to_json() for p in predicates],
        "retrieve": list(retrievals),
    }
