from __future__ import annotations

import pytest

from trusts_auth.auth.errors import (
    AuthorisationException,
    BearerTokenExpired,
    FailedRelationship,
    InsufficientEnrolments,
    InternalError,
    MissingBearerToken,
    NoActiveSession,
)
from trusts_auth.auth.models import ACTIVATED, Enrolment, Enrolments, Role
from trusts_auth.auth.predicates import (
    authorise_request_body,
    delegated_enrolment_predicate,
    trust_relationship_predicate,
)
from trusts_auth.decisions.identifiers import URN, UTR


def test_role_from_affinity_group() -> None:
    assert Role.from_affinity_group("Agent") is Role.agent
    assert Role.from_affinity_group("Organisation") is Role.organisation
    assert Role.from_affinity_group("Individual") is Role.unsupported
    assert Role.from_affinity_group(None) is Role.unsupported


def test_enrolments_from_provider_json() -> None:
    enrolments = Enrolments.from_json(
        [
            {
                "key": "HMRC-TERS-ORG",
                "identifiers": [{"key": "SAUTR", "value": "0987654321"}],
                "state": "Activated",
            },
            {"key": "HMRC-AS-AGENT", "identifiers": [], "state": "NotYetActivated"},
        ]
    )
    assert len(enrolments) == 2
    assert enrolments.has_activated(
        key="HMRC-TERS-ORG", identifier_name="SAUTR", identifier_value="0987654321"
    )


def test_has_activated_requires_matching_value_and_state() -> None:
    enrolments = Enrolments.of(
        Enrolment("HMRC-TERS-ORG", {"SAUTR": "1234567890"}, ACTIVATED),
        Enrolment("HMRC-TERSNT-ORG", {"URN": "XATRUST12345678"}, state="Pending"),
    )
    assert not enrolments.has_activated(
        key="HMRC-TERS-ORG", identifier_name="SAUTR", identifier_value="0987654321"
    )
    assert not enrolments.has_activated(
        key="HMRC-TERSNT-ORG", identifier_name="URN", identifier_value="XATRUST12345678"
    )


def test_enrolment_without_state_is_not_activated() -> None:
    enrolments = Enrolments.from_json(
        [
            {
                "key": "HMRC-AS-AGENT",
                "identifiers": [{"key": "AgentReferenceNumber", "value": "SomeARN"}],
            },
            {
                "key": "HMRC-TERS-ORG",
                "identifiers": [{"key": "SAUTR", "value": "0987654321"}],
                "state": None,
            },
        ]
    )
    assert all(not e.is_activated for e in enrolments)
    assert enrolments.agent_reference_number() is None
    assert not enrolments.has_activated(
        key="HMRC-TERS-ORG", identifier_name="SAUTR", identifier_value="0987654321"
    )


def test_activation_state_is_case_insensitive() -> None:
    assert Enrolment("HMRC-AS-AGENT", {}, "activated").is_activated


def test_agent_reference_number() -> None:
    enrolments = Enrolments.of(
        Enrolment("HMRC-AS-AGENT", {"AgentReferenceNumber": "SomeARN"}, ACTIVATED),
    )
    assert enrolments.agent_reference_number() == "SomeARN"


@pytest.mark.parametrize(
    "enrolments",
    [
        Enrolments(),
        Enrolments.of(Enrolment("HMRC-AS-AGENT", {"AgentReferenceNumber": "SomeARN"}, "Pending")),
        Enrolments.of(Enrolment("HMRC-AS-AGENT", {"AgentReferenceNumber": ""}, ACTIVATED)),
        Enrolments.of(Enrolment("HMRC-TERS-ORG", {"AgentReferenceNumber": "SomeARN"}, ACTIVATED)),
    ],
)
def test_agent_reference_number_absent(enrolments: Enrolments) -> None:
    assert enrolments.agent_reference_number() is None


def test_delegated_predicate_for_utr() -> None:
    assert delegated_enrolment_predicate(UTR("0987654321")).to_json() == {
        "enrolment": "HMRC-TERS-ORG",
        "identifiers": [{"key": "SAUTR", "value": "0987654321"}],
        "state": "Activated",
        "delegatedAuthRule": "trust-auth",
    }


def test_delegated_predicate_for_urn() -> None:
    assert delegated_enrolment_predicate(URN("XATRUST12345678")).to_json() == {
        "enrolment": "HMRC-TERSNT-ORG",
        "identifiers": [{"key": "URN", "value": "XATRUST12345678"}],
        "state": "Activated",
        "delegatedAuthRule": "trust-auth",
    }


def test_relationship_predicate() -> None:
    assert trust_relationship_predicate(URN("XATRUST12345678")).to_json() == {
        "relationship": "Trusts",
        "businessKeys": [{"name": "urn", "value": "XATRUST12345678"}],
    }


def test_authorise_request_body_without_predicates() -> None:
    assert authorise_request_body(retrievals=("internalId",)) == {
        "authorise": [],
        "retrieve": ["internalId"],
    }


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ('MDTP detail="BearerTokenExpired"', BearerTokenExpired),
        ('MDTP detail="MissingBearerToken"', MissingBearerToken),
        ('MDTP detail="InsufficientEnrolments"', InsufficientEnrolments),
        ('MDTP detail="FailedRelationship"', FailedRelationship),
        ('MDTP detail="SomethingNew"', InternalError),
        (None, InternalError),
    ],
)
def test_exception_from_header(header: str | None, expected: type[AuthorisationException]) -> None:
    assert type(AuthorisationException.from_header(header)) is expected


def test_session_failures_share_a_base() -> None:
    assert isinstance(BearerTokenExpired(), NoActiveSession)
    assert not isinstance(InsufficientEnrolments(), NoActiveSession)
