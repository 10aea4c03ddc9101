"""
trusts_auth.auth.models

Auth domain models.

Responsibilities:
- Define the caller identity (`AuthContext`) resolved once per request.
- Define enrolments as returned by the authentication provider.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

ACTIVATED = "Activated"

AGENT_SERVICE_KEY = "HMRC-AS-AGENT"
AGENT_REFERENCE_NUMBER = "AgentReferenceNumber"


class Role(enum.StrEnum):
    agent = "Agent"
    organisation = "Organisation"
    unsupported = "Unsupported"

    @classmethod
    def from_affinity_group(cls, group: str | None) -> Role:
        # Individuals (and anything the provider adds later) are not served by this gate.
        if group == cls.agent.value:
            return cls.agent
        if group == cls.organisation.value:
            return cls.organisation
        return cls.unsupported


@dataclass(frozen=True, slots=True)
class Enrolment:
    key: str
    identifiers: Mapping[str, str]
    state: str

    @property
    def is_activated(self) -> bool:
        return self.state.lower() == ACTIVATED.lower()

    def identifier(self, name: str) -> str | None:
        return self.identifiers.get(name)

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> Enrolment:
        identifiers = {
            str(i["key"]): str(i["value"]) for i in raw.get("identifiers", []) or []
        }
        return cls(
            key=str(raw["key"]),
            identifiers=identifiers,
            # A missing state is never read as activated.
            state=str(raw.get("state") or ""),
        )

    def __hash__(self) -> int:
        return hash((self.key, tuple(sorted(self.identifiers.items())), self.state))


@dataclass(frozen=True, slots=True)
class Enrolments:
    enrolments: frozenset[Enrolment] = frozenset()

    @classmethod
    def of(cls, *enrolments: Enrolment) -> Enrolments:
        return cls(frozenset(enrolments))

    @classmethod
    def from_json(cls, raw: Iterable[Mapping[str, Any]] | None) -> Enrolments:
        return cls(frozenset(Enrolment.from_json(e) for e in raw or []))

    def __iter__(self):
        return iter(self.enrolments)

    def __len__(self) -> int:
        return len(self.enrolments)

    def activated(self, key: str) -> list[Enrolment]:
        return [e for e in self.enrolments if e.key == key and e.is_activated]

    def has_activated(self, *, key: str, identifier_name: str, identifier_value: str) -> bool:
        return any(
            e.identifier(identifier_name) == identifier_value for e in self.activated(key)
        )

    def agent_reference_number(self) -> str | None:
        for e in self.activated(AGENT_SERVICE_KEY):
            arn = e.identifier(AGENT_REFERENCE_NUMBER)
            if arn:
                return arn
        return None


@dataclass(frozen=True, slots=True)
class AuthContext:
    """
    Authenticated caller identity, lifetime = one request.
    """

    internal_id: str
    role: Role
    enrolments: Enrolments = field(default_factory=Enrolments)


# --- Module Notes -----------------------------------------------------------
# Keep these models free of transport concerns; JSON parsing mirrors the provider's
# `allEnrolments` retrieval shape and nothing more.
