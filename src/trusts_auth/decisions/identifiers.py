"""
trusts_auth.decisions.identifiers

Trust identifier model and classification.

Responsibilities:
- Classify a caller-supplied string as a UTR or a URN.
- Map each identifier kind to the enrolment service, identifier name and
  business-key label used by every upstream query.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import ClassVar

_UTR_PATTERN = re.compile(r"^[0-9]{10}$")


class IdentifierKind(enum.StrEnum):
    utr = "UTR"
    urn = "URN"


@dataclass(frozen=True, slots=True)
class IdentifierKeys:
    service_key: str
    identifier_name: str
    business_key: str


# Taxable trusts are keyed by SA UTR, non-taxable trusts by URN.
IDENTIFIER_KEYS: dict[IdentifierKind, IdentifierKeys] = {
    IdentifierKind.utr: IdentifierKeys(
        service_key="HMRC-TERS-ORG",
        identifier_name="SAUTR",
        business_key="utr",
    ),
    IdentifierKind.urn: IdentifierKeys(
        service_key="HMRC-TERSNT-ORG",
        identifier_name="URN",
        business_key="urn",
    ),
}


@dataclass(frozen=True, slots=True)
class TrustIdentifier:
    kind: ClassVar[IdentifierKind]
    value: str

    @property
    def keys(self) -> IdentifierKeys:
        return IDENTIFIER_KEYS[self.kind]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class UTR(TrustIdentifier):
    kind: ClassVar[IdentifierKind] = IdentifierKind.utr


@dataclass(frozen=True, slots=True)
class URN(TrustIdentifier):
    kind: ClassVar[IdentifierKind] = IdentifierKind.urn


def is_valid_utr(raw: str) -> bool:
    return bool(_UTR_PATTERN.match(raw))


def classify(raw: str) -> TrustIdentifier:
    """
    Anything that is not a ten digit UTR is treated as a URN; the URN namespace
    is defined as "not a UTR", so classification never rejects a non-empty value.
    """

    if not raw:
        raise ValueError("identifier must be non-empty")
    if is_valid_utr(raw):
        return UTR(raw)
    return URN(raw)
