"""
trusts_auth.auth.errors

Exceptions raised at the authentication provider boundary.

Responsibilities:
- Model the provider's rejection reasons as an exception hierarchy.
- Keep "no session" (`NoActiveSession`) distinct from "session without identity".
- Separate provider rejections from provider malfunction (`AuthProviderError`).
"""

from __future__ import annotations

import re

_DETAIL_PATTERN = re.compile(r'detail="([^"]+)"')


class AuthorisationException(Exception):
    reason: str = "AuthorisationException"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)

    @staticmethod
    def from_reason(reason: str) -> AuthorisationException:
        exc_type = _BY_REASON.get(reason)
        if exc_type is None:
            return InternalError(f"Unknown reason: {reason}")
        return exc_type()

    @staticmethod
    def from_header(header: str | None) -> AuthorisationException:
        # Header shape: MDTP detail="BearerTokenExpired"
        match = _DETAIL_PATTERN.search(header or "")
        if match is None:
            return InternalError("InvalidResponseHeader")
        return AuthorisationException.from_reason(match.group(1))


class NoActiveSession(AuthorisationException):
    reason = "NoActiveSession"


class BearerTokenExpired(NoActiveSession):
    reason = "BearerTokenExpired"


class MissingBearerToken(NoActiveSession):
    reason = "MissingBearerToken"


class InvalidBearerToken(NoActiveSession):
    reason = "InvalidBearerToken"


class SessionRecordNotFound(NoActiveSession):
    reason = "SessionRecordNotFound"


class InsufficientEnrolments(AuthorisationException):
    reason = "InsufficientEnrolments"


class FailedRelationship(AuthorisationException):
    reason = "FailedRelationship"


class InsufficientConfidenceLevel(AuthorisationException):
    reason = "InsufficientConfidenceLevel"


class UnsupportedAffinityGroup(AuthorisationException):
    reason = "UnsupportedAffinityGroup"


class UnsupportedCredentialRole(AuthorisationException):
    reason = "UnsupportedCredentialRole"


class UnsupportedAuthProvider(AuthorisationException):
    reason = "UnsupportedAuthProvider"


class IncorrectCredentialStrength(AuthorisationException):
    reason = "IncorrectCredentialStrength"


class InternalError(AuthorisationException):
    reason = "InternalError"


_BY_REASON: dict[str, type[AuthorisationException]] = {
    cls.reason: cls
    for cls in (
        BearerTokenExpired,
        MissingBearerToken,
        InvalidBearerToken,
        SessionRecordNotFound,
        InsufficientEnrolments,
        FailedRelationship,
        InsufficientConfidenceLevel,
        UnsupportedAffinityGroup,
        UnsupportedCredentialRole,
        UnsupportedAuthProvider,
        IncorrectCredentialStrength,
    )
}


class IdentityIncomplete(Exception):
    """
    A session exists but the provider returned no internal id.
    """


class AuthProviderError(Exception):
    """
    The provider failed to answer (transport error, 5xx, malformed body).
    """


# --- Module Notes -----------------------------------------------------------
# `InternalError` here is the provider's own reason code, not an HTTP 500 on our side.
