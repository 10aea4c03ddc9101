"""
trusts_auth.services.access_codes

Access-code allow-list check.

Responsibilities:
- Report whether a caller-supplied code is in the configured allow-list.
- Treat a missing or non-string code as a malformed request, not a denial.
"""

from __future__ import annotations

import hmac
from collections.abc import Iterable
from typing import Any

from trusts_auth.decisions.outcomes import Failed, FailureKind
from trusts_auth.observability.logging import get_logger

log = get_logger(__name__)


class AccessCodeChecker:
    def __init__(self, codes: Iterable[str]) -> None:
        self._codes: frozenset[str] = frozenset(c for c in codes if c)

    def authorise(self, code: Any) -> bool | Failed:
        if not isinstance(code, str) or not code:
            log.warning("access_code_missing")
            return Failed(FailureKind.bad_request)

        authorised = any(hmac.compare_digest(code, known) for known in self._codes)
        log.info("access_code_checked", authorised=authorised)
        return authorised
