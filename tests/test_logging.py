from __future__ import annotations

import logging

from trusts_auth.observability.logging import _add_service_name, configure_logging


def test_service_name_is_added_without_overriding() -> None:
    processor = _add_service_name("trusts-auth")

    assert processor(None, "info", {"event": "x"})["service"] == "trusts-auth"
    assert processor(None, "info", {"event": "x", "service": "other"})["service"] == "other"


def test_httpx_request_logs_are_quieted() -> None:
    configure_logging(service_name="trusts-auth", level="DEBUG")

    assert logging.getLogger("httpx").level == logging.WARNING
