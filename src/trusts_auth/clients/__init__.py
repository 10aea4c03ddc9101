"""
trusts_auth.clients

Upstream client package.

Responsibilities:
- HTTP boundaries for the authentication provider and the enrolment store proxy.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Checkers depend on these clients, never on httpx directly.
