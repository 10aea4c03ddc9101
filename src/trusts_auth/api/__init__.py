"""
trusts_auth.api

API package for the trusts-auth service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and outcome rendering.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: dependency wiring + rendering; decisions live in `decisions`.
