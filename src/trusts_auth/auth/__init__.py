"""
trusts_auth.auth

Caller identity package.

Responsibilities:
- Enrolment and caller models.
- Provider predicates and rejection reasons.
- Resolution of the per-request `AuthContext`.
"""

# Package marker.
