"""
trusts_auth.decisions

Authorisation decision package.

Responsibilities:
- Trust identifier classification, upstream checks, and the decision engine.
"""

# Package marker.
