"""
trusts_auth.services

Side services that sit next to the decision engine.
"""

# Package marker.
