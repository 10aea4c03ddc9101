"""
trusts_auth

Top-level package for the trusts authorisation decision service.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
