"""
Authentication error taxonomy.

Every failure the auth core can produce is one of the classes below, so
callers branch on type (and on ``Unauthorized.reason``) instead of parsing
messages.
"""

from __future__ import annotations

from enum import Enum


class AuthError(Exception):
    """Base class for all authentication failures."""


class HashingError(AuthError):
    """The password hashing primitive itself failed."""


class ConfigurationError(AuthError):
    """Required auth configuration (the signing secret) is missing."""


class ConflictError(AuthError):
    """A credential with the same username or email already exists."""


class UnauthorizedReason(str, Enum):
    MISSING_CREDENTIALS = "missing_credentials"
    MALFORMED_TOKEN = "malformed_token"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    INVALID_CREDENTIALS = "invalid_credentials"


class Unauthorized(AuthError):
    """
    Authentication was refused.

    ``reason`` is for logs and tests only; clients always get a generic
    message for the path they hit.
    """

    def __init__(self, reason: UnauthorizedReason) -> None:
        super().__init__(reason.value)
        self.reason = reason
