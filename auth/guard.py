"""
Request-time bearer token guard.

``AuthGuard.authenticate`` turns a raw ``Authorization`` header into
verified ``Claims`` or raises ``Unauthorized`` with the reason of the
first check that failed:

  1. header present with the ``Bearer`` scheme  → MISSING_CREDENTIALS
  2. token is a well-formed JWT                   → MALFORMED_TOKEN
  3. signature matches the shared secret          → INVALID_TOKEN
  4. ``exp`` is still in the future               → EXPIRED_TOKEN

No database lookup happens here: a correctly signed, unexpired token is
trusted for its whole lifetime.
"""

from __future__ import annotations

import logging
from typing import Optional

import jwt
from pydantic import ValidationError

from auth.errors import Unauthorized, UnauthorizedReason
from auth.tokens import Claims, Clock, require_secret, utc_now
from config.settings import AuthConfig

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from a ``Bearer`` header value, or ``""``."""
    parts = (authorization or "").strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return ""
    return parts[1].strip()


class AuthGuard:
    """Validates bearer tokens signed by a ``TokenIssuer`` with the same secret."""

    def __init__(self, auth_config: AuthConfig, clock: Optional[Clock] = None) -> None:
        self._secret = require_secret(auth_config)
        self._algorithm = auth_config.jwt_algorithm
        self._clock = clock or utc_now

    def authenticate(self, authorization: Optional[str]) -> Claims:
        token = extract_bearer_token(authorization)
        if not token:
            raise self._reject(UnauthorizedReason.MISSING_CREDENTIALS)

        # Expiry is checked below against our own clock, after the signature.
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError):
            raise self._reject(UnauthorizedReason.INVALID_TOKEN)
        except jwt.InvalidTokenError:
            raise self._reject(UnauthorizedReason.MALFORMED_TOKEN)

        try:
            claims = Claims.from_payload(payload)
        except (ValidationError, ValueError):
            raise self._reject(UnauthorizedReason.MALFORMED_TOKEN)

        if self._clock() >= claims.expires_at:
            raise self._reject(UnauthorizedReason.EXPIRED_TOKEN, claims.subject)

        return claims

    @staticmethod
    def _reject(reason: UnauthorizedReason, subject: str = "") -> Unauthorized:
        if subject:
            logger.info("Rejected bearer token for %s: %s", subject, reason.value)
        else:
            logger.info("Rejected bearer token: %s", reason.value)
        return Unauthorized(reason)
