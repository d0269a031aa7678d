"""
JWT creation.

Tokens are compact HS256 JWTs (``header.payload.signature``) produced
with PyJWT. The signing secret comes from ``AuthConfig`` which is built
once at startup from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import jwt
from pydantic import BaseModel, ConfigDict

from auth.errors import ConfigurationError
from config.settings import AuthConfig

logger = logging.getLogger(__name__)

TOKEN_TTL = timedelta(hours=1)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Claims(BaseModel):
    """Verified identity carried by a token."""

    model_config = ConfigDict(frozen=True)

    subject: str
    email: str
    username: str
    issued_at: datetime
    expires_at: datetime

    def to_payload(self) -> Dict[str, Any]:
        return {
            "sub": self.subject,
            "email": self.email,
            "username": self.username,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Claims":
        """
        Build claims from a decoded JWT payload.

        Raises ``ValueError`` (or pydantic's ``ValidationError``, a subclass)
        when a required claim is missing or has the wrong type.
        """
        iat, exp = payload.get("iat"), payload.get("exp")
        if not isinstance(iat, int) or not isinstance(exp, int):
            raise ValueError("iat and exp must be integer timestamps")
        try:
            issued_at = datetime.fromtimestamp(iat, tz=timezone.utc)
            expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"timestamp out of range: {exc}") from exc
        return cls(
            subject=payload.get("sub"),
            email=payload.get("email"),
            username=payload.get("username"),
            issued_at=issued_at,
            expires_at=expires_at,
        )


def require_secret(auth_config: AuthConfig) -> str:
    if not auth_config.jwt_secret.strip():
        raise ConfigurationError("JWT_SECRET must be set")
    return auth_config.jwt_secret


class TokenIssuer:
    """Signs one-hour access tokens for verified identities."""

    def __init__(self, auth_config: AuthConfig, clock: Optional[Clock] = None) -> None:
        self._secret = require_secret(auth_config)
        self._algorithm = auth_config.jwt_algorithm
        self._clock = clock or utc_now

    def issue(self, identity: Any, email: str, username: str) -> str:
        """Create a signed token for ``identity`` valid for ``TOKEN_TTL``."""
        issued_at = self._clock().replace(microsecond=0)
        claims = Claims(
            subject=str(identity),
            email=email,
            username=username,
            issued_at=issued_at,
            expires_at=issued_at + TOKEN_TTL,
        )
        token = jwt.encode(
            claims.to_payload(), self._secret, algorithm=self._algorithm
        )
        logger.debug("Issued token for %s (expires %s)", claims.subject, claims.expires_at)
        return token
