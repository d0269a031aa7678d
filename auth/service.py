"""
Registration and login orchestration.

bcrypt is deliberately slow, so every hash / verify call is pushed to a
worker thread with ``asyncio.to_thread`` and never runs on the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List

from auth.errors import HashingError, Unauthorized, UnauthorizedReason
from auth.models import LoginResult, PublicUserView
from auth.password import hash_password, verify_password
from auth.tokens import TokenIssuer
from database.helpers import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repo: UserRepository, issuer: TokenIssuer) -> None:
        self._repo = repo
        self._issuer = issuer

    async def register(self, username: str, email: str, password: str) -> PublicUserView:
        """Hash the password and store a new credential record."""
        password_hash = await asyncio.to_thread(hash_password, password)
        record = await self._repo.insert_credential(username, email, password_hash)
        logger.info("Registered user %s (%s)", record.username, record.user_id)
        return PublicUserView.from_record(record)

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Check email + password and issue a token.

        An unknown email, a wrong password and an unreadable stored hash
        all raise the same ``Unauthorized(INVALID_CREDENTIALS)``.
        """
        record = await self._repo.find_credential_by_email(email)
        if record is None:
            logger.info("Login failed: unknown email")
            raise Unauthorized(UnauthorizedReason.INVALID_CREDENTIALS)

        try:
            matched = await asyncio.to_thread(
                verify_password, password, record.password_hash
            )
        except HashingError as exc:
            logger.warning("Stored hash for %s is unreadable: %s", record.user_id, exc)
            matched = False

        if not matched:
            logger.info("Login failed: wrong password for %s", record.user_id)
            raise Unauthorized(UnauthorizedReason.INVALID_CREDENTIALS)

        token = self._issuer.issue(record.user_id, record.email, record.username)
        logger.info("Login: %s (%s)", record.username, record.user_id)
        return LoginResult(
            token=token,
            user_id=record.user_id,
            email=record.email,
            username=record.username,
        )

    async def list_users(self) -> List[PublicUserView]:
        records = await self._repo.list_users()
        return [PublicUserView.from_record(r) for r in records]
