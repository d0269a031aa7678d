"""
Credential storage helpers for the auth service.

"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import ConflictError
from auth.models import CredentialRecord
from database.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Reads and writes ``users`` rows inside a caller-owned session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_credential(
        self, username: str, email: str, password_hash: str
    ) -> CredentialRecord:
        """
        Insert a new user row.

        Raises ``ConflictError`` when the username or email is taken; the
        unique constraints on the table are the source of truth.
        """
        user = User(username=username, email=email, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            logger.info("Rejected duplicate registration for %s", username)
            raise ConflictError("Username or email already registered") from exc
        return CredentialRecord.model_validate(user)

    async def find_credential_by_email(self, email: str) -> Optional[CredentialRecord]:
        result = await self._session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        return CredentialRecord.model_validate(user) if user is not None else None

    async def list_users(self) -> List[CredentialRecord]:
        result = await self._session.execute(select(User).order_by(User.created_at))
        return [CredentialRecord.model_validate(u) for u in result.scalars().all()]
