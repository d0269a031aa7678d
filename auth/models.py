"""
Value objects exchanged between the auth core and its collaborators.

``CredentialRecord`` is what the persistence layer hands back; the
password hash never leaves this module's callers except through it.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class CredentialRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    user_id: uuid.UUID
    username: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None


class PublicUserView(BaseModel):
    """A user as shown to clients, without the password hash."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    user_id: uuid.UUID
    username: str
    email: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: CredentialRecord) -> "PublicUserView":
        return cls(
            user_id=record.user_id,
            username=record.username,
            email=record.email,
            created_at=record.created_at,
        )


class LoginResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    user_id: uuid.UUID
    email: str
    username: str
