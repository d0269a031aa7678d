"""
Shared fixtures: an in-memory user store and fast bcrypt.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

import auth.password
from auth.errors import ConflictError
from auth.models import CredentialRecord
from config.settings import AuthConfig

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
OTHER_SECRET = "another-secret-key-that-is-long-enough-for-hs256"


class InMemoryUserRepository:
    """Same interface as ``database.helpers.UserRepository``, backed by a dict."""

    def __init__(self) -> None:
        self.records: Dict[str, CredentialRecord] = {}

    async def insert_credential(
        self, username: str, email: str, password_hash: str
    ) -> CredentialRecord:
        for record in self.records.values():
            if record.username == username or record.email == email:
                raise ConflictError("Username or email already registered")
        record = CredentialRecord(
            user_id=uuid.uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self.records[email] = record
        return record

    async def find_credential_by_email(self, email: str) -> Optional[CredentialRecord]:
        return self.records.get(email)

    async def list_users(self) -> List[CredentialRecord]:
        return list(self.records.values())


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    # Minimum bcrypt cost keeps the suite quick; the algorithm is unchanged.
    monkeypatch.setattr(auth.password, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(jwt_secret=TEST_SECRET)


@pytest.fixture
def other_auth_config() -> AuthConfig:
    return AuthConfig(jwt_secret=OTHER_SECRET)


@pytest.fixture
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()
