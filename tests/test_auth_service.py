"""
Tests for register / login orchestration.
"""

import asyncio

import pytest
from unittest.mock import patch

from auth.errors import ConflictError, HashingError, Unauthorized, UnauthorizedReason
from auth.guard import AuthGuard
from auth.models import CredentialRecord
from auth.service import AuthService
from auth.tokens import TokenIssuer


@pytest.fixture
def service(repo, auth_config) -> AuthService:
    return AuthService(repo, TokenIssuer(auth_config))


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_public_view(self, service, repo):
        user = await service.register("alice", "alice@x.com", "secret123")
        assert user.username == "alice"
        assert user.email == "alice@x.com"
        assert "password_hash" not in user.model_dump()

        stored = repo.records["alice@x.com"]
        assert stored.password_hash != "secret123"
        assert stored.password_hash.startswith("$2b$")

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, service):
        await service.register("alice", "alice@x.com", "secret123")
        with pytest.raises(ConflictError):
            await service.register("alice2", "alice@x.com", "other")

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts(self, service):
        await service.register("alice", "alice@x.com", "secret123")
        with pytest.raises(ConflictError):
            await service.register("alice", "alice@y.com", "other")

    @pytest.mark.asyncio
    async def test_hashing_failure_stores_nothing(self, service, repo):
        with patch("auth.service.hash_password", side_effect=HashingError("boom")):
            with pytest.raises(HashingError):
                await service.register("alice", "alice@x.com", "secret123")
        assert repo.records == {}


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_issues_verifiable_token(self, service, auth_config):
        user = await service.register("alice", "alice@x.com", "secret123")
        result = await service.login("alice@x.com", "secret123")

        assert result.user_id == user.user_id
        assert result.email == "alice@x.com"
        assert result.username == "alice"

        claims = AuthGuard(auth_config).authenticate(f"Bearer {result.token}")
        assert claims.subject == str(user.user_id)
        assert claims.email == "alice@x.com"
        assert claims.username == "alice"

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_the_same(self, service):
        await service.register("alice", "alice@x.com", "secret123")

        with pytest.raises(Unauthorized) as unknown:
            await service.login("bob@x.com", "secret123")
        with pytest.raises(Unauthorized) as wrong:
            await service.login("alice@x.com", "wrong-password")

        assert unknown.value.reason is wrong.value.reason
        assert unknown.value.reason is UnauthorizedReason.INVALID_CREDENTIALS
        assert str(unknown.value) == str(wrong.value)

    @pytest.mark.asyncio
    async def test_corrupt_stored_hash_is_rejected_like_a_wrong_password(self, service, repo):
        user = await service.register("alice", "alice@x.com", "secret123")
        repo.records["alice@x.com"] = CredentialRecord(
            user_id=user.user_id,
            username="alice",
            email="alice@x.com",
            password_hash="$2b$12$not$a$valid$hash",
        )
        with pytest.raises(Unauthorized) as exc_info:
            await service.login("alice@x.com", "secret123")
        assert exc_info.value.reason is UnauthorizedReason.INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_failed_login_does_not_issue_token(self, service):
        await service.register("alice", "alice@x.com", "secret123")
        with patch.object(TokenIssuer, "issue") as mock_issue:
            with pytest.raises(Unauthorized):
                await service.login("alice@x.com", "nope")
        mock_issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_hashing_runs_off_the_event_loop(self, service):
        with patch("asyncio.to_thread", wraps=asyncio.to_thread) as spy:
            await service.register("alice", "alice@x.com", "secret123")
            await service.login("alice@x.com", "secret123")
        assert spy.call_count == 2


class TestListUsers:
    @pytest.mark.asyncio
    async def test_list_users_hides_hashes(self, service):
        await service.register("alice", "alice@x.com", "secret123")
        await service.register("bob", "bob@x.com", "hunter2")
        users = await service.list_users()
        assert {u.username for u in users} == {"alice", "bob"}
        for u in users:
            assert "password_hash" not in u.model_dump()
