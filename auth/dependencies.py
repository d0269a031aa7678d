"""
FastAPI dependencies for authentication.

The issuer and guard are built once in ``create_app`` and kept on
``app.state``; these dependencies hand them to route handlers and turn
``Unauthorized`` into a 401.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import Unauthorized
from auth.guard import AuthGuard
from auth.service import AuthService
from auth.tokens import Claims, TokenIssuer
from database.helpers import UserRepository
from database.session import get_db_session

logger = logging.getLogger(__name__)

GUARD_REJECTION_DETAIL = "Not authenticated"


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_auth_guard(request: Request) -> AuthGuard:
    return request.app.state.auth_guard


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> UserRepository:
    return UserRepository(session)


async def get_auth_service(
    repo: UserRepository = Depends(get_user_repository),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(repo, issuer)


async def get_current_claims(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    guard: AuthGuard = Depends(get_auth_guard),
) -> Claims:
    """
    Verify the Bearer token from the Authorization header and return its
    claims. Every rejection reason maps to the same 401 response.
    """
    try:
        return guard.authenticate(authorization)
    except Unauthorized:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=GUARD_REJECTION_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )
