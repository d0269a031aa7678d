"""
General API routes.

Route prefix: /api/v1
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from auth.dependencies import get_auth_service, get_current_claims
from auth.routes import UserResponse
from auth.service import AuthService
from auth.tokens import Claims

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def hello() -> Dict[str, str]:
    return {"message": "Hello people!"}


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    claims: Claims = Depends(get_current_claims),
    service: AuthService = Depends(get_auth_service),
) -> List[Dict[str, Any]]:
    """List every registered user. Requires a valid Bearer token."""
    users = await service.list_users()
    logger.debug("User %s listed %d users", claims.subject, len(users))
    return [
        {
            "id": u.user_id,
            "username": u.username,
            "email": u.email,
            "created_at": u.created_at,
        }
        for u in users
    ]
