"""
Auth API routes: register, login.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from auth.dependencies import get_auth_service
from auth.errors import ConflictError, HashingError, Unauthorized
from auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

LOGIN_REJECTION_DETAIL = "Invalid email or password"


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    created_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    token: str
    user_id: uuid.UUID
    user_email: str
    user_username: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user."""
    try:
        user = await service.register(req.username, req.email, req.password)
    except ConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email already registered",
        )
    except HashingError as exc:
        logger.error("Password hashing failed during registration: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        )

    return {
        "id": user.user_id,
        "username": user.username,
        "email": user.email,
        "created_at": user.created_at,
    }


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    try:
        result = await service.login(req.email, req.password)
    except Unauthorized:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=LOGIN_REJECTION_DETAIL,
        )

    return {
        "token": result.token,
        "user_id": result.user_id,
        "user_email": result.email,
        "user_username": result.username,
    }
