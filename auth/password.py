"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and a fixed work factor.
"""

from __future__ import annotations

import bcrypt

from auth.errors import HashingError

BCRYPT_ROUNDS = 12
# bcrypt only ever reads the first 72 bytes of a secret.
_BCRYPT_MAX_BYTES = 72


def _secret_bytes(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 12)."""
    try:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(_secret_bytes(password), salt).decode()
    except (ValueError, TypeError) as exc:
        raise HashingError(str(exc)) from exc


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison against a bcrypt hash.

    A stored value that is not a bcrypt hash at all counts as a mismatch.
    A value that looks like one but that bcrypt cannot process raises
    ``HashingError`` so the caller can tell corruption from a wrong password.
    """
    if not password_hash.startswith(("$2a$", "$2b$", "$2y$")):
        return False
    try:
        return bcrypt.checkpw(_secret_bytes(password), password_hash.encode())
    except (ValueError, TypeError) as exc:
        raise HashingError(str(exc)) from exc
