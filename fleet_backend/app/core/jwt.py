"""
Bearer tokens for back-office users.

A token carries the username as ``sub`` plus the user's row id and role, so
``get_current_user`` can look the account up again on every request.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

from jose import JWTError, jwt

from fleet_backend.app.core.config import settings


def token_claims(user: Mapping[str, Any]) -> Dict[str, Any]:
    role = user["role"]
    return {
        "sub": user["username"],
        "user_id": user["id"],
        "role": getattr(role, "value", role),
    }


def create_access_token(user: Mapping[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a token for a ``users`` row.

    Lifetime defaults to ``ACCESS_TOKEN_EXPIRE_MINUTES``; ``expires_delta``
    overrides it (tests use a negative delta for already-expired tokens).
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = token_claims(user)
    claims["exp"] = datetime.now(timezone.utc) + lifetime
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a well-signed, unexpired token, or None."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
