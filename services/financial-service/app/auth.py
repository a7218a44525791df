"""Authentication and role-based authorization."""

from typing import Optional

import jwt
import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings

logger = structlog.get_logger(__name__)
security = HTTPBearer(auto_error=False)


class User:
    """User model from JWT token."""

    def __init__(self, id: str, email: str, role: str):
        self.id = id
        self.email = email
        self.role = role

    @property
    def is_manager(self) -> bool:
        return self.role in settings.manager_roles_list

    def __repr__(self):
        return f"User(id={self.id}, email={self.email}, role={self.role})"


def decode_jwt_token(token: str) -> Optional[dict]:
    """
    Decode and validate JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload or None if invalid
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid JWT token", error=str(e))
        return None


def extract_role(payload: dict) -> str:
    """
    Read the application role from a token payload.

    Supabase puts custom roles in app_metadata; the top-level "role"
    claim is usually just "authenticated".
    """
    app_metadata = payload.get("app_metadata") or {}
    return (
        app_metadata.get("role")
        or payload.get("user_role")
        or payload.get("role")
        or "authenticated"
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    """
    Get current authenticated user from JWT token.

    Raises:
        HTTPException: 401 if token is invalid or missing
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_jwt_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Support both "sub" and "user_id" for compatibility
    user_id = payload.get("sub") or payload.get("user_id")
    email = payload.get("email")

    if not user_id or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = User(id=user_id, email=email, role=extract_role(payload))
    logger.debug("User authenticated", user_id=user.id, role=user.role)

    return user


async def require_manager(user: User = Depends(get_current_user)) -> User:
    """
    Restrict access to financial management roles.

    Raises:
        HTTPException: 403 if the user is not a manager
    """
    if not user.is_manager:
        logger.warning("Financial access denied", user_id=user.id, role=user.role)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Financial management requires manager role",
        )
    return user
