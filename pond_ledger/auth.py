"""
Caller identity and role checks.

Tokens are HS256 JWTs whose ``sub`` claim is a user id. Issuing
tokens (login) is handled elsewhere; this module verifies them and
resolves the caller for every request.
"""

import logging
from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from pond_ledger.config import get_settings
from pond_ledger.exceptions import AuthenticationError, AuthorizationError
from pond_ledger.models.base import get_db
from pond_ledger.models.enums import UserRole, ELEVATED_ROLES
from pond_ledger.models.user import User

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401, not 403.
security = HTTPBearer(auto_error=False)


def create_access_token(
    user_id: int, expires_delta: timedelta | None = None
) -> str:
    """Create a signed access token for a user."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "exp": int((now + expires_delta).timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(
        payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> int:
    """Return the user id carried by a token, or raise AuthenticationError."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        logger.warning("Rejected token: %s", e)
        raise AuthenticationError("Invalid or expired token")

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid or expired token")


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token on the request to a user."""
    if credentials is None:
        raise AuthenticationError("Authentication token required")

    user_id = decode_access_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def require_roles(*roles: UserRole):
    """
    Dependency factory restricting an endpoint to the given roles.

    Usage:
        @router.delete("/{id}")
        def delete(user: User = Depends(require_roles(UserRole.ADMIN))): ...
    """
    allowed = set(roles)

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise AuthorizationError("Insufficient permissions")
        return user

    return dependency


# Destructive operations and master-data edits.
require_elevated = require_roles(*ELEVATED_ROLES)
