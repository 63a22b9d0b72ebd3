"""Authentication utilities for the Gigboard backend.

Clients authenticate with the access token Supabase Auth issued them. The
token's ``sub`` claim is the profile id.
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from gigboard.marketplace.errors import NotFoundError
from gigboard.marketplace.profiles.models import Profile

from .config import Settings, get_settings
from .database import MarketplaceDep
from .logging_config import get_logger, log_auth_event

logger = get_logger("gigboard.api.auth")

security = HTTPBearer(auto_error=False)


def create_access_token(
    user_id: str,
    settings: Settings,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a token shaped like a Supabase access token (local runs and tests)."""
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": user_id,
        "aud": settings.jwt_audience,
        "role": "authenticated",
        "iat": now,
        "exp": now + (expires_delta or timedelta(hours=1)),
    }
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.supabase_jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> dict:
    """Decode and validate a Supabase access token."""
    try:
        return jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except JWTError as e:
        log_auth_event("token", None, success=False, reason=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthContext:
    """Identity taken from a verified access token."""

    def __init__(self, user_id: str, email: str | None = None, token: str | None = None):
        self.user_id = user_id
        self.email = email
        self.token = token


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthContext:
    """Get the authenticated user from the bearer token."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials, settings)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthContext(user_id=user_id, email=payload.get("email"), token=credentials.credentials)


CurrentUser = Annotated[AuthContext, Depends(get_current_user)]


async def get_current_profile(auth: CurrentUser, market: MarketplaceDep) -> Profile:
    """Resolve the acting profile. Every authenticated user must have one."""
    try:
        return market.profiles.get_profile(auth.user_id)
    except NotFoundError:
        logger.warning(f"Token for user without profile | user={auth.user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No profile for this account",
            headers={"WWW-Authenticate": "Bearer"},
        )


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
