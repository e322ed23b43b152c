"""
Identity resolution for API requests.

Turns an ``Authorization: Bearer ...`` header into an opaque user id:
    guest tokens  - the configured guest identity (row provisioned on first use)
    session token - the owner of an unexpired row in the ``sessions`` table

Administrative endpoints are gated separately by an X-Api-Key derived from
the admin secret.
"""

import hashlib
import hmac
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import NotAuthenticated
from ..infrastructure.repositories import SqlAlchemyUserRepository
from .config import Settings, get_settings
from .database import get_db_session_dependency

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token part of a Bearer header.

    Raises:
        NotAuthenticated: If the header is missing or not a Bearer credential.
    """
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise NotAuthenticated("Missing bearer token")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise NotAuthenticated("Empty bearer token")
    return token


async def resolve_user_id(
    authorization: Optional[str],
    users: SqlAlchemyUserRepository,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> str:
    """Resolve the caller's user id from an Authorization header.

    Raises:
        NotAuthenticated: For missing, unknown or expired credentials.
    """
    settings = settings or get_settings()
    token = extract_bearer_token(authorization)

    if token.startswith(settings.guest_token_prefix):
        # Recap and preference rows reference users.id
        await users.ensure_user(
            settings.guest_user_id, settings.guest_user_name, settings.guest_user_email
        )
        return settings.guest_user_id

    session = await users.get_session_by_token(token)
    if session is None:
        raise NotAuthenticated("Unknown session token")
    if session.is_expired(now or datetime.now(timezone.utc)):
        logger.info(f"Rejected expired session for user {session.user_id}")
        raise NotAuthenticated("Session expired")
    return session.user_id


async def get_current_user_id(
    authorization: Optional[str] = Header(None),
    session: AsyncSession = Depends(get_db_session_dependency),
) -> str:
    """FastAPI dependency returning the authenticated user id (401 otherwise)."""
    try:
        return await resolve_user_id(authorization, SqlAlchemyUserRepository(session))
    except NotAuthenticated as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def expected_admin_key(secret: str) -> str:
    return hashlib.sha256(f"{secret}:admin_api".encode()).hexdigest()


async def require_admin_key(
    x_api_key: Optional[str] = Header(
        None, description="Admin API key for authentication"
    ),
) -> bool:
    """Verify the admin API key for administrative endpoints."""
    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key",
        )

    secret = get_settings().admin_api_secret
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Auth not configured",
        )

    if not hmac.compare_digest(x_api_key, expected_admin_key(secret)):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
    return True
