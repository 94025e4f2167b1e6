"""JWT validation and user authentication dependencies.

This module provides:
- JWT validation against Supabase JWKS
- User lookup and first-request creation from token claims
- The IdentityContext handed to catalog, redemption and validation operations
"""

import logging
import time
import uuid as uuid_pkg
from typing import Annotated, Any

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from jose.backends import ECKey
from sqlalchemy.ext.asyncio import AsyncSession

from couponhub.config import settings
from couponhub.core.database import get_db
from couponhub.domain.identity import IdentityContext
from couponhub.domain.user_operations import user_ops
from couponhub.models.user import User

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# Cache for JWKS with TTL to handle key rotation
_jwks_cache: dict[str, Any] = {}
_jwks_cache_timestamp: float = 0.0
_JWKS_CACHE_TTL_SECONDS: float = 3600.0  # 1 hour


async def _fetch_jwks() -> dict[str, Any]:
    """Fetch JWKS from Supabase and update the cache."""
    global _jwks_cache_timestamp
    async with httpx.AsyncClient() as client:
        response = await client.get(settings.supabase_jwks_url)
        response.raise_for_status()
        jwks = response.json()
        _jwks_cache.clear()
        _jwks_cache.update(jwks)
        _jwks_cache_timestamp = time.monotonic()
        return jwks


async def get_jwks(force_refresh: bool = False) -> dict[str, Any]:
    """Fetch and cache JWKS from Supabase with a 1-hour TTL."""
    cache_age = time.monotonic() - _jwks_cache_timestamp
    if _jwks_cache and not force_refresh and cache_age < _JWKS_CACHE_TTL_SECONDS:
        return _jwks_cache

    return await _fetch_jwks()


def get_signing_key(jwks: dict[str, Any], token: str) -> ECKey:
    """Get the signing key from JWKS that matches the token's kid."""
    kid = jwt.get_unverified_header(token).get("kid")

    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return ECKey(key, algorithm="ES256")

    raise ValueError("Unable to find matching key in JWKS")


async def decode_token(token: str, force_refresh: bool = False) -> dict[str, Any]:
    """Verify a Supabase access token and return its claims.

    Raises JWTError or ValueError for invalid tokens (including a missing sub),
    httpx.HTTPError if the JWKS can't be fetched.
    """
    jwks = await get_jwks(force_refresh=force_refresh)
    signing_key = get_signing_key(jwks, token)
    payload = jwt.decode(
        token,
        signing_key,
        algorithms=["ES256"],
        audience="authenticated",
    )
    if not payload.get("sub"):
        raise ValueError("Token has no subject")
    return payload


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Validate Supabase JWT and return current user.

    Creates user record on first API call if not exists.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    token = credentials.credentials

    try:
        payload = await decode_token(token)
    except (JWTError, ValueError) as first_error:
        # Key rotation may have occurred, so refresh the JWKS and retry once
        try:
            logger.info("JWT validation failed with cached JWKS, forcing refresh")
            payload = await decode_token(token, force_refresh=True)
        except (JWTError, ValueError, httpx.HTTPError):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
            ) from first_error
    except httpx.HTTPError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from None

    try:
        user_id = uuid_pkg.UUID(payload["sub"])
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        ) from None

    return await user_ops.get_or_create_from_claims(db, user_id, payload)


async def get_identity(
    current_user: User = Depends(get_current_user),
) -> IdentityContext:
    """Build the explicit identity context for the authenticated user."""
    return IdentityContext.from_user(current_user)


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
Identity = Annotated[IdentityContext, Depends(get_identity)]
