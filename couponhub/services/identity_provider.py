"""
Supabase Auth admin calls used by account administration and profile edits.

supabase-py is synchronous, so every call runs in a worker thread. Any
failure is logged with the original error and re-raised as
CollaboratorUnavailable; the Supabase message never reaches the user.
"""

import asyncio
import logging
import uuid as uuid_pkg
from typing import Any

from couponhub.config import settings
from couponhub.core.exceptions import AlreadyExists, CollaboratorUnavailable
from couponhub.core.roles import UserRole
from couponhub.services.supabase import get_supabase_admin_client

logger = logging.getLogger(__name__)

IDENTITY_SERVICE = "identity"


async def invite_user(email: str, user_metadata: dict[str, Any]) -> uuid_pkg.UUID:
    """
    Invite a new account by email and return its auth user id.

    Supabase creates the auth.users record and emails a link; the user sets
    their password from the frontend callback.

    Raises:
        AlreadyExists: the email is already registered
        CollaboratorUnavailable: the Auth admin API failed
    """
    try:
        supabase = get_supabase_admin_client()
        invite_options = {
            "data": user_metadata,
            "redirect_to": f"{settings.frontend_url}/auth/callback",
        }
        response = await asyncio.to_thread(
            supabase.auth.admin.invite_user_by_email, email, invite_options
        )
        return uuid_pkg.UUID(response.user.id)
    except Exception as e:
        error_msg = str(e).lower()
        if "already been registered" in error_msg or "already exists" in error_msg:
            logger.info(f"Invite skipped, {email} is already registered")
            raise AlreadyExists() from e

        logger.error(f"Supabase invite failed for {email}: {e}")
        raise CollaboratorUnavailable(IDENTITY_SERVICE) from e


async def find_user_id_by_email(email: str) -> uuid_pkg.UUID | None:
    """
    Look up an existing auth user by email.

    Used to resume a registration whose Supabase account was created but
    whose local rows were never written.

    Raises:
        CollaboratorUnavailable: the Auth admin API failed
    """
    try:
        supabase = get_supabase_admin_client()
        response = await asyncio.to_thread(supabase.auth.admin.list_users)
    except Exception as e:
        logger.error(f"Supabase user lookup failed for {email}: {e}")
        raise CollaboratorUnavailable(IDENTITY_SERVICE) from e

    existing = next((u for u in response if (u.email or "").lower() == email), None)
    if existing is None:
        return None
    return uuid_pkg.UUID(str(existing.id))


async def set_app_role(user_id: uuid_pkg.UUID, role: UserRole) -> None:
    """Write the role into app_metadata, which only the service role can change."""
    await _update_auth_user(user_id, {"app_metadata": {"role": role.value}})


async def update_user_metadata(user_id: uuid_pkg.UUID, user_metadata: dict[str, Any]) -> None:
    """Merge profile fields into the auth user's user_metadata."""
    await _update_auth_user(user_id, {"user_metadata": user_metadata})


async def _update_auth_user(user_id: uuid_pkg.UUID, attributes: dict[str, Any]) -> None:
    try:
        supabase = get_supabase_admin_client()
        await asyncio.to_thread(
            supabase.auth.admin.update_user_by_id,
            str(user_id),
            attributes,
        )
    except Exception as e:
        logger.error(f"Supabase user update failed for {user_id}: {e}")
        raise CollaboratorUnavailable(IDENTITY_SERVICE) from e
