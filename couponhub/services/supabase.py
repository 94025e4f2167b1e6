"""Supabase admin client for server-side operations."""

from supabase import Client, create_client

from couponhub.config.settings import settings


def get_supabase_admin_client() -> Client:
    """
    Get Supabase client with service role key for admin operations.

    This client has elevated privileges and should only be used for:
    - Inviting establishment accounts and setting their app_metadata role
    - Writing user_metadata on profile edits
    - Uploading coupon images to Storage

    IMPORTANT: Never expose this client to frontend or use anon key here.
    """
    if not settings.supabase_service_role_key:
        raise ValueError(
            "SUPABASE_SERVICE_ROLE_KEY not configured. "
            "Set it in .env for account and storage operations."
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )
