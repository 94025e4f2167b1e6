"""Supabase Storage uploads for coupon banners and gallery images."""

import asyncio
import logging

from couponhub.config import settings
from couponhub.core.exceptions import CollaboratorUnavailable
from couponhub.services.supabase import get_supabase_admin_client

logger = logging.getLogger(__name__)

STORAGE_SERVICE = "storage"


class StorageService:
    """Uploads files to a public bucket and hands back their URL."""

    def __init__(self, bucket: str | None = None):
        self.bucket = bucket or settings.storage_bucket

    async def upload_public(self, path: str, content: bytes, content_type: str) -> str:
        """
        Upload content to path inside the bucket and return its public URL.

        Raises CollaboratorUnavailable if Storage is not configured or rejects the upload.
        """
        try:
            supabase = get_supabase_admin_client()
            bucket = supabase.storage.from_(self.bucket)
            # supabase-py is synchronous
            await asyncio.to_thread(
                bucket.upload,
                path,
                content,
                {"content-type": content_type, "upsert": "false"},
            )
            url = await asyncio.to_thread(bucket.get_public_url, path)
        except Exception as e:
            logger.error(f"Storage upload to {self.bucket}/{path} failed: {e}")
            raise CollaboratorUnavailable(STORAGE_SERVICE) from e

        logger.info(f"Uploaded {len(content)} bytes to {self.bucket}/{path}")
        return url


storage_service = StorageService()
