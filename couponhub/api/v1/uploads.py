"""Image uploads for coupon banners and galleries.

Files go to Supabase Storage under <establishment_id>/<kind>/<uuid><ext>;
the returned public URL is what the client puts in banner_url / gallery_urls.
"""

import os
import uuid as uuid_pkg
from typing import Literal

from fastapi import APIRouter, File, UploadFile, status
from pydantic import BaseModel

from couponhub.api.deps import EstablishmentIdentity
from couponhub.domain.identity import IdentityContext
from couponhub.services.storage import storage_service

router = APIRouter(prefix="/uploads", tags=["uploads"])

ImageKind = Literal["banner", "gallery"]


class UploadResponse(BaseModel):
    """Public URL of an uploaded image."""

    url: str
    path: str


def build_object_path(establishment_id: uuid_pkg.UUID, kind: ImageKind, filename: str | None) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{establishment_id}/{kind}/{uuid_pkg.uuid4().hex}{ext}"


async def _upload(identity: IdentityContext, kind: ImageKind, file: UploadFile) -> UploadResponse:
    path = build_object_path(identity.actor_id, kind, file.filename)
    content = await file.read()
    url = await storage_service.upload_public(
        path,
        content,
        file.content_type or "application/octet-stream",
    )
    return UploadResponse(url=url, path=path)


@router.post("/banner", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_banner(
    identity: EstablishmentIdentity,
    file: UploadFile = File(...),
) -> UploadResponse:
    return await _upload(identity, "banner", file)


@router.post("/gallery", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_gallery_image(
    identity: EstablishmentIdentity,
    file: UploadFile = File(...),
) -> UploadResponse:
    return await _upload(identity, "gallery", file)
