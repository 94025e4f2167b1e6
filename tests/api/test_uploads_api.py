"""Image upload endpoint tests. Storage is mocked by the root conftest."""

from __future__ import annotations

import re

import pytest
from httpx import AsyncClient

from tests.helpers.auth_assertions import (
    assert_domain_error,
    assert_requires_auth,
    assert_role_forbidden,
)

PNG = ("banner.PNG", b"\x89PNG\r\n\x1a\n", "image/png")


@pytest.mark.parametrize("kind", ["banner", "gallery"])
async def test_upload_image(
    establishment_client: AsyncClient, establishment_user, mock_supabase, kind: str
):
    resp = await establishment_client.post(f"/api/v1/uploads/{kind}", files={"file": PNG})

    assert resp.status_code == 201
    data = resp.json()
    assert re.fullmatch(rf"{establishment_user.id}/{kind}/[0-9a-f]{{32}}\.png", data["path"])
    assert data["url"].startswith("https://")

    bucket = mock_supabase.storage.from_.return_value
    path, content, options = bucket.upload.call_args[0]
    assert path == data["path"]
    assert content == PNG[1]
    assert options["content-type"] == "image/png"


async def test_upload_failure_returns_503(establishment_client: AsyncClient, mock_supabase):
    mock_supabase.storage.from_.return_value.upload.side_effect = Exception("bucket missing")

    resp = await establishment_client.post("/api/v1/uploads/banner", files={"file": PNG})
    assert_domain_error(resp, 503, "collaborator_unavailable")


async def test_customer_cannot_upload(customer_client: AsyncClient):
    await assert_role_forbidden(
        customer_client, "post", "/api/v1/uploads/banner", files={"file": PNG}
    )


async def test_upload_requires_auth(unauth_client: AsyncClient):
    await assert_requires_auth(unauth_client, "post", "/api/v1/uploads/gallery", files={"file": PNG})
