"""Coupon catalog and redemption endpoint tests."""

from __future__ import annotations

import re
import uuid

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.helpers.auth_assertions import assert_domain_error
from tests.helpers.factories import TestDataFactory

TOKEN_PATTERN = re.compile(r"^[A-Z0-9]{6}$")


def _coupon_body(**overrides) -> dict:
    body = {
        "title": "Pizza em dobro",
        "description": "<p>Na compra de uma pizza grande</p>",
        "banner_url": None,
        "gallery_urls": [],
        "discount_kind": "fixed_amount",
        "discount_value": "15.00",
        "remaining_count": 3,
        "promotion_start": "2026-11-01",
        "promotion_end": "2026-11-30",
    }
    body.update(overrides)
    return body


# ─────────────────────────────────────────────────────────────────────────────
# Catalog
# ─────────────────────────────────────────────────────────────────────────────


async def test_create_coupon(establishment_client: AsyncClient, establishment_user):
    """POST /api/v1/coupons publishes a template with the owner's snapshot."""
    resp = await establishment_client.post("/api/v1/coupons", json=_coupon_body())

    assert resp.status_code == 201
    data = resp.json()
    assert data["title"] == "Pizza em dobro"
    assert data["remaining_count"] == 3
    assert data["establishment_id"] == str(establishment_user.id)
    assert data["owner_snapshot"]["name"] == establishment_user.name
    assert data["owner_snapshot"]["email"] == establishment_user.email


async def test_create_coupon_rejects_negative_stock(establishment_client: AsyncClient):
    resp = await establishment_client.post(
        "/api/v1/coupons", json=_coupon_body(remaining_count=-1)
    )
    assert resp.status_code == 422


async def test_list_coupons(customer_client: AsyncClient, published_template, sold_out_template):
    """Customers browse every template; available_only hides sold-out ones."""
    resp = await customer_client.get("/api/v1/coupons")
    assert resp.status_code == 200
    ids = [c["id"] for c in resp.json()]
    assert str(published_template.id) in ids
    assert str(sold_out_template.id) in ids

    resp = await customer_client.get("/api/v1/coupons", params={"available_only": True})
    ids = [c["id"] for c in resp.json()]
    assert ids == [str(published_template.id)]


async def test_list_my_coupons(establishment_client: AsyncClient, published_template):
    resp = await establishment_client.get("/api/v1/coupons/mine")
    assert resp.status_code == 200
    assert [c["id"] for c in resp.json()] == [str(published_template.id)]


async def test_get_coupon(customer_client: AsyncClient, published_template):
    resp = await customer_client.get(f"/api/v1/coupons/{published_template.id}")
    assert resp.status_code == 200
    assert resp.json()["title"] == published_template.title


async def test_get_unknown_coupon_returns_404(customer_client: AsyncClient):
    resp = await customer_client.get(f"/api/v1/coupons/{uuid.uuid4()}")
    assert_domain_error(resp, 404, "not_found")


async def test_update_coupon_keeps_stock(
    establishment_client: AsyncClient, published_template
):
    """PUT overwrites editable fields; remaining_count in the body is ignored."""
    resp = await establishment_client.put(
        f"/api/v1/coupons/{published_template.id}",
        json=_coupon_body(title="Novo título", remaining_count=999),
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "Novo título"
    assert data["discount_kind"] == "fixed_amount"
    assert data["remaining_count"] == 5


# ─────────────────────────────────────────────────────────────────────────────
# Redemption
# ─────────────────────────────────────────────────────────────────────────────


async def test_redeem_returns_token_and_takes_stock(
    customer_client: AsyncClient,
    db_session: AsyncSession,
    customer_user,
    published_template,
):
    resp = await customer_client.post(f"/api/v1/coupons/{published_template.id}/redeem")

    assert resp.status_code == 201
    data = resp.json()
    assert TOKEN_PATTERN.match(data["token"])
    assert data["status"] == "redeemed"
    assert data["customer_id"] == str(customer_user.id)
    assert data["customer_phone"] == customer_user.phone
    assert data["expiration_date_snapshot"] == "2026-12-31"
    assert await TestDataFactory.remaining(db_session, published_template) == 4


async def test_redeem_twice_returns_409(customer_client: AsyncClient, published_template):
    url = f"/api/v1/coupons/{published_template.id}/redeem"
    assert (await customer_client.post(url)).status_code == 201

    resp = await customer_client.post(url)
    assert_domain_error(resp, 409, "already_redeemed")


async def test_redeem_sold_out_is_localized(customer_client: AsyncClient, sold_out_template):
    url = f"/api/v1/coupons/{sold_out_template.id}/redeem"

    resp = await customer_client.post(url)
    assert_domain_error(resp, 409, "out_of_stock")
    assert resp.json()["detail"] == "Este cupom esgotou."

    resp = await customer_client.post(url, headers={"Accept-Language": "en-US,en;q=0.9"})
    assert_domain_error(resp, 409, "out_of_stock")
    assert resp.json()["detail"] == "This coupon is sold out."


async def test_redeem_with_incomplete_profile_returns_422(
    customer_client: AsyncClient,
    db_session: AsyncSession,
    customer_user,
    published_template,
):
    customer_user.phone = None
    await db_session.flush()

    resp = await customer_client.post(f"/api/v1/coupons/{published_template.id}/redeem")

    assert_domain_error(resp, 422, "identity_incomplete")
    assert await TestDataFactory.count_redemptions(db_session, published_template.id) == 0


async def test_redeem_unknown_template_returns_404(customer_client: AsyncClient):
    resp = await customer_client.post(f"/api/v1/coupons/{uuid.uuid4()}/redeem")
    assert_domain_error(resp, 404, "not_found")
