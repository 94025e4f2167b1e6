"""Coupon catalog and redemption endpoints."""

import uuid as uuid_pkg

from fastapi import APIRouter, Query, status

from couponhub.api.deps import (
    CustomerIdentity,
    DbSession,
    EstablishmentIdentity,
    Identity,
    PublisherIdentity,
)
from couponhub.domain.coupon_template_operations import coupon_template_ops
from couponhub.domain.redemption_operations import redemption_ops
from couponhub.models.coupon_template import (
    CouponTemplate,
    CouponTemplateCreate,
    CouponTemplateRead,
    CouponTemplateUpdate,
)
from couponhub.models.redemption import RedemptionRead, RedemptionRecord

router = APIRouter(prefix="/coupons", tags=["coupons"])


@router.get("", response_model=list[CouponTemplateRead])
async def list_coupons(
    db: DbSession,
    _identity: Identity,
    establishment_id: uuid_pkg.UUID | None = None,
    available_only: bool = False,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=200),
) -> list[CouponTemplate]:
    """List coupon templates, newest first."""
    return await coupon_template_ops.list_templates(
        db,
        establishment_id=establishment_id,
        available_only=available_only,
        skip=skip,
        limit=limit,
    )


@router.get("/mine", response_model=list[CouponTemplateRead])
async def list_my_coupons(
    db: DbSession,
    identity: EstablishmentIdentity,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=200),
) -> list[CouponTemplate]:
    """List the templates published by the current establishment."""
    return await coupon_template_ops.list_templates(
        db, establishment_id=identity.actor_id, skip=skip, limit=limit
    )


@router.get("/{template_id}", response_model=CouponTemplateRead)
async def get_coupon(
    template_id: uuid_pkg.UUID,
    db: DbSession,
    _identity: Identity,
) -> CouponTemplate:
    return await coupon_template_ops.get_template(db, template_id)


@router.post("", response_model=CouponTemplateRead, status_code=status.HTTP_201_CREATED)
async def create_coupon(
    data: CouponTemplateCreate,
    db: DbSession,
    identity: PublisherIdentity,
) -> CouponTemplate:
    """Publish a coupon template owned by the current establishment."""
    return await coupon_template_ops.create_template(db, identity, data)


@router.put("/{template_id}", response_model=CouponTemplateRead)
async def update_coupon(
    template_id: uuid_pkg.UUID,
    data: CouponTemplateUpdate,
    db: DbSession,
    identity: PublisherIdentity,
) -> CouponTemplate:
    """Overwrite a template's editable fields. Stock is not editable."""
    return await coupon_template_ops.update_template(db, identity, template_id, data)


@router.post(
    "/{template_id}/redeem",
    response_model=RedemptionRead,
    status_code=status.HTTP_201_CREATED,
)
async def redeem_coupon(
    template_id: uuid_pkg.UUID,
    db: DbSession,
    identity: CustomerIdentity,
) -> RedemptionRecord:
    """
    Redeem a coupon for the current customer.

    The response carries the token the customer shows at the establishment.
    """
    return await redemption_ops.redeem(db, identity, template_id)
