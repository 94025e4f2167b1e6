"""Redemption listing and point-of-sale validation endpoints."""

import uuid as uuid_pkg

from fastapi import APIRouter, Query

from couponhub.api.deps import (
    CustomerIdentity,
    DbSession,
    EstablishmentIdentity,
    PublisherIdentity,
)
from couponhub.domain.redemption_operations import redemption_ops
from couponhub.models.redemption import RedemptionRead, RedemptionRecord, RedemptionResolve

router = APIRouter(prefix="/redemptions", tags=["redemptions"])


@router.get("/mine", response_model=list[RedemptionRead])
async def list_my_redemptions(
    db: DbSession,
    identity: CustomerIdentity,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=200),
) -> list[RedemptionRecord]:
    """List the current customer's redemptions, newest first."""
    return await redemption_ops.list_for_customer(
        db, identity.actor_id, skip=skip, limit=limit
    )


@router.get("/recent", response_model=list[RedemptionRead])
async def list_recent_redemptions(
    db: DbSession,
    identity: EstablishmentIdentity,
) -> list[RedemptionRecord]:
    """Most recent redemptions of the current establishment's coupons."""
    return await redemption_ops.list_for_establishment(db, identity.actor_id)


@router.get("/token/{token}", response_model=RedemptionRead)
async def lookup_redemption(
    token: str,
    db: DbSession,
    identity: PublisherIdentity,
) -> RedemptionRecord:
    """Look up the redemption behind a customer-presented token."""
    return await redemption_ops.lookup_by_token(db, identity, token)


@router.post("/{record_id}/resolve", response_model=RedemptionRead)
async def resolve_redemption(
    record_id: uuid_pkg.UUID,
    data: RedemptionResolve,
    db: DbSession,
    identity: PublisherIdentity,
) -> RedemptionRecord:
    """Approve (used) or reject (expired) a redemption. Can only happen once."""
    return await redemption_ops.resolve(db, identity, record_id, data.outcome)
