"""Admin endpoints: establishment registration and user listing."""

from fastapi import APIRouter, Query, status

from couponhub.api.deps import AdminIdentity, DbSession
from couponhub.core.roles import UserRole
from couponhub.domain.establishment_operations import establishment_ops
from couponhub.domain.user_operations import user_ops
from couponhub.models.establishment import (
    Establishment,
    EstablishmentCreate,
    EstablishmentRead,
)
from couponhub.models.user import User, UserRead

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/establishments",
    response_model=EstablishmentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_establishment(
    data: EstablishmentCreate,
    db: DbSession,
    _admin: AdminIdentity,
) -> Establishment:
    """
    Register an establishment.

    Sends a Supabase invite to the establishment's email; the account gets
    the establishment role and can publish coupons once the invite is accepted.
    """
    return await establishment_ops.create_establishment(db, data)


@router.get("/establishments", response_model=list[EstablishmentRead])
async def list_establishments(
    db: DbSession,
    _admin: AdminIdentity,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=200),
) -> list[Establishment]:
    return await establishment_ops.list_establishments(db, skip=skip, limit=limit)


@router.get("/users", response_model=list[UserRead])
async def list_users(
    db: DbSession,
    _admin: AdminIdentity,
    role: UserRole | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=200),
) -> list[User]:
    """List users, optionally filtered by role."""
    return await user_ops.list_users(db, role=role, skip=skip, limit=limit)
