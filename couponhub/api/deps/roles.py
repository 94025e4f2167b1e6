"""Role-based access control dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from couponhub.core.roles import UserRole
from couponhub.domain.identity import IdentityContext

from .auth import get_identity


class RoleGate:
    """
    Dependency class restricting an endpoint to a set of roles.

    Usage:
        @router.post("/coupons")
        async def create_coupon(
            identity: IdentityContext = Depends(RoleGate(UserRole.ESTABLISHMENT)),
            ...
        ):
            ...
    """

    def __init__(self, *roles: UserRole):
        if not roles:
            raise ValueError("RoleGate needs at least one role")
        self.roles = frozenset(roles)

    async def __call__(
        self,
        identity: IdentityContext = Depends(get_identity),
    ) -> IdentityContext:
        if identity.role not in self.roles:
            allowed = ", ".join(sorted(role.value for role in self.roles))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {allowed}",
            )
        return identity


require_admin = RoleGate(UserRole.ADMIN)
require_publisher = RoleGate(UserRole.ESTABLISHMENT, UserRole.ADMIN)
require_establishment = RoleGate(UserRole.ESTABLISHMENT)
require_customer = RoleGate(UserRole.CUSTOMER)

AdminIdentity = Annotated[IdentityContext, Depends(require_admin)]
PublisherIdentity = Annotated[IdentityContext, Depends(require_publisher)]
EstablishmentIdentity = Annotated[IdentityContext, Depends(require_establishment)]
CustomerIdentity = Annotated[IdentityContext, Depends(require_customer)]
