from couponhub.models.coupon_template import (
    CouponTemplate,
    CouponTemplateCreate,
    CouponTemplateRead,
    CouponTemplateUpdate,
    DiscountKind,
)
from couponhub.models.establishment import (
    Establishment,
    EstablishmentCreate,
    EstablishmentRead,
)
from couponhub.models.redemption import (
    RedemptionRead,
    RedemptionRecord,
    RedemptionResolve,
    RedemptionStatus,
    ResolutionOutcome,
)
from couponhub.models.user import User, UserProfileUpdate, UserRead

__all__ = [
    "User",
    "UserProfileUpdate",
    "UserRead",
    "Establishment",
    "EstablishmentCreate",
    "EstablishmentRead",
    "CouponTemplate",
    "CouponTemplateCreate",
    "CouponTemplateUpdate",
    "CouponTemplateRead",
    "DiscountKind",
    "RedemptionRecord",
    "RedemptionRead",
    "RedemptionResolve",
    "RedemptionStatus",
    "ResolutionOutcome",
]
