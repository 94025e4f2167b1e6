from couponhub.domain.coupon_template_operations import coupon_template_ops
from couponhub.domain.establishment_operations import establishment_ops
from couponhub.domain.identity import IdentityContext
from couponhub.domain.redemption_operations import redemption_ops
from couponhub.domain.user_operations import user_ops

__all__ = [
    "IdentityContext",
    "coupon_template_ops",
    "redemption_ops",
    "user_ops",
    "establishment_ops",
]
