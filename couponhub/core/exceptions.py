"""Domain errors raised by the coupon lifecycle operations.

Operations raise these instead of HTTPException so they stay usable outside
a request. The handler registered in main.py turns them into a JSON body
with a stable ``code`` and a localized ``detail`` (see core.messages).
"""

from fastapi import status


class CouponHubError(Exception):
    """Base class for errors scoped to a single user action."""

    code: str = "error"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str | None = None, **context: object):
        self.context = context
        super().__init__(message or self.code)


class IdentityIncomplete(CouponHubError):
    """Raised when the actor lacks contact fields required to redeem."""

    code = "identity_incomplete"
    status_code = 422

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing identity fields: {', '.join(missing)}", missing=missing)


class InvalidTokenFormat(CouponHubError):
    """Raised when a redemption token is not 6 characters of [A-Z0-9]."""

    code = "invalid_token_format"
    status_code = 422


class NotFound(CouponHubError):
    """Raised when a coupon template or redemption record does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found", resource=resource)


class OutOfStock(CouponHubError):
    """Raised when a template has no remaining coupons."""

    code = "out_of_stock"
    status_code = status.HTTP_409_CONFLICT


class AlreadyRedeemed(CouponHubError):
    """Raised when a customer tries to redeem the same template twice."""

    code = "already_redeemed"
    status_code = status.HTTP_409_CONFLICT


class AlreadyResolved(CouponHubError):
    """Raised when a redemption already left the redeemed state."""

    code = "already_resolved"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current_status: str):
        self.current_status = current_status
        super().__init__(f"Redemption already {current_status}", current_status=current_status)


class RedemptionConflict(CouponHubError):
    """Raised when no unique token could be stored; the action can be retried."""

    code = "redemption_conflict"
    status_code = status.HTTP_409_CONFLICT


class NotOwner(CouponHubError):
    """Raised when an establishment edits a template it does not own."""

    code = "not_owner"
    status_code = status.HTTP_403_FORBIDDEN


class AlreadyExists(CouponHubError):
    """Raised when creating an account whose email is already registered."""

    code = "already_exists"
    status_code = status.HTTP_409_CONFLICT


class CollaboratorUnavailable(CouponHubError):
    """Raised when Supabase Auth or Storage fails.

    The original error is chained and logged; its text is never shown to users.
    """

    code = "collaborator_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, collaborator: str):
        self.collaborator = collaborator
        super().__init__(f"{collaborator} unavailable", collaborator=collaborator)


class InvalidEmail(CouponHubError):
    """Raised when an account email is malformed."""

    code = "invalid_email"
    status_code = 422
