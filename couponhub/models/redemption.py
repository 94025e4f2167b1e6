"""Redemption records: one per customer claim of a coupon template."""

import uuid as uuid_pkg
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from couponhub.models.base import CreatedAtMixin, UUIDMixin


class RedemptionStatus(str, Enum):
    """Lifecycle of a redemption: redeemed -> used | expired."""

    REDEEMED = "redeemed"
    USED = "used"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not RedemptionStatus.REDEEMED


class ResolutionOutcome(str, Enum):
    """Merchant decision on a presented token."""

    USED = "used"  # approved at the point of sale
    EXPIRED = "expired"  # rejected


class RedemptionRecord(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    """
    A customer's claim on a coupon template.

    Amount, discount kind, expiration and customer contact are copied at
    redemption time; later template or profile edits do not change them.
    """

    __tablename__ = "redemption_records"
    __table_args__ = (
        UniqueConstraint("customer_id", "coupon_template_id", name="uq_redemption_customer_template"),
        UniqueConstraint("token", name="uq_redemption_token"),
        CheckConstraint(
            "status IN ('redeemed','used','expired')",
            name="ck_redemption_records_status",
        ),
    )

    coupon_template_id: uuid_pkg.UUID = Field(
        foreign_key="coupon_templates.id",
        nullable=False,
        index=True,
    )
    establishment_id: uuid_pkg.UUID = Field(
        foreign_key="users.id",
        nullable=False,
        index=True,
    )

    # Customer contact, denormalized
    customer_id: uuid_pkg.UUID = Field(
        foreign_key="users.id",
        nullable=False,
        index=True,
    )
    customer_email: str = Field(max_length=255, nullable=False)
    customer_name: str = Field(max_length=255, nullable=False)
    customer_phone: str = Field(max_length=32, nullable=False)

    token: str = Field(max_length=6, nullable=False, index=True)

    # Template state at redemption time
    amount_snapshot: Decimal = Field(max_digits=10, decimal_places=2, nullable=False)
    discount_kind_snapshot: str = Field(max_length=20, nullable=False)
    expiration_date_snapshot: date | None = Field(default=None)

    status: str = Field(default=RedemptionStatus.REDEEMED.value, max_length=20, nullable=False)
    resolved_at: datetime | None = Field(  # type: ignore[call-overload]
        default=None, sa_type=DateTime(timezone=True)
    )
    resolved_by: uuid_pkg.UUID | None = Field(default=None, foreign_key="users.id")


class RedemptionResolve(SQLModel):
    """Schema for a merchant resolving a redemption."""

    outcome: ResolutionOutcome


class RedemptionRead(SQLModel):
    """Schema for reading a redemption."""

    id: uuid_pkg.UUID
    coupon_template_id: uuid_pkg.UUID
    establishment_id: uuid_pkg.UUID
    customer_id: uuid_pkg.UUID
    customer_email: str
    customer_name: str
    customer_phone: str
    token: str
    amount_snapshot: Decimal
    discount_kind_snapshot: str
    expiration_date_snapshot: date | None
    status: str
    created_at: datetime
    resolved_at: datetime | None
