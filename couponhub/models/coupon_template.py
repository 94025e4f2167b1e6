"""Coupon template models: merchant-defined offers with finite stock."""

import uuid as uuid_pkg
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlalchemy import CheckConstraint, Column, Index, Text
from sqlmodel import Field, SQLModel

from couponhub.models.base import PortableJSON, TimestampMixin, UUIDMixin

MAX_GALLERY_IMAGES = 5


class DiscountKind(str, Enum):
    """How discount_value is applied."""

    FIXED_AMOUNT = "fixed_amount"
    PERCENTAGE = "percentage"


class CouponTemplateBase(SQLModel):
    """Editable fields shared by the table and the write schemas."""

    title: str = Field(max_length=200, nullable=False)
    # Rich-text HTML from the establishment's editor, stored verbatim
    description: str = Field(default="", sa_column=Column(Text, nullable=False, server_default=""))
    banner_url: str | None = Field(default=None, max_length=500)
    discount_kind: str = Field(default=DiscountKind.FIXED_AMOUNT.value, max_length=20)
    discount_value: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    promotion_start: date | None = Field(default=None)
    promotion_end: date | None = Field(default=None)


class CouponTemplate(CouponTemplateBase, UUIDMixin, TimestampMixin, table=True):
    """
    A coupon offer published by an establishment.

    owner_snapshot is a value copy of the establishment's identity at creation
    time and is never refreshed from the live profile. remaining_count is only
    changed by the redemption engine through a conditional decrement.
    """

    __tablename__ = "coupon_templates"
    __table_args__ = (
        CheckConstraint("remaining_count >= 0", name="ck_coupon_templates_remaining_nonneg"),
        CheckConstraint("discount_value >= 0", name="ck_coupon_templates_value_nonneg"),
        Index("ix_coupon_templates_establishment_created", "establishment_id", "created_at"),
    )

    establishment_id: uuid_pkg.UUID = Field(
        foreign_key="users.id",
        nullable=False,
        index=True,
    )
    owner_snapshot: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(PortableJSON, nullable=False),
    )
    gallery_urls: list[str] = Field(
        default_factory=list,
        sa_column=Column(PortableJSON, nullable=False),
    )
    remaining_count: int = Field(default=0, nullable=False)


class CouponTemplateUpdate(SQLModel):
    """Full overwrite of a template's editable fields.

    Stock is not part of it: remaining_count only moves through redemptions.
    """

    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    banner_url: str | None = Field(default=None, max_length=500)
    gallery_urls: list[str] = Field(default_factory=list, max_length=MAX_GALLERY_IMAGES)
    discount_kind: DiscountKind = DiscountKind.FIXED_AMOUNT
    discount_value: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    promotion_start: date | None = None
    promotion_end: date | None = None


class CouponTemplateCreate(CouponTemplateUpdate):
    """Schema for publishing a new template."""

    remaining_count: int = Field(ge=0)


class CouponTemplateRead(SQLModel):
    """Schema for reading a template."""

    id: uuid_pkg.UUID
    establishment_id: uuid_pkg.UUID
    owner_snapshot: dict[str, Any]
    title: str
    description: str
    banner_url: str | None
    gallery_urls: list[str]
    discount_kind: str
    discount_value: Decimal
    remaining_count: int
    promotion_start: date | None
    promotion_end: date | None
    created_at: datetime
    updated_at: datetime
