"""Domain integration test fixtures.

Extends the root conftest fixtures with identities and published coupon
templates for redemption and validation tests.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from couponhub.domain.identity import IdentityContext
from couponhub.models.coupon_template import CouponTemplate

from tests.helpers.factories import TestDataFactory


@pytest.fixture
def customer(customer_user) -> IdentityContext:
    return IdentityContext.from_user(customer_user)


@pytest.fixture
def other_customer(second_customer) -> IdentityContext:
    return IdentityContext.from_user(second_customer)


@pytest.fixture
def establishment(establishment_user) -> IdentityContext:
    return IdentityContext.from_user(establishment_user)


@pytest.fixture
def admin(admin_user) -> IdentityContext:
    return IdentityContext.from_user(admin_user)


@pytest.fixture
async def template(db_session: AsyncSession, establishment_user) -> CouponTemplate:
    """A 10% template with 5 coupons left."""
    return await TestDataFactory.publish_template(db_session, establishment_user)


@pytest.fixture
async def last_coupon(db_session: AsyncSession, establishment_user) -> CouponTemplate:
    """A 10% template with a single coupon left."""
    return await TestDataFactory.publish_template(db_session, establishment_user, remaining_count=1)
