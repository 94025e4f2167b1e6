"""API test fixtures: published coupons and redemptions.

Builds on root conftest fixtures (db_session, customer_user,
establishment_user, role clients, mock_supabase).

Entities are created through the domain operations so they carry the same
snapshots production code writes.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from couponhub.domain.identity import IdentityContext
from couponhub.domain.redemption_operations import redemption_ops

from tests.helpers.factories import TestDataFactory


@pytest.fixture
async def published_template(db_session: AsyncSession, establishment_user):
    """A template with 5 coupons owned by establishment_user."""
    return await TestDataFactory.publish_template(db_session, establishment_user)


@pytest.fixture
async def sold_out_template(db_session: AsyncSession, establishment_user):
    return await TestDataFactory.publish_template(
        db_session, establishment_user, title="Sold out", remaining_count=0
    )


@pytest.fixture
async def redemption(db_session: AsyncSession, customer_user, published_template):
    """customer_user's redemption of published_template, still unresolved."""
    return await redemption_ops.redeem(
        db_session, IdentityContext.from_user(customer_user), published_template.id
    )
