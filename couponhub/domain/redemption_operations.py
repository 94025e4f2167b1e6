"""
Redemption and validation of coupons.

A customer redeems a coupon template and receives a 6-character token; the
establishment later looks the token up at the point of sale and resolves the
redemption as used or expired. Both state changes are single conditional
UPDATEs so concurrent requests can't oversell stock or resolve twice.
"""

import logging
import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from couponhub.config import settings
from couponhub.core.exceptions import (
    AlreadyRedeemed,
    AlreadyResolved,
    InvalidTokenFormat,
    NotFound,
    OutOfStock,
    RedemptionConflict,
)
from couponhub.core.roles import UserRole
from couponhub.core.security import generate_redemption_token, normalize_token
from couponhub.domain.base_operations import BaseOperations
from couponhub.domain.coupon_template_operations import coupon_template_ops
from couponhub.domain.identity import IdentityContext
from couponhub.models.redemption import (
    RedemptionRecord,
    RedemptionStatus,
    ResolutionOutcome,
)

logger = logging.getLogger(__name__)


class RedemptionOperations(BaseOperations[RedemptionRecord]):
    """Operations for RedemptionRecord model."""

    def __init__(self) -> None:
        super().__init__(RedemptionRecord)

    async def get_by_customer_and_template(
        self,
        db: AsyncSession,
        customer_id: uuid_pkg.UUID,
        template_id: uuid_pkg.UUID,
    ) -> RedemptionRecord | None:
        statement = select(RedemptionRecord).where(
            RedemptionRecord.customer_id == customer_id,
            RedemptionRecord.coupon_template_id == template_id,
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_token(self, db: AsyncSession, token: str) -> RedemptionRecord | None:
        statement = select(RedemptionRecord).where(RedemptionRecord.token == token)
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def _token_exists(self, db: AsyncSession, token: str) -> bool:
        statement = select(RedemptionRecord.id).where(RedemptionRecord.token == token)
        result = await db.execute(statement)
        return result.scalar_one_or_none() is not None

    async def generate_unique_token(self, db: AsyncSession) -> str:
        """
        Generate a token not yet used by any redemption.

        Raises RedemptionConflict after settings.token_max_attempts collisions.
        The unique constraint on token still guards the insert itself.
        """
        for _ in range(settings.token_max_attempts):
            token = generate_redemption_token()
            if not await self._token_exists(db, token):
                return token
            logger.warning(f"Redemption token collision on {token}, retrying")

        logger.error(
            f"Could not generate a unique redemption token after "
            f"{settings.token_max_attempts} attempts"
        )
        raise RedemptionConflict()

    async def redeem(
        self,
        db: AsyncSession,
        identity: IdentityContext,
        template_id: uuid_pkg.UUID,
    ) -> RedemptionRecord:
        """
        Redeem a coupon template for the acting customer.

        Stock is taken with a conditional decrement in the same transaction
        as the insert; the request session commits both or neither.

        Raises:
            IdentityIncomplete: customer is missing email, phone or name
            NotFound: template doesn't exist
            AlreadyRedeemed: customer already holds a redemption of this template
            OutOfStock: no coupons left
            RedemptionConflict: no unique token could be stored
        """
        identity.require_contact()

        template = await coupon_template_ops.get_template(db, template_id)

        if await self.get_by_customer_and_template(db, identity.actor_id, template_id):
            raise AlreadyRedeemed()

        token = await self.generate_unique_token(db)

        if not await coupon_template_ops.decrement_stock(db, template_id):
            logger.info(f"Coupon template {template_id} is out of stock")
            raise OutOfStock()

        record = RedemptionRecord(
            coupon_template_id=template.id,
            establishment_id=template.establishment_id,
            customer_id=identity.actor_id,
            customer_email=identity.email,
            customer_name=identity.name,
            customer_phone=identity.phone,
            token=token,
            amount_snapshot=template.discount_value,
            discount_kind_snapshot=template.discount_kind,
            expiration_date_snapshot=template.promotion_end,
            status=RedemptionStatus.REDEEMED.value,
        )
        db.add(record)
        try:
            await db.flush()
        except IntegrityError:
            # Undo the decrement along with the failed insert
            await db.rollback()
            if await self.get_by_customer_and_template(db, identity.actor_id, template_id):
                logger.info(
                    f"Concurrent duplicate redemption of {template_id} by {identity.actor_id}"
                )
                raise AlreadyRedeemed() from None
            logger.warning(f"Redemption of {template_id} hit a token conflict")
            raise RedemptionConflict() from None

        await db.refresh(record)
        logger.info(
            f"Coupon template {template_id} redeemed by {identity.actor_id} "
            f"(redemption {record.id})"
        )
        return record

    async def lookup_by_token(
        self,
        db: AsyncSession,
        identity: IdentityContext,
        token: str,
    ) -> RedemptionRecord:
        """
        Find the redemption a customer presents at the point of sale.

        Malformed tokens fail with InvalidTokenFormat before any query.
        Establishments only see redemptions of their own coupons.
        """
        normalized = normalize_token(token)
        if normalized is None:
            raise InvalidTokenFormat()

        record = await self.get_by_token(db, normalized)
        if not record or not identity.can_manage(record.establishment_id):
            raise NotFound("Redemption")
        return record

    async def resolve(
        self,
        db: AsyncSession,
        identity: IdentityContext,
        record_id: uuid_pkg.UUID,
        outcome: ResolutionOutcome,
    ) -> RedemptionRecord:
        """
        Move a redemption out of the redeemed state.

        Only a record still in 'redeemed' is updated; anything else raises
        AlreadyResolved. The template's stock is not touched.
        """
        now = datetime.now(UTC)
        statement = update(RedemptionRecord).where(
            RedemptionRecord.id == record_id,
            RedemptionRecord.status == RedemptionStatus.REDEEMED.value,
        )
        if identity.role is not UserRole.ADMIN:
            statement = statement.where(RedemptionRecord.establishment_id == identity.actor_id)
        statement = statement.values(
            status=outcome.value,
            resolved_at=now,
            resolved_by=identity.actor_id,
        ).execution_options(synchronize_session=False)

        result = await db.execute(statement)

        record = await self._reload(db, record_id)
        if result.rowcount == 0:
            if not record or not identity.can_manage(record.establishment_id):
                raise NotFound("Redemption")
            raise AlreadyResolved(record.status)

        logger.info(f"Redemption {record_id} resolved as {outcome.value} by {identity.actor_id}")
        return record

    async def _reload(self, db: AsyncSession, record_id: uuid_pkg.UUID) -> RedemptionRecord | None:
        statement = (
            select(RedemptionRecord)
            .where(RedemptionRecord.id == record_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def list_for_customer(
        self,
        db: AsyncSession,
        customer_id: uuid_pkg.UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> list[RedemptionRecord]:
        """Get a customer's redemptions, newest first."""
        statement = (
            select(RedemptionRecord)
            .where(RedemptionRecord.customer_id == customer_id)
            .order_by(RedemptionRecord.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def list_for_establishment(
        self,
        db: AsyncSession,
        establishment_id: uuid_pkg.UUID,
        limit: int | None = None,
    ) -> list[RedemptionRecord]:
        """Get the most recent redemptions of an establishment's coupons."""
        statement = (
            select(RedemptionRecord)
            .where(RedemptionRecord.establishment_id == establishment_id)
            .order_by(RedemptionRecord.created_at.desc())
            .limit(limit or settings.recent_redemptions_limit)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())


redemption_ops = RedemptionOperations()
