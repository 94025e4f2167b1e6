"""Domain operations for the coupon catalog."""

import logging
import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from couponhub.core.exceptions import NotFound, NotOwner
from couponhub.domain.base_operations import BaseOperations
from couponhub.domain.identity import IdentityContext
from couponhub.models.coupon_template import (
    CouponTemplate,
    CouponTemplateCreate,
    CouponTemplateUpdate,
)

logger = logging.getLogger(__name__)


class CouponTemplateOperations(BaseOperations[CouponTemplate]):
    """CRUD operations for CouponTemplate model."""

    def __init__(self) -> None:
        super().__init__(CouponTemplate)

    async def list_templates(
        self,
        db: AsyncSession,
        establishment_id: uuid_pkg.UUID | None = None,
        available_only: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> list[CouponTemplate]:
        """List templates newest first, optionally scoped to one establishment."""
        statement = select(CouponTemplate)
        if establishment_id is not None:
            statement = statement.where(CouponTemplate.establishment_id == establishment_id)
        if available_only:
            statement = statement.where(CouponTemplate.remaining_count > 0)
        statement = (
            statement.order_by(CouponTemplate.created_at.desc(), CouponTemplate.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def get_template(self, db: AsyncSession, template_id: uuid_pkg.UUID) -> CouponTemplate:
        """Get a template or raise NotFound."""
        template = await self.get(db, template_id)
        if not template:
            raise NotFound("Coupon template")
        return template

    async def create_template(
        self,
        db: AsyncSession,
        identity: IdentityContext,
        data: CouponTemplateCreate,
    ) -> CouponTemplate:
        """
        Publish a new template owned by the acting establishment.

        The owner's identity is embedded by value so later profile edits
        don't rewrite the history of what was published.
        """
        fields = data.model_dump()
        fields["discount_kind"] = data.discount_kind.value
        template = CouponTemplate(
            **fields,
            establishment_id=identity.actor_id,
            owner_snapshot=identity.owner_snapshot(),
        )
        db.add(template)
        await db.flush()
        await db.refresh(template)
        logger.info(
            f"Coupon template {template.id} created by {identity.actor_id} "
            f"with {template.remaining_count} coupons"
        )
        return template

    async def update_template(
        self,
        db: AsyncSession,
        identity: IdentityContext,
        template_id: uuid_pkg.UUID,
        data: CouponTemplateUpdate,
    ) -> CouponTemplate:
        """
        Overwrite every editable field of a template.

        Raises NotFound if the template doesn't exist and NotOwner unless the
        actor owns it (admins may edit any template).
        """
        template = await self.get_template(db, template_id)
        if not identity.can_manage(template.establishment_id):
            raise NotOwner()

        fields = data.model_dump()
        fields["discount_kind"] = data.discount_kind.value
        fields["updated_at"] = datetime.now(UTC)
        return await self.update(db, template, fields)

    async def decrement_stock(self, db: AsyncSession, template_id: uuid_pkg.UUID) -> bool:
        """
        Take one coupon from a template's stock.

        Single conditional UPDATE, so concurrent redemptions can't oversell:
        returns False when the stock is already 0 (no row updated).
        """
        statement = (
            update(CouponTemplate)
            .where(
                CouponTemplate.id == template_id,
                CouponTemplate.remaining_count > 0,
            )
            .values(remaining_count=CouponTemplate.remaining_count - 1)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(statement)
        return result.rowcount == 1


coupon_template_ops = CouponTemplateOperations()
