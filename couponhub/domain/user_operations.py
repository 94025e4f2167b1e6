import logging
import uuid as uuid_pkg
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from couponhub.core.roles import UserRole, role_from_claims
from couponhub.models.user import User, UserProfileUpdate
from couponhub.services import identity_provider

logger = logging.getLogger(__name__)


class UserOperations:
    """Operations for User model."""

    async def get_by_id(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
    ) -> User | None:
        """Get a user by ID."""
        statement = select(User).where(User.id == user_id)
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        statement = select(User).where(User.email == email)
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_create_from_claims(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        payload: dict[str, Any],
    ) -> User:
        """
        Get the local user for a verified JWT, creating it on the first call.

        Self-registered customers only exist in Supabase Auth until their
        first API request; name, phone and document come from user_metadata.
        """
        user = await self.get_by_id(db, user_id)
        if user:
            return user

        app_metadata = payload.get("app_metadata") or {}
        user_metadata = payload.get("user_metadata") or {}
        role = role_from_claims(app_metadata)

        user = User(
            id=user_id,
            email=payload.get("email"),
            name=user_metadata.get("name"),
            phone=user_metadata.get("phone") or payload.get("phone") or None,
            document=user_metadata.get("document"),
            avatar_url=user_metadata.get("avatar_url"),
            role=role.value,
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)
        logger.info(f"Created {role.value} user {user_id} on first request")
        return user

    async def update_profile(
        self,
        db: AsyncSession,
        user: User,
        data: UserProfileUpdate,
    ) -> User:
        """
        Update the user's own profile.

        The fields are written to Supabase user_metadata first so the auth
        record and the local row agree; if that fails nothing is stored.
        Coupon templates keep the owner snapshot taken when they were published.
        """
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            return user

        await identity_provider.update_user_metadata(
            user.id,
            {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in fields.items()},
        )

        for field, value in fields.items():
            setattr(user, field, value)
        user.updated_at = datetime.now(UTC)
        db.add(user)
        await db.flush()
        await db.refresh(user)
        return user

    async def list_users(
        self,
        db: AsyncSession,
        role: UserRole | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[User]:
        """List users newest first, optionally filtered by role."""
        statement = select(User)
        if role is not None:
            statement = statement.where(User.role == role.value)
        statement = statement.order_by(User.created_at.desc()).offset(skip).limit(limit)
        result = await db.execute(statement)
        return list(result.scalars().all())


user_ops = UserOperations()
