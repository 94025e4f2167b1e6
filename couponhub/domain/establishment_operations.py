import logging
import re

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from couponhub.core.exceptions import AlreadyExists, InvalidEmail
from couponhub.core.roles import UserRole
from couponhub.domain.base_operations import BaseOperations
from couponhub.domain.user_operations import user_ops
from couponhub.models.establishment import Establishment, EstablishmentCreate
from couponhub.models.user import User
from couponhub.services import identity_provider

logger = logging.getLogger(__name__)

# Basic email validation pattern
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class EstablishmentOperations(BaseOperations[Establishment]):
    """Operations for Establishment model."""

    def __init__(self) -> None:
        super().__init__(Establishment)

    async def create_establishment(
        self,
        db: AsyncSession,
        data: EstablishmentCreate,
    ) -> Establishment:
        """
        Register a new establishment account.

        The account is invited through Supabase Auth, its role is pinned in
        app_metadata, and the local user and profile rows are created. When
        Supabase already holds the email but no local user does, the existing
        auth account is reused so a failed registration can be retried.

        Raises:
            InvalidEmail: malformed email
            AlreadyExists: email already registered locally, or in Supabase but not found there
            CollaboratorUnavailable: Supabase Auth failed
        """
        email = data.email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise InvalidEmail(f"Invalid email format: {email}")

        if await user_ops.get_by_email(db, email):
            raise AlreadyExists()

        metadata = {
            "name": data.name,
            "phone": data.phone,
            "document": data.document,
            "role": UserRole.ESTABLISHMENT.value,
        }
        try:
            user_id = await identity_provider.invite_user(email, metadata)
        except AlreadyExists:
            # Auth account left behind by an earlier attempt; no local user exists.
            user_id = await identity_provider.find_user_id_by_email(email)
            if user_id is None:
                raise
            logger.info(f"Resuming establishment registration for existing auth user {user_id}")
        await identity_provider.set_app_role(user_id, UserRole.ESTABLISHMENT)

        user = User(
            id=user_id,
            email=email,
            name=data.name,
            phone=data.phone,
            document=data.document,
            role=UserRole.ESTABLISHMENT.value,
        )
        db.add(user)

        fields = data.model_dump()
        fields["email"] = email
        establishment = Establishment(**fields, user_id=user_id)
        db.add(establishment)
        await db.flush()
        await db.refresh(establishment)

        logger.info(f"Registered establishment {establishment.id} for user {user_id}")
        return establishment

    async def list_establishments(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Establishment]:
        """List establishments newest first."""
        statement = (
            select(Establishment)
            .order_by(Establishment.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())


establishment_ops = EstablishmentOperations()
