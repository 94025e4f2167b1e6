import uuid as uuid_pkg
from datetime import UTC, date, datetime

from sqlalchemy import DateTime, func
from sqlmodel import Field, SQLModel

from couponhub.core.roles import UserRole


class User(SQLModel, table=True):
    """
    User model - mirrors Supabase auth.users.

    The id comes from Supabase Auth. Records are created on the first API
    call after sign-up (customers) or by an admin (establishments).
    """

    __tablename__ = "users"

    id: uuid_pkg.UUID = Field(
        primary_key=True,
        index=True,
        nullable=False,
        description="UUID from Supabase auth.users",
    )
    email: str | None = Field(default=None, max_length=255, index=True)
    name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=32)
    document: str | None = Field(default=None, max_length=32)
    birthday: date | None = Field(default=None)
    avatar_url: str | None = Field(default=None, max_length=500)

    role: str = Field(
        default=UserRole.CUSTOMER.value,
        max_length=20,
        nullable=False,
        index=True,
    )

    created_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now()},
    )
    updated_at: datetime | None = Field(  # type: ignore[call-overload]
        default=None,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": func.now()},
    )


class UserProfileUpdate(SQLModel):
    """Schema for editing the current user's profile (PATCH semantics)."""

    name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=32)
    document: str | None = Field(default=None, max_length=32)
    birthday: date | None = None
    avatar_url: str | None = Field(default=None, max_length=500)


class UserRead(SQLModel):
    """Schema for reading a user."""

    id: uuid_pkg.UUID
    email: str | None
    name: str | None
    phone: str | None
    document: str | None
    birthday: date | None
    avatar_url: str | None
    role: str
    created_at: datetime
