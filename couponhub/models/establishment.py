"""Establishment profile created by admins alongside the establishment's account."""

import uuid as uuid_pkg

from sqlmodel import Field, SQLModel

from couponhub.models.base import TimestampMixin, UUIDMixin


class EstablishmentBase(SQLModel):
    """Base fields for Establishment."""

    name: str = Field(max_length=255, nullable=False)
    document: str = Field(max_length=32, nullable=False)
    phone: str = Field(max_length=32, nullable=False)
    email: str = Field(max_length=255, nullable=False, index=True)

    # Address
    postal_code: str | None = Field(default=None, max_length=16)
    city: str | None = Field(default=None, max_length=120)
    state: str | None = Field(default=None, max_length=64)
    neighborhood: str | None = Field(default=None, max_length=120)
    street: str | None = Field(default=None, max_length=255)
    number: str | None = Field(default=None, max_length=16)
    complement: str | None = Field(default=None, max_length=255)


class Establishment(EstablishmentBase, UUIDMixin, TimestampMixin, table=True):
    """Merchant profile. The owning user account has role=establishment."""

    __tablename__ = "establishments"

    user_id: uuid_pkg.UUID = Field(
        foreign_key="users.id",
        nullable=False,
        unique=True,
        index=True,
    )


class EstablishmentCreate(EstablishmentBase):
    """Schema for admins registering an establishment."""


class EstablishmentRead(EstablishmentBase):
    """Schema for reading an establishment."""

    id: uuid_pkg.UUID
    user_id: uuid_pkg.UUID
