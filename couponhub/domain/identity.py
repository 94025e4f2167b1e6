"""Identity context: the acting user, passed explicitly into every operation."""

import uuid as uuid_pkg
from dataclasses import dataclass
from typing import Any

from couponhub.core.exceptions import IdentityIncomplete
from couponhub.core.roles import UserRole, parse_role
from couponhub.models.user import User


@dataclass(frozen=True)
class IdentityContext:
    """Who is acting, with the contact data redemption and ownership need."""

    actor_id: uuid_pkg.UUID
    role: UserRole
    email: str | None = None
    name: str | None = None
    phone: str | None = None
    document: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "IdentityContext":
        return cls(
            actor_id=user.id,
            role=parse_role(user.role),
            email=user.email,
            name=user.name,
            phone=user.phone,
            document=user.document,
        )

    def require_contact(self) -> None:
        """Raise IdentityIncomplete unless id, email, phone and name are present."""
        missing = [
            field
            for field in ("email", "phone", "name")
            if not (getattr(self, field) or "").strip()
        ]
        if self.actor_id is None:
            missing.insert(0, "id")
        if missing:
            raise IdentityIncomplete(missing)

    def owner_snapshot(self) -> dict[str, Any]:
        """Value copy of the actor's identity, embedded in templates they publish."""
        return {
            "id": str(self.actor_id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "document": self.document,
            "role": self.role.value,
        }

    def can_manage(self, establishment_id: uuid_pkg.UUID) -> bool:
        """Whether the actor may act on resources owned by establishment_id."""
        return self.role is UserRole.ADMIN or self.actor_id == establishment_id
