"""Actor roles and role resolution from Supabase token claims."""

from enum import Enum
from typing import Any


class UserRole(str, Enum):
    """Closed set of actor roles."""

    ADMIN = "admin"
    ESTABLISHMENT = "establishment"
    CUSTOMER = "customer"


def parse_role(value: str | None) -> UserRole:
    """Parse a stored role string, defaulting to customer for unknown values."""
    try:
        return UserRole(value) if value else UserRole.CUSTOMER
    except ValueError:
        return UserRole.CUSTOMER


def role_from_claims(app_metadata: dict[str, Any]) -> UserRole:
    """
    Resolve the role for a new user from JWT app_metadata.

    Only app_metadata counts: it can only be written with the service role
    key (see identity_provider.set_app_role). user_metadata is editable by
    the user, so a self-registered account is always a customer.
    """
    return parse_role(app_metadata.get("role"))
