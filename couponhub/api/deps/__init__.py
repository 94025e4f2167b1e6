"""API dependencies - re-exports from submodules."""

from .auth import (
    CurrentUser,
    DbSession,
    Identity,
    decode_token,
    get_current_user,
    get_identity,
    get_jwks,
    get_signing_key,
    security,
)
from .roles import (
    AdminIdentity,
    CustomerIdentity,
    EstablishmentIdentity,
    PublisherIdentity,
    RoleGate,
)

__all__ = [
    # Auth
    "security",
    "get_jwks",
    "get_signing_key",
    "decode_token",
    "get_current_user",
    "get_identity",
    "CurrentUser",
    "DbSession",
    "Identity",
    # Roles
    "RoleGate",
    "AdminIdentity",
    "PublisherIdentity",
    "EstablishmentIdentity",
    "CustomerIdentity",
]
