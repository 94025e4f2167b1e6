"""Redemption token generation and validation."""

import secrets

TOKEN_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
TOKEN_LENGTH = 6


def generate_redemption_token() -> str:
    """Generate a 6-character redemption token over [A-Z0-9].

    36^6 (~2.18e9) possible values. Tokens are display codes shown to the
    merchant, uniqueness is checked by the redemption engine before insert.
    """
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def normalize_token(raw: str) -> str | None:
    """Return the canonical form of a customer-presented token, or None if malformed."""
    token = (raw or "").strip().upper()
    if len(token) != TOKEN_LENGTH:
        return None
    if any(c not in TOKEN_ALPHABET for c in token):
        return None
    return token
