"""Configuration package."""

from couponhub.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
