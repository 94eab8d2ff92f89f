"""Pydantic models for Microsoft Graph key set payloads."""

from .key_sets import (
    SECRET_LIFETIME_SECONDS,
    Key,
    KeySecret,
    KeySet,
    TokenResponse,
)

__all__ = [
    "SECRET_LIFETIME_SECONDS",
    "Key",
    "KeySecret",
    "KeySet",
    "TokenResponse",
]
