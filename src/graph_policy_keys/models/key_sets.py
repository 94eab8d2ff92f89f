"""Pydantic models for trust framework key sets.

These mirror the subset of the Microsoft Graph ``trustFrameworkKeySet`` and
``trustFrameworkKey`` resources this client reads and writes. Unknown fields
returned by the service are preserved as extras rather than dropped.
"""

import secrets
import time

from pydantic import BaseModel, ConfigDict, Field

# Default validity window for uploaded secrets, in seconds.
SECRET_LIFETIME_SECONDS = 24 * 60 * 60

# Number of random bytes used when no secret value is supplied.
SECRET_NBYTES = 32


class Key(BaseModel):
    """A key held inside a key set, as returned by the service."""

    model_config = ConfigDict(extra="allow")

    use: str
    """Key usage, e.g. ``sig`` or ``enc``."""

    kid: str | None = None
    nbf: int | None = None
    """Not-before time, epoch seconds."""

    exp: int | None = None
    """Expiry time, epoch seconds."""


class KeySet(BaseModel):
    """A named container of signing or encryption keys."""

    model_config = ConfigDict(extra="allow")

    id: str
    keys: list[Key] | None = None
    """Only present on responses; omitted from outgoing requests."""

    @classmethod
    def new(cls, name: str) -> "KeySet":
        """Build the payload for creating an empty key set."""
        return cls(id=name)


class KeySecret(BaseModel):
    """Payload for uploading a new symmetric secret into a key set."""

    use: str = "sig"
    k: str = Field(repr=False)
    nbf: int
    exp: int

    @classmethod
    def generate(
        cls,
        secret: str | None = None,
        *,
        now: int | None = None,
        lifetime: int = SECRET_LIFETIME_SECONDS,
    ) -> "KeySecret":
        """Build a signing secret valid from ``now`` for ``lifetime`` seconds.

        Args:
            secret: Secret material to upload. A random URL-safe value is
                generated when omitted.
            now: Not-before time in epoch seconds; defaults to the current time.
            lifetime: Validity window in seconds.

        """
        nbf = int(time.time()) if now is None else now
        value = secret if secret is not None else secrets.token_urlsafe(SECRET_NBYTES)
        return cls(use="sig", k=value, nbf=nbf, exp=nbf + lifetime)


class TokenResponse(BaseModel):
    """Fields read from the OAuth2 token endpoint response."""

    access_token: str
    expires_on: str
    """Absolute expiry as a string of integer epoch seconds."""


__all__ = [
    "SECRET_LIFETIME_SECONDS",
    "Key",
    "KeySecret",
    "KeySet",
    "TokenResponse",
]
