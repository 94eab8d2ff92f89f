"""Token management for the Microsoft Graph client-credentials flow."""

import asyncio
import logging
import time
from typing import Self

import httpx
from pydantic import ValidationError

from ..config import GraphConfig
from ..errors import AuthError, TokenFormatError
from ..models import TokenResponse

logger = logging.getLogger("graph_policy_keys.token_manager")


async def read_body_text(response: httpx.Response) -> str:
    """Read a streamed response body as text, or return "" when it cannot be read."""
    try:
        await response.aread()
    except httpx.HTTPError:
        logger.warning("Could not read body of HTTP %s response.", response.status_code)
        return ""
    return response.text


class TokenManager:
    """Own a bearer token and its expiry, refreshing from the identity provider when needed."""

    def __init__(self, config: GraphConfig, http_client: httpx.AsyncClient) -> None:
        """Initialize the token manager with an empty credential.

        Args:
            config: Resolved connection settings for the identity provider.
            http_client: Shared HTTP client used for token requests.

        """
        self._config = config
        self._http_client = http_client
        self._access_token: str = ""
        self._expires_on: int = 0
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @classmethod
    async def initialize(cls, config: GraphConfig, http_client: httpx.AsyncClient) -> Self:
        """Create a token manager and eagerly acquire the first token.

        Raises:
            AuthError: If the identity provider rejects the request or is unreachable.
            TokenFormatError: If the token response cannot be parsed.

        """
        manager = cls(config, http_client)
        await manager.get_token()
        return manager

    @property
    def expires_on(self) -> int:
        """Absolute expiry of the cached token, in epoch seconds."""
        return self._expires_on

    def _ensure_lock(self) -> asyncio.Lock:
        """Return an asyncio lock bound to the current event loop.

        Creates a new lock if one does not exist or if the event loop has changed.
        """
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def _now(self) -> int:
        """Return the current wall-clock time in epoch seconds."""
        return int(time.time())

    def is_expired(self) -> bool:
        """Return True when no token is cached or its expiry has been reached."""
        return not self._access_token or self._now() >= self._expires_on

    async def get_token(self) -> str:
        """Return a valid bearer token, refreshing it first if it has expired."""
        async with self._ensure_lock():
            if self.is_expired():
                await self._refresh()
            return self._access_token

    async def _refresh(self) -> None:
        """Fetch a new token and replace the cached credential.

        The cached token and expiry are only replaced once the response has been
        fully parsed.
        """
        request = self._http_client.build_request(
            "POST",
            self._config.token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self._config.client_id,
                "client_secret": self._config.client_secret,
                "resource": self._config.resource,
            },
        )
        try:
            response = await self._http_client.send(request, stream=True)
        except httpx.HTTPError as exc:
            logger.exception("Failed to reach the identity provider")
            msg = f"Token request failed: {exc}"
            raise AuthError(msg) from exc

        try:
            if not response.is_success:
                logger.error("Token request rejected with HTTP %s", response.status_code)
                body = await read_body_text(response)
                msg = f"Token request rejected: {response.status_code} {body}"
                raise AuthError(msg, status=response.status_code, body=body)
            try:
                await response.aread()
            except httpx.HTTPError as exc:
                logger.exception("Failed to read the token response")
                msg = f"Token response could not be read: {exc}"
                raise TokenFormatError(msg, status=response.status_code) from exc
        finally:
            await response.aclose()

        access_token, expires_on = self._parse_token_response(response)
        self._access_token = access_token
        self._expires_on = expires_on
        logger.debug("Fetched new bearer token expiring at %s.", expires_on)

    @staticmethod
    def _parse_token_response(response: httpx.Response) -> tuple[str, int]:
        """Extract the access token and its absolute expiry from a token response.

        Raises:
            TokenFormatError: If the body is not JSON, misses a field, or carries
                an ``expires_on`` that is not a non-negative integer.

        """
        try:
            token = TokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            msg = f"Malformed token response: {exc}"
            raise TokenFormatError(msg, status=response.status_code, body=response.text) from exc

        if not token.access_token:
            msg = "Token response contained an empty access_token."
            raise TokenFormatError(msg, status=response.status_code, body=response.text)

        # Unsigned ASCII digits only.
        if not (token.expires_on.isascii() and token.expires_on.isdigit()):
            msg = f"Token response has a non-integer expires_on: {token.expires_on!r}"
            raise TokenFormatError(msg, status=response.status_code, body=response.text)

        return token.access_token, int(token.expires_on)


__all__ = ["TokenManager", "read_body_text"]
