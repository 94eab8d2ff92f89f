"""Authenticated Microsoft Graph client setup and the shared request helper.

Provides ``GraphClient.send``, the single request/response/error-mapping path
used by every key-set operation, and the async context manager that builds a
client backed by one pooled ``httpx.AsyncClient`` for the process lifetime.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from pydantic import BaseModel, ValidationError

from ..config import GraphConfig
from ..errors import HttpResponseError, RequestError, ResponseFormatError
from .token_manager import TokenManager, read_body_text

logger = logging.getLogger("graph_policy_keys.graph_client")


class GraphClient:
    """Send bearer-authenticated JSON requests to the key-set API."""

    def __init__(
        self,
        config: GraphConfig,
        http_client: httpx.AsyncClient,
        token_manager: TokenManager,
    ) -> None:
        """Initialize the client.

        Args:
            config: Resolved connection settings.
            http_client: Shared HTTP client for all requests.
            token_manager: Source of valid bearer tokens.

        """
        self.config = config
        self.http_client = http_client
        self.token_manager = token_manager

    @property
    def key_sets_url(self) -> str:
        """Return the collection URL for trust framework key sets."""
        return f"{self.config.base_url_str}/keySets"

    async def send[T: BaseModel](
        self,
        method: str,
        url: str,
        *,
        response_model: type[T],
        body: BaseModel | None = None,
    ) -> T:
        """Send an authenticated request and deserialize the JSON response.

        Args:
            method: HTTP method, e.g. ``GET`` or ``POST``.
            url: Absolute request URL.
            response_model: Model used to validate the response body.
            body: Optional payload, serialized as JSON with ``None`` fields omitted.

        Returns:
            The validated response model.

        Raises:
            AuthError: If a token refresh was needed and failed.
            RequestError: On network or timeout errors.
            HttpResponseError: If the response status is not 2xx.
            ResponseFormatError: If the body is not JSON or does not match ``response_model``.

        """
        token = await self.token_manager.get_token()
        headers = {"Authorization": f"Bearer {token}"}
        payload = body.model_dump(mode="json", exclude_none=True) if body is not None else None

        request = self.http_client.build_request(method, url, headers=headers, json=payload)
        try:
            response = await self.http_client.send(request, stream=True)
        except httpx.HTTPError as exc:
            msg = f"Network error during {method} {url}: {exc}"
            raise RequestError(msg) from exc

        try:
            if not response.is_success:
                logger.error("HTTP Error: %s %s -> %s", method, url, response.status_code)
                raise HttpResponseError(response.status_code, await read_body_text(response))
            try:
                await response.aread()
            except httpx.HTTPError as exc:
                msg = f"Network error reading {method} {url}: {exc}"
                raise RequestError(msg) from exc
        finally:
            await response.aclose()

        try:
            return response_model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            msg = f"Unexpected response body from {method} {url}: {exc}"
            raise ResponseFormatError(msg) from exc


@asynccontextmanager
async def create_graph_client(config: GraphConfig) -> AsyncIterator[GraphClient]:
    """Create an authenticated Graph client.

    Opens a pooled HTTP client bounded by the configured timeout, acquires the
    first bearer token, and closes the HTTP client on exit.

    Args:
        config: The configuration containing credentials, base URL, and timeout.

    Yields:
        Configured GraphClient instance.

    """
    timeout = httpx.Timeout(config.timeout_ms / 1000)
    async with httpx.AsyncClient(timeout=timeout) as http_client:
        token_manager = await TokenManager.initialize(config, http_client)
        yield GraphClient(config, http_client, token_manager)


__all__ = ["GraphClient", "create_graph_client"]
