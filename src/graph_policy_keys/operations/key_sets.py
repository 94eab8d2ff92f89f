"""Trust framework key-set operations.

Each operation is a single request through ``GraphClient.send``; none of them
retry, paginate, or cache results.
"""

import logging
from urllib.parse import quote

from ..client.graph_client import GraphClient
from ..models import Key, KeySecret, KeySet

logger = logging.getLogger("graph_policy_keys.operations.key_sets")


def key_set_url(client: GraphClient, name: str) -> str:
    """Build the URL of a single key set."""
    return f"{client.key_sets_url}/{quote(name, safe='')}"


async def create_key_set(client: GraphClient, name: str) -> KeySet:
    """Create an empty key set called ``name``."""
    logger.info("Creating key set %s.", name)
    return await client.send("POST", client.key_sets_url, body=KeySet.new(name), response_model=KeySet)


async def upload_secret(client: GraphClient, name: str, *, secret: str | None = None) -> Key:
    """Upload a signing secret into key set ``name``.

    Args:
        client: Authenticated Graph client.
        name: Key set identifier.
        secret: Secret material; a random value is generated when omitted.

    Returns:
        The key created by the service.

    """
    logger.info("Uploading secret to key set %s.", name)
    return await client.send(
        "POST",
        f"{key_set_url(client, name)}/uploadSecret",
        body=KeySecret.generate(secret),
        response_model=Key,
    )


async def get_key_set(client: GraphClient, name: str) -> KeySet:
    """Fetch key set ``name`` with its keys."""
    return await client.send("GET", key_set_url(client, name), response_model=KeySet)


__all__ = ["create_key_set", "get_key_set", "key_set_url", "upload_secret"]
