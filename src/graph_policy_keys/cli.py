"""Entry point for the graph-policy-keys command.

Runs a fixed sequence against the configured tenant:
- create the key set named by ``KEY_SET_NAME``
- upload a freshly generated signing secret into it
- fetch the key set back

Each result is printed to standard output as JSON. Any failure is fatal.
"""

import asyncio
import logging
import os
import signal
import sys

from pydantic import BaseModel

from .client.graph_client import create_graph_client
from .config import GraphConfig
from .errors import GraphError
from .operations.key_sets import create_key_set, get_key_set, upload_secret

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logger = logging.getLogger("graph_policy_keys.cli")


def _print_result(label: str, result: BaseModel) -> None:
    print(f"{label}: {result.model_dump_json(indent=2, exclude_none=True)}")


async def run(config: GraphConfig) -> None:
    """Create a key set, upload a secret into it, and fetch it back."""
    name = config.key_set_name
    async with create_graph_client(config) as client:
        _print_result("New Key Set", await create_key_set(client, name))
        _print_result("New Secret", await upload_secret(client, name))
        _print_result("Fetched Key Set", await get_key_set(client, name))


def handle_interrupt(signum: int, frame: object) -> None:  # noqa: ARG001
    """Handle SIGINT or SIGTERM by exiting with the conventional 128 + signal number."""
    logger.info("Received interrupt signal, shutting down...")
    sys.exit(128 + signum)


def main() -> None:
    """Entry point for the graph-policy-keys console script."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(name)s [%(levelname)s] %(message)s",
    )
    signal.signal(signal.SIGINT, handle_interrupt)
    signal.signal(signal.SIGTERM, handle_interrupt)
    try:
        config = GraphConfig.from_env()
        asyncio.run(run(config))
    except GraphError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)  # noqa: TRY400
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
