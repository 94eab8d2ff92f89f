"""Configuration management for graph-policy-keys.

This module defines the ``GraphConfig`` model and the helper that loads it from
environment variables. A local ``.env`` file is honoured for development
convenience.
"""

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import AnyUrl, BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

# Load variables from a local .env file for development convenience
load_dotenv()

DEFAULT_GRAPH_BASE_URL = "https://graph.microsoft.com/beta/trustFramework"
DEFAULT_KEY_SET_NAME = "B2C_1A_TestKey1"

# Environment variable name -> GraphConfig field name
REQUIRED_ENV_VARS: dict[str, str] = {
    "CLIENT_ID": "client_id",
    "CLIENT_SECRET": "client_secret",
    "TENANT": "tenant",
    "LOGIN_URL": "login_url",
    "RESOURCE": "resource",
}


class GraphConfig(BaseModel):
    """Connection settings for the identity provider and Microsoft Graph."""

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    tenant: str = Field(min_length=1)
    login_url: str | AnyUrl
    resource: str = Field(min_length=1)
    base_url: str | AnyUrl = DEFAULT_GRAPH_BASE_URL
    key_set_name: str = Field(default=DEFAULT_KEY_SET_NAME, min_length=1)
    timeout_ms: int = Field(default=10000, ge=1000, le=600000)

    @field_validator("login_url", "base_url")
    @classmethod
    def _require_http_url(cls, value: str | AnyUrl) -> str:
        text = str(value).strip()
        if not text.startswith(("http://", "https://")):
            msg = f"Invalid URL '{text}'; expected http:// or https://"
            raise ValueError(msg)
        return text.rstrip("/")

    @property
    def base_url_str(self) -> str:
        """Return the key-set API base URL as a plain string."""
        return str(self.base_url)

    @property
    def token_url(self) -> str:
        """Return the OAuth2 token endpoint for the configured tenant."""
        return f"{self.login_url}/{self.tenant}/oauth2/token?api-version=1.0"

    @classmethod
    def from_env(cls) -> "GraphConfig":
        """Build a configuration object from environment variables.

        Raises:
            ConfigurationError: If a required variable is missing or a value is invalid.

        """
        missing = [name for name in REQUIRED_ENV_VARS if not (os.getenv(name) or "").strip()]
        if missing:
            msg = f"Missing required environment variable(s): {', '.join(missing)}"
            raise ConfigurationError(msg)

        raw_config: dict[str, Any] = {field: os.getenv(name) for name, field in REQUIRED_ENV_VARS.items()}
        optional = {
            "base_url": os.getenv("GRAPH_BASE_URL"),
            "key_set_name": os.getenv("KEY_SET_NAME"),
            "timeout_ms": os.getenv("GRAPH_TIMEOUT_MS"),
        }
        raw_config.update({key: value for key, value in optional.items() if value})
        try:
            return cls(**raw_config)
        except ValidationError as exc:
            messages = "; ".join(err["msg"] for err in exc.errors())
            msg = f"Invalid Graph configuration: {messages}"
            raise ConfigurationError(msg) from exc


__all__ = ["DEFAULT_GRAPH_BASE_URL", "DEFAULT_KEY_SET_NAME", "REQUIRED_ENV_VARS", "GraphConfig"]
