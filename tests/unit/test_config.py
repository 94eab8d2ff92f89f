"""Unit tests for environment-driven configuration loading."""

import pytest
from pydantic import ValidationError

from graph_policy_keys.config import DEFAULT_GRAPH_BASE_URL, DEFAULT_KEY_SET_NAME, GraphConfig
from graph_policy_keys.errors import ConfigurationError

REQUIRED = {
    "CLIENT_ID": "client-id",
    "CLIENT_SECRET": "client-secret",
    "TENANT": "contoso.onmicrosoft.com",
    "LOGIN_URL": "https://login.microsoftonline.com/",
    "RESOURCE": "https://graph.microsoft.com",
}
OPTIONAL = ("GRAPH_BASE_URL", "GRAPH_TIMEOUT_MS", "KEY_SET_NAME")


@pytest.fixture
def full_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    for name in OPTIONAL:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_from_env_reads_required_values(full_env: pytest.MonkeyPatch) -> None:
    """All required variables should map onto the config fields."""
    config = GraphConfig.from_env()

    assert config.client_id == "client-id"
    assert config.client_secret == "client-secret"
    assert config.tenant == "contoso.onmicrosoft.com"
    assert config.resource == "https://graph.microsoft.com"
    assert config.base_url_str == DEFAULT_GRAPH_BASE_URL
    assert config.key_set_name == DEFAULT_KEY_SET_NAME
    assert config.timeout_ms == 10000


def test_token_url_strips_trailing_slash(full_env: pytest.MonkeyPatch) -> None:
    """The token URL should be built from the login URL and tenant."""
    config = GraphConfig.from_env()
    assert config.token_url == (
        "https://login.microsoftonline.com/contoso.onmicrosoft.com/oauth2/token?api-version=1.0"
    )


@pytest.mark.parametrize("name", list(REQUIRED))
def test_from_env_missing_variable(full_env: pytest.MonkeyPatch, name: str) -> None:
    """Each required variable is mandatory."""
    full_env.delenv(name)
    with pytest.raises(ConfigurationError, match=name):
        GraphConfig.from_env()


def test_from_env_blank_variable_is_missing(full_env: pytest.MonkeyPatch) -> None:
    """Whitespace-only values count as missing."""
    full_env.setenv("TENANT", "   ")
    with pytest.raises(ConfigurationError, match="TENANT"):
        GraphConfig.from_env()


def test_from_env_lists_every_missing_variable(full_env: pytest.MonkeyPatch) -> None:
    """The error message should name all missing variables at once."""
    full_env.delenv("CLIENT_ID")
    full_env.delenv("RESOURCE")
    with pytest.raises(ConfigurationError, match="CLIENT_ID, RESOURCE"):
        GraphConfig.from_env()


def test_from_env_optional_overrides(full_env: pytest.MonkeyPatch) -> None:
    """Optional variables should override defaults."""
    full_env.setenv("GRAPH_BASE_URL", "https://graph.example.com/beta/trustFramework/")
    full_env.setenv("GRAPH_TIMEOUT_MS", "2500")
    full_env.setenv("KEY_SET_NAME", "B2C_1A_Other")

    config = GraphConfig.from_env()

    assert config.base_url_str == "https://graph.example.com/beta/trustFramework"
    assert config.timeout_ms == 2500
    assert config.key_set_name == "B2C_1A_Other"


def test_from_env_invalid_timeout(full_env: pytest.MonkeyPatch) -> None:
    """Out-of-range timeouts should surface as ConfigurationError."""
    full_env.setenv("GRAPH_TIMEOUT_MS", "5")
    with pytest.raises(ConfigurationError, match="Invalid Graph configuration"):
        GraphConfig.from_env()


def test_from_env_invalid_login_url(full_env: pytest.MonkeyPatch) -> None:
    """A login URL without a scheme is rejected."""
    full_env.setenv("LOGIN_URL", "login.microsoftonline.com")
    with pytest.raises(ConfigurationError, match="Invalid URL"):
        GraphConfig.from_env()


def test_direct_construction_requires_fields() -> None:
    """Constructing the model directly still validates required fields."""
    with pytest.raises(ValidationError):
        GraphConfig(client_id="id", client_secret="secret", tenant="t", login_url="https://login")  # type: ignore[call-arg]


def test_client_secret_not_in_repr(full_env: pytest.MonkeyPatch) -> None:
    """The client secret should not leak through repr."""
    config = GraphConfig.from_env()
    assert "client-secret" not in repr(config)
