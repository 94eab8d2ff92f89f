"""Exception types raised by the graph-policy-keys client.

Every failure surfaces as a subclass of ``GraphError`` so the command-line
entry point can treat the whole family as fatal in one place.
"""


class GraphError(Exception):
    """Base class for all graph-policy-keys errors."""


class ConfigurationError(GraphError):
    """A required configuration value is missing or invalid."""


class AuthError(GraphError):
    """The identity provider rejected the token request or could not be reached.

    Attributes:
        status: HTTP status code returned by the token endpoint, or ``None`` for
            transport failures.
        body: Raw response body text, empty when unavailable.

    """

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        """Initialize with a message and optional HTTP details."""
        self.status = status
        self.body = body
        super().__init__(message)


class TokenFormatError(AuthError):
    """The token endpoint answered with a body that could not be parsed."""


class RequestError(GraphError):
    """A request to the directory service failed at the transport level."""


class HttpResponseError(GraphError):
    """The directory service answered with a non-success status.

    Attributes:
        status: HTTP status code of the response.
        body: Raw response body text, verbatim.

    """

    def __init__(self, status: int, body: str) -> None:
        """Initialize with the response status and body."""
        self.status = status
        self.body = body
        super().__init__(f"HTTP response error: {status} {body}")


class ResponseFormatError(GraphError):
    """A successful response body was not JSON or did not match the expected shape."""


__all__ = [
    "AuthError",
    "ConfigurationError",
    "GraphError",
    "HttpResponseError",
    "RequestError",
    "ResponseFormatError",
    "TokenFormatError",
]
