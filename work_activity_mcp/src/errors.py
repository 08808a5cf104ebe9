"""Error types surfaced to MCP hosts as tool-invocation failures."""

from typing import Optional


class WorkActivityError(Exception):
    """Base class for all tool failures. `kind` names the failure for hosts."""

    kind = "Error"

    def describe(self) -> str:
        return f"{self.kind}: {self}"


class ConfigError(WorkActivityError):
    """A credential or default identity is missing at invocation time."""

    kind = "ConfigError"


class ArgumentError(WorkActivityError, ValueError):
    """A tool argument is out of range or malformed."""

    kind = "ArgumentError"


class UpstreamHttpError(WorkActivityError):
    """The provider answered with a non-2xx status."""

    kind = "UpstreamHttpError"

    def __init__(self, provider: str, status_code: int, body_excerpt: Optional[str] = None):
        self.provider = provider
        self.status_code = status_code
        self.body_excerpt = body_excerpt or ""
        message = f"{provider} returned HTTP {status_code}"
        if self.body_excerpt:
            message = f"{message}: {self.body_excerpt}"
        super().__init__(message)


class UpstreamParseError(WorkActivityError):
    """A 2xx response body did not have the expected minimum shape."""

    kind = "UpstreamParseError"


class NetworkError(WorkActivityError):
    """Connection, DNS, TLS or I/O failure talking to a provider."""

    kind = "NetworkError"


class RequestCancelledError(WorkActivityError):
    """The request was cancelled or its deadline elapsed."""

    kind = "Cancelled"
