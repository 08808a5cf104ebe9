"""Shared HTTP client for the Jira and GitHub REST APIs."""

import asyncio
import json
import time
from typing import Any, Mapping, Optional

import httpx

from work_activity_mcp.src.errors import (
    NetworkError,
    RequestCancelledError,
    UpstreamHttpError,
    UpstreamParseError,
)
from work_activity_mcp.src.metrics import track_upstream_request
from work_activity_mcp.utils.pylogger import get_python_logger

logger = get_python_logger()

BODY_EXCERPT_LENGTH = 200


def excerpt(text: Optional[str], limit: int = BODY_EXCERPT_LENGTH) -> str:
    """Shorten a response body for error messages and logs."""
    if not text:
        return ""
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class UpstreamClient:
    """Pooled async HTTP client bound to one provider's base URL and auth headers.

    The underlying `httpx.AsyncClient` is created on first use and shared by
    all concurrent tool invocations.
    """

    def __init__(
        self,
        provider: str,
        base_url: str,
        headers: Mapping[str, str],
        timeout: float = 30.0,
        max_connections: int = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.provider = provider
        self.base_url = base_url
        self.headers = dict(headers)
        self.timeout = timeout
        self.max_connections = max_connections
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client with connection pooling"""
        async with self._lock:
            if self._client is None or self._client.is_closed:
                limits = httpx.Limits(
                    max_keepalive_connections=self.max_connections,
                    max_connections=self.max_connections * 2,
                    keepalive_expiry=30.0,
                )
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    headers=self.headers,
                    timeout=self.timeout,
                    limits=limits,
                    transport=self._transport,
                )
                logger.info(
                    f"Created {self.provider} HTTP client for {self.base_url} "
                    f"with {self.max_connections} max connections"
                )
            return self._client

    async def get_json(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """GET `url` relative to the base URL and decode the JSON body.

        Raises:
            RequestCancelledError: The request timed out.
            UpstreamHttpError: The provider answered with a non-2xx status.
            NetworkError: Connection, DNS, TLS or I/O failure.
            UpstreamParseError: The body is not JSON.
        """
        client = await self.get_client()
        start_time = time.time()
        success = False

        try:
            response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            success = True
        except httpx.TimeoutException as e:
            logger.error(f"{self.provider} request to {url} timed out: {e}")
            raise RequestCancelledError(
                f"{self.provider} request timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            body = excerpt(e.response.text)
            logger.error(
                f"HTTP error from {self.provider} API: {e.response.status_code} - {body}"
            )
            raise UpstreamHttpError(self.provider, e.response.status_code, body) from e
        except httpx.RequestError as e:
            logger.error(f"Network error talking to {self.provider}: {e}")
            raise NetworkError(f"{self.provider} request failed: {e}") from e
        except asyncio.CancelledError:
            logger.info(f"{self.provider} request to {url} cancelled")
            raise
        finally:
            track_upstream_request(self.provider, start_time, success)

        try:
            result = response.json()
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON response from {self.provider} API: {e}")
            logger.error(f"Response content: {excerpt(response.text)}")
            raise UpstreamParseError(f"{self.provider} returned a non-JSON body") from e

        return result

    async def close(self) -> None:
        """Close the connection pool"""
        async with self._lock:
            if self._client is not None and not self._client.is_closed:
                await self._client.aclose()
                logger.info(f"Closed {self.provider} HTTP connection pool")
