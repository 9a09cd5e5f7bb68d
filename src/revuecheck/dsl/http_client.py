"""Instrumented HTTP client with bearer auth and per-request records."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import aiohttp

from revuecheck._internal.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

logger = get_logger("dsl.http_client")


def _noop_callback(metric: RequestMetric) -> None:
    """Default no-op metric callback."""


@dataclass
class RequestMetric:
    """Record emitted for every HTTP request.

    Attributes:
        timestamp: Monotonic timestamp when the request started.
        name: Logical name of the request (e.g., "List Revues").
        method: HTTP method (GET, POST, etc.).
        url: Full request URL, without query string.
        status_code: HTTP response status code (0 if the request failed).
        latency_ms: Response time in milliseconds, body included.
        content_length: Response body size in bytes.
        error: Error message if the request failed, None otherwise.
    """

    timestamp: float
    name: str
    method: str
    url: str
    status_code: int
    latency_ms: float
    content_length: int
    error: str | None = None


class HttpClient:
    """Async HTTP client wrapping ``aiohttp.ClientSession``.

    Every request is timed and emits a ``RequestMetric`` via
    ``metric_callback``. The response body is read before the response is
    returned, so callers can decode it after the connection is released.

    Attributes:
        base_url: Base URL prepended to all request paths.
        headers: Headers applied to every request. Holds the bearer
            credential once ``bearer_token`` is set.
        metric_callback: Callback invoked with each ``RequestMetric``.
            The runner swaps it per step to attribute requests to steps.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        *,
        bearer_token: str | None = None,
        metric_callback: Callable[[RequestMetric], None] | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL prepended to all request paths.
            headers: Default headers applied to every request.
            bearer_token: Token sent as ``Authorization: Bearer <token>``
                on every request. None sends no credential.
            metric_callback: Callback invoked with a ``RequestMetric``
                after each request. Defaults to a no-op.
            timeout: Total timeout per request in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.headers: dict[str, str] = dict(headers or {})
        if bearer_token is not None:
            self.headers["Authorization"] = f"Bearer {bearer_token}"
        self.metric_callback = metric_callback or _noop_callback
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def closed(self) -> bool:
        """Return True when no underlying session is open."""
        return self._session is None

    async def __aenter__(self) -> HttpClient:
        """Open the underlying aiohttp session."""
        self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Close the underlying aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def get(
        self,
        path: str,
        *,
        name: str | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send a GET request.

        Args:
            path: URL path appended to base_url.
            name: Logical request name. Defaults to the path.
            **kwargs: Additional keyword arguments passed to aiohttp,
                e.g. ``params`` or ``json``.

        Returns:
            The aiohttp response, body already read.
        """
        return await self._request("GET", path, name=name, **kwargs)

    async def post(
        self,
        path: str,
        *,
        name: str | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send a POST request. See ``get`` for arguments."""
        return await self._request("POST", path, name=name, **kwargs)

    async def put(
        self,
        path: str,
        *,
        name: str | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send a PUT request. See ``get`` for arguments."""
        return await self._request("PUT", path, name=name, **kwargs)

    async def delete(
        self,
        path: str,
        *,
        name: str | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send a DELETE request. See ``get`` for arguments."""
        return await self._request("DELETE", path, name=name, **kwargs)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        name: str | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send an HTTP request, read its body and emit a metric.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: URL path appended to base_url.
            name: Logical request name. Defaults to the path.
            **kwargs: Additional keyword arguments passed to aiohttp.

        Returns:
            The aiohttp response, body already read.

        Raises:
            RuntimeError: If the client is used outside of an async context
                manager.
            aiohttp.ClientError: On transport failures.
            asyncio.TimeoutError: When the request exceeds the timeout.
        """
        if self._session is None:
            msg = "HttpClient must be used as an async context manager"
            raise RuntimeError(msg)

        url = f"{self.base_url}{path}"
        metric_name = name or path

        start = time.monotonic()
        status_code = 0
        content_length = 0
        error: str | None = None

        try:
            async with self._session.request(
                method,
                url,
                headers={**self.headers},
                **kwargs,  # type: ignore[arg-type]
            ) as resp:
                status_code = resp.status
                body = await resp.read()
                content_length = len(body)
        except Exception as exc:
            error = f"{type(exc).__name__}: {exc}"
            raise
        finally:
            latency_ms = (time.monotonic() - start) * 1000
            logger.debug(
                "%s %s -> %d (%.1fms)",
                method,
                url,
                status_code,
                latency_ms,
                extra={"method": method, "url": url, "status": status_code},
            )
            self.metric_callback(
                RequestMetric(
                    timestamp=start,
                    name=metric_name,
                    method=method,
                    url=url,
                    status_code=status_code,
                    latency_ms=latency_ms,
                    content_length=content_length,
                    error=error,
                )
            )

        return resp
