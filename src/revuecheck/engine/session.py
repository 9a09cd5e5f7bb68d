"""Authentication bootstrap and the authenticated client scope."""

from __future__ import annotations

import asyncio
import contextlib
import json
from typing import TYPE_CHECKING

import aiohttp

from revuecheck._internal.errors import BootstrapError
from revuecheck._internal.logging import get_logger
from revuecheck.dsl.http_client import HttpClient

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from revuecheck._internal.config import RevueCheckConfig
    from revuecheck.dsl.http_client import RequestMetric

logger = get_logger("engine.session")

AUTH_PATH = "/api/User/Authentication"


async def fetch_token(
    base_url: str,
    email: str,
    password: str,
    *,
    timeout: float = 30.0,
    metric_callback: Callable[[RequestMetric], None] | None = None,
) -> str:
    """Log in and return the access token.

    Sends one unauthenticated ``POST`` with ``{email, password}`` and reads
    ``accessToken`` from the JSON response.

    Args:
        base_url: Base URL of the API.
        email: Login email.
        password: Login password.
        timeout: Request timeout in seconds.
        metric_callback: Optional callback for the login request record.

    Returns:
        The access token, or an empty string when the response has none.

    Raises:
        BootstrapError: If the endpoint is unreachable or the body is not
            valid JSON.
    """
    try:
        async with HttpClient(
            base_url,
            metric_callback=metric_callback,
            timeout=timeout,
        ) as login_client:
            resp = await login_client.post(
                AUTH_PATH,
                json={"email": email, "password": password},
                name="Authenticate",
            )
            body = await resp.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        msg = f"Authentication request to {base_url}{AUTH_PATH} failed: {exc}"
        raise BootstrapError(msg) from exc

    try:
        payload = json.loads(body)
    except ValueError as exc:
        msg = f"Authentication response (status {resp.status}) is not valid JSON"
        raise BootstrapError(msg) from exc

    token = payload.get("accessToken") if isinstance(payload, dict) else None
    if not isinstance(token, str) or not token:
        logger.warning("Authentication response (status %d) has no accessToken", resp.status)
        return ""

    logger.info("Authenticated as %s", email)
    return token


@contextlib.asynccontextmanager
async def open_session(
    config: RevueCheckConfig,
    *,
    metric_callback: Callable[[RequestMetric], None] | None = None,
) -> AsyncIterator[HttpClient]:
    """Authenticate and yield a client that sends the bearer token.

    The client is closed when the block exits, whatever the outcome of the
    steps run inside it.

    Args:
        config: Run configuration (base URL, credentials, timeout).
        metric_callback: Optional callback for every request record,
            the login request included.

    Yields:
        An open, authenticated ``HttpClient``.

    Raises:
        BootstrapError: If authentication fails.
    """
    token = await fetch_token(
        config.base_url,
        config.email,
        config.password,
        timeout=config.request_timeout,
        metric_callback=metric_callback,
    )
    async with HttpClient(
        config.base_url,
        bearer_token=token,
        metric_callback=metric_callback,
        timeout=config.request_timeout,
    ) as client:
        yield client
    logger.debug("Authenticated client closed")
