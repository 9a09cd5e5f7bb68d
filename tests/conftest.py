"""Shared test fixtures for the revuecheck test suite."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import socket
import threading
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest
from aiohttp import web

from revuecheck._internal.config import RevueCheckConfig

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Iterator


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)
        elif "/live/" in test_path:
            item.add_marker(pytest.mark.live)


# =============================================================================
# Network utilities
# =============================================================================


def _get_free_port() -> int:
    """Find an available port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


# =============================================================================
# Fake Revue API
# =============================================================================

FAKE_TOKEN = "fake-jwt-token"
FAKE_EMAIL = "tester@example.com"
FAKE_PASSWORD = "secret-password"  # noqa: S105


@dataclass
class FakeRevueApi:
    """In-memory stand-in for the Revue API.

    Tests flip the knobs below to make the server misbehave.

    Attributes:
        base_url: Base URL of the running server (set once started).
        revues: Stored revues in insertion order.
        requests: ``(method, path, query)`` for every request received.
        auth_headers: ``Authorization`` header of every non-login request.
        prepend_new: Insert new revues at the front of the listing.
        token: Access token returned by the login endpoint; None omits it.
        login_body: Raw login response body overriding the JSON document.
        overrides: ``path -> (status, body)`` forced responses; a bytes
            body is sent as is, anything else as JSON.
        created_listings: Stored ids right after each successful create.
    """

    base_url: str = ""
    revues: list[dict[str, str]] = field(default_factory=list)
    requests: list[tuple[str, str, dict[str, str]]] = field(default_factory=list)
    auth_headers: list[str | None] = field(default_factory=list)
    prepend_new: bool = False
    token: str | None = FAKE_TOKEN
    login_body: str | bytes | None = None
    overrides: dict[str, tuple[int, object]] = field(default_factory=dict)
    created_listings: list[list[str]] = field(default_factory=list)

    def find(self, revue_id: str) -> dict[str, str] | None:
        for revue in self.revues:
            if revue["id"] == revue_id:
                return revue
        return None


def _create_revue_app(api: FakeRevueApi) -> web.Application:
    """Build the fake Revue API app backed by ``api``."""

    @web.middleware
    async def record(request: web.Request, handler):  # type: ignore[no-untyped-def]
        api.requests.append((request.method, request.path, dict(request.query)))
        if request.path != "/api/User/Authentication":
            api.auth_headers.append(request.headers.get("Authorization"))
        if request.path in api.overrides:
            status, body = api.overrides[request.path]
            if isinstance(body, bytes):
                return web.Response(body=body, status=status, content_type="application/json")
            return web.json_response(body, status=status)
        return await handler(request)

    async def login(request: web.Request) -> web.Response:
        if isinstance(api.login_body, bytes):
            return web.Response(body=api.login_body, content_type="application/json")
        if api.login_body is not None:
            return web.Response(text=api.login_body, content_type="text/plain")
        data = await request.json()
        if data.get("email") != FAKE_EMAIL or data.get("password") != FAKE_PASSWORD:
            return web.json_response({"msg": "Invalid credentials"}, status=401)
        body = {} if api.token is None else {"accessToken": api.token}
        return web.json_response(body)

    def authorized(request: web.Request) -> bool:
        return request.headers.get("Authorization") == f"Bearer {FAKE_TOKEN}"

    async def create(request: web.Request) -> web.Response:
        if not authorized(request):
            return web.json_response({"msg": "Unauthorized"}, status=401)
        data = await request.json()
        if not data.get("title") or not data.get("description"):
            return web.json_response({"msg": "Title and description are required!"}, status=400)
        revue = {
            "id": str(uuid.uuid4()),
            "title": data["title"],
            "url": data.get("url", ""),
            "description": data["description"],
        }
        if api.prepend_new:
            api.revues.insert(0, revue)
        else:
            api.revues.append(revue)
        api.created_listings.append([r["id"] for r in api.revues])
        return web.json_response({"msg": "Successfully created!"})

    async def list_all(request: web.Request) -> web.Response:
        if not authorized(request):
            return web.json_response({"msg": "Unauthorized"}, status=401)
        return web.json_response(api.revues)

    async def edit(request: web.Request) -> web.Response:
        if not authorized(request):
            return web.json_response({"msg": "Unauthorized"}, status=401)
        revue = api.find(request.query.get("revueId", ""))
        if revue is None:
            return web.json_response({"msg": "There is no such revue!"}, status=400)
        data = await request.json()
        revue.update({k: v for k, v in data.items() if k in ("title", "url", "description")})
        return web.json_response({"msg": "Edited successfully"})

    async def delete(request: web.Request) -> web.Response:
        if not authorized(request):
            return web.json_response({"msg": "Unauthorized"}, status=401)
        revue = api.find(request.query.get("revueId", ""))
        if revue is None:
            return web.json_response({"msg": "There is no such revue!"}, status=400)
        api.revues.remove(revue)
        return web.json_response({"msg": "The revue is deleted!"})

    app = web.Application(middlewares=[record])
    app.router.add_post("/api/User/Authentication", login)
    app.router.add_post("/api/Revue/Create", create)
    app.router.add_get("/api/Revue/All", list_all)
    app.router.add_put("/api/Revue/Edit", edit)
    app.router.add_delete("/api/Revue/Delete", delete)
    return app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
async def revue_api() -> AsyncIterator[FakeRevueApi]:
    """Fake Revue API running on the test's event loop."""
    api = FakeRevueApi()
    port = _get_free_port()
    runner = web.AppRunner(_create_revue_app(api))
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    api.base_url = f"http://127.0.0.1:{port}"
    yield api
    await runner.cleanup()


@pytest.fixture
def sync_revue_api() -> Iterator[FakeRevueApi]:
    """Fake Revue API running in a background thread.

    For tests that call blocking entry points (``ScenarioRunner.run`` or
    the CLI), which start their own event loop.
    """
    api = FakeRevueApi()
    port = _get_free_port()
    started = threading.Event()
    loop_holder: list[asyncio.AbstractEventLoop] = []

    def _thread_target() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        runner = web.AppRunner(_create_revue_app(api))
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", port)
        loop.run_until_complete(site.start())
        loop_holder.append(loop)
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=_thread_target, daemon=True)
    thread.start()
    started.wait(timeout=5.0)

    api.base_url = f"http://127.0.0.1:{port}"
    yield api

    if loop_holder:
        loop_holder[0].call_soon_threadsafe(loop_holder[0].stop)
    thread.join(timeout=5.0)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every REVUECHECK_* variable from the environment."""
    for name in (
        "REVUECHECK_BASE_URL",
        "REVUECHECK_EMAIL",
        "REVUECHECK_PASSWORD",
        "REVUECHECK_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def make_config() -> Callable[..., RevueCheckConfig]:
    """Factory building a config that logs in to a fake API."""

    def _make(api: FakeRevueApi, **overrides: object) -> RevueCheckConfig:
        config = RevueCheckConfig(
            base_url=api.base_url,
            email=FAKE_EMAIL,
            password=FAKE_PASSWORD,
            request_timeout=5.0,
        )
        return dataclasses.replace(config, **overrides)

    return _make


@pytest.fixture(autouse=True)
def _isolate_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging() during a test."""
    logger = logging.getLogger("revuecheck")
    saved = list(logger.handlers)
    logger.handlers.clear()
    yield
    logger.handlers[:] = saved
