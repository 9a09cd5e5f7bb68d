"""Expectation helpers used by steps.

Each helper raises ``CheckFailure`` with a readable message when the
expectation does not hold, and returns the checked value otherwise.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from revuecheck._internal.errors import CheckFailure

if TYPE_CHECKING:
    import aiohttp

    from revuecheck._internal.types import JsonValue


def expect_status(resp: aiohttp.ClientResponse, expected: int) -> None:
    """Fail unless the response has the expected HTTP status."""
    if resp.status != expected:
        msg = f"Expected status code {expected}, got {resp.status} from {resp.method} {resp.url.path}"
        raise CheckFailure(msg)


async def read_json(resp: aiohttp.ClientResponse) -> JsonValue:
    """Decode the response body as JSON regardless of its content type.

    Returns:
        The decoded document, or None for an empty body.

    Raises:
        CheckFailure: If the body is not valid JSON.
    """
    body = await resp.read()
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError as exc:
        msg = f"Response body is not valid JSON: {exc}"
        raise CheckFailure(msg) from exc


def expect_msg(body: JsonValue, expected: str) -> str:
    """Fail unless ``body`` is an object whose ``msg`` equals ``expected``."""
    if not isinstance(body, dict):
        msg = f"Expected a JSON object with 'msg', got {type(body).__name__}"
        raise CheckFailure(msg)
    if "msg" not in body:
        msg = "Response object has no 'msg' field"
        raise CheckFailure(msg)
    actual = body["msg"]
    if actual != expected:
        msg = f"Expected msg {expected!r}, got {actual!r}"
        raise CheckFailure(msg)
    return actual


def expect_non_empty_array(body: JsonValue) -> list[JsonValue]:
    """Fail unless ``body`` is a JSON array with at least one element."""
    if body is None:
        msg = "Response content is empty"
        raise CheckFailure(msg)
    if not isinstance(body, list):
        msg = f"Response is not a JSON array, got {type(body).__name__}"
        raise CheckFailure(msg)
    if not body:
        msg = "Response array is empty"
        raise CheckFailure(msg)
    return body


def last_item_id(body: JsonValue) -> str:
    """Return the ``id`` of the last element of a JSON array as a string.

    Non-string ids (e.g. integers) are converted with ``str()``.

    Raises:
        CheckFailure: If the array is empty, the last element is not an
            object, or its ``id`` is missing or empty.
    """
    items = expect_non_empty_array(body)
    last = items[-1]
    if not isinstance(last, dict):
        msg = f"Last array element is not an object, got {type(last).__name__}"
        raise CheckFailure(msg)
    value = last.get("id")
    if value is None or value == "":
        msg = "Revue id was not extracted correctly"
        raise CheckFailure(msg)
    return value if isinstance(value, str) else str(value)
